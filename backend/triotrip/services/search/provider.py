"""Candidate providers — where flight and hotel candidates come from.

The synthetic provider is the default; a real data source can replace it
without touching pricing, filtering or sorting.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from triotrip.services.search.fare_seed import fare_seed
from triotrip.services.search.models import (
    FlightCandidate,
    HotelOption,
    ResultCandidate,
    SearchParams,
)
from triotrip.services.search.segments import build_segment_sets


@dataclass(frozen=True)
class CarrierSlot:
    carrier_name: str
    outbound_shape: str
    inbound_shape: str
    stops: int
    refundable: bool
    greener: bool
    price_offset: int


CARRIER_SLOTS: tuple[CarrierSlot, ...] = (
    CarrierSlot("Delta Air Lines", "direct", "direct", 0, True, True, 60),
    CarrierSlot("Frontier Airlines", "via_hub_a", "one_stop", 1, False, False, -30),
    CarrierSlot("United Airlines", "via_hub_b", "one_stop", 1, True, False, 10),
    CarrierSlot("American Airlines", "direct", "direct", 0, False, True, 5),
    CarrierSlot("Alaska Airlines", "two_stop", "one_stop", 2, True, True, 35),
    CarrierSlot("Spirit Airlines", "two_stop", "one_stop", 2, False, False, -10),
)

HOTEL_NAMES = (
    "Grand Plaza Hotel",
    "Riverside Suites",
    "Skyline Inn",
    "Harbor View Resort",
    "Old Town Boutique Hotel",
    "Central Park Lodge",
)

HOTELS_PER_CANDIDATE = 3
STAR_STEP_PRICE = 45  # per night, per star above 3
OPTION_STEP_PRICE = 12  # per night, per option slot


class CandidateProvider(ABC):
    """Source of unpriced result candidates for a search."""

    @abstractmethod
    def build_candidates(self, params: SearchParams) -> list[ResultCandidate]:
        ...


class SyntheticCandidateProvider(CandidateProvider):
    """Six fixed carrier slots priced off a deterministic fare seed."""

    def __init__(
        self,
        slots: tuple[CarrierSlot, ...] = CARRIER_SLOTS,
        hotel_names: tuple[str, ...] = HOTEL_NAMES,
    ):
        self.slots = slots
        self.hotel_names = hotel_names

    def build_candidates(self, params: SearchParams) -> list[ResultCandidate]:
        seed = fare_seed(params.origin, params.destination, params.depart_date.isoformat())
        outbound, inbound = build_segment_sets(
            params.origin,
            params.destination,
            params.depart_date,
            params.return_date,
            params.round_trip,
        )

        candidates = []
        for index, slot in enumerate(self.slots):
            flight = FlightCandidate(
                carrier_name=slot.carrier_name,
                cabin=params.cabin,
                stops=slot.stops,
                refundable=slot.refundable,
                greener=slot.greener,
                price=seed + slot.price_offset,
                segments_out=list(outbound[slot.outbound_shape]),
                segments_in=list(inbound[slot.inbound_shape]) if inbound else None,
            )
            candidate = ResultCandidate(
                id=f"{params.origin}-{params.destination}-{params.depart_date.isoformat()}-{index}",
                currency=params.currency,
                flight=flight,
                context=params.context,
            )
            if params.include_hotel:
                hotels = self.build_hotels(params, index, seed)
                candidate.hotels = sorted(hotels, key=lambda h: h.price)
                candidate.hotel = self.pick_primary(hotels, params.min_hotel_star)
                candidate.hotel_check_in = _iso(params.hotel_check_in)
                candidate.hotel_check_out = _iso(params.hotel_check_out)
            candidates.append(candidate)

        return candidates

    def build_hotels(self, params: SearchParams, index: int, seed: int) -> list[HotelOption]:
        base_nightly = round(seed * 0.6)
        hotels = []
        for option in range(HOTELS_PER_CANDIDATE):
            star = 3 + (index + option) % 3
            nightly = base_nightly + (star - 3) * STAR_STEP_PRICE + option * OPTION_STEP_PRICE
            hotels.append(
                HotelOption(
                    name=self.hotel_names[(index + option) % len(self.hotel_names)],
                    star=star,
                    city=params.destination,
                    price=nightly * params.nights,
                    currency=params.currency,
                )
            )
        return hotels

    @staticmethod
    def pick_primary(hotels: list[HotelOption], min_star: int) -> HotelOption:
        """Cheapest hotel meeting the star floor, else cheapest overall."""
        eligible = [h for h in hotels if h.star >= min_star]
        return min(eligible or hotels, key=lambda h: h.price)


def _iso(value) -> str | None:
    return value.isoformat() if value else None
