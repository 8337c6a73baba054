"""Search pipeline records — request-scoped, built fresh for every search."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class Segment:
    origin: str
    destination: str
    depart_time: datetime
    arrive_time: datetime
    duration_minutes: int

    def to_dict(self) -> dict:
        return {
            "from": self.origin,
            "to": self.destination,
            "depart_time": self.depart_time.isoformat(),
            "arrive_time": self.arrive_time.isoformat(),
            "duration_minutes": self.duration_minutes,
        }


@dataclass
class HotelOption:
    name: str
    star: int
    city: str
    price: int
    currency: str
    image_url: str | None = None
    deeplinks: dict[str, str] | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "star": self.star,
            "city": self.city,
            "price_converted": self.price,
            "currency": self.currency,
            "imageUrl": self.image_url,
            "deeplinks": self.deeplinks,
        }


@dataclass
class FlightCandidate:
    carrier_name: str
    cabin: str
    stops: int
    refundable: bool
    greener: bool
    price: int
    segments_out: list[Segment]
    segments_in: list[Segment] | None = None
    deeplinks: dict[str, dict[str, str]] | None = None

    @property
    def duration_minutes(self) -> int:
        segments = self.segments_out + (self.segments_in or [])
        return sum(s.duration_minutes for s in segments)

    def to_dict(self) -> dict:
        data = {
            "carrier_name": self.carrier_name,
            "cabin": self.cabin,
            "stops": self.stops,
            "refundable": self.refundable,
            "greener": self.greener,
            "price": self.price,
            "duration_minutes": self.duration_minutes,
            "segments_out": [s.to_dict() for s in self.segments_out],
            "deeplinks": self.deeplinks,
        }
        if self.segments_in is not None:
            data["segments_in"] = [s.to_dict() for s in self.segments_in]
        return data


@dataclass
class PassengerContext:
    """UI context copied from the request onto every result."""
    passengers: int
    adults: int
    children: int
    infants: int
    children_ages: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "passengers": self.passengers,
            "passengersAdults": self.adults,
            "passengersChildren": self.children,
            "passengersInfants": self.infants,
            "passengersChildrenAges": list(self.children_ages),
        }


@dataclass
class ResultCandidate:
    id: str
    currency: str
    flight: FlightCandidate
    context: PassengerContext
    hotel: HotelOption | None = None
    hotels: list[HotelOption] = field(default_factory=list)
    hotel_check_in: str | None = None
    hotel_check_out: str | None = None
    flight_total: int = 0
    hotel_total: int = 0
    total_cost: int = 0
    display_total: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "currency": self.currency,
            "flight": self.flight.to_dict(),
            "hotel": self.hotel.to_dict() if self.hotel else None,
            "hotels": [h.to_dict() for h in self.hotels],
            "hotelCheckIn": self.hotel_check_in,
            "hotelCheckOut": self.hotel_check_out,
            "flight_total": self.flight_total,
            "hotel_total": self.hotel_total,
            "total_cost": self.total_cost,
            "display_total": self.display_total,
            **self.context.to_dict(),
        }

    def flight_only(self) -> "FlightOnlyResult":
        return FlightOnlyResult(
            id=self.id,
            currency=self.currency,
            flight=self.flight,
            context=self.context,
            flight_total=self.flight_total,
            display_total=self.display_total if self.display_total is not None else self.flight_total,
        )


@dataclass
class FlightOnlyResult:
    """Narrowed result for searches without a hotel: a strict subset of ResultCandidate."""
    id: str
    currency: str
    flight: FlightCandidate
    context: PassengerContext
    flight_total: int
    display_total: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "currency": self.currency,
            "flight": self.flight.to_dict(),
            "flight_total": self.flight_total,
            "hotel_total": 0,
            "total_cost": self.flight_total,
            "display_total": self.display_total,
            **self.context.to_dict(),
        }


@dataclass
class SearchParams:
    """Request fields after defaults are resolved; the only input the stages read."""
    origin: str
    destination: str
    depart_date: date
    return_date: date | None
    round_trip: bool
    cabin: str
    currency: str
    context: PassengerContext
    include_hotel: bool = False
    nights: int = 1
    nights_defaulted: bool = False
    nights_from_dates: bool = False
    hotel_check_in: date | None = None
    hotel_check_out: date | None = None
    min_hotel_star: int = 0
    min_budget: float | None = None
    max_budget: float | None = None
    sort: str = "best"
    max_stops: int | None = None
    refundable: bool = False
    greener: bool = False
    sort_basis: str = "flightOnly"

    @property
    def bundle_pricing(self) -> bool:
        return self.sort_basis == "bundle"
