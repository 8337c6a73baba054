"""Pricing stage — flight, hotel, bundle and display totals per candidate."""

from triotrip.services.search.models import ResultCandidate


def price_candidate(candidate: ResultCandidate, include_hotel: bool, bundle_pricing: bool) -> ResultCandidate:
    candidate.flight_total = candidate.flight.price
    candidate.hotel_total = candidate.hotel.price if include_hotel and candidate.hotel else 0
    candidate.total_cost = round(candidate.flight_total + candidate.hotel_total)
    candidate.display_total = candidate.total_cost if bundle_pricing else candidate.flight_total
    return candidate


def price_candidates(
    candidates: list[ResultCandidate], include_hotel: bool, bundle_pricing: bool
) -> list[ResultCandidate]:
    return [price_candidate(c, include_hotel, bundle_pricing) for c in candidates]
