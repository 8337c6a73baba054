"""Search pipeline — request → candidates → links → totals → filter/sort → response."""

import logging
from datetime import timedelta

from triotrip.schemas.search import SearchRequest
from triotrip.services.search.deeplinks import attach_deeplinks
from triotrip.services.search.models import PassengerContext, SearchParams
from triotrip.services.search.pricing import price_candidates
from triotrip.services.search.provider import CandidateProvider, SyntheticCandidateProvider
from triotrip.services.search.ranking import DEFAULT_SORT, SORT_KEYS, apply_filters, sort_candidates
from triotrip.services.search.shaper import shape_response

logger = logging.getLogger(__name__)

BUNDLE_BASES = {"bundle", "tripBundle"}
MAX_NIGHTS = 365


class SearchPipeline:
    """Synchronous, stateless search over a candidate provider."""

    def __init__(self, provider: CandidateProvider | None = None):
        self.provider = provider or SyntheticCandidateProvider()

    def resolve(self, req: SearchRequest) -> SearchParams:
        """Apply request defaults. Raises ValueError for requests that cannot be searched."""
        if not req.origin or not req.destination or not req.depart_date:
            raise ValueError("origin, destination, and departDate are required")
        if req.round_trip and not req.return_date:
            raise ValueError("returnDate is required for round trips")
        if req.round_trip and req.return_date < req.depart_date:
            raise ValueError("returnDate must not be before departDate")

        adults = req.passengers_adults or 1
        children = req.passengers_children or 0
        infants = req.passengers_infants or 0
        if min(adults, children, infants) < 0:
            raise ValueError("Passenger counts cannot be negative")
        context = PassengerContext(
            passengers=req.passengers or adults + children + infants,
            adults=adults,
            children=children,
            infants=infants,
            children_ages=list(req.passengers_children_ages),
        )

        params = SearchParams(
            origin=req.origin,
            destination=req.destination,
            depart_date=req.depart_date,
            return_date=req.return_date if req.round_trip else None,
            round_trip=req.round_trip,
            cabin=req.cabin,
            currency=(req.currency or "USD").upper(),
            context=context,
            include_hotel=req.include_hotel,
            min_hotel_star=req.min_hotel_star or 0,
            min_budget=req.min_budget,
            max_budget=req.max_budget,
            sort=req.sort if req.sort in SORT_KEYS else DEFAULT_SORT,
            max_stops=req.max_stops,
            refundable=bool(req.refundable),
            greener=bool(req.greener),
            sort_basis="bundle" if req.sort_basis in BUNDLE_BASES else "flightOnly",
        )

        if req.include_hotel:
            self._resolve_stay(req, params)
        return params

    @staticmethod
    def _resolve_stay(req: SearchRequest, params: SearchParams) -> None:
        if req.hotel_check_in and req.hotel_check_out and req.hotel_check_in >= req.hotel_check_out:
            raise ValueError("hotelCheckIn must be before hotelCheckOut")

        params.nights_defaulted = req.nights is None
        if req.nights is not None:
            if req.nights < 1:
                raise ValueError("nights must be at least 1")
            params.nights = req.nights
        elif req.hotel_check_in and req.hotel_check_out:
            params.nights = (req.hotel_check_out - req.hotel_check_in).days
            params.nights_from_dates = True
        else:
            params.nights = 1
        if params.nights > MAX_NIGHTS:
            raise ValueError(f"nights must be at most {MAX_NIGHTS}")

        params.hotel_check_in = req.hotel_check_in or params.depart_date
        try:
            params.hotel_check_out = req.hotel_check_out or params.hotel_check_in + timedelta(days=params.nights)
        except OverflowError:
            raise ValueError("hotel stay runs past the last supported date") from None

    def run(self, req: SearchRequest) -> dict:
        params = self.resolve(req)

        candidates = self.provider.build_candidates(params)
        candidates = attach_deeplinks(candidates, params)
        candidates = price_candidates(candidates, params.include_hotel, params.bundle_pricing)
        candidates = apply_filters(candidates, params)
        candidates = sort_candidates(candidates, params.sort)

        logger.info(
            f"Search {params.origin}->{params.destination} {params.depart_date}: "
            f"{len(candidates)} results (sort={params.sort}, basis={params.sort_basis})"
        )
        return shape_response(candidates, params)


search_pipeline = SearchPipeline()
