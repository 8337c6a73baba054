"""Response shaper — final projection of ranked candidates."""

from triotrip.services.search.models import ResultCandidate, SearchParams

NIGHTS_DEFAULT_WARNING = "Hotel nights were not provided; defaulted to 1 night."
NIGHTS_FROM_DATES_WARNING = "Hotel nights were not provided; used {nights} night(s) from hotelCheckIn/hotelCheckOut."


def hotel_warning(params: SearchParams) -> str | None:
    if not params.include_hotel or not params.nights_defaulted:
        return None
    if params.nights_from_dates:
        return NIGHTS_FROM_DATES_WARNING.format(nights=params.nights)
    return NIGHTS_DEFAULT_WARNING


def shape_response(candidates: list[ResultCandidate], params: SearchParams) -> dict:
    if params.include_hotel:
        results = [c.to_dict() for c in candidates]
    else:
        results = [c.flight_only().to_dict() for c in candidates]

    return {
        "results": results,
        "hotelWarning": hotel_warning(params),
        "sortBasis": params.sort_basis,
    }
