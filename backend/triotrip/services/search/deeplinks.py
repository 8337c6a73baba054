"""Deep links — prefilled booking-site URLs for carriers and hotels."""

import re
from datetime import date
from urllib.parse import urlencode

DELTA_CABINS = {
    "ECONOMY": "COACH",
    "PREMIUM_ECONOMY": "DELTA_PREMIUM_SELECT",
    "BUSINESS": "DELTA_ONE",
    "FIRST": "FIRST",
}

UNITED_CABINS = {
    "ECONOMY": "7",
    "PREMIUM_ECONOMY": "2",
    "BUSINESS": "1",
    "FIRST": "1",
}

AMERICAN_CABINS = {
    "ECONOMY": "coach",
    "PREMIUM_ECONOMY": "premium-economy",
    "BUSINESS": "business",
    "FIRST": "first",
}


def _with_query(base_url: str, params: dict) -> str:
    query = urlencode({k: v for k, v in params.items() if v not in (None, "")})
    return f"{base_url}?{query}" if query else base_url


def _iso(d: date | None) -> str | None:
    return d.isoformat() if d else None


def build_airline_url(
    carrier_name: str,
    *,
    origin: str,
    destination: str,
    depart_date: date,
    return_date: date | None,
    round_trip: bool,
    cabin: str,
    adults: int,
    children: int = 0,
) -> str:
    """Carrier-specific search URL, or a guessed homepage for unknown carriers."""
    name = carrier_name.lower()
    return_iso = _iso(return_date) if round_trip else None

    if "delta" in name:
        return _with_query(
            "https://www.delta.com/flight-search/book-a-flight",
            {
                "tripType": "ROUND_TRIP" if round_trip else "ONE_WAY",
                "fromCity": origin,
                "toCity": destination,
                "departureDate": depart_date.isoformat(),
                "returnDate": return_iso,
                "cabinFareClass": DELTA_CABINS.get(cabin, "COACH"),
                "paxCount": adults,
                "childCount": children,
            },
        )

    if "united" in name:
        return _with_query(
            "https://www.united.com/en/us/fsr/choose-flights",
            {
                "tt": "RT" if round_trip else "OW",
                "f": origin,
                "t": destination,
                "d": depart_date.isoformat(),
                "r": return_iso,
                "sc": UNITED_CABINS.get(cabin, "7"),
                "px": adults,
                "cx": children,
            },
        )

    if "american" in name:
        return _with_query(
            "https://www.aa.com/booking/find-flights",
            {
                "tripType": "roundTrip" if round_trip else "oneWay",
                "from": origin,
                "to": destination,
                "departDate": depart_date.isoformat(),
                "returnDate": return_iso,
                "cabin": AMERICAN_CABINS.get(cabin, "coach"),
                "adultPassengerCount": adults,
                "childPassengerCount": children,
            },
        )

    slug = re.sub(r"\s+", "", name)
    return f"https://www.{slug}.com"


def build_airline_deeplinks(carrier_name: str, **trip) -> dict[str, dict[str, str]]:
    return {"airline": {"name": carrier_name, "url": build_airline_url(carrier_name, **trip)}}


def build_hotel_deeplinks(
    *,
    hotel_name: str,
    city: str,
    check_in: date,
    check_out: date,
    adults: int,
) -> dict[str, str]:
    query = f"{hotel_name} {city}"
    return {
        "booking": _with_query(
            "https://www.booking.com/searchresults.html",
            {
                "ss": query,
                "checkin": check_in.isoformat(),
                "checkout": check_out.isoformat(),
                "group_adults": max(1, adults),
                "no_rooms": 1,
            },
        ),
        "hotels": _with_query(
            "https://www.hotels.com/Hotel-Search",
            {
                "destination": query,
                "startDate": check_in.isoformat(),
                "endDate": check_out.isoformat(),
                "adults": max(1, adults),
            },
        ),
        "expedia": _with_query(
            "https://www.expedia.com/Hotel-Search",
            {
                "destination": query,
                "startDate": check_in.isoformat(),
                "endDate": check_out.isoformat(),
                "adults": max(1, adults),
            },
        ),
    }


def attach_deeplinks(candidates: list, params) -> list:
    """Set airline links on every flight and booking-site links on every hotel."""
    for candidate in candidates:
        candidate.flight.deeplinks = build_airline_deeplinks(
            candidate.flight.carrier_name,
            origin=params.origin,
            destination=params.destination,
            depart_date=params.depart_date,
            return_date=params.return_date,
            round_trip=params.round_trip,
            cabin=params.cabin,
            adults=params.context.adults,
            children=params.context.children,
        )
        if params.hotel_check_in and params.hotel_check_out:
            for hotel in candidate.hotels:
                hotel.deeplinks = build_hotel_deeplinks(
                    hotel_name=hotel.name,
                    city=hotel.city,
                    check_in=params.hotel_check_in,
                    check_out=params.hotel_check_out,
                    adults=params.context.adults,
                )
    return candidates
