"""Segment builder — canonical itinerary shapes with fixed local clock times.

Times and durations are illustrative placeholders, not real schedules.
Leg endpoints use the keys O (origin), D (destination), A and B (hubs).
"""

from datetime import date, datetime, time

from triotrip.services.search.models import Segment

DEFAULT_HUBS = ("DEN", "ORD", "DFW", "ATL", "PHX", "CLT")

OUTBOUND_SHAPES: dict[str, list[tuple[str, str, str, str, int]]] = {
    "direct": [
        ("O", "D", "08:00", "11:05", 185),
    ],
    "via_hub_a": [
        ("O", "A", "06:30", "08:10", 100),
        ("A", "D", "09:25", "11:50", 145),
    ],
    "via_hub_b": [
        ("O", "B", "10:15", "12:40", 145),
        ("B", "D", "14:05", "16:20", 135),
    ],
    "two_stop": [
        ("O", "A", "05:45", "07:05", 80),
        ("A", "B", "08:20", "10:10", 110),
        ("B", "D", "11:40", "13:35", 115),
    ],
}

INBOUND_SHAPES: dict[str, list[tuple[str, str, str, str, int]]] = {
    "direct": [
        ("D", "O", "17:30", "20:35", 185),
    ],
    "one_stop": [
        ("D", "A", "13:10", "15:00", 110),
        ("A", "O", "16:30", "19:25", 115),
    ],
}


def pick_hubs(origin: str, destination: str, hubs: tuple[str, ...] = DEFAULT_HUBS) -> tuple[str, str]:
    """First two hubs that are not an endpoint of the trip."""
    possible = [h for h in hubs if h not in (origin.upper(), destination.upper())]
    return possible[0], possible[1]


def _at(day: date, clock: str) -> datetime:
    hour, minute = clock.split(":")
    return datetime.combine(day, time(int(hour), int(minute)))


def _materialize(
    legs: list[tuple[str, str, str, str, int]],
    airports: dict[str, str],
    day: date,
) -> list[Segment]:
    return [
        Segment(
            origin=airports[src],
            destination=airports[dst],
            depart_time=_at(day, dep),
            arrive_time=_at(day, arr),
            duration_minutes=minutes,
        )
        for src, dst, dep, arr, minutes in legs
    ]


def build_segment_sets(
    origin: str,
    destination: str,
    depart_date: date,
    return_date: date | None = None,
    round_trip: bool = False,
) -> tuple[dict[str, list[Segment]], dict[str, list[Segment]]]:
    """Return (outbound shapes, inbound shapes); inbound is empty for one-way trips."""
    hub_a, hub_b = pick_hubs(origin, destination)
    airports = {"O": origin, "D": destination, "A": hub_a, "B": hub_b}

    outbound = {
        name: _materialize(legs, airports, depart_date)
        for name, legs in OUTBOUND_SHAPES.items()
    }
    inbound: dict[str, list[Segment]] = {}
    if round_trip and return_date:
        inbound = {
            name: _materialize(legs, airports, return_date)
            for name, legs in INBOUND_SHAPES.items()
        }
    return outbound, inbound
