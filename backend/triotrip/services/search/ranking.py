"""Filter and sort stage for priced candidates."""

import math

from triotrip.services.search.models import ResultCandidate, SearchParams

SORT_KEYS = ("best", "cheapest", "fastest", "flexible")
DEFAULT_SORT = "best"

# Minutes of travel time worth one unit of currency in the "best" score
BEST_DURATION_WEIGHT = 0.2


def apply_filters(candidates: list[ResultCandidate], params: SearchParams) -> list[ResultCandidate]:
    results = list(candidates)
    if params.refundable:
        results = [c for c in results if c.flight.refundable]
    if params.greener:
        results = [c for c in results if c.flight.greener]
    if params.max_stops is not None:
        results = [c for c in results if c.flight.stops <= params.max_stops]
    if params.min_budget is not None:
        results = [c for c in results if c.total_cost >= params.min_budget]
    if params.max_budget is not None:
        results = [c for c in results if c.total_cost <= params.max_budget]
    return results


def _duration(candidate: ResultCandidate) -> float:
    minutes = candidate.flight.duration_minutes
    return math.inf if minutes is None else minutes


def best_score(candidate: ResultCandidate) -> float:
    return candidate.display_total + BEST_DURATION_WEIGHT * _duration(candidate)


def sort_candidates(candidates: list[ResultCandidate], sort_key: str | None) -> list[ResultCandidate]:
    """Sort with one of: cheapest, fastest, flexible, best (default)."""
    if sort_key == "cheapest":
        return sorted(candidates, key=lambda c: c.display_total)
    if sort_key == "fastest":
        return sorted(candidates, key=_duration)
    if sort_key == "flexible":
        return sorted(candidates, key=lambda c: (not c.flight.refundable, c.display_total))
    return sorted(candidates, key=best_score)
