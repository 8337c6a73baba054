"""AI router — trip planning, destination comparison and top-3 picks."""

import logging

from fastapi import APIRouter, HTTPException

from triotrip.schemas.ai import CompareRequest, PlanTripRequest, Top3Request
from triotrip.services.llm_client import AIConfigError, AIDisabledError, AIError, AIRateLimitError
from triotrip.services.trip_planner import AIResponseFormatError, trip_planner

logger = logging.getLogger(__name__)

router = APIRouter()


def _ai_http_error(e: AIError, feature: str) -> HTTPException:
    if isinstance(e, AIDisabledError):
        return HTTPException(
            status_code=503,
            detail=f"AI {feature} is disabled. You can still use the normal search.",
        )
    if isinstance(e, AIConfigError):
        return HTTPException(status_code=500, detail=f"AI {feature} is misconfigured: {e}")
    if isinstance(e, AIRateLimitError):
        return HTTPException(status_code=429, detail=str(e))
    if isinstance(e, AIResponseFormatError):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=502, detail=f"AI {feature} failed: {e}")


@router.post("/plan-trip")
async def plan_trip(req: PlanTripRequest):
    """Free-text trip request → AI plan, enriched with real flight offers when possible."""
    if not req.query.strip():
        raise HTTPException(status_code=400, detail="query is required")
    try:
        return await trip_planner.plan_trip(req.query)
    except AIError as e:
        logger.error(f"AI plan-trip error: {e}")
        raise _ai_http_error(e, "trip planner")


@router.post("/compare")
async def compare(req: CompareRequest):
    destinations = [d.strip() for d in req.destinations if d and d.strip()]
    if not destinations:
        raise HTTPException(status_code=400, detail="destinations[] is required")
    try:
        return await trip_planner.compare_destinations(
            destinations, month=req.month, home=req.home, days=req.days
        )
    except AIError as e:
        logger.error(f"AI compare error: {e}")
        raise _ai_http_error(e, "destination comparison")


@router.post("/top3")
async def top3(req: Top3Request):
    try:
        return await trip_planner.pick_top3(req.results)
    except AIError as e:
        logger.error(f"AI top3 error: {e}")
        raise _ai_http_error(e, "top-3 picker")
