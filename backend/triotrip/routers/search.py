"""Search router — manual flight/hotel search, real flight offers and destination links."""

import logging

from fastapi import APIRouter, HTTPException, Query

from triotrip.schemas.search import FlightOfferRequest, SearchRequest
from triotrip.services.amadeus_client import AmadeusConfigError, AmadeusError, amadeus_client
from triotrip.services.search.destination_links import destination_links
from triotrip.services.search.pipeline import search_pipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search")
def search(req: SearchRequest):
    """Ranked flight (optionally flight + hotel) candidates for a trip."""
    try:
        return search_pipeline.run(req)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Search failed for {req.origin}->{req.destination}")
        raise HTTPException(status_code=500, detail=str(e) or "Search failed")


@router.post("/flights/offers")
async def flight_offers(req: FlightOfferRequest):
    """Live flight offers from Amadeus, shaped like search results."""
    if req.round_trip and not req.return_date:
        raise HTTPException(status_code=400, detail="returnDate is required for round trips")

    try:
        results = await amadeus_client.search_flight_offers(
            origin=req.origin.upper(),
            destination=req.destination.upper(),
            depart_date=req.depart_date,
            return_date=req.return_date if req.round_trip else None,
            adults=req.passengers_adults,
            cabin=req.cabin,
            currency=req.currency,
        )
    except AmadeusConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except AmadeusError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {"ok": True, "results": results}


@router.get("/destinations/links")
def destination_link_sets(
    city: str = Query(..., min_length=1),
    country: str | None = None,
    country_code: str | None = Query(None, alias="countryCode", min_length=2, max_length=2),
):
    """Explore, dining and essentials links for a destination city."""
    if not city.strip():
        raise HTTPException(status_code=400, detail="city is required")
    return destination_links(city, country_name=country, country_code=country_code)
