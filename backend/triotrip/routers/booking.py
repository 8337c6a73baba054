"""Booking router — Duffel offer lookup and order creation for checkout."""

import logging

from fastapi import APIRouter, HTTPException

from triotrip.schemas.booking import OfferLookupRequest, OrderRequest
from triotrip.services.duffel_client import DuffelConfigError, DuffelError, duffel_client

logger = logging.getLogger(__name__)

router = APIRouter()


def _duffel_http_error(e: DuffelError) -> HTTPException:
    if isinstance(e, DuffelConfigError):
        return HTTPException(status_code=500, detail=str(e))
    if e.status_code and 400 <= e.status_code < 500:
        return HTTPException(status_code=e.status_code, detail=e.body or str(e))
    return HTTPException(status_code=502, detail=str(e))


@router.post("/offer")
async def get_offer(req: OfferLookupRequest):
    try:
        return await duffel_client.get_offer(req.offer_id)
    except DuffelError as e:
        raise _duffel_http_error(e)


@router.post("/order")
async def create_order(req: OrderRequest):
    try:
        offer = await duffel_client.get_offer(req.offer_id)
        return await duffel_client.create_order(
            offer_id=req.offer_id,
            passengers=[p.model_dump() for p in req.passengers],
            contact=req.contact.model_dump(),
            offer=offer,
        )
    except DuffelError as e:
        raise _duffel_http_error(e)
