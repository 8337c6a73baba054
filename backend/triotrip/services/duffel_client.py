"""Duffel API client — offer lookup and order creation for checkout."""

import logging

import httpx

from triotrip.config import settings

logger = logging.getLogger(__name__)


class DuffelError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DuffelConfigError(DuffelError):
    pass


class DuffelClient:
    """Thin pass-through to Duffel; payloads are not reshaped beyond the order envelope."""

    def __init__(self, config=settings, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.duffel_access_token}",
            "Duffel-Version": self.config.duffel_version,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        if not self.config.duffel_access_token:
            raise DuffelConfigError("Duffel access token is missing. Set DUFFEL_ACCESS_TOKEN.")
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.duffel_base_url.rstrip("/"),
                timeout=self.config.http_timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def _request(self, method: str, path: str, json_body: dict | None = None) -> dict:
        client = await self._get_client()
        resp = await client.request(method, path, json=json_body, headers=self.headers)
        if resp.status_code >= 400:
            logger.error(f"Duffel {method} {path} error {resp.status_code}: {resp.text[:500]}")
            raise DuffelError(f"Duffel error {resp.status_code}", resp.status_code, resp.text)
        return resp.json()

    async def get_offer(self, offer_id: str) -> dict:
        payload = await self._request("GET", f"/air/offers/{offer_id}")
        return payload.get("data", payload)

    async def create_order(
        self,
        offer_id: str,
        passengers: list[dict],
        contact: dict | None = None,
        offer: dict | None = None,
    ) -> dict:
        """Create an instant order; passenger contact details default to the booking contact."""
        contact = contact or {}
        offer_passenger_ids = [p.get("id") for p in (offer or {}).get("passengers", [])]
        order_passengers = []
        for idx, passenger in enumerate(passengers):
            entry = {k: v for k, v in passenger.items() if v not in (None, "")}
            if entry.get("type") == "infant":
                entry["type"] = "infant_without_seat"
            if "id" not in entry and idx < len(offer_passenger_ids) and offer_passenger_ids[idx]:
                entry["id"] = offer_passenger_ids[idx]
            if contact.get("email"):
                entry.setdefault("email", contact["email"])
            if contact.get("phone_number"):
                entry.setdefault("phone_number", contact["phone_number"])
            order_passengers.append(entry)

        data: dict = {
            "type": "instant",
            "selected_offers": [offer_id],
            "passengers": order_passengers,
        }
        if offer and offer.get("total_amount"):
            data["payments"] = [
                {
                    "type": "balance",
                    "amount": offer["total_amount"],
                    "currency": offer.get("total_currency"),
                }
            ]

        payload = await self._request("POST", "/air/orders", {"data": data})
        order = payload.get("data", payload)
        logger.info(f"Duffel order created: {order.get('id')}")
        return payload

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None


duffel_client = DuffelClient()
