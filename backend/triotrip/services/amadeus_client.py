"""Amadeus API client — flight-offer search behind an OAuth2 client-credentials token."""

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from datetime import date

import httpx

from triotrip.config import settings

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = 1800


class AmadeusError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AmadeusConfigError(AmadeusError):
    pass


@dataclass(frozen=True)
class CachedToken:
    access_token: str
    expires_at: float

    def fresh(self, now: float, margin: float) -> bool:
        return self.expires_at > now + margin


class TokenCache:
    """Single-slot token cache; concurrent callers share one refresh."""

    def __init__(self, margin_seconds: float = 30, clock=time.monotonic):
        self._token: CachedToken | None = None
        self._lock = asyncio.Lock()
        self._margin = margin_seconds
        self._clock = clock

    async def get(self, fetch) -> str:
        """Return a fresh token, awaiting `fetch()` -> (token, expires_in) when stale."""
        async with self._lock:
            now = self._clock()
            if self._token and self._token.fresh(now, self._margin):
                return self._token.access_token
            access_token, expires_in = await fetch()
            self._token = CachedToken(access_token, now + (expires_in or DEFAULT_TOKEN_TTL))
            return access_token

    def clear(self) -> None:
        self._token = None


def parse_iso_duration_minutes(duration: str | None) -> int:
    """PT2H30M -> 150; anything else -> 0."""
    if not duration or not duration.startswith("PT"):
        return 0
    hours = re.search(r"(\d+)H", duration)
    minutes = re.search(r"(\d+)M", duration)
    return (int(hours.group(1)) if hours else 0) * 60 + (int(minutes.group(1)) if minutes else 0)


class AmadeusClient:
    """Adapter for the Amadeus Self-Service flight-offer API."""

    def __init__(self, config=settings, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._tokens = TokenCache(margin_seconds=config.amadeus_token_margin_seconds)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.amadeus_base_url,
                timeout=self.config.http_timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def _fetch_token(self) -> tuple[str, int]:
        client = await self._get_client()
        try:
            resp = await client.post(
                "/v1/security/oauth2/token",
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.config.amadeus_client_id,
                    "client_secret": self.config.amadeus_client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.RequestError as e:
            logger.error(f"Amadeus token request failed: {e!r}")
            raise AmadeusError(f"Amadeus unreachable: {e}") from e
        if resp.status_code >= 400:
            logger.error(f"Amadeus token error {resp.status_code}: {resp.text[:500]}")
            raise AmadeusError(
                f"Amadeus token error {resp.status_code}. Check AMADEUS_CLIENT_ID / "
                f"AMADEUS_CLIENT_SECRET and the AMADEUS_ENV environment.",
                resp.status_code,
            )
        data = self._json(resp, "token")
        if not isinstance(data, dict) or not data.get("access_token"):
            raise AmadeusError("Amadeus token response has no access_token", resp.status_code)
        logger.info("Amadeus token refreshed")
        return data["access_token"], data.get("expires_in", DEFAULT_TOKEN_TTL)

    @staticmethod
    def _json(resp: httpx.Response, what: str):
        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"Amadeus {what} returned non-JSON body: {resp.text[:200]}")
            raise AmadeusError(f"Amadeus {what} returned an invalid response", resp.status_code) from e

    async def get_token(self) -> str:
        if not self.config.amadeus_client_id or not self.config.amadeus_client_secret:
            raise AmadeusConfigError(
                "Amadeus credentials are missing. Set AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET."
            )
        return await self._tokens.get(self._fetch_token)

    async def get(self, path: str, params: dict) -> dict:
        token = await self.get_token()
        client = await self._get_client()
        clean = {k: v for k, v in params.items() if v not in (None, "")}
        try:
            resp = await client.get(path, params=clean, headers={"Authorization": f"Bearer {token}"})
        except httpx.RequestError as e:
            logger.error(f"Amadeus GET {path} failed: {e!r}")
            raise AmadeusError(f"Amadeus unreachable: {e}") from e
        if resp.status_code >= 400:
            logger.error(f"Amadeus GET {path} error {resp.status_code}: {resp.text[:500]}")
            raise AmadeusError(f"Amadeus error {resp.status_code}", resp.status_code)
        data = self._json(resp, f"GET {path}")
        if not isinstance(data, dict):
            raise AmadeusError(f"Amadeus GET {path} returned an unexpected payload", resp.status_code)
        return data

    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        depart_date: date,
        return_date: date | None = None,
        adults: int = 1,
        cabin: str = "ECONOMY",
        currency: str = "USD",
        limit: int = 10,
    ) -> list[dict]:
        """Search real offers and normalize them into result packages."""
        data = await self.get(
            "/v2/shopping/flight-offers",
            {
                "originLocationCode": origin,
                "destinationLocationCode": destination,
                "departureDate": depart_date.isoformat(),
                "returnDate": return_date.isoformat() if return_date else None,
                "adults": max(1, adults),
                "travelClass": cabin,
                "currencyCode": currency,
                "max": self.config.amadeus_max_offers,
            },
        )
        offers = data.get("data") or []
        return [self._parse_offer(offer, idx, currency) for idx, offer in enumerate(offers[:limit])]

    @staticmethod
    def _parse_segments(itinerary: dict | None) -> list[dict]:
        if not itinerary:
            return []
        return [
            {
                "from": s.get("departure", {}).get("iataCode"),
                "to": s.get("arrival", {}).get("iataCode"),
                "departureTime": s.get("departure", {}).get("at"),
                "arrivalTime": s.get("arrival", {}).get("at"),
                "carrierCode": s.get("carrierCode"),
                "flightNumber": s.get("number"),
                "duration_minutes": parse_iso_duration_minutes(s.get("duration")),
            }
            for s in itinerary.get("segments", [])
        ]

    def _parse_offer(self, offer: dict, idx: int, currency: str) -> dict:
        price_total = float(offer.get("price", {}).get("total") or 0)
        itineraries = offer.get("itineraries") or []
        segments_out = self._parse_segments(itineraries[0] if itineraries else None)
        segments_return = self._parse_segments(itineraries[1] if len(itineraries) > 1 else None)

        main_carrier = segments_out[0]["carrierCode"] if segments_out else None
        if not main_carrier:
            validating = offer.get("validatingAirlineCodes") or []
            main_carrier = validating[0] if validating else None

        return {
            "id": offer.get("id") or f"amadeus-{idx}",
            "provider": "amadeus",
            "flight": {
                "price_usd": price_total,
                "currency": offer.get("price", {}).get("currency", currency),
                "mainCarrier": main_carrier,
                "segments_out": segments_out,
                "segments_return": segments_return,
            },
            "flight_total": price_total,
            "hotel_total": 0,
            "total_cost": price_total,
        }

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None


amadeus_client = AmadeusClient()
