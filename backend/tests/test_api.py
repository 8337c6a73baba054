from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient

from triotrip.main import app
from triotrip.routers import search as search_router
from triotrip.services.amadeus_client import AmadeusClient
from triotrip.services.llm_client import AIDisabledError, AIRateLimitError
from triotrip.services.trip_planner import trip_planner

client = TestClient(app)

SCENARIO_A = {
    "origin": "AUS",
    "destination": "LAS",
    "departDate": "2026-01-10",
    "returnDate": "2026-01-15",
    "roundTrip": True,
    "passengersAdults": 1,
    "cabin": "ECONOMY",
    "includeHotel": False,
    "currency": "USD",
    "sort": "cheapest",
}


class _RaisingLLM:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    async def complete(self, prompt: str, system: str | None = None) -> str:
        raise self.exc


class _StaticLLM:
    def __init__(self, raw: str) -> None:
        self.raw = raw

    async def complete(self, prompt: str, system: str | None = None) -> str:
        return self.raw


def test_health():
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_search_scenario_a():
    resp = client.post("/api/search", json=SCENARIO_A)

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["results"]) == 6
    assert body["hotelWarning"] is None
    assert all(r["hotel_total"] == 0 for r in body["results"])


def test_search_scenario_b_warns_about_nights():
    resp = client.post("/api/search", json={**SCENARIO_A, "includeHotel": True})

    assert resp.status_code == 200
    body = resp.json()
    assert body["hotelWarning"]
    assert all(len(r["hotels"]) == 3 for r in body["results"])


@pytest.mark.parametrize(
    "overrides",
    [
        {"origin": ""},
        {"destination": None},
        {"departDate": None},
        {"returnDate": None},
        {"cabin": "STEERAGE"},
        {"departDate": "not-a-date"},
        {"includeHotel": True, "nights": 1000000000},
    ],
)
def test_search_rejects_bad_requests_with_400(overrides):
    resp = client.post("/api/search", json={**SCENARIO_A, **overrides})

    assert resp.status_code == 400
    assert resp.json()["detail"]


def test_search_unexpected_error_is_500_with_message(monkeypatch: pytest.MonkeyPatch):
    def boom(req):
        raise RuntimeError("candidate source exploded")

    monkeypatch.setattr(search_router.search_pipeline, "run", boom)
    resp = client.post("/api/search", json=SCENARIO_A)

    assert resp.status_code == 500
    assert resp.json()["detail"] == "candidate source exploded"


def test_plan_trip_requires_query():
    resp = client.post("/api/ai/plan-trip", json={"query": "   "})

    assert resp.status_code == 400


def test_plan_trip_disabled_is_503(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(trip_planner, "llm", _RaisingLLM(AIDisabledError("off")))
    resp = client.post("/api/ai/plan-trip", json={"query": "Vegas weekend"})

    assert resp.status_code == 503
    assert "disabled" in resp.json()["detail"]


def test_plan_trip_invalid_json_is_fatal(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(trip_planner, "llm", _StaticLLM("Sure! Here is your plan..."))
    resp = client.post("/api/ai/plan-trip", json={"query": "Vegas weekend"})

    assert resp.status_code == 502


def test_compare_rate_limited_is_429(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(trip_planner, "llm", _RaisingLLM(AIRateLimitError("slow down")))
    resp = client.post("/api/ai/compare", json={"destinations": ["Bali"]})

    assert resp.status_code == 429


def test_compare_requires_destinations():
    resp = client.post("/api/ai/compare", json={"destinations": []})

    assert resp.status_code == 400


def test_top3_falls_back_to_raw_text(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(trip_planner, "llm", _StaticLLM("not json"))
    resp = client.post("/api/ai/top3", json={"results": [{"id": "a"}]})

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "top3": {"raw": "not json"}}


def test_flight_offers_without_credentials_is_500(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(search_router.amadeus_client.config, "amadeus_client_id", "")
    resp = client.post("/api/flights/offers", json=SCENARIO_A)

    assert resp.status_code == 500
    assert "credentials" in resp.json()["detail"]


def test_flight_offers_unreachable_upstream_is_502(monkeypatch: pytest.MonkeyPatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    config = SimpleNamespace(
        amadeus_client_id="id",
        amadeus_client_secret="secret",
        amadeus_base_url="https://test.api.amadeus.com",
        amadeus_token_margin_seconds=30,
        amadeus_max_offers=20,
        http_timeout_seconds=5.0,
    )
    offline = AmadeusClient(config=config, transport=httpx.MockTransport(handler))
    monkeypatch.setattr(search_router, "amadeus_client", offline)
    resp = client.post("/api/flights/offers", json=SCENARIO_A)

    assert resp.status_code == 502
    assert "unreachable" in resp.json()["detail"]


def test_duffel_order_validates_passengers():
    resp = client.post(
        "/api/duffel/order",
        json={"offer_id": "off_1", "contact": {"email": "a@b.test"}, "passengers": []},
    )

    assert resp.status_code == 400


def test_destination_links_route():
    resp = client.get("/api/destinations/links", params={"city": "Madrid", "country": "Spain"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["dining"][0]["id"] == "thefork"
    assert body["essentials"][0]["url"] == "https://en.wikivoyage.org/wiki/Madrid"


def test_destination_links_requires_city():
    resp = client.get("/api/destinations/links", params={"city": "   "})

    assert resp.status_code == 400
