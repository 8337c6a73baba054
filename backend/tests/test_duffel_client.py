import json
from types import SimpleNamespace

import httpx
import pytest

from triotrip.services.duffel_client import DuffelClient, DuffelConfigError, DuffelError

OFFER = {
    "id": "off_1",
    "total_amount": "420.00",
    "total_currency": "USD",
    "passengers": [{"id": "pas_a"}, {"id": "pas_b"}],
}


def _settings(**overrides) -> SimpleNamespace:
    values = {
        "duffel_access_token": "duffel_test",
        "duffel_base_url": "https://api.duffel.test/",
        "duffel_version": "v2",
        "http_timeout_seconds": 5.0,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.mark.asyncio
async def test_get_offer_unwraps_data_and_sends_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["headers"] = request.headers
        return httpx.Response(200, json={"data": OFFER})

    client = DuffelClient(config=_settings(), transport=httpx.MockTransport(handler))
    offer = await client.get_offer("off_1")
    await client.close()

    assert offer["total_amount"] == "420.00"
    assert seen["path"] == "/air/offers/off_1"
    assert seen["headers"]["Authorization"] == "Bearer duffel_test"
    assert seen["headers"]["Duffel-Version"] == "v2"


@pytest.mark.asyncio
async def test_create_order_builds_instant_order():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"data": {"id": "ord_1"}})

    client = DuffelClient(config=_settings(), transport=httpx.MockTransport(handler))
    result = await client.create_order(
        offer_id="off_1",
        passengers=[
            {"given_name": "Ana", "family_name": "Lee", "born_on": "1990-01-01", "type": "adult", "title": None},
            {"given_name": "Bo", "family_name": "Lee", "born_on": "2025-05-01", "type": "infant"},
        ],
        contact={"email": "ana@example.test", "phone_number": "+15550100"},
        offer=OFFER,
    )
    await client.close()

    assert result["data"]["id"] == "ord_1"
    data = bodies[0]["data"]
    assert data["type"] == "instant"
    assert data["selected_offers"] == ["off_1"]
    assert data["payments"] == [{"type": "balance", "amount": "420.00", "currency": "USD"}]
    first, second = data["passengers"]
    assert first["id"] == "pas_a"
    assert first["email"] == "ana@example.test"
    assert "title" not in first
    assert second["id"] == "pas_b"
    assert second["type"] == "infant_without_seat"


@pytest.mark.asyncio
async def test_missing_token_raises_config_error():
    client = DuffelClient(config=_settings(duffel_access_token=""))

    with pytest.raises(DuffelConfigError):
        await client.get_offer("off_1")


@pytest.mark.asyncio
async def test_upstream_rejection_keeps_status_and_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, text='{"errors": [{"title": "Offer expired"}]}')

    client = DuffelClient(config=_settings(), transport=httpx.MockTransport(handler))

    with pytest.raises(DuffelError) as excinfo:
        await client.get_offer("off_1")
    await client.close()

    assert excinfo.value.status_code == 422
    assert "Offer expired" in excinfo.value.body
