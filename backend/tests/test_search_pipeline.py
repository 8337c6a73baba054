import pytest

from triotrip.schemas.search import SearchRequest
from triotrip.services.search.fare_seed import fare_seed
from triotrip.services.search.pipeline import SearchPipeline
from triotrip.services.search.shaper import NIGHTS_DEFAULT_WARNING

BASE = {
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


def run(**overrides):
    payload = {**BASE, **overrides}
    return SearchPipeline().run(SearchRequest.model_validate(payload))


def test_flight_only_search_returns_six_cheapest_first():
    response = run()
    results = response["results"]

    assert len(results) == 6
    totals = [r["display_total"] for r in results]
    assert totals == sorted(totals)
    assert [r["flight"]["carrier_name"] for r in results] == [
        "Frontier Airlines",
        "Spirit Airlines",
        "American Airlines",
        "United Airlines",
        "Alaska Airlines",
        "Delta Air Lines",
    ]
    for r in results:
        assert r["hotel_total"] == 0
        assert r["total_cost"] == r["flight_total"]
        assert r["flight_total"] == r["flight"]["price"]
        assert "hotels" not in r
        assert "hotel" not in r
        assert "hotelCheckIn" not in r
    assert response["hotelWarning"] is None
    assert response["sortBasis"] == "flightOnly"


def test_prices_are_seed_plus_slot_offsets():
    seed = fare_seed("AUS", "LAS", "2026-01-10")
    results = run()["results"]

    assert 120 <= seed <= 279
    assert sorted(r["flight_total"] for r in results) == sorted(
        seed + offset for offset in (60, -30, 10, 5, 35, -10)
    )


def test_same_request_twice_gives_identical_results():
    assert run(sort="best") == run(sort="best")


def test_hotel_search_without_nights_warns_and_lists_three_hotels():
    response = run(includeHotel=True)

    assert response["hotelWarning"] == NIGHTS_DEFAULT_WARNING
    for r in response["results"]:
        assert len(r["hotels"]) == 3
        assert all(3 <= h["star"] <= 5 for h in r["hotels"])
        assert r["hotel"]["name"] in {h["name"] for h in r["hotels"]}
        assert r["hotel_total"] == r["hotel"]["price_converted"]
        assert r["total_cost"] == r["flight_total"] + r["hotel_total"]
        assert r["hotelCheckIn"] == "2026-01-10"
        assert r["hotelCheckOut"] == "2026-01-11"


def test_primary_hotel_is_cheapest_meeting_star_floor():
    response = run(includeHotel=True, nights=2, minHotelStar=5)

    for r in response["results"]:
        assert r["hotel"]["star"] == 5
        five_star = [h for h in r["hotels"] if h["star"] >= 5]
        assert r["hotel"]["price_converted"] == min(h["price_converted"] for h in five_star)


def test_unreachable_star_floor_falls_back_to_cheapest_hotel():
    response = run(includeHotel=True, nights=2, minHotelStar=6)

    for r in response["results"]:
        assert r["hotel"]["price_converted"] == min(h["price_converted"] for h in r["hotels"])


def test_explicit_nights_scale_hotel_price_and_skip_warning():
    one = run(includeHotel=True, nights=1)
    three = run(includeHotel=True, nights=3)

    assert three["hotelWarning"] is None
    for a, b in zip(one["results"], three["results"]):
        assert b["hotel"]["price_converted"] == a["hotel"]["price_converted"] * 3


def test_nights_derived_from_hotel_dates_still_warn():
    derived = run(includeHotel=True, hotelCheckIn="2026-01-10", hotelCheckOut="2026-01-14")
    one_night = run(includeHotel=True, nights=1)

    assert derived["hotelWarning"] is not None
    assert "4 night" in derived["hotelWarning"]
    assert derived["results"][0]["hotelCheckOut"] == "2026-01-14"
    for a, b in zip(one_night["results"], derived["results"]):
        assert b["hotel"]["price_converted"] == a["hotel"]["price_converted"] * 4


def test_hotel_dates_with_explicit_nights_do_not_warn():
    response = run(includeHotel=True, nights=4, hotelCheckIn="2026-01-10", hotelCheckOut="2026-01-14")

    assert response["hotelWarning"] is None


def test_bundle_basis_sorts_on_total_cost():
    response = run(includeHotel=True, nights=2, priceBasis="tripBundle")

    assert response["sortBasis"] == "bundle"
    totals = [r["display_total"] for r in response["results"]]
    assert totals == sorted(totals)
    for r in response["results"]:
        assert r["display_total"] == r["total_cost"]


def test_max_stops_zero_keeps_only_nonstop_carriers():
    results = run(maxStops=0)["results"]

    assert len(results) == 2
    assert all(r["flight"]["stops"] == 0 for r in results)
    assert {r["flight"]["carrier_name"] for r in results} == {"Delta Air Lines", "American Airlines"}


def test_unreachable_budget_is_empty_not_an_error():
    response = run(minBudget=1000)

    assert response["results"] == []


def test_budget_window_is_inclusive():
    seed = fare_seed("AUS", "LAS", "2026-01-10")
    results = run(minBudget=seed - 10, maxBudget=seed + 10)["results"]

    assert {r["total_cost"] for r in results} == {seed - 10, seed + 5, seed + 10}


def test_refundable_and_greener_filters():
    results = run(refundable=True, greener=True)["results"]

    assert {r["flight"]["carrier_name"] for r in results} == {"Delta Air Lines", "Alaska Airlines"}


def test_flexible_sort_puts_refundable_first():
    results = run(sort="flexible")["results"]
    flags = [r["flight"]["refundable"] for r in results]

    assert flags == sorted(flags, reverse=True)
    refundable = [r["display_total"] for r in results if r["flight"]["refundable"]]
    assert refundable == sorted(refundable)


def test_fastest_sort_orders_by_duration():
    results = run(sort="fastest")["results"]
    durations = [r["flight"]["duration_minutes"] for r in results]

    assert durations == sorted(durations)
    assert results[0]["flight"]["stops"] == 0


def test_best_sort_uses_price_plus_weighted_duration():
    results = run(sort="unknown-key")["results"]
    scores = [r["display_total"] + 0.2 * r["flight"]["duration_minutes"] for r in results]

    assert scores == sorted(scores)


def test_round_trip_duration_sums_both_directions():
    result = run()["results"][0]
    flight = result["flight"]
    legs = flight["segments_out"] + flight["segments_in"]

    assert flight["duration_minutes"] == sum(s["duration_minutes"] for s in legs)


def test_one_way_has_no_inbound_segments():
    results = run(roundTrip=False, returnDate=None)["results"]

    assert len(results) == 6
    assert all("segments_in" not in r["flight"] for r in results)


def test_hubs_skip_trip_endpoints():
    results = run(origin="DEN", destination="ORD")["results"]
    airports = {
        s["to"] for r in results for s in r["flight"]["segments_out"][:-1]
    }

    assert "DEN" not in airports
    assert "ORD" not in airports


def test_passenger_context_copied_to_results():
    result = run(passengersAdults=2, passengersChildren=1, passengersChildrenAges=[7])["results"][0]

    assert result["passengers"] == 3
    assert result["passengersAdults"] == 2
    assert result["passengersChildren"] == 1
    assert result["passengersChildrenAges"] == [7]


def test_deeplinks_attached_per_carrier():
    results = {r["flight"]["carrier_name"]: r for r in run()["results"]}

    delta = results["Delta Air Lines"]["flight"]["deeplinks"]["airline"]
    assert delta["name"] == "Delta Air Lines"
    assert delta["url"].startswith("https://www.delta.com/")
    assert results["Frontier Airlines"]["flight"]["deeplinks"]["airline"]["url"] == (
        "https://www.frontierairlines.com"
    )


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"origin": None}, "origin, destination, and departDate are required"),
        ({"departDate": ""}, "origin, destination, and departDate are required"),
        ({"returnDate": None}, "returnDate is required for round trips"),
        ({"returnDate": "2026-01-01"}, "returnDate must not be before departDate"),
        ({"includeHotel": True, "nights": 0}, "nights must be at least 1"),
        ({"includeHotel": True, "nights": 10**9}, "nights must be at most 365"),
        ({"includeHotel": True, "hotelCheckIn": "2026-01-10", "hotelCheckOut": "2027-06-01"}, "nights must be at most 365"),
        ({"includeHotel": True, "nights": 1, "departDate": "9999-12-31", "returnDate": "9999-12-31"}, "past the last supported date"),
    ],
)
def test_invalid_requests_raise_value_error(overrides, message):
    with pytest.raises(ValueError, match=message):
        run(**overrides)
