from triotrip.services.search.destination_links import (
    country_from_display,
    destination_links,
    dining_links,
    essentials_links,
    explore_links,
    resolve_country_code,
)


def _ids(links):
    return [link["id"] for link in links]


def test_country_names_resolve_case_insensitively():
    assert resolve_country_code("United Kingdom") == "GB"
    assert resolve_country_code("  uae ") == "AE"
    assert resolve_country_code("Atlantis") is None
    assert resolve_country_code(None) is None


def test_country_from_airport_display_string():
    assert country_from_display("Paris (CDG), France") == ("France", "FR")
    assert country_from_display("Tokyo (HND) - Japan") == ("Japan", "JP")
    assert country_from_display("Las Vegas (LAS)") == (None, None)


def test_explore_links_encode_city_and_add_regional_maps():
    links = explore_links("San Juan")

    assert _ids(links) == ["gmaps", "tripadvisor", "lonelyplanet", "timeout"]
    assert links[0]["url"] == "https://www.google.com/maps/search/top%20attractions%20San%20Juan"
    assert _ids(explore_links("Beijing", "CN"))[0] == "baidu"
    assert {"naver", "kakao"} <= set(_ids(explore_links("Seoul", "kr")))


def test_dining_links_hide_weak_global_sites_and_add_regionals():
    india = _ids(dining_links("Delhi", "IN"))
    assert india == ["zomato", "eazydiner", "gmaps"]

    spain = _ids(dining_links("Madrid", "ES"))
    assert spain[:2] == ["thefork", "quandoo"]
    assert {"yelp", "opentable", "michelin"} <= set(spain)

    us = _ids(dining_links("Austin"))
    assert us == ["yelp", "opentable", "michelin", "gmaps"]


def test_essentials_links_use_country_slug_for_advisories():
    links = {link["id"]: link["url"] for link in essentials_links("New York", "United States", "US")}

    assert links["wikivoyage"] == "https://en.wikivoyage.org/wiki/New_York"
    assert links["uk"] == "https://www.gov.uk/foreign-travel-advice/united-states"
    assert links["ca"].endswith("/destinations/united-states")
    assert links["weather"] == "https://www.google.com/search?q=weather%20New%20York"


def test_essentials_links_without_country_point_at_index_pages():
    links = {link["id"]: link["url"] for link in essentials_links("Lima")}

    assert links["uk"] == "https://www.gov.uk/foreign-travel-advice"
    assert links["au"] == "https://www.smartraveller.gov.au/destinations"


def test_destination_links_split_display_string():
    sets = destination_links("Kyoto (UKY), Japan")

    assert set(sets) == {"explore", "dining", "essentials"}
    assert "tabelog" in _ids(sets["dining"])
    assert "yelp" not in _ids(sets["dining"])
    assert sets["explore"][2]["url"] == "https://www.lonelyplanet.com/search?q=Kyoto"
