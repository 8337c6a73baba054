"""Destination links — explore, dining and essentials URLs for a trip's city.

Country-aware: regional sites are added, and global ones hidden, where the
global site has poor local coverage.
"""

import re
from urllib.parse import quote

COUNTRY_TO_CONTINENT = {
    **dict.fromkeys(["US", "CA", "MX"], "NA"),
    **dict.fromkeys(["BR", "AR", "CL", "PE", "CO"], "SA"),
    **dict.fromkeys(
        ["GB", "IE", "FR", "DE", "IT", "ES", "PT", "NL", "BE", "CH", "AT", "SE", "NO", "DK",
         "FI", "IS", "CZ", "PL", "GR", "RO", "HU", "TR"],
        "EU",
    ),
    **dict.fromkeys(["AU", "NZ"], "OC"),
    **dict.fromkeys(
        ["JP", "KR", "CN", "IN", "AE", "SG", "HK", "TH", "MY", "PH", "VN", "ID", "QA", "KW", "SA"],
        "AS",
    ),
    **dict.fromkeys(["ZA", "EG"], "AF"),
}

COUNTRY_NAMES = {
    "united states": "US", "usa": "US", "u.s.a.": "US", "us": "US", "america": "US",
    "united kingdom": "GB", "uk": "GB", "great britain": "GB", "england": "GB",
    "uae": "AE", "united arab emirates": "AE",
    "south korea": "KR", "republic of korea": "KR", "korea": "KR",
    "hong kong": "HK", "singapore": "SG", "japan": "JP", "china": "CN", "india": "IN",
    "australia": "AU", "new zealand": "NZ", "france": "FR", "germany": "DE", "italy": "IT",
    "spain": "ES", "portugal": "PT", "ireland": "IE", "netherlands": "NL", "belgium": "BE",
    "switzerland": "CH", "austria": "AT", "sweden": "SE", "norway": "NO", "denmark": "DK",
    "finland": "FI", "iceland": "IS", "czechia": "CZ", "czech republic": "CZ", "greece": "GR",
    "poland": "PL", "romania": "RO", "hungary": "HU", "turkey": "TR", "mexico": "MX",
    "canada": "CA", "brazil": "BR", "argentina": "AR", "chile": "CL", "peru": "PE",
    "colombia": "CO", "south africa": "ZA", "egypt": "EG", "thailand": "TH", "malaysia": "MY",
    "philippines": "PH", "vietnam": "VN", "indonesia": "ID", "qatar": "QA", "kuwait": "KW",
    "saudi arabia": "SA",
}

# Global dining sites with thin coverage in these countries
HIDDEN_DINING = {
    "IN": {"yelp", "opentable", "michelin"},
    "CN": {"yelp", "opentable"},
    "JP": {"yelp", "opentable"},
    "KR": {"yelp", "opentable"},
    **{cc: {"yelp"} for cc in ("HK", "SG", "MY", "TH", "PH", "VN", "AE", "SA", "QA", "KW")},
}


def _q(value: str) -> str:
    return quote(value, safe="")


def _wiki_title(city: str) -> str:
    return _q(re.sub(r"\s+", "_", city.strip()))


def _advice_slug(country_name: str | None) -> str:
    if not country_name:
        return ""
    return "/" + _q(re.sub(r"\s+", "-", country_name.strip().lower()))


def _link(link_id: str, label: str, url: str) -> dict[str, str]:
    return {"id": link_id, "label": label, "url": url}


def _dedupe(links: list[dict[str, str]]) -> list[dict[str, str]]:
    seen = set()
    unique = []
    for link in links:
        if link["id"] not in seen:
            seen.add(link["id"])
            unique.append(link)
    return unique


def maps_search_url(city: str, term: str | None = None) -> str:
    return f"https://www.google.com/maps/search/{_q(f'{term} {city}'.strip() if term else city)}"


def resolve_country_code(country_name: str | None) -> str | None:
    """'United Kingdom' -> 'GB'; unknown names -> None."""
    if not country_name:
        return None
    return COUNTRY_NAMES.get(country_name.strip().lower())


def country_from_display(display: str | None) -> tuple[str | None, str | None]:
    """Best-effort (name, code) from an airport display string such as 'Paris (CDG), France'."""
    if not display:
        return None, None
    cleaned = re.sub(r"\([A-Z]{3}\)", " ", display)
    cleaned = re.sub(r"[–—]", "-", cleaned)
    tokens = [t.strip() for t in re.split(r"[,|-]+", cleaned) if t.strip()]
    for token in reversed(tokens):
        code = resolve_country_code(token)
        if code:
            return token.title(), code
    return None, None


def explore_links(city: str, country_code: str | None = None) -> list[dict[str, str]]:
    cc = (country_code or "").upper()
    links = [
        _link("gmaps", "Google Maps", maps_search_url(city, "top attractions")),
        _link(
            "tripadvisor",
            "Tripadvisor",
            f"https://www.tripadvisor.com/Search?q={_q(f'top attractions {city}')}",
        ),
        _link("lonelyplanet", "Lonely Planet", f"https://www.lonelyplanet.com/search?q={_q(city)}"),
        _link("timeout", "Time Out", f"https://www.timeout.com/search?query={_q(city)}"),
    ]
    if cc == "CN":
        links.insert(0, _link("baidu", "Baidu Maps", f"https://map.baidu.com/search/{_q(city)}"))
    if cc == "KR":
        links.append(_link("naver", "Naver Map", f"https://map.naver.com/p/search/{_q(city)}"))
        links.append(_link("kakao", "Kakao Map", f"https://map.kakao.com/?q={_q(city)}"))
    return _dedupe(links)


def _regional_dining(city: str, cc: str) -> list[dict[str, str]]:
    links = []
    continent = COUNTRY_TO_CONTINENT.get(cc)
    if continent == "EU" or cc == "AU":
        links.append(_link("thefork", "TheFork", f"https://www.thefork.com/search/?city={_q(city)}"))
    if continent == "EU":
        links.append(_link("quandoo", "Quandoo", f"https://www.quandoo.com/en/find?query={_q(city)}"))
    if cc in ("HK", "SG", "MY", "TH", "PH", "VN"):
        links.append(
            _link(
                "openrice",
                "OpenRice",
                f"https://www.openrice.com/en/hongkong/restaurants?what=&where={_q(city)}",
            )
        )
    if cc == "JP":
        links.append(_link("tabelog", "Tabelog", f"https://tabelog.com/en/rstLst/?sa={_q(city)}"))
    if cc == "KR":
        links.append(_link("mangoplate", "MangoPlate", f"https://www.mangoplate.com/search/{_q(city)}"))
    if cc == "CN":
        links.append(
            _link("dianping", "Dianping", f"https://www.dianping.com/search/keyword/0/0_{_q(city)}")
        )
    if cc in ("IN", "AE", "SA", "QA", "KW"):
        links.append(_link("zomato", "Zomato", f"https://www.zomato.com/search?place_name={_q(city)}"))
        if cc == "IN":
            links.append(_link("eazydiner", "EazyDiner", f"https://www.eazydiner.com/{_q(city)}"))
    return links


def dining_links(city: str, country_code: str | None = None) -> list[dict[str, str]]:
    """Regional reservation sites first, then the global ones the country supports."""
    cc = (country_code or "").upper()
    hidden = HIDDEN_DINING.get(cc, set())
    links = _regional_dining(city, cc)
    if "yelp" not in hidden:
        links.append(
            _link(
                "yelp",
                "Yelp",
                f"https://www.yelp.com/search?find_desc=restaurants&find_loc={_q(city)}",
            )
        )
    if "opentable" not in hidden:
        links.append(_link("opentable", "OpenTable", f"https://www.opentable.com/s?term={_q(city)}"))
    if "michelin" not in hidden:
        links.append(
            _link("michelin", "Michelin", f"https://guide.michelin.com/en/search?q=&city={_q(city)}")
        )
    links.append(_link("gmaps", "Google Maps", maps_search_url(city, "best restaurants")))
    return _dedupe(links)


def essentials_links(
    city: str,
    country_name: str | None = None,
    country_code: str | None = None,
) -> list[dict[str, str]]:
    cc = (country_code or "").upper()
    slug = _advice_slug(country_name)
    links = [
        _link("wikivoyage", "Wikivoyage", f"https://en.wikivoyage.org/wiki/{_wiki_title(city)}"),
        _link("wikipedia", "Wikipedia", f"https://en.wikipedia.org/wiki/{_wiki_title(city)}"),
        _link("xe", "XE currency", f"https://www.xe.com/currencyconverter/?search={_q(city)}"),
        _link("weather", "Weather", f"https://www.google.com/search?q={_q(f'weather {city}')}"),
        _link("pharmacies", "Google Maps (Pharmacies)", maps_search_url(city, "pharmacies")),
        _link("cars", "Search cars", f"https://www.google.com/search?q={_q(f'car rental {city}')}"),
        _link(
            "us",
            "US State Dept",
            "https://travel.state.gov/content/travel/en/traveladvisories/traveladvisories.html",
        ),
        _link("uk", "UK FCDO", f"https://www.gov.uk/foreign-travel-advice{slug}"),
        _link("ca", "Canada Travel", f"https://travel.gc.ca/destinations{slug}"),
        _link("au", "Australia Smartraveller", f"https://www.smartraveller.gov.au/destinations{slug}"),
    ]
    if cc == "CN":
        links.insert(0, _link("baidu", "Baidu Maps", f"https://map.baidu.com/search/{_q(city)}"))
    return _dedupe(links)


def destination_links(
    city: str,
    country_name: str | None = None,
    country_code: str | None = None,
) -> dict[str, list[dict[str, str]]]:
    """All three link sets for a city name or an airport display string.

    'Paris (CDG), France' is split into the city and its country when no
    country is given.
    """
    display = city.strip()
    city = re.sub(r"\([A-Z]{3}\)", "", display.split(",")[0]).strip() or display
    if not country_name and not country_code:
        country_name, country_code = country_from_display(display)
    code = (country_code or resolve_country_code(country_name) or "").upper() or None
    return {
        "explore": explore_links(city, code),
        "dining": dining_links(city, code),
        "essentials": essentials_links(city, country_name, code),
    }
