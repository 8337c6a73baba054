"""Trip planner service — AI trip plans, destination comparison and top-3 picks."""

import json
import logging
from datetime import date

import httpx

from triotrip.services.amadeus_client import AmadeusError, amadeus_client
from triotrip.services.llm_client import AIError, llm_client, parse_ai_payload

logger = logging.getLogger(__name__)

TOP3_MAX_RESULTS = 20

PLAN_TRIP_PROMPT = """You are an expert travel planner. The user gives a short free-text query describing a trip.
Understand origin, destination, dates, length of stay, budget, and preferences.
Today's date is {today}.

User query:
"{query}"

Return a SINGLE JSON object with this shape:

{{
  "search": {{
    "origin": "IATA origin code like AUS, or empty string if unknown",
    "destination": "IATA destination code like LAS, or empty string if unknown",
    "departDate": "YYYY-MM-DD or empty string",
    "returnDate": "YYYY-MM-DD or empty string for one-way",
    "adults": 1,
    "cabin": "ECONOMY | PREMIUM_ECONOMY | BUSINESS | FIRST"
  }},
  "top3": {{
    "best_overall": {{"title": "short title for the best overall plan", "reason": "why this is the best overall"}},
    "best_budget": {{"title": "short title for budget plan", "reason": "why this is best for saving money"}},
    "best_comfort": {{"title": "short title for comfort plan", "reason": "why this is most comfortable / relaxed"}}
  }},
  "flights": [
    {{
      "label": "short description, e.g. 'Non-stop AUS → LAS, afternoon departure'",
      "from": "IATA origin code",
      "to": "IATA destination code",
      "airline": "suggested airline or 'multiple airlines'",
      "approx_price": 1234,
      "currency": "USD",
      "notes": "very short tip such as 'usually cheapest on weekdays'"
    }}
  ],
  "hotels": [
    {{
      "name": "hotel name",
      "area": "neighborhood / area",
      "approx_price_per_night": 200,
      "currency": "USD",
      "vibe": "short phrase, e.g. 'party / casino' or 'quiet & family friendly'",
      "why": "1 sentence why this fits the trip description"
    }}
  ],
  "itinerary": [
    {{
      "day": 1,
      "date": "YYYY-MM-DD if you can infer it, otherwise an empty string",
      "activities": ["bullet-style activity line for morning / afternoon / evening"]
    }}
  ]
}}

Rules:
- Always return valid JSON ONLY, no extra commentary or markdown.
- If you cannot infer exact dates, leave "date" as "" but keep the correct day order.
- Align flights & hotels with the itinerary and user preferences (budget vs luxury, nightlife vs quiet, etc.)."""

COMPARE_PROMPT = """You are a travel expert. Compare these destinations for a {days}-day trip in {month} from {home}.

Destinations:
{destinations}

For EACH destination, provide a JSON object with:
- name, approx_cost_level ("$", "$$", "$$$" or "$$$$"), weather_summary for that month,
  best_for (1 short phrase), pros and cons (2-4 short strings each), overall_vibe (1 sentence)
- dining_and_local_eats, hotels_and_areas, entertainment_and_nightlife, family_friendly,
  kids_activities, safety_tips (short paragraphs specific to that destination)
- currency (local code and name, like "THB - Thai Baht")
- typical_daily_budget (short phrase like "Budget: 50-80 USD/day")
- airports: 2-4 key airports, each with role (one of "primary_hub", "cheapest_option",
  "most_convenient", "busiest_or_happening", "safest_reputation"), name, code (IATA), reason

STRICTLY return a JSON array of these objects only (no markdown, no comments)."""

TOP3_PROMPT = """You are picking exactly 3 options from this list of trip results.
Each result has id, a price (flight_total / total_cost), duration_minutes, and possibly a hotel.

Pick:
1. Best overall
2. Best budget
3. Best comfort

RULES:
- Always output STRICT JSON that can be parsed.
- Do not include any comments or extra text outside JSON.
- Make sure every "id" you reference exists in the input results.

Return JSON:
{{
  "best_overall": {{"id": "<candidate.id>", "reason": "..."}},
  "best_budget": {{"id": "<candidate.id>", "reason": "..."}},
  "best_comfort": {{"id": "<candidate.id>", "reason": "..."}}
}}

Results: {results}"""


class AIResponseFormatError(AIError):
    """The model did not return the JSON a flow depends on."""


def _parse_date(value) -> date | None:
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


class TripPlanner:
    """Builds prompts, calls the LLM and post-processes its JSON."""

    def __init__(self, llm=None, flights=None):
        self.llm = llm or llm_client
        self.flights = flights or amadeus_client

    async def plan_trip(self, query: str) -> dict:
        prompt = PLAN_TRIP_PROMPT.format(today=date.today().isoformat(), query=query.strip())
        raw = await self.llm.complete(prompt)
        payload = parse_ai_payload(raw)
        if not payload.parsed or not isinstance(payload.value, dict):
            logger.warning(f"Plan-trip returned invalid JSON. Raw: {raw[:500]}")
            raise AIResponseFormatError("AI returned invalid JSON for the trip plan")

        planning = payload.value
        search_params = self._search_params(planning.get("search"))
        result = {
            "ok": True,
            "planning": planning,
            "searchParams": search_params,
            "searchResult": None,
            "searchError": None,
        }
        if search_params:
            try:
                offers = await self.flights.search_flight_offers(
                    origin=search_params["origin"],
                    destination=search_params["destination"],
                    depart_date=_parse_date(search_params["departDate"]),
                    return_date=_parse_date(search_params["returnDate"]),
                    adults=search_params["adults"],
                    cabin=search_params["cabin"],
                )
                result["searchResult"] = {"results": offers}
            except (AmadeusError, httpx.HTTPError) as e:
                logger.warning(f"Plan-trip offer enrichment skipped: {e}")
                result["searchError"] = str(e) or e.__class__.__name__
        return result

    @staticmethod
    def _search_params(search) -> dict | None:
        """Usable flight-search params from the plan, or None when too vague."""
        if not isinstance(search, dict):
            return None
        origin = str(search.get("origin") or "").strip().upper()
        destination = str(search.get("destination") or "").strip().upper()
        depart = _parse_date(search.get("departDate"))
        if not origin or not destination or not depart:
            return None

        return_date = _parse_date(search.get("returnDate"))
        try:
            adults = max(1, int(search.get("adults") or 1))
        except (TypeError, ValueError):
            adults = 1
        cabin = str(search.get("cabin") or "ECONOMY").upper()
        if cabin not in ("ECONOMY", "PREMIUM_ECONOMY", "BUSINESS", "FIRST"):
            cabin = "ECONOMY"

        return {
            "origin": origin,
            "destination": destination,
            "departDate": depart.isoformat(),
            "returnDate": return_date.isoformat() if return_date else None,
            "roundTrip": return_date is not None,
            "adults": adults,
            "cabin": cabin,
        }

    async def compare_destinations(
        self,
        destinations: list[str],
        month: str | None = None,
        home: str | None = None,
        days: int | None = None,
    ) -> dict:
        prompt = COMPARE_PROMPT.format(
            days=days or 7,
            month=month or "anytime",
            home=home or "your home city",
            destinations="\n".join(f"{i + 1}. {d}" for i, d in enumerate(destinations)),
        )
        raw = await self.llm.complete(prompt)
        return {"ok": True, "comparisons": parse_ai_payload(raw).as_response()}

    async def pick_top3(self, results: list[dict]) -> dict:
        truncated = results[:TOP3_MAX_RESULTS]
        prompt = TOP3_PROMPT.format(results=json.dumps(truncated, indent=2, default=str))
        raw = await self.llm.complete(prompt)
        return {"ok": True, "top3": parse_ai_payload(raw).as_response()}


trip_planner = TripPlanner()
