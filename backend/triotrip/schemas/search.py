from datetime import date
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator

Cabin = Literal["ECONOMY", "PREMIUM_ECONOMY", "BUSINESS", "FIRST"]


class SearchRequest(BaseModel):
    origin: str | None = None
    destination: str | None = None
    depart_date: date | None = Field(None, alias="departDate")
    return_date: date | None = Field(None, alias="returnDate")
    round_trip: bool = Field(True, alias="roundTrip")

    passengers: int | None = None
    passengers_adults: int | None = Field(None, alias="passengersAdults")
    passengers_children: int | None = Field(None, alias="passengersChildren")
    passengers_infants: int | None = Field(None, alias="passengersInfants")
    passengers_children_ages: list[int] = Field(default_factory=list, alias="passengersChildrenAges")
    cabin: Cabin = "ECONOMY"

    include_hotel: bool = Field(False, alias="includeHotel")
    hotel_check_in: date | None = Field(None, alias="hotelCheckIn")
    hotel_check_out: date | None = Field(None, alias="hotelCheckOut")
    nights: int | None = None
    min_hotel_star: int | None = Field(None, alias="minHotelStar")

    min_budget: float | None = Field(None, alias="minBudget")
    max_budget: float | None = Field(None, alias="maxBudget")
    currency: str = "USD"

    sort: str | None = None
    max_stops: int | None = Field(None, alias="maxStops")
    refundable: bool | None = None
    greener: bool | None = None
    sort_basis: str | None = Field(
        None, validation_alias=AliasChoices("sortBasis", "priceBasis", "sort_basis")
    )

    model_config = {"populate_by_name": True}

    @field_validator(
        "depart_date", "return_date", "hotel_check_in", "hotel_check_out", mode="before"
    )
    @classmethod
    def blank_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("origin", "destination", mode="before")
    @classmethod
    def normalize_airport(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or None
        return value

    @field_validator("cabin", mode="before")
    @classmethod
    def normalize_cabin(cls, value):
        if value is None:
            return "ECONOMY"
        if isinstance(value, str):
            return value.strip().upper().replace(" ", "_")
        return value


class FlightOfferRequest(BaseModel):
    """Real flight-offer lookup; same field names as the manual search."""
    origin: str
    destination: str
    depart_date: date = Field(alias="departDate")
    return_date: date | None = Field(None, alias="returnDate")
    round_trip: bool = Field(True, alias="roundTrip")
    passengers_adults: int = Field(1, alias="passengersAdults")
    cabin: Cabin = "ECONOMY"
    currency: str = "USD"

    model_config = {"populate_by_name": True}

    @field_validator("return_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value
