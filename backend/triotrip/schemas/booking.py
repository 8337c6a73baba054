from typing import Literal

from pydantic import BaseModel, Field


class OfferLookupRequest(BaseModel):
    offer_id: str


class OrderContact(BaseModel):
    email: str
    phone_number: str | None = None


class OrderPassenger(BaseModel):
    id: str | None = None
    title: str | None = None
    given_name: str
    family_name: str
    born_on: str
    gender: str | None = None
    type: Literal["adult", "child", "infant", "infant_without_seat"] = "adult"


class OrderRequest(BaseModel):
    offer_id: str
    contact: OrderContact
    passengers: list[OrderPassenger] = Field(min_length=1)
