from pydantic import BaseModel, Field


class PlanTripRequest(BaseModel):
    query: str = ""


class CompareRequest(BaseModel):
    destinations: list[str] = Field(default_factory=list)
    month: str | None = None
    home: str | None = None
    days: int | None = None


class Top3Request(BaseModel):
    results: list[dict] = Field(default_factory=list)
