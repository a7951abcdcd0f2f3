from pydantic import BaseModel, Field

class DemographicRow(BaseModel):
    group: str
    share: float = Field(ge=0)

class Metrics(BaseModel):
    walkability: int = Field(ge=0, le=100)
    school_score: float = Field(ge=0, le=10)
    crime_index: int = Field(ge=0, le=100)
    median_income: int = Field(ge=0)
    price_growth_5y: float
    demographics: list[DemographicRow]

class PlaceReport(BaseModel):
    place: str
    currency: str = "USD"
    metrics: Metrics
    pros: list[str]
    cons: list[str]
    pros_placeholder: str | None = None
    cons_placeholder: str | None = None
    narrative: str
    etag: str | None = None

class QuickPicks(BaseModel):
    places: list[str]

class AskRequest(BaseModel):
    city: str
    state: str
    question: str = Field(min_length=1)

class ChatMessage(BaseModel):
    speaker: str
    text: str

class AskResponse(BaseModel):
    place: str
    messages: list[ChatMessage]
