from datetime import datetime

from pydantic import BaseModel, Field

from leadfinder.schemas.contact import Contact


class SearchRequest(BaseModel):
    query: str = Field(min_length=1)


class SearchResultResponse(BaseModel):
    contacts: list[Contact]
    message: str
    total_results: int


class SearchHistoryItem(BaseModel):
    id: str
    query: str
    result_count: int
    timestamp: datetime
