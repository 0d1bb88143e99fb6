from typing import Optional

from pydantic import BaseModel, Field


class Contact(BaseModel):
    """Canonical professional record produced by enrichment (live, mock, or fallback)."""

    id: str
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    company: str = ""
    location: str = ""
    industry: str = ""
    emails: list[str] = []
    phones: list[str] = []
    linkedin_url: str = ""
    profile_image_url: str = ""
    relevance_score: float = 0
    summary: str = ""


class SaveContactRequest(BaseModel):
    contact_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    emails: list[str] = []
    phones: list[str] = []
    linkedin_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    relevance_score: Optional[float] = None
    summary: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool
