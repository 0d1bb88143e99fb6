from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FollowUpChannel(str, Enum):
    EMAIL = "EMAIL"
    WHATSAPP = "WHATSAPP"
    SMS = "SMS"


class GenerateFollowUpRequest(BaseModel):
    contact_id: str = Field(min_length=1)
    channel: FollowUpChannel
    context: str = Field(min_length=1)
    conversation_id: Optional[str] = None  # bumps that conversation's follow_up_count


class FollowUpResponse(BaseModel):
    subject: Optional[str] = None
    body: str
    channel: FollowUpChannel


class BatchFollowUpContact(BaseModel):
    contact_id: str = Field(min_length=1)
    contact_name: str = Field(min_length=1)
    title: Optional[str] = None
    company: Optional[str] = None


class BatchFollowUpRequest(BaseModel):
    contacts: list[BatchFollowUpContact]
    channel: FollowUpChannel
    context: str = Field(min_length=1)
    conversation_id: Optional[str] = None


class BatchFollowUpItem(BaseModel):
    contact_id: str
    contact_name: str
    subject: Optional[str] = None
    body: str
    channel: FollowUpChannel


class BatchFollowUpResponse(BaseModel):
    results: list[BatchFollowUpItem]
