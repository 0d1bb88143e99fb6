from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from leadfinder.schemas.contact import Contact


class SendMessageRequest(BaseModel):
    message: str = Field(min_length=1)


class ConversationMessageResponse(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str
    timestamp: datetime
    contacts: list[Contact] = []
    suggested_actions: list[str] = []


class ConversationResponse(BaseModel):
    id: str
    title: str
    messages: list[ConversationMessageResponse]
    contact_count: int
    follow_up_count: int
    is_archived: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConversationListItem(BaseModel):
    id: str
    title: str
    last_message: str
    contact_count: int
    follow_up_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
