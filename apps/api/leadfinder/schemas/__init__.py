"""Pydantic request/response schemas."""

from leadfinder.schemas.auth import (
    GoogleAuthRequest,
    TokenResponse,
    UserResponse,
    UserProfileResponse,
    UpdateProfileRequest,
    UserStatsResponse,
)
from leadfinder.schemas.contact import Contact, SaveContactRequest, SuccessResponse
from leadfinder.schemas.interpretation import TargetProfile, InterpretationResult
from leadfinder.schemas.search import SearchRequest, SearchResultResponse, SearchHistoryItem
from leadfinder.schemas.conversation import (
    SendMessageRequest,
    ConversationMessageResponse,
    ConversationResponse,
    ConversationListItem,
)
from leadfinder.schemas.followup import (
    FollowUpChannel,
    GenerateFollowUpRequest,
    FollowUpResponse,
    BatchFollowUpContact,
    BatchFollowUpRequest,
    BatchFollowUpItem,
    BatchFollowUpResponse,
)

__all__ = [
    "GoogleAuthRequest",
    "TokenResponse",
    "UserResponse",
    "UserProfileResponse",
    "UpdateProfileRequest",
    "UserStatsResponse",
    "Contact",
    "SaveContactRequest",
    "SuccessResponse",
    "TargetProfile",
    "InterpretationResult",
    "SearchRequest",
    "SearchResultResponse",
    "SearchHistoryItem",
    "SendMessageRequest",
    "ConversationMessageResponse",
    "ConversationResponse",
    "ConversationListItem",
    "FollowUpChannel",
    "GenerateFollowUpRequest",
    "FollowUpResponse",
    "BatchFollowUpContact",
    "BatchFollowUpRequest",
    "BatchFollowUpItem",
    "BatchFollowUpResponse",
]
