from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator


class GoogleAuthRequest(BaseModel):
    id_token: str

    @field_validator("id_token")
    @classmethod
    def validate_id_token(cls, value: str) -> str:
        trimmed = (value or "").strip()
        if not trimmed:
            raise ValueError("id_token is required")
        return trimmed


class UserResponse(BaseModel):
    id: str
    email: EmailStr
    name: str
    photo_url: Optional[str] = None
    subscription_tier: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserProfileResponse(UserResponse):
    api_calls_count: int
    last_api_call: Optional[datetime] = None
    is_active: bool


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = None
    photo_url: Optional[str] = None


class UserStatsResponse(BaseModel):
    count: int
    last_call: Optional[datetime] = None
