"""User records: Google upsert, profile edits, API-usage counter."""

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.db.models import User
from leadfinder.providers import GoogleIdentity
from leadfinder.schemas import UpdateProfileRequest, UserProfileResponse, UserResponse, UserStatsResponse


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        photo_url=user.photo_url,
        subscription_tier=user.subscription_tier,
    )


def user_to_profile_response(user: User) -> UserProfileResponse:
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        photo_url=user.photo_url,
        subscription_tier=user.subscription_tier,
        api_calls_count=user.api_calls_count or 0,
        last_api_call=user.last_api_call,
        is_active=bool(user.is_active),
    )


async def upsert_google_user(db: AsyncSession, identity: GoogleIdentity) -> User:
    result = await db.execute(select(User).where(User.google_id == identity.google_id))
    user = result.scalar_one_or_none()
    if user is None:
        user = User(
            google_id=identity.google_id,
            email=identity.email,
            name=identity.name,
            photo_url=identity.picture,
        )
        db.add(user)
    else:
        user.email = identity.email
        user.name = identity.name
        user.photo_url = identity.picture
    await db.flush()
    return user


async def increment_api_call_count(db: AsyncSession, user_id: str) -> None:
    """Single UPDATE so concurrent requests never lose an increment."""
    await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(
            api_calls_count=User.api_calls_count + 1,
            last_api_call=datetime.now(timezone.utc),
        )
        .execution_options(synchronize_session=False)
    )


async def update_profile(db: AsyncSession, user: User, body: UpdateProfileRequest) -> UserResponse:
    if body.name:
        user.name = body.name
    if body.photo_url:
        user.photo_url = body.photo_url
    db.add(user)
    await db.flush()
    return user_to_response(user)


async def get_api_call_stats(db: AsyncSession, user_id: str) -> UserStatsResponse:
    result = await db.execute(
        select(User.api_calls_count, User.last_api_call).where(User.id == user_id)
    )
    row = result.one_or_none()
    if row is None:
        return UserStatsResponse(count=0, last_call=None)
    return UserStatsResponse(count=row[0] or 0, last_call=row[1])
