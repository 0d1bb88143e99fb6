from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.db.models import User
from leadfinder.dependencies import get_current_user, get_db
from leadfinder.schemas import UpdateProfileRequest, UserProfileResponse, UserResponse, UserStatsResponse
from leadfinder.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserProfileResponse)
async def get_me(
    current_user: User = Depends(get_current_user),
):
    return user_service.user_to_profile_response(current_user)


@router.put("/me", response_model=UserResponse)
async def update_me(
    body: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.update_profile(db, current_user, body)


@router.get("/me/stats", response_model=UserStatsResponse)
async def get_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.get_api_call_stats(db, current_user.id)
