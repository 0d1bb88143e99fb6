from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.core import get_settings, limiter
from leadfinder.db.models import User
from leadfinder.dependencies import get_current_user, get_db, get_followup_service
from leadfinder.schemas import (
    BatchFollowUpRequest,
    BatchFollowUpResponse,
    FollowUpResponse,
    GenerateFollowUpRequest,
)
from leadfinder.services import FollowUpService, FollowUpServiceError

router = APIRouter(prefix="/followup", tags=["followup"])


@router.post("/generate", response_model=FollowUpResponse)
@limiter.limit(get_settings().followup_rate_limit)
async def generate_followup(
    request: Request,
    body: GenerateFollowUpRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: FollowUpService = Depends(get_followup_service),
):
    try:
        return await service.generate(db, current_user.id, body)
    except FollowUpServiceError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/batch", response_model=BatchFollowUpResponse)
@limiter.limit(get_settings().followup_rate_limit)
async def generate_batch_followup(
    request: Request,
    body: BatchFollowUpRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: FollowUpService = Depends(get_followup_service),
):
    return await service.generate_batch(db, current_user.id, body)
