from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.core import get_settings, limiter
from leadfinder.db.session import get_db
from leadfinder.schemas import GoogleAuthRequest, TokenResponse
from leadfinder.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/google", response_model=TokenResponse)
@limiter.limit(get_settings().auth_login_rate_limit)
async def google_login(
    request: Request,
    body: GoogleAuthRequest,
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.google_login(db, body.id_token)
