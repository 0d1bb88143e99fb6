"""Google sign-in: verify the ID token, upsert the user, issue a session token."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.core import create_access_token, get_settings
from leadfinder.providers import GoogleIdentityError, verify_google_id_token
from leadfinder.schemas import TokenResponse

from .users import upsert_google_user, user_to_response

logger = logging.getLogger(__name__)


async def google_login(db: AsyncSession, id_token: str) -> TokenResponse:
    settings = get_settings()
    try:
        identity = await verify_google_id_token(id_token, settings.google_client_id)
    except GoogleIdentityError as e:
        logger.info("Google login rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Google authentication",
        ) from e

    user = await upsert_google_user(db, identity)
    token = create_access_token(subject=str(user.id), email=user.email)
    return TokenResponse(access_token=token, user=user_to_response(user))
