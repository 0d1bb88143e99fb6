import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

GOOGLE_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
_GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


class GoogleIdentityError(Exception):
    """Raised when a Google ID token cannot be verified."""


@dataclass
class GoogleIdentity:
    google_id: str
    email: str
    name: str
    picture: str | None = None


async def verify_google_id_token(
    id_token: str,
    client_id: str | None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GoogleIdentity:
    """Validate an ID token with Google's tokeninfo endpoint and return the identity claims."""
    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            r = await client.get(GOOGLE_TOKENINFO_URL, params={"id_token": id_token})
            r.raise_for_status()
            claims = r.json()
    except httpx.HTTPStatusError as e:
        raise GoogleIdentityError("Google rejected the ID token") from e
    except (httpx.RequestError, ValueError) as e:
        raise GoogleIdentityError("Google token verification unavailable") from e

    if not isinstance(claims, dict):
        raise GoogleIdentityError("Unexpected tokeninfo payload")
    if claims.get("iss") not in _GOOGLE_ISSUERS:
        raise GoogleIdentityError("Unexpected token issuer")
    if client_id and claims.get("aud") != client_id:
        logger.warning("Google ID token audience mismatch: %s", claims.get("aud"))
        raise GoogleIdentityError("Token audience mismatch")
    sub = claims.get("sub")
    email = claims.get("email")
    if not sub or not email:
        raise GoogleIdentityError("Token is missing subject or email")
    return GoogleIdentity(
        google_id=str(sub),
        email=str(email),
        name=str(claims.get("name") or email),
        picture=claims.get("picture"),
    )
