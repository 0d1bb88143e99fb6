from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from leadfinder.core.auth import decode_access_token

_BEARER_PREFIX = "bearer "


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization") or ""
    if not header.lower().startswith(_BEARER_PREFIX):
        return None
    return header[len(_BEARER_PREFIX):].strip() or None


def rate_limit_key(request: Request) -> str:
    """Signed-in callers share one budget across devices; anonymous callers are keyed by address."""
    token = _bearer_token(request)
    user_id = decode_access_token(token) if token else None
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


# In-process storage: limits are per API instance
limiter = Limiter(key_func=rate_limit_key)
