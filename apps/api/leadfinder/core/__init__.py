"""Core configuration, auth, and shared infrastructure."""

from leadfinder.core.config import Settings, get_settings
from leadfinder.core.constants import LIST_LIMIT, TITLE_MAX_LENGTH
from leadfinder.core.auth import create_access_token, decode_access_token
from leadfinder.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "LIST_LIMIT",
    "TITLE_MAX_LENGTH",
    "create_access_token",
    "decode_access_token",
    "limiter",
]
