import logging
from typing import Any

import httpx

from leadfinder.core.config import Settings
from leadfinder.schemas.interpretation import TargetProfile

logger = logging.getLogger(__name__)


class EnrichmentError(Exception):
    """Raised when the people-search provider cannot be used at all."""


class EnrichmentSubQueryError(EnrichmentError):
    """One provider sub-query failed; the caller drops it and moves on."""


class EnrichmentConfigError(EnrichmentError):
    """The provider rejected our credentials; every sub-query would fail the same way."""


def build_search_query(profile: TargetProfile) -> dict[str, list[str]]:
    """Provider filters for one target profile; absent criteria are omitted."""
    query: dict[str, list[str]] = {}
    if profile.company:
        query["current_employer"] = [profile.company]
    if profile.role:
        query["current_title"] = [profile.role]
    if profile.location:
        query["location"] = [profile.location]
    return query


class RocketReachProvider:
    """RocketReach people search. One POST per target profile; no retries."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.rocketreach.co/v2/api",
        page_size: int = 10,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self.timeout = timeout
        self._transport = transport

    async def search_profiles(self, profile: TargetProfile) -> list[dict[str, Any]]:
        """Raw provider profile records for one target profile."""
        body = {"query": build_search_query(profile), "page_size": self.page_size}
        headers = {"Api-Key": self.api_key, "Content-Type": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(f"{self.base_url}/search", json=body, headers=headers)
                r.raise_for_status()
                data = r.json()
        except httpx.TimeoutException as e:
            raise EnrichmentSubQueryError("People search timed out") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            body_text = getattr(e.response, "text", None) or ""
            if body_text:
                logger.warning("RocketReach error %s: %s", status, body_text[:500])
            if status in (401, 403):
                raise EnrichmentConfigError(f"People search rejected credentials ({status})") from e
            raise EnrichmentSubQueryError(f"People search returned {status}") from e
        except httpx.RequestError as e:
            raise EnrichmentSubQueryError("People search unavailable (connection error)") from e
        except ValueError as e:
            raise EnrichmentSubQueryError("People search returned unexpected response format") from e

        profiles = data.get("profiles") if isinstance(data, dict) else None
        if not isinstance(profiles, list):
            return []
        return [p for p in profiles if isinstance(p, dict)]


def get_enrichment_provider(settings: Settings) -> RocketReachProvider | None:
    """None when no API key is configured (callers fall back to synthetic contacts)."""
    if not settings.rocketreach_api_key:
        return None
    return RocketReachProvider(
        api_key=settings.rocketreach_api_key,
        base_url=settings.rocketreach_base_url,
        page_size=settings.enrichment_page_size,
        timeout=settings.enrichment_timeout_seconds,
    )
