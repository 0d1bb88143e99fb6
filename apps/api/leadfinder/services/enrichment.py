"""Target profiles -> contacts, degrading to placeholder data instead of failing."""

import asyncio
import logging
import time

from leadfinder.core.constants import FALLBACK_DEFAULT_RELEVANCE, MOCK_DEFAULT_RELEVANCE
from leadfinder.providers.enrichment import (
    EnrichmentError,
    EnrichmentSubQueryError,
    RocketReachProvider,
)
from leadfinder.schemas.contact import Contact
from leadfinder.schemas.interpretation import InterpretationResult, TargetProfile

from .profile_normalizer import build_summary, normalize_profile

logger = logging.getLogger(__name__)


def _relevance(profile: TargetProfile, default: float) -> float:
    # A score of 0 counts as unscored
    return profile.relevance_score or default


def build_mock_contacts(profiles: list[TargetProfile]) -> list[Contact]:
    """One synthetic contact per profile, used when no provider key is configured."""
    stamp = int(time.time() * 1000)
    return [
        Contact(
            id=f"mock-{stamp}-{i}",
            name=p.name or f"Professional {i + 1}",
            title=p.role,
            company=p.company,
            location=p.location,
            industry=p.industry,
            emails=[f"professional{i + 1}@example.com"],
            phones=[f"+1-555-0{100 + i}"],
            linkedin_url=f"https://linkedin.com/in/professional{i + 1}",
            relevance_score=_relevance(p, MOCK_DEFAULT_RELEVANCE),
            summary=build_summary(p.role, p.company, p.location, p.industry),
        )
        for i, p in enumerate(profiles)
    ]


def build_fallback_contacts(profiles: list[TargetProfile]) -> list[Contact]:
    """Placeholders with no contact channels, used when the provider is unusable."""
    stamp = int(time.time() * 1000)
    return [
        Contact(
            id=f"fallback-{stamp}-{i}",
            name=p.name or f"Professional {i + 1}",
            title=p.role,
            company=p.company,
            location=p.location,
            industry=p.industry,
            relevance_score=_relevance(p, FALLBACK_DEFAULT_RELEVANCE),
            summary=build_summary(p.role, p.company, p.location, p.industry),
        )
        for i, p in enumerate(profiles)
    ]


class EnrichmentClient:
    def __init__(self, provider: RocketReachProvider | None):
        self.provider = provider

    async def enrich(self, result: InterpretationResult) -> list[Contact]:
        profiles = result.target_profiles
        if self.provider is None:
            logger.warning("RocketReach not configured, returning %d mock contacts", len(profiles))
            return build_mock_contacts(profiles)

        try:
            return await self._search_all(profiles)
        except EnrichmentError as e:
            logger.error("Enrichment failed, returning fallback placeholders: %s", e)
            return build_fallback_contacts(profiles)

    async def _search_all(self, profiles: list[TargetProfile]) -> list[Contact]:
        # gather keeps submission order, so contacts stay grouped by profile
        outcomes = await asyncio.gather(
            *(self.provider.search_profiles(p) for p in profiles),
            return_exceptions=True,
        )
        contacts: list[Contact] = []
        for index, outcome in enumerate(outcomes):
            if isinstance(outcome, EnrichmentSubQueryError):
                logger.warning("RocketReach sub-query %d dropped: %s", index, outcome)
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            contacts.extend(normalize_profile(raw) for raw in outcome)
        return contacts
