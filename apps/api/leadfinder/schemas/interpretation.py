"""Shape of the interpretation model's JSON reply (one per pipeline run, never persisted)."""

import math
from typing import Any, Optional

from pydantic import BaseModel

from leadfinder.core.constants import MAX_TARGET_PROFILES


def _text(d: dict, key: str) -> str:
    v = d.get(key)
    if v is None:
        return ""
    return v.strip() if isinstance(v, str) else str(v).strip()


def _score_or_none(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        n = float(v)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(n):
        return None
    return max(0.0, min(100.0, n))


class TargetProfile(BaseModel):
    name: str = ""
    role: str = ""
    company: str = ""
    location: str = ""
    industry: str = ""
    relevance_score: Optional[float] = None

    @classmethod
    def from_llm_dict(cls, data: dict[str, Any]) -> "TargetProfile":
        return cls(
            name=_text(data, "name"),
            role=_text(data, "role"),
            company=_text(data, "company"),
            location=_text(data, "location"),
            industry=_text(data, "industry"),
            relevance_score=_score_or_none(data.get("relevanceScore", data.get("relevance_score"))),
        )


class InterpretationResult(BaseModel):
    interpretation: str = ""
    target_profiles: list[TargetProfile] = []
    search_strategy: str = ""

    @classmethod
    def from_llm_dict(cls, data: dict[str, Any]) -> "InterpretationResult":
        """Normalize model output (camelCase keys) to the internal shape.

        Raises ValueError when no usable target profile is present.
        """
        raw_profiles = data.get("targetProfiles", data.get("target_profiles"))
        if not isinstance(raw_profiles, list):
            raise ValueError("targetProfiles must be a list")
        profiles = [TargetProfile.from_llm_dict(p) for p in raw_profiles if isinstance(p, dict)]
        if not profiles:
            raise ValueError("targetProfiles is empty")
        return cls(
            interpretation=_text(data, "interpretation"),
            target_profiles=profiles[:MAX_TARGET_PROFILES],
            search_strategy=_text(data, "searchStrategy") or _text(data, "search_strategy"),
        )
