"""Provider profile record -> canonical Contact.

RocketReach payloads come in more than one shape (current and legacy field
names, contact channels as strings or as objects). Each output attribute has an
ordered list of source fields; the first non-empty one wins. Pure: no I/O and
no failure mode; id synthesis is the only non-deterministic step.
"""

import math
import secrets
import time
from typing import Any, Iterable

from leadfinder.core.constants import PROVIDER_DEFAULT_RELEVANCE
from leadfinder.schemas.contact import Contact

TITLE_FIELDS = ("current_title", "title")
COMPANY_FIELDS = ("current_employer", "employer")
LINKEDIN_FIELDS = ("linkedin_url", "li_url")
IMAGE_FIELDS = ("profile_pic", "photo_url")
EMAIL_LIST_FIELDS = ("emails", "telesign_emails")
PHONE_LIST_FIELDS = ("phones", "telesign_phones")
LOCATION_PART_FIELDS = ("city", "region", "country")

# Keys tried, in order, when a channel entry is an object
EMAIL_VALUE_KEYS = ("email", "value")
PHONE_VALUE_KEYS = ("number", "value", "raw_number")


def _str(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value).strip()


def _first(raw: dict[str, Any], fields: Iterable[str]) -> str:
    for field in fields:
        value = _str(raw.get(field))
        if value:
            return value
    return ""


def _first_list(raw: dict[str, Any], fields: Iterable[str]) -> list:
    for field in fields:
        value = raw.get(field)
        if isinstance(value, list) and value:
            return value
    return []


def extract_string_list(items: Any, keys: Iterable[str]) -> list[str]:
    """Unwrap a channel list whose entries are strings or objects; drop anything else.

    Source order is preserved and empty strings are excluded.
    """
    if not isinstance(items, list):
        return []
    keys = tuple(keys)
    out: list[str] = []
    for item in items:
        value: Any = None
        if isinstance(item, str):
            value = item
        elif isinstance(item, dict):
            for key in keys:
                if item.get(key):
                    value = item[key]
                    break
        if isinstance(value, str) and value.strip():
            out.append(value.strip())
    return out


def resolve_name(raw: dict[str, Any]) -> str:
    name = _str(raw.get("name"))
    if name:
        return name
    parts = [_str(raw.get("first_name")), _str(raw.get("last_name"))]
    return " ".join(p for p in parts if p)


def resolve_location(raw: dict[str, Any]) -> str:
    location = _str(raw.get("location"))
    if location:
        return location
    return ", ".join(p for p in (_str(raw.get(f)) for f in LOCATION_PART_FIELDS) if p)


def resolve_relevance(raw: dict[str, Any], default: float = PROVIDER_DEFAULT_RELEVANCE) -> float:
    value = raw.get("relevance")
    if value is None or isinstance(value, bool):
        return default
    try:
        score = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return score if math.isfinite(score) else default


def synthesize_id(prefix: str = "rr") -> str:
    """Unique within a process run: millisecond clock plus random suffix."""
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def build_summary(title: str, company: str, location: str, industry: str) -> str:
    parts = [title or "Professional"]
    if company:
        parts.append(f"at {company}")
    if location:
        parts.append(f"in {location}")
    if industry:
        parts.append(f"| {industry}")
    return " ".join(parts)


def normalize_profile(raw: dict[str, Any]) -> Contact:
    """Map one raw provider profile to a Contact (always succeeds)."""
    if not isinstance(raw, dict):
        raw = {}
    title = _first(raw, TITLE_FIELDS)
    company = _first(raw, COMPANY_FIELDS)
    location = resolve_location(raw)
    industry = _str(raw.get("industry"))
    provider_id = _str(raw.get("id"))
    return Contact(
        id=provider_id or synthesize_id(),
        name=resolve_name(raw),
        first_name=_str(raw.get("first_name")),
        last_name=_str(raw.get("last_name")),
        title=title,
        company=company,
        location=location,
        industry=industry,
        emails=extract_string_list(_first_list(raw, EMAIL_LIST_FIELDS), EMAIL_VALUE_KEYS),
        phones=extract_string_list(_first_list(raw, PHONE_LIST_FIELDS), PHONE_VALUE_KEYS),
        linkedin_url=_first(raw, LINKEDIN_FIELDS),
        profile_image_url=_first(raw, IMAGE_FIELDS),
        relevance_score=resolve_relevance(raw),
        summary=build_summary(title, company, location, industry),
    )
