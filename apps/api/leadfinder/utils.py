"""Shared utilities."""

import re

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def strip_json_from_response(raw: str | None) -> str:
    """Strip markdown/code fences from an LLM response and return JSON text."""
    s = (raw or "").strip()
    if "```" not in s:
        return s
    if s.startswith("```"):
        return _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", s)).strip()
    for part in s.split("```"):
        p = part.strip()
        if p.lower().startswith("json"):
            p = p[4:].strip()
        if p.startswith("{"):
            return p
    return s


def truncate(text: str | None, max_len: int, ellipsis: str = "") -> str:
    """Cut text to max_len characters; when ellipsis is given the result still fits max_len."""
    s = text or ""
    if len(s) <= max_len:
        return s
    if not ellipsis:
        return s[:max_len]
    return s[: max_len - len(ellipsis)] + ellipsis
