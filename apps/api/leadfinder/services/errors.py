"""Pipeline stage and service error types shared by search, conversations and follow-ups."""

from enum import Enum
from typing import Optional


class PipelineStage(str, Enum):
    """Pipeline stage identifiers for error reporting."""
    INTERPRET = "interpret"
    ENRICH = "enrich"
    COMPOSE = "compose"
    PERSIST = "persist"


class PipelineError(Exception):
    """Pipeline error with stage context. message is safe to show to the user."""
    def __init__(self, stage: PipelineStage, message: str, cause: Optional[Exception] = None):
        self.stage = stage
        self.message = message
        self.cause = cause
        super().__init__(f"[{stage.value}] {message}")


class NotFoundError(Exception):
    """Record missing or owned by someone else (the two are indistinguishable to callers)."""
    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class SearchServiceError(Exception):
    """Single-shot search failed; carries the failing stage's message."""
    def __init__(self, message: str, stage: Optional[PipelineStage] = None):
        self.message = message
        self.stage = stage
        super().__init__(message)


class FollowUpServiceError(Exception):
    """Follow-up draft could not be generated."""
