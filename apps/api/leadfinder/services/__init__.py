"""Business logic: search pipeline, conversations, saved contacts, follow-ups."""

from .errors import (
    PipelineStage,
    PipelineError,
    NotFoundError,
    SearchServiceError,
    FollowUpServiceError,
)
from .pipeline import SearchPipeline, PipelineResult, build_search_pipeline
from .followup import FollowUpService

__all__ = [
    "PipelineStage",
    "PipelineError",
    "NotFoundError",
    "SearchServiceError",
    "FollowUpServiceError",
    "SearchPipeline",
    "PipelineResult",
    "build_search_pipeline",
    "FollowUpService",
]
