"""Single-shot search: one query in, contacts + summary out, no transcript.

Pipeline failures propagate as SearchServiceError (there is no transcript to
absorb them). A history record is written only when the pipeline succeeds.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.schemas import SearchResultResponse

from .errors import PipelineError, SearchServiceError
from .pipeline import SearchPipeline
from .search_history import record_search
from .users import increment_api_call_count

logger = logging.getLogger(__name__)


async def search_contacts(
    db: AsyncSession,
    user_id: str,
    query: str,
    pipeline: SearchPipeline,
) -> SearchResultResponse:
    await increment_api_call_count(db, user_id)
    try:
        result = await pipeline.run(query)
    except PipelineError as e:
        logger.warning("Single-shot search failed at %s: %s", e.stage.value, e.message)
        raise SearchServiceError(e.message, e.stage) from e

    await record_search(db, user_id, query, len(result.contacts))
    return SearchResultResponse(
        contacts=result.contacts,
        message=result.message,
        total_results=len(result.contacts),
    )
