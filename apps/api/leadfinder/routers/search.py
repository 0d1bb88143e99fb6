from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.core import get_settings, limiter
from leadfinder.db.models import User
from leadfinder.dependencies import get_current_user, get_db, get_search_pipeline
from leadfinder.schemas import SearchHistoryItem, SearchRequest, SearchResultResponse, SuccessResponse
from leadfinder.services import SearchPipeline, SearchServiceError
from leadfinder.services import search as search_service
from leadfinder.services import search_history

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResultResponse)
@limiter.limit(get_settings().search_rate_limit)
async def search(
    request: Request,
    body: SearchRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    pipeline: SearchPipeline = Depends(get_search_pipeline),
):
    try:
        return await search_service.search_contacts(db, current_user.id, body.query, pipeline)
    except SearchServiceError as e:
        raise HTTPException(status_code=500, detail=f"Search failed: {e.message}") from e


@router.get("/history", response_model=list[SearchHistoryItem])
async def get_history(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await search_history.list_history(db, current_user.id)


@router.delete("/history/{history_id}", response_model=SuccessResponse)
async def delete_history(
    history_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    success = await search_history.delete_history(db, current_user.id, history_id)
    return SuccessResponse(success=success)


@router.delete("/history", response_model=SuccessResponse)
async def clear_history(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    success = await search_history.clear_history(db, current_user.id)
    return SuccessResponse(success=success)
