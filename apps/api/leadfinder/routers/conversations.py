from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.core import get_settings, limiter
from leadfinder.db.models import User
from leadfinder.dependencies import get_current_user, get_db, get_search_pipeline
from leadfinder.schemas import (
    ConversationListItem,
    ConversationResponse,
    SearchHistoryItem,
    SendMessageRequest,
    SuccessResponse,
)
from leadfinder.services import SearchPipeline
from leadfinder.services import conversations as conversation_service
from leadfinder.services import search_history

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.post("", response_model=ConversationResponse)
async def create_conversation(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await conversation_service.create_conversation(db, current_user.id)


@router.get("", response_model=list[ConversationListItem])
async def list_conversations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await conversation_service.list_conversations(db, current_user.id)


# Search history (backward compat); declared before /{conversation_id} routes


@router.get("/search/history", response_model=list[SearchHistoryItem])
async def get_search_history(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await search_history.list_history(db, current_user.id)


@router.delete("/search/history/{history_id}", response_model=SuccessResponse)
async def delete_search_history(
    history_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    success = await search_history.delete_history(db, current_user.id, history_id)
    return SuccessResponse(success=success)


@router.delete("/search/history", response_model=SuccessResponse)
async def clear_search_history(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    success = await search_history.clear_history(db, current_user.id)
    return SuccessResponse(success=success)


@router.get("/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(
    conversation_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await conversation_service.get_conversation(db, current_user.id, conversation_id)


@router.post("/{conversation_id}/messages", response_model=ConversationResponse)
@limiter.limit(get_settings().conversation_rate_limit)
async def send_message(
    request: Request,
    conversation_id: str,
    body: SendMessageRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    pipeline: SearchPipeline = Depends(get_search_pipeline),
):
    return await conversation_service.send_message(
        db, current_user.id, conversation_id, body.message, pipeline
    )


@router.delete("/{conversation_id}", response_model=SuccessResponse)
async def delete_conversation(
    conversation_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    success = await conversation_service.delete_conversation(db, current_user.id, conversation_id)
    return SuccessResponse(success=success)


@router.patch("/{conversation_id}/archive", response_model=SuccessResponse)
async def archive_conversation(
    conversation_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    success = await conversation_service.archive_conversation(db, current_user.id, conversation_id)
    return SuccessResponse(success=success)
