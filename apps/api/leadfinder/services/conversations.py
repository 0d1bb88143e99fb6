"""Multi-turn conversations: an append-only transcript around the search pipeline.

A send appends the user turn, runs interpret -> enrich -> compose, and appends
exactly one assistant turn. Pipeline failures become that assistant turn
instead of an error, so the conversation is always saved in a valid state.
All reads and writes are scoped by (user_id, conversation_id).
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.core import LIST_LIMIT, TITLE_MAX_LENGTH
from leadfinder.core.constants import DEFAULT_CONVERSATION_TITLE, LAST_MESSAGE_PREVIEW_LENGTH
from leadfinder.db.models import Conversation, ConversationMessage
from leadfinder.schemas import (
    Contact,
    ConversationListItem,
    ConversationMessageResponse,
    ConversationResponse,
)
from leadfinder.utils import truncate

from .composer import ERROR_ACTIONS, format_error
from .errors import NotFoundError, PipelineError
from .pipeline import SearchPipeline
from .search_history import record_search
from .users import increment_api_call_count

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hello! I'm your AI-powered lead finder. Tell me what kind of professionals or "
    "contacts you're looking for, and I'll search for verified contact details.\n\n"
    "For example, try:\n"
    '• "Find real estate agents in Dubai"\n'
    '• "Tech recruiters in London"\n'
    '• "Marketing agency founders in NYC"'
)
WELCOME_ACTIONS = [
    "Real estate agents in Dubai",
    "Tech recruiters in London",
    "Marketing agencies in NYC",
]


def derive_title(message: str) -> str:
    return truncate(message, TITLE_MAX_LENGTH, "...")


def message_to_response(m: ConversationMessage) -> ConversationMessageResponse:
    return ConversationMessageResponse(
        role=m.role,
        content=m.content,
        timestamp=m.timestamp,
        contacts=[Contact(**c) for c in (m.contacts or [])],
        suggested_actions=list(m.suggested_actions or []),
    )


def conversation_to_response(conv: Conversation) -> ConversationResponse:
    return ConversationResponse(
        id=conv.id,
        title=conv.title,
        messages=[message_to_response(m) for m in conv.messages],
        contact_count=conv.contact_count or 0,
        follow_up_count=conv.follow_up_count or 0,
        is_archived=bool(conv.is_archived),
        created_at=conv.created_at,
        updated_at=conv.updated_at,
    )


def conversation_to_list_item(conv: Conversation) -> ConversationListItem:
    last = conv.messages[-1].content if conv.messages else ""
    return ConversationListItem(
        id=conv.id,
        title=conv.title,
        last_message=truncate(last, LAST_MESSAGE_PREVIEW_LENGTH),
        contact_count=conv.contact_count or 0,
        follow_up_count=conv.follow_up_count or 0,
        created_at=conv.created_at,
        updated_at=conv.updated_at,
    )


def _append(
    conv: Conversation,
    role: str,
    content: str,
    contacts: list[Contact] | None = None,
    actions: list[str] | None = None,
) -> ConversationMessage:
    message = ConversationMessage(
        position=len(conv.messages),
        role=role,
        content=content,
        contacts=[c.model_dump(mode="json") for c in (contacts or [])],
        suggested_actions=list(actions or []),
        timestamp=datetime.now(timezone.utc),
    )
    conv.messages.append(message)
    return message


async def _load_owned(db: AsyncSession, user_id: str, conversation_id: str) -> Conversation:
    result = await db.execute(
        select(Conversation).where(
            Conversation.id == conversation_id,
            Conversation.user_id == user_id,
        )
    )
    conv = result.scalar_one_or_none()
    if conv is None:
        raise NotFoundError("Conversation")
    return conv


async def _increment(db: AsyncSession, conv: Conversation, column: str, amount: int) -> None:
    """Atomic counter bump in SQL, then reload just that attribute."""
    col = getattr(Conversation, column)
    await db.execute(
        update(Conversation)
        .where(Conversation.id == conv.id)
        .values({column: col + amount})
        .execution_options(synchronize_session=False)
    )
    await db.refresh(conv, attribute_names=[column])


async def create_conversation(db: AsyncSession, user_id: str) -> ConversationResponse:
    conv = Conversation(user_id=user_id, title=DEFAULT_CONVERSATION_TITLE, messages=[])
    _append(conv, ConversationMessage.ASSISTANT, WELCOME_MESSAGE, actions=WELCOME_ACTIONS)
    db.add(conv)
    await db.flush()
    return conversation_to_response(conv)


async def send_message(
    db: AsyncSession,
    user_id: str,
    conversation_id: str,
    message: str,
    pipeline: SearchPipeline,
) -> ConversationResponse:
    """Append one user turn and one assistant turn; never raises for pipeline failures."""
    conv = await _load_owned(db, user_id, conversation_id)

    _append(conv, ConversationMessage.USER, message)
    user_turns = sum(1 for m in conv.messages if m.role == ConversationMessage.USER)
    if user_turns == 1:
        conv.title = derive_title(message)
    conv.updated_at = datetime.now(timezone.utc)

    # Charged before interpretation: the attempt counts even if the pipeline fails
    await increment_api_call_count(db, user_id)

    history = [{"role": m.role, "content": m.content} for m in conv.messages]
    try:
        result = await pipeline.run(message, history)
    except PipelineError as e:
        logger.warning(
            "Conversation %s turn failed at %s: %s", conv.id, e.stage.value, e.message
        )
        _append(conv, ConversationMessage.ASSISTANT, format_error(e.message), actions=ERROR_ACTIONS)
        await db.flush()
        return conversation_to_response(conv)

    logger.info(
        "Conversation %s turn ok | interpretation=%r contacts=%d",
        conv.id,
        result.interpretation.interpretation,
        len(result.contacts),
    )
    _append(
        conv,
        ConversationMessage.ASSISTANT,
        result.message,
        contacts=result.contacts,
        actions=result.suggested_actions,
    )
    await db.flush()
    if result.contacts:
        await _increment(db, conv, "contact_count", len(result.contacts))
    await record_search(db, user_id, message, len(result.contacts))
    return conversation_to_response(conv)


async def list_conversations(db: AsyncSession, user_id: str) -> list[ConversationListItem]:
    """Non-archived conversations, most recently updated first."""
    result = await db.execute(
        select(Conversation)
        .where(Conversation.user_id == user_id, Conversation.is_archived.is_(False))
        .order_by(Conversation.updated_at.desc())
        .limit(LIST_LIMIT)
    )
    return [conversation_to_list_item(c) for c in result.scalars().all()]


async def get_conversation(db: AsyncSession, user_id: str, conversation_id: str) -> ConversationResponse:
    conv = await _load_owned(db, user_id, conversation_id)
    return conversation_to_response(conv)


async def delete_conversation(db: AsyncSession, user_id: str, conversation_id: str) -> bool:
    try:
        conv = await _load_owned(db, user_id, conversation_id)
    except NotFoundError:
        return False
    await db.delete(conv)
    await db.flush()
    return True


async def archive_conversation(db: AsyncSession, user_id: str, conversation_id: str) -> bool:
    result = await db.execute(
        update(Conversation)
        .where(Conversation.id == conversation_id, Conversation.user_id == user_id)
        .values(is_archived=True, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


async def increment_follow_up_count(db: AsyncSession, user_id: str, conversation_id: str) -> bool:
    """Bump follow_up_count on one of the caller's conversations. False when not theirs."""
    result = await db.execute(
        update(Conversation)
        .where(Conversation.id == conversation_id, Conversation.user_id == user_id)
        .values(follow_up_count=Conversation.follow_up_count + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0
