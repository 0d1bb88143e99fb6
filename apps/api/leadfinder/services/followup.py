"""Draft follow-up messages for saved contacts (EMAIL / WHATSAPP / SMS)."""

import json
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.core.config import Settings
from leadfinder.prompts import get_followup_input, get_followup_instructions
from leadfinder.providers import LLMServiceError, OpenAIResponsesProvider
from leadfinder.schemas import (
    BatchFollowUpItem,
    BatchFollowUpRequest,
    BatchFollowUpResponse,
    FollowUpChannel,
    FollowUpResponse,
    GenerateFollowUpRequest,
)
from leadfinder.utils import strip_json_from_response

from .contacts import get_saved_contact
from .conversations import increment_follow_up_count
from .errors import FollowUpServiceError

logger = logging.getLogger(__name__)


def parse_followup_reply(content: str, channel: FollowUpChannel) -> tuple[str | None, str]:
    """(subject, body) from the model reply; non-JSON replies become the body verbatim."""
    try:
        parsed = json.loads(strip_json_from_response(content))
    except ValueError:
        parsed = None
    if isinstance(parsed, dict) and isinstance(parsed.get("body"), str):
        subject = parsed.get("subject")
        return (subject if isinstance(subject, str) else None), parsed["body"]
    subject = "Follow-up" if channel == FollowUpChannel.EMAIL else None
    return subject, content


class FollowUpService:
    def __init__(self, llm: OpenAIResponsesProvider, settings: Settings):
        self.llm = llm
        self.settings = settings

    async def _draft(
        self,
        channel: FollowUpChannel,
        context: str,
        name: str,
        title: str | None,
        company: str | None,
    ) -> tuple[str | None, str]:
        content = await self.llm.complete(
            model=self.settings.followup_model,
            instructions=get_followup_instructions(channel.value),
            input=get_followup_input(channel.value, context, name, title, company),
            effort=self.settings.followup_reasoning_effort,
            timeout=self.settings.followup_timeout_seconds,
        )
        return parse_followup_reply(content, channel)

    async def generate(
        self,
        db: AsyncSession,
        user_id: str,
        body: GenerateFollowUpRequest,
    ) -> FollowUpResponse:
        contact = await get_saved_contact(db, user_id, body.contact_id)
        logger.info("FollowUp draft | channel=%s contact=%s", body.channel.value, contact.id)
        try:
            subject, text = await self._draft(
                body.channel, body.context, contact.name, contact.title, contact.company
            )
        except LLMServiceError as e:
            logger.error("FollowUp draft failed: %s", e)
            raise FollowUpServiceError("Failed to generate follow-up message") from e

        if body.conversation_id:
            await increment_follow_up_count(db, user_id, body.conversation_id)
        return FollowUpResponse(subject=subject, body=text, channel=body.channel)

    async def generate_batch(
        self,
        db: AsyncSession,
        user_id: str,
        body: BatchFollowUpRequest,
    ) -> BatchFollowUpResponse:
        """One draft per contact; a failed draft becomes a placeholder entry."""
        results: list[BatchFollowUpItem] = []
        drafted = 0
        for item in body.contacts:
            try:
                subject, text = await self._draft(
                    body.channel, body.context, item.contact_name, item.title, item.company
                )
                drafted += 1
            except LLMServiceError as e:
                logger.error("BatchFollowUp draft failed for %s: %s", item.contact_id, e)
                subject = None
                text = f"Unable to generate message for {item.contact_name}. Please try again."
            results.append(
                BatchFollowUpItem(
                    contact_id=item.contact_id,
                    contact_name=item.contact_name,
                    subject=subject,
                    body=text,
                    channel=body.channel,
                )
            )
        if body.conversation_id and drafted:
            await increment_follow_up_count(db, user_id, body.conversation_id)
        return BatchFollowUpResponse(results=results)
