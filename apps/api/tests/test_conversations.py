"""Conversation orchestration against an in-memory database."""
import pytest
from sqlalchemy import select

from leadfinder.db.models import Conversation, SearchHistory, User
from leadfinder.services import NotFoundError
from leadfinder.services import conversations as conversation_service
from leadfinder.services.composer import ERROR_ACTIONS, RESULT_ACTIONS

from tests.fakes import FakeLLM, FakePeopleSearch, interpretation_reply, make_pipeline, raw_profile

LONG_MESSAGE = (
    "Find me senior backend engineers in Berlin who have worked at fintech startups "
    "for at least five years"
)


async def history_rows(db, user_id):
    result = await db.execute(select(SearchHistory).where(SearchHistory.user_id == user_id))
    return result.scalars().all()


class TestCreate:
    @pytest.mark.asyncio
    async def test_seeded_with_welcome_turn(self, db_session, user):
        conv = await conversation_service.create_conversation(db_session, user.id)
        assert conv.title == "New Conversation"
        assert len(conv.messages) == 1
        assert conv.messages[0].role == "assistant"
        assert conv.messages[0].suggested_actions == conversation_service.WELCOME_ACTIONS
        assert conv.contact_count == 0
        assert conv.follow_up_count == 0


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_success_appends_two_turns(self, db_session, user, agents_pipeline):
        conv = await conversation_service.create_conversation(db_session, user.id)

        out = await conversation_service.send_message(
            db_session, user.id, conv.id, "Find real estate agents in Dubai", agents_pipeline
        )

        assert len(out.messages) == 3
        assert [m.role for m in out.messages] == ["assistant", "user", "assistant"]
        assert out.messages[1].content == "Find real estate agents in Dubai"
        reply = out.messages[2]
        assert len(reply.contacts) == 2
        assert reply.suggested_actions == RESULT_ACTIONS
        assert out.contact_count == 2
        assert out.title == "Find real estate agents in Dubai"

        rows = await history_rows(db_session, user.id)
        assert [(r.query, r.result_count) for r in rows] == [("Find real estate agents in Dubai", 2)]

        refreshed = await db_session.get(User, user.id)
        await db_session.refresh(refreshed)
        assert refreshed.api_calls_count == 1
        assert refreshed.last_api_call is not None

    @pytest.mark.asyncio
    async def test_failure_appends_error_turn(self, db_session, user, failing_pipeline):
        conv = await conversation_service.create_conversation(db_session, user.id)

        out = await conversation_service.send_message(
            db_session, user.id, conv.id, "agents in Dubai", failing_pipeline
        )

        assert len(out.messages) == 3
        reply = out.messages[2]
        assert reply.role == "assistant"
        assert reply.content.startswith("I encountered an issue while searching: The AI service is unavailable")
        assert reply.suggested_actions == ERROR_ACTIONS
        assert reply.contacts == []
        assert out.contact_count == 0
        assert await history_rows(db_session, user.id) == []

    @pytest.mark.asyncio
    async def test_long_first_message_sets_truncated_title(self, db_session, user, agents_pipeline):
        conv = await conversation_service.create_conversation(db_session, user.id)
        out = await conversation_service.send_message(
            db_session, user.id, conv.id, LONG_MESSAGE, agents_pipeline
        )
        assert out.title == LONG_MESSAGE[:57] + "..."

    @pytest.mark.asyncio
    async def test_title_only_from_first_user_turn(self, db_session, user):
        reply = interpretation_reply("agents", {"role": "Agent"})
        pipeline = make_pipeline(FakeLLM(reply), FakePeopleSearch([], []))
        conv = await conversation_service.create_conversation(db_session, user.id)
        await conversation_service.send_message(db_session, user.id, conv.id, "first", pipeline)
        out = await conversation_service.send_message(db_session, user.id, conv.id, "second", pipeline)
        assert out.title == "first"
        assert len(out.messages) == 5

    @pytest.mark.asyncio
    async def test_empty_result_keeps_contact_count(self, db_session, user):
        reply = interpretation_reply(
            "underwater basket weavers in Antarctica",
            {"role": "basket weaver", "location": "Antarctica"},
        )
        pipeline = make_pipeline(FakeLLM(reply), FakePeopleSearch([]))
        conv = await conversation_service.create_conversation(db_session, user.id)

        out = await conversation_service.send_message(
            db_session, user.id, conv.id, "underwater basket weavers", pipeline
        )

        assert out.contact_count == 0
        assert "underwater basket weavers in Antarctica" in out.messages[-1].content
        assert "refining your search" in out.messages[-1].content
        rows = await history_rows(db_session, user.id)
        assert rows[0].result_count == 0

    @pytest.mark.asyncio
    async def test_contact_count_accumulates(self, db_session, user):
        reply = interpretation_reply("agents", {"role": "Agent"})
        pipeline = make_pipeline(FakeLLM(reply), FakePeopleSearch([raw_profile(1)], [raw_profile(2), raw_profile(3)]))
        conv = await conversation_service.create_conversation(db_session, user.id)
        await conversation_service.send_message(db_session, user.id, conv.id, "one", pipeline)
        out = await conversation_service.send_message(db_session, user.id, conv.id, "two", pipeline)
        assert out.contact_count == 3

    @pytest.mark.asyncio
    async def test_follow_up_sees_earlier_turns(self, db_session, user):
        reply = interpretation_reply("agents", {"role": "Agent"})
        llm = FakeLLM(reply)
        pipeline = make_pipeline(llm, FakePeopleSearch([], []))
        conv = await conversation_service.create_conversation(db_session, user.id)
        await conversation_service.send_message(db_session, user.id, conv.id, "agents in Dubai", pipeline)
        await conversation_service.send_message(db_session, user.id, conv.id, "now Abu Dhabi", pipeline)
        second_input = llm.calls[1]["input"]
        assert "user: agents in Dubai" in second_input
        assert second_input.endswith("Current user query: now Abu Dhabi")

    @pytest.mark.asyncio
    async def test_other_users_conversation_not_found(self, db_session, user, other_user, agents_pipeline):
        conv = await conversation_service.create_conversation(db_session, user.id)
        with pytest.raises(NotFoundError):
            await conversation_service.send_message(
                db_session, other_user.id, conv.id, "hi", agents_pipeline
            )
        own = await conversation_service.get_conversation(db_session, user.id, conv.id)
        assert len(own.messages) == 1


    @pytest.mark.asyncio
    async def test_oversized_score_still_completes_turn(self, db_session, user):
        reply = interpretation_reply("agents", {"role": "Agent", "relevanceScore": 10**400})
        pipeline = make_pipeline(FakeLLM(reply), FakePeopleSearch([raw_profile(1)]))
        conv = await conversation_service.create_conversation(db_session, user.id)

        out = await conversation_service.send_message(db_session, user.id, conv.id, "agents", pipeline)

        assert len(out.messages) == 3
        assert out.contact_count == 1

    @pytest.mark.asyncio
    async def test_unexpected_interpretation_error_becomes_error_turn(self, db_session, user):
        user_id = user.id
        pipeline = make_pipeline(FakeLLM(error=RuntimeError("bug")))
        conv = await conversation_service.create_conversation(db_session, user_id)

        out = await conversation_service.send_message(db_session, user_id, conv.id, "agents", pipeline)

        assert [m.role for m in out.messages] == ["assistant", "user", "assistant"]
        assert out.messages[2].suggested_actions == ERROR_ACTIONS
        refreshed = await db_session.get(User, user_id)
        await db_session.refresh(refreshed)
        assert refreshed.api_calls_count == 1


class TestListAndLifecycle:
    @pytest.mark.asyncio
    async def test_list_hides_archived_and_other_users(self, db_session, user, other_user):
        a = await conversation_service.create_conversation(db_session, user.id)
        b = await conversation_service.create_conversation(db_session, user.id)
        await conversation_service.create_conversation(db_session, other_user.id)
        assert await conversation_service.archive_conversation(db_session, user.id, a.id) is True

        items = await conversation_service.list_conversations(db_session, user.id)

        assert [i.id for i in items] == [b.id]
        assert items[0].last_message.startswith("Hello!")
        assert len(items[0].last_message) <= 100

    @pytest.mark.asyncio
    async def test_get_missing(self, db_session, user):
        with pytest.raises(NotFoundError) as exc:
            await conversation_service.get_conversation(db_session, user.id, "missing")
        assert str(exc.value) == "Conversation not found"

    @pytest.mark.asyncio
    async def test_delete_scoped_to_owner(self, db_session, user, other_user):
        conv = await conversation_service.create_conversation(db_session, user.id)
        assert await conversation_service.delete_conversation(db_session, other_user.id, conv.id) is False
        assert await conversation_service.archive_conversation(db_session, other_user.id, conv.id) is False
        assert await conversation_service.delete_conversation(db_session, user.id, conv.id) is True
        remaining = await db_session.execute(select(Conversation).where(Conversation.id == conv.id))
        assert remaining.scalar_one_or_none() is None

    @pytest.mark.asyncio
    async def test_increment_follow_up_count(self, db_session, user, other_user):
        user_id, other_id = user.id, other_user.id
        conv = await conversation_service.create_conversation(db_session, user_id)
        assert await conversation_service.increment_follow_up_count(db_session, other_id, conv.id) is False
        assert await conversation_service.increment_follow_up_count(db_session, user_id, conv.id) is True
        db_session.expire_all()
        out = await conversation_service.get_conversation(db_session, user_id, conv.id)
        assert out.follow_up_count == 1
