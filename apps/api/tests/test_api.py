"""HTTP surface: routing, status codes, and response shapes."""
import pytest

from leadfinder.dependencies import get_search_pipeline
from leadfinder.providers import GoogleIdentity, GoogleIdentityError


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


class TestConversationsApi:
    @pytest.mark.asyncio
    async def test_create_send_get(self, client, app_overrides, agents_pipeline):
        app_overrides[get_search_pipeline] = lambda: agents_pipeline

        created = await client.post("/conversations")
        assert created.status_code == 200
        conv_id = created.json()["id"]

        sent = await client.post(f"/conversations/{conv_id}/messages", json={"message": "agents in Dubai"})
        assert sent.status_code == 200
        body = sent.json()
        assert len(body["messages"]) == 3
        assert body["contact_count"] == 2
        assert body["messages"][2]["contacts"][0]["emails"] == ["person1@acme.io"]

        listed = await client.get("/conversations")
        assert [c["id"] for c in listed.json()] == [conv_id]

        got = await client.get(f"/conversations/{conv_id}")
        assert got.json()["title"] == "agents in Dubai"

    @pytest.mark.asyncio
    async def test_failed_turn_is_still_200(self, client, app_overrides, failing_pipeline):
        app_overrides[get_search_pipeline] = lambda: failing_pipeline
        conv_id = (await client.post("/conversations")).json()["id"]

        sent = await client.post(f"/conversations/{conv_id}/messages", json={"message": "agents"})

        assert sent.status_code == 200
        last = sent.json()["messages"][-1]
        assert last["role"] == "assistant"
        assert last["suggested_actions"] == ["Try again", "Rephrase your search"]

    @pytest.mark.asyncio
    async def test_missing_conversation_is_404(self, client, app_overrides, agents_pipeline):
        app_overrides[get_search_pipeline] = lambda: agents_pipeline
        r = await client.get("/conversations/does-not-exist")
        assert r.status_code == 404
        assert r.json() == {"detail": "Conversation not found"}
        r = await client.post("/conversations/does-not-exist/messages", json={"message": "hi"})
        assert r.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_message_rejected(self, client):
        conv_id = (await client.post("/conversations")).json()["id"]
        r = await client.post(f"/conversations/{conv_id}/messages", json={"message": ""})
        assert r.status_code == 422

    @pytest.mark.asyncio
    async def test_archive_and_delete(self, client):
        conv_id = (await client.post("/conversations")).json()["id"]
        assert (await client.patch(f"/conversations/{conv_id}/archive")).json() == {"success": True}
        assert (await client.get("/conversations")).json() == []
        assert (await client.delete(f"/conversations/{conv_id}")).json() == {"success": True}
        assert (await client.delete(f"/conversations/{conv_id}")).json() == {"success": False}


class TestSearchApi:
    @pytest.mark.asyncio
    async def test_search_and_history(self, client, app_overrides, agents_pipeline):
        app_overrides[get_search_pipeline] = lambda: agents_pipeline

        r = await client.post("/search", json={"query": "agents in Dubai"})
        assert r.status_code == 200
        assert r.json()["total_results"] == 2

        history = (await client.get("/search/history")).json()
        assert [h["query"] for h in history] == ["agents in Dubai"]
        legacy = (await client.get("/conversations/search/history")).json()
        assert legacy == history

        r = await client.delete(f"/search/history/{history[0]['id']}")
        assert r.json() == {"success": True}
        assert (await client.delete("/search/history")).json() == {"success": True}

    @pytest.mark.asyncio
    async def test_search_failure_is_500(self, client, app_overrides, failing_pipeline):
        app_overrides[get_search_pipeline] = lambda: failing_pipeline
        r = await client.post("/search", json={"query": "agents"})
        assert r.status_code == 500
        assert r.json()["detail"] == "Search failed: The AI service is unavailable right now"


class TestContactsAndUsersApi:
    @pytest.mark.asyncio
    async def test_contact_lifecycle(self, client):
        r = await client.post("/contacts", json={"contact_id": "rr-1", "name": "Person 1"})
        assert r.status_code == 200
        assert (await client.get("/contacts/rr-1")).json()["name"] == "Person 1"
        assert len((await client.get("/contacts")).json()) == 1
        assert (await client.delete("/contacts/rr-1")).json() == {"success": True}
        assert (await client.get("/contacts/rr-1")).status_code == 404

    @pytest.mark.asyncio
    async def test_me_and_stats(self, client, app_overrides, agents_pipeline):
        app_overrides[get_search_pipeline] = lambda: agents_pipeline
        me = (await client.get("/users/me")).json()
        assert me["email"] == "alice@acme.io"
        assert me["subscription_tier"] == "free"

        await client.post("/search", json={"query": "agents"})
        stats = (await client.get("/users/me/stats")).json()
        assert stats["count"] == 1
        assert stats["last_call"] is not None

        updated = await client.put("/users/me", json={"name": "Alice A."})
        assert updated.json()["name"] == "Alice A."


class TestAuth:
    @pytest.mark.asyncio
    async def test_requires_bearer_token(self, db_session):
        import httpx

        from leadfinder.db.session import get_db
        from leadfinder.main import app

        async def _get_db():
            yield db_session

        app.dependency_overrides[get_db] = _get_db
        try:
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
                assert (await c.get("/conversations")).status_code == 401
                r = await c.get("/conversations", headers={"Authorization": "Bearer junk"})
                assert r.status_code == 401
        finally:
            app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_google_login_issues_token(self, client, monkeypatch):
        async def fake_verify(id_token, client_id, transport=None):
            assert id_token == "google-token"
            return GoogleIdentity(google_id="g-new", email="new@acme.io", name="New Person")

        monkeypatch.setattr("leadfinder.services.auth.verify_google_id_token", fake_verify)
        r = await client.post("/auth/google", json={"id_token": "google-token"})
        assert r.status_code == 200
        body = r.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["email"] == "new@acme.io"

        from leadfinder.core import decode_access_token

        assert decode_access_token(body["access_token"]) == body["user"]["id"]

    @pytest.mark.asyncio
    async def test_google_login_rejected(self, client, monkeypatch):
        async def fake_verify(id_token, client_id, transport=None):
            raise GoogleIdentityError("Google rejected the ID token")

        monkeypatch.setattr("leadfinder.services.auth.verify_google_id_token", fake_verify)
        r = await client.post("/auth/google", json={"id_token": "bad"})
        assert r.status_code == 401
        assert r.json()["detail"] == "Invalid Google authentication"
