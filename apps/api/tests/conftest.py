"""Shared fixtures: in-memory SQLite database, fake pipelines, ASGI client.

The app's own engine points at Postgres; tests never touch it. Every test gets
a fresh aiosqlite database, and HTTP tests override get_db / get_current_user
so no network or Postgres is needed.
"""
import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from leadfinder.db.session import Base
from leadfinder.providers import LLMServiceError

from tests.fakes import AGENTS_REPLY, FakeLLM, FakePeopleSearch, create_user, make_pipeline, raw_profile

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Pipelines
# ---------------------------------------------------------------------------

@pytest.fixture
def agents_pipeline():
    """Interpretation -> one profile; provider returns two people."""
    return make_pipeline(FakeLLM(AGENTS_REPLY), FakePeopleSearch([raw_profile(1), raw_profile(2)]))


@pytest.fixture
def failing_pipeline():
    return make_pipeline(FakeLLM(error=LLMServiceError("The AI service is unavailable right now")))


# ---------------------------------------------------------------------------
# Database: in-memory async SQLite
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def async_engine():
    """Create a fresh in-memory SQLite engine for each test."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine):
    TestSession = async_sessionmaker(
        async_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with TestSession() as session:
        yield session


@pytest_asyncio.fixture
async def user(db_session):
    return await create_user(db_session, "g-alice", "alice@acme.io")


@pytest_asyncio.fixture
async def other_user(db_session):
    return await create_user(db_session, "g-bob", "bob@acme.io")


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture
def app_overrides(db_session, user):
    """Dependency overrides for the app; tests add get_search_pipeline etc. as needed."""
    from leadfinder.core import limiter
    from leadfinder.dependencies import get_current_user, get_db
    from leadfinder.main import app

    async def _get_db():
        yield db_session

    async def _get_current_user():
        return user

    limiter.enabled = False
    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_current_user] = _get_current_user
    yield app.dependency_overrides
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest_asyncio.fixture
async def client(app_overrides):
    from leadfinder.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
