from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from leadfinder.core.config import get_settings

_ASYNC_DRIVER = "postgresql+asyncpg://"


def to_async_url(url: str) -> str:
    """Point a Postgres URL (Heroku/Render style included) at the asyncpg driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return _ASYNC_DRIVER + url[len(prefix):]
    return url


def _engine_kwargs(url: str) -> dict:
    # Hosted Postgres closes idle connections; do not pool there
    if "render.com" in url:
        return {"poolclass": NullPool}
    return {}


DATABASE_URL = to_async_url(get_settings().database_url)

engine = create_async_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)
Base = declarative_base()


async def get_db():
    """One session per request: commit on success, roll back on any error."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
