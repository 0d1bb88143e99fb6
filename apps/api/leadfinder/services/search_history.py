"""One-line search history records, scoped per user."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.core import LIST_LIMIT
from leadfinder.db.models import SearchHistory
from leadfinder.schemas import SearchHistoryItem


async def record_search(db: AsyncSession, user_id: str, query: str, result_count: int) -> None:
    db.add(SearchHistory(user_id=user_id, query=query, result_count=result_count))
    await db.flush()


async def list_history(db: AsyncSession, user_id: str, limit: int = LIST_LIMIT) -> list[SearchHistoryItem]:
    """Newest first."""
    result = await db.execute(
        select(SearchHistory)
        .where(SearchHistory.user_id == user_id)
        .order_by(SearchHistory.timestamp.desc())
        .limit(limit)
    )
    return [
        SearchHistoryItem(
            id=row.id,
            query=row.query,
            result_count=row.result_count or 0,
            timestamp=row.timestamp,
        )
        for row in result.scalars().all()
    ]


async def delete_history(db: AsyncSession, user_id: str, history_id: str) -> bool:
    """Delete one record owned by user_id. False when missing or owned by someone else."""
    result = await db.execute(
        delete(SearchHistory).where(
            SearchHistory.id == history_id,
            SearchHistory.user_id == user_id,
        )
    )
    return result.rowcount > 0


async def clear_history(db: AsyncSession, user_id: str) -> bool:
    await db.execute(delete(SearchHistory).where(SearchHistory.user_id == user_id))
    return True
