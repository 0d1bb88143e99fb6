"""Saved contacts: a user's kept copies of search results, unique per (user_id, contact_id)."""

from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.db.models import SavedContact
from leadfinder.schemas import Contact, SaveContactRequest

from .errors import NotFoundError

_COPIED_FIELDS = (
    "name",
    "first_name",
    "last_name",
    "title",
    "company",
    "location",
    "industry",
    "linkedin_url",
    "profile_image_url",
    "summary",
)


def saved_contact_to_contact(row: SavedContact) -> Contact:
    return Contact(
        id=row.contact_id,
        name=row.name or "",
        first_name=row.first_name or "",
        last_name=row.last_name or "",
        title=row.title or "",
        company=row.company or "",
        location=row.location or "",
        industry=row.industry or "",
        emails=list(row.emails or []),
        phones=list(row.phones or []),
        linkedin_url=row.linkedin_url or "",
        profile_image_url=row.profile_image_url or "",
        relevance_score=row.relevance_score or 0,
        summary=row.summary or "",
    )


async def _find(db: AsyncSession, user_id: str, contact_id: str) -> SavedContact | None:
    result = await db.execute(
        select(SavedContact)
        .where(
            SavedContact.user_id == user_id,
            SavedContact.contact_id == contact_id,
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


def _upsert_for(db: AsyncSession):
    # ON CONFLICT exists in both dialects we run on (Postgres in prod, SQLite in tests)
    if db.get_bind().dialect.name == "sqlite":
        return sqlite_insert
    return pg_insert


async def save_contact(db: AsyncSession, user_id: str, body: SaveContactRequest) -> Contact:
    """Insert or overwrite the caller's copy of a contact in one statement."""
    values = {field: getattr(body, field) for field in _COPIED_FIELDS}
    values["emails"] = list(body.emails)
    values["phones"] = list(body.phones)
    values["relevance_score"] = body.relevance_score or 0

    insert = _upsert_for(db)
    stmt = insert(SavedContact).values(user_id=user_id, contact_id=body.contact_id, **values)
    stmt = stmt.on_conflict_do_update(
        index_elements=[SavedContact.user_id, SavedContact.contact_id],
        set_={**values, "updated_at": datetime.now(timezone.utc)},
    )
    await db.execute(stmt)
    row = await _find(db, user_id, body.contact_id)
    return saved_contact_to_contact(row)


async def list_saved_contacts(db: AsyncSession, user_id: str) -> list[Contact]:
    result = await db.execute(
        select(SavedContact)
        .where(SavedContact.user_id == user_id)
        .order_by(SavedContact.created_at.desc())
    )
    return [saved_contact_to_contact(row) for row in result.scalars().all()]


async def get_saved_contact(db: AsyncSession, user_id: str, contact_id: str) -> Contact:
    row = await _find(db, user_id, contact_id)
    if row is None:
        raise NotFoundError("Contact")
    return saved_contact_to_contact(row)


async def delete_saved_contact(db: AsyncSession, user_id: str, contact_id: str) -> bool:
    result = await db.execute(
        delete(SavedContact).where(
            SavedContact.user_id == user_id,
            SavedContact.contact_id == contact_id,
        )
    )
    return result.rowcount > 0
