from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from leadfinder.db.models import User
from leadfinder.dependencies import get_current_user, get_db
from leadfinder.schemas import Contact, SaveContactRequest, SuccessResponse
from leadfinder.services import contacts as contact_service

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post("", response_model=Contact)
async def save_contact(
    body: SaveContactRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await contact_service.save_contact(db, current_user.id, body)


@router.get("", response_model=list[Contact])
async def list_contacts(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await contact_service.list_saved_contacts(db, current_user.id)


@router.get("/{contact_id}", response_model=Contact)
async def get_contact(
    contact_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await contact_service.get_saved_contact(db, current_user.id, contact_id)


@router.delete("/{contact_id}", response_model=SuccessResponse)
async def delete_contact(
    contact_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    success = await contact_service.delete_saved_contact(db, current_user.id, contact_id)
    return SuccessResponse(success=success)
