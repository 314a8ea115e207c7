"""
User notes router
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from evalhub.database import get_db
from evalhub.models.user import User
from evalhub.schemas.common import DataResponse, ListResponse, MessageResponse
from evalhub.schemas.user_data import UserDataCreate, UserDataUpdate, UserDataResponse
from evalhub.services import user_data as note_service
from evalhub.services.access import authorize_self_or_admin
from evalhub.services.auth import get_current_active_admin, get_current_user

router = APIRouter(prefix="/user-data", tags=["User Data"])


@router.get("", response_model=ListResponse[UserDataResponse])
async def list_all_notes(
    department_id: Optional[int] = Query(None, alias="departmentId"),
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    List all notes (admin only)
    """
    notes = note_service.list_notes(db, department_id=department_id)
    return ListResponse(count=len(notes), data=[UserDataResponse.model_validate(n) for n in notes])


@router.post("", response_model=DataResponse[UserDataResponse], status_code=status.HTTP_201_CREATED)
async def create_note(
    note_data: UserDataCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a note owned by the current user
    """
    note = note_service.create_note(db, current_user, note_data)
    return DataResponse(data=UserDataResponse.model_validate(note))


@router.get("/{user_id}", response_model=ListResponse[UserDataResponse])
async def list_user_notes(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Notes of one user (self or admin)
    """
    authorize_self_or_admin(current_user, user_id, "Not authorized to access this user data")
    notes = note_service.notes_for_user(db, user_id)
    return ListResponse(count=len(notes), data=[UserDataResponse.model_validate(n) for n in notes])


@router.put("/{note_id}", response_model=DataResponse[UserDataResponse])
async def update_note(
    note_id: int,
    note_data: UserDataUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update a note (owner or admin)
    """
    note = note_service.get_note(db, note_id)
    authorize_self_or_admin(current_user, note.user_id, "Not authorized to update this user data")
    note = note_service.update_note(db, note, note_data)
    return DataResponse(data=UserDataResponse.model_validate(note))


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a note (owner or admin)
    """
    note = note_service.get_note(db, note_id)
    authorize_self_or_admin(current_user, note.user_id, "Not authorized to delete this user data")
    note_service.delete_note(db, note)
    return MessageResponse(message="User data deleted successfully")
