"""
Users management router
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from evalhub.database import get_db
from evalhub.models.user import User
from evalhub.schemas.common import DataResponse, ListResponse, MessageResponse
from evalhub.schemas.user import UserCreate, UserUpdate, UserResponse
from evalhub.services import users as user_service
from evalhub.services.access import authorize_role_change, authorize_self_or_admin
from evalhub.services.auth import get_current_active_admin, get_current_user
from evalhub.services.queries import query_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=ListResponse[UserResponse])
async def list_users(
    department_id: Optional[int] = Query(None, alias="departmentId"),
    year: Optional[int] = Query(None, ge=1970, le=9999),
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    List users (admin only), optionally by department and creation year
    """
    users = query_service.list_users(db, department_id=department_id, year=year)
    return ListResponse(count=len(users), data=[UserResponse.from_user(u) for u in users])


@router.post("", response_model=DataResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Create new user (admin only)
    """
    user = await run_in_threadpool(user_service.create_user, db, user_data)
    return DataResponse(data=UserResponse.from_user(user))


@router.get("/{user_id}", response_model=DataResponse[UserResponse])
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get user by ID (self or admin)
    """
    authorize_self_or_admin(current_user, user_id, "Not authorized to access this user data")
    user = user_service.get_user(db, user_id)
    return DataResponse(data=UserResponse.from_user(user))


@router.put("/{user_id}", response_model=DataResponse[UserResponse])
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update user (self or admin); only admins may change a role
    """
    authorize_self_or_admin(current_user, user_id, "Not authorized to update this user")
    user = user_service.get_user(db, user_id)
    authorize_role_change(current_user, user, user_data.role)

    user = await run_in_threadpool(user_service.update_user, db, user, user_data)
    return DataResponse(data=UserResponse.from_user(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete user (self or admin)
    """
    authorize_self_or_admin(current_user, user_id, "Not authorized to delete this user")
    user = user_service.get_user(db, user_id)
    user_service.delete_user(db, user)
    return MessageResponse(message="User deleted successfully")
