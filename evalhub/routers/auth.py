"""
Authentication router
"""
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from evalhub.config import settings
from evalhub.database import get_db
from evalhub.errors import Forbidden, ValidationFailed
from evalhub.models.user import User, ROLE_ADMIN
from evalhub.schemas.common import DataResponse, MessageResponse
from evalhub.schemas.user import AuthData, PasswordChange, UserCreate, UserLogin, UserResponse
from evalhub.services import users as user_service
from evalhub.services.auth import (
    authenticate_user, create_access_token, get_current_user,
    get_password_hash, verify_password
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_data(user: User) -> AuthData:
    return AuthData(
        **UserResponse.from_user(user).model_dump(),
        token=create_access_token(user.id)
    )


@router.post("/register", response_model=DataResponse[AuthData], status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Self-service registration

    Returns the created account and a session token
    """
    if user_data.role == ROLE_ADMIN and not settings.allow_admin_registration:
        raise Forbidden("Admin accounts cannot be self-registered")

    # bcrypt hashing is CPU bound; keep it off the event loop
    user = await run_in_threadpool(user_service.create_user, db, user_data)
    return DataResponse(data=_auth_data(user))


@router.post("/login", response_model=DataResponse[AuthData])
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Login endpoint

    Unknown email and wrong password produce the same 401 response
    """
    user = await run_in_threadpool(authenticate_user, db, credentials.email, credentials.password)
    return DataResponse(data=_auth_data(user))


@router.get("/me", response_model=DataResponse[UserResponse])
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Get current user information
    """
    return DataResponse(data=UserResponse.from_user(current_user))


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    password_data: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Change password
    """
    if password_data.new_password != password_data.confirm_password:
        raise ValidationFailed("Passwords do not match")

    if not await run_in_threadpool(verify_password, password_data.old_password, current_user.password_hash):
        raise ValidationFailed("Incorrect old password")

    current_user.password_hash = await run_in_threadpool(get_password_hash, password_data.new_password)
    db.commit()

    return MessageResponse(message="Password changed successfully")
