"""
Authentication service
"""
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
import bcrypt
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from evalhub.config import settings
from evalhub.database import get_db
from evalhub.errors import AccountNotFound, InvalidCredentials, Unauthenticated
from evalhub.models.user import User, ROLE_ADMIN
from evalhub.services.access import authorize_role

logger = logging.getLogger(__name__)

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login", auto_error=False)


def _encode(password: str) -> bytes:
    # bcrypt only considers the first 72 bytes
    return password.encode('utf-8')[:72]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    return bcrypt.checkpw(_encode(plain_password), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash password with a fresh random salt"""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode('utf-8')


@lru_cache()
def _dummy_hash() -> str:
    return get_password_hash("not-a-real-password")


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Authenticate user with email and password

    An unknown email still costs one hash comparison so both failure
    cases take the same time and produce the same error.

    Raises:
        InvalidCredentials: unknown email or wrong password
    """
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if not user:
        verify_password(password, _dummy_hash())
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return user


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token

    The payload carries only the account id; role and profile are
    re-read from storage on every request.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> int:
    """
    Decode JWT token

    Returns:
        Account id carried by the token

    Raises:
        Unauthenticated: token is malformed, tampered with or expired
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise Unauthenticated()
    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise Unauthenticated()


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the acting account from the bearer token

    Raises:
        Unauthenticated: missing or invalid token
        AccountNotFound: the account was deleted after the token was issued
    """
    if not token:
        raise Unauthenticated()

    user_id = decode_token(token)
    user = db.get(User, user_id)
    if user is None:
        raise AccountNotFound()
    return user


async def get_current_active_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """Resolve the acting account and require the Admin role"""
    authorize_role(current_user, ROLE_ADMIN)
    return current_user
