"""
User schemas
"""
import re
from pydantic import Field, field_validator
from typing import Optional
from evalhub.schemas.common import CamelModel, UtcDatetime
from evalhub.schemas.department import DepartmentRef, department_ref

EMAIL_PATTERN = re.compile(r"^[\w\-.+]+@([\w-]+\.)+[\w-]{2,}$")
ROLE_PATTERN = "^(User|Admin)$"


def _check_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please provide a valid email")
    return value


class UserBase(CamelModel):
    """Base user schema"""
    email: str = Field(..., max_length=255)
    role: str = Field(default="User", pattern=ROLE_PATTERN)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    academic_degree: Optional[str] = Field(None, max_length=100)
    average_score: Optional[float] = Field(None, ge=0, le=100)
    department_id: Optional[int] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        return _check_email(value)


class UserCreate(UserBase):
    """Schema for registering or creating a user"""
    password: str = Field(..., min_length=6, max_length=72)


class UserUpdate(CamelModel):
    """Schema for updating user; evaluationAverageScore is never accepted"""
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(None, min_length=6, max_length=72)
    role: Optional[str] = Field(None, pattern=ROLE_PATTERN)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    academic_degree: Optional[str] = Field(None, max_length=100)
    average_score: Optional[float] = Field(None, ge=0, le=100)
    department_id: Optional[int] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        return _check_email(value)


class UserResponse(CamelModel):
    """Schema for user response (never carries the password hash)"""
    id: int
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    academic_degree: Optional[str] = None
    average_score: Optional[float] = None
    evaluation_average_score: Optional[float] = None
    department_id: Optional[int] = None
    department: Optional[DepartmentRef] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            first_name=user.first_name,
            last_name=user.last_name,
            academic_degree=user.academic_degree,
            average_score=user.average_score,
            evaluation_average_score=user.evaluation_average_score,
            department_id=user.department_id,
            department=department_ref(user),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthData(UserResponse):
    """Account view returned by register and login"""
    token: str


class UserLite(CamelModel):
    """Identity-lite view embedded in evaluation payloads"""
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str


class UserLogin(CamelModel):
    """Schema for login"""
    email: str
    password: str


class PasswordChange(CamelModel):
    """Schema for password change"""
    old_password: str
    new_password: str = Field(..., min_length=6, max_length=72)
    confirm_password: str = Field(..., min_length=6, max_length=72)
