"""
User note schemas
"""
from pydantic import Field
from typing import Optional
from evalhub.schemas.common import CamelModel, UtcDatetime


class UserDataCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class UserDataUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)


class UserDataResponse(CamelModel):
    id: int
    user_id: int
    title: str
    content: str
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None
