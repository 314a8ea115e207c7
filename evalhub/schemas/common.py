"""
Shared schema base and response envelopes
"""
from datetime import datetime, timezone
from typing import Annotated, Generic, List, TypeVar
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def _as_utc(value: datetime) -> datetime:
    # Timestamps are stored in UTC; SQLite returns them without an offset
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DataResponse(BaseModel, Generic[T]):
    """Envelope for a single payload"""
    success: bool = True
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Envelope for a list payload"""
    success: bool = True
    count: int
    data: List[T]


class MessageResponse(BaseModel):
    """Envelope for operations that return no payload"""
    success: bool = True
    data: dict = {}
    message: str
