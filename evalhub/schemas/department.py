"""
Department schemas
"""
from typing import Annotated, Literal, Optional, Union
from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel
from evalhub.schemas.common import CamelModel, UtcDatetime


class DepartmentBase(CamelModel):
    """Base department schema"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )

    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=500)


class DepartmentCreate(DepartmentBase):
    """Schema for creating department"""
    pass


class DepartmentUpdate(DepartmentBase):
    """Schema for updating department"""
    name: Optional[str] = Field(None, min_length=1, max_length=50)


class DepartmentResponse(DepartmentBase):
    """Schema for department response"""
    id: int
    created_at: UtcDatetime


class ResolvedDepartment(CamelModel):
    """Department reference whose record was loaded"""
    kind: Literal["resolved"] = "resolved"
    id: int
    name: str


class UnresolvedDepartment(CamelModel):
    """Department reference that points at no loadable record"""
    kind: Literal["unresolved"] = "unresolved"
    id: int


DepartmentRef = Annotated[
    Union[ResolvedDepartment, UnresolvedDepartment],
    Field(discriminator="kind"),
]


def department_ref(user) -> Optional[Union[ResolvedDepartment, UnresolvedDepartment]]:
    """Build the tagged department reference for a user (None when unassigned)"""
    if user.department_id is None:
        return None
    if user.department is not None:
        return ResolvedDepartment(id=user.department.id, name=user.department.name)
    return UnresolvedDepartment(id=user.department_id)
