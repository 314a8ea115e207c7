"""
Pydantic schemas
"""
from evalhub.schemas.common import CamelModel, DataResponse, ListResponse, MessageResponse
from evalhub.schemas.department import (
    DepartmentBase, DepartmentCreate, DepartmentUpdate, DepartmentResponse,
    ResolvedDepartment, UnresolvedDepartment, DepartmentRef, department_ref
)
from evalhub.schemas.user import (
    UserBase, UserCreate, UserUpdate, UserResponse, AuthData,
    UserLite, UserLogin, PasswordChange
)
from evalhub.schemas.evaluation import (
    EvaluationCriteria, EvaluationCreate, EvaluationUpdate, EvaluationResponse,
    EvaluationListResponse, UserEvaluationGroup
)
from evalhub.schemas.user_data import UserDataCreate, UserDataUpdate, UserDataResponse

__all__ = [
    # Common
    "CamelModel", "DataResponse", "ListResponse", "MessageResponse",
    # Department
    "DepartmentBase", "DepartmentCreate", "DepartmentUpdate", "DepartmentResponse",
    "ResolvedDepartment", "UnresolvedDepartment", "DepartmentRef", "department_ref",
    # User
    "UserBase", "UserCreate", "UserUpdate", "UserResponse", "AuthData",
    "UserLite", "UserLogin", "PasswordChange",
    # Evaluation
    "EvaluationCriteria", "EvaluationCreate", "EvaluationUpdate", "EvaluationResponse",
    "EvaluationListResponse", "UserEvaluationGroup",
    # User data
    "UserDataCreate", "UserDataUpdate", "UserDataResponse",
]
