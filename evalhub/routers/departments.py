"""
Departments management router
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from evalhub.database import get_db
from evalhub.models.user import User
from evalhub.schemas.common import DataResponse, ListResponse, MessageResponse
from evalhub.schemas.department import DepartmentCreate, DepartmentUpdate, DepartmentResponse
from evalhub.services import departments as department_service
from evalhub.services.auth import get_current_active_admin, get_current_user

router = APIRouter(prefix="/departments", tags=["Departments"])


@router.get("", response_model=ListResponse[DepartmentResponse])
async def list_departments(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List all departments
    """
    departments = department_service.list_departments(db)
    return ListResponse(
        count=len(departments),
        data=[DepartmentResponse.model_validate(dept) for dept in departments]
    )


@router.get("/{department_id}", response_model=DataResponse[DepartmentResponse])
async def get_department(
    department_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get department by ID
    """
    dept = department_service.get_department(db, department_id)
    return DataResponse(data=DepartmentResponse.model_validate(dept))


@router.post("", response_model=DataResponse[DepartmentResponse], status_code=status.HTTP_201_CREATED)
async def create_department(
    dept_data: DepartmentCreate,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Create new department (admin only)
    """
    dept = department_service.create_department(db, dept_data)
    return DataResponse(data=DepartmentResponse.model_validate(dept))


@router.put("/{department_id}", response_model=DataResponse[DepartmentResponse])
async def update_department(
    department_id: int,
    dept_data: DepartmentUpdate,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Update department (admin only)
    """
    dept = department_service.get_department(db, department_id)
    dept = department_service.update_department(db, dept, dept_data)
    return DataResponse(data=DepartmentResponse.model_validate(dept))


@router.delete("/{department_id}", response_model=MessageResponse)
async def delete_department(
    department_id: int,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Delete department (admin only)
    """
    dept = department_service.get_department(db, department_id)
    department_service.delete_department(db, dept)
    return MessageResponse(message="Department deleted successfully")
