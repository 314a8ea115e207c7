"""
Department repository
"""
from typing import List
from sqlalchemy.orm import Session
from evalhub.errors import DuplicateKey, NotFound, ValidationFailed
from evalhub.models.department import Department
from evalhub.models.user import User
from evalhub.schemas.department import DepartmentCreate, DepartmentUpdate
from evalhub.services.repository import commit

DUPLICATE_NAME = "Department with this name already exists"


def list_departments(db: Session) -> List[Department]:
    return db.query(Department).order_by(Department.name).all()


def get_department(db: Session, department_id: int) -> Department:
    dept = db.get(Department, department_id)
    if not dept:
        raise NotFound("Department not found")
    return dept


def create_department(db: Session, data: DepartmentCreate) -> Department:
    """Create department (name must be unique)"""
    existing = db.query(Department).filter(Department.name == data.name).first()
    if existing:
        raise DuplicateKey(DUPLICATE_NAME)

    dept = Department(name=data.name, description=data.description)
    db.add(dept)
    commit(db, DUPLICATE_NAME)
    db.refresh(dept)
    return dept


def update_department(db: Session, dept: Department, data: DepartmentUpdate) -> Department:
    update_data = data.model_dump(exclude_unset=True)
    if "name" in update_data and update_data["name"] is None:
        raise ValidationFailed("Department name cannot be empty")

    # Check if new name already exists
    new_name = update_data.get("name")
    if new_name and new_name != dept.name:
        existing = db.query(Department).filter(Department.name == new_name).first()
        if existing:
            raise DuplicateKey(DUPLICATE_NAME)

    for field, value in update_data.items():
        setattr(dept, field, value)

    commit(db, DUPLICATE_NAME)
    db.refresh(dept)
    return dept


def delete_department(db: Session, dept: Department):
    """Delete department; refused while users still belong to it"""
    user_count = db.query(User).filter(User.department_id == dept.id).count()
    if user_count > 0:
        raise ValidationFailed(f"Cannot delete department with {user_count} users")

    db.delete(dept)
    db.commit()
