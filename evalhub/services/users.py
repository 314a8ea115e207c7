"""
User repository
"""
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from evalhub.errors import DuplicateKey, NotFound, ValidationFailed
from evalhub.models.department import Department
from evalhub.models.user import User, ROLE_ADMIN, ROLE_USER
from evalhub.schemas.user import UserCreate, UserUpdate
from evalhub.services.auth import get_password_hash
from evalhub.services.repository import commit

DUPLICATE_EMAIL = "User already exists"


def _check_department(db: Session, role: str, department_id: Optional[int]):
    """Users with the User role must belong to an existing department"""
    if role == ROLE_USER and department_id is None:
        raise ValidationFailed("Department ID is required for User role")
    if department_id is not None and db.get(Department, department_id) is None:
        raise NotFound("Department not found")


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def create_user(db: Session, data: UserCreate) -> User:
    """
    Create an account with a salted password hash

    Raises:
        DuplicateKey: email already registered
        ValidationFailed: User role without department
        NotFound: department does not exist
    """
    if db.query(User).filter(User.email == data.email).first():
        raise DuplicateKey(DUPLICATE_EMAIL)
    _check_department(db, data.role, data.department_id)

    user = User(
        email=data.email,
        password_hash=get_password_hash(data.password),
        role=data.role,
        first_name=data.first_name,
        last_name=data.last_name,
        academic_degree=data.academic_degree,
        average_score=data.average_score,
        department_id=data.department_id,
    )
    db.add(user)
    commit(db, DUPLICATE_EMAIL)
    db.refresh(user)
    return user


def update_user(db: Session, user: User, data: UserUpdate) -> User:
    """Apply a partial update; the caller has already checked role changes"""
    update_data = data.model_dump(exclude_unset=True)

    for field in ("email", "role"):
        if field in update_data and update_data[field] is None:
            raise ValidationFailed(f"{field} cannot be empty")

    new_email = update_data.get("email")
    if new_email and new_email != user.email:
        if db.query(User).filter(User.email == new_email).first():
            raise DuplicateKey(DUPLICATE_EMAIL)

    role = update_data.get("role", user.role)
    department_id = update_data.get("department_id", user.department_id)
    _check_department(db, role, department_id)

    password = update_data.pop("password", None)
    if password:
        user.password_hash = get_password_hash(password)

    for field, value in update_data.items():
        setattr(user, field, value)

    commit(db, DUPLICATE_EMAIL)
    db.refresh(user)
    return user


def delete_user(db: Session, user: User):
    """
    Delete account

    Evaluations and notes referencing the account are not removed. Stores
    that enforce foreign keys refuse the delete instead.
    """
    db.delete(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationFailed("Cannot delete user while evaluations or notes reference it") from e


def ensure_admin(db: Session, email: str, password: str) -> Optional[User]:
    """
    Create the bootstrap Admin account if the email is not registered yet

    Returns:
        The created account, or None when the email already exists
    """
    email = email.strip().lower()
    if db.query(User).filter(User.email == email).first():
        return None

    user = User(
        email=email,
        password_hash=get_password_hash(password),
        role=ROLE_ADMIN,
    )
    db.add(user)
    commit(db, DUPLICATE_EMAIL)
    db.refresh(user)
    return user
