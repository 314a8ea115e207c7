"""
User note repository
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from evalhub.errors import NotFound
from evalhub.models.user import User
from evalhub.models.user_data import UserData
from evalhub.schemas.user_data import UserDataCreate, UserDataUpdate


def list_notes(db: Session, department_id: Optional[int] = None) -> List[UserData]:
    """All notes, optionally only those owned by users of one department"""
    query = db.query(UserData)
    if department_id is not None:
        user_ids = [uid for (uid,) in db.query(User.id).filter(User.department_id == department_id)]
        query = query.filter(UserData.user_id.in_(user_ids))
    return query.order_by(UserData.id).all()


def notes_for_user(db: Session, user_id: int) -> List[UserData]:
    return db.query(UserData).filter(UserData.user_id == user_id).order_by(UserData.id).all()


def get_note(db: Session, note_id: int) -> UserData:
    note = db.get(UserData, note_id)
    if not note:
        raise NotFound("User data not found")
    return note


def create_note(db: Session, owner: User, data: UserDataCreate) -> UserData:
    note = UserData(user_id=owner.id, title=data.title, content=data.content)
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


def update_note(db: Session, note: UserData, data: UserDataUpdate) -> UserData:
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(note, field, value)
    db.commit()
    db.refresh(note)
    return note


def delete_note(db: Session, note: UserData):
    db.delete(note)
    db.commit()
