"""
User model
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from evalhub.database import Base

ROLE_USER = "User"
ROLE_ADMIN = "Admin"


def _utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    """User account"""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}  # ids are never reused

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER)  # 'User', 'Admin'
    first_name = Column(String(100))
    last_name = Column(String(100))
    academic_degree = Column(String(100))
    average_score = Column(Float)  # manual score, 0-100
    evaluation_average_score = Column(Float)  # rollup, written only by the scoring service
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relationships
    department = relationship("Department", back_populates="users")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
