"""
Evaluation model
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Float, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from evalhub.database import Base

# Criteria columns in entity-definition order
CRITERIA_FIELDS = (
    "davamiyyet",
    "is_guzar_keyfiyyetler",
    "strese_davamliliq",
    "asc_imici",
    "qavrama_menimseme",
    "ixtisas_biliyi",
    "muhendis_etikasi",
    "komanda_ile_isleme_bacarigi",
)


def _utcnow():
    return datetime.now(timezone.utc)


class Evaluation(Base):
    """Scored periodic assessment of one user"""
    __tablename__ = "evaluations"
    __table_args__ = (
        UniqueConstraint("user_id", "evaluation_number", name="uq_evaluation_user_number"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    evaluation_number = Column(Integer, nullable=False)  # 1, 2 or 3
    evaluator_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    evaluation_date = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # Criteria, each scored 1-10
    davamiyyet = Column(Integer, nullable=False)
    is_guzar_keyfiyyetler = Column(Integer, nullable=False)
    strese_davamliliq = Column(Integer, nullable=False)
    asc_imici = Column(Integer, nullable=False)
    qavrama_menimseme = Column(Integer, nullable=False)
    ixtisas_biliyi = Column(Integer, nullable=False)
    muhendis_etikasi = Column(Integer, nullable=False)
    komanda_ile_isleme_bacarigi = Column(Integer, nullable=False)

    average_score = Column(Float, nullable=False)
    comments = Column(Text)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relationships
    user = relationship("User", foreign_keys=[user_id])
    evaluator = relationship("User", foreign_keys=[evaluator_id])

    def criteria_values(self):
        return [getattr(self, field) for field in CRITERIA_FIELDS]
