"""
Evaluation schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from evalhub.models.evaluation import CRITERIA_FIELDS
from evalhub.schemas.common import CamelModel, UtcDatetime
from evalhub.schemas.user import UserLite


class EvaluationCriteria(CamelModel):
    """The eight criteria scores, each 1-10"""
    davamiyyet: int = Field(..., ge=1, le=10)
    is_guzar_keyfiyyetler: int = Field(..., ge=1, le=10)
    strese_davamliliq: int = Field(..., ge=1, le=10)
    asc_imici: int = Field(..., ge=1, le=10)
    qavrama_menimseme: int = Field(..., ge=1, le=10)
    ixtisas_biliyi: int = Field(..., ge=1, le=10)
    muhendis_etikasi: int = Field(..., ge=1, le=10)
    komanda_ile_isleme_bacarigi: int = Field(..., ge=1, le=10)

    def values(self) -> List[int]:
        return [getattr(self, field) for field in CRITERIA_FIELDS]


class EvaluationCreate(CamelModel):
    """Schema for creating evaluation; any client averageScore is ignored"""
    user_id: int
    evaluation_number: int = Field(..., ge=1, le=3)
    criteria: EvaluationCriteria
    comments: Optional[str] = None


class EvaluationUpdate(CamelModel):
    """Schema for updating evaluation"""
    criteria: Optional[EvaluationCriteria] = None
    comments: Optional[str] = None


class EvaluationResponse(CamelModel):
    """Schema for evaluation response"""
    id: int
    user_id: int
    evaluation_number: int
    evaluator_id: int
    evaluation_date: UtcDatetime
    criteria: EvaluationCriteria
    average_score: float
    comments: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None

    # Related accounts
    user: Optional[UserLite] = None
    evaluator: Optional[UserLite] = None

    @classmethod
    def from_evaluation(cls, evaluation) -> "EvaluationResponse":
        return cls(
            id=evaluation.id,
            user_id=evaluation.user_id,
            evaluation_number=evaluation.evaluation_number,
            evaluator_id=evaluation.evaluator_id,
            evaluation_date=evaluation.evaluation_date,
            criteria=EvaluationCriteria.model_validate(evaluation),
            average_score=evaluation.average_score,
            comments=evaluation.comments,
            created_at=evaluation.created_at,
            updated_at=evaluation.updated_at,
            user=UserLite.model_validate(evaluation.user) if evaluation.user else None,
            evaluator=UserLite.model_validate(evaluation.evaluator) if evaluation.evaluator else None,
        )


class EvaluationListResponse(BaseModel):
    """Envelope for evaluation listings"""
    success: bool = True
    count: int
    evaluations: List[EvaluationResponse]
    years: List[int] = []


class UserEvaluationGroup(CamelModel):
    """One subject with their evaluations in cycle order"""
    user: UserLite
    evaluations: List[EvaluationResponse]
