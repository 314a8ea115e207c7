"""
Evaluation repository

Every write computes averageScore before the persist call, then
recomputes the subject's rollup as a separate, best-effort write.
"""
import logging
from sqlalchemy.orm import Session
from evalhub.errors import DuplicateKey, NotFound
from evalhub.models.evaluation import Evaluation
from evalhub.models.user import User
from evalhub.schemas.evaluation import EvaluationCreate, EvaluationUpdate
from evalhub.services.repository import commit
from evalhub.services.scoring import compute_average, recompute_user_rollup

logger = logging.getLogger(__name__)


def _duplicate_message(evaluation_number: int) -> str:
    return f"Evaluation #{evaluation_number} already exists for this user"


def get_evaluation(db: Session, evaluation_id: int) -> Evaluation:
    evaluation = db.get(Evaluation, evaluation_id)
    if not evaluation:
        raise NotFound("Evaluation not found")
    return evaluation


def create_evaluation(db: Session, data: EvaluationCreate, evaluator: User) -> Evaluation:
    """
    Create evaluation authored by the acting admin

    Raises:
        NotFound: subject user does not exist
        DuplicateKey: the subject already has this evaluation number
    """
    subject = db.get(User, data.user_id)
    if not subject:
        raise NotFound("User not found")

    existing = db.query(Evaluation).filter(
        Evaluation.user_id == data.user_id,
        Evaluation.evaluation_number == data.evaluation_number
    ).first()
    if existing:
        raise DuplicateKey(_duplicate_message(data.evaluation_number))

    evaluation = Evaluation(
        user_id=subject.id,
        evaluation_number=data.evaluation_number,
        evaluator_id=evaluator.id,
        comments=data.comments,
        **data.criteria.model_dump(by_alias=False)
    )
    evaluation.average_score = compute_average(evaluation.criteria_values())

    db.add(evaluation)
    commit(db, _duplicate_message(data.evaluation_number))
    db.refresh(evaluation)
    logger.info(f"Evaluation #{evaluation.evaluation_number} created for user {subject.id}")

    recompute_user_rollup(db, subject.id)
    return evaluation


def update_evaluation(db: Session, evaluation: Evaluation, data: EvaluationUpdate) -> Evaluation:
    """Update criteria and/or comments; the average is always recomputed"""
    if data.criteria is not None:
        for field, value in data.criteria.model_dump(by_alias=False).items():
            setattr(evaluation, field, value)
    if "comments" in data.model_fields_set:
        evaluation.comments = data.comments

    evaluation.average_score = compute_average(evaluation.criteria_values())
    commit(db, _duplicate_message(evaluation.evaluation_number))
    db.refresh(evaluation)

    recompute_user_rollup(db, evaluation.user_id)
    return evaluation


def delete_evaluation(db: Session, evaluation: Evaluation):
    subject_id = evaluation.user_id
    evaluation_id = evaluation.id
    db.delete(evaluation)
    db.commit()
    logger.info(f"Evaluation {evaluation_id} deleted for user {subject_id}")

    recompute_user_rollup(db, subject_id)
