"""
Evaluation scoring

Averages are rounded half-up to two decimals. The per-evaluation average
is computed by the write path before every persist; the per-user rollup
is a best-effort second write after the evaluation write has committed.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence
from sqlalchemy.orm import Session
from evalhub.errors import ValidationFailed
from evalhub.models.evaluation import Evaluation, CRITERIA_FIELDS
from evalhub.models.user import User

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
MIN_SCORE = 1
MAX_SCORE = 10


def _mean(values: Sequence[Decimal]) -> float:
    total = sum(values, Decimal(0))
    return float((total / Decimal(len(values))).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def compute_average(criteria: Sequence[int]) -> float:
    """
    Mean of the eight criteria scores, rounded half-up to 2 decimals

    Raises:
        ValidationFailed: wrong number of scores or a score outside 1-10
    """
    if len(criteria) != len(CRITERIA_FIELDS):
        raise ValidationFailed(f"Exactly {len(CRITERIA_FIELDS)} criteria scores are required")
    for score in criteria:
        if isinstance(score, bool) or not isinstance(score, int):
            raise ValidationFailed("Criteria scores must be integers")
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise ValidationFailed(f"Criteria scores must be between {MIN_SCORE} and {MAX_SCORE}")
    return _mean([Decimal(score) for score in criteria])


def compute_rollup(averages: Sequence[float]) -> Optional[float]:
    """Mean of evaluation averages, or None when the user has no evaluations"""
    if not averages:
        return None
    return _mean([Decimal(str(avg)) for avg in averages])


def recompute_user_rollup(db: Session, user_id: int) -> Optional[float]:
    """
    Recompute and persist a user's evaluationAverageScore

    Evaluations are re-read from storage. Failures are logged and
    swallowed: the evaluation write that triggered this already committed.

    Returns:
        The new rollup, or None when absent or when recomputation failed
    """
    try:
        averages = [
            avg for (avg,) in db.query(Evaluation.average_score)
            .filter(Evaluation.user_id == user_id)
            .all()
        ]
        user = db.get(User, user_id)
        if user is None:
            logger.warning(f"Skipping rollup for missing user {user_id}")
            return None

        rollup = compute_rollup(averages)
        user.evaluation_average_score = rollup
        db.commit()
        logger.info(f"Updated user {user_id} evaluation average score to {rollup}")
        return rollup
    except Exception:
        db.rollback()
        logger.exception(f"Error updating evaluation average score for user {user_id}")
        return None
