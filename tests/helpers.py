from datetime import datetime, timezone
from typing import Optional

from evalhub.models.department import Department
from evalhub.models.evaluation import Evaluation, CRITERIA_FIELDS
from evalhub.models.user import User, ROLE_USER
from evalhub.services.auth import create_access_token, get_password_hash
from evalhub.services.scoring import compute_average

DEFAULT_PASSWORD = "password123"

CRITERIA_KEYS = [
    "davamiyyet",
    "isGuzarKeyfiyyetler",
    "streseDavamliliq",
    "ascImici",
    "qavramaMenimseme",
    "ixtisasBiliyi",
    "muhendisEtikasi",
    "komandaIleIslemeBacarigi",
]


def criteria(*scores) -> dict:
    """Criteria payload; a single score is used for all eight"""
    if len(scores) == 1:
        scores = scores * len(CRITERIA_KEYS)
    return dict(zip(CRITERIA_KEYS, scores))


def create_department(db, name: str, description: Optional[str] = None) -> Department:
    dept = Department(name=name, description=description)
    db.add(dept)
    db.commit()
    db.refresh(dept)
    return dept


def create_user(
    db,
    email: str,
    role: str = ROLE_USER,
    department: Optional[Department] = None,
    password: str = DEFAULT_PASSWORD,
    **fields
) -> User:
    user = User(
        email=email,
        password_hash=get_password_hash(password),
        role=role,
        department_id=department.id if department else None,
        **fields
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_evaluation(
    db,
    subject: User,
    evaluator: User,
    number: int,
    score: int = 5,
    evaluation_date: Optional[datetime] = None
) -> Evaluation:
    """Insert an evaluation directly, without the rollup side effect"""
    evaluation = Evaluation(
        user_id=subject.id,
        evaluator_id=evaluator.id,
        evaluation_number=number,
        evaluation_date=evaluation_date or datetime.now(timezone.utc),
        **{field: score for field in CRITERIA_FIELDS}
    )
    evaluation.average_score = compute_average(evaluation.criteria_values())
    db.add(evaluation)
    db.commit()
    db.refresh(evaluation)
    return evaluation


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
