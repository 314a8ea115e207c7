"""
Filtered listings and grouping over users and evaluations
"""
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from sqlalchemy import extract
from sqlalchemy.orm import Session
from evalhub.models.evaluation import Evaluation
from evalhub.models.user import User


def year_range(year: int) -> Tuple[datetime, datetime]:
    """Inclusive UTC bounds of a calendar year"""
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    end = datetime(year, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)
    return start, end


class QueryService:
    """Listing queries with optional, AND-combined filters"""

    def list_users(
        self,
        db: Session,
        department_id: Optional[int] = None,
        year: Optional[int] = None
    ) -> List[User]:
        """
        List users

        Args:
            db: Database session
            department_id: Exact department match (None for all)
            year: Accounts created within this calendar year (None for all)
        """
        query = db.query(User)
        if department_id is not None:
            query = query.filter(User.department_id == department_id)
        if year is not None:
            start, end = year_range(year)
            query = query.filter(User.created_at >= start, User.created_at <= end)
        return query.order_by(User.id).all()

    def subject_ids_in_department(self, db: Session, department_id: int) -> List[int]:
        return [uid for (uid,) in db.query(User.id).filter(User.department_id == department_id)]

    def list_evaluations(
        self,
        db: Session,
        department_id: Optional[int] = None,
        year: Optional[int] = None,
        evaluation_number: Optional[int] = None
    ) -> List[Evaluation]:
        """
        List evaluations

        The department filter is a two-step join: first the ids of users in
        the department, then evaluations whose subject is in that set.
        """
        query = db.query(Evaluation)
        if department_id is not None:
            user_ids = self.subject_ids_in_department(db, department_id)
            query = query.filter(Evaluation.user_id.in_(user_ids))
        if year is not None:
            start, end = year_range(year)
            query = query.filter(
                Evaluation.evaluation_date >= start,
                Evaluation.evaluation_date <= end
            )
        if evaluation_number is not None:
            query = query.filter(Evaluation.evaluation_number == evaluation_number)
        return query.order_by(Evaluation.id).all()

    def evaluations_for_user(self, db: Session, user_id: int) -> List[Evaluation]:
        return db.query(Evaluation).filter(
            Evaluation.user_id == user_id
        ).order_by(Evaluation.evaluation_number).all()

    def available_years(self, db: Session, department_id: int) -> List[int]:
        """
        Distinct evaluation years for a department, newest first

        Falls back to the current year so callers always have one option.
        """
        user_ids = self.subject_ids_in_department(db, department_id)
        rows = db.query(extract("year", Evaluation.evaluation_date)).filter(
            Evaluation.user_id.in_(user_ids)
        ).distinct().all()

        years = sorted({int(year) for (year,) in rows if year is not None}, reverse=True)
        if not years:
            years = [datetime.now(timezone.utc).year]
        return years

    def group_by_user(self, evaluations: List[Evaluation]) -> List[Tuple[User, List[Evaluation]]]:
        """
        Group evaluations by subject, each group sorted by evaluation number

        Groups keep the order in which their subject first appears.
        Evaluations whose subject no longer exists are left out.
        """
        groups = {}
        for evaluation in evaluations:
            if evaluation.user is None:
                continue
            groups.setdefault(evaluation.user_id, (evaluation.user, []))[1].append(evaluation)

        return [
            (user, sorted(items, key=lambda e: e.evaluation_number))
            for user, items in groups.values()
        ]


query_service = QueryService()
