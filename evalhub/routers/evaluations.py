"""
Evaluations router
"""
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from evalhub.database import get_db
from evalhub.models.user import User
from evalhub.schemas.common import DataResponse, MessageResponse
from evalhub.schemas.evaluation import (
    EvaluationCreate, EvaluationUpdate, EvaluationResponse,
    EvaluationListResponse, UserEvaluationGroup
)
from evalhub.schemas.user import UserLite
from evalhub.services import evaluations as evaluation_service
from evalhub.services import users as user_service
from evalhub.services.access import authorize_self_or_admin
from evalhub.services.auth import get_current_active_admin, get_current_user
from evalhub.services.export import evaluation_exporter
from evalhub.services.queries import query_service

router = APIRouter(prefix="/evaluations", tags=["Evaluations"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class EvaluationFilters:
    """Shared query parameters of the evaluation listings"""

    def __init__(
        self,
        department_id: Optional[int] = Query(None, alias="departmentId"),
        year: Optional[int] = Query(None, ge=1970, le=9999),
        evaluation_number: Optional[int] = Query(None, alias="evaluationNumber", ge=1, le=3),
    ):
        self.department_id = department_id
        self.year = year
        self.evaluation_number = evaluation_number

    def fetch(self, db: Session):
        return query_service.list_evaluations(
            db,
            department_id=self.department_id,
            year=self.year,
            evaluation_number=self.evaluation_number
        )


@router.get("", response_model=EvaluationListResponse)
async def list_evaluations(
    filters: EvaluationFilters = Depends(),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List evaluations by department, year and evaluation number

    With a department filter the response also lists the years that
    department has evaluations in
    """
    evaluations = filters.fetch(db)
    years = []
    if filters.department_id is not None:
        years = query_service.available_years(db, filters.department_id)

    return EvaluationListResponse(
        count=len(evaluations),
        evaluations=[EvaluationResponse.from_evaluation(e) for e in evaluations],
        years=years
    )


@router.post("", response_model=DataResponse[EvaluationResponse], status_code=status.HTTP_201_CREATED)
async def create_evaluation(
    evaluation_data: EvaluationCreate,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Create evaluation (admin only); the acting admin is the evaluator
    """
    evaluation = evaluation_service.create_evaluation(db, evaluation_data, current_user)
    return DataResponse(data=EvaluationResponse.from_evaluation(evaluation))


@router.get("/grouped", response_model=DataResponse[List[UserEvaluationGroup]])
async def list_evaluations_grouped(
    filters: EvaluationFilters = Depends(),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Filtered evaluations grouped by subject user
    """
    groups = query_service.group_by_user(filters.fetch(db))
    return DataResponse(data=[
        UserEvaluationGroup(
            user=UserLite.model_validate(user),
            evaluations=[EvaluationResponse.from_evaluation(e) for e in evaluations]
        )
        for user, evaluations in groups
    ])


@router.get("/export")
async def export_evaluations(
    filters: EvaluationFilters = Depends(),
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Export evaluations to Excel, one sheet per department (admin only)
    """
    content = evaluation_exporter.export(filters.fetch(db))
    filename = f"evaluations_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"

    return StreamingResponse(
        iter([content]),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )


@router.get("/user/{user_id}", response_model=EvaluationListResponse)
async def get_evaluations_by_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Evaluations of one user in cycle order (self or admin)
    """
    authorize_self_or_admin(current_user, user_id, "Not authorized to access these evaluations")
    user_service.get_user(db, user_id)

    evaluations = query_service.evaluations_for_user(db, user_id)
    return EvaluationListResponse(
        count=len(evaluations),
        evaluations=[EvaluationResponse.from_evaluation(e) for e in evaluations]
    )


@router.get("/{evaluation_id}", response_model=DataResponse[EvaluationResponse])
async def get_evaluation(
    evaluation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get evaluation by ID (subject or admin)
    """
    evaluation = evaluation_service.get_evaluation(db, evaluation_id)
    authorize_self_or_admin(current_user, evaluation.user_id, "Not authorized to access this evaluation")
    return DataResponse(data=EvaluationResponse.from_evaluation(evaluation))


@router.put("/{evaluation_id}", response_model=DataResponse[EvaluationResponse])
async def update_evaluation(
    evaluation_id: int,
    evaluation_data: EvaluationUpdate,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Update evaluation criteria and comments (admin only)
    """
    evaluation = evaluation_service.get_evaluation(db, evaluation_id)
    evaluation = evaluation_service.update_evaluation(db, evaluation, evaluation_data)
    return DataResponse(data=EvaluationResponse.from_evaluation(evaluation))


@router.delete("/{evaluation_id}", response_model=MessageResponse)
async def delete_evaluation(
    evaluation_id: int,
    current_user: User = Depends(get_current_active_admin),
    db: Session = Depends(get_db)
):
    """
    Delete evaluation (admin only)
    """
    evaluation = evaluation_service.get_evaluation(db, evaluation_id)
    evaluation_service.delete_evaluation(db, evaluation)
    return MessageResponse(message="Evaluation deleted successfully")
