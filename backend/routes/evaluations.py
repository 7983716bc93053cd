# backend/routes/evaluations.py
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from database import get_db
from errors import Forbidden
from models.users import Role, User
from repositories.evaluation_repository import SqlEvaluationRepository
from schemas.evaluation import (
    EvaluationCount, EvaluationCreate, EvaluationResponse, EvaluationUpdate,
)
from services.evaluation_service import EvaluationService
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user, role_required

router = APIRouter(prefix="/student-evaluation", tags=["Evaluations"])


def get_evaluation_service(db: Session = Depends(get_db)) -> EvaluationService:
    return EvaluationService(SqlEvaluationRepository(db))


# Evaluations are visible to their author and to staff
def ensure_owner_or_staff(current_user: User, student_id: str) -> None:
    if current_user.id != student_id and not current_user.is_staff_member:
        raise Forbidden("You can only access your own evaluation")


@router.post("", response_model=EvaluationResponse, status_code=status.HTTP_201_CREATED)
def create_evaluation(
    payload: EvaluationCreate,
    request: Request,
    service: EvaluationService = Depends(get_evaluation_service),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    evaluation = service.create(current_user.id, payload.model_dump())
    write_log(db, user_id=current_user.id, action="CREATE", resource="student_evaluation",
              ip=client_ip(request), meta={"evaluation_id": evaluation.id})
    return evaluation


@router.get("", response_model=List[EvaluationResponse])
def list_evaluations(
    service: EvaluationService = Depends(get_evaluation_service),
    current_user: User = Depends(role_required(Role.STAFF, Role.ADMIN)),
):
    return service.list()


@router.get("/count", response_model=EvaluationCount)
def count_evaluations(
    service: EvaluationService = Depends(get_evaluation_service),
    current_user: User = Depends(role_required(Role.STAFF, Role.ADMIN)),
):
    return EvaluationCount(count=service.count())


@router.get("/{student_id}", response_model=EvaluationResponse)
def get_evaluation(
    student_id: str,
    service: EvaluationService = Depends(get_evaluation_service),
    current_user: User = Depends(get_current_user),
):
    ensure_owner_or_staff(current_user, student_id)
    return service.get(student_id)


@router.patch("/{student_id}", response_model=EvaluationResponse)
def update_evaluation(
    student_id: str,
    payload: EvaluationUpdate,
    service: EvaluationService = Depends(get_evaluation_service),
    current_user: User = Depends(get_current_user),
):
    ensure_owner_or_staff(current_user, student_id)
    return service.update(student_id, payload.model_dump(exclude_unset=True))


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_evaluation(
    student_id: str,
    request: Request,
    service: EvaluationService = Depends(get_evaluation_service),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_owner_or_staff(current_user, student_id)
    service.delete(student_id)
    write_log(db, user_id=current_user.id, action="DELETE", resource="student_evaluation",
              ip=client_ip(request), meta={"student_id": student_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
