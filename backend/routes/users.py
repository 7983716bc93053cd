# backend/routes/users.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Query, Request, Response, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from database import get_db
from errors import AlreadyEntered, Forbidden, UserNotFound, ValidationError
from models.users import Role, User
from repositories.transaction_repository import SqlTransactionRepository
from repositories.user_repository import SqlUserRepository
from schemas.user import (
    QrResponse, SignInRequest, TokenResponse, UserDraft, UserResponse, UserUpdate,
)
from services.user_service import RegistrationChannel, UserService
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user, role_required

router = APIRouter(tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(SqlUserRepository(db), SqlTransactionRepository(db))


# Turn the submitted form into a registration draft, field errors become 400
def build_draft(**fields) -> UserDraft:
    try:
        return UserDraft(**fields)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        raise ValidationError(f"{field}: {first['msg']}")


# =========================
# Registration & sign-in
# =========================

@router.post("/student/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def student_register(
    request: Request,
    id: str = Form(...),
    name: str = Form(...),
    phone: str = Form(...),
    email: Optional[str] = Form(None),
    birth_date: Optional[date] = Form(None, alias="birthDate"),
    status_: Optional[str] = Form(None, alias="status"),
    other_status: Optional[str] = Form(None, alias="otherStatus"),
    province: Optional[str] = Form(None),
    school: Optional[str] = Form(None),
    first_interest: Optional[str] = Form(None, alias="firstInterest"),
    second_interest: Optional[str] = Form(None, alias="secondInterest"),
    third_interest: Optional[str] = Form(None, alias="thirdInterest"),
    selected_sources: Optional[List[str]] = Form(None, alias="selectedSources"),
    other_source: Optional[str] = Form(None, alias="otherSource"),
    objective: Optional[str] = Form(None),
    service: UserService = Depends(get_user_service),
    db: Session = Depends(get_db),
):
    draft = build_draft(
        id=id, name=name, phone=phone, email=email or None, birth_date=birth_date,
        status=status_, other_status=other_status, province=province, school=school,
        first_interest=first_interest, second_interest=second_interest,
        third_interest=third_interest, selected_sources=selected_sources,
        other_source=other_source, objective=objective,
    )
    token = service.register(draft, RegistrationChannel.STUDENT)
    write_log(db, user_id=token.user_id, action="REGISTER", resource="student",
              ip=client_ip(request), meta={"phone": phone})
    return token


@router.post("/staff/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def staff_register(
    request: Request,
    id: str = Form(...),
    name: str = Form(...),
    phone: str = Form(...),
    email: Optional[str] = Form(None),
    nickname: Optional[str] = Form(None),
    student_id: Optional[str] = Form(None, alias="studentId"),
    faculty: Optional[str] = Form(None),
    year: Optional[int] = Form(None),
    is_central_staff: Optional[bool] = Form(None, alias="isCentralStaff"),
    service: UserService = Depends(get_user_service),
    db: Session = Depends(get_db),
):
    draft = build_draft(
        id=id, name=name, phone=phone, email=email or None, nickname=nickname,
        student_id=student_id, faculty=faculty or None, year=year,
        is_central_staff=is_central_staff,
    )
    token = service.register(draft, RegistrationChannel.STAFF)
    write_log(db, user_id=token.user_id, action="REGISTER", resource="staff",
              ip=client_ip(request), meta={"phone": phone, "faculty": faculty})
    return token


@router.post("/users/signin", response_model=TokenResponse)
def sign_in(
    payload: SignInRequest,
    request: Request,
    service: UserService = Depends(get_user_service),
    db: Session = Depends(get_db),
):
    try:
        token = service.sign_in(payload.id)
    except UserNotFound:
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"id": payload.id})
        raise
    write_log(db, user_id=token.user_id, action="LOGIN", resource="auth", ip=client_ip(request))
    return token


# =========================
# Users
# =========================

@router.get("/users", response_model=List[UserResponse])
def get_all_users(
    name: Optional[str] = Query(None, description="Search by name"),
    role: Optional[Role] = Query(None, description="Filter by role"),
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(role_required(Role.STAFF, Role.ADMIN)),
):
    return service.get_all(name=name, role=role)


@router.get("/users/qr/{user_id}", response_model=QrResponse)
def get_qr_url(
    user_id: str,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    return QrResponse(qr_url=service.get_qr_url(user_id))


@router.get("/users/qr/{user_id}/image")
def get_qr_image(
    user_id: str,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    return Response(content=service.get_qr_image(user_id), media_type="image/png")


# Check a student in, the scanning staff member is the token owner
@router.post("/users/qr/{user_id}", response_model=UserResponse)
def scan_qr(
    user_id: str,
    request: Request,
    service: UserService = Depends(get_user_service),
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required(Role.STAFF, Role.ADMIN)),
):
    try:
        student = service.scan_qr(user_id, current_user.id)
    except AlreadyEntered as e:
        write_log(db, user_id=current_user.id, action="CHECK_IN", resource="users", status="FAIL",
                  ip=client_ip(request), meta={"student_id": user_id, "entered_at": e.entered_at.isoformat()})
        raise
    write_log(db, user_id=current_user.id, action="CHECK_IN", resource="users",
              ip=client_ip(request), meta={"student_id": user_id, "faculty": current_user.faculty})
    return student


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    return service.get_by_id(user_id)


# Update the profile of the token owner
@router.patch("/users", status_code=status.HTTP_204_NO_CONTENT)
def update_me(
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    service.update(current_user.id, payload.model_dump(exclude_unset=True))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user(
    user_id: str,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    if current_user.id != user_id and current_user.role != Role.ADMIN:
        raise Forbidden("You can only update your own profile")
    service.update(user_id, payload.model_dump(exclude_unset=True))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
