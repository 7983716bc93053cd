# backend/routes/admin.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import Role, User
from routes.users import get_user_service
from schemas.user import RoleUpdate
from services.user_service import UserService
from utils.audit import client_ip, write_log
from utils.tokenJWT import role_required

router = APIRouter(tags=["Admin"])

admin_only = role_required(Role.ADMIN)


# Update user role (Admin only)
@router.patch("/users/role/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user_role(
    user_id: str,
    payload: RoleUpdate,
    request: Request,
    service: UserService = Depends(get_user_service),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    service.update_role(user_id, payload.role)
    write_log(db, user_id=current_user.id, action="ROLE_CHANGE", resource="users",
              ip=client_ip(request), meta={"target_id": user_id, "role": payload.role.value})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Promote a registered user to staff by phone number
@router.patch("/addstaff/{phone}", status_code=status.HTTP_204_NO_CONTENT)
def add_staff(
    phone: str,
    request: Request,
    service: UserService = Depends(get_user_service),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    user = service.add_staff(phone)
    write_log(db, user_id=current_user.id, action="ADD_STAFF", resource="users",
              ip=client_ip(request), meta={"target_id": user.id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/removestaff/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_staff(
    user_id: str,
    request: Request,
    service: UserService = Depends(get_user_service),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    service.remove_staff(user_id)
    write_log(db, user_id=current_user.id, action="REMOVE_STAFF", resource="users",
              ip=client_ip(request), meta={"target_id": user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    request: Request,
    service: UserService = Depends(get_user_service),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    service.delete(user_id)
    write_log(db, user_id=current_user.id, action="DELETE", resource="users",
              ip=client_ip(request), meta={"target_id": user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
