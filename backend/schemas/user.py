# backend/schemas/user.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr
from pydantic.alias_generators import to_camel

from models.users import Role, StaffKind


# JSON bodies use camelCase (userId, lastEntered, ...), python code uses snake_case
class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Profile fields shared by registration and profile updates
class UserProfile(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    birth_date: Optional[date] = None
    status: Optional[str] = None
    other_status: Optional[str] = None
    province: Optional[str] = None
    school: Optional[str] = None
    first_interest: Optional[str] = None
    second_interest: Optional[str] = None
    third_interest: Optional[str] = None
    selected_sources: Optional[List[str]] = None
    other_source: Optional[str] = None
    objective: Optional[str] = None

    # Staff only
    faculty: Optional[str] = None
    is_central_staff: Optional[bool] = None
    student_id: Optional[str] = None
    nickname: Optional[str] = None
    year: Optional[int] = None


# Registration candidate built from the student or staff form
class UserDraft(UserProfile):
    id: str
    name: str
    phone: str


# Partial profile update, only the fields present in the body are written
class UserUpdate(UserProfile):
    phone: Optional[str] = None


# Full user projection returned by the API
class UserResponse(UserProfile):
    id: str
    email: Optional[str] = None
    uid: str
    phone: str
    role: Role
    staff_kind: Optional[StaffKind] = None
    registered_at: Optional[datetime] = None
    last_entered: Optional[datetime] = None


# Schema for the JWT issued on registration and sign-in
class TokenResponse(CamelModel):
    user_id: str
    access_token: str


class SignInRequest(CamelModel):
    id: str


class QrResponse(CamelModel):
    qr_url: str


# Schema for administrative role updates
class RoleUpdate(CamelModel):
    role: Role
