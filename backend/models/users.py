# backend/models/users.py
from sqlalchemy import Column, String, Integer, Boolean, Date, DateTime, Enum, JSON
from database import Base
import enum

# System roles, lowest privilege first
class Role(str, enum.Enum):
    MEMBER = "member"
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"

# How a staff account checks students in
class StaffKind(str, enum.Enum):
    CENTRAL = "central"
    FACULTY = "faculty"

# Decides the staff kind from the raw registration fields.
# An explicit central flag wins over a faculty name.
def resolve_staff_kind(faculty, is_central_staff) -> StaffKind:
    if is_central_staff or not faculty:
        return StaffKind.CENTRAL
    return StaffKind.FACULTY

# Represents an attendee (student), a staff member or an administrator
class User(Base):
    __tablename__ = "users"

    # External id supplied at registration and the generated short uid
    id = Column(String, primary_key=True, index=True)
    uid = Column(String(10), unique=True, nullable=False, index=True)
    role = Column(Enum(Role), nullable=False, default=Role.MEMBER, index=True)

    # Profile
    name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=True)
    phone = Column(String, unique=True, nullable=False, index=True)
    birth_date = Column(Date, nullable=True)
    status = Column(String, nullable=True)
    other_status = Column(String, nullable=True)
    province = Column(String, nullable=True)
    school = Column(String, nullable=True)
    first_interest = Column(String, nullable=True)
    second_interest = Column(String, nullable=True)
    third_interest = Column(String, nullable=True)
    selected_sources = Column(JSON, nullable=True)
    other_source = Column(String, nullable=True)
    objective = Column(String, nullable=True)

    # Staff only
    faculty = Column(String, nullable=True)
    is_central_staff = Column(Boolean, nullable=True)
    staff_kind = Column(Enum(StaffKind), nullable=True)
    student_id = Column(String, nullable=True)
    nickname = Column(String, nullable=True)
    year = Column(Integer, nullable=True)

    # Attendance
    registered_at = Column(DateTime, nullable=True)
    last_entered = Column(DateTime, nullable=True)

    @property
    def is_staff_member(self) -> bool:
        return self.role in (Role.STAFF, Role.ADMIN)

    def __repr__(self):
        return f"<User(id={self.id}, uid={self.uid}, role={self.role})>"
