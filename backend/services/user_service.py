# backend/services/user_service.py
"""
Registration, check-in and staff management use cases.

The service works against the repository protocols only, so the routes hand it
SQLAlchemy-backed repositories while the tests use in-memory ones.
"""
import enum
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from config import settings
from errors import (
    AlreadyEntered, AlreadyStaff, DuplicateRecord, DuplicateUser, Forbidden,
    InvalidPhone, UIDAllocationExhausted, UserNotFound, ValidationError,
)
from models.users import Role, StaffKind, User, resolve_staff_kind
from repositories.transaction_repository import TransactionRepository
from repositories.user_repository import UserRepository
from schemas.user import TokenResponse, UserDraft
from utils.qr import render_qr_png
from utils.tokenJWT import create_access_token
from utils.uid import generate_uid
from utils.validators import is_valid_phone

logger = logging.getLogger(__name__)

STAFF_FIELDS = ("faculty", "is_central_staff", "student_id", "nickname", "year")

# Fields a profile update may never touch
PROTECTED_FIELDS = ("id", "uid", "role", "staff_kind", "registered_at", "last_entered")

# Columns that must keep a value once the user exists
REQUIRED_FIELDS = ("name", "phone")


class RegistrationChannel(str, enum.Enum):
    STUDENT = "student"
    STAFF = "staff"


def is_same_day(t1: Optional[datetime], t2: datetime) -> bool:
    """True when both instants fall on the same calendar date (not a 24h window)."""
    if t1 is None:
        return False
    return t1.date() == t2.date()


class UserService:
    def __init__(
        self,
        users: UserRepository,
        transactions: TransactionRepository,
        *,
        admin_phones: Optional[Iterable[str]] = None,
        base_url: Optional[str] = None,
        uid_max_attempts: Optional[int] = None,
        uid_generator: Callable[[], str] = generate_uid,
        token_secret: Optional[str] = None,
    ):
        self._users = users
        self._transactions = transactions
        self._admin_phones = set(settings.admin_phones if admin_phones is None else admin_phones)
        self._base_url = (base_url or settings.PRODUCTION_BASE_URL).rstrip("/")
        self._uid_max_attempts = uid_max_attempts or settings.UID_MAX_ATTEMPTS
        self._uid_generator = uid_generator
        self._token_secret = token_secret

    # =========================
    # Registration & sign-in
    # =========================

    def register(
        self,
        draft: UserDraft,
        channel: RegistrationChannel = RegistrationChannel.STUDENT,
        *,
        now: Optional[datetime] = None,
    ) -> TokenResponse:
        """
        Register a student or staff member and return a bearer token.

        Re-registering an existing id does not create a new row; on the staff
        channel it promotes an existing member/student to staff instead.
        """
        now = now or datetime.now()
        role = self._assign_role(draft.phone, channel)

        if not is_valid_phone(draft.phone):
            raise InvalidPhone(f"{draft.phone!r} is not a valid mobile number")

        existing = self._users.get_by_id(draft.id)
        if existing is not None:
            if channel == RegistrationChannel.STAFF and existing.role in (Role.MEMBER, Role.STUDENT):
                fields = {f: getattr(draft, f) for f in STAFF_FIELDS}
                fields["role"] = Role.ADMIN if role == Role.ADMIN else Role.STAFF
                fields["staff_kind"] = resolve_staff_kind(draft.faculty, draft.is_central_staff)
                self._save(existing.id, fields)
                logger.info("Promoted existing user %s to %s on staff registration", existing.id, fields["role"].value)
            else:
                logger.info("User %s registered again, issuing a new token", existing.id)
            return self._token_for(existing.id)

        data = draft.model_dump()
        if role in (Role.STAFF, Role.ADMIN):
            data["staff_kind"] = resolve_staff_kind(draft.faculty, draft.is_central_staff)
        else:
            for field in STAFF_FIELDS:
                data[field] = None

        user = User(**data, uid=self._allocate_uid(), role=role, registered_at=now)
        try:
            self._users.create(user)
        except DuplicateRecord as e:
            logger.warning("Rejected duplicate user %s: %s", user.id, e.message)
            raise DuplicateUser()

        logger.info("Registered %s %s with uid %s", role.value, user.id, user.uid)
        return self._token_for(user.id)

    def sign_in(self, user_id: str) -> TokenResponse:
        user = self.get_by_id(user_id)
        return self._token_for(user.id)

    def _assign_role(self, phone: str, channel: RegistrationChannel) -> Role:
        if phone in self._admin_phones:
            return Role.ADMIN
        return Role.STAFF if channel == RegistrationChannel.STAFF else Role.STUDENT

    def _allocate_uid(self) -> str:
        for _ in range(self._uid_max_attempts):
            uid = self._uid_generator()
            if not self._users.uid_exists(uid):
                return uid
            logger.warning("UID collision on %s, retrying", uid)
        raise UIDAllocationExhausted(f"no free uid after {self._uid_max_attempts} attempts")

    def _token_for(self, user_id: str) -> TokenResponse:
        return TokenResponse(
            user_id=user_id,
            access_token=create_access_token(user_id, secret=self._token_secret),
        )

    # =========================
    # Lookups & profile
    # =========================

    def get_all(self, name: Optional[str] = None, role: Optional[Role] = None) -> List[User]:
        users = self._users.get_by_name(name) if name else self._users.get_all()
        if role:
            users = [u for u in users if u.role == role]
        return users

    def get_by_id(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFound(f"No user with id {user_id}")
        return user

    def update(self, user_id: str, fields: Dict[str, Any]) -> User:
        """Partial update: only the given fields are written, everything else is kept."""
        user = self.get_by_id(user_id)
        fields = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        for field in REQUIRED_FIELDS:
            if field in fields and fields[field] is None:
                raise ValidationError(f"{field} cannot be empty")

        if "phone" in fields and not is_valid_phone(fields["phone"]):
            raise InvalidPhone(f"{fields['phone']!r} is not a valid mobile number")

        if "faculty" in fields or "is_central_staff" in fields:
            faculty = fields.get("faculty", user.faculty)
            is_central = fields.get("is_central_staff", user.is_central_staff)
            fields["staff_kind"] = resolve_staff_kind(faculty, is_central)

        return self._save(user_id, fields)

    def delete(self, user_id: str) -> None:
        if not self._users.delete(user_id):
            raise UserNotFound(f"No user with id {user_id}")
        logger.info("Deleted user %s", user_id)

    def get_qr_url(self, user_id: str) -> str:
        user = self.get_by_id(user_id)
        return f"{self._base_url}/api/users/qr/{user.id}"

    def get_qr_image(self, user_id: str) -> bytes:
        return render_qr_png(self.get_qr_url(user_id))

    def _save(self, user_id: str, fields: Dict[str, Any]) -> User:
        try:
            user = self._users.update(user_id, fields)
        except DuplicateRecord as e:
            logger.warning("Rejected update of user %s: %s", user_id, e.message)
            raise DuplicateUser()
        if user is None:
            raise UserNotFound(f"No user with id {user_id}")
        return user

    # =========================
    # Check-in
    # =========================

    def scan_qr(self, student_id: str, staff_id: str, *, now: Optional[datetime] = None) -> User:
        """
        Record a check-in of ``student_id`` scanned by ``staff_id``.

        Central staff mark the site-wide entry (``last_entered``), faculty staff
        append to the per-faculty ledger. Both allow one entry per calendar day
        and raise AlreadyEntered, carrying the earlier entry time, otherwise.
        """
        student = self.get_by_id(student_id)
        staff = self.get_by_id(staff_id)
        if not staff.is_staff_member:
            raise Forbidden("Only staff can scan check-in codes")

        now = now or datetime.now()
        kind = staff.staff_kind or resolve_staff_kind(staff.faculty, staff.is_central_staff)

        if kind == StaffKind.CENTRAL:
            return self._central_entry(student, now)
        return self._faculty_entry(student, staff.faculty, now)

    def _central_entry(self, student: User, now: datetime) -> User:
        if is_same_day(student.last_entered, now):
            raise AlreadyEntered(student.last_entered)

        # A faculty tag on a plain attendee is stale once they pass the central gate
        clear_faculty = student.faculty is not None and not student.is_staff_member
        if not self._users.mark_entered(student.id, now, clear_faculty=clear_faculty):
            # Lost the race against a concurrent scan of the same student
            current = self.get_by_id(student.id)
            raise AlreadyEntered(current.last_entered or now)

        logger.info("Central check-in of %s at %s", student.id, now.isoformat())
        return self.get_by_id(student.id)

    def _faculty_entry(self, student: User, faculty: str, now: datetime) -> User:
        previous = self._today_transaction(student.id, faculty, now)
        if previous is not None:
            raise AlreadyEntered(previous.registered_at)

        try:
            self._transactions.create(student.id, faculty, now)
        except DuplicateRecord:
            previous = self._today_transaction(student.id, faculty, now)
            raise AlreadyEntered(previous.registered_at if previous else now)

        logger.info("Faculty check-in of %s at %s (%s)", student.id, faculty, now.isoformat())
        return student

    def _today_transaction(self, student_id: str, faculty: str, now: datetime):
        for transaction in self._transactions.get_by_student_and_faculty(student_id, faculty):
            if is_same_day(transaction.registered_at, now):
                return transaction
        return None

    # =========================
    # Roles
    # =========================

    def add_staff(self, phone: str) -> User:
        user = self._users.get_by_phone(phone)
        if user is None:
            raise UserNotFound(f"No user with phone {phone}")
        if user.is_staff_member:
            raise AlreadyStaff()
        return self._save(user.id, {
            "role": Role.STAFF,
            "staff_kind": resolve_staff_kind(user.faculty, user.is_central_staff),
        })

    def remove_staff(self, user_id: str) -> User:
        self.get_by_id(user_id)
        return self._save(user_id, {"role": Role.MEMBER})

    def update_role(self, user_id: str, role: Role) -> User:
        user = self.get_by_id(user_id)
        fields: Dict[str, Any] = {"role": role}
        if role in (Role.STAFF, Role.ADMIN) and user.staff_kind is None:
            fields["staff_kind"] = resolve_staff_kind(user.faculty, user.is_central_staff)
        return self._save(user_id, fields)
