# In-memory repositories for service tests
from datetime import datetime
from typing import Any, Dict, List, Optional

from errors import DuplicateRecord
from models.evaluation import StudentEvaluation
from models.transaction import StudentTransaction
from models.users import User


class InMemoryUsers:
    def __init__(self, *users: User):
        self.users: Dict[str, User] = {}
        for user in users:
            self.users[user.id] = user

    def _check_unique(self, user: User, exclude: Optional[str] = None) -> None:
        for other in self.users.values():
            if other.id == exclude:
                continue
            if other.phone == user.phone or other.uid == user.uid:
                raise DuplicateRecord(f"phone or uid taken by {other.id}")

    def create(self, user: User) -> User:
        if user.id in self.users:
            raise DuplicateRecord(f"id {user.id} taken")
        self._check_unique(user)
        self.users[user.id] = user
        return user

    def get_all(self) -> List[User]:
        return list(self.users.values())

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_phone(self, phone: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.phone == phone), None)

    def get_by_name(self, name: str) -> List[User]:
        return [u for u in self.users.values() if name.lower() in (u.name or "").lower()]

    def uid_exists(self, uid: str) -> bool:
        return any(u.uid == uid for u in self.users.values())

    def update(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        user = self.users.get(user_id)
        if user is None:
            return None
        if "phone" in fields:
            for other in self.users.values():
                if other.id != user_id and other.phone == fields["phone"]:
                    raise DuplicateRecord(f"phone taken by {other.id}")
        for key, value in fields.items():
            setattr(user, key, value)
        return user

    def mark_entered(self, user_id: str, now: datetime, *, clear_faculty: bool = False) -> bool:
        user = self.users[user_id]
        if user.last_entered is not None and user.last_entered.date() == now.date():
            return False
        user.last_entered = now
        if clear_faculty:
            user.faculty = None
        return True

    def delete(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None


class InMemoryTransactions:
    def __init__(self):
        self.rows: List[StudentTransaction] = []

    def create(self, student_id: str, faculty: str, registered_at: datetime) -> StudentTransaction:
        for row in self.rows:
            if (row.student_registration_id, row.faculty, row.entered_on) == (student_id, faculty, registered_at.date()):
                raise DuplicateRecord("student already recorded at this faculty today")
        row = StudentTransaction(
            id=str(len(self.rows) + 1),
            student_registration_id=student_id,
            faculty=faculty,
            registered_at=registered_at,
            entered_on=registered_at.date(),
        )
        self.rows.append(row)
        return row

    def get_all(self) -> List[StudentTransaction]:
        return list(self.rows)

    def get_by_id(self, transaction_id: str) -> Optional[StudentTransaction]:
        return next((r for r in self.rows if r.id == transaction_id), None)

    def get_by_student(self, student_id: str) -> List[StudentTransaction]:
        return [r for r in self.rows if r.student_registration_id == student_id]

    def get_by_student_and_faculty(self, student_id: str, faculty: str) -> List[StudentTransaction]:
        return [r for r in self.get_by_student(student_id) if r.faculty == faculty]

    def delete(self, transaction_id: str) -> bool:
        row = self.get_by_id(transaction_id)
        if row is None:
            return False
        self.rows.remove(row)
        return True


class InMemoryEvaluations:
    def __init__(self):
        self.by_student: Dict[str, StudentEvaluation] = {}

    def create(self, evaluation: StudentEvaluation) -> StudentEvaluation:
        if evaluation.student_id in self.by_student:
            raise DuplicateRecord("evaluation exists")
        evaluation.id = len(self.by_student) + 1
        self.by_student[evaluation.student_id] = evaluation
        return evaluation

    def get_by_student_id(self, student_id: str) -> Optional[StudentEvaluation]:
        return self.by_student.get(student_id)

    def get_by_id(self, evaluation_id: int) -> Optional[StudentEvaluation]:
        return next((e for e in self.by_student.values() if e.id == evaluation_id), None)

    def get_all(self) -> List[StudentEvaluation]:
        return list(self.by_student.values())

    def count(self) -> int:
        return len(self.by_student)

    def update(self, student_id: str, fields: Dict[str, Any]) -> Optional[StudentEvaluation]:
        evaluation = self.by_student.get(student_id)
        if evaluation is None:
            return None
        for key, value in fields.items():
            setattr(evaluation, key, value)
        return evaluation

    def delete(self, student_id: str) -> bool:
        return self.by_student.pop(student_id, None) is not None
