# backend/repositories/dashboard_repository.py
from datetime import date, datetime
from typing import List, Protocol, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.transaction import StudentTransaction
from models.users import Role, User


class DashboardRepository(Protocol):
    """Read-only queries behind the dashboard."""

    def get_students(self) -> List[User]: ...

    def get_students_by_interest(self, faculty: str) -> List[User]: ...

    def count_transactions_by_faculty(self, day: date) -> List[Tuple[str, int]]: ...

    def get_entered_timestamps(self) -> List[datetime]: ...


class SqlDashboardRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_students(self) -> List[User]:
        return (self.db.query(User)
                .filter(User.role == Role.STUDENT)
                .order_by(User.registered_at)
                .all())

    def get_students_by_interest(self, faculty: str) -> List[User]:
        return (self.db.query(User)
                .filter(User.role == Role.STUDENT)
                .filter((User.first_interest == faculty)
                        | (User.second_interest == faculty)
                        | (User.third_interest == faculty))
                .order_by(User.registered_at)
                .all())

    # Faculty check-ins recorded on the given calendar day
    def count_transactions_by_faculty(self, day: date) -> List[Tuple[str, int]]:
        rows = (
            self.db.query(
                StudentTransaction.faculty.label("faculty"),
                func.count(StudentTransaction.id).label("count"),
            )
            .filter(StudentTransaction.entered_on == day)
            .group_by(StudentTransaction.faculty)
            .order_by(func.count(StudentTransaction.id).desc())
            .all()
        )
        return [(r.faculty, r.count) for r in rows]

    def get_entered_timestamps(self) -> List[datetime]:
        rows = self.db.query(User.last_entered).filter(User.last_entered.isnot(None)).all()
        return [r.last_entered for r in rows]
