# backend/services/dashboard_service.py
"""
Read-only statistics for the organiser dashboard.

Aggregation happens in Python over the student rows so the same code runs on
SQLite and PostgreSQL.
"""
import io
from collections import Counter
from datetime import date
from typing import Dict, List, Optional

import pandas as pd

from repositories.dashboard_repository import DashboardRepository
from schemas.dashboard import (
    AgeCount, AttendedCount, FacultyCount, FacultyInterest, SourceCount, StatusCount,
)

# Column headers of the student export
EXPORT_COLUMNS = {
    "id": "ID",
    "name": "Name",
    "email": "Email",
    "phone": "Phone",
    "first_interest": "First Interest",
    "second_interest": "Second Interest",
    "third_interest": "Third Interest",
}

INTEREST_FIELDS = ("first_interest", "second_interest", "third_interest")


def age_on(birth_date: date, today: date) -> int:
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


class DashboardService:
    def __init__(self, dashboard: DashboardRepository):
        self._dashboard = dashboard

    # How many students ranked each faculty first, second and third
    def faculty_interest(self) -> List[FacultyInterest]:
        ranks: Dict[str, List[int]] = {}
        for student in self._dashboard.get_students():
            for position, field in enumerate(INTEREST_FIELDS):
                faculty = getattr(student, field)
                if faculty:
                    ranks.setdefault(faculty, [0, 0, 0])[position] += 1

        rows = [
            FacultyInterest(faculty=f, first_interest=c[0], second_interest=c[1], third_interest=c[2])
            for f, c in ranks.items()
        ]
        rows.sort(key=lambda r: r.first_interest + r.second_interest + r.third_interest, reverse=True)
        return rows

    def source_counts(self) -> List[SourceCount]:
        counter: Counter = Counter()
        for student in self._dashboard.get_students():
            counter.update(student.selected_sources or [])
        return [SourceCount(source=s, count=c) for s, c in counter.most_common()]

    def age_counts(self, today: Optional[date] = None) -> List[AgeCount]:
        today = today or date.today()
        counter = Counter(
            age_on(s.birth_date, today)
            for s in self._dashboard.get_students()
            if s.birth_date is not None
        )
        return [AgeCount(age=a, count=counter[a]) for a in sorted(counter)]

    def faculty_today(self, today: Optional[date] = None) -> List[FacultyCount]:
        today = today or date.today()
        return [
            FacultyCount(faculty=f, count=c)
            for f, c in self._dashboard.count_transactions_by_faculty(today)
        ]

    def status_counts(self) -> List[StatusCount]:
        counter = Counter(s.status for s in self._dashboard.get_students() if s.status)
        return [StatusCount(status=s, count=c) for s, c in counter.most_common()]

    # Central check-ins per calendar day, oldest first
    def attended_counts(self) -> List[AttendedCount]:
        counter = Counter(ts.date() for ts in self._dashboard.get_entered_timestamps())
        return [AttendedCount(day=d, count=counter[d]) for d in sorted(counter)]

    def export_students_csv(self, faculty: Optional[str] = None) -> bytes:
        """Gzip-compressed CSV of the student list, optionally limited to one faculty of interest."""
        if faculty:
            students = self._dashboard.get_students_by_interest(faculty)
        else:
            students = self._dashboard.get_students()

        df = pd.DataFrame(
            [{field: getattr(s, field) or "" for field in EXPORT_COLUMNS} for s in students],
            columns=list(EXPORT_COLUMNS),
        ).rename(columns=EXPORT_COLUMNS)

        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, compression="gzip")
        return buffer.getvalue()
