import gzip
import io
from datetime import date, datetime

import pandas as pd

from models.users import Role, User
from services.dashboard_service import DashboardService, age_on


class InMemoryDashboard:
    def __init__(self, students, transactions=(), entered=()):
        self.students = list(students)
        self.transactions = list(transactions)
        self.entered = list(entered)

    def get_students(self):
        return self.students

    def get_students_by_interest(self, faculty):
        return [s for s in self.students
                if faculty in (s.first_interest, s.second_interest, s.third_interest)]

    def count_transactions_by_faculty(self, day):
        counts = {}
        for faculty, entered_on in self.transactions:
            if entered_on == day:
                counts[faculty] = counts.get(faculty, 0) + 1
        return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)

    def get_entered_timestamps(self):
        return self.entered


def student(id, **fields):
    return User(id=id, uid="AA00000000", name=id, phone="0800000000", role=Role.STUDENT, **fields)


STUDENTS = [
    student("a", first_interest="Engineering", second_interest="Science",
            selected_sources=["Facebook", "Friends"], status="M6", birth_date=date(2008, 3, 1)),
    student("b", first_interest="Engineering", third_interest="Arts",
            selected_sources=["Facebook"], status="M6", birth_date=date(2008, 12, 1)),
    student("c", first_interest="Science", status="M5", birth_date=date(2009, 1, 15)),
]


def test_faculty_interest_ranks():
    service = DashboardService(InMemoryDashboard(STUDENTS))

    rows = {r.faculty: r for r in service.faculty_interest()}

    assert rows["Engineering"].first_interest == 2
    assert rows["Science"].first_interest == 1
    assert rows["Science"].second_interest == 1
    assert rows["Arts"].third_interest == 1
    assert service.faculty_interest()[0].faculty in ("Engineering", "Science")


def test_source_counts_most_common_first():
    service = DashboardService(InMemoryDashboard(STUDENTS))

    counts = [(r.source, r.count) for r in service.source_counts()]

    assert counts == [("Facebook", 2), ("Friends", 1)]


def test_age_counts():
    service = DashboardService(InMemoryDashboard(STUDENTS))

    counts = {r.age: r.count for r in service.age_counts(today=date(2025, 6, 1))}

    assert counts == {17: 1, 16: 2}


def test_age_on_birthday_boundary():
    assert age_on(date(2008, 6, 1), date(2025, 6, 1)) == 17
    assert age_on(date(2008, 6, 2), date(2025, 6, 1)) == 16


def test_status_counts():
    service = DashboardService(InMemoryDashboard(STUDENTS))

    assert [(r.status, r.count) for r in service.status_counts()] == [("M6", 2), ("M5", 1)]


def test_faculty_today_only_counts_today():
    today = date(2025, 1, 10)
    transactions = [("Engineering", today), ("Engineering", today), ("Arts", date(2025, 1, 9))]
    service = DashboardService(InMemoryDashboard(STUDENTS, transactions=transactions))

    rows = service.faculty_today(today=today)

    assert [(r.faculty, r.count) for r in rows] == [("Engineering", 2)]


def test_attended_counts_per_day():
    entered = [datetime(2025, 1, 11, 9), datetime(2025, 1, 10, 9), datetime(2025, 1, 10, 14)]
    service = DashboardService(InMemoryDashboard(STUDENTS, entered=entered))

    rows = service.attended_counts()

    assert [(r.day, r.count) for r in rows] == [(date(2025, 1, 10), 2), (date(2025, 1, 11), 1)]


def test_export_is_gzip_csv_with_headers():
    service = DashboardService(InMemoryDashboard(STUDENTS))

    payload = service.export_students_csv()

    df = pd.read_csv(io.StringIO(gzip.decompress(payload).decode()))
    assert list(df.columns) == ["ID", "Name", "Email", "Phone",
                                "First Interest", "Second Interest", "Third Interest"]
    assert list(df["ID"]) == ["a", "b", "c"]


def test_export_filtered_by_faculty():
    service = DashboardService(InMemoryDashboard(STUDENTS))

    payload = service.export_students_csv(faculty="Arts")

    df = pd.read_csv(io.StringIO(gzip.decompress(payload).decode()))
    assert list(df["ID"]) == ["b"]
