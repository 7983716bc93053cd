# backend/schemas/dashboard.py
from datetime import date

from schemas.user import CamelModel


class FacultyInterest(CamelModel):
    faculty: str
    first_interest: int
    second_interest: int
    third_interest: int


class SourceCount(CamelModel):
    source: str
    count: int


class AgeCount(CamelModel):
    age: int
    count: int


# Faculty check-ins recorded today
class FacultyCount(CamelModel):
    faculty: str
    count: int


class StatusCount(CamelModel):
    status: str
    count: int


class AttendedCount(CamelModel):
    day: date
    count: int
