# backend/models/transaction.py
import uuid
from sqlalchemy import Column, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base

# One check-in of a student at one faculty booth.
# entered_on duplicates the calendar date of registered_at so the database can
# reject a second same-day row for the same (student, faculty).
class StudentTransaction(Base):
    __tablename__ = "student_transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_registration_id = Column(
        String, ForeignKey("users.id", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    faculty = Column(String, nullable=False, index=True)
    registered_at = Column(DateTime, nullable=False)
    entered_on = Column(Date, nullable=False, index=True)

    student = relationship("User", lazy="select")

    __table_args__ = (
        UniqueConstraint(
            "student_registration_id", "faculty", "entered_on",
            name="uq_student_transactions_student_faculty_day",
        ),
    )
