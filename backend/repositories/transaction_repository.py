# backend/repositories/transaction_repository.py
from datetime import datetime
from typing import List, Optional, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import DuplicateRecord
from models.transaction import StudentTransaction


class TransactionRepository(Protocol):
    """Per-faculty attendance ledger."""

    def create(self, student_id: str, faculty: str, registered_at: datetime) -> StudentTransaction: ...

    def get_all(self) -> List[StudentTransaction]: ...

    def get_by_id(self, transaction_id: str) -> Optional[StudentTransaction]: ...

    def get_by_student(self, student_id: str) -> List[StudentTransaction]: ...

    def get_by_student_and_faculty(self, student_id: str, faculty: str) -> List[StudentTransaction]: ...

    def delete(self, transaction_id: str) -> bool: ...


class SqlTransactionRepository:
    def __init__(self, db: Session):
        self.db = db

    # Raises DuplicateRecord when the (student, faculty, day) row already exists
    def create(self, student_id: str, faculty: str, registered_at: datetime) -> StudentTransaction:
        transaction = StudentTransaction(
            student_registration_id=student_id,
            faculty=faculty,
            registered_at=registered_at,
            entered_on=registered_at.date(),
        )
        self.db.add(transaction)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecord(str(e.orig))
        self.db.refresh(transaction)
        return transaction

    def get_all(self) -> List[StudentTransaction]:
        return self.db.query(StudentTransaction).order_by(StudentTransaction.registered_at).all()

    def get_by_id(self, transaction_id: str) -> Optional[StudentTransaction]:
        return self.db.query(StudentTransaction).filter(StudentTransaction.id == transaction_id).first()

    def get_by_student(self, student_id: str) -> List[StudentTransaction]:
        return (self.db.query(StudentTransaction)
                .filter(StudentTransaction.student_registration_id == student_id)
                .order_by(StudentTransaction.registered_at)
                .all())

    def get_by_student_and_faculty(self, student_id: str, faculty: str) -> List[StudentTransaction]:
        return (self.db.query(StudentTransaction)
                .filter(StudentTransaction.student_registration_id == student_id,
                        StudentTransaction.faculty == faculty)
                .order_by(StudentTransaction.registered_at)
                .all())

    def delete(self, transaction_id: str) -> bool:
        transaction = self.get_by_id(transaction_id)
        if transaction is None:
            return False
        self.db.delete(transaction)
        self.db.commit()
        return True
