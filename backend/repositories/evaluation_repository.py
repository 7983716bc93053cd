# backend/repositories/evaluation_repository.py
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import DuplicateRecord
from models.evaluation import StudentEvaluation


class EvaluationRepository(Protocol):
    def create(self, evaluation: StudentEvaluation) -> StudentEvaluation: ...

    def get_by_student_id(self, student_id: str) -> Optional[StudentEvaluation]: ...

    def get_by_id(self, evaluation_id: int) -> Optional[StudentEvaluation]: ...

    def get_all(self) -> List[StudentEvaluation]: ...

    def count(self) -> int: ...

    def update(self, student_id: str, fields: Dict[str, Any]) -> Optional[StudentEvaluation]: ...

    def delete(self, student_id: str) -> bool: ...


class SqlEvaluationRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, evaluation: StudentEvaluation) -> StudentEvaluation:
        self.db.add(evaluation)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecord(str(e.orig))
        self.db.refresh(evaluation)
        return evaluation

    def get_by_student_id(self, student_id: str) -> Optional[StudentEvaluation]:
        return self.db.query(StudentEvaluation).filter(StudentEvaluation.student_id == student_id).first()

    def get_by_id(self, evaluation_id: int) -> Optional[StudentEvaluation]:
        return self.db.query(StudentEvaluation).filter(StudentEvaluation.id == evaluation_id).first()

    def get_all(self) -> List[StudentEvaluation]:
        return self.db.query(StudentEvaluation).order_by(StudentEvaluation.id).all()

    def count(self) -> int:
        return self.db.query(StudentEvaluation).count()

    def update(self, student_id: str, fields: Dict[str, Any]) -> Optional[StudentEvaluation]:
        evaluation = self.get_by_student_id(student_id)
        if evaluation is None:
            return None
        for key, value in fields.items():
            setattr(evaluation, key, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecord(str(e.orig))
        self.db.refresh(evaluation)
        return evaluation

    def delete(self, student_id: str) -> bool:
        evaluation = self.get_by_student_id(student_id)
        if evaluation is None:
            return False
        self.db.delete(evaluation)
        self.db.commit()
        return True
