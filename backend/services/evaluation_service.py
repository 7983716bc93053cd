# backend/services/evaluation_service.py
import logging
from typing import Any, Dict, List

from errors import DuplicateRecord, EvaluationAlreadyExists, EvaluationNotFound, ValidationError
from models.evaluation import StudentEvaluation
from repositories.evaluation_repository import EvaluationRepository

logger = logging.getLogger(__name__)


class EvaluationService:
    """Post-event questionnaire, at most one per student."""

    def __init__(self, evaluations: EvaluationRepository):
        self._evaluations = evaluations

    def create(self, student_id: str, fields: Dict[str, Any]) -> StudentEvaluation:
        if self._evaluations.get_by_student_id(student_id) is not None:
            raise EvaluationAlreadyExists(f"Student {student_id} has already submitted an evaluation")

        evaluation = StudentEvaluation(**fields, student_id=student_id)
        try:
            evaluation = self._evaluations.create(evaluation)
        except DuplicateRecord:
            raise EvaluationAlreadyExists(f"Student {student_id} has already submitted an evaluation")

        logger.info("Stored evaluation %s for student %s", evaluation.id, student_id)
        return evaluation

    def get(self, student_id: str) -> StudentEvaluation:
        evaluation = self._evaluations.get_by_student_id(student_id)
        if evaluation is None:
            raise EvaluationNotFound(f"No evaluation for student {student_id}")
        return evaluation

    def list(self) -> List[StudentEvaluation]:
        return self._evaluations.get_all()

    def count(self) -> int:
        return self._evaluations.count()

    def update(self, student_id: str, fields: Dict[str, Any]) -> StudentEvaluation:
        fields = {k: v for k, v in fields.items() if k not in ("id", "student_id")}
        try:
            evaluation = self._evaluations.update(student_id, fields)
        except DuplicateRecord as e:
            logger.warning("Rejected evaluation update for %s: %s", student_id, e.message)
            raise ValidationError("Evaluation fields could not be saved")
        if evaluation is None:
            raise EvaluationNotFound(f"No evaluation for student {student_id}")
        return evaluation

    def delete(self, student_id: str) -> None:
        if not self._evaluations.delete(student_id):
            raise EvaluationNotFound(f"No evaluation for student {student_id}")
        logger.info("Deleted evaluation of student %s", student_id)
