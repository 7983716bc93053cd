"""
Application errors.

Services raise these instead of HTTPException; the handler registered in
main.py turns them into ``{"error": ..., "message": ...}`` JSON responses with
the matching status code.
"""
from datetime import datetime
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for every error the API reports to clients."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message
        super().__init__(message or self.error)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        return body


# ============================================
# Validation
# ============================================

class ValidationError(AppError):
    status_code = 400
    error = "Invalid input"


class InvalidPhone(ValidationError):
    error = "Invalid phone number format"


# ============================================
# Not found
# ============================================

class NotFoundError(AppError):
    status_code = 404
    error = "Not found"


class UserNotFound(NotFoundError):
    error = "User not found"


class EvaluationNotFound(NotFoundError):
    error = "Student evaluation not found"


# ============================================
# Conflicts
# ============================================

class ConflictError(AppError):
    status_code = 409
    error = "Conflict"


class AlreadyEntered(ConflictError):
    """The student was already checked in today at the same place."""

    status_code = 400
    error = "User has already entered"

    def __init__(self, entered_at: datetime):
        self.entered_at = entered_at
        super().__init__(entered_at.isoformat())


class AlreadyStaff(ConflictError):
    status_code = 400
    error = "User is already a staff"


class EvaluationAlreadyExists(ConflictError):
    error = "Student evaluation already exists"


class DuplicateUser(ConflictError):
    error = "User with this phone or uid already exists"


class DuplicateRecord(ConflictError):
    """Raised by repositories when a unique constraint rejects a write."""

    error = "Duplicate record"


# ============================================
# Auth
# ============================================

class InvalidToken(AppError):
    status_code = 401
    error = "Invalid or expired token"


class Forbidden(AppError):
    status_code = 403
    error = "Access forbidden: insufficient role permissions"


# ============================================
# Internal
# ============================================

class InternalError(AppError):
    status_code = 500
    error = "Internal server error"


class UIDAllocationExhausted(InternalError):
    error = "Failed to allocate a unique UID"
