from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind = ErrorKind.INVALID_REQUEST
    retryable: bool = False


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDate(ValidationError):
    """Raised when a date is missing or is not a valid calendar date."""

    kind = ErrorKind.INVALID_DATE


class UnknownStudentInClass(ValidationError):
    """Raised when a submitted student is not a member of the target class."""

    kind = ErrorKind.UNKNOWN_STUDENT_IN_CLASS

    def __init__(self, class_id: str, student_ids):
        self.class_id = class_id
        self.student_ids = tuple(student_ids)
        super().__init__(f"{len(self.student_ids)} student(s) are not enrolled in this class")


class AuthorizationDenied(DomainError):
    """Raised when a caller lacks the capability for a class or student.

    The message never says whether the target exists.
    """

    kind = ErrorKind.AUTHORIZATION_DENIED

    def __init__(self, message: str = "You are not permitted to perform this action"):
        super().__init__(message)


class StoreUnavailable(DomainError):
    """Raised when the underlying persistence fails. Safe to retry."""

    kind = ErrorKind.STORE_UNAVAILABLE
    retryable = True
