from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller roles used for access scoping."""

    SUPERADMIN = "superadmin"
    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Recorded status of one student on one day.

    There is no "unknown" member: a missing record means "not recorded".
    """

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class Standing(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class ErrorKind(str, Enum):
    """Failure kinds surfaced by the gateway."""

    AUTHORIZATION_DENIED = "authorization_denied"
    UNKNOWN_STUDENT_IN_CLASS = "unknown_student_in_class"
    INVALID_DATE = "invalid_date"
    INVALID_REQUEST = "invalid_request"
    STORE_UNAVAILABLE = "store_unavailable"
