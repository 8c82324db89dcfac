from __future__ import annotations

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def parse_status(value, student_id: str) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid status {value!r} for student {student_id} (allowed: {allowed})")
