from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status for one class on one day.

    Never mutated; a save replaces the whole (class_id, date) set.
    """

    record_id: str
    date: date
    class_id: str
    student_id: str
    status: AttendanceStatus
    marked_by_id: str
    marked_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "date": self.date.isoformat(),
            "classId": self.class_id,
            "studentId": self.student_id,
            "status": self.status.value,
            "markedById": self.marked_by_id,
            "markedAt": self.marked_at.isoformat(),
        }


@dataclass(frozen=True)
class SaveResult:
    """Outcome of one reconciling save; ``message`` is meant for the UI."""

    class_id: str
    date: date
    saved_count: int
    removed_count: int
    marked_by_id: str
    marked_at: datetime
    message: str

    def to_dict(self) -> dict:
        return {
            "classId": self.class_id,
            "date": self.date.isoformat(),
            "savedCount": self.saved_count,
            "removedCount": self.removed_count,
            "markedById": self.marked_by_id,
            "markedAt": self.marked_at.isoformat(),
            "message": self.message,
        }
