from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Callable, Dict, List, Mapping, Optional

from ..common.datetime_utils import coerce_date, coerce_optional_date, now_utc
from ..common.keyed_lock import KeyedLock
from ..common.validators import parse_status, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import UnknownStudentInClass, ValidationError
from ..directory.repository import DirectoryRepository
from .model import AttendanceRecord, SaveResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _new_record_id() -> str:
    return str(uuid.uuid4())


class AttendanceLedger:
    """Canonical attendance record set with replace-on-save semantics.

    A save for (class_id, date) always replaces the full set for that key:
    students left out of the submission lose their record for the day, and an
    empty submission clears the day.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        directory: DirectoryRepository,
        *,
        locks: Optional[KeyedLock] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._attendance = attendance
        self._directory = directory
        self._locks = locks or KeyedLock()
        self._clock = clock or now_utc
        self._new_id = id_factory or _new_record_id

    def read_by_class_date(self, class_id: str, on_date) -> Dict[str, AttendanceStatus]:
        class_id = require_non_empty(class_id, "classId")
        on_date = coerce_date(on_date)
        records = self._attendance.get_for_class_and_date(class_id, on_date)
        return {r.student_id: r.status for r in records}

    def read_by_student(self, student_id: str, *, start=None, end=None) -> List[AttendanceRecord]:
        student_id = require_non_empty(student_id, "studentId")
        start_d = coerce_optional_date(start)
        end_d = coerce_optional_date(end)
        self._check_range(start_d, end_d)
        return list(self._attendance.get_for_student(student_id, start_date=start_d, end_date=end_d))

    def read_class_range(self, class_id: str, start, end) -> List[AttendanceRecord]:
        class_id = require_non_empty(class_id, "classId")
        start_d = coerce_date(start)
        end_d = coerce_date(end)
        self._check_range(start_d, end_d)
        return list(self._attendance.get_for_class_range(class_id, start_date=start_d, end_date=end_d))

    def save(
        self,
        class_id: str,
        on_date,
        status_by_student: Mapping[str, object],
        marked_by_id: str,
    ) -> SaveResult:
        class_id = require_non_empty(class_id, "classId")
        marked_by_id = require_non_empty(marked_by_id, "markedById")
        on_date = coerce_date(on_date)

        statuses = {
            str(student_id): parse_status(value, str(student_id))
            for student_id, value in (status_by_student or {}).items()
        }
        if statuses:
            enrolled = self._directory.student_ids_in_class(class_id)
            unknown = sorted(set(statuses) - enrolled)
            if unknown:
                logger.info("Rejected save for class %s on %s: %d unknown student(s)", class_id, on_date, len(unknown))
                raise UnknownStudentInClass(class_id, unknown)

        with self._locks.hold((class_id, on_date)):
            marked_at = self._clock()
            records = [
                AttendanceRecord(
                    record_id=self._new_id(),
                    date=on_date,
                    class_id=class_id,
                    student_id=student_id,
                    status=status,
                    marked_by_id=marked_by_id,
                    marked_at=marked_at,
                )
                for student_id, status in statuses.items()
            ]
            removed = self._attendance.replace_for_class_and_date(class_id, on_date, records)

        logger.info(
            "Saved attendance class=%s date=%s saved=%d removed=%d by=%s",
            class_id,
            on_date,
            len(records),
            removed,
            marked_by_id,
        )

        if records:
            message = f"Attendance saved for {on_date.isoformat()} ({len(records)} student(s))"
        else:
            message = f"Attendance cleared for {on_date.isoformat()}"

        return SaveResult(
            class_id=class_id,
            date=on_date,
            saved_count=len(records),
            removed_count=removed,
            marked_by_id=marked_by_id,
            marked_at=marked_at,
            message=message,
        )

    @staticmethod
    def _check_range(start: Optional[date], end: Optional[date]) -> None:
        if start and end and end < start:
            raise ValidationError("End date cannot be before start date")
