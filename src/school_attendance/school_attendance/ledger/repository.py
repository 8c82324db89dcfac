from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_class_and_date(self, class_id: str, on_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_student(
        self,
        student_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_class_range(self, class_id: str, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def replace_for_class_and_date(
        self,
        class_id: str,
        on_date: date,
        records: Sequence[AttendanceRecord],
    ) -> int:
        """Atomically swap every record of (class_id, on_date) for ``records``.

        Readers observe either the old set or the new one, never a mix or an
        empty intermediate. Returns how many records were removed.
        """

        raise NotImplementedError
