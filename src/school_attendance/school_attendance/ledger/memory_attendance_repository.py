from __future__ import annotations

import threading
from datetime import date
from typing import Dict, Optional, Sequence, Tuple

from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local attendance store (ATTENDANCE_STORE=memory).

    Records are kept per (class_id, date) bucket; a replace builds the new
    bucket first and swaps it in under the store lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._buckets: Dict[Tuple[str, date], Dict[str, AttendanceRecord]] = {}

    def get_for_class_and_date(self, class_id: str, on_date: date) -> Sequence[AttendanceRecord]:
        with self._lock:
            bucket = self._buckets.get((class_id, on_date), {})
            return list(bucket.values())

    def get_for_student(
        self,
        student_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        with self._lock:
            out = []
            for (_, on_date), bucket in self._buckets.items():
                if start_date is not None and on_date < start_date:
                    continue
                if end_date is not None and on_date > end_date:
                    continue
                rec = bucket.get(student_id)
                if rec is not None:
                    out.append(rec)
            return out

    def get_for_class_range(self, class_id: str, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with self._lock:
            out = []
            for (cid, on_date), bucket in self._buckets.items():
                if cid == class_id and start_date <= on_date <= end_date:
                    out.extend(bucket.values())
        out.sort(key=lambda r: r.date)
        return out

    def replace_for_class_and_date(
        self,
        class_id: str,
        on_date: date,
        records: Sequence[AttendanceRecord],
    ) -> int:
        bucket = {r.student_id: r for r in records}
        key = (class_id, on_date)
        with self._lock:
            previous = self._buckets.pop(key, {})
            if bucket:
                self._buckets[key] = bucket
        return len(previous)

    def count(self) -> int:
        with self._lock:
            return sum(len(b) for b in self._buckets.values())
