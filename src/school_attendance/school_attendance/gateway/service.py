from __future__ import annotations

import logging
from typing import Callable, Mapping

from ..access.identity import Caller
from ..access.scope import AccessScope
from ..aggregation.engine import AggregationEngine, DailyTotals
from ..common.datetime_utils import coerce_date
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..directory.repository import DirectoryRepository
from ..ledger.service import AttendanceLedger
from .result import GatewayResult

logger = logging.getLogger(__name__)


class LedgerGateway:
    """Single entry point for the UI: scope check first, then ledger/aggregation.

    Every method returns a GatewayResult; domain errors never escape.
    """

    def __init__(self, ledger: AttendanceLedger, engine: AggregationEngine, directory: DirectoryRepository):
        self._ledger = ledger
        self._engine = engine
        self._directory = directory

    def scope_for(self, caller: Caller) -> AccessScope:
        return AccessScope(caller, self._directory)

    @staticmethod
    def _run(action: Callable[[], object]) -> GatewayResult:
        try:
            data = action()
        except DomainError as exc:
            return GatewayResult.failure(exc)
        if isinstance(data, GatewayResult):
            return data
        return GatewayResult.success(data)

    def get_attendance(self, caller: Caller, class_id: str, on_date) -> GatewayResult:
        def action():
            self.scope_for(caller).require_read_class(class_id)
            return self._ledger.read_by_class_date(class_id, on_date)

        return self._run(action)

    def get_student_attendance(self, caller: Caller, student_id: str, *, start=None, end=None) -> GatewayResult:
        def action():
            self.scope_for(caller).require_read_student(student_id)
            records = self._ledger.read_by_student(student_id, start=start, end=end)
            return sorted(records, key=lambda r: (r.date, r.class_id), reverse=True)

        return self._run(action)

    def save_attendance(
        self,
        caller: Caller,
        class_id: str,
        on_date,
        status_by_student: Mapping[str, object],
    ) -> GatewayResult:
        def action():
            self.scope_for(caller).require_write(class_id)
            result = self._ledger.save(
                class_id,
                on_date,
                status_by_student,
                caller.user_id,
            )
            return GatewayResult.success(result, message=result.message)

        return self._run(action)

    def get_class_summary(self, caller: Caller, class_id: str, on_date) -> GatewayResult:
        def action():
            self.scope_for(caller).require_read_class(class_id)
            day = coerce_date(on_date)
            statuses = self._ledger.read_by_class_date(class_id, day)
            roster = self._directory.list_students_in_class(class_id)
            return self._engine.class_day_summary(class_id, day, statuses, len(roster))

        return self._run(action)

    def get_student_summary(self, caller: Caller, student_id: str, *, start=None, end=None) -> GatewayResult:
        def action():
            self.scope_for(caller).require_read_student(student_id)
            records = self._ledger.read_by_student(student_id, start=start, end=end)
            return self._engine.student_summary(str(student_id), records)

        return self._run(action)

    def get_dashboard(self, caller: Caller, on_date) -> GatewayResult:
        """Today's picture for the caller.

        Staff get per-class totals over every readable class; a student gets
        their own summary.
        """

        def action():
            day = coerce_date(on_date)
            if caller.role == Role.STUDENT:
                records = self._ledger.read_by_student(caller.user_id)
                return {
                    "date": day.isoformat(),
                    "student": self._engine.student_summary(caller.user_id, records).to_dict(),
                }

            classes = []
            totals = DailyTotals()
            for class_id in self.scope_for(caller).readable_class_ids():
                statuses = self._ledger.read_by_class_date(class_id, day)
                roster = self._directory.list_students_in_class(class_id)
                summary = self._engine.class_day_summary(class_id, day, statuses, len(roster))
                classes.append(summary.to_dict())
                totals = DailyTotals(
                    present=totals.present + summary.totals.present,
                    absent=totals.absent + summary.totals.absent,
                    late=totals.late + summary.totals.late,
                    excused=totals.excused + summary.totals.excused,
                )
            return {
                "date": day.isoformat(),
                "classes": classes,
                "totalStudents": sum(c["rosterSize"] for c in classes),
                **totals.to_dict(),
                "attendanceRate": self._engine.totals_rate(totals),
            }

        return self._run(action)

    def export_class_report(self, caller: Caller, class_id: str, start, end) -> GatewayResult:
        def action():
            self.scope_for(caller).require_read_class(class_id)
            records = self._ledger.read_class_range(class_id, start, end)
            roster = self._directory.list_students_in_class(class_id)
            return self._engine.class_period_report(records, roster)

        return self._run(action)
