from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence, Union

from ..core.enums import AttendanceStatus, Standing
from ..directory.model import Student
from ..ledger.model import AttendanceRecord
from .policy import StandingPolicy, ThresholdStandingPolicy


@dataclass(frozen=True)
class DailyTotals:
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.late + self.excused

    def to_dict(self) -> dict:
        return {
            "presentCount": self.present,
            "absentCount": self.absent,
            "lateCount": self.late,
            "excusedCount": self.excused,
        }


@dataclass(frozen=True)
class StudentSummary:
    student_id: str
    totals: DailyTotals
    rate: int
    standing: Standing
    last_recorded: Optional[date]

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            **self.totals.to_dict(),
            "totalDays": self.totals.total,
            "attendanceRate": self.rate,
            "standing": self.standing.value,
            "lastRecorded": self.last_recorded.isoformat() if self.last_recorded else None,
        }


@dataclass(frozen=True)
class ClassDaySummary:
    class_id: str
    date: date
    totals: DailyTotals
    roster_size: int
    rate: int

    @property
    def unrecorded(self) -> int:
        return max(self.roster_size - self.totals.total, 0)

    def to_dict(self) -> dict:
        return {
            "classId": self.class_id,
            "date": self.date.isoformat(),
            **self.totals.to_dict(),
            "recorded": self.totals.total,
            "unrecorded": self.unrecorded,
            "rosterSize": self.roster_size,
            "attendanceRate": self.rate,
        }


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


def _percent(part: int, whole: int) -> int:
    """round(100 * part / whole), halves rounded up; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


class AggregationEngine:
    """Stateless statistics over ledger reads."""

    def __init__(self, *, policy: Optional[StandingPolicy] = None):
        self._policy = policy or ThresholdStandingPolicy()

    def attendance_rate(self, records: Sequence[AttendanceRecord]) -> int:
        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        return _percent(present, len(records))

    def classify_standing(self, rate: int) -> Standing:
        return self._policy.classify(int(rate))

    def totals_rate(self, totals: DailyTotals) -> int:
        """Present share of everything recorded in ``totals``."""
        return _percent(totals.present, totals.total)

    def daily_totals(
        self,
        records: Union[Iterable[AttendanceRecord], Mapping[str, AttendanceStatus]],
    ) -> DailyTotals:
        if isinstance(records, Mapping):
            statuses = list(records.values())
        else:
            statuses = [r.status for r in records]

        counts = {s: 0 for s in AttendanceStatus}
        for s in statuses:
            counts[AttendanceStatus(s)] += 1
        return DailyTotals(
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
            late=counts[AttendanceStatus.LATE],
            excused=counts[AttendanceStatus.EXCUSED],
        )

    def roster_rate(self, statuses: Mapping[str, AttendanceStatus], roster_size: int) -> int:
        """Class-page rate: present students over the whole roster."""
        present = sum(1 for s in statuses.values() if s == AttendanceStatus.PRESENT)
        return _percent(present, roster_size)

    def student_summary(self, student_id: str, records: Sequence[AttendanceRecord]) -> StudentSummary:
        rate = self.attendance_rate(records)
        return StudentSummary(
            student_id=student_id,
            totals=self.daily_totals(records),
            rate=rate,
            standing=self.classify_standing(rate),
            last_recorded=max((r.date for r in records), default=None),
        )

    def class_day_summary(
        self,
        class_id: str,
        on_date: date,
        statuses: Mapping[str, AttendanceStatus],
        roster_size: int,
    ) -> ClassDaySummary:
        return ClassDaySummary(
            class_id=class_id,
            date=on_date,
            totals=self.daily_totals(statuses),
            roster_size=int(roster_size),
            rate=self.roster_rate(statuses, roster_size),
        )

    def class_period_report(
        self,
        records: Sequence[AttendanceRecord],
        roster: Sequence[Student],
    ) -> ReportData:
        """One row per rostered student plus anyone with records in the window
        (students who moved classes keep their history)."""

        by_student: dict[str, list[AttendanceRecord]] = {s.student_id: [] for s in roster}
        for r in records:
            by_student.setdefault(r.student_id, []).append(r)

        names = {s.student_id: s.full_name for s in roster}
        rows: list[dict] = []
        for student_id, recs in by_student.items():
            summary = self.student_summary(student_id, recs)
            totals = asdict(summary.totals)
            rows.append(
                {
                    "student_id": student_id,
                    "student_name": names.get(student_id, "-"),
                    "total_days": summary.totals.total,
                    **totals,
                    "attendance_rate": summary.rate,
                    "standing": summary.standing.value,
                }
            )
        rows.sort(key=lambda x: (x["student_name"], x["student_id"]))

        class_totals = self.daily_totals(records)
        class_rate = self.attendance_rate(records)
        summary = {
            "students": len(rows),
            "days": len({r.date for r in records}),
            **asdict(class_totals),
            "attendance_rate": class_rate,
            "standing": self.classify_standing(class_rate).value,
        }
        return ReportData(rows=rows, summary=summary)
