from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.school_attendance.school_attendance.aggregation.engine import AggregationEngine, DailyTotals
from src.school_attendance.school_attendance.aggregation.policy import ThresholdStandingPolicy
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Standing
from src.school_attendance.school_attendance.directory.model import Student
from src.school_attendance.school_attendance.ledger.model import AttendanceRecord

P, A, L, E = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE, AttendanceStatus.EXCUSED


def _records(*statuses, student_id="s1", class_id="c1"):
    return [
        AttendanceRecord(
            record_id=f"r{i}",
            date=date(2026, 1, 1 + i),
            class_id=class_id,
            student_id=student_id,
            status=s,
            marked_by_id="t1",
            marked_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
        for i, s in enumerate(statuses)
    ]


def test_rate_seven_of_ten_present(engine):
    assert engine.attendance_rate(_records(*([P] * 7 + [A, L, E]))) == 70


def test_rate_is_zero_without_records(engine):
    assert engine.attendance_rate([]) == 0


def test_rate_rounds_half_up(engine):
    assert engine.attendance_rate(_records(P, A, A, A, A, A, A, A)) == 13  # 12.5
    assert engine.attendance_rate(_records(P, P, A)) == 67


def test_late_and_excused_do_not_count_as_present(engine):
    assert engine.attendance_rate(_records(L, E)) == 0


@pytest.mark.parametrize(
    "rate, expected",
    [(100, Standing.GOOD), (80, Standing.GOOD), (79, Standing.WARNING), (60, Standing.WARNING), (59, Standing.CRITICAL), (0, Standing.CRITICAL)],
)
def test_standing_thresholds(engine, rate, expected):
    assert engine.classify_standing(rate) == expected


def test_custom_thresholds():
    engine = AggregationEngine(policy=ThresholdStandingPolicy(good=90, warning=75))
    assert engine.classify_standing(85) == Standing.WARNING
    assert engine.classify_standing(74) == Standing.CRITICAL


def test_invalid_thresholds_rejected():
    with pytest.raises(ValueError):
        ThresholdStandingPolicy(good=50, warning=60)


def test_daily_totals_from_records_and_mapping(engine):
    assert engine.daily_totals(_records(P, P, A, L)) == DailyTotals(present=2, absent=1, late=1, excused=0)
    assert engine.daily_totals({"s1": E, "s2": P}) == DailyTotals(present=1, excused=1)
    assert engine.daily_totals([]).total == 0


def test_class_day_summary_uses_roster_size(engine):
    summary = engine.class_day_summary("c1", date(2026, 2, 2), {"s1": P, "s2": A}, roster_size=4)

    assert summary.rate == 25
    assert summary.unrecorded == 2
    assert summary.to_dict()["presentCount"] == 1
    assert engine.class_day_summary("c1", date(2026, 2, 2), {}, roster_size=0).rate == 0


def test_student_summary(engine):
    summary = engine.student_summary("s1", _records(P, P, P, A))

    assert summary.rate == 75
    assert summary.standing == Standing.WARNING
    assert summary.last_recorded == date(2026, 1, 4)
    assert summary.to_dict()["totalDays"] == 4


def test_class_period_report_includes_roster_and_moved_students(engine):
    roster = [
        Student(student_id="s1", first_name="Ada", last_name="Lovelace", class_id="c1"),
        Student(student_id="s2", first_name="Alan", last_name="Turing", class_id="c1"),
    ]
    records = _records(P, P, A, student_id="s1") + _records(A, student_id="s9")

    report = engine.class_period_report(records, roster)

    by_id = {r["student_id"]: r for r in report.rows}
    assert by_id["s1"]["attendance_rate"] == 67
    assert by_id["s2"]["total_days"] == 0
    assert by_id["s2"]["standing"] == Standing.CRITICAL.value
    assert by_id["s9"]["student_name"] == "-"
    assert report.summary["students"] == 3
    assert report.summary["present"] == 2


def test_totals_rate(engine):
    assert engine.totals_rate(DailyTotals(present=2, absent=1)) == 67
    assert engine.totals_rate(DailyTotals(present=1, late=1, excused=2)) == 25
    assert engine.totals_rate(DailyTotals()) == 0
