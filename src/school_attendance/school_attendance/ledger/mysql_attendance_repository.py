from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, date, class_id, student_id, status, marked_by_id, marked_at"


def _to_db_timestamp(value: datetime) -> datetime:
    # DATETIME columns hold naive UTC.
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _from_db_timestamp(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["id"]),
        date=r["date"],
        class_id=str(r["class_id"]),
        student_id=str(r["student_id"]),
        status=AttendanceStatus(r["status"]),
        marked_by_id=str(r["marked_by_id"]),
        marked_at=_from_db_timestamp(r["marked_at"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_class_and_date(self, class_id: str, on_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE class_id=%s AND date=%s
                """,
                (class_id, on_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_student(
        self,
        student_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["student_id=%s"]
        params: list[object] = [student_id]

        if start_date is not None:
            clauses.append("date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE {where}", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_class_range(self, class_id: str, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE class_id=%s AND date BETWEEN %s AND %s
                ORDER BY date ASC
                """,
                (class_id, start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def replace_for_class_and_date(
        self,
        class_id: str,
        on_date: date,
        records: Sequence[AttendanceRecord],
    ) -> int:
        # Delete and insert share one transaction: db_cursor rolls both back on failure.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE class_id=%s AND date=%s",
                (class_id, on_date),
            )
            removed = int(cur.rowcount or 0)

            if records:
                cur.executemany(
                    f"""
                    INSERT INTO attendance_records({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            r.record_id,
                            r.date,
                            r.class_id,
                            r.student_id,
                            r.status.value,
                            r.marked_by_id,
                            _to_db_timestamp(r.marked_at),
                        )
                        for r in records
                    ],
                )
            return removed
