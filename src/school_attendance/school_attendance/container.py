from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .aggregation.engine import AggregationEngine
from .aggregation.policy import ThresholdStandingPolicy
from .core.constants import DEFAULT_GOOD_THRESHOLD, DEFAULT_WARNING_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .directory.mysql_directory_repository import MySQLDirectoryRepository
from .directory.repository import DirectoryRepository
from .gateway.service import LedgerGateway
from .ledger.memory_attendance_repository import InMemoryAttendanceRepository
from .ledger.mysql_attendance_repository import MySQLAttendanceRepository
from .ledger.repository import AttendanceRepository
from .ledger.service import AttendanceLedger


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    directory_repo: DirectoryRepository
    attendance_repo: AttendanceRepository

    attendance_ledger: AttendanceLedger
    aggregation_engine: AggregationEngine
    ledger_gateway: LedgerGateway


def build_container(
    *,
    db_config: dict,
    attendance_store: str = "mysql",
    good_threshold: int = DEFAULT_GOOD_THRESHOLD,
    warning_threshold: int = DEFAULT_WARNING_THRESHOLD,
    directory_repo: Optional[DirectoryRepository] = None,
) -> Container:
    conn = None
    if directory_repo is None or attendance_store == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    directory_repo = directory_repo or MySQLDirectoryRepository(conn)

    if attendance_store == "memory":
        attendance_repo: AttendanceRepository = InMemoryAttendanceRepository()
    elif attendance_store == "mysql":
        attendance_repo = MySQLAttendanceRepository(conn)
    else:
        raise ValueError(f"Unknown ATTENDANCE_STORE {attendance_store!r} (expected 'mysql' or 'memory')")

    attendance_ledger = AttendanceLedger(attendance_repo, directory_repo)
    aggregation_engine = AggregationEngine(
        policy=ThresholdStandingPolicy(good=int(good_threshold), warning=int(warning_threshold)),
    )
    ledger_gateway = LedgerGateway(attendance_ledger, aggregation_engine, directory_repo)

    return Container(
        conn=conn,
        directory_repo=directory_repo,
        attendance_repo=attendance_repo,
        attendance_ledger=attendance_ledger,
        aggregation_engine=aggregation_engine,
        ledger_gateway=ledger_gateway,
    )
