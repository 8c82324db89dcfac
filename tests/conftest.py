from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pytest

from src.school_attendance.school_attendance.access.identity import Caller
from src.school_attendance.school_attendance.aggregation.engine import AggregationEngine
from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.directory.model import SchoolClass, Student
from src.school_attendance.school_attendance.gateway.service import LedgerGateway
from src.school_attendance.school_attendance.ledger.memory_attendance_repository import InMemoryAttendanceRepository
from src.school_attendance.school_attendance.ledger.service import AttendanceLedger


class InMemoryDirectory:
    def __init__(self, classes, students):
        self.classes = {c.class_id: c for c in classes}
        self.students = {s.student_id: s for s in students}

    def get_student(self, student_id: str) -> Optional[Student]:
        return self.students.get(student_id)

    def list_classes(self):
        return list(self.classes.values())

    def list_classes_for_teacher(self, teacher_id: str):
        return [c for c in self.classes.values() if c.teacher_id == teacher_id]

    def list_students_in_class(self, class_id: str):
        return [s for s in self.students.values() if s.class_id == class_id]

    def student_ids_in_class(self, class_id: str):
        return {s.student_id for s in self.students.values() if s.class_id == class_id}

    def is_teacher_assigned(self, teacher_id: str, class_id: str) -> bool:
        c = self.classes.get(class_id)
        return bool(c and c.teacher_id == teacher_id)

    def move_student(self, student_id: str, class_id: str) -> None:
        s = self.students[student_id]
        self.students[student_id] = Student(
            student_id=s.student_id,
            first_name=s.first_name,
            last_name=s.last_name,
            class_id=class_id,
            grade_id=s.grade_id,
        )


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 2, 8, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def directory():
    # c1 (teacher t1): s1, s2, s3; c2 (teacher t2): s4, s5; c3 has no teacher.
    return InMemoryDirectory(
        classes=[
            SchoolClass(class_id="c1", name="5A", grade_id="g5", teacher_id="t1"),
            SchoolClass(class_id="c2", name="5B", grade_id="g5", teacher_id="t2"),
            SchoolClass(class_id="c3", name="6A", grade_id="g6", teacher_id=None),
        ],
        students=[
            Student(student_id="s1", first_name="Ada", last_name="Lovelace", class_id="c1", grade_id="g5"),
            Student(student_id="s2", first_name="Alan", last_name="Turing", class_id="c1", grade_id="g5"),
            Student(student_id="s3", first_name="Grace", last_name="Hopper", class_id="c1", grade_id="g5"),
            Student(student_id="s4", first_name="Edsger", last_name="Dijkstra", class_id="c2", grade_id="g5"),
            Student(student_id="s5", first_name="Barbara", last_name="Liskov", class_id="c2", grade_id="g5"),
        ],
    )


@pytest.fixture
def attendance_repo():
    return InMemoryAttendanceRepository()


@pytest.fixture
def ledger(attendance_repo, directory, fixed_now):
    return AttendanceLedger(attendance_repo, directory, clock=lambda: fixed_now)


@pytest.fixture
def engine():
    return AggregationEngine()


@pytest.fixture
def gateway(ledger, engine, directory):
    return LedgerGateway(ledger, engine, directory)


@pytest.fixture
def admin():
    return Caller(user_id="admin-1", role=Role.SUPERADMIN)


@pytest.fixture
def teacher1():
    return Caller(user_id="t1", role=Role.TEACHER)


@pytest.fixture
def teacher2():
    return Caller(user_id="t2", role=Role.TEACHER)


@pytest.fixture
def student1():
    return Caller(user_id="s1", role=Role.STUDENT)
