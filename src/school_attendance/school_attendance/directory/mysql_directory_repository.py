from __future__ import annotations

from typing import Optional, Sequence, Set

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SchoolClass, Student
from .repository import DirectoryRepository


def _to_student(r: dict) -> Student:
    return Student(
        student_id=str(r["student_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        class_id=str(r["class_id"]) if r.get("class_id") is not None else None,
        grade_id=str(r["grade_id"]) if r.get("grade_id") is not None else None,
    )


def _to_class(r: dict) -> SchoolClass:
    return SchoolClass(
        class_id=str(r["class_id"]),
        name=r["name"],
        grade_id=str(r["grade_id"]),
        teacher_id=str(r["teacher_id"]) if r.get("teacher_id") is not None else None,
    )


class MySQLDirectoryRepository(DirectoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_student(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, first_name, last_name, class_id, grade_id
                FROM students
                WHERE student_id=%s
                """,
                (student_id,),
            )
            row = fetchone(cur)
            return _to_student(row) if row else None

    def list_classes(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name, grade_id, teacher_id FROM classes ORDER BY name")
            return [_to_class(r) for r in fetchall(cur)]

    def list_classes_for_teacher(self, teacher_id: str) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, name, grade_id, teacher_id
                FROM classes
                WHERE teacher_id=%s
                ORDER BY name
                """,
                (teacher_id,),
            )
            return [_to_class(r) for r in fetchall(cur)]

    def list_students_in_class(self, class_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, first_name, last_name, class_id, grade_id
                FROM students
                WHERE class_id=%s
                ORDER BY last_name, first_name
                """,
                (class_id,),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def student_ids_in_class(self, class_id: str) -> Set[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id FROM students WHERE class_id=%s", (class_id,))
            return {str(r["student_id"]) for r in fetchall(cur)}

    def is_teacher_assigned(self, teacher_id: str, class_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS ok FROM classes WHERE class_id=%s AND teacher_id=%s",
                (class_id, teacher_id),
            )
            return fetchone(cur) is not None
