from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    """Directory entity: a class (homeroom) belonging to a grade.

    Note: Read-only reference data for the ledger.
    """

    class_id: str
    name: str
    grade_id: str
    teacher_id: Optional[str] = None


@dataclass(frozen=True)
class Student:
    student_id: str
    first_name: str
    last_name: str
    class_id: Optional[str]
    grade_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
