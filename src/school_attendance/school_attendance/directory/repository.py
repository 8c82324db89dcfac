from __future__ import annotations

from typing import Optional, Protocol, Sequence, Set

from .model import SchoolClass, Student


class DirectoryRepository(Protocol):
    """Read-only view over students, classes and teacher assignments.

    Note (DIP): the ledger and access layers depend on this interface, never on a concrete DB.
    """

    def get_student(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_classes(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def list_classes_for_teacher(self, teacher_id: str) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def list_students_in_class(self, class_id: str) -> Sequence[Student]:
        raise NotImplementedError

    def student_ids_in_class(self, class_id: str) -> Set[str]:
        raise NotImplementedError

    def is_teacher_assigned(self, teacher_id: str, class_id: str) -> bool:
        raise NotImplementedError
