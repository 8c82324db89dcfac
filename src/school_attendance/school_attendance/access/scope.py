from __future__ import annotations

import logging
from typing import List

from ..core.enums import Role
from ..core.exceptions import AuthorizationDenied
from ..directory.repository import DirectoryRepository
from .identity import Caller

logger = logging.getLogger(__name__)


class AccessScope:
    """Capability queries for one caller.

    Rules:
    - superadmin: read/write every class and student.
    - teacher: read/write only classes the directory assigns to them; may read
      the history of students currently enrolled in one of those classes.
    - student: read their own history only; no class reads, no writes.
    """

    def __init__(self, caller: Caller, directory: DirectoryRepository):
        self._caller = caller
        self._directory = directory

    @property
    def caller(self) -> Caller:
        return self._caller

    def can_read_class(self, class_id: str) -> bool:
        if self._caller.is_superadmin:
            return True
        if self._caller.role == Role.TEACHER:
            return self._directory.is_teacher_assigned(self._caller.user_id, str(class_id))
        return False

    def can_write(self, class_id: str) -> bool:
        # Same rule table as reads: students never pass either check.
        return self.can_read_class(class_id)

    def can_read_student(self, student_id: str) -> bool:
        student_id = str(student_id)
        if self._caller.is_superadmin:
            return True
        if self._caller.role == Role.STUDENT:
            return self._caller.user_id == student_id
        if self._caller.role == Role.TEACHER:
            student = self._directory.get_student(student_id)
            if not student or not student.class_id:
                return False
            return self._directory.is_teacher_assigned(self._caller.user_id, student.class_id)
        return False

    def readable_class_ids(self) -> List[str]:
        if self._caller.is_superadmin:
            return [c.class_id for c in self._directory.list_classes()]
        if self._caller.role == Role.TEACHER:
            return [c.class_id for c in self._directory.list_classes_for_teacher(self._caller.user_id)]
        return []

    def require_read_class(self, class_id: str) -> None:
        if not self.can_read_class(class_id):
            self._deny("read class")

    def require_write(self, class_id: str) -> None:
        if not self.can_write(class_id):
            self._deny("write class")

    def require_read_student(self, student_id: str) -> None:
        if not self.can_read_student(student_id):
            self._deny("read student")

    def _deny(self, action: str) -> None:
        logger.warning("Denied %s for %s %s", action, self._caller.role.value, self._caller.user_id)
        raise AuthorizationDenied()
