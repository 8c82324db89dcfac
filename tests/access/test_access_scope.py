from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.access.identity import Caller, caller_from_session
from src.school_attendance.school_attendance.access.scope import AccessScope
from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.core.exceptions import AuthorizationDenied


def test_superadmin_reads_and_writes_everything(directory, admin):
    scope = AccessScope(admin, directory)

    assert scope.can_read_class("c1") and scope.can_write("c2") and scope.can_write("c3")
    assert scope.can_read_student("s5")
    assert sorted(scope.readable_class_ids()) == ["c1", "c2", "c3"]


def test_teacher_limited_to_assigned_classes(directory, teacher1):
    scope = AccessScope(teacher1, directory)

    assert scope.can_read_class("c1")
    assert scope.can_write("c1")
    assert not scope.can_read_class("c2")
    assert not scope.can_write("c2")
    assert not scope.can_write("does-not-exist")
    assert scope.readable_class_ids() == ["c1"]

    with pytest.raises(AuthorizationDenied):
        scope.require_write("c2")


def test_teacher_reads_only_students_of_their_classes(directory, teacher1):
    scope = AccessScope(teacher1, directory)

    assert scope.can_read_student("s2")
    assert not scope.can_read_student("s4")
    assert not scope.can_read_student("ghost")


def test_student_reads_only_own_history(directory, student1):
    scope = AccessScope(student1, directory)

    assert scope.can_read_student("s1")
    assert not scope.can_read_student("s2")
    assert not scope.can_read_class("c1")
    assert not scope.can_write("c1")
    assert scope.readable_class_ids() == []

    with pytest.raises(AuthorizationDenied):
        scope.require_read_class("c1")


def test_denial_message_does_not_reveal_existence(directory, teacher1):
    scope = AccessScope(teacher1, directory)

    with pytest.raises(AuthorizationDenied) as existing:
        scope.require_read_class("c2")
    with pytest.raises(AuthorizationDenied) as missing:
        scope.require_read_class("nope")

    assert str(existing.value) == str(missing.value)
    assert "c2" not in str(existing.value)


def test_caller_from_session():
    assert caller_from_session({"user_id": "t1", "role": "teacher"}) == Caller(user_id="t1", role=Role.TEACHER)
    assert caller_from_session({"user_id": 7, "role": "student"}) == Caller(user_id="7", role=Role.STUDENT)
    assert caller_from_session({"user_id": "t1"}) is None
    assert caller_from_session({"role": "superadmin"}) is None
    assert caller_from_session({"user_id": "x", "role": "janitor"}) is None


def test_only_superadmin_flag(admin, teacher1, student1):
    assert admin.is_superadmin
    assert not teacher1.is_superadmin
    assert not student1.is_superadmin
