from __future__ import annotations

from conftest import make_student
from ehfms.rules import class_delete_blocker, student_delete_blocker, validate_student_form


def test_student_with_payments_cannot_be_deleted(store):
    assert student_delete_blocker(store, "ST001") == "Cannot delete Alice Johnson. They have 2 recorded payment(s)."


def test_student_without_payments_can_be_deleted(store):
    assert student_delete_blocker(store, "ST005") is None
    assert student_delete_blocker(store, "NOPE") is None


def test_class_with_students_cannot_be_deleted(store):
    message = class_delete_blocker(store, "10th")
    assert message.startswith("Cannot delete class. There are 1 student(s)")
    store.add_student(make_student("ST077", grade="Nursery"))
    assert class_delete_blocker(store, "Nursery") is not None
    assert class_delete_blocker(store, "KG") is None


def test_validate_student_form():
    assert validate_student_form({"name": "A", "grade": "9th", "parentName": "B", "contact": "1"}) == []
    assert validate_student_form({"name": " ", "grade": "9th"}) == ["name", "parentName", "contact"]
