"""Checks the screens run before calling the store.

The store itself permits these operations; these helpers are where the refusals live.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .store import DataStore

STUDENT_REQUIRED_FIELDS = ("name", "grade", "parentName", "contact")


def student_delete_blocker(store: "DataStore", student_id: str) -> str | None:
    """Reason a student cannot be deleted, or ``None`` if nothing blocks it."""

    student = next((s for s in store.get_students() if s.id == student_id), None)
    if student is None:
        return None
    count = sum(1 for p in store.get_payments() if p.student_id == student_id)
    if count:
        return f"Cannot delete {student.name}. They have {count} recorded payment(s)."
    return None


def class_delete_blocker(store: "DataStore", class_name: str) -> str | None:
    enrolled = sum(1 for s in store.get_students() if s.grade == class_name)
    if enrolled:
        return (
            f"Cannot delete class. There are {enrolled} student(s) enrolled in this class. "
            "Please delete the students first."
        )
    return None


def validate_student_form(fields: Mapping[str, Any]) -> list[str]:
    return [name for name in STUDENT_REQUIRED_FIELDS if not str(fields.get(name) or "").strip()]
