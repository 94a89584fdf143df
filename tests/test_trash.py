from __future__ import annotations

import json

from conftest import make_student
from ehfms.constants import STORAGE_KEYS
from ehfms.models import ExpenseTrashItem, PaymentTrashItem, StudentTrashItem


def test_newest_deletion_comes_first(store):
    store.delete_expense(1)
    store.delete_payment("P004")
    store.delete_student("ST005")

    kinds = [type(i) for i in store.get_trash()]
    assert kinds == [StudentTrashItem, PaymentTrashItem, ExpenseTrashItem]
    assert len({i.id for i in store.get_trash()}) == 3


def test_restore_student_round_trip(store):
    original = next(s for s in store.get_students() if s.id == "ST003")
    original.total_class_fees = 9000.0
    original.back_fees = 150.0
    store.update_student(original)

    store.delete_student("ST003")
    trash_id = store.get_trash()[0].id

    assert store.restore_from_trash(trash_id) is True
    restored = next(s for s in store.get_students() if s.id == "ST003")
    assert restored == original
    assert trash_id not in [i.id for i in store.get_trash()]


def test_restore_payment_and_expense(store):
    payment = next(p for p in store.get_payments() if p.id == "P005")
    expense = next(e for e in store.get_expenses() if e.id == 2)
    store.delete_payment("P005")
    store.delete_expense(2)

    for item in store.get_trash():
        assert store.restore_from_trash(item.id)

    assert store.get_payments()[-1] == payment
    assert store.get_expenses()[-1] == expense
    assert store.get_trash() == []


def test_restoring_a_payment_does_not_bring_back_its_student(store):
    store.delete_payment("P001")
    store.delete_student("ST001")
    payment_item = next(i for i in store.get_trash() if isinstance(i, PaymentTrashItem))

    store.restore_from_trash(payment_item.id)

    assert "P001" in [p.id for p in store.get_payments()]
    assert "ST001" not in [s.id for s in store.get_students()]
    assert len(store.get_trash()) == 1


def test_restore_unknown_id_has_no_side_effects(store, storage):
    store.delete_student("ST002")
    snapshot = {key: storage.get_item(key) for key in STORAGE_KEYS.values()}

    assert store.restore_from_trash("T_missing") is False
    assert {key: storage.get_item(key) for key in STORAGE_KEYS.values()} == snapshot


def test_restore_does_not_guard_against_duplicate_ids(store):
    store.delete_student("ST004")
    store.add_student(make_student("ST004", name="Newcomer"))

    store.restore_from_trash(store.get_trash()[0].id)

    assert [s.id for s in store.get_students()].count("ST004") == 2


def test_permanent_delete(store):
    store.delete_student("ST001")
    store.delete_student("ST002")
    first, second = store.get_trash()

    store.permanent_delete_trash_item(first.id)
    store.permanent_delete_trash_item("T_missing")

    assert [i.id for i in store.get_trash()] == [second.id]
    assert store.restore_from_trash(first.id) is False


def test_unknown_tombstone_types_are_skipped(store, storage):
    store.delete_student("ST001")
    raw = json.loads(storage.get_item(STORAGE_KEYS["trash"]))
    raw.append({"id": "T_1_1", "type": "FEE", "originalId": "F1", "data": {}, "deletedAt": "", "description": "?"})
    storage.set_item(STORAGE_KEYS["trash"], json.dumps(raw))
    store._cache.clear()

    items = store.get_trash()
    assert len(items) == 1
    assert items[0].type == "STUDENT"


def test_tombstone_serialises_the_tag(store, storage):
    store.delete_expense(5)
    raw = json.loads(storage.get_item(STORAGE_KEYS["trash"]))
    assert raw[0]["type"] == "EXPENSE"
    assert raw[0]["originalId"] == "5"
    assert raw[0]["data"]["category"] == "🎉 Events"
    assert raw[0]["deletedAt"].endswith("Z")


def test_unreadable_tombstones_survive_later_writes(store, storage):
    store.delete_student("ST001")
    raw = json.loads(storage.get_item(STORAGE_KEYS["trash"]))
    raw.append({"id": "T_1_1", "type": "FEE", "originalId": "F1", "data": {}, "deletedAt": "", "description": "?"})
    storage.set_item(STORAGE_KEYS["trash"], json.dumps(raw))
    store._cache.clear()

    store.delete_payment("P001")
    assert store.restore_from_trash("T_1_1") is False
    store.permanent_delete_trash_item(store.get_trash()[0].id)

    ids = [d["id"] for d in json.loads(storage.get_item(STORAGE_KEYS["trash"]))]
    assert len(ids) == 2
    assert ids[-1] == "T_1_1"


def test_tombstone_holds_a_copy_of_the_record(store):
    student = make_student("ST080")
    item = store.trash.make_item(student, "Student: copy")
    student.name = "Changed"

    assert item.data.name == "Student ST080"
    assert item.data is not student
