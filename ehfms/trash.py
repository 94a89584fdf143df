from __future__ import annotations

import copy
import logging
import random
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Union

from .constants import STORAGE_KEYS
from .models import (
    Expense,
    ExpenseTrashItem,
    PaymentRecord,
    PaymentTrashItem,
    Student,
    StudentTrashItem,
    TrashItem,
    trash_item_from_dict,
    trash_item_to_dict,
)

if TYPE_CHECKING:
    from .store import DataStore

log = logging.getLogger(__name__)

TRASH_KEY = STORAGE_KEYS["trash"]


def _deleted_at() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TrashBin:
    """Recycle bin for students, payments and expenses.

    Tombstones are kept newest first. Restoring goes through the store's normal
    ``add_*`` path, so nothing stops a restored id from colliding with a newer one.
    Stored entries this version cannot read are hidden from ``items()`` but kept
    on every rewrite.
    """

    def __init__(self, store: "DataStore"):
        self.store = store

    def _raw(self) -> list[dict[str, Any]]:
        raw = self.store._read(TRASH_KEY, [])
        if not isinstance(raw, list):
            log.error("Error reading %s: expected a list, got %s", TRASH_KEY, type(raw).__name__)
            return []
        return [d for d in raw if isinstance(d, dict)]

    def items(self) -> list[TrashItem]:
        return [i for i in (trash_item_from_dict(d) for d in self._raw()) if i is not None]

    def _save(self, raw: list[dict[str, Any]]) -> bool:
        return self.store._save(TRASH_KEY, raw)

    def _new_id(self, taken: set[str]) -> str:
        while True:
            tid = f"T_{int(time.time() * 1000)}_{random.randint(0, 999)}"
            if tid not in taken:
                return tid

    def make_item(self, entity: Union[Student, PaymentRecord, Expense], description: str) -> TrashItem:
        tid = self._new_id({str(d.get("id", "")) for d in self._raw()})
        entity = copy.deepcopy(entity)
        if isinstance(entity, Student):
            return StudentTrashItem(tid, entity.id, entity, _deleted_at(), description)
        if isinstance(entity, PaymentRecord):
            return PaymentTrashItem(tid, entity.id, entity, _deleted_at(), description)
        if isinstance(entity, Expense):
            return ExpenseTrashItem(tid, str(entity.id), entity, _deleted_at(), description)
        raise TypeError(f"cannot trash {type(entity).__name__}")

    def add(self, item: TrashItem) -> None:
        raw = self._raw()
        raw.insert(0, trash_item_to_dict(item))
        self._save(raw)

    def restore(self, trash_id: str) -> bool:
        raw = self._raw()
        for idx, d in enumerate(raw):
            if d.get("id") != trash_id:
                continue
            item = trash_item_from_dict(d)
            if item is None:
                continue
            break
        else:
            return False
        if isinstance(item, StudentTrashItem):
            self.store.add_student(item.data)
        elif isinstance(item, PaymentTrashItem):
            self.store.add_payment(item.data)
        elif isinstance(item, ExpenseTrashItem):
            self.store.add_expense(item.data)
        del raw[idx]
        self._save(raw)
        log.info("Restored %s %s from trash", item.type, item.original_id)
        return True

    def purge(self, trash_id: str) -> None:
        raw = self._raw()
        self._save([d for d in raw if d.get("id") != trash_id])
