from __future__ import annotations

import copy
import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar, Union

from .constants import STORAGE_KEYS
from .logger import ErrorLogger
from .models import (
    Expense,
    FeeStructure,
    PaymentRecord,
    SchoolProfile,
    Student,
    TrashItem,
    User,
    UserRole,
)
from .persistence import JsonFileStorage, QuotaExceededError, StorageError
from .seed import (
    DEFAULT_CLASSES,
    DEFAULT_SCHOOL_PROFILE,
    FEE_STRUCTURES,
    MOCK_EXPENSES,
    MOCK_PAYMENTS,
    MOCK_STAFF,
    MOCK_STUDENTS,
)
from .settings_store import Settings
from .trash import TrashBin

log = logging.getLogger(__name__)

T = TypeVar("T")

KEYS = STORAGE_KEYS


def _fmt_amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class DataStore:
    """Owner of every persisted collection.

    Each mutation reads the whole collection, changes it in memory and writes the
    whole collection back. Missing ids on update/delete are silently ignored.
    """

    def __init__(
        self,
        storage,
        notify: Callable[[str], None] | None = None,
        error_logger: ErrorLogger | None = None,
        id_prefix: str = "ST",
        currency_symbol: str = "₹",
    ):
        self.storage = storage
        self.notify = notify
        self.err_logger = error_logger or ErrorLogger()
        self.id_prefix = id_prefix
        self.currency_symbol = currency_symbol
        # Last value accepted per key; survives a failed write.
        self._cache: dict[str, Any] = {}
        self.trash = TrashBin(self)

    # ---------------- Storage boundary ----------------
    def _defaults(self) -> dict[str, Any]:
        return {
            KEYS["students"]: MOCK_STUDENTS,
            KEYS["payments"]: MOCK_PAYMENTS,
            KEYS["fees"]: FEE_STRUCTURES,
            KEYS["school_profile"]: DEFAULT_SCHOOL_PROFILE,
            KEYS["expenses"]: MOCK_EXPENSES,
            KEYS["classes"]: DEFAULT_CLASSES,
            KEYS["trash"]: [],
            KEYS["users"]: [u for u in MOCK_STAFF if u.get("role") != UserRole.STUDENT.value],
        }

    def _has(self, key: str) -> bool:
        if key in self._cache:
            return True
        try:
            return self.storage.get_item(key) is not None
        except (StorageError, OSError, ValueError) as e:
            # Unreadable is not the same as absent; never seed over it.
            log.error("Error reading %s: %s", key, e)
            return True

    def _read(self, key: str, default: Any) -> Any:
        if key in self._cache:
            return copy.deepcopy(self._cache[key])
        try:
            raw = self.storage.get_item(key)
            if raw is None:
                return copy.deepcopy(default)
            data = json.loads(raw)
        except (StorageError, OSError, ValueError) as e:
            log.error("Error reading %s: %s", key, e)
            return copy.deepcopy(default)
        self._cache[key] = data
        return copy.deepcopy(data)

    def _save(self, key: str, data: Any) -> bool:
        self._cache[key] = copy.deepcopy(data)
        try:
            self.storage.set_item(key, json.dumps(data, ensure_ascii=False))
            return True
        except QuotaExceededError as e:
            self._report(
                e,
                key,
                "Storage Quota Exceeded!\n\n"
                f"The application cannot save more data to {key}. This is often caused by "
                "storing too many large images.\n\n"
                "Please delete some old data or try to use smaller images.",
            )
        except (StorageError, OSError, TypeError, ValueError) as e:
            self._report(e, key, f"Could not save {key}. Recent changes are kept until the app closes.")
        return False

    def _report(self, exc: BaseException, key: str, message: str) -> None:
        log.error("Error saving %s: %s", key, exc)
        self.err_logger.log_exception(exc, f"save {key}")
        if self.notify is not None:
            self.notify(message)

    def _read_list(self, key: str, default: list[dict[str, Any]], parse: Callable[[dict[str, Any]], T]) -> list[T]:
        raw = self._read(key, default)
        if not isinstance(raw, list):
            log.error("Error reading %s: expected a list, got %s", key, type(raw).__name__)
            raw = copy.deepcopy(default)
        return [parse(d) for d in raw if isinstance(d, dict)]

    def _save_list(self, key: str, items: Iterable[Any]) -> bool:
        return self._save(key, [item.to_dict() for item in items])

    def init(self) -> None:
        for key, default in self._defaults().items():
            if not self._has(key):
                self._save(key, default)

    def reset(self) -> None:
        """Wipe everything and re-seed the defaults."""
        try:
            self.storage.clear()
        except (StorageError, OSError) as e:
            self._report(e, "*", "Could not clear stored data.")
        self._cache.clear()
        self.init()

    # ---------------- Students ----------------
    def get_students(self) -> list[Student]:
        return self._read_list(KEYS["students"], MOCK_STUDENTS, Student.from_dict)

    def generate_student_id(self) -> str:
        pattern = re.compile(rf"^{re.escape(self.id_prefix)}(\d+)$")
        numbers = [int(m.group(1)) for m in (pattern.match(s.id) for s in self.get_students()) if m]
        return f"{self.id_prefix}{max([0] + numbers) + 1:03d}"

    def add_student(self, student: Student) -> None:
        items = self.get_students()
        items.append(student)
        self._save_list(KEYS["students"], items)

    def update_student(self, student: Student) -> None:
        items = self.get_students()
        for idx, s in enumerate(items):
            if s.id == student.id:
                items[idx] = student
                self._save_list(KEYS["students"], items)
                return

    def delete_student(self, student_id: str) -> None:
        items = self.get_students()
        student = next((s for s in items if s.id == student_id), None)
        if student is None:
            return
        self.trash.add(self.trash.make_item(student, f"Student: {student.name} ({student.grade})"))
        self._save_list(KEYS["students"], [s for s in items if s.id != student_id])

    # ---------------- Users ----------------
    def get_staff_users(self) -> list[User]:
        return self._read_list(KEYS["users"], self._defaults()[KEYS["users"]], User.from_dict)

    def get_all_users(self) -> list[Union[User, Student]]:
        return [*self.get_staff_users(), *self.get_students()]

    def find_user(self, user_id: str) -> Union[User, Student, None]:
        wanted = (user_id or "").strip().lower()
        if not wanted:
            return None
        return next((u for u in self.get_all_users() if u.id.lower() == wanted), None)

    def update_user(self, user: Union[User, Student]) -> None:
        if isinstance(user, Student):
            self.update_student(user)
            return
        if user.role == UserRole.STUDENT:
            # A bare User cannot carry the student record's fields.
            return
        items = self.get_staff_users()
        for idx, u in enumerate(items):
            if u.id == user.id:
                items[idx] = user
                self._save_list(KEYS["users"], items)
                return

    # ---------------- Payments ----------------
    def get_payments(self) -> list[PaymentRecord]:
        return self._read_list(KEYS["payments"], MOCK_PAYMENTS, PaymentRecord.from_dict)

    def add_payment(self, payment: PaymentRecord) -> None:
        items = self.get_payments()
        items.append(payment)
        self._save_list(KEYS["payments"], items)

    def update_payment(self, payment: PaymentRecord) -> None:
        items = self.get_payments()
        for idx, p in enumerate(items):
            if p.id == payment.id:
                items[idx] = payment
                self._save_list(KEYS["payments"], items)
                return

    def delete_payment(self, payment_id: str) -> None:
        items = self.get_payments()
        payment = next((p for p in items if p.id == payment_id), None)
        if payment is None:
            return
        student = next((s for s in self.get_students() if s.id == payment.student_id), None)
        student_name = student.name if student else "Unknown Student"
        amount = f"{self.currency_symbol}{_fmt_amount(payment.amount_paid)}"
        self.trash.add(self.trash.make_item(payment, f"Payment: {amount} for {student_name}"))
        self._save_list(KEYS["payments"], [p for p in items if p.id != payment_id])

    # ---------------- Fee structures ----------------
    def get_fees(self) -> list[FeeStructure]:
        return self._read_list(KEYS["fees"], FEE_STRUCTURES, FeeStructure.from_dict)

    def add_fee_structure(self, fee: FeeStructure) -> None:
        items = self.get_fees()
        items.append(fee)
        self._save_list(KEYS["fees"], items)

    # ---------------- Expenses ----------------
    def get_expenses(self) -> list[Expense]:
        return self._read_list(KEYS["expenses"], MOCK_EXPENSES, Expense.from_dict)

    def add_expense(self, expense: Expense) -> None:
        items = self.get_expenses()
        items.append(expense)
        self._save_list(KEYS["expenses"], items)

    def update_expense(self, expense: Expense) -> None:
        items = self.get_expenses()
        for idx, e in enumerate(items):
            if e.id == expense.id:
                items[idx] = expense
                self._save_list(KEYS["expenses"], items)
                return

    def delete_expense(self, expense_id: Union[int, str]) -> None:
        items = self.get_expenses()
        expense = next((e for e in items if e.id == expense_id), None)
        if expense is None:
            return
        amount = f"{self.currency_symbol}{_fmt_amount(expense.amount)}"
        self.trash.add(self.trash.make_item(expense, f"Expense: {expense.category} - {amount}"))
        self._save_list(KEYS["expenses"], [e for e in items if e.id != expense_id])

    # ---------------- School profile ----------------
    def get_school_profile(self) -> SchoolProfile:
        stored = self._read(KEYS["school_profile"], DEFAULT_SCHOOL_PROFILE)
        merged = copy.deepcopy(DEFAULT_SCHOOL_PROFILE)
        if isinstance(stored, dict):
            # Older stored profiles may lack fields added since.
            merged.update(stored)
        return SchoolProfile.from_dict(merged)

    def update_school_profile(self, profile: SchoolProfile) -> None:
        self._save(KEYS["school_profile"], profile.to_dict())

    # ---------------- Classes ----------------
    def get_classes(self) -> list[str]:
        raw = self._read(KEYS["classes"], DEFAULT_CLASSES)
        if not isinstance(raw, list):
            return list(DEFAULT_CLASSES)
        return [str(c) for c in raw]

    def add_class(self, class_name: str) -> None:
        items = self.get_classes()
        if class_name in items:
            return
        items.append(class_name)
        items.sort()
        self._save(KEYS["classes"], items)

    def delete_class(self, class_name: str) -> None:
        items = self.get_classes()
        if class_name not in items:
            return
        self._save(KEYS["classes"], [c for c in items if c != class_name])

    # ---------------- Trash ----------------
    def get_trash(self) -> list[TrashItem]:
        return self.trash.items()

    def add_to_trash(self, item: TrashItem) -> None:
        self.trash.add(item)

    def restore_from_trash(self, trash_id: str) -> bool:
        return self.trash.restore(trash_id)

    def permanent_delete_trash_item(self, trash_id: str) -> None:
        self.trash.purge(trash_id)


def open_store(
    settings: Settings | None = None,
    notify: Callable[[str], None] | None = None,
    error_logger: ErrorLogger | None = None,
) -> DataStore:
    """Build the application's store from settings and seed it on first run."""

    settings = settings or Settings()
    storage = JsonFileStorage(Path(settings.data_path), settings.storage_quota_bytes)
    store = DataStore(
        storage,
        notify=notify,
        error_logger=error_logger,
        id_prefix=settings.student_id_prefix,
        currency_symbol=settings.currency_symbol,
    )
    store.init()
    return store
