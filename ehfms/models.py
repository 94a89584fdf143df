from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

log = logging.getLogger(__name__)


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"
    STUDENT = "STUDENT"


class PaymentStatus(str, Enum):
    PAID = "PAID"
    PARTIAL = "PARTIAL"
    PENDING = "PENDING"
    OVERDUE = "OVERDUE"


def _to_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except Exception:
        return default


def _opt_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except Exception:
        return None


def _opt_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _str_list(value: Any) -> list[str]:
    return [str(x) for x in value] if isinstance(value, list) else []


def _put(d: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        d[key] = value


# Optional profile fields shared by staff users and students: (attribute, stored key).
_PROFILE_FIELDS = (
    ("avatar", "avatar"),
    ("cover_image", "coverImage"),
    ("email", "email"),
    ("phone", "phone"),
    ("bio", "bio"),
    ("dob", "dob"),
)


@dataclass
class User:
    id: str
    name: str
    role: UserRole
    avatar: str | None = None
    cover_image: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    dob: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "User":
        try:
            role = UserRole(d.get("role", UserRole.EMPLOYEE.value))
        except ValueError:
            role = UserRole.EMPLOYEE
        return User(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            role=role,
            **{attr: _opt_str(d.get(key)) for attr, key in _PROFILE_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.id, "name": self.name, "role": self.role.value}
        for attr, key in _PROFILE_FIELDS:
            _put(d, key, getattr(self, attr))
        return d


@dataclass
class Student:
    id: str
    name: str
    grade: str
    parent_name: str
    contact: str
    fee_structure_ids: list[str]
    session: str
    role: UserRole = UserRole.STUDENT
    address: str | None = None
    total_class_fees: float | None = None
    back_fees: float | None = None
    admission_date: str | None = None
    avatar: str | None = None
    cover_image: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    dob: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Student":
        return Student(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            grade=str(d.get("grade", "")),
            parent_name=str(d.get("parentName", "")),
            contact=str(d.get("contact", "")),
            fee_structure_ids=_str_list(d.get("feeStructureIds")),
            session=str(d.get("session", "")),
            address=_opt_str(d.get("address")),
            total_class_fees=_opt_float(d.get("totalClassFees")),
            back_fees=_opt_float(d.get("backFees")),
            admission_date=_opt_str(d.get("admissionDate")),
            **{attr: _opt_str(d.get(key)) for attr, key in _PROFILE_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "role": UserRole.STUDENT.value,
            "grade": self.grade,
            "parentName": self.parent_name,
            "contact": self.contact,
            "feeStructureIds": list(self.fee_structure_ids),
            "session": self.session,
        }
        _put(d, "address", self.address)
        _put(d, "totalClassFees", self.total_class_fees)
        _put(d, "backFees", self.back_fees)
        _put(d, "admissionDate", self.admission_date)
        for attr, key in _PROFILE_FIELDS:
            _put(d, key, getattr(self, attr))
        return d


@dataclass
class FeeStructure:
    id: str
    name: str
    amount: float
    due_date: str
    session: str

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "FeeStructure":
        return FeeStructure(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            amount=_to_float(d.get("amount", 0)),
            due_date=str(d.get("dueDate", "")),
            session=str(d.get("session", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "dueDate": self.due_date,
            "session": self.session,
        }


@dataclass
class PaymentRecord:
    id: str
    student_id: str
    fee_structure_id: str
    amount_paid: float
    date: str
    method: str
    session: str

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "PaymentRecord":
        return PaymentRecord(
            id=str(d.get("id", "")),
            student_id=str(d.get("studentId", "")),
            fee_structure_id=str(d.get("feeStructureId", "")),
            amount_paid=_to_float(d.get("amountPaid", 0)),
            date=str(d.get("date", "")),
            method=str(d.get("method", "")),
            session=str(d.get("session", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "feeStructureId": self.fee_structure_id,
            "amountPaid": self.amount_paid,
            "date": self.date,
            "method": self.method,
            "session": self.session,
        }


@dataclass
class Expense:
    id: Union[int, str]
    category: str
    amount: float
    date: str
    session: str
    description: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Expense":
        raw_id = d.get("id", "")
        return Expense(
            # Numeric ids stay numeric; lookups compare with ==.
            id=raw_id if isinstance(raw_id, int) and not isinstance(raw_id, bool) else str(raw_id),
            category=str(d.get("category", "")),
            amount=_to_float(d.get("amount", 0)),
            date=str(d.get("date", "")),
            session=str(d.get("session", "")),
            description=_opt_str(d.get("description")),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "category": self.category,
            "amount": self.amount,
            "date": self.date,
            "session": self.session,
        }
        _put(d, "description", self.description)
        return d


@dataclass
class SliderImage:
    id: str
    url: str
    title: str
    subtitle: str

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "SliderImage":
        return SliderImage(
            id=str(d.get("id", "")),
            url=str(d.get("url", "")),
            title=str(d.get("title", "")),
            subtitle=str(d.get("subtitle", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "url": self.url, "title": self.title, "subtitle": self.subtitle}


@dataclass
class SchoolProfile:
    name: str
    tagline: str
    address: str
    website: str
    phone: str
    sessions: list[str]
    current_session: str
    logo: str | None = None
    background_image: str | None = None
    affiliation: str | None = None
    institution_type: str | None = None
    fees_receipt_terms: str | None = None
    slider_images: list[SliderImage] | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "SchoolProfile":
        slides = d.get("sliderImages")
        if slides is not None:
            slides = [s for s in slides if isinstance(s, dict)] if isinstance(slides, list) else []
        return SchoolProfile(
            name=str(d.get("name", "")),
            tagline=str(d.get("tagline", "")),
            address=str(d.get("address", "")),
            website=str(d.get("website", "")),
            phone=str(d.get("phone", "")),
            sessions=_str_list(d.get("sessions")),
            current_session=str(d.get("currentSession", "")),
            logo=_opt_str(d.get("logo")),
            background_image=_opt_str(d.get("backgroundImage")),
            affiliation=_opt_str(d.get("affiliation")),
            institution_type=_opt_str(d.get("institutionType")),
            fees_receipt_terms=_opt_str(d.get("feesReceiptTerms")),
            slider_images=None if slides is None else [SliderImage.from_dict(s) for s in slides],
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "name": self.name,
            "tagline": self.tagline,
            "address": self.address,
            "website": self.website,
            "phone": self.phone,
            "sessions": list(self.sessions),
            "currentSession": self.current_session,
        }
        _put(d, "logo", self.logo)
        _put(d, "backgroundImage", self.background_image)
        _put(d, "affiliation", self.affiliation)
        _put(d, "institutionType", self.institution_type)
        _put(d, "feesReceiptTerms", self.fees_receipt_terms)
        if self.slider_images is not None:
            d["sliderImages"] = [s.to_dict() for s in self.slider_images]
        return d


# ---------------- Recycle bin ----------------


@dataclass
class StudentTrashItem:
    type: ClassVar[str] = "STUDENT"
    id: str
    original_id: str
    data: Student
    deleted_at: str
    description: str


@dataclass
class PaymentTrashItem:
    type: ClassVar[str] = "PAYMENT"
    id: str
    original_id: str
    data: PaymentRecord
    deleted_at: str
    description: str


@dataclass
class ExpenseTrashItem:
    type: ClassVar[str] = "EXPENSE"
    id: str
    original_id: str
    data: Expense
    deleted_at: str
    description: str


TrashItem = Union[StudentTrashItem, PaymentTrashItem, ExpenseTrashItem]

_TRASH_TYPES: dict[str, tuple[type, Any]] = {
    StudentTrashItem.type: (StudentTrashItem, Student.from_dict),
    PaymentTrashItem.type: (PaymentTrashItem, PaymentRecord.from_dict),
    ExpenseTrashItem.type: (ExpenseTrashItem, Expense.from_dict),
}


def trash_item_from_dict(d: dict[str, Any]) -> TrashItem | None:
    """Rebuild a tombstone from storage; unknown types yield ``None``."""

    kind = str(d.get("type", ""))
    entry = _TRASH_TYPES.get(kind)
    if entry is None:
        log.warning("Skipping trash item %r with unknown type %r", d.get("id"), kind)
        return None
    data = d.get("data")
    if not isinstance(data, dict):
        log.warning("Skipping trash item %r without a stored record", d.get("id"))
        return None
    cls, parse = entry
    return cls(
        id=str(d.get("id", "")),
        original_id=str(d.get("originalId", "")),
        data=parse(data),
        deleted_at=str(d.get("deletedAt", "")),
        description=str(d.get("description", "")),
    )


def trash_item_to_dict(item: TrashItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "type": item.type,
        "originalId": item.original_id,
        "data": item.data.to_dict(),
        "deletedAt": item.deleted_at,
        "description": item.description,
    }
