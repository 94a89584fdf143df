"""Fee ledger arithmetic.

Everything here is a pure function of a student, the fee catalog and the payment
list. A fee id the catalog does not know is skipped; it contributes nothing.

``total_class_fees`` is a positional override: when set and positive it takes the
place of whatever fee sits at index 0 of ``fee_structure_ids``. Reordering the list
moves the override with it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

from .models import FeeStructure, PaymentRecord, PaymentStatus, Student


def today_str() -> str:
    # Local calendar date; comparisons elsewhere are plain string equality.
    return date.today().isoformat()


@dataclass
class FeeLine:
    fee: FeeStructure
    position: int
    effective_amount: float
    paid: float
    balance: float
    payment_count: int
    status: PaymentStatus


@dataclass
class StudentLedger:
    student: Student
    expected: float
    paid: float
    due: float
    percentage: float
    status: PaymentStatus
    lines: list[FeeLine] = field(default_factory=list)

    @property
    def progress(self) -> float:
        return progress_percentage(self.percentage)


def fee_index(fees: Iterable[FeeStructure]) -> dict[str, FeeStructure]:
    index: dict[str, FeeStructure] = {}
    for f in fees:
        # First catalog entry wins, as with a linear find().
        index.setdefault(f.id, f)
    return index


def _override(student: Student) -> float | None:
    if student.total_class_fees is not None and student.total_class_fees > 0:
        return float(student.total_class_fees)
    return None


def effective_fee_amount(student: Student, fee: FeeStructure, position: int) -> float:
    override = _override(student)
    if position == 0 and override is not None:
        return override
    return float(fee.amount)


def total_expected(student: Student, fees: Iterable[FeeStructure]) -> float:
    catalog = fee_index(fees)
    override = _override(student)
    total = 0.0
    for position, fid in enumerate(student.fee_structure_ids):
        if position == 0 and override is not None:
            # The override stands in for the first slot even if that fee was removed.
            total += override
            continue
        fee = catalog.get(fid)
        if fee is not None:
            total += float(fee.amount)
    if not student.fee_structure_ids and override is not None:
        total += override
    if student.back_fees:
        total += float(student.back_fees)
    return total


def total_paid(student: Student, payments: Iterable[PaymentRecord]) -> float:
    return sum(float(p.amount_paid) for p in payments if p.student_id == student.id)


def total_due(expected: float, paid: float) -> float:
    return max(0.0, expected - paid)


def percentage(expected: float, paid: float) -> float:
    return (paid / expected) * 100 if expected > 0 else 0.0


def progress_percentage(value: float) -> float:
    return min(100.0, max(0.0, value))


def fee_status(balance: float, expected: float, due_date: str, payment_count: int, today: str) -> PaymentStatus:
    if balance == 0 and expected > 0:
        return PaymentStatus.PAID
    if due_date < today and balance > 0:
        return PaymentStatus.OVERDUE
    if payment_count > 0:
        return PaymentStatus.PARTIAL
    return PaymentStatus.PENDING


def fee_breakdown(
    student: Student,
    fees: Iterable[FeeStructure],
    payments: Sequence[PaymentRecord],
    today: str | None = None,
    expected: float | None = None,
) -> list[FeeLine]:
    """One line per assigned fee that the catalog knows about, in assignment order."""

    today = today or today_str()
    fees = list(fees)
    catalog = fee_index(fees)
    if expected is None:
        expected = total_expected(student, fees)
    own = [p for p in payments if p.student_id == student.id]

    lines: list[FeeLine] = []
    for position, fid in enumerate(student.fee_structure_ids):
        fee = catalog.get(fid)
        if fee is None:
            continue
        amount = effective_fee_amount(student, fee, position)
        matching = [p for p in own if p.fee_structure_id == fid]
        paid = sum(float(p.amount_paid) for p in matching)
        balance = max(0.0, amount - paid)
        lines.append(
            FeeLine(
                fee=fee,
                position=position,
                effective_amount=amount,
                paid=paid,
                balance=balance,
                payment_count=len(matching),
                status=fee_status(balance, expected, fee.due_date, len(matching), today),
            )
        )
    return lines


def student_ledger(
    student: Student,
    fees: Iterable[FeeStructure],
    payments: Sequence[PaymentRecord],
    today: str | None = None,
) -> StudentLedger:
    fees = list(fees)
    expected = total_expected(student, fees)
    paid = total_paid(student, payments)
    due = total_due(expected, paid)
    lines = fee_breakdown(student, fees, payments, today=today, expected=expected)

    if due == 0 and expected > 0:
        status = PaymentStatus.PAID
    elif any(line.status == PaymentStatus.OVERDUE for line in lines):
        status = PaymentStatus.OVERDUE
    elif paid > 0:
        status = PaymentStatus.PARTIAL
    else:
        status = PaymentStatus.PENDING

    return StudentLedger(
        student=student,
        expected=expected,
        paid=paid,
        due=due,
        percentage=percentage(expected, paid),
        status=status,
        lines=lines,
    )


def fee_amount_due(
    student: Student,
    fee_id: str,
    fees: Iterable[FeeStructure],
    payments: Iterable[PaymentRecord],
) -> float | None:
    """Outstanding amount on one fee; ``None`` if the catalog has no such fee."""

    fee = fee_index(fees).get(fee_id)
    if fee is None:
        return None
    try:
        position = student.fee_structure_ids.index(fee_id)
    except ValueError:
        position = -1
    amount = effective_fee_amount(student, fee, position)
    paid = sum(float(p.amount_paid) for p in payments if p.student_id == student.id and p.fee_structure_id == fee_id)
    return max(0.0, amount - paid)
