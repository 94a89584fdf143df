from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional, TypeVar

from .ledger import effective_fee_amount, fee_index, percentage, student_ledger, today_str, total_expected
from .models import Expense, FeeStructure, PaymentRecord, PaymentStatus, Student

if TYPE_CHECKING:
    from .store import DataStore

T = TypeVar("T")


def filter_session(items: Iterable[T], session: str) -> list[T]:
    return [i for i in items if getattr(i, "session", None) == session]


@dataclass
class SessionData:
    session: str
    students: list[Student]
    payments: list[PaymentRecord]
    fees: list[FeeStructure]
    expenses: list[Expense]


def session_data(store: "DataStore", session: str | None = None) -> SessionData:
    """Snapshot of every collection restricted to one session (the current one by default)."""

    session = session or store.get_school_profile().current_session
    return SessionData(
        session=session,
        students=filter_session(store.get_students(), session),
        payments=filter_session(store.get_payments(), session),
        fees=filter_session(store.get_fees(), session),
        expenses=filter_session(store.get_expenses(), session),
    )


@dataclass
class DashboardStats:
    total_students: int = 0
    total_expected: float = 0.0
    total_collected: float = 0.0
    total_pending: float = 0.0
    collection_rate: float = 0.0
    total_expenses: float = 0.0
    profit_loss: float = 0.0
    collected_today: float = 0.0
    expenses_today: float = 0.0
    profit_loss_today: float = 0.0
    due_today: float = 0.0
    monthly_collection: list[tuple[str, float]] = field(default_factory=list)
    class_distribution: list[tuple[str, int]] = field(default_factory=list)
    last_payment: Optional[PaymentRecord] = None
    last_expense: Optional[Expense] = None


def _month_abbr(iso_date: str) -> str:
    try:
        return calendar.month_abbr[int(iso_date[5:7])]
    except (ValueError, IndexError):
        return "Unknown"


def _latest(items: list[T]) -> Optional[T]:
    # max() keeps the first of equal dates, matching a stable newest-first sort.
    return max(items, key=lambda i: i.date) if items else None


def dashboard_stats(data: SessionData, today: str | None = None) -> DashboardStats:
    today = today or today_str()
    stats = DashboardStats(total_students=len(data.students))

    stats.total_expected = sum(total_expected(s, data.fees) for s in data.students)
    stats.total_collected = sum(p.amount_paid for p in data.payments)
    stats.collected_today = sum(p.amount_paid for p in data.payments if p.date == today)
    stats.total_pending = max(0.0, stats.total_expected - stats.total_collected)
    stats.collection_rate = min(100.0, percentage(stats.total_expected, stats.total_collected))

    stats.total_expenses = sum(e.amount for e in data.expenses)
    stats.expenses_today = sum(e.amount for e in data.expenses if e.date == today)
    stats.profit_loss = stats.total_collected - stats.total_expenses
    stats.profit_loss_today = stats.collected_today - stats.expenses_today

    catalog = fee_index(data.fees)
    for s in data.students:
        for position, fid in enumerate(s.fee_structure_ids):
            fee = catalog.get(fid)
            if fee is None or fee.due_date != today:
                continue
            paid = sum(p.amount_paid for p in data.payments if p.student_id == s.id and p.fee_structure_id == fid)
            stats.due_today += max(0.0, effective_fee_amount(s, fee, position) - paid)

    monthly: dict[str, float] = {}
    for p in data.payments:
        month = _month_abbr(p.date)
        monthly[month] = monthly.get(month, 0.0) + p.amount_paid
    stats.monthly_collection = list(monthly.items())

    classes: dict[str, int] = {}
    for s in data.students:
        grade = s.grade or "Unknown"
        classes[grade] = classes.get(grade, 0) + 1
    stats.class_distribution = list(classes.items())

    stats.last_payment = _latest(data.payments)
    stats.last_expense = _latest(data.expenses)
    return stats


def overdue_students(data: SessionData, today: str | None = None) -> list[Student]:
    return [
        s
        for s in data.students
        if student_ledger(s, data.fees, data.payments, today=today).status == PaymentStatus.OVERDUE
    ]
