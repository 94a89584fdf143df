from __future__ import annotations

import pytest

from ehfms.logger import ErrorLogger
from ehfms.models import Expense, FeeStructure, PaymentRecord, Student
from ehfms.persistence import MemoryStorage
from ehfms.store import DataStore

SESSION = "2024-2025"


def make_student(sid="ST900", fee_ids=("F1", "F2"), **kwargs) -> Student:
    fields = dict(
        id=sid,
        name=f"Student {sid}",
        grade="10th",
        parent_name="Parent",
        contact="555-0000",
        fee_structure_ids=list(fee_ids),
        session=SESSION,
    )
    fields.update(kwargs)
    return Student(**fields)


def make_fee(fid, amount, due_date="2024-12-31", session=SESSION) -> FeeStructure:
    return FeeStructure(id=fid, name=f"Fee {fid}", amount=amount, due_date=due_date, session=session)


def make_payment(pid, student_id, fee_id, amount, date="2024-05-01", session=SESSION) -> PaymentRecord:
    return PaymentRecord(
        id=pid,
        student_id=student_id,
        fee_structure_id=fee_id,
        amount_paid=amount,
        date=date,
        method="CASH",
        session=session,
    )


def make_expense(eid, amount, date="2024-09-01", category="📝 Supplies", session=SESSION) -> Expense:
    return Expense(id=eid, category=category, amount=amount, date=date, session=session, description="test")


@pytest.fixture
def notices() -> list[str]:
    return []


@pytest.fixture
def error_logger(tmp_path) -> ErrorLogger:
    return ErrorLogger(tmp_path / "error_log.txt")


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage, notices, error_logger) -> DataStore:
    s = DataStore(storage, notify=notices.append, error_logger=error_logger)
    s.init()
    return s
