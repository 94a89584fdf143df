from __future__ import annotations

import pytest

from conftest import make_expense, make_fee, make_payment, make_student
from ehfms.stats import SessionData, dashboard_stats, filter_session, overdue_students, session_data

TODAY = "2024-09-10"


def _data(**overrides) -> SessionData:
    fields = dict(
        session="2024-2025",
        students=[
            make_student("ST001", fee_ids=["F1", "F2"], grade="9th"),
            make_student("ST002", fee_ids=["F1"], grade="9th", total_class_fees=1500),
            make_student("ST003", fee_ids=["F2"], grade=""),
        ],
        payments=[
            make_payment("P1", "ST001", "F1", 1000, date="2024-08-20"),
            make_payment("P2", "ST002", "F1", 500, date=TODAY),
            make_payment("P3", "ST003", "F2", 100, date="2024-09-02"),
        ],
        fees=[make_fee("F1", 1000, due_date="2024-12-31"), make_fee("F2", 400, due_date=TODAY)],
        expenses=[make_expense(1, 300, date="2024-09-01"), make_expense(2, 50, date=TODAY)],
    )
    fields.update(overrides)
    return SessionData(**fields)


def test_filter_session():
    items = [make_fee("A", 1, session="2023-2024"), make_fee("B", 1)]
    assert [f.id for f in filter_session(items, "2024-2025")] == ["B"]


def test_session_data_follows_current_session(store):
    store.add_student(make_student("ST100", session="2023-2024"))
    data = session_data(store)
    assert data.session == "2024-2025"
    assert "ST100" not in [s.id for s in data.students]

    profile = store.get_school_profile()
    profile.current_session = "2023-2024"
    store.update_school_profile(profile)
    data = session_data(store)
    assert [s.id for s in data.students] == ["ST100"]
    assert data.payments == [] and data.fees == []


def test_dashboard_totals():
    stats = dashboard_stats(_data(), today=TODAY)

    assert stats.total_students == 3
    # 1400 + 1500 (override) + 400
    assert stats.total_expected == 3300
    assert stats.total_collected == 1600
    assert stats.total_pending == 1700
    assert stats.collection_rate == pytest.approx(1600 / 3300 * 100)
    assert stats.total_expenses == 350
    assert stats.profit_loss == 1250


def test_dashboard_today_figures():
    stats = dashboard_stats(_data(), today=TODAY)

    assert stats.collected_today == 500
    assert stats.expenses_today == 50
    assert stats.profit_loss_today == 450
    # F2 is due today: ST001 owes 400, ST003 owes 300.
    assert stats.due_today == 700


def test_dashboard_breakdowns():
    stats = dashboard_stats(_data(), today=TODAY)

    assert stats.monthly_collection == [("Aug", 1000), ("Sep", 600)]
    assert stats.class_distribution == [("9th", 2), ("Unknown", 1)]
    assert stats.last_payment.id == "P2"
    assert stats.last_expense.id == 2


def test_dashboard_with_nothing_expected():
    stats = dashboard_stats(_data(students=[], payments=[], expenses=[]), today=TODAY)
    assert stats.collection_rate == 0
    assert stats.total_pending == 0
    assert stats.last_payment is None


def test_collection_rate_is_capped():
    data = _data(payments=[make_payment("P1", "ST001", "F1", 99999)])
    stats = dashboard_stats(data, today=TODAY)
    assert stats.collection_rate == 100
    assert stats.total_pending == 0


def test_overdue_students():
    data = _data()
    assert overdue_students(data, today=TODAY) == []
    late = [s.id for s in overdue_students(data, today="2025-01-15")]
    assert late == ["ST001", "ST002", "ST003"]

    data.payments.append(make_payment("P9", "ST002", "F1", 1000))
    assert "ST002" not in [s.id for s in overdue_students(data, today="2025-01-15")]


def test_seeded_store_dashboard(store):
    stats = dashboard_stats(session_data(store), today="2024-09-10")
    assert stats.total_students == 5
    assert stats.total_collected == 11150
    assert stats.total_expenses == 56800
    assert stats.collected_today == 500
