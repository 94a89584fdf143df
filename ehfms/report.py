from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from openpyxl import Workbook
from openpyxl.styles import Font

from .constants import APP_NAME, FEE_REPORT_SHEET, SUMMARY_SHEET
from .ledger import student_ledger, today_str
from .settings_store import Settings
from .stats import SessionData, dashboard_stats, session_data

if TYPE_CHECKING:
    from .store import DataStore

log = logging.getLogger(__name__)

FEE_REPORT_HEADERS = ["Student ID", "Name", "Class", "Total Fees", "Paid Amount", "Due Amount", "Status"]


def _write_headers(ws, headers: list[str]) -> None:
    for col, h in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col, value=h)
        cell.font = Font(bold=True)


def fee_report_rows(data: SessionData, today: str | None = None) -> list[dict[str, Any]]:
    today = today or today_str()
    rows: list[dict[str, Any]] = []
    for s in data.students:
        ledger = student_ledger(s, data.fees, data.payments, today=today)
        rows.append(
            {
                "Student ID": s.id,
                "Name": s.name,
                "Class": s.grade,
                "Total Fees": ledger.expected,
                "Paid Amount": ledger.paid,
                "Due Amount": ledger.due,
                "Status": ledger.status.value,
            }
        )
    return rows


def export_fee_report(
    store: "DataStore",
    path: Path | None = None,
    today: str | None = None,
    settings: Settings | None = None,
) -> Path:
    """Write the current session's fee report to an .xlsx workbook.

    Without ``path`` the file goes to ``settings.report_dir`` as
    ``fee_report_<session>.xlsx``.
    """

    data = session_data(store)
    if path is None:
        path = Path((settings or Settings()).report_dir) / f"fee_report_{data.session}.xlsx"
    wb = Workbook()
    wb.properties.creator = APP_NAME
    # remove default sheet
    wb.remove(wb.active)

    ws = wb.create_sheet(FEE_REPORT_SHEET)
    _write_headers(ws, FEE_REPORT_HEADERS)
    for row in fee_report_rows(data, today=today):
        ws.append([row[h] for h in FEE_REPORT_HEADERS])

    stats = dashboard_stats(data, today=today)
    summary = wb.create_sheet(SUMMARY_SHEET)
    _write_headers(summary, ["Metric", "Value"])
    for label, value in [
        ("Session", data.session),
        ("Students", stats.total_students),
        ("Total Expected", stats.total_expected),
        ("Total Collected", stats.total_collected),
        ("Total Pending", stats.total_pending),
        ("Collection Rate (%)", round(stats.collection_rate, 2)),
    ]:
        summary.append([label, value])

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    log.info("Fee report for %s written to %s", data.session, path)
    return path
