from __future__ import annotations

from pathlib import Path

APP_NAME = "Education Hills Fee Management System"

WORKSPACE_ROOT = Path(__file__).resolve().parents[1]
DATA_JSON_PATH = WORKSPACE_ROOT / "school_data.json"
SETTINGS_JSON_PATH = WORKSPACE_ROOT / "settings.json"
ERROR_LOG_PATH = WORKSPACE_ROOT / "error_log.txt"
REPORT_DIR = WORKSPACE_ROOT / "reports"

# Browser-like storage budget (bytes of keys + values).
DEFAULT_STORAGE_QUOTA = 5 * 1024 * 1024
MIN_STORAGE_QUOTA = 64 * 1024

STORAGE_KEYS = {
    "students": "eh_students_v2",
    "payments": "eh_payments_v2",
    "fees": "eh_fees_v2",
    "school_profile": "eh_school_profile_v2",
    "expenses": "eh_expenses_v2",
    "classes": "eh_classes_v2",
    "trash": "eh_trash_v2",
    "users": "eh_users_v2",
}

FEE_REPORT_SHEET = "fee_report"
SUMMARY_SHEET = "summary"
