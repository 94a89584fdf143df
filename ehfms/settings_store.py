from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .constants import (
    DATA_JSON_PATH,
    DEFAULT_STORAGE_QUOTA,
    MIN_STORAGE_QUOTA,
    REPORT_DIR,
    SETTINGS_JSON_PATH,
)


@dataclass
class Settings:
    data_path: str = str(DATA_JSON_PATH)
    storage_quota_bytes: int = DEFAULT_STORAGE_QUOTA
    currency_symbol: str = "₹"
    student_id_prefix: str = "ST"
    report_dir: str = str(REPORT_DIR)
    insight_model: str = "gemini-2.5-flash"
    insight_api_key: str = ""

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Settings":
        try:
            quota = int(d.get("storage_quota_bytes", DEFAULT_STORAGE_QUOTA))
        except Exception:
            quota = DEFAULT_STORAGE_QUOTA
        # Anything smaller cannot even hold the seed data.
        if quota < MIN_STORAGE_QUOTA:
            quota = MIN_STORAGE_QUOTA
        prefix = str(d.get("student_id_prefix", "ST") or "ST").strip() or "ST"
        return Settings(
            data_path=str(d.get("data_path", DATA_JSON_PATH)),
            storage_quota_bytes=quota,
            currency_symbol=str(d.get("currency_symbol", "₹") or "₹"),
            student_id_prefix=prefix,
            report_dir=str(d.get("report_dir", REPORT_DIR)),
            insight_model=str(d.get("insight_model", "gemini-2.5-flash") or "gemini-2.5-flash"),
            insight_api_key=str(d.get("insight_api_key", "") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "data_path": self.data_path,
            "storage_quota_bytes": self.storage_quota_bytes,
            "currency_symbol": self.currency_symbol,
            "student_id_prefix": self.student_id_prefix,
            "report_dir": self.report_dir,
            "insight_model": self.insight_model,
            "insight_api_key": self.insight_api_key,
        }

    def resolve_api_key(self) -> str:
        """Settings file wins over the ``API_KEY`` environment variable."""
        return self.insight_api_key or os.environ.get("API_KEY", "")


class SettingsStore:
    def __init__(self, path: Path = SETTINGS_JSON_PATH):
        self.path = path

    def load(self) -> Settings:
        if not self.path.exists():
            settings = Settings()
            self.save(settings)
            return settings

        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return Settings.from_dict(data if isinstance(data, dict) else {})

    def save(self, settings: Settings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
