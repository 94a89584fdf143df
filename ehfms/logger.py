from __future__ import annotations

import logging
import os
import traceback
from datetime import datetime
from pathlib import Path

from .constants import ERROR_LOG_PATH

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class ErrorLogger:
    def __init__(self, path: Path = ERROR_LOG_PATH):
        self.path = path

    def log_exception(self, exc: BaseException, context: str = "") -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        ts = now_ts()
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"[{ts}] {context}\n")
            f.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
            f.write("\n")


def configure_logging(path: Path = ERROR_LOG_PATH, level: int = logging.INFO) -> logging.Logger:
    """Send the package's log records to ``path``.

    Safe to call more than once; a handler for the same file is not added twice.
    """

    root = logging.getLogger("ehfms")
    root.setLevel(level)
    target = os.path.abspath(path)
    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == target:
            return root
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root


def now_ts() -> str:
    return datetime.now().isoformat(timespec="seconds")
