from __future__ import annotations

import logging
import os

from ehfms.logger import ErrorLogger, configure_logging


def test_error_logger_appends_tracebacks(tmp_path):
    path = tmp_path / "logs" / "error_log.txt"
    logger = ErrorLogger(path)
    try:
        raise ValueError("bad amount")
    except ValueError as e:
        logger.log_exception(e, "save eh_payments_v2")
    logger.log_exception(RuntimeError("second"), "other")

    text = path.read_text(encoding="utf-8")
    assert "save eh_payments_v2" in text
    assert "ValueError: bad amount" in text
    assert "RuntimeError: second" in text


def test_configure_logging_is_idempotent(tmp_path):
    path = tmp_path / "app.log"
    root = configure_logging(path, level=logging.DEBUG)
    configure_logging(path)
    try:
        handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len([h for h in handlers if h.baseFilename == os.path.abspath(path)]) == 1

        logging.getLogger("ehfms.store").error("Error saving %s", "eh_students_v2")
        for h in handlers:
            h.flush()
        assert " - ERROR - Error saving eh_students_v2" in path.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            if isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(path):
                root.removeHandler(h)
                h.close()
