"""Logging configuration: plain text or one JSON object per line."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Structured context can be attached with ``extra={"extra_data": {...}}``
    and is emitted under the ``data`` key.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        extra_data = getattr(record, "extra_data", None)
        if extra_data is not None:
            log_entry["data"] = extra_data
        return json.dumps(log_entry, default=str, ensure_ascii=False)


def setup_logging(
    *,
    structured: bool = False,
    log_file: Path | None = None,
    level: int = logging.INFO,
) -> None:
    """Configure the root logger.

    Args:
        structured: Emit JSON lines instead of plain text.
        log_file: If provided, also write logs to this file.
        level: Logging level (default INFO).
    """
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    formatter: logging.Formatter = JSONFormatter() if structured else logging.Formatter(_PLAIN_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
