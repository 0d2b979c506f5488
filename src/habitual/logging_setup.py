# SPDX-License-Identifier: MIT

"""Logging configuration: JSON lines to a rotating file, warnings to the console."""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from habitual.time import datetime_to_iso_str, now_utc

LOG_FILE_BASENAME = "habitual.log"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime_to_iso_str(now_utc()),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # Extra fields
        for k, v in record.__dict__.items():
            if k.startswith("_json_"):
                payload[k[6:]] = v
        # Dates and datetimes in extras are written as strings
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(
    log_dir: Path,
    level: int | str = logging.INFO,
    console_level: int | str = logging.WARNING,
) -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    logfile = log_dir / LOG_FILE_BASENAME

    root = logging.getLogger("habitual")
    root.setLevel(level)
    # Avoid duplicate handlers when configured twice in one process
    root.handlers.clear()
    root.propagate = False

    handler = RotatingFileHandler(
        logfile, maxBytes=512_000, backupCount=5, encoding="utf-8"
    )
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    console_handler = RichHandler(
        console=Console(stderr=True), show_time=False, show_path=False
    )
    console_handler.setLevel(console_level)
    root.addHandler(console_handler)

    logging.getLogger(__name__).debug(
        "logging initialised", extra={"_json_phase": "startup"}
    )
    return logfile


__all__ = ["JsonFormatter", "configure_logging"]
