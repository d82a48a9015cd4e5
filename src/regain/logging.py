"""Structured logging for the REGAIN engine and CLI.

Engine modules log through ``logging.getLogger(__name__)`` and attach
context as ``regain_*`` extras. Both formatters render those extras: the
JSON formatter as top-level keys, the text formatter as trailing
``key=value`` pairs. Selected via REGAIN_LOG_FORMAT ("json" or "text").
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import IO

EXTRA_PREFIX = "regain_"


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key.startswith(EXTRA_PREFIX)
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = "".join(traceback.format_exception(*record.exc_info))
        entry.update(_extras(record))
        return json.dumps(entry, default=str)


class KeyValueFormatter(logging.Formatter):
    """Plain text line followed by the record's regain_* extras."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if extras:
            pairs = " ".join(
                f"{key[len(EXTRA_PREFIX):]}={value}" for key, value in extras.items()
            )
            line = f"{line} [{pairs}]"
        return line


def setup_logging(
    log_format: str,
    level: int = logging.INFO,
    *,
    stream: IO[str] | None = None,
) -> None:
    """Install a single handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format == "json" else KeyValueFormatter())
    root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
