"""Diagnostic logging. Everything here goes to stderr; stdout carries the report."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "daily_digest"


def _fields(record: logging.LogRecord) -> dict:
    return getattr(record, "fields", None) or {}


def _quote(value: object) -> str:
    text = str(value)
    if not text or any(c.isspace() or c in '"=' for c in text):
        return json.dumps(text, ensure_ascii=False)
    return text


def _pairs(fields: dict) -> str:
    return " ".join(f"{k}={_quote(v)}" for k, v in fields.items())


class KeyValueFormatter(logging.Formatter):
    """Appends structured fields to the message as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pairs = _pairs(_fields(record))
        return f"{message} {pairs}" if pairs else message


class LogfmtFormatter(logging.Formatter):
    """Single-line ``time=... level=... msg=... key=value`` records."""

    def format(self, record: logging.LogRecord) -> str:
        head = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        line = _pairs({**head, **_fields(record)})
        if record.exc_info:
            line = f"{line} exc={_quote(self.formatException(record.exc_info))}"
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line: time, level, msg, then the structured fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        entry.update(_fields(record))
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def build_logger(
    json_logs: bool = False,
    stream: IO[str] | None = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure and return the process logger.

    Calling it again replaces the previous handler, so the CLI can be invoked
    repeatedly in one process.
    """
    log = logging.getLogger(LOGGER_NAME)
    log.handlers.clear()
    log.setLevel(level)
    log.propagate = False

    handler: logging.Handler
    if json_logs:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(JsonFormatter())
    else:
        console = Console(file=stream) if stream is not None else Console(stderr=True)
        if console.is_terminal:
            handler = RichHandler(console=console, show_path=False, rich_tracebacks=False)
            handler.setFormatter(KeyValueFormatter("%(message)s"))
        else:
            # rich wraps at the console width; pipes and files get one line per record.
            handler = logging.StreamHandler(console.file)
            handler.setFormatter(LogfmtFormatter())
    log.addHandler(handler)
    return log
