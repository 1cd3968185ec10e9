"""Logging configuration for the engine and its HTTP host."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from . import config

_STANDARD_ATTRS = frozenset({
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
})


class JsonFormatter(logging.Formatter):
    """JSON formatter that keeps fields passed through ``extra=``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def setup_logging(
    level_name: str | None = None, fmt: str | None = None, force: bool = False
) -> None:
    """
    Configure root logging once from environment.

    A root logger that already has handlers is left alone unless ``force``.
    """
    root = logging.getLogger()
    if root.handlers and not force:
        return

    level_name = (level_name or config.LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.INFO)
    fmt = (fmt or config.LOG_FORMAT).lower()

    handler = logging.StreamHandler()
    if fmt == "text":
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(JsonFormatter())

    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)
