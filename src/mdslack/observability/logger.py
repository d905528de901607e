"""Logging for mdslack.

All records go through one package logger, ``mdslack``, which owns a
single handler.  Components log through children of it
(``mdslack.converter``, ``mdslack.transport``, ``mdslack.client``) so the
level and destination are set in one place with :func:`configure_logging`.

Each record is written as one JSON line.  Message text and extra fields
pass through :func:`mdslack.utils.redact.redact` first, so a Slack token
that ends up in an exception message never reaches the log::

    {"ts": "2025-07-01T12:00:00.123456+00:00", "level": "WARNING",
     "component": "transport", "event": "Rate limited by Slack API",
     "method": "chat.postMessage", "retry_after": 3.0, "attempt": 1}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

from mdslack.utils.redact import redact

ROOT_LOGGER = "mdslack"

DEFAULT_LEVEL = logging.WARNING
"""Per-node DEBUG records from the converter stay quiet unless asked for."""

_handler: logging.Handler | None = None


class JsonLineFormatter(logging.Formatter):
    """Render a record as a redacted single-line JSON object.

    Keys: ``ts``, ``level``, ``component`` (the logger name below
    ``mdslack.``), ``event``, then any ``extra={"extra_fields": {...}}``
    entries and ``exception`` when ``exc_info`` is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        component = record.name
        if component.startswith(ROOT_LOGGER + "."):
            component = component[len(ROOT_LOGGER) + 1:]
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "component": component,
            "event": record.getMessage(),
        }
        entry.update(getattr(record, "extra_fields", None) or {})
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(redact(entry), default=str)


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to the current ``sys.stderr`` at emit time."""

    @property
    def stream(self) -> IO[str]:
        return sys.stderr

    @stream.setter
    def stream(self, value: IO[str]) -> None:
        pass


def configure_logging(
    level: int | str = DEFAULT_LEVEL,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """(Re)configure the ``mdslack`` logger.

    Replaces the handler installed by a previous call, so calling this
    again switches level or destination without duplicating output.
    *level* may be a name such as ``"debug"``.  With no *stream*, records
    go to whatever ``sys.stderr`` is when they are emitted.
    """
    global _handler
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    logger = logging.getLogger(ROOT_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler(stream) if stream is not None else _StderrHandler()
    _handler.setFormatter(JsonLineFormatter())
    logger.addHandler(_handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(component: str) -> logging.Logger:
    """Return the ``mdslack.<component>`` logger.

    The package logger is configured with defaults on first use.
    """
    if _handler is None:
        configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
