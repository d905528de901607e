"""Observability: structured logging for mdslack."""

from __future__ import annotations

from .logger import JsonLineFormatter, configure_logging, get_logger

__all__ = [
    "JsonLineFormatter",
    "configure_logging",
    "get_logger",
]
