"""Slack Web API transport layer."""

from .retries import compute_backoff, should_retry
from .transport import SlackTransport

__all__ = [
    "SlackTransport",
    "compute_backoff",
    "should_retry",
]
