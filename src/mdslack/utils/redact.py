"""Token redaction for debug dumps.

Before a Slack payload or response is written to stderr, :func:`redact`
is applied.  It enforces the following rules:

* Values under sensitive keys (``token``, ``authorization``, ``secret``,
  …) are masked.
* Anything shaped like a Slack token (``xoxb-…``, ``xoxp-…``, ``xapp-…``)
  is masked wherever it appears in a string.
* An explicitly supplied token is scrubbed from every string value.
"""

from __future__ import annotations

import copy
import re
from typing import Any

# Bot, user, app-level, legacy workspace and refresh tokens.
_SLACK_TOKEN_RE = re.compile(r"\b(?:xox[abposre]|xapp)-[A-Za-z0-9-]+")

# If any of these appear in a key name (case-insensitive) the value is
# redacted.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "authorization",
    "cookie",
    "signing",
})


def _mask_token(value: str, token: str | None) -> str:
    """Replace tokens inside *value* with safe placeholders."""
    if token and token in value:
        suffix = token[-4:] if len(token) >= 4 else "****"
        placeholder = f"<redacted:...{suffix}>"
        if token in placeholder:
            placeholder = "<redacted>"
        value = value.replace(token, placeholder)
    value = _SLACK_TOKEN_RE.sub("<redacted>", value)
    return re.sub(
        r"(Bearer\s+)\S+",
        lambda m: f"{m.group(1)}<redacted>",
        value,
    )


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, token)
    if isinstance(value, list):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, str):
        return _mask_token(value, token)
    return value


def _redact_dict(d: dict, token: str | None) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            result[key] = _mask_token(value, token) if isinstance(value, str) else "<redacted>"
            if result[key] == value:
                result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, token)
    return result


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a deep copy of *payload* with credentials removed.

    Parameters
    ----------
    payload:
        The dictionary to sanitize (a request body, headers, or response).
    token:
        The configured Slack token.  If supplied, any occurrence of this
        exact string anywhere in the payload is replaced.

    Returns
    -------
    dict
        A new dictionary; the original *payload* is never mutated.

    Examples
    --------
    >>> redact({"Authorization": "Bearer xoxb-1-2-abc"})
    {'Authorization': 'Bearer <redacted>'}

    >>> redact({"text": "hi"})
    {'text': 'hi'}
    """
    safe = copy.deepcopy(payload)
    return _redact_dict(safe, token)
