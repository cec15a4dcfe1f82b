"""
Builds LogEntry objects with nanosecond timestamps and formatted messages.
"""

import json
from typing import Any, Mapping, Optional

from .models import LogEntry
from .utils import now_ns

_QUOTE_CHARS = ('"', "=")


def _format_value(value: Any) -> str:
    """Render a field value for logfmt output, quoting when needed."""
    text = value if isinstance(value, str) else str(value)
    if text == "" or any(ch.isspace() for ch in text) or any(ch in text for ch in _QUOTE_CHARS):
        return json.dumps(text, ensure_ascii=False)
    return text


def format_message(message: str, fields: Optional[Mapping[str, Any]] = None) -> str:
    """
    Append structured fields to a message as logfmt-style pairs.

    Args:
        message: The human-readable message.
        fields: Optional mapping of field names to values, rendered in order.

    Returns:
        The message followed by ``key=value`` pairs, or the bare message
        when there are no fields.

    Example:
        >>> format_message("Create Contact completed", {"UserId": "bob", "ElapsedTime": 120})
        'Create Contact completed UserId=bob ElapsedTime=120'
    """
    if not fields:
        return message
    pairs = " ".join(f"{key}={_format_value(value)}" for key, value in fields.items())
    return f"{message} {pairs}"


def new_entry(
    message: str,
    fields: Optional[Mapping[str, Any]] = None,
    timestamp: Optional[int] = None
) -> LogEntry:
    """
    Create a LogEntry stamped with the current wall-clock time.

    Args:
        message: The log message.
        fields: Optional structured fields serialized into the message text.
        timestamp: Explicit nanosecond timestamp; defaults to now.

    Returns:
        LogEntry instance.
    """
    if timestamp is None:
        timestamp = now_ns()
    return LogEntry(timestamp=timestamp, message=format_message(message, fields))
