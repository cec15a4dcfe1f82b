"""
Python library for shipping log batches to Grafana Loki via the push API
"""

from .builder import format_message, new_entry
from .client import LokiPushClient, push
from .encoder import decode, encode, group_by_labels
from .exceptions import (
    LokiCancelledError,
    LokiConfigurationError,
    LokiEncodingError,
    LokiError,
    LokiRejectionError,
    LokiTransportError,
)
from .models import Batch, Credentials, FailureCause, LogEntry, LogStream, PushResult

__version__ = "0.1.0"

__all__ = [
    "LokiPushClient",
    "push",
    "new_entry",
    "format_message",
    "encode",
    "decode",
    "group_by_labels",
    "Batch",
    "Credentials",
    "FailureCause",
    "LogEntry",
    "LogStream",
    "PushResult",
    "LokiError",
    "LokiConfigurationError",
    "LokiEncodingError",
    "LokiTransportError",
    "LokiRejectionError",
    "LokiCancelledError",
]
