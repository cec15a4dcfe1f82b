"""
Data models for loki-push-core.
"""

from .batch import Batch
from .credentials import Credentials
from .log_entry import LogEntry
from .log_stream import LogStream
from .push_result import FailureCause, PushResult

__all__ = [
    "Batch",
    "Credentials",
    "FailureCause",
    "LogEntry",
    "LogStream",
    "PushResult",
]
