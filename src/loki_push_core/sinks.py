"""
Interchangeable log sinks: rolling file, console, Loki push, and the OS event log.
"""

import logging
import logging.handlers
import os
import sys
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping, Optional, TextIO

from .builder import format_message, new_entry
from .client import LokiPushClient
from .encoder import group_by_labels
from .models import LogEntry, PushResult

logger = logging.getLogger(__name__)

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_SHORT_LEVELS = {
    logging.DEBUG: "DBG",
    logging.INFO: "INF",
    logging.WARNING: "WRN",
    logging.ERROR: "ERR",
}


def _level_number(level: str) -> int:
    try:
        return LEVELS[level.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level {level!r}; expected one of {', '.join(LEVELS)}"
        ) from None


class Sink(ABC):
    """
    Destination for demo log records.

    Subclasses implement _write(); records below min_level are dropped
    before they reach it.
    """

    def __init__(self, min_level: str = "debug"):
        self.min_level = _level_number(min_level)

    def emit(self, level: str, message: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """
        Record a log message.

        Args:
            level: One of debug, info, warning, error.
            message: The log message.
            fields: Optional structured fields.

        Raises:
            ValueError: If level is not recognized.
        """
        if _level_number(level) < self.min_level:
            return
        self._write(level.lower(), message, fields)

    @abstractmethod
    def _write(self, level: str, message: str, fields: Optional[Mapping[str, Any]]) -> None:
        ...

    def flush(self) -> Optional[PushResult]:
        """Deliver anything buffered. Returns a PushResult for network sinks."""
        return None

    def close(self) -> None:
        """Flush and release resources."""
        self.flush()

    def __enter__(self) -> "Sink":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _short_level(record: logging.LogRecord) -> str:
    return _SHORT_LEVELS.get(record.levelno, record.levelname[:3].upper())


class _ShortLevelFormatter(logging.Formatter):
    """Formats records as '2024-01-01 12:00:00.123 +01:00 [INF] message'."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).astimezone()
        offset = stamp.strftime("%z")
        when = (
            stamp.strftime("%Y-%m-%d %H:%M:%S.")
            + f"{stamp.microsecond // 1000:03d} {offset[:3]}:{offset[3:5]}"
        )
        return f"{when} [{_short_level(record)}] {record.getMessage()}"


class _ConsoleFormatter(logging.Formatter):
    """Formats records as '[12:00:00 INF] message'."""

    def format(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        return f"[{when} {_short_level(record)}] {record.getMessage()}"


class _HandlerSink(Sink):
    """Sink that writes through a stdlib logging handler."""

    def __init__(self, handler: logging.Handler, name: str, min_level: str = "debug"):
        super().__init__(min_level)
        self.handler = handler
        self.name = name

    def _write(self, level: str, message: str, fields: Optional[Mapping[str, Any]]) -> None:
        record = logging.LogRecord(
            name=self.name,
            level=LEVELS[level],
            pathname=__file__,
            lineno=0,
            msg=format_message(message, fields),
            args=None,
            exc_info=None,
        )
        self.handler.handle(record)

    def flush(self) -> None:
        self.handler.flush()

    def close(self) -> None:
        self.flush()
        self.handler.close()


class FileSink(_HandlerSink):
    """
    Daily rolling log file that retains a fixed number of rotated files.

    Args:
        path: Log file path; its directory is created if missing.
        retained_files: Number of rotated files to keep.
        min_level: Minimum level to write.
    """

    def __init__(self, path: str, retained_files: int = 7, min_level: str = "info"):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        handler = logging.handlers.TimedRotatingFileHandler(
            path,
            when="midnight",
            backupCount=retained_files,
            encoding="utf-8",
        )
        handler.setFormatter(_ShortLevelFormatter())
        super().__init__(handler, name="loki_push_core.file", min_level=min_level)
        self.path = path


class ConsoleSink(_HandlerSink):
    """
    Echoes records to the console.

    Args:
        stream: Stream to write to; defaults to sys.stdout at construction.
        min_level: Minimum level to write.
    """

    def __init__(self, stream: Optional[TextIO] = None, min_level: str = "debug"):
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(_ConsoleFormatter())
        super().__init__(handler, name="loki_push_core.console", min_level=min_level)


class TeeSink(Sink):
    """Forwards every record to several sinks, each applying its own min_level."""

    def __init__(self, *sinks: Sink):
        super().__init__("debug")
        self.sinks = sinks

    def _write(self, level: str, message: str, fields: Optional[Mapping[str, Any]]) -> None:
        for sink in self.sinks:
            sink.emit(level, message, fields)

    def flush(self) -> None:
        for sink in self.sinks:
            sink.flush()

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()


class EventLogSink(_HandlerSink):
    """
    The host operating system's event log.

    Windows Application log via NTEventLogHandler (requires pywin32);
    syslog elsewhere.
    """

    def __init__(self, source: str, min_level: str = "debug"):
        if sys.platform == "win32":
            handler: logging.Handler = logging.handlers.NTEventLogHandler(source, logtype="Application")
        elif os.path.exists("/dev/log"):
            handler = logging.handlers.SysLogHandler(address="/dev/log")
        else:
            handler = logging.handlers.SysLogHandler(address=("localhost", 514))
        handler.setFormatter(logging.Formatter(f"{source}: %(message)s"))
        super().__init__(handler, name=source, min_level=min_level)
        self.source = source


class LokiPushSink(Sink):
    """
    Buffers entries and pushes them to Loki in batches.

    Each entry gets the static labels plus a level label. A batch is pushed
    when batch_size entries are buffered and on flush()/close(). Pushes are
    never retried; failures are logged and counted.
    """

    def __init__(
        self,
        client: LokiPushClient,
        labels: Mapping[str, str],
        min_level: str = "debug",
        batch_size: int = 100,
        level_label: str = "level"
    ):
        super().__init__(min_level)
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.client = client
        self.labels = dict(labels)
        self.batch_size = batch_size
        self.level_label = level_label

        self.pushed_entries = 0
        self.failed_pushes = 0
        self.last_result: Optional[PushResult] = None
        self._buffer: list[tuple[dict[str, str], LogEntry]] = []

    def _write(self, level: str, message: str, fields: Optional[Mapping[str, Any]]) -> None:
        labels = {**self.labels, self.level_label: level}
        self._buffer.append((labels, new_entry(message, fields)))
        if len(self._buffer) >= self.batch_size:
            self.flush()

    def flush(self) -> Optional[PushResult]:
        if not self._buffer:
            return None

        pending, self._buffer = self._buffer, []
        streams = group_by_labels(pending)
        result = self.client.push_batch(streams)
        self.last_result = result

        if result.success:
            self.pushed_entries += len(pending)
            logger.debug("Pushed %d entries in %d streams", len(pending), len(streams))
        else:
            self.failed_pushes += 1
            logger.error("Dropped %d entries: %s", len(pending), result.message)
        return result
