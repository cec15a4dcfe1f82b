"""
LogStream model representing a stream of logs with common labels.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping

from .log_entry import LogEntry


@dataclass(frozen=True, init=False)
class LogStream:
    """
    A stream of log entries sharing common labels.

    Labels are copied and entries frozen into a tuple on construction, so a
    stream handed to the encoder cannot change underneath it.

    Attributes:
        labels: Dictionary of label key-value pairs (e.g., {"app": "demo", "env": "test"}).
        entries: Tuple of LogEntry objects in this stream, in send order.
    """

    labels: dict[str, str]
    entries: tuple[LogEntry, ...]

    def __init__(self, labels: Mapping[str, str], entries: Iterable[LogEntry] = ()):
        object.__setattr__(self, "labels", dict(labels))
        object.__setattr__(self, "entries", tuple(entries))

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with labels and entries.
        """
        return {
            "labels": dict(self.labels),
            "entries": [entry.to_dict() for entry in self.entries]
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LogStream":
        """
        Create LogStream from dictionary.

        Args:
            data: Dictionary with labels and entries keys.

        Returns:
            LogStream instance.
        """
        entries = [LogEntry.from_dict(e) for e in data.get("entries", [])]
        return cls(
            labels=data["labels"],
            entries=entries
        )

    def to_loki_stream(self) -> dict:
        """
        Convert to Loki push format.

        Returns:
            Dictionary with 'stream' (labels) and 'values' (log entries).
        """
        return {
            "stream": dict(self.labels),
            "values": [entry.to_loki_value() for entry in self.entries]
        }

    @classmethod
    def from_loki_stream(cls, stream_data: dict) -> "LogStream":
        """
        Create LogStream from Loki push format.

        Args:
            stream_data: Dictionary with 'stream' (labels) and 'values' (log entries).

        Returns:
            LogStream instance.
        """
        labels = stream_data.get("stream", {})
        values = stream_data.get("values", [])
        entries = [LogEntry.from_loki_value(v) for v in values]
        return cls(labels=labels, entries=entries)
