"""
Batch model representing the full set of streams sent in one push request.
"""

from dataclasses import dataclass
from typing import Iterable

from .log_stream import LogStream


@dataclass(frozen=True, init=False)
class Batch:
    """
    An ordered set of streams delivered by a single push.

    Attributes:
        streams: Tuple of LogStream objects, encoded in this order.
    """

    streams: tuple[LogStream, ...]

    def __init__(self, streams: Iterable[LogStream] = ()):
        object.__setattr__(self, "streams", tuple(streams))

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with streams.
        """
        return {"streams": [stream.to_dict() for stream in self.streams]}

    @classmethod
    def from_dict(cls, data: dict) -> "Batch":
        """
        Create Batch from dictionary.

        Args:
            data: Dictionary with a streams key.

        Returns:
            Batch instance.
        """
        return cls(LogStream.from_dict(s) for s in data.get("streams", []))

    def to_loki_payload(self) -> dict:
        """
        Convert to the top-level Loki push body.

        Returns:
            Dictionary of the form {"streams": [...]}.
        """
        return {"streams": [stream.to_loki_stream() for stream in self.streams]}

    @classmethod
    def from_loki_payload(cls, payload: dict) -> "Batch":
        """
        Create Batch from a decoded Loki push body.

        Args:
            payload: Dictionary with a 'streams' list in Loki push format.

        Returns:
            Batch instance.
        """
        return cls(LogStream.from_loki_stream(s) for s in payload.get("streams", []))

    @property
    def total_entries(self) -> int:
        """
        Get total number of log entries across all streams.

        Returns:
            Total entry count.
        """
        return sum(len(stream.entries) for stream in self.streams)
