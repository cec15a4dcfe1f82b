"""
Encodes log streams into the Loki push API JSON payload.
"""

import json
from typing import Iterable, Mapping, Union

from .exceptions import LokiEncodingError
from .models import Batch, LogEntry, LogStream

CONTENT_TYPE = "application/json"


def _check_stream(stream: LogStream) -> None:
    """Validate label and entry types before serialization.

    Raises:
        LokiEncodingError: If a label, message or timestamp has the wrong type.
    """
    for key, value in stream.labels.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise LokiEncodingError(
                f"Label {key!r}={value!r} must be a string key/value pair"
            )
    for index, entry in enumerate(stream.entries):
        # bool is an int subclass but never a valid timestamp
        if not isinstance(entry.timestamp, int) or isinstance(entry.timestamp, bool):
            raise LokiEncodingError(
                f"Entry {index} in stream {stream.labels} has non-integer timestamp "
                f"{entry.timestamp!r}"
            )
        if not isinstance(entry.message, str):
            raise LokiEncodingError(
                f"Entry {index} in stream {stream.labels} has non-string message "
                f"of type {type(entry.message).__name__}"
            )


def encode(streams: Union[Batch, Iterable[LogStream]]) -> bytes:
    """
    Serialize streams into a Loki push body.

    Each stream is emitted as its own element, even when two streams carry
    equal labels; use group_by_labels() first to merge them.

    Args:
        streams: A Batch or an iterable of LogStream objects.

    Returns:
        UTF-8 encoded JSON of the form {"streams": [...]}.

    Raises:
        LokiEncodingError: If any label or entry cannot be represented as valid text.
    """
    batch = streams if isinstance(streams, Batch) else Batch(streams)

    for stream in batch.streams:
        _check_stream(stream)

    text = json.dumps(batch.to_loki_payload(), ensure_ascii=False, separators=(",", ":"))
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise LokiEncodingError(f"Payload contains text that is not valid UTF-8: {e}") from e


def decode(payload: Union[bytes, str]) -> list[LogStream]:
    """
    Parse a Loki push body back into streams.

    Args:
        payload: Encoded push body.

    Returns:
        List of LogStream objects in payload order.

    Raises:
        LokiEncodingError: If the payload is not a valid push body.
    """
    try:
        data = json.loads(payload)
    except (UnicodeDecodeError, ValueError) as e:
        raise LokiEncodingError(f"Invalid push payload: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("streams"), list):
        raise LokiEncodingError("Push payload must be an object with a 'streams' list")

    try:
        return list(Batch.from_loki_payload(data).streams)
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise LokiEncodingError(f"Malformed stream in push payload: {e}") from e


def group_by_labels(pairs: Iterable[tuple[Mapping[str, str], LogEntry]]) -> list[LogStream]:
    """
    Group (labels, entry) pairs into one stream per distinct label set.

    Streams appear in the order their label set was first seen; entries keep
    their input order within each stream.

    Args:
        pairs: Iterable of (labels, LogEntry) tuples.

    Returns:
        List of LogStream objects.
    """
    grouped: dict[frozenset, tuple[dict[str, str], list[LogEntry]]] = {}
    for labels, entry in pairs:
        key = frozenset(labels.items())
        if key not in grouped:
            grouped[key] = (dict(labels), [])
        grouped[key][1].append(entry)
    return [LogStream(labels=labels, entries=entries) for labels, entries in grouped.values()]
