"""Tests for data models."""

import dataclasses

import pytest

from loki_push_core.exceptions import LokiCancelledError, LokiRejectionError, LokiTransportError
from loki_push_core.models import (
    Batch,
    Credentials,
    FailureCause,
    LogEntry,
    LogStream,
    PushResult,
)


class TestLogEntry:
    """Test LogEntry model."""

    def test_create_entry(self) -> None:
        entry = LogEntry(timestamp=1704067200000000000, message="test log")
        assert entry.timestamp == 1704067200000000000
        assert entry.message == "test log"

    def test_is_frozen(self) -> None:
        entry = LogEntry(timestamp=1, message="a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.message = "b"

    def test_to_dict(self) -> None:
        entry = LogEntry(timestamp=1704067200000000000, message="test log")
        assert entry.to_dict() == {
            "timestamp": 1704067200000000000,
            "message": "test log"
        }

    def test_from_dict_string_timestamp(self) -> None:
        data = {"timestamp": "1704067200000000000", "message": "test log"}
        entry = LogEntry.from_dict(data)
        assert entry.timestamp == 1704067200000000000

    def test_to_loki_value(self) -> None:
        entry = LogEntry(timestamp=1700000000000100000, message="world")
        assert entry.to_loki_value() == ["1700000000000100000", "world"]

    def test_from_loki_value(self) -> None:
        value = ["1704067200000000000", "test log message"]
        entry = LogEntry.from_loki_value(value)
        assert entry.timestamp == 1704067200000000000
        assert entry.message == "test log message"


class TestLogStream:
    """Test LogStream model."""

    def test_create_stream(self) -> None:
        entries = [
            LogEntry(timestamp=1704067200000000000, message="log 1"),
            LogEntry(timestamp=1704067201000000000, message="log 2"),
        ]
        stream = LogStream(labels={"job": "api"}, entries=entries)
        assert stream.labels == {"job": "api"}
        assert len(stream.entries) == 2
        assert isinstance(stream.entries, tuple)

    def test_labels_copied_on_construction(self) -> None:
        labels = {"app": "demo"}
        stream = LogStream(labels=labels, entries=[])
        labels["app"] = "changed"
        assert stream.labels == {"app": "demo"}

    def test_equality(self) -> None:
        entries = [LogEntry(timestamp=1, message="a")]
        assert LogStream({"app": "x"}, entries) == LogStream({"app": "x"}, list(entries))

    def test_to_loki_stream(self) -> None:
        stream = LogStream(
            labels={"app": "demo", "env": "test"},
            entries=[LogEntry(timestamp=1700000000000000000, message="hello")]
        )
        assert stream.to_loki_stream() == {
            "stream": {"app": "demo", "env": "test"},
            "values": [["1700000000000000000", "hello"]]
        }

    def test_from_loki_stream(self) -> None:
        loki_data = {
            "stream": {"job": "api", "container": "web"},
            "values": [
                ["1704067200000000000", "first log"],
                ["1704067201000000000", "second log"],
            ]
        }
        stream = LogStream.from_loki_stream(loki_data)
        assert stream.labels == {"job": "api", "container": "web"}
        assert stream.entries[0].timestamp == 1704067200000000000
        assert stream.entries[1].message == "second log"

    def test_roundtrip(self) -> None:
        original = LogStream(
            labels={"job": "test"},
            entries=[LogEntry(timestamp=123, message="msg")]
        )
        assert LogStream.from_dict(original.to_dict()) == original


class TestBatch:
    """Test Batch model."""

    def test_to_loki_payload(self) -> None:
        batch = Batch([
            LogStream({"job": "api"}, [LogEntry(timestamp=1, message="a")]),
            LogStream({"job": "web"}, []),
        ])
        payload = batch.to_loki_payload()
        assert [s["stream"] for s in payload["streams"]] == [{"job": "api"}, {"job": "web"}]

    def test_from_loki_payload(self) -> None:
        payload = {"streams": [{"stream": {"job": "api"}, "values": [["5", "x"]]}]}
        batch = Batch.from_loki_payload(payload)
        assert batch.streams[0].entries[0] == LogEntry(timestamp=5, message="x")

    def test_total_entries(self) -> None:
        batch = Batch([
            LogStream({"job": "api"}, [LogEntry(1, "a"), LogEntry(2, "b")]),
            LogStream({"job": "web"}, [LogEntry(3, "c")]),
        ])
        assert batch.total_entries == 3

    def test_total_entries_empty(self) -> None:
        assert Batch().total_entries == 0


class TestCredentials:
    """Test Credentials model."""

    def test_as_auth(self) -> None:
        assert Credentials("user", "pass").as_auth() == ("user", "pass")

    def test_password_hidden_from_repr(self) -> None:
        assert "secret" not in repr(Credentials("user", "secret"))


class TestPushResult:
    """Test PushResult model."""

    def test_succeeded(self) -> None:
        result = PushResult.succeeded(204, "No Content", "")
        assert result.success is True
        assert result.cause is None
        result.raise_for_failure()

    def test_rejected_carries_diagnostics(self) -> None:
        result = PushResult.rejected(400, "Bad Request", "entry out of order")
        assert result.success is False
        assert result.cause is FailureCause.BACKEND_REJECTION
        assert "400" in result.message
        assert "entry out of order" in result.message

    def test_rejected_body_unavailable(self) -> None:
        result = PushResult.rejected(500, "Internal Server Error", None, body_available=False)
        assert result.response_body is None
        assert result.body_available is False
        assert "<body unavailable>" in result.message

    def test_raise_rejection(self) -> None:
        result = PushResult.rejected(401, "Unauthorized", "invalid api key")
        with pytest.raises(LokiRejectionError) as exc_info:
            result.raise_for_failure()
        assert exc_info.value.status_code == 401
        assert exc_info.value.response_body == "invalid api key"

    def test_raise_transport(self) -> None:
        with pytest.raises(LokiTransportError, match="refused"):
            PushResult.transport_failure("connection refused").raise_for_failure()

    def test_raise_cancelled(self) -> None:
        with pytest.raises(LokiCancelledError):
            PushResult.cancelled().raise_for_failure()

    def test_to_dict(self) -> None:
        data = PushResult.transport_failure("boom").to_dict()
        assert data["cause"] == "transport_error"
        assert data["status_code"] is None
