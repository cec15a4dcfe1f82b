"""
Custom exceptions for loki-push-core.
"""

from typing import Optional


class LokiError(Exception):
    """Base exception for all Loki-related errors."""
    pass


class LokiConfigurationError(LokiError):
    """Raised when an endpoint, credentials or config file are missing or malformed."""
    pass


class LokiEncodingError(LokiError):
    """Raised when a batch cannot be serialized into a push payload."""
    pass


class LokiTransportError(LokiError):
    """Raised when the push request fails before a response is received."""
    pass


class LokiCancelledError(LokiError):
    """Raised when a push is aborted by the caller."""
    pass


class LokiRejectionError(LokiError):
    """Raised when Loki answers a push with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        status_text: str,
        response_body: Optional[str] = None
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.response_body = response_body
        body = response_body if response_body is not None else "<body unavailable>"
        super().__init__(f"Loki rejected push with status {status_code} {status_text}: {body}")
