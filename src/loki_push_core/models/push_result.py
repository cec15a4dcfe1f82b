"""
PushResult model representing the outcome of a single Loki push.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exceptions import LokiCancelledError, LokiRejectionError, LokiTransportError


class FailureCause(str, Enum):
    """Why a push did not succeed."""

    TRANSPORT_ERROR = "transport_error"
    BACKEND_REJECTION = "backend_rejection"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PushResult:
    """
    Outcome of one push attempt.

    Successful pushes carry the status and response body for diagnostics.
    Rejections carry the status, reason and body (None when the body could
    not be read). Transport failures and cancellations carry only a cause
    and message.

    Attributes:
        success: True if Loki answered with a 2xx status.
        status_code: HTTP status code, or None if no response was received.
        status_text: HTTP reason phrase, or None if no response was received.
        response_body: Response body text, or None if unavailable.
        body_available: False if a response arrived but its body could not be read.
        cause: FailureCause for failed pushes, None on success.
        message: Human-readable description of the outcome.
    """

    success: bool
    status_code: Optional[int] = None
    status_text: Optional[str] = None
    response_body: Optional[str] = None
    body_available: bool = True
    cause: Optional[FailureCause] = None
    message: str = ""

    @classmethod
    def succeeded(cls, status_code: int, status_text: str, response_body: Optional[str]) -> "PushResult":
        return cls(
            success=True,
            status_code=status_code,
            status_text=status_text,
            response_body=response_body,
            message=f"Push accepted with status {status_code}"
        )

    @classmethod
    def rejected(
        cls,
        status_code: int,
        status_text: str,
        response_body: Optional[str],
        body_available: bool = True
    ) -> "PushResult":
        body = response_body if body_available else "<body unavailable>"
        return cls(
            success=False,
            status_code=status_code,
            status_text=status_text,
            response_body=response_body,
            body_available=body_available,
            cause=FailureCause.BACKEND_REJECTION,
            message=f"Loki rejected push with status {status_code} {status_text}: {body}"
        )

    @classmethod
    def transport_failure(cls, message: str) -> "PushResult":
        return cls(success=False, cause=FailureCause.TRANSPORT_ERROR, message=message)

    @classmethod
    def cancelled(cls, message: str = "Push cancelled by caller") -> "PushResult":
        return cls(success=False, cause=FailureCause.CANCELLED, message=message)

    def raise_for_failure(self) -> None:
        """
        Raise the exception matching a failed push; do nothing on success.

        Raises:
            LokiRejectionError: If Loki returned a non-2xx status.
            LokiTransportError: If the request failed before a response.
            LokiCancelledError: If the push was cancelled.
        """
        if self.success:
            return
        if self.cause is FailureCause.BACKEND_REJECTION:
            raise LokiRejectionError(self.status_code, self.status_text, self.response_body)
        if self.cause is FailureCause.CANCELLED:
            raise LokiCancelledError(self.message)
        raise LokiTransportError(self.message)

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with all result fields; cause as its string value.
        """
        return {
            "success": self.success,
            "status_code": self.status_code,
            "status_text": self.status_text,
            "response_body": self.response_body,
            "body_available": self.body_available,
            "cause": self.cause.value if self.cause else None,
            "message": self.message
        }
