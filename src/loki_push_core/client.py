"""
LokiPushClient for shipping log batches to Grafana Loki via the push API.
"""

import logging
import threading
from typing import Iterable, Optional, Union
from urllib.parse import urlsplit

import requests

from .encoder import CONTENT_TYPE, encode
from .exceptions import LokiConfigurationError
from .models import Batch, Credentials, LogStream, PushResult

logger = logging.getLogger(__name__)

PUSH_PATH = "/loki/api/v1/push"
DEFAULT_TIMEOUT = 10.0


def _normalize_endpoint(endpoint_url: str) -> str:
    """Validate an endpoint URL and append the push path to bare hosts.

    Args:
        endpoint_url: Push URL or Loki base URL.

    Returns:
        The URL to POST to.

    Raises:
        LokiConfigurationError: If the URL is empty or not http(s).
    """
    if not isinstance(endpoint_url, str) or not endpoint_url.strip():
        raise LokiConfigurationError(
            "Loki endpoint URL is missing (example: http://localhost:3100)"
        )
    url = endpoint_url.strip()
    if not url.startswith(("http://", "https://")):
        raise LokiConfigurationError(
            f"Invalid Loki endpoint URL {url!r}: it must start with 'http://' or 'https://'"
        )
    if not urlsplit(url).netloc:
        raise LokiConfigurationError(f"Invalid Loki endpoint URL {url!r}: host is missing")
    if urlsplit(url).path in ("", "/"):
        url = url.rstrip("/") + PUSH_PATH
    return url


def _read_body(response: requests.Response) -> tuple[Optional[str], bool]:
    """Read a response body without letting a broken stream fail the push."""
    try:
        return response.text, True
    except (requests.exceptions.RequestException, UnicodeDecodeError) as e:
        logger.debug("Could not read Loki response body: %s", e)
        return None, False


class LokiPushClient:
    """
    Client for pushing log streams to Grafana Loki.

    Each push is a single POST with no retries; the outcome is returned as a
    PushResult for the caller to act on.

    Example:
        client = LokiPushClient(
            endpoint_url="https://logs-prod-025.grafana.net",
            credentials=Credentials("123456", "api-key"),
        )

        stream = LogStream({"app": "demo"}, [new_entry("hello")])
        result = client.push_batch([stream])
    """

    def __init__(
        self,
        endpoint_url: str,
        credentials: Optional[Credentials] = None,
        org_id: Optional[str] = None,
        ca_cert: Optional[str] = None,
        verify_ssl: bool = True,
        timeout: float = DEFAULT_TIMEOUT
    ):
        """
        Initialize the push client.

        Args:
            endpoint_url: Loki push URL, or a base URL to which /loki/api/v1/push is appended.
            credentials: Optional Credentials for basic authentication.
            org_id: Optional X-Scope-OrgID header for multi-tenant Loki setups.
            ca_cert: Optional path to CA certificate PEM file for self-signed certs.
            verify_ssl: Whether to verify SSL certificates. Set False to disable (insecure).
            timeout: Request timeout in seconds.

        Raises:
            LokiConfigurationError: If the URL, credentials or timeout are invalid.
        """
        self.endpoint_url = _normalize_endpoint(endpoint_url)

        if credentials is not None and (not credentials.username or not credentials.password):
            raise LokiConfigurationError("Loki credentials need both a username and a password")
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise LokiConfigurationError(f"Timeout must be a positive number of seconds, got {timeout!r}")

        self.credentials = credentials
        self.org_id = org_id
        self.ca_cert = ca_cert
        self.verify_ssl = verify_ssl
        self.timeout = timeout

        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """
        Get or create the calling thread's HTTP session.

        requests.Session is not thread-safe, so each thread pushing through
        this client gets its own pooled session. Auth and headers are sent
        per request, so no session holds per-call state.

        Returns:
            requests.Session instance.
        """
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": CONTENT_TYPE}
        if self.org_id:
            headers["X-Scope-OrgID"] = self.org_id
        return headers

    def push(
        self,
        batch_bytes: bytes,
        cancel_event: Optional[threading.Event] = None
    ) -> PushResult:
        """
        Send an encoded batch to Loki in a single attempt.

        Args:
            batch_bytes: Encoded push body, as produced by encode().
            cancel_event: Optional event. If set before sending, nothing is sent.
                If set when the request fails without a response, the failure
                is reported as a cancellation. A response that did arrive is
                always reported as received.

        Returns:
            PushResult describing success, rejection, transport failure or cancellation.
        """
        if cancel_event is not None and cancel_event.is_set():
            return PushResult.cancelled("Push cancelled before sending")

        verify: Union[bool, str] = self.ca_cert if self.ca_cert else self.verify_ssl
        auth = self.credentials.as_auth() if self.credentials else None

        logger.debug("Pushing %d bytes to %s", len(batch_bytes), self.endpoint_url)

        try:
            response = self.session.post(
                url=self.endpoint_url,
                data=batch_bytes,
                headers=self._headers(),
                auth=auth,
                verify=verify,
                timeout=self.timeout,
                stream=True
            )
        except requests.exceptions.SSLError as e:
            result = PushResult.transport_failure(f"SSL error connecting to Loki: {e}")
        except requests.exceptions.ConnectionError as e:
            result = PushResult.transport_failure(
                f"Failed to connect to Loki at {self.endpoint_url}: {e}"
            )
        except requests.exceptions.Timeout as e:
            result = PushResult.transport_failure(f"Push to Loki timed out: {e}")
        except requests.exceptions.RequestException as e:
            result = PushResult.transport_failure(f"Push to Loki failed: {e}")
        else:
            result = self._classify(response)

        # Only a request that never got a response can be called cancelled.
        if result.status_code is None and cancel_event is not None and cancel_event.is_set():
            return PushResult.cancelled("Push cancelled while in flight")

        if not result.success:
            logger.warning("%s", result.message)
        return result

    def _classify(self, response: requests.Response) -> PushResult:
        """Turn an HTTP response into a PushResult, reading its body best-effort."""
        with response:
            body, body_available = _read_body(response)
        if 200 <= response.status_code < 300:
            return PushResult.succeeded(response.status_code, response.reason, body)
        return PushResult.rejected(response.status_code, response.reason, body, body_available)

    def push_batch(
        self,
        streams: Union[Batch, Iterable[LogStream]],
        cancel_event: Optional[threading.Event] = None
    ) -> PushResult:
        """
        Encode streams and push them in one request.

        Args:
            streams: A Batch or an iterable of LogStream objects.
            cancel_event: Optional cancellation event, see push().

        Returns:
            PushResult for the request.

        Raises:
            LokiEncodingError: If the streams cannot be encoded.
        """
        return self.push(encode(streams), cancel_event=cancel_event)

    def close(self) -> None:
        """Close the HTTP sessions of every thread that used this client."""
        with self._lock:
            sessions, self._sessions = self._sessions, []
            self._local = threading.local()
        for session in sessions:
            session.close()

    def __enter__(self) -> "LokiPushClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - closes session."""
        self.close()


def push(
    endpoint_url: str,
    batch_bytes: bytes,
    credentials: Optional[Credentials] = None,
    timeout: float = DEFAULT_TIMEOUT
) -> PushResult:
    """
    Push an encoded batch with a short-lived client.

    Args:
        endpoint_url: Loki push URL or base URL.
        batch_bytes: Encoded push body.
        credentials: Optional Credentials for basic authentication.
        timeout: Request timeout in seconds.

    Returns:
        PushResult for the request.

    Raises:
        LokiConfigurationError: If the endpoint is invalid; nothing is sent.
    """
    with LokiPushClient(endpoint_url, credentials=credentials, timeout=timeout) as client:
        return client.push(batch_bytes)
