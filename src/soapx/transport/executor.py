"""Synchronous SOAP request execution with timeouts and bounded retries.

TransportExecutor posts an already-serialized SOAP request and returns the
raw response body. Every attempt runs in its own ``httpx.Client`` scope, so
the connection is released before the next attempt or before returning,
whatever the outcome.

An attempt succeeds when no transport-level error occurred and the body was
read. HTTP status codes do not count as transport errors: a SOAP fault sent
with status 500 is returned to the caller like any other body. Failed attempts
are retried immediately (no backoff) until ``persistance_factor`` attempts
have been made, then TransportError is raised.

Example:
    >>> from soapx.models.config import TransportConfig
    >>> executor = TransportExecutor(TransportConfig(persistance_factor=3))
    >>> body = executor.execute(envelope, "https://ws.example.com/quote", "GetQuote", 1)
    >>> executor.state.last_conn_errno
    0
"""

from __future__ import annotations

import base64
import time
from collections.abc import Generator
from dataclasses import dataclass

import httpx

from soapx.errors import TransportError
from soapx.models.config import TransportConfig
from soapx.observability import get_logger, get_metrics
from soapx.transport.error_codes import ConnErrorCode, classify_exception, strerror
from soapx.transport.headers import build_header_map
from soapx.transport.sanitizer import sanitize_response
from soapx.utils.sanitization import mask_credentials, sanitize_url

logger = get_logger(__name__)

# Exceptions that end a single attempt and feed the retry loop
ATTEMPT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


@dataclass
class ConnectionState:
    """Outcome of the most recent attempt.

    Written only by TransportExecutor, after every attempt. ``last_conn_errno``
    is None until the first attempt, 0 after an attempt without transport
    error and a ConnErrorCode value otherwise. Not safe for concurrent calls.
    """

    last_conn_errno: int | None = None


@dataclass
class CallState:
    """Per-call attempt counter (0-based)."""

    attempt: int = 0


@dataclass
class AttemptResult:
    """Result of one connect-send-read cycle.

    Attributes:
        errno: Connection error code, 0 when the attempt had no transport error
        body: Response body, None when it could not be read
        status_code: HTTP status, None when no response was received
        error: Exception that ended the attempt, if any
    """

    errno: int
    body: str | None = None
    status_code: int | None = None
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.errno == ConnErrorCode.OK and self.body is not None


def encode_headers(headers: dict[str, str]) -> list[tuple[bytes, bytes]]:
    """Encode a header map as UTF-8 byte pairs, in order.

    httpx encodes ``str`` header values as ASCII; byte values are sent as is.
    """
    return [(name.encode("utf-8"), value.encode("utf-8")) for name, value in headers.items()]


class CredentialsAuth(httpx.Auth):
    """HTTP basic auth from a prebuilt ``login[:password]`` credential string.

    httpx.BasicAuth always joins login and password with a colon; this sends
    the credential string exactly as given, so a login without password is
    encoded without a trailing colon.
    """

    def __init__(self, credentials: str) -> None:
        self.credentials = credentials
        token = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        self._auth_header = f"Basic {token}"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self._auth_header
        yield request


class TransportExecutor:
    """Runs the attempt loop for one SOAP call at a time.

    Attributes:
        config: Settings read on every call (timeouts, attempts, auth, headers, SSL)
        state: Connection state updated after every attempt
    """

    def __init__(
        self,
        config: TransportConfig,
        state: ConnectionState | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            config: Transport configuration, read at each call (not copied)
            state: Shared connection state; a private one is created if omitted
            transport: Optional httpx transport handed to every per-attempt
                client (e.g. httpx.MockTransport in tests)
        """
        self.config = config
        self.state = state if state is not None else ConnectionState()
        self._transport = transport

    def _timeout(self) -> httpx.Timeout:
        # 0 disables a timeout; httpx expresses that as None
        read_timeout = self.config.persistance_timeout or None
        connect_timeout = self.config.negotiation_timeout or None
        return httpx.Timeout(read_timeout, connect=connect_timeout)

    def _auth(self) -> CredentialsAuth | None:
        if self.config.auth is None:
            return None
        return CredentialsAuth(self.config.auth.credentials)

    def _open_client(self) -> httpx.Client:
        """Create the client for a single attempt.

        An injected transport owns its SSL setup, so ``verify`` only affects
        the default transport.
        """
        return httpx.Client(
            transport=self._transport,
            timeout=self._timeout(),
            auth=self._auth(),
            verify=not self.config.ignore_cert_verify,
            follow_redirects=False,
        )

    def _attempt(
        self, request: str, location: str, headers: list[tuple[bytes, bytes]], one_way: bool
    ) -> AttemptResult:
        try:
            with self._open_client() as client:
                with client.stream("POST", location, content=request, headers=headers) as response:
                    if one_way:
                        return AttemptResult(
                            errno=ConnErrorCode.OK, body="", status_code=response.status_code
                        )
                    response.read()
                    return AttemptResult(
                        errno=ConnErrorCode.OK,
                        body=response.text,
                        status_code=response.status_code,
                    )
        except ATTEMPT_ERRORS as e:
            return AttemptResult(errno=classify_exception(e), error=e)

    def execute(
        self,
        request: str,
        location: str,
        action: str | None,
        version: int,
        one_way: bool = False,
    ) -> str:
        """Send a SOAP request and return the (sanitized) response body.

        Args:
            request: Serialized SOAP envelope
            location: Endpoint URL
            action: SOAP action token, may be empty
            version: SOAP version (SoapVersion or its integer value)
            one_way: Do not read the response body; an empty string is returned

        Returns:
            Response body, with multipart/XOP wrapping removed

        Raises:
            TransportError: If every one of ``persistance_factor`` attempts failed
        """
        config = self.config
        max_attempts = config.persistance_factor
        headers = build_header_map(version, action, config.custom_headers, config.content_type)
        wire_headers = encode_headers(headers)
        target_url = sanitize_url(location)
        metrics = get_metrics()
        start_time = time.perf_counter()

        logger.debug(
            "soapx.transport.send",
            target_url=target_url,
            action=action,
            soap_version=version,
            one_way=one_way,
            max_attempts=max_attempts,
            headers=headers,
            auth=mask_credentials(config.auth.credentials) if config.auth else None,
            verify_ssl=not config.ignore_cert_verify,
        )

        call = CallState()
        while True:
            if call.attempt > 0:
                metrics.increment_counter("soapx_transport_retries_total")

            result = self._attempt(request, location, wire_headers, one_way)
            self.state.last_conn_errno = int(result.errno)

            if result.succeeded:
                metrics.increment_counter("soapx_transport_attempts_total", {"status": "success"})
                duration_seconds = time.perf_counter() - start_time
                metrics.observe_histogram(
                    "soapx_transport_request_duration_seconds",
                    duration_seconds,
                    {"status": "success"},
                )
                if result.status_code is not None and result.status_code >= 400:
                    logger.info(
                        "soapx.transport.http_error_status",
                        target_url=target_url,
                        status_code=result.status_code,
                        message="Non-2xx response returned to the caller (possible SOAP fault)",
                    )
                logger.info(
                    "soapx.transport.response",
                    target_url=target_url,
                    status_code=result.status_code,
                    attempts=call.attempt + 1,
                    duration_ms=round(duration_seconds * 1000, 2),
                )
                return sanitize_response(result.body or "")

            metrics.increment_counter("soapx_transport_attempts_total", {"status": "error"})

            if call.attempt >= max_attempts - 1:
                duration_seconds = time.perf_counter() - start_time
                metrics.increment_counter("soapx_transport_exhausted_total")
                metrics.observe_histogram(
                    "soapx_transport_request_duration_seconds",
                    duration_seconds,
                    {"status": "error"},
                )
                logger.error(
                    "soapx.transport.exhausted",
                    target_url=target_url,
                    attempts=call.attempt + 1,
                    errno=result.errno,
                    error_text=strerror(result.errno),
                    duration_ms=round(duration_seconds * 1000, 2),
                )
                raise TransportError() from result.error

            logger.warning(
                "soapx.transport.attempt_failed",
                target_url=target_url,
                attempt=call.attempt + 1,
                max_attempts=max_attempts,
                errno=result.errno,
                error_text=strerror(result.errno),
                error=str(result.error)[:200] if result.error else None,
            )
            call.attempt += 1
