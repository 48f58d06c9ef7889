"""SOAP client facade: validated configuration plus the transport executor.

SoapClient is what an envelope layer (WSDL handling, XML serialization)
talks to. It owns the TransportConfig, exposes it through validating
properties and fluent ``set_*`` methods, and delegates each outbound call to
a TransportExecutor held by composition.

Invalid configuration raises ConfigError immediately. Transport failures are
retried internally and only surface as TransportError once every attempt has
failed; the code of the last attempt stays available via ``last_conn_errno``
and ``last_conn_err_text``.

A SoapClient is not safe for concurrent calls: ``last_conn_errno`` is shared
state written by every attempt.

Example:
    >>> from soapx import SoapClient, SoapVersion
    >>> client = SoapClient(
    ...     "https://ws.example.com/quote?wsdl",
    ...     {"login": "user", "password": "secret"},
    ...     negotiation_timeout=5,
    ...     persistance_factor=3,
    ...     persistance_timeout=30,
    ... )
    >>> client.set_header("X-Tenant", "acme").set_ignore_cert_verify(True)
    >>> client.do_request(envelope, "https://ws.example.com/quote", "GetQuote", SoapVersion.SOAP_1_1)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from soapx.errors import ConfigError
from soapx.models.config import BasicAuth, TransportConfig, default_socket_timeout
from soapx.models.constants import DEFAULT_NEGOTIATION_TIMEOUT, DEFAULT_PERSISTANCE_FACTOR
from soapx.observability import get_logger
from soapx.transport.error_codes import strerror
from soapx.transport.executor import ConnectionState, TransportExecutor
from soapx.utils.sanitization import sanitize_url

logger = get_logger(__name__)

LOGIN_OPTION = "login"
PASSWORD_OPTION = "password"

_MESSAGES = {
    "auth": "Login and password options must be strings.",
    "content_type": "Content-type value must be a valid string or None to use SOAP version defaults.",
    "custom_headers": "Headers must map non-empty string names to string values.",
    "ignore_cert_verify": "Ignore-cert-verify flag must be a boolean.",
    "negotiation_timeout": "Negotiation timeout must be a positive integer or 0 to disable.",
    "persistance_factor": "Number of attempts must be at least equal to 1.",
    "persistance_timeout": (
        "Persistance timeout must be a positive integer, 0 to disable "
        "or None to use the default socket timeout."
    ),
}


class SoapClient:
    """SOAP transport client with timeouts, retries, basic auth and custom headers.

    Attributes:
        wsdl: Service description URL, kept for the envelope layer
        options: Options mapping given at construction
        config: The live TransportConfig read by the executor on every call
    """

    def __init__(
        self,
        wsdl: str | None,
        options: Mapping[str, Any] | None = None,
        negotiation_timeout: int = DEFAULT_NEGOTIATION_TIMEOUT,
        persistance_factor: int = DEFAULT_PERSISTANCE_FACTOR,
        persistance_timeout: int | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            wsdl: URL of the service description (not fetched by this package)
            options: Options mapping; ``login`` (and optionally ``password``)
                enable HTTP basic authentication
            negotiation_timeout: Connect timeout in seconds, 0 to disable
            persistance_factor: Total number of attempts per call, at least 1
            persistance_timeout: Read timeout in seconds, 0 to disable, None to
                use the process default socket timeout
            transport: Optional httpx transport used for every attempt

        Raises:
            ConfigError: If any argument is invalid
        """
        if options is not None and not isinstance(options, Mapping):
            raise ConfigError("options", "Options must be a mapping.")

        self.wsdl = wsdl
        self.options: dict[str, Any] = dict(options or {})
        self.config = TransportConfig()

        self.set_negotiation_timeout(negotiation_timeout)
        self.set_persistance_factor(persistance_factor)
        self.set_persistance_timeout(persistance_timeout)
        self.set_ignore_cert_verify(False)

        if LOGIN_OPTION in self.options:
            try:
                auth = BasicAuth(
                    login=self.options[LOGIN_OPTION],
                    password=self.options.get(PASSWORD_OPTION),
                )
            except ValidationError as e:
                raise ConfigError("auth", _MESSAGES["auth"]) from e
            self.config.auth = auth

        self._state = ConnectionState()
        self._executor = TransportExecutor(self.config, self._state, transport=transport)

        logger.debug(
            "soapx.client.created",
            wsdl=sanitize_url(wsdl or ""),
            negotiation_timeout=self.config.negotiation_timeout,
            persistance_factor=self.config.persistance_factor,
            persistance_timeout=self.config.persistance_timeout,
            basic_auth=self.config.auth is not None,
        )

    def _assign(self, field: str, value: Any) -> None:
        """Validate and store a config field, translating pydantic errors."""
        try:
            setattr(self.config, field, value)
        except ValidationError as e:
            raise ConfigError(
                field, _MESSAGES[field], details={"reason": e.errors()[0]["msg"]}
            ) from e

    def do_request(
        self,
        request: str,
        location: str,
        action: str | None,
        version: int,
        one_way: bool = False,
    ) -> str:
        """Post a serialized SOAP request and return the raw response body.

        Args:
            request: Serialized SOAP envelope
            location: Endpoint URL
            action: SOAP action token, may be empty
            version: SoapVersion (or its integer value)
            one_way: Skip reading the response body and return ""

        Raises:
            TransportError: If all ``persistance_factor`` attempts failed
        """
        return self._executor.execute(request, location, action, version, one_way)

    @property
    def auth(self) -> BasicAuth | None:
        return self.config.auth

    @property
    def last_conn_errno(self) -> int | None:
        """Error code of the last attempt: None before any call, 0 on success."""
        return self._state.last_conn_errno

    @property
    def last_conn_err_text(self) -> str:
        """Text for ``last_conn_errno``; empty when there was no error."""
        return strerror(self._state.last_conn_errno)

    @property
    def content_type(self) -> str | None:
        return self.config.content_type

    @content_type.setter
    def content_type(self, value: str | None) -> None:
        self._assign("content_type", value)

    def set_content_type(self, value: str | None = None) -> SoapClient:
        """Set the Content-Type override (e.g. ``application/soap+xml``); None restores defaults."""
        self.content_type = value
        return self

    @property
    def negotiation_timeout(self) -> int:
        return self.config.negotiation_timeout

    @negotiation_timeout.setter
    def negotiation_timeout(self, value: int) -> None:
        self._assign("negotiation_timeout", value)

    def set_negotiation_timeout(self, value: int) -> SoapClient:
        self.negotiation_timeout = value
        return self

    @property
    def persistance_factor(self) -> int:
        return self.config.persistance_factor

    @persistance_factor.setter
    def persistance_factor(self, value: int) -> None:
        self._assign("persistance_factor", value)

    def set_persistance_factor(self, value: int) -> SoapClient:
        self.persistance_factor = value
        return self

    @property
    def persistance_timeout(self) -> int:
        return self.config.persistance_timeout

    @persistance_timeout.setter
    def persistance_timeout(self, value: int | None) -> None:
        self._assign("persistance_timeout", default_socket_timeout() if value is None else value)

    def set_persistance_timeout(self, value: int | None = None) -> SoapClient:
        """Set the read timeout; None falls back to the process default socket timeout."""
        self.persistance_timeout = value
        return self

    @property
    def ignore_cert_verify(self) -> bool:
        return self.config.ignore_cert_verify

    @ignore_cert_verify.setter
    def ignore_cert_verify(self, value: bool) -> None:
        self._assign("ignore_cert_verify", value)

    def set_ignore_cert_verify(self, value: bool) -> SoapClient:
        self.ignore_cert_verify = value
        return self

    @property
    def headers(self) -> dict[str, str]:
        """Copy of the custom headers sent with every request."""
        return dict(self.config.custom_headers)

    @headers.setter
    def headers(self, value: Mapping[str, str]) -> None:
        if not isinstance(value, Mapping):
            raise ConfigError("custom_headers", "Not a mapping.")
        self._assign("custom_headers", dict(value))

    def set_headers(self, value: Mapping[str, str]) -> SoapClient:
        """Replace all custom headers."""
        self.headers = value
        return self

    def set_header(self, name: str, value: str) -> SoapClient:
        """Add or replace one custom header.

        Raises:
            ConfigError: If ``name`` is not a non-empty string
        """
        if not isinstance(name, str) or not name:
            raise ConfigError("custom_headers", "Header name must be a non-empty string.")
        self._assign("custom_headers", {**self.config.custom_headers, name: value})
        return self

    def get_header(self, name: str) -> str | None:
        """Return a custom header value, or None if it is not set."""
        return self.config.custom_headers.get(name)
