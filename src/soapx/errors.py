"""soapx error taxonomy.

Two kinds of errors reach the caller:

- ``ConfigError`` is raised synchronously when a setter or the constructor
  receives an invalid value. It is never retried.
- ``TransportError`` is raised by the transport executor once every attempt
  of a call has failed. Individual attempt failures are not surfaced.
"""

from __future__ import annotations

from typing import Any

ATTEMPTS_EXHAUSTED_MESSAGE = "Request failed for the maximum number of attempts."


class SoapxError(Exception):
    """Base exception for all soapx errors.

    Attributes:
        code: Error code following the soapx:<area>/<reason> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(SoapxError):
    """Raised when a configuration value is rejected.

    Attributes:
        field: Name of the configuration field that failed validation
    """

    def __init__(self, field: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="soapx:config/invalid_value",
            message=message,
            details={"field": field, **(details or {})},
        )
        self.field = field


class TransportError(SoapxError):
    """Raised when a request failed on every allowed attempt.

    The message is fixed. The error code of the last attempt is available
    through ``SoapClient.last_conn_errno`` and ``SoapClient.last_conn_err_text``.
    """

    def __init__(self, message: str = ATTEMPTS_EXHAUSTED_MESSAGE) -> None:
        super().__init__(code="soapx:transport/attempts_exhausted", message=message)
