"""Transport configuration models.

``TransportConfig`` is the single source of settings read by the transport
executor on every call. It is mutable, but every assignment is validated, so
the invariants below hold at all times:

- ``persistance_factor >= 1``
- ``negotiation_timeout >= 0`` and ``persistance_timeout >= 0``
- every ``custom_headers`` name is a non-empty string
"""

from __future__ import annotations

import socket

from pydantic import ConfigDict, Field, field_validator

from soapx.models.base import SoapxBaseModel
from soapx.models.constants import (
    DEFAULT_NEGOTIATION_TIMEOUT,
    DEFAULT_PERSISTANCE_FACTOR,
    DISABLED_TIMEOUT,
)


class BasicAuth(SoapxBaseModel):
    """HTTP basic authentication credentials.

    Attributes:
        login: User name sent to the server
        password: Optional password; None sends the login alone
    """

    login: str = Field(strict=True)
    password: str | None = Field(default=None, strict=True)

    @property
    def credentials(self) -> str:
        """Return the ``login[:password]`` credential string.

        A login without password yields the login alone, with no trailing colon.

        Example:
            >>> BasicAuth(login="u").credentials
            'u'
            >>> BasicAuth(login="u", password="p").credentials
            'u:p'
        """
        if self.password is None:
            return self.login
        return f"{self.login}:{self.password}"


class TransportConfig(SoapxBaseModel):
    """Settings applied to every outbound SOAP request.

    Attributes:
        auth: Basic auth credentials, or None to skip authentication
        content_type: Content-Type override, or None for the SOAP version default
        custom_headers: Extra headers sent with every request, in insertion order
        ignore_cert_verify: Disable SSL peer certificate verification when True
        negotiation_timeout: Connect timeout in seconds, 0 disables it
        persistance_factor: Total number of attempts per call (1 means no retry)
        persistance_timeout: Read timeout in seconds, 0 disables it
    """

    model_config = ConfigDict(frozen=False)

    auth: BasicAuth | None = None
    content_type: str | None = Field(default=None, strict=True)
    custom_headers: dict[str, str] = Field(default_factory=dict, strict=True)
    ignore_cert_verify: bool = Field(default=False, strict=True)
    negotiation_timeout: int = Field(default=DEFAULT_NEGOTIATION_TIMEOUT, ge=0, strict=True)
    persistance_factor: int = Field(default=DEFAULT_PERSISTANCE_FACTOR, ge=1, strict=True)
    persistance_timeout: int = Field(default=DISABLED_TIMEOUT, ge=0, strict=True)

    @field_validator("custom_headers")
    @classmethod
    def _check_header_names(cls, value: dict[str, str]) -> dict[str, str]:
        for name in value:
            if not name:
                raise ValueError("Header name must be a non-empty string.")
        return value


def default_socket_timeout() -> int:
    """Return the process-wide default socket timeout in whole seconds.

    Reads ``socket.getdefaulttimeout()``. An unset value (None) resolves to
    0 (disabled). Fractions are truncated.

    Example:
        >>> import socket
        >>> socket.setdefaulttimeout(30)
        >>> default_socket_timeout()
        30
    """
    value = socket.getdefaulttimeout()
    if not value:
        return DISABLED_TIMEOUT
    return max(int(value), DISABLED_TIMEOUT)
