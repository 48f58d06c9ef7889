"""Connection error codes recorded after every transport attempt.

Codes follow libcurl's numbering so values stay comparable with other SOAP
tooling and with logs produced by curl-based clients. ``classify_exception``
maps an httpx exception raised during an attempt to one of these codes and
``strerror`` renders a code as text.

Example:
    >>> import httpx
    >>> classify_exception(httpx.ReadTimeout("timed out"))
    <ConnErrorCode.OPERATION_TIMEDOUT: 28>
    >>> strerror(28)
    'Timeout was reached'
    >>> strerror(0)
    ''
"""

from __future__ import annotations

import socket
import ssl
from enum import IntEnum

import httpx


class ConnErrorCode(IntEnum):
    """Transport-level error codes; OK means the attempt had no transport error."""

    OK = 0
    UNSUPPORTED_PROTOCOL = 1
    URL_MALFORMAT = 3
    COULDNT_RESOLVE_PROXY = 5
    COULDNT_RESOLVE_HOST = 6
    COULDNT_CONNECT = 7
    WEIRD_SERVER_REPLY = 8
    OPERATION_TIMEDOUT = 28
    SSL_CONNECT_ERROR = 35
    TOO_MANY_REDIRECTS = 47
    GOT_NOTHING = 52
    SEND_ERROR = 55
    RECV_ERROR = 56
    PEER_FAILED_VERIFICATION = 60
    BAD_CONTENT_ENCODING = 61


_DESCRIPTIONS: dict[int, str] = {
    ConnErrorCode.UNSUPPORTED_PROTOCOL: "Unsupported protocol",
    ConnErrorCode.URL_MALFORMAT: "URL using bad/illegal format or missing URL",
    ConnErrorCode.COULDNT_RESOLVE_PROXY: "Couldn't resolve proxy name",
    ConnErrorCode.COULDNT_RESOLVE_HOST: "Couldn't resolve host name",
    ConnErrorCode.COULDNT_CONNECT: "Couldn't connect to server",
    ConnErrorCode.WEIRD_SERVER_REPLY: "Weird server reply",
    ConnErrorCode.OPERATION_TIMEDOUT: "Timeout was reached",
    ConnErrorCode.SSL_CONNECT_ERROR: "SSL connect error",
    ConnErrorCode.TOO_MANY_REDIRECTS: "Number of redirects hit maximum amount",
    ConnErrorCode.GOT_NOTHING: "Server returned nothing (no headers, no data)",
    ConnErrorCode.SEND_ERROR: "Failed sending data to the peer",
    ConnErrorCode.RECV_ERROR: "Failure when receiving data from the peer",
    ConnErrorCode.PEER_FAILED_VERIFICATION: "SSL peer certificate or SSH remote key was not OK",
    ConnErrorCode.BAD_CONTENT_ENCODING: "Unrecognized or bad HTTP Content or Transfer-Encoding",
}


def strerror(code: int | None) -> str:
    """Return the text for a connection error code.

    None and 0 (no error) yield an empty string; unknown codes yield
    ``"Unknown error (<code>)"``.
    """
    if not code:
        return ""
    return _DESCRIPTIONS.get(code, f"Unknown error ({code})")


def _exception_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def _classify_connect_error(exc: httpx.ConnectError) -> ConnErrorCode:
    chain = _exception_chain(exc)
    if any(isinstance(item, ssl.SSLCertVerificationError) for item in chain):
        return ConnErrorCode.PEER_FAILED_VERIFICATION
    if any(isinstance(item, ssl.SSLError) for item in chain):
        return ConnErrorCode.SSL_CONNECT_ERROR
    if any(isinstance(item, socket.gaierror) for item in chain):
        return ConnErrorCode.COULDNT_RESOLVE_HOST

    # httpcore re-raises some low-level errors as plain messages
    text = str(exc)
    if "CERTIFICATE_VERIFY_FAILED" in text:
        return ConnErrorCode.PEER_FAILED_VERIFICATION
    if "SSL" in text:
        return ConnErrorCode.SSL_CONNECT_ERROR
    if "Name or service not known" in text or "nodename nor servname" in text:
        return ConnErrorCode.COULDNT_RESOLVE_HOST
    return ConnErrorCode.COULDNT_CONNECT


def classify_exception(exc: BaseException) -> ConnErrorCode:
    """Map an exception raised during an attempt to a connection error code.

    Exceptions that are not httpx errors map to RECV_ERROR: the attempt did
    not produce a readable body.
    """
    if isinstance(exc, httpx.InvalidURL):
        return ConnErrorCode.URL_MALFORMAT
    if isinstance(exc, httpx.UnsupportedProtocol):
        return ConnErrorCode.UNSUPPORTED_PROTOCOL
    if isinstance(exc, httpx.ProxyError):
        return ConnErrorCode.COULDNT_RESOLVE_PROXY
    if isinstance(exc, httpx.TimeoutException):
        return ConnErrorCode.OPERATION_TIMEDOUT
    if isinstance(exc, httpx.ConnectError):
        return _classify_connect_error(exc)
    if isinstance(exc, (httpx.WriteError, httpx.LocalProtocolError)):
        return ConnErrorCode.SEND_ERROR
    if isinstance(exc, httpx.RemoteProtocolError):
        if "without sending" in str(exc):
            return ConnErrorCode.GOT_NOTHING
        return ConnErrorCode.WEIRD_SERVER_REPLY
    if isinstance(exc, httpx.DecodingError):
        return ConnErrorCode.BAD_CONTENT_ENCODING
    if isinstance(exc, httpx.TooManyRedirects):
        return ConnErrorCode.TOO_MANY_REDIRECTS
    return ConnErrorCode.RECV_ERROR
