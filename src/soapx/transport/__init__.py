"""soapx HTTP transport layer.

Public exports:
    TransportExecutor: Attempt loop posting SOAP requests with httpx
    ConnectionState: Last connection error code, shared with the client facade
    CredentialsAuth: Basic auth from a raw ``login[:password]`` string
    build_headers: SOAP version-aware header lines
    build_header_map: Same headers as an ordered mapping
    sanitize_response: Envelope extraction for multipart/XOP responses
    ConnErrorCode: Connection error codes recorded per attempt
    strerror: Text for a connection error code
"""

from soapx.transport.error_codes import ConnErrorCode, classify_exception, strerror
from soapx.transport.executor import (
    ConnectionState,
    CredentialsAuth,
    TransportExecutor,
)
from soapx.transport.headers import build_header_map, build_headers
from soapx.transport.sanitizer import sanitize_response

__all__ = [
    "ConnErrorCode",
    "ConnectionState",
    "CredentialsAuth",
    "TransportExecutor",
    "build_header_map",
    "build_headers",
    "classify_exception",
    "sanitize_response",
    "strerror",
]
