"""HTTP header construction for SOAP requests.

Custom headers are merged with the headers each SOAP version requires:

- SOAP 1.1 sends ``Content-Type: text/xml`` (or the override) and the action
  in a quoted ``SOAPAction`` header.
- SOAP 1.2 carries the action as an ``action`` parameter of the
  ``application/soap+xml`` content type. An override may place the action
  itself using the ``{SOAPACTION}`` token.
- Any other version value falls back to ``Content-Type: application/soap+xml``.

Computed headers overwrite a custom header with the same (case-sensitive)
name. Everything here is pure: no I/O, same input gives the same output.

Example:
    >>> build_headers(SoapVersion.SOAP_1_1, "DoWork", {"X-Trace": "1"})
    ['X-Trace: 1', 'Content-Type: text/xml', 'SOAPAction: "DoWork"']
    >>> build_headers(SoapVersion.SOAP_1_2, "DoWork", {})
    ['Content-Type: application/soap+xml; charset=utf-8; action="DoWork"']
"""

from __future__ import annotations

from collections.abc import Mapping

from soapx.models.constants import (
    CONTENT_TYPE_HEADER,
    FALLBACK_CONTENT_TYPE,
    SOAP_1_1_CONTENT_TYPE,
    SOAP_1_2_CONTENT_TYPE,
    SOAP_ACTION_HEADER,
    SOAP_ACTION_TOKEN,
)
from soapx.models.enums import SoapVersion


def escape_action(action: str) -> str:
    """Backslash-escape double quotes in an action token."""
    return action.replace('"', '\\"')


def build_header_map(
    version: int,
    action: str | None,
    custom_headers: Mapping[str, str],
    content_type: str | None = None,
) -> dict[str, str]:
    """Return the ordered name-to-value mapping of request headers.

    Args:
        version: SOAP version (SoapVersion or the equivalent integer)
        action: Action token, empty or None when the operation has none
        custom_headers: User headers, copied and never mutated
        content_type: Content-Type override, None for the version default

    Returns:
        Custom headers in their order, followed by the computed headers
        (a computed header replaces a custom one of the same name in place)
    """
    headers = dict(custom_headers)

    if version == SoapVersion.SOAP_1_1:
        headers[CONTENT_TYPE_HEADER] = SOAP_1_1_CONTENT_TYPE if content_type is None else content_type
        if action:
            headers[SOAP_ACTION_HEADER] = f'"{escape_action(action)}"'
    elif version == SoapVersion.SOAP_1_2:
        if content_type is None:
            value = SOAP_1_2_CONTENT_TYPE
            if action:
                value += f'; action="{escape_action(action)}"'
            headers[CONTENT_TYPE_HEADER] = value
        elif not action:
            headers[CONTENT_TYPE_HEADER] = content_type
        else:
            headers[CONTENT_TYPE_HEADER] = content_type.replace(
                SOAP_ACTION_TOKEN, escape_action(action)
            )
    else:
        headers[CONTENT_TYPE_HEADER] = FALLBACK_CONTENT_TYPE

    return headers


def format_headers(headers: Mapping[str, str]) -> list[str]:
    """Render a header mapping as ``"Name: Value"`` lines."""
    return [f"{name}: {value}" for name, value in headers.items()]


def build_headers(
    version: int,
    action: str | None,
    custom_headers: Mapping[str, str],
    content_type: str | None = None,
) -> list[str]:
    """Return the request headers as ordered ``"Name: Value"`` lines.

    See build_header_map for the merge rules.
    """
    return format_headers(build_header_map(version, action, custom_headers, content_type))
