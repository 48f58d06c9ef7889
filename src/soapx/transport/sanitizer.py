"""Extraction of the SOAP envelope from multipart/XOP responses.

Some services answer with an MTOM/XOP multipart body even for plain calls.
The envelope layer expects bare XML, so when the XOP marker is present the
``<s:Envelope>`` part is cut out of the MIME body.

Anchor lookups behave like plain substring searches: a missing ``<s:`` or a
missing ``</s:Envelope>`` after it yields an empty segment, so the result is
the closing tag alone. This never raises.

Example:
    >>> body = (
    ...     "--uuid\\r\\nContent-Type: application/xop+xml\\r\\n\\r\\n"
    ...     "<s:Envelope><s:Body/></s:Envelope>\\r\\n--uuid--"
    ... )
    >>> sanitize_response(body)
    '<s:Envelope><s:Body/></s:Envelope>'
"""

import re

from soapx.models.constants import ENVELOPE_END_TAG, ENVELOPE_START_ANCHOR, XOP_MARKER


def _find_ci(haystack: str, needle: str) -> int:
    """Case-insensitive ``str.find`` with offsets into the original string."""
    match = re.search(re.escape(needle), haystack, re.IGNORECASE)
    return match.start() if match else -1


def is_xop_response(body: str) -> bool:
    """Return True if the body carries the multipart/XOP marker."""
    return _find_ci(body, XOP_MARKER) != -1


def extract_envelope(body: str) -> str:
    """Cut the envelope out of a multipart body and re-append the closing tag."""
    start = _find_ci(body, ENVELOPE_START_ANCHOR)
    if start == -1:
        return ENVELOPE_END_TAG
    remainder = body[start:]
    end = _find_ci(remainder, ENVELOPE_END_TAG)
    if end == -1:
        return ENVELOPE_END_TAG
    return remainder[:end] + ENVELOPE_END_TAG


def sanitize_response(body: str) -> str:
    """Return the bare envelope of an XOP response, or the body unchanged."""
    if not is_xop_response(body):
        return body
    return extract_envelope(body)
