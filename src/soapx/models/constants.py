"""Constants for soapx.

Header names, default content types and the markers used by the response
sanitizer.
"""

# Header names, emitted with this exact casing
CONTENT_TYPE_HEADER = "Content-Type"
SOAP_ACTION_HEADER = "SOAPAction"

# Default content types per SOAP version
SOAP_1_1_CONTENT_TYPE = "text/xml"
SOAP_1_2_CONTENT_TYPE = "application/soap+xml; charset=utf-8"
FALLBACK_CONTENT_TYPE = "application/soap+xml"

SOAP_ACTION_TOKEN = "{SOAPACTION}"
"""Placeholder replaced by the escaped action in a SOAP 1.2 content type override.

Example: ``application/soap+xml;charset=utf-8;action="{SOAPACTION}"``.
"""

# Multipart/XOP response handling
XOP_MARKER = "Content-Type: application/xop+xml"
ENVELOPE_START_ANCHOR = "<s:"
ENVELOPE_END_TAG = "</s:Envelope>"

# Defaults for the client facade
DEFAULT_NEGOTIATION_TIMEOUT = 0
DEFAULT_PERSISTANCE_FACTOR = 1
DISABLED_TIMEOUT = 0
"""Timeout value meaning "no limit" for both connect and read timeouts."""
