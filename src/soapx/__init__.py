"""soapx: SOAP HTTP transport with timeouts, retries and basic auth.

Example:
    >>> from soapx import SoapClient, SoapVersion
    >>> client = SoapClient(
    ...     "https://service.example.com/?wsdl",
    ...     {"login": "user", "password": "secret"},
    ...     negotiation_timeout=5,
    ...     persistance_factor=3,
    ... )
    >>> client.set_header("X-Tenant", "acme")
    >>> body = client.do_request(envelope, location, "GetQuote", SoapVersion.SOAP_1_1)
"""

__version__ = "0.3.0"

from soapx.client import SoapClient
from soapx.errors import ConfigError, SoapxError, TransportError
from soapx.models.enums import SoapVersion

__all__ = [
    "__version__",
    "ConfigError",
    "SoapClient",
    "SoapVersion",
    "SoapxError",
    "TransportError",
]
