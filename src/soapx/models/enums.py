"""Enumerations for soapx."""

from enum import IntEnum


class SoapVersion(IntEnum):
    """SOAP wire-format versions.

    Values match the SOAP_1_1/SOAP_1_2 constants used by common SOAP
    libraries, so plain integers coming from an envelope layer compare equal.

    Example:
        >>> SoapVersion(2) is SoapVersion.SOAP_1_2
        True
        >>> SoapVersion.SOAP_1_1 == 1
        True
    """

    SOAP_1_1 = 1
    SOAP_1_2 = 2
