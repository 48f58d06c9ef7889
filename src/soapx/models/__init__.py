"""soapx data models: configuration, enums and protocol constants."""

from soapx.models.base import SoapxBaseModel
from soapx.models.config import BasicAuth, TransportConfig, default_socket_timeout
from soapx.models.enums import SoapVersion

__all__ = [
    "BasicAuth",
    "SoapVersion",
    "SoapxBaseModel",
    "TransportConfig",
    "default_socket_timeout",
]
