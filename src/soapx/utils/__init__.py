"""Utility modules for soapx, such as log-safe masking of URLs and credentials."""

__all__: list[str] = []
