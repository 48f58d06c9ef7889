"""Shared pytest fixtures for soapx tests."""

from __future__ import annotations

import socket
from collections.abc import Callable, Iterator

import httpx
import pytest

from soapx.observability import reset_metrics
from tests.factories import RecordingHandler


@pytest.fixture
def handler() -> RecordingHandler:
    """Handler answering every request with a SOAP response."""
    return RecordingHandler()


@pytest.fixture
def mock_transport(handler: RecordingHandler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


@pytest.fixture(autouse=True)
def _reset_metrics() -> Iterator[None]:
    """Give every test a clean metrics collector."""
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def set_default_socket_timeout() -> Iterator[Callable[[float | None], None]]:
    """Set the process default socket timeout for one test, then restore it."""
    original = socket.getdefaulttimeout()
    yield socket.setdefaulttimeout
    socket.setdefaulttimeout(original)
