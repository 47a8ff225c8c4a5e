"""Backend command channel implementations."""

from __future__ import annotations

from meshforge.backend.base import BackendClient, UnavailableBackend, call_with_timeout
from meshforge.backend.mock import MOCK_PORTS, MockBackend
from meshforge.backend.serial import SerialBackend
from meshforge.config import Settings


def create_backend(settings: Settings | None = None) -> BackendClient:
    """Pick the backend selected by the ``MESHFORGE_MOCK`` switch."""
    settings = settings or Settings.from_env()
    if settings.mock:
        return MockBackend()
    return SerialBackend()


__all__ = [
    "BackendClient",
    "MOCK_PORTS",
    "MockBackend",
    "SerialBackend",
    "UnavailableBackend",
    "call_with_timeout",
    "create_backend",
]
