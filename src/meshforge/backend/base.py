"""Abstract backend command channel shared by the mock and serial backends."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import TypeVar

from meshforge.exceptions import BackendUnavailableError, TimedOutError
from meshforge.models.machine import MachineStatus, PortInfo

T = TypeVar("T")


class BackendClient(ABC):
    """Async command channel to the device session.

    Implementations raise :class:`~meshforge.exceptions.BackendUnavailableError`
    when the host capability is missing and
    :class:`~meshforge.exceptions.RequestFailedError` when the backend
    reports an error. An empty port list is a valid result.
    """

    @abstractmethod
    async def is_mock_mode(self) -> bool:
        """Return True when the backend serves simulated device data."""

    @abstractmethod
    async def list_serial_ports(self) -> list[PortInfo]:
        """List the serial ports a controller could be attached to."""

    @abstractmethod
    async def get_mock_status(self) -> MachineStatus:
        """Fetch the current machine status snapshot."""


class UnavailableBackend(BackendClient):
    """Stand-in used when no command channel was supplied at startup."""

    def __init__(self, reason: str = "Backend command channel not available") -> None:
        self._reason = reason

    def _fail(self, operation: str) -> BackendUnavailableError:
        return BackendUnavailableError(self._reason, operation=operation)

    async def is_mock_mode(self) -> bool:
        raise self._fail("is_mock_mode")

    async def list_serial_ports(self) -> list[PortInfo]:
        raise self._fail("list_serial_ports")

    async def get_mock_status(self) -> MachineStatus:
        raise self._fail("get_mock_status")


async def call_with_timeout(
    awaitable: Awaitable[T],
    timeout_s: float | None,
    operation: str,
) -> T:
    """Await a backend call, converting expiry into :class:`TimedOutError`.

    Args:
        awaitable: The pending backend call.
        timeout_s: Seconds to wait, or None to wait indefinitely.
        operation: Backend operation name, used in the error message.
    """
    if timeout_s is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_s)
    except asyncio.TimeoutError as exc:
        raise TimedOutError(
            f"{operation} timed out after {timeout_s:g}s", operation=operation
        ) from exc
