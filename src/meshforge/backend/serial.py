"""Real-device backend: serial port discovery through pyserial."""

from __future__ import annotations

import asyncio

from meshforge.backend.base import BackendClient
from meshforge.exceptions import RequestFailedError
from meshforge.models.machine import MachineStatus, PortInfo
from meshforge.utils.logging import get_logger

logger = get_logger(__name__)


def _port_title(port) -> str:
    """Build a display title for a pyserial ``ListPortInfo``."""
    name = port.device
    vid = getattr(port, "vid", None)
    pid = getattr(port, "pid", None)
    if vid is not None and pid is not None:
        return f"{name} (USB {vid}:{pid})"
    description = getattr(port, "description", "") or ""
    if description and description != "n/a" and description != name:
        return f"{name} ({description})"
    return name


def scan_ports() -> list[PortInfo]:
    """Enumerate serial ports. Blocking; call via ``asyncio.to_thread()``."""
    from serial.tools.list_ports import comports

    return [PortInfo(name=p.device, title=_port_title(p)) for p in comports()]


class SerialBackend(BackendClient):
    """Backend for real hardware.

    Port discovery is local; the controller link that would answer status
    queries lives behind the device session and is not part of this layer.
    """

    async def is_mock_mode(self) -> bool:
        return False

    async def list_serial_ports(self) -> list[PortInfo]:
        try:
            ports = await asyncio.to_thread(scan_ports)
        except Exception as exc:
            raise RequestFailedError(
                f"Serial port scan failed: {exc}", operation="list_serial_ports"
            ) from exc
        logger.info("serial_ports_scanned", count=len(ports))
        return ports

    async def get_mock_status(self) -> MachineStatus:
        raise RequestFailedError(
            "No controller connected", operation="get_mock_status"
        )
