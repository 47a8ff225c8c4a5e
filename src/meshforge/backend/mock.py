"""Simulated backend used when ``MESHFORGE_MOCK`` is set.

Returns two fake serial ports and a status snapshot that walks through a
short Idle -> Run -> Hold -> Run -> Idle cycle, so the dashboard can be
exercised without a machine attached.
"""

from __future__ import annotations

from meshforge.backend.base import BackendClient
from meshforge.models.machine import AxisPosition, MachineStatus, PortInfo
from meshforge.utils.logging import get_logger

logger = get_logger(__name__)

MOCK_PORTS: tuple[PortInfo, ...] = (
    PortInfo(name="COM3", title="Mock CNC (COM3)"),
    PortInfo(name="/dev/ttyUSB0", title="Mock CNC (ttyUSB0)"),
)

# (state token, feed mm/min, spindle rpm, x/y step per poll)
_CYCLE: tuple[tuple[str, float, float, float], ...] = (
    ("Idle", 0.0, 0.0, 0.0),
    ("Run", 800.0, 12000.0, 1.5),
    ("Run", 800.0, 12000.0, 1.5),
    ("Hold:0", 0.0, 12000.0, 0.0),
    ("Run", 800.0, 12000.0, 1.5),
    ("Idle", 0.0, 0.0, 0.0),
)

# Work coordinate offset: machine = work + offset.
_WORK_OFFSET = AxisPosition(x=-150.0, y=-120.0, z=-40.0)


class MockBackend(BackendClient):
    """In-process backend producing deterministic fake data."""

    def __init__(self, ports: tuple[PortInfo, ...] | list[PortInfo] = MOCK_PORTS) -> None:
        self._ports = list(ports)
        self._tick = 0
        self._work = AxisPosition(x=0.0, y=0.0, z=25.0)

    async def is_mock_mode(self) -> bool:
        return True

    async def list_serial_ports(self) -> list[PortInfo]:
        return list(self._ports)

    async def get_mock_status(self) -> MachineStatus:
        state, feed, spindle, step = _CYCLE[self._tick % len(_CYCLE)]
        self._tick += 1
        if step:
            self._work = AxisPosition(
                x=self._work.x + step,
                y=self._work.y + step / 2,
                z=self._work.z,
            )
        machine = AxisPosition(
            x=self._work.x + _WORK_OFFSET.x,
            y=self._work.y + _WORK_OFFSET.y,
            z=self._work.z + _WORK_OFFSET.z,
        )
        logger.debug("mock_status", state=state, tick=self._tick)
        return MachineStatus(
            state=state,
            work_pos=self._work,
            machine_pos=machine,
            feed_rate=feed,
            spindle_speed=spindle,
        )
