"""Unit tests for meshforge.session.model."""

from __future__ import annotations

import asyncio

from meshforge.backend import MockBackend
from meshforge.config import Settings
from meshforge.exceptions import RequestFailedError, TimedOutError
from meshforge.models.machine import GoToTarget, MachineStatus, OperationalCategory, PortInfo
from meshforge.session.model import MachineSession


class FlakyStatusBackend(MockBackend):
    """Mock backend whose status calls fail."""

    async def get_mock_status(self) -> MachineStatus:
        raise RequestFailedError("controller went away")


class SlowStartBackend(MockBackend):
    """Mock backend whose first mode check times out."""

    def __init__(self):
        super().__init__()
        self.mode_calls = 0

    async def is_mock_mode(self) -> bool:
        self.mode_calls += 1
        if self.mode_calls == 1:
            raise TimedOutError("is_mock_mode timed out after 5s")
        return True


class FailingPortsBackend(MockBackend):
    async def list_serial_ports(self) -> list[PortInfo]:
        raise RequestFailedError("scan failed")


class TestStart:
    def test_mock_session_selects_first_port(self):
        session = MachineSession(MockBackend())
        asyncio.run(session.start())
        assert session.poller.mock_mode is True
        assert session.ports.selected.name == "COM3"
        assert session.ports.selected_display == "Mock CNC (COM3)"
        assert session.poller.category == OperationalCategory.IDLE
        assert session.coordinates.work_z == 25.0
        assert session.poller.polling is False

    def test_start_with_polling(self):
        async def scenario():
            session = MachineSession(MockBackend())
            await session.start(poll_interval_s=0.001)
            running = session.poller.polling
            await session.stop()
            return running, session.poller.polling

        assert asyncio.run(scenario()) == (True, False)

    def test_polling_recovers_after_failed_mode_check(self):
        async def scenario():
            session = MachineSession(SlowStartBackend())
            await session.start(poll_interval_s=0.001)
            running = session.poller.polling
            for _ in range(200):
                if session.poller.active:
                    break
                await asyncio.sleep(0.001)
            await session.stop()
            return session, running

        session, running = asyncio.run(scenario())
        assert running is True
        assert session.poller.mock_mode is True
        assert session.poller.category != OperationalCategory.DISCONNECTED

    def test_status_failure_keeps_ports(self):
        session = MachineSession(FlakyStatusBackend())
        asyncio.run(session.start())
        assert [p.name for p in session.ports.ports] == ["COM3", "/dev/ttyUSB0"]
        assert session.ports.selected.name == "COM3"
        assert session.poller.category == OperationalCategory.DISCONNECTED
        assert session.poller.error == "controller went away"

    def test_port_failure_keeps_selection(self):
        session = MachineSession(FailingPortsBackend())
        session.ports.set_selected(PortInfo(name="COM3"))
        asyncio.run(session.refresh_ports())
        assert session.ports.error == "scan failed"
        assert session.ports.selected == PortInfo(name="COM3")


class TestWiring:
    def test_go_to_forwarded_to_sink(self):
        sent: list[GoToTarget] = []
        session = MachineSession(MockBackend(), command_sink=sent.append)
        session.coordinates.go_to("z")
        assert sent == [GoToTarget.Z]

    def test_go_to_without_sink(self):
        session = MachineSession(MockBackend())
        assert session.coordinates.go_to("xy") == GoToTarget.XY

    def test_history_capacity_from_settings(self):
        session = MachineSession(MockBackend(), settings=Settings(history_capacity=3))
        for i in range(5):
            session.job.load(f"f{i}.nc", f"/jobs/f{i}.nc")
        assert [f.name for f in session.job.refresh_history()] == ["f2.nc", "f3.nc", "f4.nc"]

    def test_bounds_provider_passed_to_job(self, sample_bounds, gcode_file):
        session = MachineSession(MockBackend(), bounds_provider=lambda path: sample_bounds)
        asyncio.run(session.job.open(gcode_file))
        assert session.job.bounds == sample_bounds

    def test_machine_only_coordinates(self):
        session = MachineSession(MockBackend(), settings=Settings(work_from_backend=False))
        session.coordinates.zero_axis("z")
        asyncio.run(session.poller.refresh_state())
        assert session.coordinates.work_z == 0.0
        assert session.coordinates.machine_z == -15.0
