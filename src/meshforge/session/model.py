"""Session composition: one backend wired to all session entities."""

from __future__ import annotations

from collections.abc import Callable

from meshforge.backend.base import BackendClient
from meshforge.config import Settings
from meshforge.models.machine import GoToTarget, PortInfo
from meshforge.session.coordinates import CoordinateModel
from meshforge.session.job import BoundsProvider, JobFileModel, RecentFilesHistory, no_bounds
from meshforge.session.poller import StatusPoller
from meshforge.session.ports import PortRegistry, reconcile_selection
from meshforge.utils.logging import get_logger

logger = get_logger(__name__)

CommandSink = Callable[[GoToTarget], None]


class MachineSession:
    """State of one control session.

    The backend is injected at construction; the port registry, status
    poller and coordinate model share it. The job file model does not talk
    to the device at all.

    Usage:
        session = MachineSession(MockBackend())
        await session.start(poll_interval_s=0.5)
        session.coordinates.zero_axis("z")
        await session.stop()
    """

    def __init__(
        self,
        backend: BackendClient,
        settings: Settings | None = None,
        bounds_provider: BoundsProvider = no_bounds,
        command_sink: CommandSink | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.backend = backend
        self.ports = PortRegistry(backend, timeout_s=self.settings.request_timeout_s)
        self.coordinates = CoordinateModel()
        self.poller = StatusPoller(
            backend,
            self.coordinates,
            timeout_s=self.settings.request_timeout_s,
            work_from_backend=self.settings.work_from_backend,
        )
        self.job = JobFileModel(
            bounds_provider=bounds_provider,
            history=RecentFilesHistory(self.settings.history_capacity),
        )
        self._command_sink = command_sink
        self.coordinates.add_go_to_handler(self._forward_go_to)

    async def refresh_ports(self) -> list[PortInfo]:
        """Refresh the port list, then keep the selection valid."""
        ports = await self.ports.refresh()
        if self.ports.error is None:
            reconcile_selection(self.ports, ports)
        return ports

    async def start(self, poll_interval_s: float | None = None) -> None:
        """Check the backend mode, load ports and take a first status reading.

        Periodic polling starts whenever *poll_interval_s* is given; until
        the backend answers the mode check each tick retries it.
        """
        mode = await self.poller.check_mode()
        logger.info("session_starting", mock=mode)
        await self.refresh_ports()
        await self.poller.refresh_state()
        if poll_interval_s:
            self.poller.start(poll_interval_s)

    async def stop(self) -> None:
        await self.poller.stop()
        logger.info("session_stopped")

    def _forward_go_to(self, target: GoToTarget) -> None:
        if self._command_sink is None:
            logger.debug("go_to_unhandled", target=target.value)
            return
        self._command_sink(target)
