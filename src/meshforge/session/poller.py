"""Machine status polling.

Pulls status snapshots from the backend, classifies the status token and
forwards positions to the :class:`~meshforge.session.coordinates.CoordinateModel`.
Polling is gated on a successful mode check: when the backend capability
is unavailable the category stays ``DISCONNECTED`` and no status query is
sent. The mode is asked again on every refresh until it answers.
"""

from __future__ import annotations

import asyncio
import contextlib

from meshforge.backend.base import BackendClient, call_with_timeout
from meshforge.exceptions import describe_error
from meshforge.models.machine import MachineStatus, OperationalCategory
from meshforge.session.classifier import classify, state_label
from meshforge.session.coordinates import CoordinateModel
from meshforge.session.observable import Observable
from meshforge.session.sequencing import RequestSequencer
from meshforge.utils.logging import get_logger

logger = get_logger(__name__)


class StatusPoller(Observable):
    """Fetches status from the backend and derives the operational category."""

    def __init__(
        self,
        backend: BackendClient,
        coordinates: CoordinateModel,
        timeout_s: float | None = None,
        work_from_backend: bool = True,
    ) -> None:
        super().__init__()
        self._backend = backend
        self._coordinates = coordinates
        self._timeout_s = timeout_s
        self._work_from_backend = work_from_backend
        self._mode_sequencer = RequestSequencer("mode")
        self._status_sequencer = RequestSequencer("status")
        self._mock_mode: bool | None = None
        self._status: MachineStatus | None = None
        self._state_text = ""
        self._category = OperationalCategory.DISCONNECTED
        self._error: str | None = None
        self._task: asyncio.Task | None = None

    @property
    def mock_mode(self) -> bool | None:
        """True for mock, False for real, None when the mode is unknown."""
        return self._mock_mode

    @property
    def active(self) -> bool:
        return self._mock_mode is not None

    @property
    def status(self) -> MachineStatus | None:
        """Last successfully fetched snapshot (kept across failures)."""
        return self._status

    @property
    def state_text(self) -> str:
        return self._state_text

    @property
    def state_label(self) -> str:
        return state_label(self._state_text)

    @property
    def category(self) -> OperationalCategory:
        return self._category

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def polling(self) -> bool:
        return self._task is not None and not self._task.done()

    async def check_mode(self) -> bool | None:
        """Ask the backend whether it runs in mock mode.

        Returns:
            True/False when a session is active, None when the backend
            capability is unavailable.
        """
        token = self._mode_sequencer.issue()
        try:
            mode = await call_with_timeout(
                self._backend.is_mock_mode(), self._timeout_s, "is_mock_mode"
            )
        except Exception as exc:
            if self._mode_sequencer.discard_if_stale(token):
                return self._mock_mode
            self._mock_mode = None
            self._state_text = ""
            self._category = OperationalCategory.DISCONNECTED
            self._error = describe_error(exc)
            logger.warning("mode_check_failed", error=self._error)
            self._notify()
            return None

        if self._mode_sequencer.discard_if_stale(token):
            return self._mock_mode
        self._mock_mode = bool(mode)
        logger.info("mode_checked", mock=self._mock_mode)
        self._notify()
        return self._mock_mode

    async def refresh_state(self) -> OperationalCategory:
        """Poll the backend once and update category and coordinates.

        On failure the category becomes ``DISCONNECTED`` while the
        coordinates keep their last known values. A response overtaken by a
        newer refresh is dropped. While the mode is unknown it is checked
        again first.
        """
        if not self.active:
            await self.check_mode()

        token = self._status_sequencer.issue()
        if not self.active:
            self._state_text = ""
            self._category = OperationalCategory.DISCONNECTED
            self._notify()
            return self._category

        try:
            status = await call_with_timeout(
                self._backend.get_mock_status(), self._timeout_s, "get_mock_status"
            )
        except Exception as exc:
            if self._status_sequencer.discard_if_stale(token):
                return self._category
            self._state_text = ""
            self._category = OperationalCategory.DISCONNECTED
            self._error = describe_error(exc)
            logger.warning("status_refresh_failed", error=self._error)
            self._notify()
            return self._category

        if self._status_sequencer.discard_if_stale(token):
            return self._category
        self._status = status
        self._state_text = status.state
        self._category = classify(status.state)
        self._error = None
        self._coordinates.apply_status(status, include_work=self._work_from_backend)
        self._notify()
        return self._category

    # --- Periodic polling ---

    async def run(self, interval_s: float) -> None:
        """Refresh forever, sleeping *interval_s* between polls."""
        logger.info("status_polling_started", interval_s=interval_s)
        while True:
            await self.refresh_state()
            await asyncio.sleep(interval_s)

    def start(self, interval_s: float) -> None:
        """Start :meth:`run` as a task on the running event loop."""
        if self.polling:
            return
        self._task = asyncio.create_task(self.run(interval_s))

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("status_polling_stopped")
