"""Serial port registry: discoverable ports plus the current selection."""

from __future__ import annotations

from meshforge.backend.base import BackendClient, call_with_timeout
from meshforge.exceptions import describe_error
from meshforge.models.machine import PortInfo
from meshforge.session.observable import Observable
from meshforge.session.sequencing import RequestSequencer
from meshforge.utils.logging import get_logger

logger = get_logger(__name__)


class PortRegistry(Observable):
    """Holds the port list fetched from the backend and the selected port.

    The registry never picks a port by itself; see
    :func:`reconcile_selection` for the policy the session applies after
    each refresh.
    """

    def __init__(self, backend: BackendClient, timeout_s: float | None = None) -> None:
        super().__init__()
        self._backend = backend
        self._timeout_s = timeout_s
        self._sequencer = RequestSequencer("ports")
        self._ports: list[PortInfo] = []
        self._loading = False
        self._error: str | None = None
        self._selected: PortInfo | None = None

    @property
    def ports(self) -> list[PortInfo]:
        return list(self._ports)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def selected(self) -> PortInfo | None:
        return self._selected

    @property
    def selected_display(self) -> str | None:
        if self._selected is None:
            return None
        return self._selected.title or self._selected.name

    async def refresh(self) -> list[PortInfo]:
        """Fetch the port list from the backend and replace the held list.

        Failures are not raised: the list is cleared and the stringified
        error is kept in :attr:`error`. If a newer refresh was dispatched
        while this one was pending, this response is dropped and the
        currently held list is returned.
        """
        token = self._sequencer.issue()
        self._error = None
        self._ports = []
        self._loading = True
        self._notify()

        try:
            result = await call_with_timeout(
                self._backend.list_serial_ports(), self._timeout_s, "list_serial_ports"
            )
        except Exception as exc:
            if self._sequencer.discard_if_stale(token):
                return list(self._ports)
            self._ports = []
            self._error = describe_error(exc)
            self._loading = False
            logger.warning("ports_refresh_failed", error=self._error)
            self._notify()
            return []

        if self._sequencer.discard_if_stale(token):
            return list(self._ports)
        self._ports = list(result or [])
        self._loading = False
        logger.debug("ports_refreshed", count=len(self._ports))
        self._notify()
        return list(self._ports)

    def set_selected(self, port: PortInfo | None) -> None:
        """Set the selection unconditionally (no check against the list)."""
        self._selected = port
        logger.info("port_selected", port=port.name if port else None)
        self._notify()

    def select_by_name(self, name: str) -> PortInfo | None:
        """Select the listed port called *name*.

        An empty or unknown name leaves the selection unchanged.
        """
        if not name:
            return None
        port = next((p for p in self._ports if p.name == name), None)
        if port is not None:
            self.set_selected(port)
        return port

    def clear_error(self) -> None:
        self._error = None
        self._notify()


def reconcile_selection(registry: PortRegistry, ports: list[PortInfo]) -> PortInfo | None:
    """Keep the selection valid after a refresh.

    If nothing is selected, or the selected port's name is missing from
    *ports*, the first port is selected. With an empty list the selection
    is left as it is.

    Returns:
        The selection after reconciliation.
    """
    current = registry.selected
    if current is not None and any(p.name == current.name for p in ports):
        return current
    if ports:
        registry.set_selected(ports[0])
    return registry.selected
