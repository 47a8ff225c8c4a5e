"""Machine state API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from meshforge.models.api import MachineStateResponse
from meshforge.session.poller import StatusPoller

router = APIRouter(tags=["machine"])


def _snapshot(poller: StatusPoller) -> MachineStateResponse:
    return MachineStateResponse(
        category=poller.category,
        label=poller.state_label,
        mock=poller.mock_mode,
        error=poller.error,
        polling=poller.polling,
        status=poller.status,
    )


@router.get("/status", response_model=MachineStateResponse)
async def get_status() -> MachineStateResponse:
    """Get the last polled machine state."""
    from meshforge.api.app import get_session
    return _snapshot(get_session().poller)


@router.post("/status/refresh", response_model=MachineStateResponse)
async def refresh_status() -> MachineStateResponse:
    """Poll the backend once now."""
    from meshforge.api.app import get_session
    poller = get_session().poller
    await poller.refresh_state()
    return _snapshot(poller)
