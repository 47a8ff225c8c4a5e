"""Serial port API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from meshforge.models.api import PortsResponse, SelectPortRequest
from meshforge.session.ports import PortRegistry

router = APIRouter(tags=["ports"])


def _registry() -> PortRegistry:
    from meshforge.api.app import get_session
    return get_session().ports


def _snapshot(registry: PortRegistry) -> PortsResponse:
    return PortsResponse(
        ports=registry.ports,
        loading=registry.loading,
        error=registry.error,
        selected=registry.selected,
        selected_display=registry.selected_display,
    )


@router.get("/ports", response_model=PortsResponse)
async def get_ports() -> PortsResponse:
    """Get the last fetched port list and the selection."""
    return _snapshot(_registry())


@router.post("/ports/refresh", response_model=PortsResponse)
async def refresh_ports() -> PortsResponse:
    """Re-scan ports. Backend failures are reported in ``error``."""
    from meshforge.api.app import get_session
    session = get_session()
    await session.refresh_ports()
    return _snapshot(session.ports)


@router.post("/ports/select", response_model=PortsResponse)
async def select_port(request: SelectPortRequest) -> PortsResponse:
    """Select a port from the current list by name."""
    registry = _registry()
    if registry.select_by_name(request.name) is None:
        raise HTTPException(status_code=404, detail=f"Port {request.name} not found")
    return _snapshot(registry)
