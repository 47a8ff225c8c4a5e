"""Coordinate zeroing and go-to API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from meshforge.models.api import CoordinatesResponse, GoToResponse
from meshforge.models.machine import Axis, GoToTarget
from meshforge.session.coordinates import CoordinateModel

router = APIRouter(prefix="/coordinates", tags=["coordinates"])


def _model() -> CoordinateModel:
    from meshforge.api.app import get_session
    return get_session().coordinates


def _snapshot(model: CoordinateModel) -> CoordinatesResponse:
    return CoordinatesResponse(work=model.work_pos, machine=model.machine_pos)


@router.get("", response_model=CoordinatesResponse)
async def get_coordinates() -> CoordinatesResponse:
    """Get work and machine positions."""
    return _snapshot(_model())


@router.post("/zero", response_model=CoordinatesResponse)
async def zero_all() -> CoordinatesResponse:
    """Zero the X, Y and Z work coordinates."""
    model = _model()
    model.zero_all()
    return _snapshot(model)


@router.post("/zero/{axis}", response_model=CoordinatesResponse)
async def zero_axis(axis: Axis) -> CoordinatesResponse:
    """Zero one work coordinate."""
    model = _model()
    model.zero_axis(axis)
    return _snapshot(model)


@router.post("/goto/{target}", response_model=GoToResponse)
async def go_to(target: GoToTarget) -> GoToResponse:
    """Request a move to work zero on the given axes."""
    emitted = _model().go_to(target)
    return GoToResponse(target=emitted.value)
