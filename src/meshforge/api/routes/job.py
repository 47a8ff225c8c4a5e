"""Job file API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from meshforge.models.api import JobResponse, OpenJobRequest, ViewRequest
from meshforge.session.job import JobFileModel

router = APIRouter(prefix="/job", tags=["job"])


def _model() -> JobFileModel:
    from meshforge.api.app import get_session
    return get_session().job


def _snapshot(model: JobFileModel) -> JobResponse:
    return JobResponse(
        state=model.state,
        name=model.name,
        path=model.path,
        size_description=model.size_description,
        bounds=model.bounds,
        selected_path=model.selected_path,
        view_mode=model.view_mode,
        error=model.error,
        history=model.refresh_history(),
    )


@router.get("", response_model=JobResponse)
async def get_job() -> JobResponse:
    """Get the loaded job file and recent-files history."""
    return _snapshot(_model())


@router.post("/open", response_model=JobResponse)
async def open_job(request: OpenJobRequest) -> JobResponse:
    """Load a file. Read failures are reported in ``error``."""
    model = _model()
    await model.open(request.path)
    return _snapshot(model)


@router.post("/previous", response_model=JobResponse)
async def select_previous(request: OpenJobRequest) -> JobResponse:
    """Load a file picked from the recent-files list."""
    model = _model()
    await model.select_previous(request.path)
    return _snapshot(model)


@router.post("/reload", response_model=JobResponse)
async def reload_job() -> JobResponse:
    """Re-read the loaded file; no-op when nothing is loaded."""
    model = _model()
    await model.reload()
    return _snapshot(model)


@router.post("/clear", response_model=JobResponse)
async def clear_job() -> JobResponse:
    """Unload the file, keeping the history."""
    model = _model()
    model.clear()
    return _snapshot(model)


@router.post("/view", response_model=JobResponse)
async def set_view(request: ViewRequest) -> JobResponse:
    """Switch the file information panel between size and info."""
    model = _model()
    model.set_view(request.mode)
    return _snapshot(model)
