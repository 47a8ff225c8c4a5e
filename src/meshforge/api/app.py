"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meshforge.config import Settings
from meshforge.session.model import MachineSession
from meshforge.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

_session: MachineSession | None = None


def get_session() -> MachineSession:
    """Get the process-wide session.

    Raises:
        RuntimeError: If no application has been created yet.
    """
    if _session is None:
        raise RuntimeError("MeshForge session not initialised; call create_app() first")
    return _session


def set_session(session: MachineSession | None) -> None:
    global _session
    _session = session


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    session = get_session()
    logger.info("meshforge_api_starting", mock=session.settings.mock)
    await session.start(poll_interval_s=app.state.poll_interval_s)
    yield
    await session.stop()
    logger.info("meshforge_api_stopped")


def create_app(
    enable_ui: bool = True,
    settings: Settings | None = None,
    session: MachineSession | None = None,
    poll: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        enable_ui: Whether to mount the NiceGUI web dashboard.
        settings: Runtime settings; read from the environment when omitted.
        session: Pre-built session (tests inject one with a fake backend).
        poll: Start periodic status polling during the app lifespan.

    Returns:
        Configured FastAPI application instance.
    """
    if session is None:
        from meshforge.backend import create_backend

        settings = settings or Settings.from_env()
        setup_logging()
        session = MachineSession(create_backend(settings), settings=settings)
    set_session(session)

    app = FastAPI(
        title="MeshForge API",
        description="CNC session state: ports, machine status, coordinates, job file",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.poll_interval_s = session.settings.poll_interval_s if poll else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from meshforge.api.routes import coordinates, job, machine, ports
    app.include_router(ports.router, prefix="/api")
    app.include_router(machine.router, prefix="/api")
    app.include_router(coordinates.router, prefix="/api")
    app.include_router(job.router, prefix="/api")

    if enable_ui:
        try:
            from meshforge.ui.main import setup_ui
            setup_ui(app, storage_secret=session.settings.storage_secret)
        except ImportError:
            logger.warning("nicegui_not_available", msg="Web dashboard disabled")

    return app
