"""NiceGUI web dashboard setup and page registration."""

from __future__ import annotations

import secrets

from fastapi import FastAPI
from nicegui import ui


def setup_ui(fastapi_app: FastAPI, storage_secret: str | None = None) -> None:
    """Register NiceGUI pages with the FastAPI application."""

    @ui.page("/")
    def index():
        from meshforge.ui.pages.control import control_page
        control_page()

    ui.run_with(
        fastapi_app,
        title="MeshForge",
        storage_secret=storage_secret or secrets.token_hex(32),
    )
