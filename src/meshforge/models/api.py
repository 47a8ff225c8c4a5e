"""Request and response models for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from meshforge.models.job import FileBounds, FileInfoView, JobState, RecentFile
from meshforge.models.machine import AxisPosition, MachineStatus, OperationalCategory, PortInfo


class PortsResponse(BaseModel):
    ports: list[PortInfo] = Field(default_factory=list)
    loading: bool = False
    error: str | None = None
    selected: PortInfo | None = None
    selected_display: str | None = None


class SelectPortRequest(BaseModel):
    name: str = Field(description="Name of a port from the last refresh")


class MachineStateResponse(BaseModel):
    category: OperationalCategory
    label: str
    mock: bool | None = None
    error: str | None = None
    polling: bool = False
    status: MachineStatus | None = None


class CoordinatesResponse(BaseModel):
    work: AxisPosition
    machine: AxisPosition


class GoToResponse(BaseModel):
    target: str
    accepted: bool = True


class JobResponse(BaseModel):
    state: JobState
    name: str = ""
    path: str = ""
    size_description: str = ""
    bounds: FileBounds | None = None
    selected_path: str = ""
    view_mode: FileInfoView = FileInfoView.SIZE
    error: str | None = None
    history: list[RecentFile] = Field(default_factory=list)


class OpenJobRequest(BaseModel):
    path: str = Field(min_length=1, description="Path of the G-code file to load")


class ViewRequest(BaseModel):
    mode: FileInfoView
