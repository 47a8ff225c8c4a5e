"""Job file metadata and geometric bounds models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class JobState(StrEnum):
    """Whether a job file is loaded."""
    EMPTY = "empty"
    LOADED = "loaded"


class FileInfoView(StrEnum):
    """Which half of the file information panel is shown."""
    SIZE = "size"
    INFO = "info"


class AxisBounds(BaseModel):
    """Extent of the toolpath along one axis, in mm."""
    model_config = {"frozen": True}

    size: float = 0.0
    min: float = 0.0
    max: float = 0.0


class FileBounds(BaseModel):
    """Toolpath extents for X, Y and Z."""
    model_config = {"frozen": True}

    x: AxisBounds = Field(default_factory=AxisBounds)
    y: AxisBounds = Field(default_factory=AxisBounds)
    z: AxisBounds = Field(default_factory=AxisBounds)


class RecentFile(BaseModel):
    """Entry of the recent-files history; ``path`` is the identity key."""
    model_config = {"frozen": True}

    name: str
    path: str


class JobFile(BaseModel):
    """Metadata of the currently loaded job file."""
    model_config = {"frozen": True}

    name: str
    path: str
    size_description: str = Field(default="", description="e.g. '14 KB (852 lines)'")
    bounds: FileBounds | None = None
