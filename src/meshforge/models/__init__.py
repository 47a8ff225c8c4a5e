"""Pydantic data models for MeshForge."""

from meshforge.models.job import (
    AxisBounds,
    FileBounds,
    FileInfoView,
    JobFile,
    JobState,
    RecentFile,
)
from meshforge.models.machine import (
    Axis,
    AxisPosition,
    GoToTarget,
    MachineStatus,
    OperationalCategory,
    PortInfo,
    format_status,
)

__all__ = [
    "Axis",
    "AxisBounds",
    "AxisPosition",
    "FileBounds",
    "FileInfoView",
    "GoToTarget",
    "JobFile",
    "JobState",
    "MachineStatus",
    "OperationalCategory",
    "PortInfo",
    "RecentFile",
    "format_status",
]
