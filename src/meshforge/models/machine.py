"""Serial port, machine status and operational category models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class OperationalCategory(StrEnum):
    """Coarse machine state derived from the controller status token."""
    IDLE = "idle"
    RUN = "run"
    HOLD = "hold"
    ALARM = "alarm"
    DISCONNECTED = "disconnected"


class Axis(StrEnum):
    """Linear axis that can be zeroed."""
    X = "x"
    Y = "y"
    Z = "z"


class GoToTarget(StrEnum):
    """Destination of a go-to-zero intent."""
    X = "x"
    Y = "y"
    Z = "z"
    XY = "xy"


class PortInfo(BaseModel):
    """A discoverable serial port."""
    model_config = {"frozen": True}

    name: str = Field(description="Stable port identifier, e.g. COM3 or /dev/ttyUSB0")
    title: str = Field(default="", description="Display label, may be empty")

    @property
    def display(self) -> str:
        return self.title or self.name


class AxisPosition(BaseModel):
    """Three or four axis coordinate snapshot."""
    model_config = {"frozen": True}

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    a: float | None = Field(default=None, description="Rotary axis, absent on 3-axis machines")


class MachineStatus(BaseModel):
    """Status snapshot returned by the backend, replaced wholesale on each poll."""
    model_config = {"frozen": True}

    state: str = Field(default="", description="Free-form controller status token")
    work_pos: AxisPosition = Field(default_factory=AxisPosition)
    machine_pos: AxisPosition = Field(default_factory=AxisPosition)
    feed_rate: float = Field(default=0.0, description="Feed rate in mm/min")
    spindle_speed: float = Field(default=0.0, description="Spindle speed in rpm")


def format_status(status: MachineStatus) -> str:
    """Render a status snapshot as a short multi-line summary."""
    w = status.work_pos
    m = status.machine_pos
    return (
        f"State: {status.state}\n"
        f"Work:  X{w.x:.3f} Y{w.y:.3f} Z{w.z:.3f}\n"
        f"Machine: X{m.x:.3f} Y{m.y:.3f} Z{m.z:.3f}\n"
        f"Feed: {status.feed_rate:g} mm/min  Spindle: {status.spindle_speed:g} rpm"
    )
