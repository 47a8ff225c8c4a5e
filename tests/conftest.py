"""Pytest configuration and shared fixtures."""

import pytest

from meshforge.models.job import AxisBounds, FileBounds
from meshforge.models.machine import AxisPosition, MachineStatus


@pytest.fixture
def sample_status():
    """Provide a status snapshot with distinct work and machine positions."""
    return MachineStatus(
        state="Run",
        work_pos=AxisPosition(x=10.0, y=20.0, z=5.0),
        machine_pos=AxisPosition(x=-140.0, y=-100.0, z=-35.0),
        feed_rate=800.0,
        spindle_speed=12000.0,
    )


@pytest.fixture
def sample_bounds():
    """Provide bounds for a small pocketing job."""
    return FileBounds(
        x=AxisBounds(size=61.12, min=0.0, max=61.12),
        y=AxisBounds(size=128.28, min=0.0, max=128.28),
        z=AxisBounds(size=38.0, min=-36.0, max=2.0),
    )


@pytest.fixture
def gcode_file(tmp_path):
    """Write a three-line G-code file and return its path as a string."""
    path = tmp_path / "pocket.gcode"
    path.write_text("G21\nG0 X0 Y0\nG1 X10 F500\n")
    return str(path)
