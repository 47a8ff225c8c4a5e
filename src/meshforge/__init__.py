"""MeshForge - session state layer for GRBL-HAL CNC control."""

__version__ = "0.1.0"
