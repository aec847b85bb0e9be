"""Intake vision — presence sampling and marker pattern classification."""

__version__ = "0.3.0"

from .exceptions import (
    CameraConnectionError,
    CameraError,
    ConfigError,
    FrameFormatError,
    IntakeVisionError,
    RegionGeometryError,
    SensorError,
    SensorReadError,
)

__all__ = [
    "__version__",
    "IntakeVisionError",
    "ConfigError",
    "RegionGeometryError",
    "FrameFormatError",
    "SensorError",
    "SensorReadError",
    "CameraError",
    "CameraConnectionError",
]
