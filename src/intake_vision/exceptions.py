"""Custom exception hierarchy for intake-vision.

All intake-vision exceptions inherit from IntakeVisionError, allowing
callers to catch broad or specific errors:

    try:
        classification, annotated = classifier.classify(frame)
    except RegionGeometryError as e:
        print(f"Regions do not fit this frame: {e}")
    except IntakeVisionError as e:
        print(f"intake-vision error: {e}")
"""

from __future__ import annotations


class IntakeVisionError(Exception):
    """Base exception for all intake-vision errors."""


class ConfigError(IntakeVisionError):
    """Raised when configuration is invalid or missing."""


class RegionGeometryError(ConfigError):
    """Raised when a sample region falls outside the frame or has no area."""


class FrameFormatError(IntakeVisionError):
    """Raised when a frame is not an 8-bit colour image."""


class SensorError(IntakeVisionError):
    """Raised when a distance sensor operation fails."""


class SensorReadError(SensorError):
    """Raised when a distance sensor cannot produce a reading."""


class CameraError(IntakeVisionError):
    """Raised when a camera operation fails (open, capture)."""


class CameraConnectionError(CameraError):
    """Raised when a camera cannot be opened or connection is lost."""
