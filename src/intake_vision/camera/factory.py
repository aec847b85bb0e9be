"""Camera creation from config.

Supported backends:
- usb: Local USB/webcam or phone camera via OpenCV
- file: A still image on disk, for offline region alignment
"""

from __future__ import annotations

from ..config import CameraConfig
from .base import CameraSource
from .image_file import ImageFileCamera
from .usb import USBCamera


def create_camera(config: CameraConfig) -> CameraSource:
    """Create a camera instance from configuration.

    A ``path`` with the default ``usb`` type is treated as a file camera.
    """
    cam_type = config.type
    if config.path and cam_type == "usb":
        cam_type = "file"

    if cam_type == "usb":
        return USBCamera(
            device_index=config.device_index,
            width=config.width,
            height=config.height,
        )
    if cam_type == "file":
        return ImageFileCamera(
            path=config.path or "",
            camera_id=config.id if config.id != "usb:0" else "file:0",
            width=config.width,
            height=config.height,
        )
    raise ValueError(f"Unknown camera type: {cam_type!r}. Supported: usb, file")
