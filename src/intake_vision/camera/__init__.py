"""Camera backends — USB and still-image file sources."""

from .base import CameraSource, Frame
from .factory import create_camera
from .image_file import ImageFileCamera
from .usb import USBCamera

__all__ = [
    "CameraSource",
    "Frame",
    "USBCamera",
    "ImageFileCamera",
    "create_camera",
]
