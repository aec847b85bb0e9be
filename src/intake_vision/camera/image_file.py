"""Still-image camera — serves one image file as a frame stream.

Used to line up the sample regions against a saved field photo without
a robot attached. Every grab returns the same pixels with a fresh
sequence number, as if the camera had delivered a new frame.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import cv2
import numpy as np

from ..exceptions import CameraConnectionError, CameraError
from .base import CameraSource, Frame


class ImageFileCamera(CameraSource):
    def __init__(
        self,
        path: str | Path,
        camera_id: str = "file:0",
        width: int | None = None,
        height: int | None = None,
    ):
        if not path:
            raise CameraConnectionError("Image camera path is required")
        self._path = Path(path).expanduser()
        self._camera_id = camera_id
        self._size = (width, height) if width and height else None
        self._image: np.ndarray | None = None
        self._sequence = 0

    async def open(self) -> None:
        image = cv2.imread(str(self._path), cv2.IMREAD_COLOR)
        if image is None:
            raise CameraConnectionError(f"Cannot read image: {self._path}")
        if self._size is not None and (image.shape[1], image.shape[0]) != self._size:
            image = cv2.resize(image, self._size)
        self._image = image

    async def close(self) -> None:
        self._image = None

    async def grab_frame(self) -> Frame:
        if self._image is None:
            raise CameraError(f"Image camera {self._camera_id} is not open")
        self._sequence += 1
        return Frame(
            image=self._image.copy(),
            timestamp=datetime.now(),
            source_id=self._camera_id,
            sequence_number=self._sequence,
            resolution=(self._image.shape[1], self._image.shape[0]),
        )

    def is_open(self) -> bool:
        return self._image is not None

    @property
    def source_id(self) -> str:
        return self._camera_id
