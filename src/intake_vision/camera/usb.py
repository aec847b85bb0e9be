"""USB / phone camera on a background capture thread.

``VideoCapture.read()`` blocks until the device delivers, so a dedicated
thread keeps only the newest frame. ``grab_frame()`` returns that frame
without touching the device, which keeps the tick loop on its cadence.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime
from typing import Optional

import cv2
import numpy as np

from ..exceptions import CameraConnectionError, CameraError
from .base import CameraSource, Frame

logger = logging.getLogger("intake-vision")


class USBCamera(CameraSource):
    def __init__(
        self,
        device_index: int = 0,
        width: int = 320,
        height: int = 240,
        first_frame_timeout: float = 5.0,
    ):
        self._device_index = device_index
        self._size = (width, height)
        self._first_frame_timeout = first_frame_timeout
        self._cap: Optional[cv2.VideoCapture] = None
        self._latest: Optional[Frame] = None
        self._lock = threading.Lock()
        self._first_frame = threading.Event()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._sequence = 0

    async def open(self) -> None:
        """Start capturing and wait until the first frame lands.

        The device is released again if it cannot be opened or never
        delivers within ``first_frame_timeout`` seconds.
        """
        cap = cv2.VideoCapture(self._device_index)
        # Drivers may ignore the hint; frames are resized in _fit() anyway
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._size[0])
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._size[1])
        if not cap.isOpened():
            cap.release()
            raise CameraConnectionError(
                f"Cannot open camera at index {self._device_index}"
            )

        self._cap = cap
        self._stop.clear()
        self._first_frame.clear()
        self._thread = threading.Thread(
            target=self._capture_loop, name=f"capture-{self.source_id}", daemon=True
        )
        self._thread.start()

        got_frame = await asyncio.to_thread(
            self._first_frame.wait, self._first_frame_timeout
        )
        if not got_frame:
            await self.close()
            raise CameraConnectionError(
                f"Camera {self.source_id} opened but delivered no frame "
                f"within {self._first_frame_timeout:g}s"
            )
        logger.info(f"[{self.source_id}] Capturing at {self._size[0]}x{self._size[1]}")

    def _fit(self, image: np.ndarray) -> np.ndarray:
        if (image.shape[1], image.shape[0]) != self._size:
            return cv2.resize(image, self._size)
        return image

    def _capture_loop(self) -> None:
        cap = self._cap
        while not self._stop.is_set() and cap is not None:
            ret, img = cap.read()
            if not ret:
                self._stop.wait(0.01)
                continue
            image = self._fit(img)
            self._sequence += 1
            frame = Frame(
                image=image,
                timestamp=datetime.now(),
                source_id=self.source_id,
                sequence_number=self._sequence,
                resolution=(image.shape[1], image.shape[0]),
            )
            with self._lock:
                self._latest = frame
            self._first_frame.set()

    async def grab_frame(self) -> Frame:
        with self._lock:
            frame = self._latest
        if frame is None:
            raise CameraError("No frame available")
        return frame

    async def close(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        with self._lock:
            self._latest = None

    def is_open(self) -> bool:
        return self._cap is not None and self._cap.isOpened()

    @property
    def source_id(self) -> str:
        return f"usb:{self._device_index}"
