"""Camera abstraction layer — Frame dataclass and CameraSource ABC."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

import numpy as np


@dataclass
class Frame:
    """A single captured frame with metadata."""

    image: np.ndarray  # BGR numpy array from OpenCV
    timestamp: datetime
    source_id: str
    sequence_number: int
    resolution: tuple[int, int]  # (width, height)


class CameraSource(ABC):
    """Abstract interface for all camera backends."""

    @abstractmethod
    async def open(self) -> None: ...

    @abstractmethod
    async def close(self) -> None: ...

    @abstractmethod
    async def grab_frame(self) -> Frame: ...

    @abstractmethod
    def is_open(self) -> bool: ...

    @property
    @abstractmethod
    def source_id(self) -> str: ...
