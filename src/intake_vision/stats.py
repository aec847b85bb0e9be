"""Frame delivery statistics for the telemetry readout."""

from __future__ import annotations

import time
from collections import deque


class FrameRateTracker:
    """Count delivered frames and estimate FPS over a rolling window."""

    def __init__(self, window_seconds: float = 2.0) -> None:
        self._window = window_seconds
        self._frame_count = 0
        self._stamps: deque[float] = deque()

    def record_frame(self, now: float | None = None) -> None:
        now = time.monotonic() if now is None else now
        self._frame_count += 1
        self._stamps.append(now)
        cutoff = now - self._window
        while self._stamps and self._stamps[0] < cutoff:
            self._stamps.popleft()

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def fps(self) -> float:
        if len(self._stamps) < 2:
            return 0.0
        span = self._stamps[-1] - self._stamps[0]
        if span <= 0:
            return 0.0
        return (len(self._stamps) - 1) / span

    def reset(self) -> None:
        self._frame_count = 0
        self._stamps.clear()

    def summary(self) -> dict:
        return {"frame_count": self._frame_count, "fps": round(self.fps, 2)}
