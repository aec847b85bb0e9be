"""Caller-owned control loop — one tick drives both components.

The driver owns the tick counter. Each tick it lets the presence
detector sample (on its own schedule) and classifies the most recently
delivered camera frame, at most once per frame. Frames arrive on the
camera's cadence, which need not match the tick rate; a tick without a
new frame simply skips classification.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from .camera.base import CameraSource, Frame
from .exceptions import CameraError
from .perception.pattern_classifier import FrameClassification, RegionPatternClassifier
from .sensors.presence import SampledPresenceDetector
from .stats import FrameRateTracker

logger = logging.getLogger("intake-vision")


@dataclass
class TickReport:
    tick: int
    sampled: bool
    has_object: bool
    # None when no new frame arrived since the previous tick
    classification: FrameClassification | None = None
    annotated: np.ndarray | None = None


class TickDriver:
    def __init__(
        self,
        detector: SampledPresenceDetector,
        classifier: RegionPatternClassifier,
        frame_stats: FrameRateTracker | None = None,
    ):
        self.detector = detector
        self.classifier = classifier
        self.frame_stats = frame_stats or FrameRateTracker()
        self._tick = 0
        self._pending: Frame | None = None
        self._last_key: tuple[str, int] | None = None

    @property
    def tick_count(self) -> int:
        return self._tick

    def submit_frame(self, frame: Frame) -> bool:
        """Hand over the latest camera frame.

        Returns False (and ignores it) if this frame was already seen.
        """
        key = (frame.source_id, frame.sequence_number)
        if key == self._last_key:
            return False
        self._last_key = key
        self._pending = frame
        self.frame_stats.record_frame()
        return True

    def tick(self) -> TickReport:
        """Run one control cycle. Sensor and geometry errors propagate.

        The tick number is consumed even when the cycle raises, so a bad
        frame or sensor never replays a sampling tick.
        """
        tick = self._tick
        self._tick += 1

        frame, self._pending = self._pending, None
        sampled = self.detector.on_tick(tick)
        report = TickReport(
            tick=tick,
            sampled=sampled,
            has_object=self.detector.has_object(),
        )
        if frame is not None:
            report.classification, report.annotated = self.classifier.classify(
                frame.image
            )
        return report


async def run_loop(
    driver: TickDriver,
    camera: CameraSource,
    tick_hz: float = 50.0,
    max_ticks: int | None = None,
    on_report: Callable[[TickReport], None] | None = None,
) -> int:
    """Tick ``driver`` at ``tick_hz`` until ``max_ticks`` (forever if None).

    Frames are pulled from ``camera`` without waiting; a camera error only
    costs that tick its frame. Returns the number of ticks run.
    """
    interval = 1.0 / tick_hz
    ran = 0
    while max_ticks is None or ran < max_ticks:
        started = time.monotonic()
        try:
            frame = await camera.grab_frame()
        except CameraError as e:
            logger.debug(f"[{camera.source_id}] No frame this tick: {e}")
        else:
            driver.submit_frame(frame)

        report = driver.tick()
        ran += 1
        if on_report is not None:
            on_report(report)

        await asyncio.sleep(max(0.0, interval - (time.monotonic() - started)))
    return ran
