"""Marker position classifier — least-saturated of three sample regions.

The team marker looks washed out next to the vividly coloured tape it
sits on, so whichever of the three calibrated regions has the lowest
mean-colour saturation is where the marker is. Comparing the three
regions against each other tolerates ambient brightness shifts that a
fixed threshold would not.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import cv2
import numpy as np

from ..config import ClassifierConfig
from ..exceptions import FrameFormatError, RegionGeometryError
from .regions import REGION_NAMES, RegionRect, compute_regions

logger = logging.getLogger("intake-vision")

_OUTLINE_COLOR = (0, 0, 255)
_OUTLINE_THICKNESS = 1


class MarkerPattern(IntEnum):
    """Classifier output. UNKNOWN is never a region."""

    UNKNOWN = 0
    LEFT = 1
    MIDDLE = 2
    RIGHT = 3


@dataclass(frozen=True)
class FrameClassification:
    region_saturations: tuple[int, int, int]
    pattern_index: MarkerPattern
    regions: tuple[RegionRect, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": int(self.pattern_index),
            "pattern_name": self.pattern_index.name.lower(),
            "saturations": dict(zip(REGION_NAMES, self.region_saturations)),
        }


UNCLASSIFIED = FrameClassification(
    region_saturations=(0, 0, 0), pattern_index=MarkerPattern.UNKNOWN
)


def saturation_percent(mean_color) -> int:
    """HSV saturation of a mean colour, truncated to an integer percent.

    Channels are truncated to integers first. Saturation only depends on
    the max and min channel, so channel order does not matter.
    """
    channels = [int(c) for c in mean_color[:3]]
    hi, lo = max(channels), min(channels)
    if hi <= 0:
        return 0
    return (100 * (hi - lo)) // hi


def first_argmin(values) -> int:
    """Index of the smallest value; the lowest index wins ties."""
    min_index = 0
    for i, value in enumerate(values):
        if value < values[min_index]:
            min_index = i
    return min_index


def _check_frame(frame: np.ndarray) -> None:
    if not isinstance(frame, np.ndarray):
        raise FrameFormatError(f"Expected a numpy array, got {type(frame).__name__}")
    if frame.dtype != np.uint8:
        raise FrameFormatError(f"Expected uint8 pixels, got {frame.dtype}")
    if frame.ndim != 3 or frame.shape[2] not in (3, 4):
        raise FrameFormatError(
            f"Expected an HxWx3 or HxWx4 colour frame, got shape {frame.shape}"
        )


class RegionPatternClassifier:
    """Classifies frames by the minimum-saturation rule.

    Stateless between calls apart from the last classification, which is
    kept for diagnostic readback only.
    """

    def __init__(self, config: ClassifierConfig | None = None):
        self._config = config or ClassifierConfig()
        self._last = UNCLASSIFIED

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    def update_config(self, config: ClassifierConfig) -> None:
        self._config = config

    @property
    def last_classification(self) -> FrameClassification:
        return self._last

    @property
    def pattern(self) -> MarkerPattern:
        return self._last.pattern_index

    @property
    def saturations(self) -> tuple[int, int, int]:
        return self._last.region_saturations

    def classify(self, frame: np.ndarray) -> tuple[FrameClassification, np.ndarray]:
        """Classify one frame.

        Returns the classification and an annotated copy of the frame with
        the three regions outlined. The input frame is not modified.
        """
        _check_frame(frame)
        config = self._config

        if config.brightness_offset:
            adjusted = cv2.convertScaleAbs(
                frame, alpha=1.0, beta=config.brightness_offset
            )
        else:
            adjusted = frame.copy()

        height, width = adjusted.shape[:2]
        try:
            regions = compute_regions(config, width, height)
        except RegionGeometryError as e:
            logger.warning(f"Region geometry rejected: {e}")
            raise

        sats = tuple(saturation_percent(cv2.mean(r.crop(adjusted))) for r in regions)
        pattern = MarkerPattern(first_argmin(sats) + 1)

        for r in regions:
            cv2.rectangle(
                adjusted,
                (r.x0, r.y0),
                (r.x1, r.y1),
                _OUTLINE_COLOR,
                _OUTLINE_THICKNESS,
            )

        result = FrameClassification(
            region_saturations=sats, pattern_index=pattern, regions=regions
        )
        if pattern != self._last.pattern_index:
            logger.info(
                f"Marker pattern {pattern.name.lower()} "
                f"(saturations L={sats[0]} M={sats[1]} R={sats[2]})"
            )
        self._last = result
        return result, adjusted

    def snapshot(self) -> dict[str, Any]:
        return self._last.to_dict()
