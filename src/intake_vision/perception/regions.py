"""Sample-region geometry for the marker classifier.

Three square-ish regions share one column (``offset_x``) and are stacked
vertically around ``offset_y``: left above, middle on, right below. All
values are fractions of the frame size, so the same config works at any
resolution. Geometry is recomputed per frame and never cached.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..config import ClassifierConfig
from ..exceptions import RegionGeometryError

REGION_NAMES = ("left", "middle", "right")

# Vertical step (in units of ``separation``) for each region, in REGION_NAMES order
_REGION_STEPS = (-1, 0, 1)


@dataclass(frozen=True)
class RegionRect:
    """Pixel rectangle, half-open: rows ``y0:y1``, columns ``x0:x1``."""

    name: str
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    def crop(self, image: np.ndarray) -> np.ndarray:
        return image[self.y0 : self.y1, self.x0 : self.x1]


def compute_regions(
    config: ClassifierConfig, width: int, height: int
) -> tuple[RegionRect, RegionRect, RegionRect]:
    """Denormalize the three regions for a ``width`` x ``height`` frame.

    Raises RegionGeometryError if a region leaves the frame or truncates
    to zero area. Regions are never clamped.
    """
    half = config.size / 2
    rects = []
    for name, step in zip(REGION_NAMES, _REGION_STEPS):
        left = width * (config.offset_x - half)
        right = width * (config.offset_x + half)
        top = height * (config.offset_y - half + step * config.separation)
        bottom = height * (config.offset_y + half + step * config.separation)

        if left < 0 or top < 0 or right > width or bottom > height:
            raise RegionGeometryError(
                f"{name} region ({left:.1f}, {top:.1f})-({right:.1f}, {bottom:.1f}) "
                f"falls outside the {width}x{height} frame"
            )

        rect = RegionRect(name, int(left), int(top), int(right), int(bottom))
        if rect.width <= 0 or rect.height <= 0:
            raise RegionGeometryError(
                f"{name} region collapses to zero area on a {width}x{height} frame"
            )
        rects.append(rect)
    return rects[0], rects[1], rects[2]
