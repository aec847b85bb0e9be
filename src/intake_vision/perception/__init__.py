"""Perception — region geometry and the marker pattern classifier."""

from .pattern_classifier import (
    FrameClassification,
    MarkerPattern,
    RegionPatternClassifier,
)
from .regions import REGION_NAMES, RegionRect, compute_regions

__all__ = [
    "FrameClassification",
    "MarkerPattern",
    "RegionPatternClassifier",
    "REGION_NAMES",
    "RegionRect",
    "compute_regions",
]
