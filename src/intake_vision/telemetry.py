"""Diagnostic readback — flat snapshot of both components for display.

Reading telemetry never triggers a sensor read or a classification.
"""

from __future__ import annotations

from typing import Any

from .perception.pattern_classifier import RegionPatternClassifier
from .sensors.presence import SampledPresenceDetector
from .stats import FrameRateTracker


def collect_telemetry(
    detector: SampledPresenceDetector,
    classifier: RegionPatternClassifier,
    frame_stats: FrameRateTracker | None = None,
) -> dict[str, Any]:
    left, middle, right = classifier.saturations
    data: dict[str, Any] = {
        "distance_mm": detector.last_distance,
        "has_object": detector.has_object(),
        "left_sat": left,
        "middle_sat": middle,
        "right_sat": right,
        "pattern": int(classifier.pattern),
    }
    if frame_stats is not None:
        data["frame_count"] = frame_stats.frame_count
        data["fps"] = round(frame_stats.fps, 2)
    return data


def format_telemetry(data: dict[str, Any]) -> str:
    """One-line operator readout, e.g. for a terminal status line."""
    parts = [
        f"PROX {data['distance_mm']:.1f}mm",
        f"HAS {'yes' if data['has_object'] else 'no'}",
        f"SAT L{data['left_sat']} M{data['middle_sat']} R{data['right_sat']}",
        f"PATTERN {data['pattern']}",
    ]
    if "fps" in data:
        parts.append(f"FRAME {data['frame_count']} @ {data['fps']:.2f}fps")
    return " | ".join(parts)
