"""Distance sensing — sensor interface, simulated sensor, presence sampler."""

from .base import DistanceSensor, DistanceUnit
from .presence import SampledPresenceDetector
from .simulated import SimulatedDistanceSensor

__all__ = [
    "DistanceSensor",
    "DistanceUnit",
    "SampledPresenceDetector",
    "SimulatedDistanceSensor",
]
