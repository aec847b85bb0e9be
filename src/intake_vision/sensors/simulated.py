"""Scripted distance sensor for bench runs and tests."""

from __future__ import annotations

import itertools
from collections.abc import Iterable

from ..exceptions import SensorReadError
from .base import DistanceSensor, DistanceUnit


class SimulatedDistanceSensor(DistanceSensor):
    """Replays a fixed script of millimetre readings, cycling forever.

    A ``None`` entry in the script simulates a failed bus transaction and
    raises :class:`SensorReadError` for that read.
    """

    def __init__(self, readings_mm: float | Iterable[float | None] = 100.0):
        if isinstance(readings_mm, (int, float)):
            script = [float(readings_mm)]
        else:
            script = list(readings_mm)
        if not script:
            raise ValueError("SimulatedDistanceSensor needs at least one reading")
        self._script = itertools.cycle(script)
        self.read_count = 0

    def read_distance(self, unit: DistanceUnit = DistanceUnit.MM) -> float:
        self.read_count += 1
        value = next(self._script)
        if value is None:
            raise SensorReadError("Simulated sensor read failure")
        return unit.from_mm(value)
