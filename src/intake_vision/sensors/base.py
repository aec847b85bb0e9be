"""Distance sensor abstraction — units and the DistanceSensor ABC."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class DistanceUnit(Enum):
    MM = "mm"
    CM = "cm"
    METER = "m"
    INCH = "in"

    @property
    def mm_per_unit(self) -> float:
        return _MM_PER_UNIT[self]

    def from_mm(self, value_mm: float) -> float:
        """Convert a millimetre value into this unit."""
        return value_mm / self.mm_per_unit

    def to_mm(self, value: float) -> float:
        """Convert a value in this unit into millimetres."""
        return value * self.mm_per_unit


_MM_PER_UNIT = {
    DistanceUnit.MM: 1.0,
    DistanceUnit.CM: 10.0,
    DistanceUnit.METER: 1000.0,
    DistanceUnit.INCH: 25.4,
}


class DistanceSensor(ABC):
    """Abstract interface for range-finding sensors.

    Reads are synchronous and assumed expensive (a bus transaction each).
    Implementations return the reading verbatim and raise
    :class:`~intake_vision.exceptions.SensorReadError` when no value can
    be produced.
    """

    @abstractmethod
    def read_distance(self, unit: DistanceUnit = DistanceUnit.MM) -> float: ...
