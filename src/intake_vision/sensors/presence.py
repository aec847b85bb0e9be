"""Rate-limited proximity sampling with a derived presence signal.

Distance reads cost a bus transaction, so sampling every control tick
would eat the loop's timing budget. Reads are decimated to one every
``tick_interval`` ticks while ``has_object()`` stays cheap and can be
queried on every tick.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import PresenceConfig
from .base import DistanceSensor, DistanceUnit

logger = logging.getLogger("intake-vision")


class SampledPresenceDetector:
    """Gates distance reads behind a fixed tick schedule.

    Sensor failures are not caught here: they propagate to the caller of
    ``on_tick`` / ``set_enabled`` and the previous reading is kept.
    """

    def __init__(self, sensor: DistanceSensor, config: PresenceConfig | None = None):
        self._sensor = sensor
        self._config = config or PresenceConfig()
        self._enabled = False
        self._last_distance = 0.0

    @property
    def config(self) -> PresenceConfig:
        return self._config

    def update_config(self, config: PresenceConfig) -> None:
        self._config = config

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def last_distance(self) -> float:
        """Most recent reading in millimetres."""
        return self._last_distance

    def _sample(self) -> None:
        distance = self._sensor.read_distance(DistanceUnit.MM)
        self._last_distance = distance
        logger.debug(f"Presence sample: {distance:.1f} mm")

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable sampling.

        Enabling takes one reading immediately, off-schedule. Disabling
        keeps the last reading.
        """
        if enabled:
            self._sample()
        self._enabled = enabled

    def on_tick(self, tick: int) -> bool:
        """Sample if enabled and ``tick`` falls on the interval.

        Returns True when a read was taken.
        """
        if not self._enabled or tick % self._config.tick_interval != 0:
            return False
        self._sample()
        return True

    def has_object(self) -> bool:
        return self._last_distance <= self._config.presence_cutoff_mm

    def snapshot(self) -> dict[str, Any]:
        return {
            "enabled": self._enabled,
            "last_distance_mm": self._last_distance,
            "has_object": self.has_object(),
            "tick_interval": self._config.tick_interval,
            "presence_cutoff_mm": self._config.presence_cutoff_mm,
        }
