"""Type definitions for the measurement-by-measurement tracking driver.

- :class:`SensorType`: Which sensor produced a measurement.
- :class:`Measurement`: One timestamped sensor reading.
- :class:`TrackState`: Everything the filter carries from one measurement
  to the next.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from jax import Array

from trackjax.estimation import FilterState, SigmaPoints


class SensorType(Enum):
    """Sensor that produced a measurement.

    Values are the names used in configuration and logs. The single-letter
    tags of the sensor log format are available through :meth:`from_tag`.
    """

    LIDAR = "lidar"
    RADAR = "radar"

    @property
    def measurement_size(self) -> int:
        """Number of components in a raw reading from this sensor."""
        return _MEASUREMENT_SIZE[self]

    @classmethod
    def from_tag(cls, tag: str) -> SensorType:
        """Return the sensor for a sensor log tag (``"L"`` or ``"R"``).

        Raises:
            ValueError: If the tag is not a known sensor tag.
        """
        try:
            return _TAG_TO_SENSOR[tag.strip().upper()]
        except KeyError:
            raise ValueError(
                f"Unknown sensor tag {tag!r}. Expected one of {list(_TAG_TO_SENSOR)}."
            ) from None

    def __str__(self) -> str:
        return self.value


_MEASUREMENT_SIZE = {
    SensorType.LIDAR: 2,
    SensorType.RADAR: 3,
}

_TAG_TO_SENSOR = {
    "L": SensorType.LIDAR,
    "R": SensorType.RADAR,
}


class Measurement(NamedTuple):
    """A single timestamped sensor reading.

    Attributes:
        sensor: Sensor that produced the reading.
        z: Raw reading. ``[px, py]`` for lidar, ``[rho, phi, rho_dot]``
            for radar.
        timestamp: Acquisition time in integer microseconds. Must not
            decrease from one measurement to the next.
    """

    sensor: SensorType
    z: Array
    timestamp: int


class TrackState(NamedTuple):
    """Belief about one tracked object between measurements.

    Attributes:
        filter: Current state estimate and covariance.
        sigma: Predicted sigma points of the last prediction, or ``None``
            once a correction has made them stale.
        initialized: ``False`` until the first measurement is consumed.
        timestamp: Timestamp of the last processed measurement [us].
        nis_lidar: NIS of the most recent lidar correction, ``0.0`` before
            the first one.
        nis_radar: NIS of the most recent radar correction, ``0.0`` before
            the first one.
    """

    filter: FilterState
    sigma: SigmaPoints | None
    initialized: bool
    timestamp: int
    nis_lidar: float
    nis_radar: float
