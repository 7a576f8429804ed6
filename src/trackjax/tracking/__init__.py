"""Sensor-fusion tracking driver.

Feeds lidar and radar measurements, one at a time and in time order, into
the CTRV unscented Kalman filter of :mod:`trackjax.estimation`.

Available components:

- :class:`SensorType` -- Lidar or radar
- :class:`Measurement` -- One timestamped reading
- :class:`TrackState` -- Belief carried between measurements
- :class:`EstimatorConfig` -- Sensor toggles and noise levels
- :func:`new_track` -- Uninitialized track
- :func:`process_measurement` -- One filter cycle, functional form
- :class:`Estimator` -- One filter cycle per call, stateful form
"""

from trackjax.tracking._types import Measurement, SensorType, TrackState
from trackjax.tracking.config import EstimatorConfig
from trackjax.tracking.estimator import Estimator, new_track, process_measurement

__all__ = [
    "SensorType",
    "Measurement",
    "TrackState",
    "EstimatorConfig",
    "Estimator",
    "new_track",
    "process_measurement",
]
