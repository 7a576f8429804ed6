"""Sensor measurement models for object tracking.

Provides measurement functions and noise covariance constructors for the
sensors fused by the tracker. Each sensor type is implemented in its own
sub-module.

Available sensor models:

- :func:`lidar_measurement` -- Lidar Cartesian position fix
- :func:`lidar_noise` -- Lidar noise covariance
- :func:`radar_measurement` -- Radar range, bearing and range rate
- :func:`radar_noise` -- Radar noise covariance
- :func:`radar_to_position` -- Radar fix to Cartesian position

All measurement functions are compatible with ``predict_measurement``
from :mod:`trackjax.estimation`.
"""

from trackjax.sensor_models.lidar import lidar_measurement, lidar_noise
from trackjax.sensor_models.radar import radar_measurement, radar_noise, radar_to_position

__all__ = [
    "lidar_measurement",
    "lidar_noise",
    "radar_measurement",
    "radar_noise",
    "radar_to_position",
]
