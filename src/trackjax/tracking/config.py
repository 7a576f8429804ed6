"""Configuration dataclass for the tracking driver.

:class:`EstimatorConfig` selects which sensors are fused and holds the
process and sensor noise levels. Configuration is static and validated
on construction; an estimator never mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from jax import Array

from trackjax.constants import (
    STD_LASER_PX,
    STD_LASER_PY,
    STD_RADAR_PHI,
    STD_RADAR_R,
    STD_RADAR_RD,
)
from trackjax.errors import ConfigurationError
from trackjax.sensor_models import lidar_noise, radar_noise
from trackjax.tracking._types import SensorType


@dataclass(frozen=True)
class EstimatorConfig:
    """Configuration for a CTRV unscented Kalman filter track.

    The sensor noise defaults are the values supplied by the sensor
    manufacturer and are not meant to be tuned. The process noise levels
    are the tuning knobs of the filter.

    Args:
        use_lidar: Correct against lidar measurements. When ``False``,
            lidar measurements still advance the prediction.
        use_radar: Correct against radar measurements. When ``False``,
            radar measurements still advance the prediction.
        std_a: Longitudinal acceleration noise standard deviation [m/s^2].
        std_yawdd: Yaw acceleration noise standard deviation [rad/s^2].
        std_laspx: Lidar x position noise standard deviation [m].
        std_laspy: Lidar y position noise standard deviation [m].
        std_radr: Radar range noise standard deviation [m].
        std_radphi: Radar bearing noise standard deviation [rad].
        std_radrd: Radar range rate noise standard deviation [m/s].

    Raises:
        ConfigurationError: If any standard deviation is not strictly
            positive.

    Examples:
        ```python
        from trackjax.tracking import EstimatorConfig
        config = EstimatorConfig(std_a=1.0, std_yawdd=0.3)
        config.use_radar
        ```
    """

    # Sensor toggles
    use_lidar: bool = True
    use_radar: bool = True

    # Process noise
    std_a: float = 2.0
    std_yawdd: float = 0.2

    # Lidar noise
    std_laspx: float = STD_LASER_PX
    std_laspy: float = STD_LASER_PY

    # Radar noise
    std_radr: float = STD_RADAR_R
    std_radphi: float = STD_RADAR_PHI
    std_radrd: float = STD_RADAR_RD

    def __post_init__(self) -> None:
        for f in fields(self):
            if not f.name.startswith("std_"):
                continue
            value = getattr(self, f.name)
            if not value > 0.0:
                raise ConfigurationError(
                    f"{f.name} must be a positive standard deviation, got {value!r}"
                )

    def is_enabled(self, sensor: SensorType) -> bool:
        """Return whether measurements from *sensor* are corrected against."""
        if sensor is SensorType.LIDAR:
            return self.use_lidar
        return self.use_radar

    def measurement_noise(self, sensor: SensorType) -> Array:
        """Return the noise covariance ``R`` of *sensor*."""
        if sensor is SensorType.LIDAR:
            return lidar_noise(self.std_laspx, self.std_laspy)
        return radar_noise(self.std_radr, self.std_radphi, self.std_radrd)

    @staticmethod
    def lidar_only(**kwargs) -> EstimatorConfig:
        """Preset: fuse lidar only, radar measurements only predict.

        Returns:
            EstimatorConfig: Configuration with radar corrections disabled.
        """
        return EstimatorConfig(use_lidar=True, use_radar=False, **kwargs)

    @staticmethod
    def radar_only(**kwargs) -> EstimatorConfig:
        """Preset: fuse radar only, lidar measurements only predict.

        Returns:
            EstimatorConfig: Configuration with lidar corrections disabled.
        """
        return EstimatorConfig(use_lidar=False, use_radar=True, **kwargs)
