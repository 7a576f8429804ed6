"""Measurement-by-measurement tracking with the CTRV unscented Kalman filter.

The functional core is :func:`process_measurement`, which takes the
current :class:`TrackState` and one :class:`Measurement` and returns the
next :class:`TrackState`. Track states are immutable, so several tracks
can be driven independently and a failed cycle never leaves a half
updated belief behind.

Each call runs one of two paths:

- **Uninitialized**: the position is seeded from the reading (lidar
  copies it, radar converts range and bearing to Cartesian), speed,
  heading, yaw rate and covariance keep their initial values, and the
  timestamp is recorded. No prediction or correction takes place.
- **Tracking**: if time has elapsed since the last measurement the belief
  is predicted forward. If the sensor is enabled, the prediction is then
  corrected against the reading and the NIS of that sensor is updated.
  Measurements from disabled sensors predict and advance the clock but do
  not correct.

:class:`Estimator` wraps one track in a small mutable object for callers
that prefer to submit measurements and read the belief back.

The numerical kernels in :mod:`trackjax.estimation` return non-finite
values instead of raising; this module checks their outputs and raises
the typed errors of :mod:`trackjax.errors`.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array

from trackjax.config import get_dtype, get_singularity_tolerance
from trackjax.constants import BEARING_INDEX, N_X, US2S, YAW_INDEX
from trackjax.errors import (
    CovarianceNotPositiveDefiniteError,
    NumericalError,
    OutOfOrderMeasurementError,
    SingularInnovationCovarianceError,
)
from trackjax.estimation import (
    FilterResult,
    FilterState,
    SigmaPoints,
    predict_measurement,
    ukf_predict,
    ukf_update,
)
from trackjax.sensor_models import lidar_measurement, radar_measurement, radar_to_position
from trackjax.tracking._types import Measurement, SensorType, TrackState
from trackjax.tracking.config import EstimatorConfig

logger = logging.getLogger(__name__)

# Measurement function and index of the angular component, per sensor
_SENSOR_MODELS = {
    SensorType.LIDAR: (lidar_measurement, None),
    SensorType.RADAR: (radar_measurement, BEARING_INDEX),
}


def new_track() -> TrackState:
    """Create an uninitialized track.

    Returns:
        TrackState: Zero state, identity covariance, no NIS history.
    """
    dtype = get_dtype()
    return TrackState(
        filter=FilterState(x=jnp.zeros(N_X, dtype=dtype), P=jnp.eye(N_X, dtype=dtype)),
        sigma=None,
        initialized=False,
        timestamp=0,
        nis_lidar=0.0,
        nis_radar=0.0,
    )


def _validated(measurement: Measurement) -> Measurement:
    """Coerce the sensor tag and reading, checking the reading size."""
    sensor = SensorType(measurement.sensor)
    z = jnp.asarray(measurement.z, dtype=get_dtype())
    if z.shape != (sensor.measurement_size,):
        raise ValueError(
            f"{sensor} reading must have shape ({sensor.measurement_size},), got {z.shape}"
        )
    return Measurement(sensor=sensor, z=z, timestamp=int(measurement.timestamp))


def _initialize(track: TrackState, measurement: Measurement) -> TrackState:
    if measurement.sensor is SensorType.LIDAR:
        position = measurement.z[:2]
    else:
        position = radar_to_position(measurement.z)

    x = track.filter.x.at[:2].set(position)
    logger.info(
        "Track initialized from %s at t=%d us: px=%.3f, py=%.3f",
        measurement.sensor,
        measurement.timestamp,
        float(x[0]),
        float(x[1]),
    )
    return track._replace(
        filter=FilterState(x=x, P=track.filter.P),
        initialized=True,
        timestamp=measurement.timestamp,
    )


def _predict(
    filter_state: FilterState,
    dt: float,
    config: EstimatorConfig,
) -> tuple[FilterState, SigmaPoints]:
    predicted, sigma = ukf_predict(filter_state, dt, config.std_a, config.std_yawdd)
    if not bool(jnp.all(jnp.isfinite(sigma.points))):
        raise CovarianceNotPositiveDefiniteError(
            "Augmented covariance is not positive definite; cannot generate sigma points"
        )
    return predicted, sigma


def _correct(
    filter_state: FilterState,
    sigma: SigmaPoints,
    measurement: Measurement,
    config: EstimatorConfig,
) -> FilterResult:
    measurement_fn, angle_index = _SENSOR_MODELS[measurement.sensor]
    R = config.measurement_noise(measurement.sensor)

    prediction = predict_measurement(sigma, measurement_fn, R, angle_index=angle_index)
    if not bool(jnp.all(jnp.isfinite(prediction.z_sigma))):
        raise NumericalError(
            f"Non-finite {measurement.sensor} measurement prediction; "
            "is the tracked object at the sensor origin?"
        )

    rcond = 1.0 / jnp.linalg.cond(prediction.S)
    if not float(rcond) >= get_singularity_tolerance():
        raise SingularInnovationCovarianceError(
            f"{measurement.sensor} innovation covariance is singular "
            f"(reciprocal condition number {float(rcond):.3e})"
        )

    result = ukf_update(
        filter_state,
        sigma,
        prediction,
        measurement.z,
        state_angle_index=YAW_INDEX,
        measurement_angle_index=angle_index,
    )
    if not bool(jnp.all(jnp.isfinite(result.state.P))):
        raise NumericalError(f"{measurement.sensor} correction produced a non-finite covariance")
    return result


def process_measurement(
    track: TrackState,
    measurement: Measurement,
    config: EstimatorConfig,
) -> TrackState:
    """Run one filter cycle for a measurement.

    Args:
        track: Belief before the measurement.
        measurement: The new sensor reading.
        config: Estimator configuration.

    Returns:
        TrackState: Belief after the measurement.

    Raises:
        ValueError: If the reading has the wrong size for its sensor.
        OutOfOrderMeasurementError: If the measurement is older than the
            last processed one.
        CovarianceNotPositiveDefiniteError: If the covariance can no longer
            be factorized for prediction.
        SingularInnovationCovarianceError: If the innovation covariance
            cannot be inverted.
        NumericalError: If the correction produced non-finite values.

    Examples:
        ```python
        import jax.numpy as jnp
        from trackjax.tracking import (
            EstimatorConfig, Measurement, SensorType, new_track, process_measurement,
        )

        config = EstimatorConfig(std_a=1.0, std_yawdd=0.3)
        track = new_track()
        track = process_measurement(
            track, Measurement(SensorType.LIDAR, jnp.array([1.0, 2.0]), 0), config
        )
        track = process_measurement(
            track, Measurement(SensorType.LIDAR, jnp.array([1.05, 2.02]), 100_000), config
        )
        ```
    """
    measurement = _validated(measurement)

    if not track.initialized:
        return _initialize(track, measurement)

    dt_us = measurement.timestamp - track.timestamp
    if dt_us < 0:
        logger.warning(
            "Rejecting %s measurement at t=%d us: older than last processed t=%d us",
            measurement.sensor,
            measurement.timestamp,
            track.timestamp,
        )
        raise OutOfOrderMeasurementError(
            f"Measurement timestamp {measurement.timestamp} us precedes "
            f"last processed timestamp {track.timestamp} us"
        )

    filter_state, sigma = track.filter, track.sigma
    if dt_us > 0:
        dt = dt_us * US2S
        filter_state, sigma = _predict(filter_state, dt, config)
        logger.debug("Predicted %.6f s ahead: x=%s", dt, filter_state.x)

    track = track._replace(filter=filter_state, sigma=sigma, timestamp=measurement.timestamp)

    if not config.is_enabled(measurement.sensor):
        logger.debug("Skipping correction for disabled sensor %s", measurement.sensor)
        return track

    if sigma is None:
        # No prediction since the last correction: draw sigma points for the
        # current belief with a zero-length step
        _, sigma = _predict(filter_state, 0.0, config)

    result = _correct(filter_state, sigma, measurement, config)
    nis = float(result.nis)
    logger.debug("Corrected with %s: NIS=%.4f, x=%s", measurement.sensor, nis, result.state.x)

    if measurement.sensor is SensorType.LIDAR:
        track = track._replace(nis_lidar=nis)
    else:
        track = track._replace(nis_radar=nis)
    return track._replace(filter=result.state, sigma=None)


class Estimator:
    """Stateful wrapper around a single track.

    Submit measurements in non-decreasing timestamp order with
    :meth:`process_measurement` and read the belief back through
    :attr:`x`, :attr:`P` and :meth:`nis`. An instance is not thread-safe;
    callers sharing one across threads must serialize access.

    Args:
        config: Estimator configuration. Default: ``EstimatorConfig()``.

    Examples:
        ```python
        import jax.numpy as jnp
        from trackjax.tracking import Estimator, Measurement, SensorType

        est = Estimator()
        est.process_measurement(Measurement(SensorType.RADAR, jnp.array([5.0, 0.5, 0.0]), 0))
        est.x  # [4.388, 2.397, 0, 0, 0]
        ```
    """

    def __init__(self, config: EstimatorConfig | None = None):
        self.config = config if config is not None else EstimatorConfig()
        self._track = new_track()

    @property
    def state(self) -> TrackState:
        """Full track state after the most recently completed cycle."""
        return self._track

    @property
    def x(self) -> Array:
        """State estimate ``[px, py, v, yaw, yaw_rate]``."""
        return self._track.filter.x

    @property
    def P(self) -> Array:
        """State covariance of shape ``(5, 5)``."""
        return self._track.filter.P

    @property
    def is_initialized(self) -> bool:
        return self._track.initialized

    def nis(self, sensor: SensorType | str) -> float:
        """Return the NIS of the most recent correction by *sensor*.

        Returns ``0.0`` if that sensor has not corrected the track yet.
        """
        if SensorType(sensor) is SensorType.LIDAR:
            return self._track.nis_lidar
        return self._track.nis_radar

    def process_measurement(self, measurement: Measurement) -> None:
        """Run one filter cycle. On error the belief is left unchanged."""
        self._track = process_measurement(self._track, measurement, self.config)
