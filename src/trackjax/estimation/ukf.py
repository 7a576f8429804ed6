"""Unscented Kalman Filter (UKF) predict and update functions.

Implements the augmented Unscented Kalman Filter for the CTRV motion
model. The predict step draws sigma points from the noise-augmented state,
propagates each through :func:`~trackjax.motion_models.ctrv_propagate`
via ``jax.vmap``, and recombines them into the predicted belief. The
predicted sigma points are returned alongside the belief because the
update step reuses them rather than redrawing.

The update step is split in two so that the sensor-specific part is
isolated:

1. :func:`predict_measurement` maps the predicted sigma points into a
   sensor's measurement space and forms the innovation covariance ``S``.
2. :func:`ukf_update` forms the cross-covariance, the Kalman gain and the
   corrected belief, and evaluates the normalized innovation squared (NIS).

Angular components (heading in the state, bearing in the radar
measurement) are wrapped into ``(-pi, pi]`` wherever differences are
taken.

These are building-block functions compatible with ``jax.jit``. Numerical
failures (a non positive definite covariance, a singular ``S``) surface as
non-finite outputs; :mod:`trackjax.tracking` checks for them and raises.
"""

from __future__ import annotations

from collections.abc import Callable

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from trackjax.config import get_dtype
from trackjax.constants import YAW_INDEX
from trackjax.estimation._types import (
    FilterResult,
    FilterState,
    MeasurementPrediction,
    SigmaPoints,
)
from trackjax.estimation.sigma_points import augmented_sigma_points, recombine
from trackjax.motion_models import ctrv_propagate_sigma_points
from trackjax.utils import wrap_component


def ukf_predict(
    filter_state: FilterState,
    dt: float,
    std_a: float,
    std_yawdd: float,
) -> tuple[FilterState, SigmaPoints]:
    """Propagate the filter state forward by ``dt`` seconds.

    Args:
        filter_state: Current filter state ``(x, P)``.
        dt: Elapsed time [s]. Must be non-negative.
        std_a: Longitudinal acceleration noise standard deviation [m/s^2].
        std_yawdd: Yaw acceleration noise standard deviation [rad/s^2].

    Returns:
        A tuple ``(predicted, sigma)`` where ``predicted`` is the predicted
        :class:`FilterState` (heading wrapped) and ``sigma`` holds the
        predicted, unaugmented sigma points of shape ``(15, 5)`` with their
        weights.

    Examples:
        ```python
        import jax.numpy as jnp
        from trackjax.estimation import FilterState, ukf_predict

        fs = FilterState(x=jnp.array([1.0, 2.0, 0.5, 0.0, 0.0]), P=jnp.eye(5))
        fs_pred, sigma = ukf_predict(fs, 0.1, 1.0, 0.3)
        ```
    """
    dtype = get_dtype()
    x = jnp.asarray(filter_state.x, dtype=dtype)
    P = jnp.asarray(filter_state.P, dtype=dtype)

    augmented = augmented_sigma_points(x, P, std_a, std_yawdd)
    propagated = ctrv_propagate_sigma_points(augmented.points, dt)

    x_pred, P_pred = recombine(propagated, augmented.weights, angle_index=YAW_INDEX)
    x_pred = wrap_component(x_pred, YAW_INDEX)

    return (
        FilterState(x=x_pred, P=P_pred),
        SigmaPoints(points=propagated, weights=augmented.weights),
    )


def predict_measurement(
    sigma: SigmaPoints,
    measurement_fn: Callable[[Array], Array],
    R: ArrayLike,
    angle_index: int | None = None,
) -> MeasurementPrediction:
    """Transform predicted sigma points into a sensor's measurement space.

    Args:
        sigma: Predicted sigma points and weights from :func:`ukf_predict`.
        measurement_fn: Measurement model ``h(x) -> z``. Applied to each
            sigma point via ``jax.vmap``.
        R: Measurement noise covariance matrix of shape ``(m, m)``.
        angle_index: Index of the angular measurement component (the
            radar bearing), or ``None``.

    Returns:
        MeasurementPrediction: Predicted measurement mean, innovation
            covariance ``S`` (including ``R``) and the transformed sigma
            points.
    """
    dtype = get_dtype()
    R = jnp.asarray(R, dtype=dtype)

    z_sigma = jax.vmap(measurement_fn)(sigma.points)
    z_pred, S = recombine(z_sigma, sigma.weights, angle_index=angle_index)

    return MeasurementPrediction(z_pred=z_pred, S=S + R, z_sigma=z_sigma)


def ukf_update(
    filter_state: FilterState,
    sigma: SigmaPoints,
    prediction: MeasurementPrediction,
    z: ArrayLike,
    state_angle_index: int | None = YAW_INDEX,
    measurement_angle_index: int | None = None,
) -> FilterResult:
    """Incorporate a measurement into the predicted filter state.

    Args:
        filter_state: Predicted filter state ``(x_pred, P_pred)``.
        sigma: Predicted sigma points the prediction was built from.
        prediction: Output of :func:`predict_measurement` for the sensor
            that produced ``z``.
        z: Measurement vector of shape ``(m,)``.
        state_angle_index: Index of the heading in the state vector.
        measurement_angle_index: Index of the angular measurement
            component, or ``None``.

    Returns:
        FilterResult: Updated state, innovation, innovation covariance,
            Kalman gain and NIS.

    Examples:
        ```python
        from trackjax.estimation import predict_measurement, ukf_update
        from trackjax.sensor_models import lidar_measurement, lidar_noise

        prediction = predict_measurement(sigma, lidar_measurement, lidar_noise(0.15, 0.15))
        result = ukf_update(fs_pred, sigma, prediction, jnp.array([1.05, 2.02]))
        ```
    """
    dtype = get_dtype()
    x = jnp.asarray(filter_state.x, dtype=dtype)
    P = jnp.asarray(filter_state.P, dtype=dtype)
    z = jnp.asarray(z, dtype=dtype)
    S = prediction.S

    # Cross-covariance between state and measurement
    x_diff = wrap_component(sigma.points - x[None, :], state_angle_index)
    z_diff = wrap_component(prediction.z_sigma - prediction.z_pred[None, :], measurement_angle_index)
    Tc = jnp.einsum("i,ij,ik->jk", sigma.weights, x_diff, z_diff)

    # Kalman gain: K = Tc @ S^{-1}
    K = jnp.linalg.solve(S, Tc.T).T

    innovation = wrap_component(z - prediction.z_pred, measurement_angle_index)

    x_upd = wrap_component(x + K @ innovation, state_angle_index)
    P_upd = P - K @ S @ K.T

    nis = innovation @ jnp.linalg.solve(S, innovation)

    return FilterResult(
        state=FilterState(x=x_upd, P=P_upd),
        innovation=innovation,
        innovation_covariance=S,
        kalman_gain=K,
        nis=nis,
    )

