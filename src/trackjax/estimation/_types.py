"""Type definitions for the unscented Kalman filter.

Provides the core data types used across the estimation kernels:

- :class:`FilterState`: Current filter state containing the state estimate
  and covariance matrix.
- :class:`SigmaPoints`: A set of sigma points together with the unscented
  weights used to recombine them.
- :class:`MeasurementPrediction`: Predicted measurement mean, innovation
  covariance and the sigma points transformed into measurement space.
- :class:`FilterResult`: Output of a filter update step, containing the
  updated state plus diagnostic information for filter tuning.

All types are :class:`~typing.NamedTuple` instances, which JAX treats as
pytrees automatically. This means they work seamlessly with ``jax.jit``,
``jax.vmap``, and ``jax.lax`` control flow primitives.
"""

from __future__ import annotations

from typing import NamedTuple

from jax import Array


class FilterState(NamedTuple):
    """State of a Kalman filter.

    Holds the current state estimate and error covariance matrix. Returned
    by ``ukf_predict`` and available as the ``state`` field of
    :class:`FilterResult`.

    Attributes:
        x: State estimate vector of shape ``(n,)``. For the CTRV model this
            is ``[px, py, v, yaw, yaw_rate]``.
        P: Error covariance matrix of shape ``(n, n)``. Must be symmetric
            positive semi-definite.
    """

    x: Array
    P: Array


class SigmaPoints(NamedTuple):
    """Sigma points and their unscented weights.

    Points are stored row-wise: row ``i`` is sigma point ``i``. Row 0 is the
    mean, rows ``1..n`` lie along the positive Cholesky columns and rows
    ``n+1..2n`` along the negative ones.

    Attributes:
        points: Sigma points of shape ``(2 n_aug + 1, m)`` where ``m`` is
            the dimension of the space the points currently live in.
        weights: Unscented weights of shape ``(2 n_aug + 1,)``. Sum to one.
    """

    points: Array
    weights: Array


class MeasurementPrediction(NamedTuple):
    """Sigma points mapped into a sensor's measurement space.

    Attributes:
        z_pred: Predicted measurement mean of shape ``(m,)``.
        S: Innovation covariance of shape ``(m, m)``, including the sensor
            noise ``R``.
        z_sigma: Transformed sigma points of shape ``(2 n_aug + 1, m)``,
            kept for the cross-covariance in the update step.
    """

    z_pred: Array
    S: Array
    z_sigma: Array


class FilterResult(NamedTuple):
    """Result of a filter measurement update step.

    Returned by ``ukf_update``. Contains the updated filter state along with
    diagnostic quantities useful for filter tuning and health monitoring.

    Attributes:
        state: Updated :class:`FilterState` after incorporating the
            measurement.
        innovation: Measurement residual ``z - z_pred`` of shape ``(m,)``,
            with any angular component wrapped.
        innovation_covariance: Innovation covariance ``S`` of shape
            ``(m, m)``.
        kalman_gain: Kalman gain matrix ``K`` of shape ``(n, m)``.
        nis: Normalized innovation squared
            ``innovation.T @ S^{-1} @ innovation``. Follows a chi-squared
            distribution with ``m`` degrees of freedom for a consistent
            filter.
    """

    state: FilterState
    innovation: Array
    innovation_covariance: Array
    kalman_gain: Array
    nis: Array
