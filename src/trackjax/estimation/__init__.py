"""Unscented Kalman filter building blocks for object tracking.

Provides the sigma point machinery and the predict/update kernels of the
augmented UKF with the CTRV motion model. Measurement models are in the
:mod:`trackjax.sensor_models` module; the stateful measurement-by-measurement
driver is in :mod:`trackjax.tracking`.

Available components:

- :class:`FilterState` -- Filter state (estimate and covariance)
- :class:`SigmaPoints` -- Sigma points with their unscented weights
- :class:`MeasurementPrediction` -- Sigma points in measurement space
- :class:`FilterResult` -- Update result with diagnostics
- :func:`unscented_weights` -- Weight vector for any dimension
- :func:`augmented_sigma_points` -- Noise-augmented sigma point generation
- :func:`sigma_points` -- Non-augmented sigma points (diagnostics)
- :func:`recombine` -- Weighted mean and covariance with angle wrapping
- :func:`ukf_predict` -- CTRV propagation of the belief
- :func:`predict_measurement` -- Sigma point transform into measurement space
- :func:`ukf_update` -- Kalman correction and NIS

All functions are compatible with ``jax.jit``.
"""

from trackjax.estimation._types import (
    FilterResult,
    FilterState,
    MeasurementPrediction,
    SigmaPoints,
)
from trackjax.estimation.sigma_points import (
    augment,
    augmented_sigma_points,
    recombine,
    sigma_points,
    spreading_parameter,
    unscented_weights,
)
from trackjax.estimation.ukf import predict_measurement, ukf_predict, ukf_update

__all__ = [
    "FilterState",
    "SigmaPoints",
    "MeasurementPrediction",
    "FilterResult",
    "augment",
    "augmented_sigma_points",
    "recombine",
    "sigma_points",
    "spreading_parameter",
    "unscented_weights",
    "predict_measurement",
    "ukf_predict",
    "ukf_update",
]
