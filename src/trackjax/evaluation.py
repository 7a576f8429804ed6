"""Accuracy and consistency metrics for tracker output.

- :func:`state_to_cartesian` converts CTRV estimates to the
  ``[px, py, vx, vy]`` form that ground truth is usually given in.
- :func:`rmse` is the per-component root-mean-square error.
- :func:`nis_exceedance_fraction` measures filter consistency: for a well
  tuned filter about 5% of NIS values exceed the 95% chi-square threshold.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from trackjax.config import get_dtype
from trackjax.constants import CHI2_95_2DOF, CHI2_95_3DOF

_CHI2_95 = {
    2: CHI2_95_2DOF,
    3: CHI2_95_3DOF,
}


def state_to_cartesian(x: ArrayLike) -> Array:
    """Convert CTRV states to ``[px, py, vx, vy]``.

    Args:
        x: CTRV state of shape ``(5,)`` or a stack of shape ``(k, 5)``.

    Returns:
        jax.Array: Cartesian states of shape ``(4,)`` or ``(k, 4)``.
    """
    dtype = get_dtype()
    x = jnp.asarray(x, dtype=dtype)
    px, py, v, yaw = x[..., 0], x[..., 1], x[..., 2], x[..., 3]
    return jnp.stack([px, py, v * jnp.cos(yaw), v * jnp.sin(yaw)], axis=-1)


def rmse(estimates: ArrayLike, ground_truth: ArrayLike) -> Array:
    """Root-mean-square error of each component.

    Args:
        estimates: Estimates of shape ``(k, m)``.
        ground_truth: Ground truth of shape ``(k, m)``.

    Returns:
        jax.Array: RMSE of shape ``(m,)``.

    Raises:
        ValueError: If the inputs are empty or their shapes differ.
    """
    dtype = get_dtype()
    estimates = jnp.asarray(estimates, dtype=dtype)
    ground_truth = jnp.asarray(ground_truth, dtype=dtype)
    if estimates.shape != ground_truth.shape:
        raise ValueError(
            f"Estimate shape {estimates.shape} does not match ground truth shape {ground_truth.shape}"
        )
    if estimates.shape[0] == 0:
        raise ValueError("Cannot compute RMSE of an empty sequence")
    return jnp.sqrt(jnp.mean((estimates - ground_truth) ** 2, axis=0))


def nis_exceedance_fraction(nis: ArrayLike, dof: int) -> float:
    """Fraction of NIS values above the 95% chi-square threshold.

    Args:
        nis: NIS values of shape ``(k,)``.
        dof: Measurement dimension: 2 for lidar, 3 for radar.

    Returns:
        float: Fraction in ``[0, 1]``. ``0.0`` for an empty input.

    Raises:
        ValueError: If there is no tabulated threshold for *dof*.
    """
    if dof not in _CHI2_95:
        raise ValueError(f"No chi-square threshold for {dof} degrees of freedom")
    nis = jnp.asarray(nis, dtype=get_dtype())
    if nis.size == 0:
        return 0.0
    return float(jnp.mean(nis > _CHI2_95[dof]))
