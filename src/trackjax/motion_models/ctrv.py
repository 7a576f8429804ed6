"""Constant turn rate and velocity (CTRV) motion model.

The CTRV model assumes an object moves with constant speed ``v`` along a
circular arc whose heading changes at the constant rate ``yaw_rate``.
Between updates the only departures from that motion are the two white
acceleration noise terms carried in the augmented state:

- ``nu_a``: longitudinal acceleration [m/s^2]
- ``nu_yawdd``: yaw acceleration [rad/s^2]

For ``|yaw_rate| > YAW_RATE_EPSILON`` the position is advanced with the
closed-form arc integral. Below the threshold the arc degenerates to a
straight line and the ``v / yaw_rate`` factor is replaced by its limit.
Both branches are evaluated with ``jnp.where`` so the model stays
traceable under ``jax.jit`` and ``jax.vmap``.

References:

1. R. Schubert, E. Richter, G. Wanielik, *Comparison and Evaluation of
   Advanced Motion Models for Vehicle Tracking*, 2008
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from trackjax.config import get_dtype
from trackjax.constants import YAW_RATE_EPSILON


def ctrv_propagate(sigma: ArrayLike, dt: float) -> Array:
    """Advance one augmented sigma point through the CTRV model.

    Args:
        sigma: Augmented state ``[px, py, v, yaw, yaw_rate, nu_a, nu_yawdd]``
            of shape ``(7,)``.
        dt: Elapsed time [s]. Zero is allowed and returns the kinematic
            part of ``sigma`` unchanged.

    Returns:
        jax.Array: Propagated CTRV state ``[px, py, v, yaw, yaw_rate]`` of
            shape ``(5,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from trackjax.motion_models import ctrv_propagate

        sigma = jnp.array([0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0])
        ctrv_propagate(sigma, 1.0)  # [1, 0, 1, 0, 0]
        ```
    """
    dtype = get_dtype()
    sigma = jnp.asarray(sigma, dtype=dtype)
    px, py, v, yaw, yawd, nu_a, nu_yawdd = sigma

    turning = jnp.abs(yawd) > YAW_RATE_EPSILON
    yawd_safe = jnp.where(turning, yawd, 1.0)
    yaw_end = yaw + yawd * dt

    px_turn = px + v / yawd_safe * (jnp.sin(yaw_end) - jnp.sin(yaw))
    py_turn = py + v / yawd_safe * (jnp.cos(yaw) - jnp.cos(yaw_end))
    px_straight = px + v * dt * jnp.cos(yaw)
    py_straight = py + v * dt * jnp.sin(yaw)

    px_p = jnp.where(turning, px_turn, px_straight)
    py_p = jnp.where(turning, py_turn, py_straight)

    # Process noise
    half_dt2 = 0.5 * dt * dt
    px_p = px_p + half_dt2 * nu_a * jnp.cos(yaw)
    py_p = py_p + half_dt2 * nu_a * jnp.sin(yaw)
    v_p = v + nu_a * dt
    yaw_p = yaw_end + half_dt2 * nu_yawdd
    yawd_p = yawd + nu_yawdd * dt

    return jnp.stack([px_p, py_p, v_p, yaw_p, yawd_p])


def ctrv_propagate_sigma_points(points: ArrayLike, dt: float) -> Array:
    """Advance every augmented sigma point through the CTRV model.

    Args:
        points: Augmented sigma points of shape ``(k, 7)``.
        dt: Elapsed time [s].

    Returns:
        jax.Array: Predicted sigma points of shape ``(k, 5)``.
    """
    dtype = get_dtype()
    points = jnp.asarray(points, dtype=dtype)
    return jax.vmap(ctrv_propagate, in_axes=(0, None))(points, dt)
