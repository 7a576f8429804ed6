"""Lidar measurement model for object tracking.

A lidar returns a direct Cartesian position fix ``[px, py]`` of the
tracked object. The model is a linear projection of the first two CTRV
state components, so the unscented transform is exact for it.

These are designed to be passed to
:func:`~trackjax.estimation.predict_measurement` as the ``measurement_fn``
and ``R`` arguments.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from trackjax.config import get_dtype


def lidar_measurement(state: ArrayLike) -> Array:
    """Project a CTRV state onto the lidar measurement space.

    Args:
        state: State vector of shape ``(n,)`` where ``n >= 2``. The first
            two elements are interpreted as position ``[px, py]``.

    Returns:
        jax.Array: Position vector of shape ``(2,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from trackjax.sensor_models import lidar_measurement

        state = jnp.array([1.0, 2.0, 3.0, 0.1, 0.0])
        z = lidar_measurement(state)  # [1.0, 2.0]
        ```
    """
    dtype = get_dtype()
    state = jnp.asarray(state, dtype=dtype)
    return state[:2]


def lidar_noise(std_px: float, std_py: float) -> Array:
    """Construct the lidar measurement noise covariance.

    Args:
        std_px: Standard deviation of the x position fix [m].
        std_py: Standard deviation of the y position fix [m].

    Returns:
        jax.Array: Diagonal noise covariance matrix of shape ``(2, 2)``.

    Examples:
        ```python
        from trackjax.sensor_models import lidar_noise

        R = lidar_noise(0.15, 0.15)
        # R = [[0.0225, 0], [0, 0.0225]]
        ```
    """
    dtype = get_dtype()
    return jnp.diag(jnp.array([std_px**2, std_py**2], dtype=dtype))
