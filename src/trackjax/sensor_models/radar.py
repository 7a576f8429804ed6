"""Radar measurement model for object tracking.

A radar returns the polar fix ``[rho, phi, rho_dot]``: range, bearing
measured counter-clockwise from the sensor x-axis, and range rate. The
mapping from the CTRV state is nonlinear:

- ``rho = sqrt(px**2 + py**2)``
- ``phi = atan2(py, px)``
- ``rho_dot = (px * v * cos(yaw) + py * v * sin(yaw)) / rho``

The range rate is undefined for an object exactly at the sensor origin
(``rho == 0``) and evaluates to NaN there. Callers must keep tracked
objects away from the origin.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from trackjax.config import get_dtype


def radar_measurement(state: ArrayLike) -> Array:
    """Map a CTRV state into the radar measurement space.

    Args:
        state: CTRV state ``[px, py, v, yaw, yaw_rate]`` of shape ``(5,)``.

    Returns:
        jax.Array: Radar measurement ``[rho, phi, rho_dot]`` of shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from trackjax.sensor_models import radar_measurement

        state = jnp.array([3.0, 4.0, 5.0, 0.0, 0.0])
        z = radar_measurement(state)  # [5.0, 0.9273, 3.0]
        ```
    """
    dtype = get_dtype()
    state = jnp.asarray(state, dtype=dtype)
    px, py, v, yaw = state[0], state[1], state[2], state[3]

    rho = jnp.sqrt(px * px + py * py)
    phi = jnp.arctan2(py, px)
    rho_dot = (px * v * jnp.cos(yaw) + py * v * jnp.sin(yaw)) / rho

    return jnp.stack([rho, phi, rho_dot])


def radar_noise(std_rho: float, std_phi: float, std_rho_dot: float) -> Array:
    """Construct the radar measurement noise covariance.

    Args:
        std_rho: Range standard deviation [m].
        std_phi: Bearing standard deviation [rad].
        std_rho_dot: Range rate standard deviation [m/s].

    Returns:
        jax.Array: Diagonal noise covariance matrix of shape ``(3, 3)``.
    """
    dtype = get_dtype()
    return jnp.diag(jnp.array([std_rho**2, std_phi**2, std_rho_dot**2], dtype=dtype))


def radar_to_position(z: ArrayLike) -> Array:
    """Convert a radar fix to a Cartesian position.

    Used to seed a track from a first radar measurement. The range rate is
    ignored because a single radial velocity does not determine speed or
    heading.

    Args:
        z: Radar measurement ``[rho, phi, rho_dot]`` of shape ``(3,)``.

    Returns:
        jax.Array: Position ``[rho * cos(phi), rho * sin(phi)]`` of shape
            ``(2,)``.
    """
    dtype = get_dtype()
    z = jnp.asarray(z, dtype=dtype)
    rho, phi = z[0], z[1]
    return jnp.stack([rho * jnp.cos(phi), rho * jnp.sin(phi)])
