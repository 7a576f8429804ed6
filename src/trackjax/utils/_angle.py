"""Angle normalization helpers.

Heading, radar bearing and their residuals all share one wrapping
convention: the half-open interval ``(-pi, pi]``.  The helpers are
JAX-traceable and work elementwise on arrays.
"""

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from trackjax.constants import PI, TWO_PI


def wrap_angle(angle: ArrayLike) -> Array:
    """Wrap an angle into the interval ``(-pi, pi]``.

    Args:
        angle (ArrayLike): Angle in radians. May be any multiple of ``2pi``
            away from the principal interval.

    Returns:
        Angle in radians within ``(-pi, pi]``.

    Examples:
        ```python
        wrap_angle(3.0 * jnp.pi)   # pi
        wrap_angle(-jnp.pi)        # pi
        ```
    """
    angle = jnp.asarray(angle)
    return PI - jnp.mod(PI - angle, TWO_PI)


def wrap_component(vector: ArrayLike, index: int | None) -> Array:
    """Wrap one angular component of a vector (or stack of vectors).

    Args:
        vector (ArrayLike): Array whose last axis holds the vector components.
        index (int | None): Index of the angular component along the last
            axis.  ``None`` returns the input unchanged.

    Returns:
        Array with the ``index`` component wrapped into ``(-pi, pi]``.
    """
    vector = jnp.asarray(vector)
    if index is None:
        return vector
    return vector.at[..., index].set(wrap_angle(vector[..., index]))
