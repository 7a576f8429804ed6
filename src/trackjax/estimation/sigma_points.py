"""Sigma point generation and moment recombination.

Implements the unscented transform with the fixed spreading parameter
``lambda = 3 - n``, which places ``2n + 1`` sigma points at
``sqrt(lambda + n) = sqrt(3)`` times the columns of the lower Cholesky
factor. The weights are

- ``w_0 = lambda / (lambda + n)``
- ``w_i = 0.5 / (lambda + n)`` for ``i = 1 .. 2n``

and sum to one for any ``n``. The same weights are used for the mean and
for the covariance.

:func:`augmented_sigma_points` is the generator used by the filter cycle:
it appends the longitudinal and yaw acceleration noise terms to the CTRV
state before factorizing. :func:`sigma_points` builds the plain,
non-augmented set and is kept for diagnostics.

Cholesky factorization is not regularized. A covariance that is not
positive definite produces non-finite sigma points, which the tracking
driver reports as an error.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from trackjax.config import get_dtype
from trackjax.estimation._types import SigmaPoints
from trackjax.utils import wrap_component


def spreading_parameter(n: int) -> float:
    """Return the sigma point spreading parameter ``lambda = 3 - n``."""
    return 3.0 - n


def unscented_weights(n: int) -> Array:
    """Build the unscented weight vector for an ``n``-dimensional state.

    Args:
        n: Dimension of the distribution the sigma points are drawn from.

    Returns:
        jax.Array: Weights of shape ``(2n + 1,)``.

    Examples:
        ```python
        w = unscented_weights(7)
        # w[0] = -4/3, w[1:] = 1/6, sum(w) = 1
        ```
    """
    dtype = get_dtype()
    lam = spreading_parameter(n)
    w0 = jnp.asarray(lam / (lam + n), dtype=dtype)
    wi = jnp.asarray(0.5 / (lam + n), dtype=dtype)
    return jnp.concatenate([w0[None], jnp.full(2 * n, wi, dtype=dtype)])


def _spread(mean: Array, cov: Array) -> Array:
    """Place ``2n + 1`` points around ``mean`` along the Cholesky columns of ``cov``."""
    n = mean.shape[0]
    L = jnp.linalg.cholesky(cov)
    scaled = jnp.sqrt(spreading_parameter(n) + n) * L

    # Columns of L become rows of the offset block
    points_plus = mean[None, :] + scaled.T
    points_minus = mean[None, :] - scaled.T
    return jnp.concatenate([mean[None, :], points_plus, points_minus], axis=0)


def sigma_points(x: ArrayLike, P: ArrayLike) -> SigmaPoints:
    """Generate the non-augmented sigma point set of a distribution.

    Not used by the filter cycle. Useful for inspecting how the current
    belief is represented, and for checking the unscented transform in
    isolation.

    Args:
        x: Mean of shape ``(n,)``.
        P: Covariance of shape ``(n, n)``.

    Returns:
        SigmaPoints: ``2n + 1`` points of shape ``(2n + 1, n)`` and their
            weights.
    """
    dtype = get_dtype()
    x = jnp.asarray(x, dtype=dtype)
    P = jnp.asarray(P, dtype=dtype)
    return SigmaPoints(points=_spread(x, P), weights=unscented_weights(x.shape[0]))


def augment(
    x: ArrayLike,
    P: ArrayLike,
    std_a: float,
    std_yawdd: float,
) -> tuple[Array, Array]:
    """Append the two process noise dimensions to a state and covariance.

    Args:
        x: State mean of shape ``(n,)``.
        P: State covariance of shape ``(n, n)``.
        std_a: Longitudinal acceleration noise standard deviation [m/s^2].
        std_yawdd: Yaw acceleration noise standard deviation [rad/s^2].

    Returns:
        A tuple ``(x_aug, P_aug)`` of shapes ``(n + 2,)`` and
        ``(n + 2, n + 2)``. The noise components of ``x_aug`` are zero and
        ``P_aug`` is block diagonal ``diag(P, std_a**2, std_yawdd**2)``.
    """
    dtype = get_dtype()
    x = jnp.asarray(x, dtype=dtype)
    P = jnp.asarray(P, dtype=dtype)
    n = x.shape[0]

    x_aug = jnp.concatenate([x, jnp.zeros(2, dtype=dtype)])

    Q = jnp.diag(jnp.array([std_a**2, std_yawdd**2], dtype=dtype))
    P_aug = jnp.zeros((n + 2, n + 2), dtype=dtype)
    P_aug = P_aug.at[:n, :n].set(P)
    P_aug = P_aug.at[n:, n:].set(Q)

    return x_aug, P_aug


def augmented_sigma_points(
    x: ArrayLike,
    P: ArrayLike,
    std_a: float,
    std_yawdd: float,
) -> SigmaPoints:
    """Generate sigma points of the noise-augmented state.

    Args:
        x: State mean of shape ``(n,)``.
        P: State covariance of shape ``(n, n)``.
        std_a: Longitudinal acceleration noise standard deviation [m/s^2].
        std_yawdd: Yaw acceleration noise standard deviation [rad/s^2].

    Returns:
        SigmaPoints: ``2(n + 2) + 1`` augmented points of shape
            ``(2(n + 2) + 1, n + 2)`` and their weights. For the CTRV
            state this is 15 points of dimension 7.

    Examples:
        ```python
        import jax.numpy as jnp
        from trackjax.estimation import augmented_sigma_points

        sp = augmented_sigma_points(jnp.zeros(5), jnp.eye(5), 1.0, 0.3)
        sp.points.shape  # (15, 7)
        ```
    """
    x_aug, P_aug = augment(x, P, std_a, std_yawdd)
    return SigmaPoints(points=_spread(x_aug, P_aug), weights=unscented_weights(x_aug.shape[0]))


def recombine(
    points: ArrayLike,
    weights: ArrayLike,
    angle_index: int | None = None,
) -> tuple[Array, Array]:
    """Recover the weighted mean and covariance of a set of sigma points.

    The mean is a plain weighted sum. Deviations from the mean have their
    angular component wrapped into ``(-pi, pi]`` before the weighted outer
    products are accumulated.

    Args:
        points: Sigma points of shape ``(k, m)``.
        weights: Weights of shape ``(k,)``.
        angle_index: Index of the angular component in the ``m``-vector,
            or ``None`` if there is none.

    Returns:
        A tuple ``(mean, cov)`` of shapes ``(m,)`` and ``(m, m)``.
    """
    dtype = get_dtype()
    points = jnp.asarray(points, dtype=dtype)
    weights = jnp.asarray(weights, dtype=dtype)

    mean = jnp.einsum("i,ij->j", weights, points)

    diff = wrap_component(points - mean[None, :], angle_index)
    cov = jnp.einsum("i,ij,ik->jk", weights, diff, diff)

    return mean, cov
