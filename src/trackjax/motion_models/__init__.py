"""Motion models for object tracking.

Available models:

- :func:`ctrv_propagate` -- Constant turn rate and velocity, one augmented sigma point
- :func:`ctrv_propagate_sigma_points` -- The same model mapped over a sigma point set

All functions are compatible with ``jax.jit`` and ``jax.vmap``.
"""

from trackjax.motion_models.ctrv import ctrv_propagate, ctrv_propagate_sigma_points

__all__ = [
    "ctrv_propagate",
    "ctrv_propagate_sigma_points",
]
