"""Shared utility functions for trackjax.

Provides the angle normalization used for heading, bearing and residuals.
"""

from trackjax.utils._angle import wrap_angle, wrap_component

__all__ = [
    "wrap_angle",
    "wrap_component",
]
