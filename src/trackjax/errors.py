"""Exceptions raised by the tracking driver.

All exceptions derive from :class:`TrackingError` so callers can catch
every tracker failure in one place. Each also derives from the closest
built-in exception, so ``except ValueError`` keeps working for
configuration and ordering mistakes.
"""


class TrackingError(Exception):
    """Base class for all trackjax errors."""


class ConfigurationError(TrackingError, ValueError):
    """An estimator configuration value is out of range."""


class OutOfOrderMeasurementError(TrackingError, ValueError):
    """A measurement timestamp precedes the last processed timestamp."""


class NumericalError(TrackingError, ArithmeticError):
    """A filter cycle produced a result that cannot be trusted.

    The belief held before the failing measurement is left unchanged.
    """


class CovarianceNotPositiveDefiniteError(NumericalError):
    """The augmented covariance could not be Cholesky factorized."""


class SingularInnovationCovarianceError(NumericalError):
    """The innovation covariance ``S`` is singular or ill-conditioned."""
