"""
trackjax is a minimal unscented Kalman filter for lidar/radar object tracking implemented in JAX.
"""

from .constants import (
    N_X,
    N_AUG,
    US2S,
    YAW_RATE_EPSILON,
    CHI2_95_2DOF,
    CHI2_95_3DOF,
)

from .config import set_dtype, get_dtype

from .errors import (
    TrackingError,
    ConfigurationError,
    OutOfOrderMeasurementError,
    NumericalError,
    CovarianceNotPositiveDefiniteError,
    SingularInnovationCovarianceError,
)

from .utils import wrap_angle

from .estimation import (
    FilterState,
    FilterResult,
    augmented_sigma_points,
    sigma_points,
    ukf_predict,
    ukf_update,
)

from .motion_models import ctrv_propagate

from .sensor_models import (
    lidar_measurement,
    lidar_noise,
    radar_measurement,
    radar_noise,
)

from .tracking import (
    SensorType,
    Measurement,
    TrackState,
    EstimatorConfig,
    Estimator,
    new_track,
    process_measurement,
)

from .evaluation import rmse, state_to_cartesian, nis_exceedance_fraction
