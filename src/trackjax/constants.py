"""
The `constants` module defines the fixed dimensions, thresholds and unit
conversions used by the CTRV unscented Kalman filter.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
One full turn in radians. Equal to 2pi. Units: *rad*
"""
TWO_PI = 2.0 * PI

# Time Constants
"""
Constant to convert microseconds to seconds. Units: *s/us*
"""
US2S = 1.0e-6

# Filter Dimensions
"""
Dimension of the CTRV state vector ``[px, py, v, yaw, yaw_rate]``.
"""
N_X = 5

"""
Dimension of the augmented state: the CTRV state plus longitudinal and yaw
acceleration noise.
"""
N_AUG = 7

"""
Index of the heading angle in the CTRV state vector.
"""
YAW_INDEX = 3

"""
Index of the bearing angle in the radar measurement vector ``[rho, phi, rho_dot]``.
"""
BEARING_INDEX = 1

"""
Yaw rate magnitude below which the CTRV model falls back to straight-line
motion. Units: *rad/s*
"""
YAW_RATE_EPSILON = 1.0e-3

# Sensor Noise
"""
Lidar position noise standard deviations supplied by the sensor manufacturer. Units: *m*
"""
STD_LASER_PX = 0.15
STD_LASER_PY = 0.15

"""
Radar range noise standard deviation supplied by the sensor manufacturer. Units: *m*
"""
STD_RADAR_R = 0.3

"""
Radar bearing noise standard deviation supplied by the sensor manufacturer. Units: *rad*
"""
STD_RADAR_PHI = 0.03

"""
Radar range-rate noise standard deviation supplied by the sensor manufacturer. Units: *m/s*
"""
STD_RADAR_RD = 0.3

# Consistency Thresholds
"""
95th percentile of the chi-square distribution with 2 degrees of freedom
(lidar NIS).
"""
CHI2_95_2DOF = 5.991

"""
95th percentile of the chi-square distribution with 3 degrees of freedom
(radar NIS).
"""
CHI2_95_3DOF = 7.815
