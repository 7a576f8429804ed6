"""Tests for the trackjax.estimation UKF predict and update functions.

Tests cover:
- FilterState, SigmaPoints, MeasurementPrediction and FilterResult types
- UKF predict with the CTRV model (zero step, straight line, growth, wrap)
- Measurement prediction for lidar and radar
- UKF update (zero innovation, correction direction, bearing seam)
- JIT compatibility and jax.lax.scan composition
"""

import jax
import jax.numpy as jnp
import pytest

from trackjax.constants import BEARING_INDEX
from trackjax.estimation import (
    FilterResult,
    FilterState,
    MeasurementPrediction,
    SigmaPoints,
    predict_measurement,
    ukf_predict,
    ukf_update,
)
from trackjax.sensor_models import (
    lidar_measurement,
    lidar_noise,
    radar_measurement,
    radar_noise,
)

# ──────────────────────────────────────────────
# Helper functions
# ──────────────────────────────────────────────


def _state(px=1.0, py=2.0, v=0.5, yaw=0.1, yawd=0.05, p=1.0):
    return FilterState(x=jnp.array([px, py, v, yaw, yawd]), P=p * jnp.eye(5))


def _lidar_step(fs, dt=0.1):
    fs_pred, sigma = ukf_predict(fs, dt, 1.0, 0.3)
    prediction = predict_measurement(sigma, lidar_measurement, lidar_noise(0.15, 0.15))
    return fs_pred, sigma, prediction


# ──────────────────────────────────────────────
# Type tests
# ──────────────────────────────────────────────


class TestTypes:
    def test_filter_state(self):
        fs = _state()
        assert fs.x.shape == (5,)
        assert fs.P.shape == (5, 5)

    def test_sigma_points(self):
        sp = SigmaPoints(points=jnp.zeros((15, 5)), weights=jnp.ones(15) / 15.0)
        assert sp.points.shape == (15, 5)
        assert sp.weights.shape == (15,)

    def test_measurement_prediction(self):
        mp = MeasurementPrediction(
            z_pred=jnp.zeros(2), S=jnp.eye(2), z_sigma=jnp.zeros((15, 2))
        )
        assert mp.z_pred.shape == (2,)
        assert mp.S.shape == (2, 2)

    def test_filter_result(self):
        result = FilterResult(
            state=_state(),
            innovation=jnp.zeros(2),
            innovation_covariance=jnp.eye(2),
            kalman_gain=jnp.zeros((5, 2)),
            nis=jnp.array(0.0),
        )
        assert result.state.x.shape == (5,)
        assert float(result.nis) == pytest.approx(0.0)


# ──────────────────────────────────────────────
# Predict
# ──────────────────────────────────────────────


class TestUKFPredict:
    def test_zero_dt_leaves_belief_unchanged(self):
        """A zero-length step reproduces the mean and covariance."""
        fs = FilterState(x=jnp.array([1.0, 2.0, 0.5, 0.1, 0.05]), P=0.3 * jnp.eye(5))
        fs_pred, _ = ukf_predict(fs, 0.0, 1.0, 0.3)
        assert jnp.allclose(fs_pred.x, fs.x, atol=1e-12)
        assert jnp.allclose(fs_pred.P, fs.P, atol=1e-10)

    def test_straight_line_mean(self):
        """With a tight prior the mean moves along the heading at constant speed."""
        fs = _state(px=0.0, py=0.0, v=2.0, yaw=0.0, yawd=0.0, p=1e-8)
        fs_pred, _ = ukf_predict(fs, 0.5, 1.0, 0.3)
        assert float(fs_pred.x[0]) == pytest.approx(1.0, abs=1e-3)
        assert float(fs_pred.x[1]) == pytest.approx(0.0, abs=1e-3)
        assert float(fs_pred.x[2]) == pytest.approx(2.0, abs=1e-6)

    def test_covariance_grows(self):
        """Process noise inflates the covariance."""
        fs = _state(p=0.1)
        fs_pred, _ = ukf_predict(fs, 0.1, 2.0, 0.5)
        assert float(jnp.trace(fs_pred.P)) > float(jnp.trace(fs.P))

    def test_covariance_symmetric(self):
        fs_pred, _ = ukf_predict(_state(), 0.1, 1.0, 0.3)
        assert jnp.allclose(fs_pred.P, fs_pred.P.T, atol=1e-12)

    def test_predicted_sigma_points(self):
        """Predicted sigma points are unaugmented and keep the weights."""
        _, sigma = ukf_predict(_state(), 0.1, 1.0, 0.3)
        assert sigma.points.shape == (15, 5)
        assert sigma.weights.shape == (15,)
        assert float(jnp.sum(sigma.weights)) == pytest.approx(1.0)

    def test_mean_yaw_wrapped(self):
        """A heading pushed past pi comes back on the negative side."""
        fs = _state(px=0.0, py=0.0, v=1.0, yaw=3.1, yawd=0.5, p=1e-6)
        fs_pred, _ = ukf_predict(fs, 0.1, 0.1, 0.1)
        assert float(fs_pred.x[3]) == pytest.approx(3.15 - 2.0 * jnp.pi, abs=1e-4)
        assert -jnp.pi < float(fs_pred.x[3]) <= jnp.pi


# ──────────────────────────────────────────────
# Measurement prediction
# ──────────────────────────────────────────────


class TestPredictMeasurement:
    def test_lidar_shapes(self):
        _, _, prediction = _lidar_step(_state())
        assert prediction.z_pred.shape == (2,)
        assert prediction.S.shape == (2, 2)
        assert prediction.z_sigma.shape == (15, 2)

    def test_lidar_mean_is_predicted_position(self):
        """Lidar is linear, so the predicted reading is the predicted position."""
        fs_pred, _, prediction = _lidar_step(_state())
        assert jnp.allclose(prediction.z_pred, fs_pred.x[:2], atol=1e-10)

    def test_innovation_covariance_includes_noise(self):
        """S equals the projected position covariance plus R."""
        fs_pred, _, prediction = _lidar_step(_state())
        expected = fs_pred.P[:2, :2] + lidar_noise(0.15, 0.15)
        assert jnp.allclose(prediction.S, expected, atol=1e-10)

    def test_radar_shapes(self):
        _, sigma = ukf_predict(_state(px=5.0, py=3.0), 0.1, 1.0, 0.3)
        prediction = predict_measurement(
            sigma, radar_measurement, radar_noise(0.3, 0.03, 0.3), angle_index=BEARING_INDEX
        )
        assert prediction.z_pred.shape == (3,)
        assert prediction.S.shape == (3, 3)
        assert jnp.allclose(prediction.S, prediction.S.T, atol=1e-12)


# ──────────────────────────────────────────────
# Update
# ──────────────────────────────────────────────


class TestUKFUpdate:
    def test_zero_innovation(self):
        """A reading equal to the prediction leaves the mean unchanged."""
        fs_pred, sigma, prediction = _lidar_step(_state())
        result = ukf_update(fs_pred, sigma, prediction, prediction.z_pred)
        assert jnp.allclose(result.state.x, fs_pred.x, atol=1e-10)
        assert float(result.nis) == pytest.approx(0.0, abs=1e-12)

    def test_moves_toward_measurement(self):
        """The corrected position moves toward the reading and P shrinks."""
        fs_pred, sigma, prediction = _lidar_step(_state())
        z = prediction.z_pred + jnp.array([1.0, 0.0])
        result = ukf_update(fs_pred, sigma, prediction, z)

        assert float(result.state.x[0]) > float(fs_pred.x[0])
        assert float(result.state.x[0]) < float(z[0])
        assert float(jnp.trace(result.state.P)) < float(jnp.trace(fs_pred.P))
        assert float(result.nis) > 0.0

    def test_result_shapes(self):
        fs_pred, sigma, prediction = _lidar_step(_state())
        result = ukf_update(fs_pred, sigma, prediction, jnp.array([1.1, 2.1]))
        assert result.state.x.shape == (5,)
        assert result.state.P.shape == (5, 5)
        assert result.innovation.shape == (2,)
        assert result.innovation_covariance.shape == (2, 2)
        assert result.kalman_gain.shape == (5, 2)
        assert result.nis.shape == ()

    def test_nis_matches_definition(self):
        """NIS equals y^T S^-1 y."""
        fs_pred, sigma, prediction = _lidar_step(_state())
        z = prediction.z_pred + jnp.array([0.3, -0.2])
        result = ukf_update(fs_pred, sigma, prediction, z)
        y = result.innovation
        expected = y @ jnp.linalg.inv(result.innovation_covariance) @ y
        assert float(result.nis) == pytest.approx(float(expected), rel=1e-9)

    def test_covariance_symmetric(self):
        fs_pred, sigma, prediction = _lidar_step(_state())
        result = ukf_update(fs_pred, sigma, prediction, jnp.array([1.2, 1.9]))
        assert jnp.allclose(result.state.P, result.state.P.T, atol=1e-10)

    def test_radar_bearing_seam(self):
        """A bearing reported across the +-pi seam yields a small innovation."""
        fs = FilterState(x=jnp.array([-5.0, 0.05, 1.0, 0.0, 0.0]), P=1e-4 * jnp.eye(5))
        fs_pred, sigma = ukf_predict(fs, 0.1, 0.1, 0.1)
        prediction = predict_measurement(
            sigma, radar_measurement, radar_noise(0.3, 0.03, 0.3), angle_index=BEARING_INDEX
        )
        z = jnp.array([prediction.z_pred[0], -jnp.pi + 0.01, prediction.z_pred[2]])
        result = ukf_update(
            fs_pred, sigma, prediction, z, measurement_angle_index=BEARING_INDEX
        )

        assert abs(float(result.innovation[1])) < 0.1
        assert jnp.all(jnp.isfinite(result.state.x))
        assert float(result.nis) < 10.0
        # The reading places the object just below the x axis
        assert float(result.state.x[1]) < float(fs_pred.x[1])

    def test_yaw_of_updated_state_wrapped(self):
        fs = _state(px=0.0, py=0.0, v=1.0, yaw=3.1, yawd=0.5, p=0.01)
        fs_pred, sigma, prediction = _lidar_step(fs)
        result = ukf_update(fs_pred, sigma, prediction, prediction.z_pred + 0.2)
        assert -jnp.pi < float(result.state.x[3]) <= jnp.pi


# ──────────────────────────────────────────────
# JAX compatibility tests
# ──────────────────────────────────────────────


class TestJAXCompatibility:
    def test_jit_ukf_predict(self):
        """ukf_predict is JIT-compilable."""

        @jax.jit
        def step(x, P, dt):
            return ukf_predict(FilterState(x=x, P=P), dt, 1.0, 0.3)

        fs_pred, sigma = step(jnp.array([1.0, 2.0, 0.5, 0.1, 0.05]), jnp.eye(5), 0.1)
        assert jnp.all(jnp.isfinite(fs_pred.x))
        assert jnp.all(jnp.isfinite(sigma.points))

    def test_jit_predict_and_update(self):
        """A full lidar cycle is JIT-compilable."""
        R = lidar_noise(0.15, 0.15)

        @jax.jit
        def step(x, P, z):
            fs_pred, sigma = ukf_predict(FilterState(x=x, P=P), 0.1, 1.0, 0.3)
            prediction = predict_measurement(sigma, lidar_measurement, R)
            return ukf_update(fs_pred, sigma, prediction, z)

        result = step(jnp.array([1.0, 2.0, 0.5, 0.1, 0.05]), jnp.eye(5), jnp.array([1.1, 2.0]))
        assert jnp.all(jnp.isfinite(result.state.x))
        assert jnp.isfinite(result.nis)

    def test_lax_scan_stationary_target(self):
        """Predict and update compose with jax.lax.scan."""
        R = lidar_noise(0.15, 0.15)
        fs0 = FilterState(x=jnp.array([1.0, 2.0, 0.0, 0.0, 0.0]), P=jnp.eye(5))
        measurements = jnp.tile(jnp.array([1.0, 2.0]), (20, 1))

        def filter_step(fs, z):
            fs_pred, sigma = ukf_predict(fs, 0.1, 0.5, 0.3)
            prediction = predict_measurement(sigma, lidar_measurement, R)
            result = ukf_update(fs_pred, sigma, prediction, z)
            return result.state, result.nis

        final, nis = jax.lax.scan(filter_step, fs0, measurements)
        assert nis.shape == (20,)
        assert jnp.all(jnp.isfinite(nis))
        assert jnp.allclose(final.x[:2], jnp.array([1.0, 2.0]), atol=0.05)
