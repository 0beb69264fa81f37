"""Unit tests for the angle Kalman filter."""

import math

import numpy as np
import pytest

from attitude_estimation import (
    AngleKalmanFilter,
    InvalidTimestepError,
    NonFiniteInputError,
)


@pytest.fixture
def kalman():
    """Filter with the default MPU6050 tuning."""
    return AngleKalmanFilter(
        angle_process_noise=0.001,
        bias_process_noise=0.003,
        measurement_noise=0.03,
    )


class TestSetAngle:
    """Tests for set_angle."""

    def test_sets_angle_and_zeroes_covariance(self, kalman):
        """Test that set_angle re-seeds angle and clears P."""
        for _ in range(10):
            kalman.update(5.0, 1.0, 0.01)
        assert np.any(kalman.error_covariance != 0.0)

        kalman.set_angle(42.0)

        assert kalman.angle_deg == 42.0
        assert np.all(kalman.error_covariance == 0.0)

    def test_keeps_bias(self, kalman):
        """Test that re-seeding does not discard the bias estimate."""
        for _ in range(200):
            kalman.update(0.0, 3.0, 0.01)
        bias = kalman.bias_dps

        kalman.set_angle(10.0)
        assert kalman.bias_dps == bias

    def test_non_finite_raises(self, kalman):
        """Test that NaN seed angle is rejected."""
        with pytest.raises(NonFiniteInputError):
            kalman.set_angle(float('nan'))


class TestUpdate:
    """Tests for update."""

    @pytest.mark.parametrize('initial_angle', [-170.0, -45.0, 0.0, 12.5, 89.9, 179.0])
    @pytest.mark.parametrize('timestep', [1e-4, 0.01, 0.5])
    def test_zero_innovation_fixed_point(self, kalman, initial_angle, timestep):
        """Test that a matching measurement with zero rate leaves the angle unchanged."""
        kalman.set_angle(initial_angle)
        angle = kalman.update(initial_angle, 0.0, timestep)
        assert angle == pytest.approx(initial_angle, abs=1e-12)

    def test_first_two_updates_match_hand_calculation(self):
        """Test predict/update equations, including covariance update order."""
        q_angle, q_bias, r = 0.001, 0.003, 0.03
        dt = 0.1
        kalman = AngleKalmanFilter(q_angle, q_bias, r)
        kalman.set_angle(0.0)

        # First update: P starts at zero
        p00 = dt * q_angle
        p11 = q_bias * dt
        k0 = p00 / (p00 + r)
        angle_1 = k0 * 1.0
        p00 -= k0 * p00

        assert kalman.update(1.0, 0.0, dt) == pytest.approx(angle_1)
        assert kalman.bias_dps == 0.0
        assert kalman.error_covariance[0, 0] == pytest.approx(p00)
        assert kalman.error_covariance[1, 1] == pytest.approx(p11)

        # Second update: off-diagonal terms appear
        p00 += dt * (dt * p11 + q_angle)
        p01 = -dt * p11
        p10 = -dt * p11
        p11 += q_bias * dt
        s = p00 + r
        k0, k1 = p00 / s, p10 / s
        residual = 1.0 - angle_1
        angle_2 = angle_1 + k0 * residual
        bias_2 = k1 * residual
        expected_p = np.array([
            [p00 - k0 * p00, p01 - k0 * p01],
            [p10 - k1 * p00, p11 - k1 * p01],
        ])

        assert kalman.update(1.0, 0.0, dt) == pytest.approx(angle_2)
        assert kalman.bias_dps == pytest.approx(bias_2)
        np.testing.assert_allclose(kalman.error_covariance, expected_p, rtol=1e-12)

    def test_converges_to_constant_measurement(self, kalman):
        """Test that the angle converges to a repeated measurement."""
        kalman.set_angle(0.0)
        for _ in range(3000):
            angle = kalman.update(10.0, 0.0, 0.01)
        assert angle == pytest.approx(10.0, abs=0.05)

    def test_estimates_constant_gyro_bias(self, kalman):
        """Test that a constant rate offset is absorbed into the bias state."""
        kalman.set_angle(0.0)
        for _ in range(3000):
            angle = kalman.update(0.0, 2.0, 0.01)

        assert kalman.bias_dps == pytest.approx(2.0, abs=0.05)
        assert kalman.rate_dps == pytest.approx(0.0, abs=0.05)
        assert angle == pytest.approx(0.0, abs=0.1)

    def test_variance_non_negative_and_bounded(self, kalman):
        """Test that P00 stays in [0, R) and settles for repeated measurements."""
        kalman.set_angle(5.0)
        variances = []
        for _ in range(2000):
            kalman.update(5.0, 0.0, 0.01)
            variances.append(kalman.error_covariance[0, 0])

        variances = np.array(variances)
        assert np.all(variances >= 0.0)
        assert np.all(variances < kalman.measurement_noise)
        assert abs(variances[-1] - variances[-2]) < 1e-12

    def test_variance_stays_zero_without_process_noise(self):
        """Test that P00 never grows when no process noise is injected."""
        kalman = AngleKalmanFilter(0.0, 0.0, 0.03)
        kalman.set_angle(1.0)
        previous = kalman.error_covariance[0, 0]
        for _ in range(100):
            kalman.update(1.0, 0.0, 0.01)
            current = kalman.error_covariance[0, 0]
            assert 0.0 <= current <= previous
            previous = current

    @pytest.mark.parametrize('timestep', [0.0, -0.01, float('nan'), float('inf')])
    def test_invalid_timestep_raises_without_mutation(self, kalman, timestep):
        """Test that bad timesteps are rejected before any state change."""
        kalman.set_angle(3.0)
        kalman.update(3.5, 1.0, 0.01)
        angle, bias = kalman.angle_deg, kalman.bias_dps
        covariance = kalman.error_covariance

        with pytest.raises(InvalidTimestepError):
            kalman.update(4.0, 1.0, timestep)

        assert kalman.angle_deg == angle
        assert kalman.bias_dps == bias
        np.testing.assert_array_equal(kalman.error_covariance, covariance)

    @pytest.mark.parametrize('angle,rate', [
        (float('nan'), 0.0),
        (0.0, float('inf')),
        (-math.inf, 0.0),
    ])
    def test_non_finite_input_raises(self, kalman, angle, rate):
        """Test that non-finite measurements are rejected."""
        with pytest.raises(NonFiniteInputError):
            kalman.update(angle, rate, 0.01)
        assert kalman.angle_deg == 0.0


class TestConstruction:
    """Tests for constructor validation."""

    def test_negative_process_noise_raises(self):
        """Test that negative Q is rejected."""
        with pytest.raises(ValueError, match="angle_process_noise must be non-negative"):
            AngleKalmanFilter(angle_process_noise=-0.001)

    def test_zero_measurement_noise_raises(self):
        """Test that R must be positive."""
        with pytest.raises(ValueError, match="measurement_noise must be positive"):
            AngleKalmanFilter(measurement_noise=0.0)

    def test_initial_state(self):
        """Test that a new filter starts at zero."""
        kalman = AngleKalmanFilter()
        assert kalman.angle_deg == 0.0
        assert kalman.bias_dps == 0.0
        assert kalman.error_covariance.shape == (2, 2)
