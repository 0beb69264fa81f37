"""Two-state Kalman filter for one angle axis.

State vector x = [angle, gyro_bias]. The gyroscope rate is treated as a
control input and the accelerometer angle as the measurement:

    predict:  angle += dt * (rate - bias)
              P = F P F^T + Q dt,   F = [[1, -dt], [0, 1]]
    update:   S = P00 + R
              K = [P00 / S, P10 / S]
              y = angle_measured - angle
              x += K * y
              P = (I - K H) P,      H = [1, 0]

The covariance propagation is written out element-wise (constant time, no
matrix products) following the TKJ Electronics formulation.
"""

import math

import numpy as np

from attitude_estimation.errors import InvalidTimestepError, NonFiniteInputError
from attitude_estimation._internal.validation import (
    all_finite,
    validate_positive,
    validate_non_negative,
)


class AngleKalmanFilter:
    """Angle + gyro bias Kalman filter.

    Call set_angle() once with a trusted accelerometer angle before the
    first update(); the filter otherwise starts at 0 degrees.

    Attributes:
        angle_deg: Current filtered angle
        bias_dps: Current gyro bias estimate
        rate_dps: Last unbiased rate (measured rate minus bias)
        error_covariance: Copy of the 2x2 error covariance matrix P
    """

    def __init__(
        self,
        angle_process_noise: float = 0.001,
        bias_process_noise: float = 0.003,
        measurement_noise: float = 0.03,
    ) -> None:
        """Initialize the filter.

        Args:
            angle_process_noise: Q_angle, angle process noise variance
            bias_process_noise: Q_bias, gyro bias process noise variance
            measurement_noise: R, accelerometer angle measurement variance
        """
        validate_non_negative(angle_process_noise, 'angle_process_noise')
        validate_non_negative(bias_process_noise, 'bias_process_noise')
        validate_positive(measurement_noise, 'measurement_noise')

        self._q_angle = angle_process_noise
        self._q_bias = bias_process_noise
        self._r_measure = measurement_noise

        self._angle = 0.0
        self._bias = 0.0
        self._rate = 0.0
        self._p = np.zeros((2, 2))

    def set_angle(self, angle_deg: float) -> None:
        """Re-seed the angle and zero the error covariance.

        The bias estimate is kept.

        Raises:
            NonFiniteInputError: If angle_deg is NaN or infinite
        """
        if not math.isfinite(angle_deg):
            raise NonFiniteInputError(f"angle_deg must be finite, got {angle_deg}")
        self._angle = float(angle_deg)
        self._p[:] = 0.0

    def update(
        self,
        measured_angle_deg: float,
        measured_rate_dps: float,
        timestep_s: float,
    ) -> float:
        """Run one predict/update cycle.

        Args:
            measured_angle_deg: Accelerometer angle in degrees
            measured_rate_dps: Gyroscope rate in degrees per second
            timestep_s: Time since the previous update in seconds

        Returns:
            Filtered angle in degrees

        Raises:
            InvalidTimestepError: If timestep_s is not positive and finite
            NonFiniteInputError: If angle or rate is NaN or infinite
        """
        if not (math.isfinite(timestep_s) and timestep_s > 0):
            raise InvalidTimestepError(timestep_s)
        if not all_finite(measured_angle_deg, measured_rate_dps):
            raise NonFiniteInputError(
                f"Kalman inputs must be finite, got angle={measured_angle_deg}, "
                f"rate={measured_rate_dps}"
            )

        dt = timestep_s
        p = self._p

        # Predict
        self._rate = measured_rate_dps - self._bias
        self._angle += dt * self._rate

        p[0, 0] += dt * (dt * p[1, 1] - p[0, 1] - p[1, 0] + self._q_angle)
        p[0, 1] -= dt * p[1, 1]
        p[1, 0] -= dt * p[1, 1]
        p[1, 1] += self._q_bias * dt

        # Innovation
        innovation_variance = p[0, 0] + self._r_measure
        gain_angle = p[0, 0] / innovation_variance
        gain_bias = p[1, 0] / innovation_variance

        # Update
        residual = measured_angle_deg - self._angle
        self._angle += gain_angle * residual
        self._bias += gain_bias * residual

        # Covariance correction uses the pre-update first row
        p00 = p[0, 0]
        p01 = p[0, 1]
        p[0, 0] -= gain_angle * p00
        p[0, 1] -= gain_angle * p01
        p[1, 0] -= gain_bias * p00
        p[1, 1] -= gain_bias * p01

        return self._angle

    @property
    def angle_deg(self) -> float:
        """Current filtered angle in degrees."""
        return self._angle

    @property
    def bias_dps(self) -> float:
        """Current gyro bias estimate in degrees per second."""
        return self._bias

    @property
    def rate_dps(self) -> float:
        """Unbiased rate from the last update."""
        return self._rate

    @property
    def error_covariance(self) -> np.ndarray:
        """Copy of the error covariance matrix P."""
        return self._p.copy()

    @property
    def measurement_noise(self) -> float:
        return self._r_measure

    @property
    def angle_process_noise(self) -> float:
        return self._q_angle

    @property
    def bias_process_noise(self) -> float:
        return self._q_bias
