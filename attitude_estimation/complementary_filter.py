"""Complementary filter for roll/pitch angle estimation.

Fuses an integrated gyroscope angle with an accelerometer angle. The
accelerometer is noisy but drift-free; the gyroscope is smooth but drifts.

Filter equation:
    theta = w * (theta_prev + omega * dt) + (1 - w) * theta_accel

with a fixed gyro weight w (0.93 by default). The filter holds no state of
its own: the caller keeps theta_prev per axis and applies any drift or
crossing correction.
"""

from attitude_estimation._internal.angle_math import complementary_blend
from attitude_estimation._internal.validation import validate_open_unit_interval


class ComplementaryFilter:
    """Fixed-weight complementary filter.

    Attributes:
        gyro_weight: Weight of the integrated gyro angle
        accel_weight: Weight of the accelerometer angle (1 - gyro_weight)
    """

    def __init__(self, gyro_weight: float = 0.93) -> None:
        validate_open_unit_interval(gyro_weight, 'gyro_weight')
        self._gyro_weight = gyro_weight

    def blend(
        self,
        previous_angle_deg: float,
        rate_dps: float,
        timestep_s: float,
        accel_angle_deg: float,
    ) -> float:
        """Compute the next blended angle.

        Args:
            previous_angle_deg: Blended angle from the previous tick
            rate_dps: Gyroscope rate in degrees per second
            timestep_s: Time since the previous tick in seconds
            accel_angle_deg: Accelerometer angle for this tick

        Returns:
            Blended angle in degrees; lies between the gyro-propagated
            angle and the accelerometer angle.
        """
        return complementary_blend(
            previous_angle_deg,
            rate_dps,
            timestep_s,
            accel_angle_deg,
            self._gyro_weight,
        )

    @property
    def gyro_weight(self) -> float:
        return self._gyro_weight

    @property
    def accel_weight(self) -> float:
        return 1.0 - self._gyro_weight
