"""Sensor samples and per-tick estimator outputs."""

import math
from dataclasses import dataclass
from typing import Optional


# MPU6050 datasheet: T(degC) = raw / 340 + 36.53
TEMPERATURE_SCALE_LSB_PER_C = 340.0
TEMPERATURE_OFFSET_C = 36.53


@dataclass(frozen=True)
class Sample:
    """One raw inertial sample.

    Attributes:
        accel_x: Accelerometer X (signed 16-bit counts)
        accel_y: Accelerometer Y
        accel_z: Accelerometer Z
        gyro_x: Gyroscope X, the roll rate (signed 16-bit counts)
        gyro_y: Gyroscope Y, the pitch rate
        gyro_z: Gyroscope Z (unused; yaw is not estimated)
        timestamp_us: Monotonic capture time in microseconds
        temperature_raw: Raw die temperature register, if read
    """

    accel_x: float
    accel_y: float
    accel_z: float
    gyro_x: float
    gyro_y: float
    gyro_z: float
    timestamp_us: int
    temperature_raw: Optional[float] = None

    def is_finite(self) -> bool:
        """True if no field holds NaN or infinity."""
        values = [
            self.accel_x, self.accel_y, self.accel_z,
            self.gyro_x, self.gyro_y, self.gyro_z,
            self.timestamp_us,
        ]
        if self.temperature_raw is not None:
            values.append(self.temperature_raw)
        return all(math.isfinite(value) for value in values)

    @property
    def temperature_c(self) -> Optional[float]:
        """Die temperature in degrees Celsius, or None if not read."""
        if self.temperature_raw is None:
            return None
        return self.temperature_raw / TEMPERATURE_SCALE_LSB_PER_C + TEMPERATURE_OFFSET_C


@dataclass(frozen=True)
class AxisTrack:
    """The parallel angle estimates for one axis at one tick (degrees).

    Attributes:
        raw_deg: Unfiltered accelerometer (trigonometric) angle
        gyro_deg: Raw integrated gyro angle
        complementary_deg: Complementary filter angle
        kalman_deg: Kalman filter angle
    """

    raw_deg: float
    gyro_deg: float
    complementary_deg: float
    kalman_deg: float

    @classmethod
    def seeded(cls, angle_deg: float) -> 'AxisTrack':
        """All tracks set to the same angle."""
        return cls(
            raw_deg=angle_deg,
            gyro_deg=angle_deg,
            complementary_deg=angle_deg,
            kalman_deg=angle_deg,
        )


@dataclass(frozen=True)
class AttitudeOutput:
    """Estimator output for one tick.

    Attributes:
        roll: Roll tracks
        pitch: Pitch tracks
        timestamp_us: Timestamp of the sample that produced this output
        timestep_s: Elapsed time used for this tick (0 on initialization)
        temperature_c: Die temperature, if the sample carried one
        crossing_reset: True if the unrestricted axis was re-seeded from
            the accelerometer this tick
    """

    roll: AxisTrack
    pitch: AxisTrack
    timestamp_us: int
    timestep_s: float
    temperature_c: Optional[float] = None
    crossing_reset: bool = False
