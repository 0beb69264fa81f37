"""Angle arithmetic shared by the attitude filters.

Accelerometer angle formulas follow Freescale AN3461 (eq. 25/26 for the
pitch-restricted set, eq. 28/29 for the roll-restricted set). All angles are
in degrees and all rates in degrees per second.
"""

import math

RAD_TO_DEG = 180.0 / math.pi


def atan2_deg(numerator: float, denominator: float) -> float:
    """Four-quadrant arctangent in degrees, range [-180, 180]."""
    return math.atan2(numerator, denominator) * RAD_TO_DEG


def atan_over_norm_deg(numerator: float, first: float, second: float) -> float:
    """Compute atan(numerator / sqrt(first^2 + second^2)) in degrees.

    Evaluated through atan2 so that a zero norm yields the +/-90 degree
    limit instead of a division error. Range [-90, 90].
    """
    return math.atan2(numerator, math.hypot(first, second)) * RAD_TO_DEG


def integrate_gyroscope(
    previous_angle_deg: float,
    rate_dps: float,
    timestep_s: float,
) -> float:
    """Integrate a gyroscope rate over one timestep (forward Euler).

    Args:
        previous_angle_deg: Angle at the previous tick
        rate_dps: Angular rate in degrees per second
        timestep_s: Elapsed time in seconds

    Returns:
        Integrated angle in degrees

    Note:
        Smooth but unbounded: any gyro bias accumulates as drift.
    """
    return previous_angle_deg + rate_dps * timestep_s


def complementary_blend(
    previous_angle_deg: float,
    rate_dps: float,
    timestep_s: float,
    accel_angle_deg: float,
    gyro_weight: float,
) -> float:
    """One step of a first-order complementary filter.

    theta = w * (theta_prev + omega * dt) + (1 - w) * theta_accel
    """
    gyro_angle_deg = integrate_gyroscope(previous_angle_deg, rate_dps, timestep_s)
    return gyro_weight * gyro_angle_deg + (1.0 - gyro_weight) * accel_angle_deg


def exceeds(angle_deg: float, limit_deg: float) -> bool:
    """True when |angle| is strictly greater than the limit."""
    return angle_deg < -limit_deg or angle_deg > limit_deg
