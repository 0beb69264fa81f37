"""Attitude estimation module for roll/pitch from a 6-axis IMU.

This module fuses accelerometer angles with gyroscope rates and reports
four parallel estimates per axis (accelerometer, raw gyro, complementary,
Kalman) so the filters can be compared side by side.

Public API:
    - EstimatorConfig: Configuration dataclass for estimator parameters
    - AttitudeEstimator: Per-tick roll/pitch estimator
    - AngleKalmanFilter: Angle + gyro bias Kalman filter for one axis
    - ComplementaryFilter: Fixed-weight complementary filter
    - RawGyroIntegrator: Unfiltered gyro integration with drift override
    - AccelAngleResolver: Roll/pitch from accelerometer readings
    - AxisRestriction: Which axis is confined to +/-90 degrees
    - Sample, AxisTrack, AttitudeOutput: Input and output dataclasses
"""

from attitude_estimation.accel_angles import (
    AccelAngleResolver,
    AccelAngles,
    AxisRestriction,
)
from attitude_estimation.complementary_filter import ComplementaryFilter
from attitude_estimation.config import EstimatorConfig
from attitude_estimation.errors import (
    AttitudeEstimationError,
    InvalidTimestepError,
    NonFiniteInputError,
)
from attitude_estimation.estimator import AttitudeEstimator, elapsed_seconds
from attitude_estimation.gyro_integrator import RawGyroIntegrator
from attitude_estimation.kalman_filter import AngleKalmanFilter
from attitude_estimation.measurements import AttitudeOutput, AxisTrack, Sample

__all__ = [
    'AccelAngleResolver',
    'AccelAngles',
    'AxisRestriction',
    'ComplementaryFilter',
    'EstimatorConfig',
    'AttitudeEstimationError',
    'InvalidTimestepError',
    'NonFiniteInputError',
    'AttitudeEstimator',
    'elapsed_seconds',
    'RawGyroIntegrator',
    'AngleKalmanFilter',
    'AttitudeOutput',
    'AxisTrack',
    'Sample',
]
