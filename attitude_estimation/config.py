"""Attitude estimator configuration parameters.

Single source of truth for estimator settings.
See config/estimator_params.yaml for parameter values.
"""

from dataclasses import dataclass
from typing import Optional

import yaml

from attitude_estimation.accel_angles import AxisRestriction
from attitude_estimation._internal.validation import (
    validate_positive,
    validate_non_negative,
    validate_open_unit_interval,
)


@dataclass(frozen=True)
class EstimatorConfig:
    """Configuration parameters for the attitude estimator.

    All parameters immutable after construction (frozen=True).
    Defaults match the MPU6050 demo constants.

    Attributes:
        measurement_noise: Kalman measurement variance R (deg^2)
        angle_process_noise: Kalman angle process noise Q_angle
        bias_process_noise: Kalman gyro-bias process noise Q_bias
        complementary_gyro_weight: Weight given to the integrated gyro
            angle in the complementary filter; the accelerometer gets the
            remainder.
        drift_limit_deg: |angle| above which the raw integrated gyro track
            is overridden by the Kalman estimate
        gimbal_threshold_deg: |angle| beyond which the unrestricted axis is
            considered to have crossed the +/-90 degree singularity
        restricted_axis: Axis whose accelerometer angle is confined to
            +/-90 degrees
        gyro_sensitivity_lsb_per_dps: Raw gyro counts per degree/second
        timestamp_wrap_bits: Bit width of a wrapping microsecond counter,
            or None if timestamps never wrap
    """

    measurement_noise: float = 0.03
    angle_process_noise: float = 0.001
    bias_process_noise: float = 0.003
    complementary_gyro_weight: float = 0.93
    drift_limit_deg: float = 180.0
    gimbal_threshold_deg: float = 90.0
    restricted_axis: AxisRestriction = AxisRestriction.PITCH
    gyro_sensitivity_lsb_per_dps: float = 131.0
    timestamp_wrap_bits: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate parameters satisfy constraints."""
        validate_positive(self.measurement_noise, 'measurement_noise')
        validate_non_negative(self.angle_process_noise, 'angle_process_noise')
        validate_non_negative(self.bias_process_noise, 'bias_process_noise')
        validate_open_unit_interval(
            self.complementary_gyro_weight, 'complementary_gyro_weight'
        )
        validate_positive(self.drift_limit_deg, 'drift_limit_deg')
        validate_positive(self.gimbal_threshold_deg, 'gimbal_threshold_deg')
        validate_positive(
            self.gyro_sensitivity_lsb_per_dps, 'gyro_sensitivity_lsb_per_dps'
        )
        if self.timestamp_wrap_bits is not None:
            validate_positive(self.timestamp_wrap_bits, 'timestamp_wrap_bits')

        # Accept 'roll' / 'pitch' strings from YAML or callers
        if not isinstance(self.restricted_axis, AxisRestriction):
            try:
                axis = AxisRestriction(str(self.restricted_axis).lower())
            except ValueError:
                raise ValueError(
                    f"restricted_axis must be 'roll' or 'pitch', "
                    f"got {self.restricted_axis!r}"
                ) from None
            object.__setattr__(self, 'restricted_axis', axis)

    @property
    def complementary_accel_weight(self) -> float:
        """Weight given to the accelerometer angle in the complementary filter."""
        return 1.0 - self.complementary_gyro_weight

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'EstimatorConfig':
        """Load configuration from YAML file.

        Keys missing from the file keep their defaults.

        Args:
            yaml_path: Path to YAML file containing estimator parameters

        Returns:
            EstimatorConfig instance

        Raises:
            FileNotFoundError: If YAML file does not exist
            ValueError: If a parameter is unknown or invalid
        """
        with open(yaml_path, 'r') as file:
            config = yaml.safe_load(file) or {}

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(config) - known)
        if unknown:
            raise ValueError(
                f"Unknown estimator parameters in {yaml_path}: {unknown}"
            )

        return cls(**config)
