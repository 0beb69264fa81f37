"""Roll/pitch attitude estimator.

Each tick takes one raw Sample and produces the parallel angle tracks for
both axes:

1. Reject non-finite samples and non-positive timesteps (no state touched)
2. Convert gyro counts to deg/s and resolve accelerometer angles
3. Unrestricted axis: Kalman update, or a full re-seed from the
   accelerometer once both the measurement and the previous Kalman angle
   are past the gimbal threshold
4. Restricted axis: negate its rate while the unrestricted axis is flipped
   past the threshold, then Kalman update
5. Integrate the raw gyro tracks (with drift override) and blend the
   complementary tracks

The estimator owns all state; the polling loop, clock and I/O belong to the
caller (see hardware.AttitudeMonitor).
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Optional

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
from attitude_estimation.gyro_integrator import RawGyroIntegrator
from attitude_estimation.kalman_filter import AngleKalmanFilter
from attitude_estimation.measurements import AttitudeOutput, AxisTrack, Sample
from attitude_estimation._internal.angle_math import exceeds


logger = logging.getLogger(__name__)

MICROSECONDS_PER_SECOND = 1e6


@dataclass
class _AxisState:
    """Mutable per-axis state carried between ticks."""

    kalman_filter: AngleKalmanFilter
    gyro_deg: float = 0.0
    complementary_deg: float = 0.0
    kalman_deg: float = 0.0

    def seed(self, angle_deg: float) -> None:
        self.kalman_filter.set_angle(angle_deg)
        self.gyro_deg = angle_deg
        self.complementary_deg = angle_deg
        self.kalman_deg = angle_deg

    def track(self, raw_deg: float) -> AxisTrack:
        return AxisTrack(
            raw_deg=raw_deg,
            gyro_deg=self.gyro_deg,
            complementary_deg=self.complementary_deg,
            kalman_deg=self.kalman_deg,
        )


def elapsed_seconds(
    previous_us: int,
    current_us: int,
    wrap_bits: Optional[int] = None,
) -> float:
    """Time between two microsecond timestamps.

    Args:
        previous_us: Earlier timestamp
        current_us: Later timestamp
        wrap_bits: Counter width if the timer wraps around, e.g. 32

    Returns:
        Elapsed seconds. Without wrap_bits a backwards step is returned as
        a negative value for the caller to reject.
    """
    delta_us = current_us - previous_us
    if wrap_bits is not None:
        delta_us %= 1 << wrap_bits
    return delta_us / MICROSECONDS_PER_SECOND


class AttitudeEstimator:
    """Kalman / complementary / raw-gyro roll and pitch estimator.

    Example:
        >>> estimator = AttitudeEstimator(EstimatorConfig())
        >>> estimator.initialize(first_sample)
        >>> output = estimator.step(next_sample)
        >>> output.roll.kalman_deg
    """

    def __init__(self, config: Optional[EstimatorConfig] = None) -> None:
        """Initialize the estimator.

        Args:
            config: Estimator configuration (uses defaults if None)
        """
        self._config = config or EstimatorConfig()

        self._resolver = AccelAngleResolver(self._config.restricted_axis)
        self._complementary = ComplementaryFilter(
            self._config.complementary_gyro_weight
        )
        self._integrator = RawGyroIntegrator(self._config.drift_limit_deg)

        self._axes = {
            AxisRestriction.ROLL: _AxisState(self._make_kalman_filter()),
            AxisRestriction.PITCH: _AxisState(self._make_kalman_filter()),
        }

        self._previous_timestamp_us: Optional[int] = None
        self._last_output: Optional[AttitudeOutput] = None

    def _make_kalman_filter(self) -> AngleKalmanFilter:
        return AngleKalmanFilter(
            angle_process_noise=self._config.angle_process_noise,
            bias_process_noise=self._config.bias_process_noise,
            measurement_noise=self._config.measurement_noise,
        )

    def initialize(self, sample: Sample) -> AttitudeOutput:
        """Seed every track from a trusted sample.

        Args:
            sample: Sample taken with the body at rest

        Returns:
            Output with all tracks equal to the accelerometer angles

        Raises:
            NonFiniteInputError: If the sample contains NaN or infinity
        """
        self._check_finite(sample)
        angles = self._resolver.resolve(sample.accel_x, sample.accel_y, sample.accel_z)

        self._axes[AxisRestriction.ROLL].seed(angles.roll_deg)
        self._axes[AxisRestriction.PITCH].seed(angles.pitch_deg)
        self._previous_timestamp_us = sample.timestamp_us

        self._last_output = AttitudeOutput(
            roll=AxisTrack.seeded(angles.roll_deg),
            pitch=AxisTrack.seeded(angles.pitch_deg),
            timestamp_us=sample.timestamp_us,
            timestep_s=0.0,
            temperature_c=sample.temperature_c,
        )
        return self._last_output

    def step(self, sample: Sample, timestamp_us: Optional[int] = None) -> AttitudeOutput:
        """Process one sample.

        The first call (or the first after reset()) initializes instead.

        Args:
            sample: Raw sensor sample
            timestamp_us: Overrides sample.timestamp_us when given

        Returns:
            Angle tracks for both axes

        Raises:
            NonFiniteInputError: Sample contains NaN or infinity
            InvalidTimestepError: Elapsed time is not positive and finite
        """
        if timestamp_us is not None:
            sample = replace(sample, timestamp_us=timestamp_us)

        if not self.is_initialized:
            return self.initialize(sample)

        # Validate everything before any filter state changes
        self._check_finite(sample)
        timestep_s = elapsed_seconds(
            self._previous_timestamp_us,
            sample.timestamp_us,
            self._config.timestamp_wrap_bits,
        )
        if not (math.isfinite(timestep_s) and timestep_s > 0):
            raise InvalidTimestepError(timestep_s)

        sensitivity = self._config.gyro_sensitivity_lsb_per_dps
        rates = {
            AxisRestriction.ROLL: sample.gyro_x / sensitivity,
            AxisRestriction.PITCH: sample.gyro_y / sensitivity,
        }
        angles = self._resolver.resolve(sample.accel_x, sample.accel_y, sample.accel_z)

        restricted_axis = self._resolver.restricted_axis
        unrestricted_axis = self._resolver.unrestricted_axis
        restricted = self._axes[restricted_axis]
        unrestricted = self._axes[unrestricted_axis]

        # Both coupling decisions read the previous tick's Kalman angle
        threshold = self._config.gimbal_threshold_deg
        unrestricted_flipped = exceeds(unrestricted.kalman_deg, threshold)

        unrestricted_angle = angles.for_axis(unrestricted_axis)
        crossing_reset = (
            exceeds(unrestricted_angle, threshold) and unrestricted_flipped
        )
        if crossing_reset:
            logger.debug(
                "%s crossed +/-%.0f deg (measured %.1f), re-seeding",
                unrestricted_axis.value, threshold, unrestricted_angle,
            )
            unrestricted.seed(unrestricted_angle)
        else:
            unrestricted.kalman_deg = unrestricted.kalman_filter.update(
                unrestricted_angle, rates[unrestricted_axis], timestep_s
            )

        # The restricted axis reverses direction while the body is inverted
        if unrestricted_flipped:
            rates[restricted_axis] = -rates[restricted_axis]

        restricted.kalman_deg = restricted.kalman_filter.update(
            angles.for_axis(restricted_axis), rates[restricted_axis], timestep_s
        )

        for axis, state in self._axes.items():
            if crossing_reset and axis is unrestricted_axis:
                continue
            self._advance_tracks(state, rates[axis], timestep_s, angles.for_axis(axis))

        self._previous_timestamp_us = sample.timestamp_us
        self._last_output = AttitudeOutput(
            roll=self._axes[AxisRestriction.ROLL].track(angles.roll_deg),
            pitch=self._axes[AxisRestriction.PITCH].track(angles.pitch_deg),
            timestamp_us=sample.timestamp_us,
            timestep_s=timestep_s,
            temperature_c=sample.temperature_c,
            crossing_reset=crossing_reset,
        )
        return self._last_output

    def _advance_tracks(
        self,
        state: _AxisState,
        rate_dps: float,
        timestep_s: float,
        accel_angle_deg: float,
    ) -> None:
        gyro_deg = self._integrator.integrate(state.gyro_deg, rate_dps, timestep_s)
        state.gyro_deg = self._integrator.correct_drift(gyro_deg, state.kalman_deg)
        state.complementary_deg = self._complementary.blend(
            state.complementary_deg, rate_dps, timestep_s, accel_angle_deg
        )

    @staticmethod
    def _check_finite(sample: Sample) -> None:
        if not sample.is_finite():
            raise NonFiniteInputError(f"Sample contains non-finite values: {sample}")

    def estimate_stream(self, samples: Iterable[Sample]) -> Iterator[AttitudeOutput]:
        """Yield one output per accepted sample.

        Rejected ticks are logged and skipped; the stream continues with
        the next sample.

        Args:
            samples: Iterable of raw samples, e.g. a sensor generator

        Yields:
            AttitudeOutput for every accepted sample
        """
        for sample in samples:
            try:
                yield self.step(sample)
            except AttitudeEstimationError as e:
                logger.warning("Rejected sample at %s us: %s", sample.timestamp_us, e)

    def reset(self) -> None:
        """Forget all state; the next step() re-initializes."""
        for state in self._axes.values():
            state.kalman_filter = self._make_kalman_filter()
            state.gyro_deg = 0.0
            state.complementary_deg = 0.0
            state.kalman_deg = 0.0
        self._previous_timestamp_us = None
        self._last_output = None

    def resolve_angles(self, sample: Sample) -> AccelAngles:
        """Accelerometer angles for a sample, without touching any state."""
        return self._resolver.resolve(sample.accel_x, sample.accel_y, sample.accel_z)

    @property
    def config(self) -> EstimatorConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        """Whether the estimator has been seeded with a first sample."""
        return self._previous_timestamp_us is not None

    @property
    def last_output(self) -> Optional[AttitudeOutput]:
        return self._last_output

    @property
    def roll_filter(self) -> AngleKalmanFilter:
        return self._axes[AxisRestriction.ROLL].kalman_filter

    @property
    def pitch_filter(self) -> AngleKalmanFilter:
        return self._axes[AxisRestriction.PITCH].kalman_filter

    @property
    def restricted_axis(self) -> AxisRestriction:
        return self._resolver.restricted_axis
