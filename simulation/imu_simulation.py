"""Synthetic MPU6050 samples for offline estimator validation.

This module provides:
1. A sample generator turning roll/pitch trajectories into raw counts,
   with optional sensor noise and constant gyro bias
2. A runner that feeds samples through an AttitudeEstimator and collects
   the angle tracks as arrays for analysis and plotting

Gravity is rotated into the body frame with scipy (intrinsic Z-Y-X, zero
yaw), so the accelerometer sees [-sin(pitch), sin(roll)cos(pitch),
cos(roll)cos(pitch)] g at rest. Gyro X/Y are taken as the roll/pitch rates.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from attitude_estimation import (
    AttitudeEstimationError,
    AttitudeEstimator,
    AxisTrack,
    Sample,
)


logger = logging.getLogger(__name__)

TRACK_NAMES = ('raw', 'gyro', 'complementary', 'kalman')

INT16_MIN = -32768
INT16_MAX = 32767


@dataclass
class SimulationConfig:
    """Configuration for synthetic IMU samples.

    Attributes:
        sampling_period_s: Time between samples
        accel_scale_lsb_per_g: Accelerometer counts per g (16384 at +/-2g)
        gyro_sensitivity_lsb_per_dps: Gyro counts per deg/s (131 at +/-250)
        accel_noise_std_lsb: Accelerometer white noise standard deviation
        gyro_noise_std_lsb: Gyro white noise standard deviation
        gyro_bias_dps: Constant (roll, pitch) gyro bias in deg/s
        start_timestamp_us: Timestamp of the first sample
        seed: Random seed for reproducible noise
    """

    sampling_period_s: float = 0.01
    accel_scale_lsb_per_g: float = 16384.0
    gyro_sensitivity_lsb_per_dps: float = 131.0
    accel_noise_std_lsb: float = 0.0
    gyro_noise_std_lsb: float = 0.0
    gyro_bias_dps: Tuple[float, float] = (0.0, 0.0)
    start_timestamp_us: int = 0
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.sampling_period_s <= 0:
            raise ValueError(
                f"sampling_period_s must be positive, got {self.sampling_period_s}"
            )
        if self.accel_noise_std_lsb < 0 or self.gyro_noise_std_lsb < 0:
            raise ValueError("noise standard deviations must be non-negative")


@dataclass
class SimulationResult:
    """Estimator tracks collected over a simulated run.

    Attributes:
        time_s: Sample times relative to the first accepted sample (N,)
        roll_tracks: Roll tracks (N, 4) in TRACK_NAMES order
        pitch_tracks: Pitch tracks (N, 4) in TRACK_NAMES order
        crossing_resets: Per-tick crossing reset flags (N,)
        rejected_ticks: Number of samples the estimator rejected
    """

    time_s: np.ndarray
    roll_tracks: np.ndarray
    pitch_tracks: np.ndarray
    crossing_resets: np.ndarray = field(default_factory=lambda: np.array([], dtype=bool))
    rejected_ticks: int = 0

    def track(self, axis: str, name: str) -> np.ndarray:
        """One track as a 1-D array, e.g. result.track('roll', 'kalman')."""
        if axis not in ('roll', 'pitch'):
            raise ValueError(f"axis must be 'roll' or 'pitch', got {axis!r}")
        if name not in TRACK_NAMES:
            raise ValueError(f"name must be one of {TRACK_NAMES}, got {name!r}")
        tracks = self.roll_tracks if axis == 'roll' else self.pitch_tracks
        return tracks[:, TRACK_NAMES.index(name)]


class SyntheticIMU:
    """Generates raw MPU6050 samples for a given attitude trajectory."""

    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        self._config = config or SimulationConfig()
        self._rng = np.random.default_rng(self._config.seed)

    def gravity_counts(
        self,
        roll_deg: np.ndarray,
        pitch_deg: np.ndarray,
    ) -> np.ndarray:
        """Noise-free accelerometer counts for each attitude, shape (N, 3)."""
        roll_deg = np.atleast_1d(np.asarray(roll_deg, dtype=float))
        pitch_deg = np.atleast_1d(np.asarray(pitch_deg, dtype=float))
        euler_zyx = np.column_stack([np.zeros_like(roll_deg), pitch_deg, roll_deg])
        rotations = Rotation.from_euler('ZYX', euler_zyx, degrees=True)
        gravity_body = rotations.inv().apply([0.0, 0.0, 1.0])
        return np.atleast_2d(gravity_body) * self._config.accel_scale_lsb_per_g

    def generate(
        self,
        roll_deg: Sequence[float],
        pitch_deg: Sequence[float],
    ) -> List[Sample]:
        """Build one sample per trajectory point.

        Args:
            roll_deg: Roll trajectory in degrees (N,)
            pitch_deg: Pitch trajectory in degrees (N,)

        Returns:
            List of N samples spaced by sampling_period_s
        """
        roll_deg = np.asarray(roll_deg, dtype=float)
        pitch_deg = np.asarray(pitch_deg, dtype=float)
        if roll_deg.shape != pitch_deg.shape or roll_deg.ndim != 1:
            raise ValueError(
                f"roll_deg and pitch_deg must be 1-D with equal length, "
                f"got {roll_deg.shape} and {pitch_deg.shape}"
            )

        cfg = self._config
        n_samples = roll_deg.shape[0]

        accel = self.gravity_counts(roll_deg, pitch_deg)
        accel += self._rng.normal(0.0, cfg.accel_noise_std_lsb, accel.shape)

        if n_samples > 1:
            roll_rate_dps = np.gradient(roll_deg, cfg.sampling_period_s)
            pitch_rate_dps = np.gradient(pitch_deg, cfg.sampling_period_s)
        else:
            roll_rate_dps = np.zeros(1)
            pitch_rate_dps = np.zeros(1)

        gyro = np.column_stack([
            roll_rate_dps + cfg.gyro_bias_dps[0],
            pitch_rate_dps + cfg.gyro_bias_dps[1],
            np.zeros(n_samples),
        ]) * cfg.gyro_sensitivity_lsb_per_dps
        gyro += self._rng.normal(0.0, cfg.gyro_noise_std_lsb, gyro.shape)

        accel = np.clip(np.round(accel), INT16_MIN, INT16_MAX)
        gyro = np.clip(np.round(gyro), INT16_MIN, INT16_MAX)

        period_us = cfg.sampling_period_s * 1e6
        return [
            Sample(
                accel_x=float(accel[i, 0]),
                accel_y=float(accel[i, 1]),
                accel_z=float(accel[i, 2]),
                gyro_x=float(gyro[i, 0]),
                gyro_y=float(gyro[i, 1]),
                gyro_z=float(gyro[i, 2]),
                timestamp_us=cfg.start_timestamp_us + int(round(i * period_us)),
            )
            for i in range(n_samples)
        ]

    @property
    def config(self) -> SimulationConfig:
        return self._config


def _track_row(track: AxisTrack) -> Tuple[float, float, float, float]:
    return (track.raw_deg, track.gyro_deg, track.complementary_deg, track.kalman_deg)


def run_estimator(
    estimator: AttitudeEstimator,
    samples: Sequence[Sample],
) -> SimulationResult:
    """Feed samples through the estimator and collect every track.

    The first sample initializes the estimator unless it already is.
    Rejected samples are logged and counted, not recorded.

    Args:
        estimator: Estimator to drive
        samples: Samples in time order

    Returns:
        SimulationResult with one row per accepted sample
    """
    times_us = []
    roll_rows = []
    pitch_rows = []
    resets = []
    rejected = 0

    for sample in samples:
        try:
            output = estimator.step(sample)
        except AttitudeEstimationError as e:
            logger.warning("Simulated sample rejected: %s", e)
            rejected += 1
            continue
        times_us.append(output.timestamp_us)
        roll_rows.append(_track_row(output.roll))
        pitch_rows.append(_track_row(output.pitch))
        resets.append(output.crossing_reset)

    times_us = np.asarray(times_us, dtype=float)
    time_s = (times_us - times_us[0]) / 1e6 if times_us.size else times_us

    return SimulationResult(
        time_s=time_s,
        roll_tracks=np.asarray(roll_rows, dtype=float).reshape(-1, len(TRACK_NAMES)),
        pitch_tracks=np.asarray(pitch_rows, dtype=float).reshape(-1, len(TRACK_NAMES)),
        crossing_resets=np.asarray(resets, dtype=bool),
        rejected_ticks=rejected,
    )
