"""Shared fixtures for attitude estimation tests."""

from __future__ import annotations

import math
from pathlib import Path

import pytest

from attitude_estimation import Sample


GRAVITY_LSB = 16384.0  # MPU6050 +/-2g
GYRO_LSB_PER_DPS = 131.0
TICK_US = 10_000       # 0.01 s

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def sample_for(
    roll_deg: float = 0.0,
    pitch_deg: float = 0.0,
    roll_rate_dps: float = 0.0,
    pitch_rate_dps: float = 0.0,
    timestamp_us: int = 0,
    temperature_raw: float | None = None,
) -> Sample:
    """Static-attitude sample in raw counts (pitch-restricted conventions)."""
    roll = math.radians(roll_deg)
    pitch = math.radians(pitch_deg)
    return Sample(
        accel_x=-math.sin(pitch) * GRAVITY_LSB,
        accel_y=math.sin(roll) * math.cos(pitch) * GRAVITY_LSB,
        accel_z=math.cos(roll) * math.cos(pitch) * GRAVITY_LSB,
        gyro_x=roll_rate_dps * GYRO_LSB_PER_DPS,
        gyro_y=pitch_rate_dps * GYRO_LSB_PER_DPS,
        gyro_z=0.0,
        timestamp_us=timestamp_us,
        temperature_raw=temperature_raw,
    )


@pytest.fixture
def make_sample():
    """Factory building samples for a given static attitude."""
    return sample_for


@pytest.fixture
def estimator_params_path() -> Path:
    """Path to the default estimator YAML file."""
    return PROJECT_ROOT / 'config' / 'estimator_params.yaml'
