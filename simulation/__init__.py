"""Simulation module for offline attitude estimator validation.

Public API:
    - SyntheticIMU: Raw sample generator for roll/pitch trajectories
    - SimulationConfig: Configuration dataclass for synthetic samples
    - SimulationResult: Track histories from a simulated run
    - run_estimator: Feed samples through an estimator and collect tracks
    - TRACK_NAMES: Column order of the track arrays
"""

from simulation.imu_simulation import (
    SyntheticIMU,
    SimulationConfig,
    SimulationResult,
    run_estimator,
    TRACK_NAMES,
)

__all__ = [
    'SyntheticIMU',
    'SimulationConfig',
    'SimulationResult',
    'run_estimator',
    'TRACK_NAMES',
]
