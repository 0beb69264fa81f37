#!/usr/bin/env python3
"""Run the attitude estimator on a synthetic IMU trajectory.

Usage:
    python3 run_simulation.py                      # Gentle roll/pitch sway
    python3 run_simulation.py --flip               # Roll through 180 degrees
    python3 run_simulation.py --bias 2 --plot out.png
"""

import argparse

import numpy as np

from attitude_estimation import AttitudeEstimator, EstimatorConfig
from simulation import SimulationConfig, SyntheticIMU, run_estimator


def build_trajectory(args):
    """Return (roll_deg, pitch_deg) arrays for the requested scenario."""
    n_samples = int(round(args.duration / args.period))
    time_s = np.arange(n_samples) * args.period
    if args.flip:
        roll_deg = np.clip(time_s / args.duration * 360.0, 0.0, 179.0)
        pitch_deg = np.full(n_samples, 10.0)
    else:
        roll_deg = 30.0 * np.sin(2.0 * np.pi * 0.2 * time_s)
        pitch_deg = 20.0 * np.sin(2.0 * np.pi * 0.1 * time_s)
    return roll_deg, pitch_deg


def main():
    parser = argparse.ArgumentParser(description='Run attitude estimator on synthetic data')
    parser.add_argument('--duration', type=float, default=10.0,
                        help='Trajectory duration in seconds')
    parser.add_argument('--period', type=float, default=0.01,
                        help='Sampling period in seconds')
    parser.add_argument('--flip', action='store_true',
                        help='Roll past 90 degrees to exercise crossing resets')
    parser.add_argument('--bias', type=float, default=0.0,
                        help='Constant gyro bias on both axes in deg/s')
    parser.add_argument('--accel-noise', type=float, default=200.0,
                        help='Accelerometer noise std in LSB')
    parser.add_argument('--gyro-noise', type=float, default=20.0,
                        help='Gyro noise std in LSB')
    parser.add_argument('--seed', type=int, default=0,
                        help='Random seed')
    parser.add_argument('--estimator-params', type=str,
                        default='config/estimator_params.yaml',
                        help='Path to estimator parameters YAML')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save a track plot to this path')
    args = parser.parse_args()

    roll_deg, pitch_deg = build_trajectory(args)
    imu = SyntheticIMU(SimulationConfig(
        sampling_period_s=args.period,
        accel_noise_std_lsb=args.accel_noise,
        gyro_noise_std_lsb=args.gyro_noise,
        gyro_bias_dps=(args.bias, args.bias),
        seed=args.seed,
    ))
    samples = imu.generate(roll_deg, pitch_deg)

    estimator = AttitudeEstimator(EstimatorConfig.from_yaml(args.estimator_params))
    result = run_estimator(estimator, samples)

    print(f"Samples: {len(samples)} (rejected {result.rejected_ticks})")
    print(f"Crossing resets: {int(result.crossing_resets.sum())}")
    print("RMS error (deg):")
    for axis, truth in (('roll', roll_deg), ('pitch', pitch_deg)):
        errors = []
        for name in ('raw', 'gyro', 'complementary', 'kalman'):
            rms = np.sqrt(np.mean((result.track(axis, name) - truth) ** 2))
            errors.append(f"{name}={rms:6.2f}")
        print(f"  {axis:5s}  " + "  ".join(errors))

    if args.plot:
        from debug import plot_attitude_tracks
        plot_attitude_tracks(result, roll_deg, pitch_deg, save_path=args.plot)
        print(f"Plot saved to {args.plot}")

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
