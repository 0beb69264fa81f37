#!/usr/bin/env python3
"""Main entry point to stream roll/pitch estimates from an MPU6050.

Prints, per tick, the accelerometer, raw gyro, complementary and Kalman
angles for roll and pitch, plus the sensor temperature.

Examples:
    # Default: pitch restricted to +/-90 degrees, run until Ctrl+C
    python run_attitude.py

    # Restrict roll instead of pitch
    python run_attitude.py --restrict roll

    # Sensor at 0x69 on bus 0, stop after 30 seconds
    python run_attitude.py --bus 0 --address 0x69 --duration 30
"""

import argparse
import dataclasses
import logging
import sys

from attitude_estimation import AttitudeEstimator, AxisRestriction, EstimatorConfig
from hardware import AttitudeMonitor, ColumnPrinter, MonotonicClock, MPU6050Interface


def parse_args():
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='MPU6050 Kalman / complementary roll and pitch monitor',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    # Hardware parameters
    parser.add_argument(
        '--bus',
        type=int,
        default=1,
        help='I2C bus number (default: 1)'
    )
    parser.add_argument(
        '--address',
        type=lambda x: int(x, 0),  # Support 0x68 hex notation
        default=0x68,
        help='MPU6050 I2C address (default: 0x68)'
    )

    # Estimator parameters
    parser.add_argument(
        '--estimator-params',
        type=str,
        default='config/estimator_params.yaml',
        help='Path to estimator parameters YAML'
    )
    parser.add_argument(
        '--restrict',
        choices=['roll', 'pitch'],
        default=None,
        help='Axis restricted to +/-90 degrees (overrides the YAML file)'
    )

    # Loop parameters
    parser.add_argument(
        '--loop-delay',
        type=float,
        default=0.005,
        help='Pause after each tick in seconds (default: 0.005)'
    )
    parser.add_argument(
        '--duration',
        type=float,
        default=None,
        help='Run duration in seconds (default: run until Ctrl+C)'
    )
    parser.add_argument(
        '--header-repeat',
        type=int,
        default=30,
        help='Lines between repeated column headers (default: 30)'
    )

    # Logging
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args()


def load_config(args) -> EstimatorConfig:
    """Load estimator configuration and apply command-line overrides."""
    config = EstimatorConfig.from_yaml(args.estimator_params)
    if args.restrict is not None:
        config = dataclasses.replace(
            config, restricted_axis=AxisRestriction(args.restrict)
        )
    return config


def main():
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        print(f"✗ Failed to load estimator configuration: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Restricted axis: {config.restricted_axis.value} (+/-90 deg)", file=sys.stderr)
    print(f"Connecting to MPU6050 on I2C bus {args.bus} address 0x{args.address:02X}...",
          file=sys.stderr)
    try:
        sensor = MPU6050Interface(
            bus=args.bus,
            address=args.address,
            clock=MonotonicClock(wrap_bits=config.timestamp_wrap_bits),
        )
    except (ImportError, OSError) as e:
        print(f"✗ Failed to connect to MPU6050: {e}", file=sys.stderr)
        print("\nTroubleshooting:", file=sys.stderr)
        print("  - Check I2C is enabled: sudo raspi-config > Interface Options > I2C",
              file=sys.stderr)
        print("  - Test I2C detection: sudo i2cdetect -y 1", file=sys.stderr)
        sys.exit(1)

    monitor = AttitudeMonitor(
        sensor=sensor,
        estimator=AttitudeEstimator(config),
        sink=ColumnPrinter(stream=sys.stdout, header_repeat=args.header_repeat),
        loop_delay_s=args.loop_delay,
    )

    try:
        stats = monitor.run(duration_s=args.duration)
        print(f"\n{stats.ticks} ticks, {stats.rejected_ticks} rejected, "
              f"{stats.skipped_reads} failed reads", file=sys.stderr)
    except RuntimeError as e:
        print(f"\n✗ {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        sensor.close()


if __name__ == '__main__':
    main()
