"""Hardware interface module for an MPU6050 on a Raspberry Pi.

This module provides the collaborators around the attitude estimator:
- I2C communication with the MPU6050
- Monotonic microsecond clock
- Column-printing output sink
- Polling monitor loop
"""

from .clock import MonotonicClock
from .mpu6050_interface import MPU6050Interface, SMBUS_AVAILABLE
from .output_sink import ColumnPrinter
from .attitude_monitor import AttitudeMonitor, MonitorStats

__all__ = [
    'MonotonicClock',
    'MPU6050Interface',
    'SMBUS_AVAILABLE',
    'ColumnPrinter',
    'AttitudeMonitor',
    'MonitorStats',
]
