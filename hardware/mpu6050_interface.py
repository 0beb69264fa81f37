"""I2C communication interface for the InvenSense MPU6050.

This module provides low-level I2C access to the MPU6050 6-axis IMU:
- Wake the device from its power-on sleep state
- Burst-read accelerometer, temperature and gyroscope registers
- Stamp each reading with a monotonic microsecond clock

The Raspberry Pi is the I2C master; the MPU6050 sits at 0x68 (AD0 low).
"""

import logging
import struct
import time
from typing import Any, Optional

try:
    from smbus2 import SMBus
    SMBUS_AVAILABLE = True
except ImportError:
    SMBUS_AVAILABLE = False
    SMBus = None

from attitude_estimation import Sample
from hardware.clock import MonotonicClock


logger = logging.getLogger(__name__)

# I2C Device Addresses
MPU6050_ADDRESS = 0x68       # AD0 low (0x69 when high)
DEFAULT_I2C_BUS = 1          # Raspberry Pi I2C bus 1

# MPU6050 Register Addresses
REGISTER_SAMPLE_RATE = 0x19      # SMPLRT_DIV
REGISTER_ACCEL_XOUT_H = 0x3B     # Start of 14-byte data block
REGISTER_TEMP_OUT_H = 0x41
REGISTER_GYRO_XOUT_H = 0x43
REGISTER_POWER_MANAGEMENT = 0x6B  # PWR_MGMT_1
SLEEP_MODE_DISABLED = 0x00

STABILIZE_DELAY_S = 0.15


class MPU6050Interface:
    """Sensor source reading raw samples from an MPU6050.

    Example:
        >>> with MPU6050Interface(bus=1) as sensor:
        ...     sample = sensor.read_sample()
    """

    # Data block layout from ACCEL_XOUT_H: accel(6) + temp(2) + gyro(6)
    DATA_BLOCK_SIZE = 14
    DATA_BLOCK_FORMAT = '>hhhhhhh'

    def __init__(
        self,
        bus: int = DEFAULT_I2C_BUS,
        address: int = MPU6050_ADDRESS,
        clock: Optional[MonotonicClock] = None,
        smbus: Optional[Any] = None,
    ) -> None:
        """Open the I2C bus and wake the sensor.

        Args:
            bus: I2C bus number (default 1 for Raspberry Pi)
            address: MPU6050 I2C address (default 0x68)
            clock: Microsecond clock used to stamp samples
            smbus: Already-open SMBus-like object; overrides bus

        Raises:
            ImportError: If smbus2 is not installed and no smbus is given
            IOError: If the bus cannot be opened or the wake write fails
        """
        if smbus is None:
            if not SMBUS_AVAILABLE:
                raise ImportError(
                    "smbus2 not installed. Install with: pip install smbus2"
                )
            smbus = SMBus(bus)

        self._bus_num = bus
        self._address = address
        self._bus = smbus
        self._clock = clock or MonotonicClock()

        self._bus.write_byte_data(
            self._address, REGISTER_POWER_MANAGEMENT, SLEEP_MODE_DISABLED
        )
        time.sleep(STABILIZE_DELAY_S)

        logger.info("MPU6050 ready on bus %s at 0x%02X", bus, address)

    def read_sample(self) -> Optional[Sample]:
        """Read one raw sample.

        Returns:
            Sample with raw signed counts and a clock timestamp, or None if
            the bus transaction failed
        """
        try:
            data = self._bus.read_i2c_block_data(
                self._address, REGISTER_ACCEL_XOUT_H, self.DATA_BLOCK_SIZE
            )
        except IOError as e:
            logger.warning("MPU6050 read error: %s", e)
            return None

        timestamp_us = self._clock.now_us()
        (accel_x, accel_y, accel_z,
         temperature_raw,
         gyro_x, gyro_y, gyro_z) = struct.unpack(self.DATA_BLOCK_FORMAT, bytes(data))

        return Sample(
            accel_x=float(accel_x),
            accel_y=float(accel_y),
            accel_z=float(accel_z),
            gyro_x=float(gyro_x),
            gyro_y=float(gyro_y),
            gyro_z=float(gyro_z),
            timestamp_us=timestamp_us,
            temperature_raw=float(temperature_raw),
        )

    def read_word(self, register_h: int) -> int:
        """Read one big-endian signed 16-bit register pair."""
        high = self._bus.read_byte_data(self._address, register_h)
        low = self._bus.read_byte_data(self._address, register_h + 1)
        value = (high << 8) | low
        if value >= 0x8000:
            value -= 0x10000
        return value

    def close(self) -> None:
        """Close the I2C connection."""
        self._bus.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    @property
    def address(self) -> int:
        return self._address
