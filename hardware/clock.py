"""Monotonic microsecond clock for timestamping samples."""

import time
from typing import Optional


class MonotonicClock:
    """Microsecond clock backed by time.monotonic_ns().

    Args:
        wrap_bits: If given, timestamps wrap modulo 2**wrap_bits like a
            hardware micros() counter. Pair with
            EstimatorConfig.timestamp_wrap_bits.
    """

    def __init__(self, wrap_bits: Optional[int] = None) -> None:
        if wrap_bits is not None and wrap_bits <= 0:
            raise ValueError(f"wrap_bits must be positive, got {wrap_bits}")
        self._wrap_bits = wrap_bits

    def now_us(self) -> int:
        """Current time in microseconds."""
        now_us = time.monotonic_ns() // 1000
        if self._wrap_bits is not None:
            now_us %= 1 << self._wrap_bits
        return now_us

    @property
    def wrap_bits(self) -> Optional[int]:
        return self._wrap_bits
