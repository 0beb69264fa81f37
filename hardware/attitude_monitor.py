"""Polling loop driving the attitude estimator from a live sensor.

This module provides the loop that integrates:
- Sample reads from the sensor collaborator
- AttitudeEstimator ticks
- Output to a sink (console columns by default)
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Protocol

from attitude_estimation import (
    AttitudeEstimationError,
    AttitudeEstimator,
    AttitudeOutput,
    Sample,
)


logger = logging.getLogger(__name__)


class SampleSource(Protocol):
    def read_sample(self) -> Optional[Sample]: ...


class OutputSink(Protocol):
    def write(self, output: AttitudeOutput) -> None: ...


@dataclass
class MonitorStats:
    """Statistics from a monitor run.

    Attributes:
        ticks: Samples accepted by the estimator
        skipped_reads: Sensor reads that returned no sample
        rejected_ticks: Samples rejected by the estimator
        crossing_resets: Ticks where the unrestricted axis was re-seeded
        avg_step_time_ms: Average estimator step time (milliseconds)
        max_step_time_ms: Maximum estimator step time (milliseconds)
    """
    ticks: int = 0
    skipped_reads: int = 0
    rejected_ticks: int = 0
    crossing_resets: int = 0
    avg_step_time_ms: float = 0.0
    max_step_time_ms: float = 0.0


class AttitudeMonitor:
    """Reads samples, runs the estimator and forwards outputs to a sink.

    Example:
        >>> from hardware import MPU6050Interface, ColumnPrinter
        >>> sensor = MPU6050Interface(bus=1)
        >>> monitor = AttitudeMonitor(sensor, AttitudeEstimator(), ColumnPrinter())
        >>> monitor.run(duration_s=10.0)
    """

    def __init__(
        self,
        sensor: SampleSource,
        estimator: AttitudeEstimator,
        sink: OutputSink,
        loop_delay_s: float = 0.005,
    ) -> None:
        """Initialize the monitor.

        Args:
            sensor: Sample source, e.g. MPU6050Interface
            estimator: Estimator to drive
            sink: Receives one AttitudeOutput per accepted tick
            loop_delay_s: Pause after each tick
        """
        if loop_delay_s < 0:
            raise ValueError(f"loop_delay_s must be non-negative, got {loop_delay_s}")

        self.sensor = sensor
        self.estimator = estimator
        self.sink = sink
        self.loop_delay_s = loop_delay_s

        self.stats = MonitorStats()
        self._running = False

    def initialize(self, max_attempts: int = 10) -> AttitudeOutput:
        """Seed the estimator from the first readable sample.

        Raises:
            RuntimeError: If no sample could be read within max_attempts
        """
        for _ in range(max_attempts):
            sample = self.sensor.read_sample()
            if sample is None:
                self.stats.skipped_reads += 1
                continue
            try:
                return self.estimator.initialize(sample)
            except AttitudeEstimationError as e:
                logger.warning("Initial sample rejected: %s", e)
                self.stats.rejected_ticks += 1

        raise RuntimeError(
            f"No usable sample after {max_attempts} attempts"
        )

    def run(
        self,
        duration_s: Optional[float] = None,
        max_ticks: Optional[int] = None,
    ) -> MonitorStats:
        """Execute the polling loop.

        Args:
            duration_s: Run duration in seconds (None = until stopped)
            max_ticks: Stop after this many accepted ticks (None = no limit)

        Returns:
            MonitorStats for the run
        """
        if not self.estimator.is_initialized:
            self.initialize()

        self._running = True
        start_time = time.monotonic()

        try:
            while self._running:
                if duration_s is not None and time.monotonic() - start_time >= duration_s:
                    logger.info("Reached duration limit (%.1fs)", duration_s)
                    break
                if max_ticks is not None and self.stats.ticks >= max_ticks:
                    break

                self._tick()

                if self.loop_delay_s > 0:
                    time.sleep(self.loop_delay_s)

        except KeyboardInterrupt:
            logger.info("Monitor stopped by user")

        finally:
            self._running = False

        self._log_final_stats()
        return self.stats

    def _tick(self) -> None:
        """Execute one read/estimate/output iteration."""
        sample = self.sensor.read_sample()
        if sample is None:
            self.stats.skipped_reads += 1
            return

        step_start = time.perf_counter()
        try:
            output = self.estimator.step(sample)
        except AttitudeEstimationError as e:
            logger.warning("Tick rejected: %s", e)
            self.stats.rejected_ticks += 1
            return
        step_time_ms = (time.perf_counter() - step_start) * 1000.0

        self._update_stats(step_time_ms, output)
        self.sink.write(output)

    def _update_stats(self, step_time_ms: float, output: AttitudeOutput) -> None:
        self.stats.ticks += 1
        if output.crossing_reset:
            self.stats.crossing_resets += 1

        # Online mean
        self.stats.avg_step_time_ms += (
            (step_time_ms - self.stats.avg_step_time_ms) / self.stats.ticks
        )
        self.stats.max_step_time_ms = max(self.stats.max_step_time_ms, step_time_ms)

    def _log_final_stats(self) -> None:
        logger.info(
            "Monitor finished: %d ticks, %d skipped reads, %d rejected, "
            "%d crossing resets, step %.3f ms avg / %.3f ms max",
            self.stats.ticks,
            self.stats.skipped_reads,
            self.stats.rejected_ticks,
            self.stats.crossing_resets,
            self.stats.avg_step_time_ms,
            self.stats.max_step_time_ms,
        )

    def stop(self) -> None:
        """Stop the loop after the current tick."""
        self._running = False
