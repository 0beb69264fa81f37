"""Unit tests for the column printer and the polling monitor."""

import io

import pytest

from attitude_estimation import AttitudeEstimator, AttitudeOutput, AxisTrack, Sample
from hardware import AttitudeMonitor, ColumnPrinter


TICK_US = 10_000


def level_sample(timestamp_us):
    return Sample(0.0, 0.0, 16384.0, 0.0, 0.0, 0.0, timestamp_us, temperature_raw=0.0)


class ListSensor:
    """Sensor replaying a fixed list; None entries simulate failed reads."""

    def __init__(self, samples):
        self._samples = list(samples)

    def read_sample(self):
        if not self._samples:
            return None
        return self._samples.pop(0)


class ListSink:
    def __init__(self):
        self.outputs = []

    def write(self, output):
        self.outputs.append(output)


def make_output(temperature_c=25.0):
    return AttitudeOutput(
        roll=AxisTrack(1.25, 2.0, 3.0, 4.0),
        pitch=AxisTrack(-1.0, -2.0, -3.0, -4.04),
        timestamp_us=0,
        timestep_s=0.01,
        temperature_c=temperature_c,
    )


class TestColumnPrinter:
    """Tests for ColumnPrinter."""

    def test_header_then_values(self):
        """Test header line followed by one-decimal values."""
        stream = io.StringIO()
        ColumnPrinter(stream=stream).write(make_output())

        header, line = stream.getvalue().splitlines()
        assert header.split('\t')[0] == 'roll'
        assert header.split('\t')[-1] == 'temp/C'
        assert line.split('\t') == [
            '1.2', '2.0', '3.0', '4.0', '-1.0', '-2.0', '-3.0', '-4.0', '25.0',
        ]

    def test_header_repeats(self):
        """Test the header is repeated every header_repeat lines."""
        stream = io.StringIO()
        printer = ColumnPrinter(stream=stream, header_repeat=30)
        for _ in range(61):
            printer.write(make_output())

        lines = stream.getvalue().splitlines()
        assert sum(1 for line in lines if line.startswith('roll')) == 3
        assert printer.lines_written == 61

    def test_missing_temperature(self):
        """Test a placeholder when no temperature is available."""
        stream = io.StringIO()
        ColumnPrinter(stream=stream).write(make_output(temperature_c=None))
        assert stream.getvalue().splitlines()[1].endswith('\t-')

    def test_invalid_header_repeat_raises(self):
        """Test header_repeat validation."""
        with pytest.raises(ValueError):
            ColumnPrinter(header_repeat=0)


class TestAttitudeMonitor:
    """Tests for AttitudeMonitor."""

    def test_run_counts_ticks_and_failures(self):
        """Test accepted, skipped and rejected ticks are counted."""
        sensor = ListSensor([
            level_sample(0),
            None,
            level_sample(TICK_US),
            level_sample(TICK_US),        # repeated timestamp
            level_sample(2 * TICK_US),
        ])
        sink = ListSink()
        monitor = AttitudeMonitor(sensor, AttitudeEstimator(), sink, loop_delay_s=0.0)

        stats = monitor.run(max_ticks=2)

        assert stats.ticks == 2
        assert stats.skipped_reads == 1
        assert stats.rejected_ticks == 1
        assert stats.crossing_resets == 0
        assert [o.timestamp_us for o in sink.outputs] == [TICK_US, 2 * TICK_US]
        assert stats.max_step_time_ms >= stats.avg_step_time_ms >= 0.0

    def test_initialize_skips_failed_reads(self):
        """Test that initialization waits for the first readable sample."""
        sensor = ListSensor([None, None, level_sample(0)])
        monitor = AttitudeMonitor(sensor, AttitudeEstimator(), ListSink(), loop_delay_s=0.0)

        output = monitor.initialize()

        assert output.roll.kalman_deg == 0.0
        assert monitor.stats.skipped_reads == 2

    def test_initialize_gives_up(self):
        """Test that initialization fails after max_attempts empty reads."""
        monitor = AttitudeMonitor(ListSensor([]), AttitudeEstimator(), ListSink())
        with pytest.raises(RuntimeError, match="No usable sample"):
            monitor.initialize(max_attempts=3)

    def test_duration_limit(self):
        """Test that a zero duration stops immediately after initialization."""
        sensor = ListSensor([level_sample(0), level_sample(TICK_US)])
        sink = ListSink()
        monitor = AttitudeMonitor(sensor, AttitudeEstimator(), sink, loop_delay_s=0.0)

        stats = monitor.run(duration_s=0.0)

        assert stats.ticks == 0
        assert sink.outputs == []

    def test_negative_delay_raises(self):
        """Test loop delay validation."""
        with pytest.raises(ValueError):
            AttitudeMonitor(ListSensor([]), AttitudeEstimator(), ListSink(), loop_delay_s=-1.0)
