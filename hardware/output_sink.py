"""Tab-separated console output of the angle tracks."""

import sys
from typing import Optional, TextIO

from attitude_estimation import AttitudeOutput, AxisTrack


COLUMNS = (
    'roll', 'roll_gyro', 'roll_complementary', 'roll_kalman',
    'pitch', 'pitch_gyro', 'pitch_complementary', 'pitch_kalman',
    'temp/C',
)


def _axis_values(track: AxisTrack):
    return (track.raw_deg, track.gyro_deg, track.complementary_deg, track.kalman_deg)


class ColumnPrinter:
    """Writes one line per estimator output, repeating the header periodically.

    Attributes:
        header_repeat: Number of data lines between header lines
        lines_written: Data lines written so far
    """

    def __init__(self, stream: Optional[TextIO] = None, header_repeat: int = 30) -> None:
        if header_repeat <= 0:
            raise ValueError(f"header_repeat must be positive, got {header_repeat}")
        self._stream = stream or sys.stdout
        self._header_repeat = header_repeat
        self._lines_written = 0

    def write(self, output: AttitudeOutput) -> None:
        """Write one output line (and the header when due)."""
        if self._lines_written % self._header_repeat == 0:
            self._stream.write('\t'.join(COLUMNS) + '\n')

        values = _axis_values(output.roll) + _axis_values(output.pitch)
        fields = [f"{value:.1f}" for value in values]
        if output.temperature_c is None:
            fields.append('-')
        else:
            fields.append(f"{output.temperature_c:.1f}")

        self._stream.write('\t'.join(fields) + '\n')
        self._stream.flush()
        self._lines_written += 1

    @property
    def header_repeat(self) -> int:
        return self._header_repeat

    @property
    def lines_written(self) -> int:
        return self._lines_written
