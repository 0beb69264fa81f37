"""Roll and pitch from a static accelerometer reading.

Only two of the three Euler angles are observable from gravity, and no
single formula set covers the full sphere: one axis can use atan2 and span
+/-180 degrees, while the other is confined to +/-90 degrees. Which axis
gets the narrower range is a configuration choice.

    PITCH restricted (default):
        roll  = atan2(a_y, a_z)
        pitch = atan(-a_x / sqrt(a_y^2 + a_z^2))

    ROLL restricted:
        roll  = atan(a_y / sqrt(a_x^2 + a_z^2))
        pitch = atan2(-a_x, a_z)

The input scale is irrelevant since only ratios are used, so raw counts can
be passed straight through.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple

from attitude_estimation._internal.angle_math import (
    atan2_deg,
    atan_over_norm_deg,
)


class AxisRestriction(Enum):
    """Which axis is restricted to +/-90 degrees."""

    ROLL = 'roll'
    PITCH = 'pitch'

    @property
    def unrestricted(self) -> 'AxisRestriction':
        """The opposite axis, which spans +/-180 degrees."""
        if self is AxisRestriction.ROLL:
            return AxisRestriction.PITCH
        return AxisRestriction.ROLL


@dataclass(frozen=True)
class AccelAngles:
    """Accelerometer-derived angles in degrees."""

    roll_deg: float
    pitch_deg: float

    def for_axis(self, axis: AxisRestriction) -> float:
        """Return the angle of the named axis."""
        if axis is AxisRestriction.ROLL:
            return self.roll_deg
        return self.pitch_deg


def _resolve_pitch_restricted(
    accel_x: float, accel_y: float, accel_z: float
) -> Tuple[float, float]:
    roll_deg = atan2_deg(accel_y, accel_z)
    pitch_deg = atan_over_norm_deg(-accel_x, accel_y, accel_z)
    return roll_deg, pitch_deg


def _resolve_roll_restricted(
    accel_x: float, accel_y: float, accel_z: float
) -> Tuple[float, float]:
    roll_deg = atan_over_norm_deg(accel_y, accel_x, accel_z)
    pitch_deg = atan2_deg(-accel_x, accel_z)
    return roll_deg, pitch_deg


_RESOLVERS: Dict[AxisRestriction, Callable[[float, float, float], Tuple[float, float]]] = {
    AxisRestriction.PITCH: _resolve_pitch_restricted,
    AxisRestriction.ROLL: _resolve_roll_restricted,
}


class AccelAngleResolver:
    """Converts accelerometer samples into roll/pitch angles.

    Attributes:
        restricted_axis: Axis confined to +/-90 degrees
        unrestricted_axis: Axis spanning +/-180 degrees, ambiguous past 90
    """

    def __init__(self, restricted_axis: AxisRestriction = AxisRestriction.PITCH) -> None:
        self._restricted_axis = AxisRestriction(restricted_axis)
        self._resolve = _RESOLVERS[self._restricted_axis]

    def resolve(self, accel_x: float, accel_y: float, accel_z: float) -> AccelAngles:
        """Compute roll and pitch from one accelerometer reading.

        Args:
            accel_x: Accelerometer X reading (any consistent unit)
            accel_y: Accelerometer Y reading
            accel_z: Accelerometer Z reading

        Returns:
            AccelAngles in degrees. Near gimbal lock the restricted axis
            tends to +/-90 degrees; an all-zero reading gives 0 for both.
        """
        roll_deg, pitch_deg = self._resolve(accel_x, accel_y, accel_z)
        return AccelAngles(roll_deg=roll_deg, pitch_deg=pitch_deg)

    @property
    def restricted_axis(self) -> AxisRestriction:
        return self._restricted_axis

    @property
    def unrestricted_axis(self) -> AxisRestriction:
        return self._restricted_axis.unrestricted
