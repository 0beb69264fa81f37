"""Unfiltered gyroscope integration.

Provides the comparison track showing what plain rate integration does
without any accelerometer correction.
"""

import logging

from attitude_estimation._internal.angle_math import exceeds, integrate_gyroscope
from attitude_estimation._internal.validation import validate_positive


logger = logging.getLogger(__name__)


class RawGyroIntegrator:
    """Forward-Euler gyro integrator with a drift override.

    Once the integrated angle leaves [-drift_limit_deg, drift_limit_deg] it
    is replaced outright by the Kalman estimate for that tick. This is a
    guard rail against unbounded accumulation, not a filter.
    """

    def __init__(self, drift_limit_deg: float = 180.0) -> None:
        validate_positive(drift_limit_deg, 'drift_limit_deg')
        self._drift_limit_deg = drift_limit_deg

    def integrate(
        self,
        previous_angle_deg: float,
        rate_dps: float,
        timestep_s: float,
    ) -> float:
        """Return previous_angle_deg + rate_dps * timestep_s."""
        return integrate_gyroscope(previous_angle_deg, rate_dps, timestep_s)

    def correct_drift(self, integrated_angle_deg: float, kalman_angle_deg: float) -> float:
        """Replace an out-of-range integrated angle with the Kalman angle.

        Args:
            integrated_angle_deg: Raw integrated gyro angle
            kalman_angle_deg: Kalman estimate for the same tick

        Returns:
            kalman_angle_deg if |integrated_angle_deg| exceeds the drift
            limit, otherwise integrated_angle_deg unchanged
        """
        if exceeds(integrated_angle_deg, self._drift_limit_deg):
            logger.debug(
                "Gyro angle %.1f deg beyond +/-%.0f, replaced by Kalman %.1f deg",
                integrated_angle_deg, self._drift_limit_deg, kalman_angle_deg,
            )
            return kalman_angle_deg
        return integrated_angle_deg

    @property
    def drift_limit_deg(self) -> float:
        return self._drift_limit_deg
