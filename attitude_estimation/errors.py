"""Per-tick error types raised by the attitude estimator.

Every error here is recoverable: the offending tick is rejected before any
filter state is touched, and the caller may continue with the next sample.
Singular accelerometer geometry near gimbal lock is not an error; it
resolves to the limiting +/-90 degree angle.
"""


class AttitudeEstimationError(ValueError):
    """Base class for rejected estimator ticks."""


class InvalidTimestepError(AttitudeEstimationError):
    """Elapsed time since the previous tick is not a positive finite number."""

    def __init__(self, timestep_s: float) -> None:
        super().__init__(
            f"timestep_s must be positive and finite, got {timestep_s}"
        )
        self.timestep_s = timestep_s


class NonFiniteInputError(AttitudeEstimationError):
    """A sample or filter input contains NaN or infinity."""
