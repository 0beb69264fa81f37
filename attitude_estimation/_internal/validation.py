"""Runtime contract validation utilities.

Internal module for parameter and input validation.
"""

import math


def validate_positive(value: float, name: str) -> None:
    """Validate that a value is strictly positive.

    Args:
        value: Value to validate
        name: Parameter name for error message

    Raises:
        ValueError: If value <= 0
    """
    if value <= 0:
        raise ValueError(
            f"{name} must be positive, got {value}"
        )


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a value is non-negative.

    Args:
        value: Value to validate
        name: Parameter name for error message

    Raises:
        ValueError: If value < 0
    """
    if value < 0:
        raise ValueError(
            f"{name} must be non-negative, got {value}"
        )


def validate_open_unit_interval(value: float, name: str) -> None:
    """Validate that a value lies strictly between 0 and 1.

    Raises:
        ValueError: If value is not in (0, 1)
    """
    if not 0.0 < value < 1.0:
        raise ValueError(
            f"{name} must be in (0, 1), got {value}"
        )


def all_finite(*values: float) -> bool:
    """Return True if every value is a finite number."""
    return all(math.isfinite(value) for value in values)
