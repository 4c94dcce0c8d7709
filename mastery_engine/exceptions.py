"""
Engine Errors and Argument Validation.

Philosophy:
- Invalid input is rejected, never clamped into range
- Errors carry a machine-readable code for the calling layer
- Numbers must be real numbers: bools, strings, NaN and infinities are refused
"""

from __future__ import annotations

import math
from numbers import Real


class EngineError(Exception):
    """Base class for every error raised by the engine."""

    code = "ENGINE_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class InvalidArgumentError(EngineError, ValueError):
    """Raised when a caller passes a value outside an operation's domain."""

    code = "INVALID_ARGUMENT"

    def __init__(self, argument: str, message: str):
        super().__init__(f"{argument}: {message}")
        self.argument = argument


# ============================================================================
# Validation helpers
# ============================================================================


def require_number(name: str, value: object) -> float:
    """
    Check that a value is a finite real number.

    Args:
        name: Parameter name used in the error message
        value: Value to check

    Returns:
        The value as a float

    Raises:
        InvalidArgumentError: If the value is not a finite int/float
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgumentError(name, f"expected a number, got {type(value).__name__}")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidArgumentError(name, f"expected a finite number, got {value!r}")
    return number


def require_non_negative(name: str, value: object) -> float:
    """Check that a value is a finite number >= 0."""
    number = require_number(name, value)
    if number < 0:
        raise InvalidArgumentError(name, f"must be non-negative, got {value!r}")
    return number


def require_positive(name: str, value: object) -> float:
    """Check that a value is a finite number > 0."""
    number = require_number(name, value)
    if number <= 0:
        raise InvalidArgumentError(name, f"must be positive, got {value!r}")
    return number


def require_unit_interval(name: str, value: object) -> float:
    """Check that a value is a finite number in [0, 1]."""
    number = require_number(name, value)
    if not 0.0 <= number <= 1.0:
        raise InvalidArgumentError(name, f"must be within [0, 1], got {value!r}")
    return number

def require_bool(name: str, value: object) -> bool:
    """Check that a value is a real bool; 0/1, strings and None are refused."""
    if not isinstance(value, bool):
        raise InvalidArgumentError(name, f"expected a bool, got {type(value).__name__}")
    return value
