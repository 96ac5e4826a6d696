"""
Core infrastructure for PyLinalg.

This module provides shared abstractions and utilities used by the
linear algebra engine.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    precision: Machine epsilon and closeness helpers
    tolerances: Tolerance tiers and warning thresholds
"""

from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
)
from pylinalg.core.tolerances import ToleranceTier

__all__ = [
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    # Tolerances
    "ToleranceTier",
]
