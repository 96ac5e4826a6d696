"""
Summary statistics over a flat data set.

Vector.min/max/mean/sum delegate here. Every function rejects an empty
data set instead of returning a sentinel.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import ValidationError


def _validate_data(data: NDArray[np.floating[Any]]) -> None:
    if data.size == 0:
        raise ValidationError("data: cannot compute a statistic of an empty data set")


def minimum(data: NDArray[np.floating[Any]]) -> float:
    """Smallest value. NaN propagates."""
    _validate_data(data)
    return float(np.min(data))


def maximum(data: NDArray[np.floating[Any]]) -> float:
    """Largest value. NaN propagates."""
    _validate_data(data)
    return float(np.max(data))


def total(data: NDArray[np.floating[Any]]) -> float:
    """Sum of all values."""
    _validate_data(data)
    return float(np.sum(data))


def mean(data: NDArray[np.floating[Any]]) -> float:
    """Arithmetic mean."""
    _validate_data(data)
    return total(data) / data.size
