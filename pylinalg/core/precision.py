"""
Numerical precision utilities.

Closeness and conditioning helpers used by Matrix.allclose() and by the
near-singularity checks of the decompositions.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


def is_close(
    a: float | NDArray[np.floating[Any]],
    b: float | NDArray[np.floating[Any]],
    rtol: float,
    atol: float,
) -> bool | NDArray[np.bool_]:
    """
    Check if values are numerically close.

    Uses the formula: |a - b| <= atol + rtol * |b|

    Args:
        a: First value(s)
        b: Second value(s)
        rtol: Relative tolerance
        atol: Absolute tolerance

    Returns:
        Boolean or boolean array indicating closeness
    """
    return np.abs(a - b) <= atol + rtol * np.abs(b)


def relative_pivot_ratio(diagonal: NDArray[np.floating[Any]]) -> float:
    """
    Ratio of the smallest to the largest absolute diagonal entry.

    A cheap conditioning indicator for triangular factors. Returns 1.0
    for an empty diagonal and 0.0 when every entry is zero.
    """
    if diagonal.size == 0:
        return 1.0
    magnitudes = np.abs(diagonal)
    largest = float(magnitudes.max())
    if largest == 0.0:
        return 0.0
    return float(magnitudes.min()) / largest
