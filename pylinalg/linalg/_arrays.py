"""
Array helpers shared by Vector and Matrix.

Broadcasting here means zero-padding the smaller operand at the tail
(trailing entries, trailing rows and columns) until shapes agree. Every
helper returns new arrays; inputs are never resized in place.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray


def pad_to(values: NDArray[np.floating[Any]], shape: tuple[int, ...]) -> NDArray[np.float64]:
    """
    Copy `values` into a zero array of `shape`, anchored at the origin.

    Entries outside `shape` are dropped, so the same helper also truncates.
    """
    result = np.zeros(shape, dtype=np.float64)
    region = tuple(slice(0, min(have, want)) for have, want in zip(values.shape, shape))
    result[region] = values[region]
    return result


def broadcast_pair(
    a: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Zero-pad two same-rank arrays to their common (maximum) shape.

    Returns:
        (a_padded, b_padded), both fresh copies
    """
    shape = tuple(max(x, y) for x, y in zip(a.shape, b.shape))
    return pad_to(a, shape), pad_to(b, shape)


def broadcast_rows(
    grid: NDArray[np.floating[Any]],
    row: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Align a 2D grid and a 1D row for row-wise broadcasting.

    The grid's column count and the row's length are both padded to the
    larger of the two; the grid keeps its row count.

    Returns:
        (grid_padded, row_padded), both fresh copies
    """
    width = max(grid.shape[1], row.shape[0])
    return pad_to(grid, (grid.shape[0], width)), pad_to(row, (width,))


def exact_equal(a: NDArray[np.floating[Any]], b: NDArray[np.floating[Any]]) -> bool:
    """
    Entry-by-entry equality with no tolerance.

    NaN equals NaN and 0.0 differs from -0.0, so equality is reflexive
    and agrees with content_hash().
    """
    if a.shape != b.shape:
        return False
    if not np.array_equal(a, b, equal_nan=True):
        return False
    # equal_nan already matched NaN positions; compare signs elsewhere
    numeric = ~np.isnan(a)
    return bool(np.array_equal(np.signbit(a[numeric]), np.signbit(b[numeric])))


def content_hash(values: NDArray[np.floating[Any]]) -> int:
    """Hash of shape and content consistent with exact_equal()."""
    canonical = np.where(np.isnan(values), np.nan, values)
    return hash((values.shape, np.ascontiguousarray(canonical).tobytes()))
