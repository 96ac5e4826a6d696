"""
Input validation utilities for PyLinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to a new numpy array. Rejects inputs
    that result in object dtype (indicating ragged rows, mixed types or
    non-numeric data). The result never shares memory with the input.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with dtype float64

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.array(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if result.size and not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )
    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype}, expected real data")

    return result.astype(np.float64, copy=False)


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            actual=array.shape,
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_regular_rows(rows: Sequence[Sequence[float]], name: str) -> None:
    """
    Verify every row of a nested sequence has the same length.

    Runs before conversion so the error names the offending row instead
    of surfacing as an object-dtype failure.

    Args:
        rows: Row-major nested sequence
        name: Parameter name for error messages

    Raises:
        ValidationError: If the grid is empty or any row length differs from row 0
    """
    if len(rows) == 0:
        raise ValidationError(f"{name}: matrix elements cannot be empty")

    columns = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != columns:
            raise ValidationError(
                f"{name}: all rows must have the same length. "
                f"Row 0 has {columns} columns, but row {i} has {len(row)} columns"
            )


def check_non_negative_dims(*dims: int, names: tuple[str, ...]) -> None:
    """
    Verify dimension arguments are non-negative integers.

    Args:
        *dims: Dimension values to check
        names: Parameter names for error messages (must match number of dims)

    Raises:
        ValueError: If number of names doesn't match number of dims
        ValidationError: If any dimension is negative
    """
    if len(dims) != len(names):
        raise ValueError(
            f"Number of dims ({len(dims)}) must match number of names ({len(names)})"
        )

    if any(d < 0 for d in dims):
        details = ", ".join(f"{name}={d}" for name, d in zip(names, dims))
        raise ValidationError(f"Matrix dimensions must be non-negative, got: {details}")


def check_index(index: int, size: int, name: str) -> None:
    """
    Verify an index lies in [0, size).

    Negative indices are rejected rather than wrapped.

    Raises:
        IndexOutOfRangeError: If index is outside the valid range
    """
    if index < 0 or index >= size:
        raise IndexOutOfRangeError(
            f"{name}: index {index} is out of range for size {size}"
        )


def check_same_shape(
    a: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    names: tuple[str, str],
) -> None:
    """
    Verify two arrays have identical shapes.

    Raises:
        DimensionError: If shapes differ
    """
    if a.shape != b.shape:
        raise DimensionError(
            f"Matrix dimensions must agree. {names[0]}: {_fmt_shape(a.shape)}, "
            f"{names[1]}: {_fmt_shape(b.shape)}",
            actual=b.shape,
            expected=a.shape,
        )


def check_square(array: NDArray[np.floating[Any]], name: str, operation: str) -> None:
    """
    Verify a 2D array is square.

    Args:
        array: 2D array to check
        name: Parameter name for error messages
        operation: What needed a square matrix (included in the message)

    Raises:
        DimensionError: If rows != columns
    """
    rows, columns = array.shape
    if rows != columns:
        raise DimensionError(
            f"{name}: {operation} requires a square matrix (dimensions: {rows}×{columns})",
            actual=array.shape,
            expected=(rows, rows),
        )


def _fmt_shape(shape: tuple[int, ...]) -> str:
    return "×".join(str(s) for s in shape)
