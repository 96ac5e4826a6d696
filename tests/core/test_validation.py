"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, copy semantics, rejection
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_regular_rows: ragged grid detection
    - check_non_negative_dims: dimension arguments
    - check_index: bounds checks
    - check_same_shape / check_square: shape agreement
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import DimensionError, IndexOutOfRangeError, ValidationError
from pylinalg.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_index,
    check_ndim,
    check_non_negative_dims,
    check_regular_rows,
    check_same_shape,
    check_square,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to a fresh float64 ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "X")
        assert isinstance(result, np.ndarray)
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float32_promoted_to_float64(self):
        arr = np.array([1.0, 2.0], dtype=np.float32)
        assert check_array(arr, "X").dtype == np.float64

    def test_result_does_not_share_memory(self):
        arr = np.array([[1.0, 2.0], [3.0, 4.0]])
        result = check_array(arr, "X")
        result[0, 0] = 99.0
        assert arr[0, 0] == 1.0

    def test_empty_array(self):
        result = check_array([], "X")
        assert result.size == 0
        assert result.dtype == np.float64

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b", "c"], "X")

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="X"):
            check_array([None, 1, 2.0], "X")

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array([1 + 2j], "X")

    def test_error_message_includes_name(self):
        with pytest.raises(ValidationError, match="my_var"):
            check_array(["a", "b"], "my_var")


# ═══════════════════════════════════════════════════════════════════════
# check_ndim / check_1d / check_2d
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNdim:
    """check_ndim, check_1d, check_2d enforce dimensionality."""

    def test_1d_passes(self):
        check_1d(np.array([1.0, 2.0]), "X")

    def test_2d_passes(self):
        check_2d(np.array([[1.0, 2.0]]), "X")

    def test_1d_fails_for_2d(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.array([[1.0]]), "X")

    def test_2d_fails_for_3d(self):
        with pytest.raises(DimensionError, match="expected 2D array, got 3D"):
            check_2d(np.zeros((2, 2, 2)), "X")

    def test_ndim_error_carries_shape(self):
        with pytest.raises(DimensionError) as exc_info:
            check_ndim(np.zeros((2, 3)), 1, "X")
        assert exc_info.value.actual == (2, 3)


# ═══════════════════════════════════════════════════════════════════════
# check_regular_rows
# ═══════════════════════════════════════════════════════════════════════


class TestCheckRegularRows:

    def test_regular_grid_passes(self):
        check_regular_rows([[1, 2], [3, 4]], "elements")

    def test_ragged_grid_names_row(self):
        with pytest.raises(ValidationError, match="row 2 has 1 columns"):
            check_regular_rows([[1, 2], [3, 4], [5]], "elements")

    def test_empty_grid_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            check_regular_rows([], "elements")


# ═══════════════════════════════════════════════════════════════════════
# check_non_negative_dims / check_index
# ═══════════════════════════════════════════════════════════════════════


class TestCheckDims:

    def test_zero_allowed(self):
        check_non_negative_dims(0, 0, names=("rows", "columns"))

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="rows=-1"):
            check_non_negative_dims(-1, 2, names=("rows", "columns"))

    def test_name_count_mismatch(self):
        with pytest.raises(ValueError, match="must match"):
            check_non_negative_dims(1, 2, names=("rows",))


class TestCheckIndex:

    def test_in_range(self):
        check_index(0, 3, "index")
        check_index(2, 3, "index")

    def test_upper_bound_is_exclusive(self):
        with pytest.raises(IndexOutOfRangeError, match="index 3"):
            check_index(3, 3, "index")

    def test_negative_rejected(self):
        with pytest.raises(IndexOutOfRangeError):
            check_index(-1, 3, "index")


# ═══════════════════════════════════════════════════════════════════════
# check_same_shape / check_square
# ═══════════════════════════════════════════════════════════════════════


class TestShapeChecks:

    def test_same_shape_passes(self):
        check_same_shape(np.zeros((2, 3)), np.ones((2, 3)), names=("A", "B"))

    def test_different_shape_rejected(self):
        with pytest.raises(DimensionError, match="A: 2×3, B: 3×2"):
            check_same_shape(np.zeros((2, 3)), np.ones((3, 2)), names=("A", "B"))

    def test_square_passes(self):
        check_square(np.zeros((3, 3)), "A", "determinant")

    def test_rectangular_rejected(self):
        with pytest.raises(DimensionError, match="determinant requires a square matrix"):
            check_square(np.zeros((2, 3)), "A", "determinant")
