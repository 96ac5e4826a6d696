"""
Tests for Vector.

Covers construction and parsing, zero-pad broadcasting (without mutating
operands), products, norms, elementwise functions, statistics and the
string form.
"""

import math

import numpy as np
import pytest

from pylinalg.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    NumericalError,
    ValidationError,
)
from pylinalg.linalg import Vector


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_from_list(self):
        v = Vector.of([1, 2, 3])
        assert v.size == 3
        np.testing.assert_array_equal(v.to_array(), [1.0, 2.0, 3.0])

    def test_from_scalar(self):
        v = Vector(5.0)
        assert v.size == 1
        assert v.get(0) == 5.0

    def test_zeros(self):
        v = Vector.zeros(4)
        assert v.size == 4
        assert v.sum() == 0.0

    def test_zeros_rejects_negative(self):
        with pytest.raises(ValidationError):
            Vector.zeros(-1)

    def test_rejects_2d(self):
        with pytest.raises(DimensionError):
            Vector([[1, 2], [3, 4]])

    def test_input_is_copied(self):
        data = np.array([1.0, 2.0])
        v = Vector(data)
        data[0] = 99.0
        assert v.get(0) == 1.0

    def test_to_array_is_copy(self):
        v = Vector.of([1, 2])
        arr = v.to_array()
        arr[0] = 99.0
        assert v.get(0) == 1.0


class TestParse:

    def test_basic(self):
        assert Vector.of("{1, 2, 3}") == Vector.of([1, 2, 3])

    def test_whitespace_insensitive(self):
        assert Vector.of("{ 1 ,2,   3 }") == Vector.of([1, 2, 3])

    def test_decimals_negatives_exponents(self):
        v = Vector.of("{-1.5, 2e3, 4E-2}")
        np.testing.assert_array_equal(v.to_array(), [-1.5, 2000.0, 0.04])

    def test_empty(self):
        assert Vector.of("{}").size == 0

    def test_bad_token(self):
        with pytest.raises(ValidationError, match="1-2"):
            Vector.of("{1-2, 3}")


# ═══════════════════════════════════════════════════════════════════════
# Accessors
# ═══════════════════════════════════════════════════════════════════════


class TestAccessors:

    def test_get_set(self):
        v = Vector.zeros(3)
        v.set(1, 4.5)
        assert v.get(1) == 4.5
        assert v[1] == 4.5

    def test_get_out_of_range(self):
        with pytest.raises(IndexOutOfRangeError):
            Vector.of([1, 2]).get(2)

    def test_set_negative_index(self):
        with pytest.raises(IndexOutOfRangeError):
            Vector.of([1, 2]).set(-1, 0.0)

    def test_set_elements_resizes(self):
        v = Vector.of([1, 2])
        v.set_elements([7, 8, 9])
        assert v.size == 3
        assert list(v) == [7.0, 8.0, 9.0]

    def test_len_and_iter(self):
        v = Vector.of([1, 2, 3])
        assert len(v) == 3
        assert list(v) == [1.0, 2.0, 3.0]


# ═══════════════════════════════════════════════════════════════════════
# Arithmetic and broadcasting
# ═══════════════════════════════════════════════════════════════════════


class TestArithmetic:

    def test_add_scalar(self):
        assert Vector.of([1, 2]).add(1) == Vector.of([2, 3])

    def test_subtract_vector(self):
        assert Vector.of([5, 5]).subtract(Vector.of([1, 2])) == Vector.of([4, 3])

    def test_multiply_elementwise(self):
        assert Vector.of([2, 3]).multiply(Vector.of([4, 5])) == Vector.of([8, 15])

    def test_pow(self):
        assert Vector.of([2, 3]).pow(2) == Vector.of([4, 9])
        assert Vector.of([2, 3]).pow(Vector.of([3, 0])) == Vector.of([8, 1])

    def test_operators(self):
        a = Vector.of([1, 2])
        b = Vector.of([3, 4])
        assert a + b == Vector.of([4, 6])
        assert b - a == Vector.of([2, 2])
        assert 2 * a == Vector.of([2, 4])
        assert 10 - a == Vector.of([9, 8])
        assert b / 2 == Vector.of([1.5, 2])
        assert a ** 2 == Vector.of([1, 4])
        assert -a == Vector.of([-1, -2])

    def test_divide_by_scalar_zero_raises(self):
        with pytest.raises(ZeroDivisionError):
            Vector.of([1, 2]).divide(0.0)

    def test_divide_by_vector_with_zero_is_ieee(self):
        result = Vector.of([1, -1, 0]).divide(Vector.of([0, 0, 0]))
        assert result.get(0) == math.inf
        assert result.get(1) == -math.inf
        assert math.isnan(result.get(2))


class TestBroadcasting:
    """Shorter operand is zero-padded at the tail; operands are never mutated."""

    def test_add_pads_shorter(self):
        result = Vector.of([1, 2]).add(Vector.of([1, 2, 3]))
        assert result == Vector.of([2, 4, 3])

    def test_pad_either_side(self):
        result = Vector.of([1, 2, 3]).subtract(Vector.of([1]))
        assert result == Vector.of([0, 2, 3])

    def test_operands_not_resized(self):
        a = Vector.of([1, 2])
        b = Vector.of([1, 2, 3])
        a.add(b)
        b.multiply(a)
        assert a.size == 2
        assert b.size == 3

    def test_dot_product_pads(self):
        assert Vector.of([1, 2]).dot_product(Vector.of([3, 4, 5])) == 11.0


# ═══════════════════════════════════════════════════════════════════════
# Products and norms
# ═══════════════════════════════════════════════════════════════════════


class TestProducts:

    def test_cross_product(self):
        x = Vector.of([1, 0, 0])
        y = Vector.of([0, 1, 0])
        assert x.cross_product(y) == Vector.of([0, 0, 1])

    def test_cross_product_requires_3d_first(self):
        with pytest.raises(DimensionError, match="v1"):
            Vector.of([1, 2]).cross_product(Vector.of([1, 2, 3]))

    def test_cross_product_requires_3d_second(self):
        with pytest.raises(DimensionError, match="v2"):
            Vector.of([1, 2, 3]).cross_product(Vector.of([1, 2, 3, 4]))


class TestNorms:

    def test_norm(self):
        v = Vector.of([3, 4])
        assert v.get_norm() == 5.0
        assert v.get_norm_square() == 25.0

    def test_normalize_in_place(self):
        v = Vector.of([3, 4])
        v.normalize()
        assert v == Vector.of([0.6, 0.8])

    def test_normalize_zero_raises(self):
        with pytest.raises(NumericalError, match="norm of zero"):
            Vector.zeros(3).normalize()

    def test_unit_vector_leaves_original(self):
        v = Vector.of([0, 2])
        assert v.get_unit_vector() == Vector.of([0, 1])
        assert v == Vector.of([0, 2])


# ═══════════════════════════════════════════════════════════════════════
# Elementwise functions and statistics
# ═══════════════════════════════════════════════════════════════════════


class TestElementwiseFunctions:

    def test_exp_log_roundtrip(self):
        v = Vector.of([0.5, 1.0, 2.0])
        np.testing.assert_allclose(v.exp().log().to_array(), v.to_array())

    def test_sqrt(self):
        assert Vector.of([4, 9]).sqrt() == Vector.of([2, 3])

    def test_domain_errors_are_nan(self):
        assert math.isnan(Vector.of([-1]).sqrt().get(0))
        assert math.isnan(Vector.of([-1]).log().get(0))
        assert Vector.of([0]).log().get(0) == -math.inf


class TestStatistics:

    def test_summary(self):
        v = Vector.of([4, -1, 3])
        assert v.min() == -1.0
        assert v.max() == 4.0
        assert v.sum() == 6.0
        assert v.mean() == 2.0

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="empty"):
            Vector.zeros(0).mean()


# ═══════════════════════════════════════════════════════════════════════
# Equality and string form
# ═══════════════════════════════════════════════════════════════════════


class TestEqualityAndString:

    def test_exact_equality(self):
        assert Vector.of([0.1 + 0.2]) != Vector.of([0.3])

    def test_hash_consistent(self):
        assert hash(Vector.of([1, 2])) == hash(Vector.of([1.0, 2.0]))
        assert len({Vector.of([1, 2]), Vector.of([1, 2])}) == 1

    def test_nan_equals_itself(self):
        v = Vector.of([math.nan])
        assert v == v.copy()

    def test_not_equal_to_other_types(self):
        assert Vector.of([1]) != [1.0]

    def test_to_string(self):
        assert str(Vector.of([1, 2.5])) == "{1.0, 2.5}"

    def test_to_string_empty(self):
        assert str(Vector.zeros(0)) == "{}"
