"""
One-dimensional real vector.

Vector wraps a contiguous float64 buffer that it owns exclusively.
Arithmetic returns new Vectors; only set(), normalize() and
set_elements() change an existing instance.

Binary operations against another Vector zero-pad the shorter operand
at the tail before the elementwise operation runs:

    >>> Vector.of([1, 2]).add(Vector.of([1, 2, 3]))
    Vector({2.0, 4.0, 3.0})

Neither operand is modified by the padding.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from numbers import Real
from typing import Any, Callable, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import DimensionError, NumericalError, ValidationError
from pylinalg.core.validation import check_1d, check_array, check_index
from pylinalg.linalg import stats
from pylinalg.linalg._arrays import broadcast_pair, content_hash, exact_equal

Operand = Union['Vector', float]

# Characters that may appear inside a number token of the {a, b, c} grammar
_NUMERIC_CHARS = frozenset('0123456789.-e')


class Vector:
    """
    Fixed-size vector of doubles.

    Construction:
        Vector([1.0, 2.0, 3.0])        # from a sequence or 1D array
        Vector.of("{1, 2, 3}")          # parsed from a string
        Vector.zeros(3)                 # zero-filled
    """

    __slots__ = ('_values',)

    def __init__(self, values: ArrayLike = ()):
        arr = check_array(values, 'values')
        if arr.ndim == 0:
            arr = arr.reshape(1)
        check_1d(arr, 'values')
        self._values: NDArray[np.float64] = arr

    # === Factories ===

    @classmethod
    def of(cls, values: ArrayLike | str) -> Vector:
        """Build a Vector from a sequence, a scalar, or the {a, b, c} string form."""
        if isinstance(values, str):
            return cls.parse(values)
        return cls(values)

    @classmethod
    def zeros(cls, size: int) -> Vector:
        """Zero-filled vector of the given size."""
        if size < 0:
            raise ValidationError(f"size: must be non-negative, got {size}")
        return cls._wrap(np.zeros(size, dtype=np.float64))

    @classmethod
    def parse(cls, text: str) -> Vector:
        """
        Parse the curly-brace form, e.g. "{1, 2.5, -3e2}".

        Number tokens are maximal runs of digits, '.', '-' and 'e'
        (case-insensitive); every other character separates tokens.
        Whitespace and the braces themselves are therefore ignored.

        Raises:
            ValidationError: If a token is not a valid number (e.g. "1-2")
        """
        tokens: list[str] = []
        current: list[str] = []
        for ch in text.lower():
            if ch in _NUMERIC_CHARS:
                current.append(ch)
            elif current:
                tokens.append(''.join(current))
                current = []
        if current:
            tokens.append(''.join(current))

        values = []
        for token in tokens:
            try:
                values.append(float(token))
            except ValueError as e:
                raise ValidationError(
                    f"text: cannot parse {token!r} as a number in {text!r}"
                ) from e
        return cls._wrap(np.array(values, dtype=np.float64))

    @classmethod
    def _wrap(cls, values: NDArray[np.float64]) -> Vector:
        # Takes ownership of `values` without copying
        vector = cls.__new__(cls)
        vector._values = values
        return vector

    # === Accessors ===

    @property
    def size(self) -> int:
        """Number of entries."""
        return self._values.shape[0]

    def get(self, index: int) -> float:
        check_index(index, self.size, 'index')
        return float(self._values[index])

    def set(self, index: int, value: float) -> None:
        check_index(index, self.size, 'index')
        self._values[index] = value

    def set_elements(self, values: ArrayLike) -> None:
        """Replace the contents, resizing to the new length."""
        replacement = Vector(values)
        self._values = replacement._values

    def to_array(self) -> NDArray[np.float64]:
        """Copy of the entries as a 1D array."""
        return self._values.copy()

    def copy(self) -> Vector:
        return Vector._wrap(self._values.copy())

    # === Elementwise arithmetic ===

    def add(self, other: Operand) -> Vector:
        return self._binary(other, np.add)

    def subtract(self, other: Operand) -> Vector:
        return self._binary(other, np.subtract)

    def multiply(self, other: Operand) -> Vector:
        return self._binary(other, np.multiply)

    def divide(self, other: Operand) -> Vector:
        """
        Elementwise division.

        A scalar divisor of exactly zero raises ZeroDivisionError. Zero
        entries in a Vector divisor follow IEEE-754 (inf or nan).
        """
        if not isinstance(other, Vector) and float(other) == 0.0:
            raise ZeroDivisionError("Cannot divide vector by zero")
        return self._binary(other, np.divide)

    def pow(self, other: Operand) -> Vector:
        return self._binary(other, np.power)

    def _binary(
        self,
        other: Operand,
        op: Callable[[Any, Any], NDArray[np.float64]],
    ) -> Vector:
        if isinstance(other, Vector):
            left, right = broadcast_pair(self._values, other._values)
        else:
            left, right = self._values, float(other)
        with np.errstate(all='ignore'):
            return Vector._wrap(op(left, right))

    # === Products ===

    def dot_product(self, other: Vector) -> float:
        """Inner product; the shorter vector is zero-padded."""
        left, right = broadcast_pair(self._values, other._values)
        return float(np.dot(left, right))

    def cross_product(self, other: Vector) -> Vector:
        """
        Cross product of two 3-dimensional vectors.

        Raises:
            DimensionError: If either vector does not have exactly 3 entries
        """
        if self.size != 3:
            raise DimensionError(
                f"Vector v1 must be 3 dimensional, got size {self.size}",
                actual=(self.size,),
                expected=(3,),
            )
        if other.size != 3:
            raise DimensionError(
                f"Vector v2 must be 3 dimensional, got size {other.size}",
                actual=(other.size,),
                expected=(3,),
            )
        return Vector._wrap(np.cross(self._values, other._values).astype(np.float64))

    # === Norms ===

    def get_norm(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.get_norm_square())

    def get_norm_square(self) -> float:
        return float(np.dot(self._values, self._values))

    def normalize(self) -> None:
        """
        Scale this vector to unit length, in place.

        Raises:
            NumericalError: If the norm is exactly zero
        """
        norm = self.get_norm()
        if norm == 0.0:
            raise NumericalError("Tried to normalize a vector with norm of zero")
        self._values /= norm

    def get_unit_vector(self) -> Vector:
        """Normalized copy; this vector is left unchanged."""
        result = self.copy()
        result.normalize()
        return result

    # === Elementwise functions (NaN for domain errors) ===

    def exp(self) -> Vector:
        return self._unary(np.exp)

    def log(self) -> Vector:
        return self._unary(np.log)

    def sqrt(self) -> Vector:
        return self._unary(np.sqrt)

    def _unary(self, fn: Callable[[NDArray[np.float64]], NDArray[np.float64]]) -> Vector:
        with np.errstate(all='ignore'):
            return Vector._wrap(fn(self._values))

    # === Summary statistics ===

    def min(self) -> float:
        return stats.minimum(self._values)

    def max(self) -> float:
        return stats.maximum(self._values)

    def mean(self) -> float:
        return stats.mean(self._values)

    def sum(self) -> float:
        return stats.total(self._values)

    # === Python protocols ===

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._values)

    def __getitem__(self, index: int) -> float:
        return self.get(index)

    def __add__(self, other: Any) -> Vector:
        return self.add(other) if _is_operand(other) else NotImplemented

    def __radd__(self, other: Any) -> Vector:
        return self.add(other) if _is_operand(other) else NotImplemented

    def __sub__(self, other: Any) -> Vector:
        return self.subtract(other) if _is_operand(other) else NotImplemented

    def __rsub__(self, other: Any) -> Vector:
        return self.negate().add(other) if _is_operand(other) else NotImplemented

    def __mul__(self, other: Any) -> Vector:
        return self.multiply(other) if _is_operand(other) else NotImplemented

    def __rmul__(self, other: Any) -> Vector:
        return self.multiply(other) if _is_operand(other) else NotImplemented

    def __truediv__(self, other: Any) -> Vector:
        return self.divide(other) if _is_operand(other) else NotImplemented

    def __pow__(self, other: Any) -> Vector:
        return self.pow(other) if _is_operand(other) else NotImplemented

    def __neg__(self) -> Vector:
        return self.negate()

    def negate(self) -> Vector:
        return Vector._wrap(-self._values)

    def equals(self, other: object) -> bool:
        """Exact entry-by-entry equality (no tolerance)."""
        return isinstance(other, Vector) and exact_equal(self._values, other._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return content_hash(self._values)

    def to_string(self) -> str:
        """Curly-brace form, e.g. "{1.0, 2.5}"; an empty vector is "{}"."""
        return '{' + ', '.join(repr(float(v)) for v in self._values) + '}'

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Vector({self.to_string()})"


def _is_operand(value: Any) -> bool:
    return isinstance(value, (Vector, Real)) and not isinstance(value, bool)

