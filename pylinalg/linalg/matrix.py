"""
Two-dimensional real matrix.

Matrix owns a single C-contiguous float64 buffer (row stride = columns).
Every factory deep-copies its input and every accessor that returns
array data returns a copy, so no two Matrix instances ever alias the
same storage.

Arithmetic mirrors Vector:
    - scalar operands apply to every entry
    - Matrix operands are zero-padded to the common (max rows, max columns)
      shape before the elementwise operation
    - Vector operands broadcast across every row, after zero-padding the
      column count and the vector length to the larger of the two

The exceptions are multiply(Matrix), which is the matrix product, and the
array_* operators, which require identical shapes.

determinant(), solve() and inverse() dispatch to LUDecomposition for
square matrices and to QRDecomposition (least squares) otherwise.
"""

from __future__ import annotations

from collections.abc import Sequence
from numbers import Real
from typing import TYPE_CHECKING, Any, Callable, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import DimensionError, IndexOutOfRangeError, ValidationError
from pylinalg.core.precision import is_close
from pylinalg.core.tolerances import DEFAULT, ToleranceTier, select_tolerance
from pylinalg.core.validation import (
    check_2d,
    check_array,
    check_index,
    check_non_negative_dims,
    check_regular_rows,
    check_same_shape,
    check_square,
)
from pylinalg.linalg._arrays import (
    broadcast_pair,
    broadcast_rows,
    content_hash,
    exact_equal,
)
from pylinalg.linalg.vector import Vector

if TYPE_CHECKING:
    from pylinalg.linalg.lu import LUDecomposition
    from pylinalg.linalg.qr import QRDecomposition

Operand = Union['Matrix', Vector, float]


class Matrix:
    """
    Dense rows × columns matrix of doubles.

    Construction:
        Matrix.of([[1, 2], [3, 4]])               # row-major grid (deep copy)
        Matrix.of([1, 2, 3])                      # 3×1 column
        Matrix.of(Vector.of([1, 2, 3]))           # 1×3 row
        Matrix.from_column_packed([1, 3, 2, 4], 2)
        Matrix.identity(3), Matrix.of_size(2, 3), Matrix.filled(2, 2, 7.0)
    """

    __slots__ = ('_data',)

    def __init__(self, elements: ArrayLike):
        if _is_nested(elements):
            check_regular_rows(elements, 'elements')
        arr = check_array(elements, 'elements')
        check_2d(arr, 'elements')
        if arr.size == 0:
            raise ValidationError("elements: matrix elements cannot be empty")
        self._data: NDArray[np.float64] = np.ascontiguousarray(arr)

    # === Factories ===

    @classmethod
    def of(cls, values: ArrayLike | Vector) -> Matrix:
        """
        Build a Matrix from a grid, a flat array, a Vector or a scalar.

        A 2D grid is copied row-major. A flat 1D array becomes an n×1
        column, a Vector becomes a 1×n row, and a scalar becomes 1×1.

        Raises:
            ValidationError: If the input is empty or its rows are ragged
        """
        if isinstance(values, Vector):
            return cls._wrap(values.to_array().reshape(1, -1))
        if isinstance(values, Real):
            return cls.scalar(float(values))

        arr = check_array(values, 'values') if not _is_nested(values) else None
        if arr is not None and arr.ndim == 1:
            if arr.size == 0:
                raise ValidationError("values: vector cannot be empty")
            return cls._wrap(arr.reshape(-1, 1).copy())
        return cls(values)

    @classmethod
    def scalar(cls, value: float) -> Matrix:
        """1×1 matrix holding `value`."""
        return cls._wrap(np.full((1, 1), float(value)))

    @classmethod
    def from_column_packed(cls, values: ArrayLike, rows: int) -> Matrix:
        """
        Fill a matrix column by column: elements[i][j] = values[i + j*rows].

        Raises:
            ValidationError: If len(values) is not a multiple of rows
        """
        arr = check_array(values, 'values').ravel()
        check_non_negative_dims(rows, names=('rows',))
        columns = arr.size // rows if rows != 0 else 0
        if rows * columns != arr.size:
            raise ValidationError(
                f"values: array length ({arr.size}) must be a multiple of rows ({rows})"
            )
        return cls._wrap(np.ascontiguousarray(arr.reshape((rows, columns), order='F')))

    @classmethod
    def of_size(cls, rows: int, columns: int) -> Matrix:
        """Zero matrix of the given shape."""
        check_non_negative_dims(rows, columns, names=('rows', 'columns'))
        return cls._wrap(np.zeros((rows, columns), dtype=np.float64))

    @classmethod
    def square(cls, n: int) -> Matrix:
        """n×n zero matrix."""
        return cls.of_size(n, n)

    @classmethod
    def filled(cls, rows: int, columns: int, value: float) -> Matrix:
        check_non_negative_dims(rows, columns, names=('rows', 'columns'))
        return cls._wrap(np.full((rows, columns), float(value)))

    @classmethod
    def identity(cls, n: int) -> Matrix:
        check_non_negative_dims(n, names=('n',))
        return cls._wrap(np.eye(n, dtype=np.float64))

    @classmethod
    def random(
        cls,
        rows: int,
        columns: int,
        rng: np.random.Generator | None = None,
    ) -> Matrix:
        """Matrix of uniform [0, 1) draws."""
        check_non_negative_dims(rows, columns, names=('rows', 'columns'))
        if rng is None:
            rng = np.random.default_rng()
        return cls._wrap(rng.random((rows, columns)))

    @classmethod
    def _wrap(cls, data: NDArray[np.float64]) -> Matrix:
        # Takes ownership of `data`; callers pass freshly allocated arrays
        matrix = cls.__new__(cls)
        matrix._data = data
        return matrix

    # === Accessors ===

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def columns(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.columns)

    def get(self, i: int, j: int) -> float:
        check_index(i, self.rows, 'row')
        check_index(j, self.columns, 'column')
        return float(self._data[i, j])

    def set(self, i: int, j: int, value: float) -> None:
        check_index(i, self.rows, 'row')
        check_index(j, self.columns, 'column')
        self._data[i, j] = value

    def get_array_copy(self) -> NDArray[np.float64]:
        """Deep copy of the elements as a rows × columns array."""
        return self._data.copy()

    def get_row_packed_copy(self) -> NDArray[np.float64]:
        """Elements flattened row by row."""
        return self._data.ravel(order='C').copy()

    def get_column_packed_copy(self) -> NDArray[np.float64]:
        """Elements flattened column by column."""
        return self._data.ravel(order='F').copy()

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    def copy(self) -> Matrix:
        return Matrix._wrap(self._data.copy())

    # === Structural queries ===

    def is_square(self) -> bool:
        return self.rows == self.columns

    def is_symmetric(self, tol: float = 0.0) -> bool:
        """
        True if the matrix equals its transpose.

        With the default tol=0.0 the comparison is exact. Non-square
        matrices are never symmetric.
        """
        if not self.is_square():
            return False
        if tol == 0.0:
            return self.equals(self.transpose())
        return bool(np.all(np.abs(self._data - self._data.T) <= tol))

    def is_identity(self, tol: float = 0.0) -> bool:
        """
        True if every diagonal entry is 1 and every other entry is 0.

        With the default tol=0.0 the comparison is exact.

        Raises:
            DimensionError: If the matrix is not square
        """
        check_square(self._data, 'matrix', 'identity test')
        identity = np.eye(self.rows, dtype=np.float64)
        if tol == 0.0:
            return exact_equal(self._data, identity)
        return bool(np.all(np.abs(self._data - identity) <= tol))

    def allclose(
        self,
        other: Matrix,
        tolerance: ToleranceTier | str = DEFAULT,
    ) -> bool:
        """
        Tolerance-based equality: same shape and |a - b| <= atol + rtol·|b|.

        Args:
            other: Matrix to compare against
            tolerance: A ToleranceTier or its name ('exact', 'default', 'loose')

        Raises:
            ValidationError: If tolerance names an unknown tier
        """
        tier = select_tolerance(tolerance)
        if self.shape != other.shape:
            return False
        return bool(np.all(is_close(self._data, other._data, rtol=tier.rtol, atol=tier.atol)))

    def trace(self) -> float:
        """Sum of the min(rows, columns) diagonal entries."""
        return float(np.trace(self._data))

    def norm1(self) -> float:
        """Maximum absolute column sum."""
        if self._data.size == 0:
            return 0.0
        return float(np.abs(self._data).sum(axis=0).max())

    def sum(self) -> float:
        return float(self._data.sum())

    def transpose(self) -> Matrix:
        return Matrix._wrap(self._data.T.copy())

    # === Arithmetic ===

    def add(self, other: Operand) -> Matrix:
        return self._broadcast(other, np.add)

    def subtract(self, other: Operand) -> Matrix:
        return self._broadcast(other, np.subtract)

    def multiply(self, other: Operand) -> Matrix:
        """
        Matrix product for a Matrix operand; elementwise otherwise.

        Raises:
            DimensionError: If self.columns != other.rows for a Matrix operand
        """
        if isinstance(other, Matrix):
            return self._matmul(other)
        return self._broadcast(other, np.multiply)

    def divide(self, other: Operand) -> Matrix:
        """
        Elementwise division.

        A scalar divisor of exactly zero raises ZeroDivisionError; zero
        entries in a Matrix or Vector divisor follow IEEE-754.
        """
        if not isinstance(other, (Matrix, Vector)) and float(other) == 0.0:
            raise ZeroDivisionError("Cannot divide matrix by zero")
        return self._broadcast(other, np.divide)

    def pow(self, other: Operand) -> Matrix:
        return self._broadcast(other, np.power)

    def uminus(self) -> Matrix:
        return Matrix._wrap(-self._data)

    def _broadcast(
        self,
        other: Operand,
        op: Callable[[Any, Any], NDArray[np.float64]],
    ) -> Matrix:
        if isinstance(other, Matrix):
            left, right = broadcast_pair(self._data, other._data)
        elif isinstance(other, Vector):
            left, right = broadcast_rows(self._data, other.to_array())
        else:
            left, right = self._data, float(other)
        with np.errstate(all='ignore'):
            return Matrix._wrap(op(left, right))

    def _matmul(self, other: Matrix) -> Matrix:
        if self.columns != other.rows:
            raise DimensionError(
                f"Matrix inner dimensions must agree. Cannot multiply "
                f"{self.rows}×{self.columns} by {other.rows}×{other.columns}",
                actual=other.shape,
                expected=(self.columns, other.columns),
            )
        return Matrix._wrap(np.ascontiguousarray(self._data @ other._data))

    # === Elementwise operators (exact shape match) ===

    def array_multiply(self, other: Matrix) -> Matrix:
        """Hadamard product A .* B."""
        check_same_shape(self._data, other._data, names=('this', 'other'))
        return Matrix._wrap(self._data * other._data)

    def array_right_divide(self, other: Matrix) -> Matrix:
        """Elementwise A ./ B."""
        check_same_shape(self._data, other._data, names=('this', 'other'))
        with np.errstate(all='ignore'):
            return Matrix._wrap(self._data / other._data)

    def array_left_divide(self, other: Matrix) -> Matrix:
        """Elementwise B ./ A."""
        check_same_shape(self._data, other._data, names=('this', 'other'))
        with np.errstate(all='ignore'):
            return Matrix._wrap(other._data / self._data)

    # === Submatrices ===

    def get_matrix(self, i0: int, i1: int, j0: int, j1: int) -> Matrix:
        """
        Contiguous block rows i0..i1, columns j0..j1 (bounds inclusive).

        Raises:
            IndexOutOfRangeError: If any bound is out of range or i0 > i1 / j0 > j1
        """
        if i0 < 0 or i1 >= self.rows or j0 < 0 or j1 >= self.columns or i0 > i1 or j0 > j1:
            raise IndexOutOfRangeError(
                f"Invalid submatrix indices: [{i0}:{i1}, {j0}:{j1}] "
                f"for {self.rows}×{self.columns} matrix"
            )
        return Matrix._wrap(self._data[i0:i1 + 1, j0:j1 + 1].copy())

    def get_matrix_rows(self, row_indices: Sequence[int], j0: int, j1: int) -> Matrix:
        """
        Rows picked by `row_indices` (in that order), columns j0..j1 inclusive.

        Raises:
            ValidationError: If row_indices is empty
            IndexOutOfRangeError: If a row index or the column range is out of range
        """
        if len(row_indices) == 0:
            raise ValidationError("row_indices: row index array cannot be empty")
        if j0 < 0 or j1 >= self.columns or j0 > j1:
            raise IndexOutOfRangeError(
                f"Invalid column range: [{j0}:{j1}] for matrix with {self.columns} columns"
            )
        for r in row_indices:
            if r < 0 or r >= self.rows:
                raise IndexOutOfRangeError(
                    f"Row index {r} is out of bounds for matrix with {self.rows} rows"
                )
        index = np.asarray(row_indices, dtype=np.intp)
        return Matrix._wrap(self._data[index, j0:j1 + 1].copy())

    # === Linear algebra ===

    def get_lu_decomposition(self) -> LUDecomposition:
        from pylinalg.linalg.lu import LUDecomposition
        return LUDecomposition(self)

    def get_qr_decomposition(self) -> QRDecomposition:
        from pylinalg.linalg.qr import QRDecomposition
        return QRDecomposition(self)

    def determinant(self) -> float:
        """
        Determinant via LU decomposition. Singular matrices give 0.0.

        Raises:
            DimensionError: If the matrix is not square
        """
        check_square(self._data, 'matrix', 'determinant')
        return self.get_lu_decomposition().get_determinant()

    def solve(self, b: Matrix) -> Matrix:
        """
        Solve A·X = B.

        Square A uses LU decomposition and returns the exact solution.
        Any other shape uses QR decomposition and returns the least
        squares solution (requires rows >= columns).

        Raises:
            DimensionError: If B.rows != A.rows, or A is wider than tall
            SingularMatrixError: If A is singular / rank-deficient
        """
        return self._solve(b, stacklevel=5)

    def inverse(self) -> Matrix:
        """
        Inverse of a square matrix, or least squares pseudoinverse of a
        tall full-column-rank matrix.
        """
        return self._solve(Matrix.identity(self.rows), stacklevel=5)

    def _solve(self, b: Matrix, stacklevel: int) -> Matrix:
        if self.is_square():
            return self.get_lu_decomposition()._solve(b, stacklevel)
        return self.get_qr_decomposition()._solve(b, stacklevel)

    # === Python protocols ===

    def __add__(self, other: Any) -> Matrix:
        return self.add(other) if _is_operand(other) else NotImplemented

    def __radd__(self, other: Any) -> Matrix:
        return self.add(other) if isinstance(other, Real) else NotImplemented

    def __sub__(self, other: Any) -> Matrix:
        return self.subtract(other) if _is_operand(other) else NotImplemented

    def __rsub__(self, other: Any) -> Matrix:
        return self.uminus().add(other) if isinstance(other, Real) else NotImplemented

    def __mul__(self, other: Any) -> Matrix:
        return self.multiply(other) if _is_operand(other) else NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        return self.multiply(other) if isinstance(other, Real) else NotImplemented

    def __matmul__(self, other: Any) -> Matrix:
        return self._matmul(other) if isinstance(other, Matrix) else NotImplemented

    def __truediv__(self, other: Any) -> Matrix:
        return self.divide(other) if _is_operand(other) else NotImplemented

    def __pow__(self, other: Any) -> Matrix:
        return self.pow(other) if _is_operand(other) else NotImplemented

    def __neg__(self) -> Matrix:
        return self.uminus()

    def equals(self, other: object) -> bool:
        """Exact entry-by-entry equality (no tolerance)."""
        return isinstance(other, Matrix) and exact_equal(self._data, other._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return content_hash(self._data)

    def to_string(self) -> str:
        """Rows separated by newlines, columns by tabs."""
        return '\n'.join('\t'.join(repr(float(v)) for v in row) for row in self._data)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"


def _is_operand(value: Any) -> bool:
    return isinstance(value, (Matrix, Vector, Real)) and not isinstance(value, bool)


def _is_nested(values: Any) -> bool:
    """True for a non-empty sequence whose first item is itself a sequence."""
    return (
        isinstance(values, Sequence)
        and not isinstance(values, str)
        and len(values) > 0
        and isinstance(values[0], Sequence)
    )
