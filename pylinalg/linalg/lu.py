"""
LU decomposition with partial pivoting.

For an m×n matrix A the decomposition yields a unit lower triangular L,
an upper triangular U and a row permutation piv such that

    L @ U == A[piv, :]

Elimination is the left-looking (Crout/Doolittle, dot-product) form:
column j is updated with all previous transformations, then the row with
the largest |value| at or below the diagonal becomes the pivot. Ties go to
the lowest row index. L and U are packed into one array; the unit diagonal
of L is implicit.

Construction never fails. A singular matrix is only reported when solve()
is called; get_determinant() simply returns 0.0 for it.
"""

from __future__ import annotations

import warnings
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pylinalg.core.exceptions import DimensionError, SingularMatrixError
from pylinalg.core.precision import relative_pivot_ratio
from pylinalg.core.tolerances import NEAR_SINGULAR_RTOL
from pylinalg.core.validation import check_square
from pylinalg.linalg._arrays import pad_to
from pylinalg.linalg.matrix import Matrix


class LUDecomposition:
    """
    Immutable LU factorization of a Matrix.

    Attributes:
        pivot_sign: +1 or -1, the parity of the row swaps performed

    Example:
        >>> lu = LUDecomposition(Matrix.of([[1, 2], [3, 4]]))
        >>> lu.get_determinant()
        -2.0
    """

    __slots__ = ('_lu', '_piv', '_pivot_sign')

    def __init__(self, matrix: Matrix):
        lu = matrix.get_array_copy()
        m, n = lu.shape
        piv = np.arange(m, dtype=np.intp)
        pivot_sign = 1

        for j in range(n):
            col = lu[:, j].copy()

            # Apply previous transformations. Rows above the diagonal are a
            # forward substitution through L; rows at or below it all use
            # the first j entries of the (already updated) column.
            for i in range(1, min(j, m)):
                col[i] -= lu[i, :i] @ col[:i]
            if 0 < j < m:
                col[j:] -= lu[j:, :j] @ col[:j]
            lu[:, j] = col

            if j >= m:
                continue

            # argmax returns the first maximum: ties resolve to the lowest row
            p = j + int(np.argmax(np.abs(col[j:])))
            if p != j:
                lu[[p, j], :] = lu[[j, p], :]
                piv[[p, j]] = piv[[j, p]]
                pivot_sign = -pivot_sign

            if lu[j, j] != 0.0:
                lu[j + 1:, j] /= lu[j, j]

        lu.flags.writeable = False
        piv.flags.writeable = False
        self._lu: NDArray[np.float64] = lu
        self._piv: NDArray[np.intp] = piv
        self._pivot_sign = pivot_sign

    # === Properties ===

    @property
    def row_count(self) -> int:
        return self._lu.shape[0]

    @property
    def column_count(self) -> int:
        return self._lu.shape[1]

    @property
    def pivot_sign(self) -> int:
        return self._pivot_sign

    def get_pivot(self) -> NDArray[np.intp]:
        """Row permutation: row i of L@U is row piv[i] of the input."""
        return self._piv.copy()

    def get_double_pivot(self) -> NDArray[np.float64]:
        """get_pivot() as floats."""
        return self._piv.astype(np.float64)

    def get_l(self) -> Matrix:
        """Unit lower triangular factor (rows × columns)."""
        lower = np.tril(self._lu, k=-1)
        np.fill_diagonal(lower, 1.0)
        return Matrix._wrap(lower)

    def get_u(self) -> Matrix:
        """Upper triangular factor (columns × columns)."""
        n = self.column_count
        return Matrix._wrap(pad_to(np.triu(self._lu), (n, n)))

    def _diagonal(self) -> NDArray[np.float64]:
        return np.diagonal(self._lu).copy()

    def is_nonsingular(self, tol: float = 0.0) -> bool:
        """
        True if the matrix is square and no pivot is zero.

        With tol > 0 a pivot also counts as zero when the ratio of the
        smallest to the largest |pivot| is at or below tol.
        """
        if self.row_count != self.column_count:
            return False
        diag = self._diagonal()
        if np.any(diag == 0.0):
            return False
        if tol > 0.0:
            return relative_pivot_ratio(diag) > tol
        return True

    def get_determinant(self) -> float:
        """
        Product of the U diagonal times the pivot sign.

        Raises:
            DimensionError: If the decomposed matrix is not square
        """
        check_square(self._lu, 'matrix', 'determinant')
        d = float(self._pivot_sign)
        for value in np.diagonal(self._lu):
            d *= float(value)
        return d

    def solve(self, b: Matrix) -> Matrix:
        """
        Solve A·X = B.

        Args:
            b: Right-hand side with the same number of rows as A

        Returns:
            X such that A @ X == B (up to round-off)

        Raises:
            DimensionError: If A is not square or B.rows != A.rows
            SingularMatrixError: If any pivot is exactly zero
        """
        return self._solve(b, stacklevel=4)

    def _solve(self, b: Matrix, stacklevel: int) -> Matrix:
        # stacklevel counts frames from warnings.warn up to the public caller
        m, n = self._lu.shape
        check_square(self._lu, 'matrix', 'LU solve')
        if b.rows != m:
            raise DimensionError(
                f"Matrix row dimensions must agree. Expected {m} rows, got {b.rows}",
                actual=b.shape,
                expected=(m, b.columns),
            )

        diag = self._diagonal()
        if not self.is_nonsingular():
            rank = int(np.count_nonzero(diag))
            raise SingularMatrixError(
                f"Matrix is singular: {n - rank} zero pivot(s) in U "
                f"(rank of U diagonal={rank}, expected={n})",
                matrix_name='A',
                rank=rank,
                expected_rank=n,
            )
        _warn_if_near_singular(diag, stacklevel)

        # Gather the right-hand side rows into pivot order
        x = b.get_array_copy()[self._piv, :]
        if n == 0:
            return Matrix._wrap(x)

        # L·Y = B[piv, :], then U·X = Y
        y = solve_triangular(self._lu, x, lower=True, unit_diagonal=True, check_finite=False)
        x = solve_triangular(self._lu, y, lower=False, check_finite=False)
        return Matrix._wrap(np.ascontiguousarray(x))


def _warn_if_near_singular(diag: NDArray[np.floating[Any]], stacklevel: int) -> None:
    ratio = relative_pivot_ratio(diag)
    if ratio < NEAR_SINGULAR_RTOL:
        warnings.warn(
            f"Matrix is close to singular: smallest/largest pivot ratio is {ratio:.3e}. "
            f"The solution may be inaccurate.",
            RuntimeWarning,
            stacklevel=stacklevel,
        )
