"""
QR decomposition via Householder reflections.

For an m×n matrix A with m >= n the decomposition yields an m×n matrix Q
with orthonormal columns and an n×n upper triangular R with A = Q @ R.

The factorization is stored compactly: the strictly upper part of `qr`
holds R above its diagonal, the part at and below the diagonal holds the
Householder vectors, and R's diagonal lives separately in `r_diagonal`.
Q is never formed unless get_q() is called; solve() applies the stored
reflections directly.

Used by Matrix.solve() for non-square systems, where it returns the least
squares solution.
"""

from __future__ import annotations

import math
import warnings
from functools import reduce
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pylinalg.core.exceptions import DimensionError, SingularMatrixError
from pylinalg.core.precision import relative_pivot_ratio
from pylinalg.core.tolerances import NEAR_SINGULAR_RTOL
from pylinalg.linalg.matrix import Matrix


class QRDecomposition:
    """
    Immutable Householder QR factorization of a Matrix.

    Example:
        >>> qr = QRDecomposition(Matrix.of([[12, -51, 4], [6, 167, -68], [-4, 24, -41]]))
        >>> qr.is_full_rank()
        True
    """

    __slots__ = ('_qr', '_r_diagonal')

    def __init__(self, matrix: Matrix):
        qr = matrix.get_array_copy()
        m, n = qr.shape
        if m < n:
            raise DimensionError(
                f"QR decomposition requires rows >= columns, got {m}×{n}",
                actual=(m, n),
            )
        r_diagonal = np.zeros(n, dtype=np.float64)

        for k in range(n):
            # 2-norm of column k below the diagonal, accumulated with hypot
            # so squaring never overflows or underflows
            norm = reduce(math.hypot, qr[k:, k], 0.0)

            if norm != 0.0:
                # Householder sign follows qr[k, k] to avoid cancellation
                if qr[k, k] < 0.0:
                    norm = -norm
                qr[k:, k] /= norm
                qr[k, k] += 1.0

                # Reflect the remaining columns: a_j += s·v, s = -(v·a_j)/v_k
                v = qr[k:, k]
                s = -(v @ qr[k:, k + 1:]) / qr[k, k]
                qr[k:, k + 1:] += np.outer(v, s)

            r_diagonal[k] = -norm

        qr.flags.writeable = False
        r_diagonal.flags.writeable = False
        self._qr: NDArray[np.float64] = qr
        self._r_diagonal: NDArray[np.float64] = r_diagonal

    # === Properties ===

    @property
    def row_count(self) -> int:
        return self._qr.shape[0]

    @property
    def column_count(self) -> int:
        return self._qr.shape[1]

    @property
    def r_diagonal(self) -> NDArray[np.float64]:
        """Copy of R's diagonal."""
        return self._r_diagonal.copy()

    def get_r(self) -> Matrix:
        """Upper triangular factor (columns × columns)."""
        n = self.column_count
        r = np.triu(self._qr[:n, :n], k=1)
        r[np.diag_indices(n)] = self._r_diagonal
        return Matrix._wrap(r)

    def get_q(self) -> Matrix:
        """
        Economy orthogonal factor (rows × columns).

        Built by applying the stored reflections, last to first, to the
        leading columns of the identity.
        """
        m, n = self._qr.shape
        q = np.zeros((m, n), dtype=np.float64)
        for k in range(n - 1, -1, -1):
            q[k, k] = 1.0
            if self._qr[k, k] != 0.0:
                v = self._qr[k:, k]
                s = -(v @ q[k:, k:]) / self._qr[k, k]
                q[k:, k:] += np.outer(v, s)
        return Matrix._wrap(q)

    def get_h(self) -> Matrix:
        """Householder vectors (lower trapezoidal, rows × columns)."""
        return Matrix._wrap(np.tril(self._qr))

    def is_full_rank(self, tol: float = 0.0) -> bool:
        """
        True if no entry of R's diagonal is zero.

        The default comparison is exact. With tol > 0 the factor also
        counts as rank-deficient when the ratio of the smallest to the
        largest |R diagonal| is at or below tol.
        """
        if np.any(self._r_diagonal == 0.0):
            return False
        if tol > 0.0:
            return relative_pivot_ratio(self._r_diagonal) > tol
        return True

    def rank(self, tol: float | None = None) -> int:
        """
        Number of nonzero R diagonal entries.

        Args:
            tol: If given, entries with |r| <= tol·max|r| also count as zero
        """
        magnitudes = np.abs(self._r_diagonal)
        if tol is None or magnitudes.size == 0:
            return int(np.count_nonzero(magnitudes))
        return int(np.sum(magnitudes > tol * magnitudes.max()))

    def solve(self, b: Matrix) -> Matrix:
        """
        Least squares solution of A·X = B.

        Computes Y = Qᵀ·B by applying the stored reflections, then solves
        R·X = Y by back substitution.

        Args:
            b: Right-hand side with the same number of rows as A

        Returns:
            X (columns × B.columns) minimizing ||A·X - B||

        Raises:
            DimensionError: If B.rows != A.rows
            SingularMatrixError: If A is rank-deficient
        """
        return self._solve(b, stacklevel=4)

    def _solve(self, b: Matrix, stacklevel: int) -> Matrix:
        # stacklevel counts frames from warnings.warn up to the public caller
        m, n = self._qr.shape
        if b.rows != m:
            raise DimensionError(
                f"Matrix row dimensions must agree. Expected {m} rows, got {b.rows}",
                actual=b.shape,
                expected=(m, b.columns),
            )
        if not self.is_full_rank():
            rank = self.rank()
            raise SingularMatrixError(
                f"Cannot solve system: matrix is rank deficient "
                f"(has linearly dependent columns): rank={rank}, expected={n}",
                matrix_name='A',
                rank=rank,
                expected_rank=n,
            )
        _warn_if_near_rank_deficient(self._r_diagonal, stacklevel)

        x = b.get_array_copy()
        for k in range(n):
            v = self._qr[k:, k]
            s = -(v @ x[k:, :]) / self._qr[k, k]
            x[k:, :] += np.outer(v, s)

        if n == 0:
            return Matrix._wrap(x[:0].copy())

        solution = solve_triangular(self.get_r().get_array_copy(), x[:n], lower=False,
                                    check_finite=False)
        return Matrix._wrap(np.ascontiguousarray(solution))


def _warn_if_near_rank_deficient(
    r_diagonal: NDArray[np.floating[Any]],
    stacklevel: int,
) -> None:
    ratio = relative_pivot_ratio(r_diagonal)
    if ratio < NEAR_SINGULAR_RTOL:
        warnings.warn(
            f"Matrix is close to rank deficient: smallest/largest |R diagonal| ratio "
            f"is {ratio:.3e}. The least squares solution may be inaccurate.",
            RuntimeWarning,
            stacklevel=stacklevel,
        )
