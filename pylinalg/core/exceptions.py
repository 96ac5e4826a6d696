"""
Exception hierarchy for PyLinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Errors are raised at the call site, before any computation begins
"""


class PyLinalgError(Exception):
    """Base exception for all PyLinalg errors."""
    pass


class ValidationError(PyLinalgError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks (negative
    dimensions, ragged grids, empty data sets).
    """
    pass


class DimensionError(ValidationError):
    """
    Operand dimensions are incorrect or inconsistent.

    Raised when shapes don't agree for an elementwise operation, a
    matrix product, a solve, or when an operation requires a square
    matrix and gets a rectangular one.

    Attributes:
        actual: Shape that was supplied, if known
        expected: Shape that was required, if known
    """

    def __init__(
        self,
        message: str,
        actual: tuple[int, ...] | None = None,
        expected: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.actual = actual
        self.expected = expected


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    Element or submatrix index is outside the container.

    Also an IndexError, so generic sequence-handling code catches it.
    """
    pass


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or rank-deficient.

    Raised by solve operations when the LU factor has a zero pivot or
    the QR factor has a zero on the R diagonal. Never raised while a
    decomposition is being constructed.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Number of nonzero pivots, if computed
        expected_rank: Rank required for a solution
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
