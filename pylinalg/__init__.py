"""
PyLinalg: dense numerical linear algebra for Python.

Fixed-size real matrices and vectors, LU (partial pivoting) and QR
(Householder) decompositions, and the solve / inverse / determinant
operations built on them.

Submodules:
    core: exceptions, validation, tolerances
    linalg: Vector, Matrix, LUDecomposition, QRDecomposition
"""

__version__ = "0.1.0"

from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
)
from pylinalg.linalg import Vector, Matrix, LUDecomposition, QRDecomposition

__all__ = [
    "__version__",
    # Types
    "Vector",
    "Matrix",
    "LUDecomposition",
    "QRDecomposition",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
]
