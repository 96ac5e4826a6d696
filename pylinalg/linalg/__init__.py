"""
Dense linear algebra engine.

All types hold float64 data in a single contiguous NumPy buffer that they
own exclusively.

Public API:
    Vector: 1D container with elementwise arithmetic and zero-pad broadcasting
    Matrix: 2D container with arithmetic, submatrices, solve/inverse/determinant
    LUDecomposition: partial-pivoted Gaussian elimination (square systems)
    QRDecomposition: Householder QR (least squares, rows >= columns)

Example:
    >>> from pylinalg.linalg import Matrix
    >>> A = Matrix.of([[2, 0], [0, 2]])
    >>> A.solve(Matrix.of([[4], [6]]))
    Matrix([[2.0], [3.0]])
"""

from pylinalg.linalg.vector import Vector
from pylinalg.linalg.matrix import Matrix
from pylinalg.linalg.lu import LUDecomposition
from pylinalg.linalg.qr import QRDecomposition

__all__ = [
    "Vector",
    "Matrix",
    "LUDecomposition",
    "QRDecomposition",
]
