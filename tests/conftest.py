"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pylinalg.linalg import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def householder_example():
    """The classic 3×3 Householder QR example."""
    return Matrix.of([[12, -51, 4], [6, 167, -68], [-4, 24, -41]])


@pytest.fixture
def well_conditioned(rng):
    """Random diagonally dominant 5×5 matrix (safely invertible)."""
    n = 5
    A = rng.standard_normal((n, n)) + n * np.eye(n)
    return Matrix.of(A)


@pytest.fixture
def tall_full_rank(rng):
    """Random 8×3 matrix with full column rank."""
    return Matrix.of(rng.standard_normal((8, 3)))


@pytest.fixture
def singular_3x3():
    """Second row is twice the first."""
    return Matrix.of([[1, 2, 3], [2, 4, 6], [4, 5, 6]])
