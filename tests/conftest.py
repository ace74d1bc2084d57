"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyvecmat.matrices import Matrix4x4d, MatrixMxNd


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def invertible_4x4(rng):
    """Well-conditioned 4x4 matrix (diagonally dominant)."""
    values = rng.standard_normal((4, 4)) + 6.0 * np.eye(4)
    return Matrix4x4d(*values.reshape(-1))


@pytest.fixture
def rect_2x3():
    """Small general matrix with distinct elements."""
    return MatrixMxNd(2, 3, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
