"""
Tests for 4x4 inversion (Gauss-Jordan with full pivoting).

Validates:
    - Inverse against numpy.linalg.inv and the identity products
    - The receiver is left untouched
    - Singular matrices raise SingularMatrixError with pivot diagnostics
    - The early-abort path warns and returns the partial result
"""

import warnings

import numpy as np
import pytest

from pyvecmat.core.exceptions import (
    DegenerateInversionWarning,
    NumericalError,
    SingularMatrixError,
)
from pyvecmat.matrices import Matrix4x4d, Matrix4x4f, factory
from pyvecmat.vectors import Vector3d


# ═══════════════════════════════════════════════════════════════════════
# Regular matrices
# ═══════════════════════════════════════════════════════════════════════


class TestInverse:

    def test_diagonal(self):
        result = factory.diagonal(2, 4, 5, 1).invert()
        assert type(result) is Matrix4x4d
        assert result == factory.diagonal(0.5, 0.25, 0.2, 1)

    def test_matches_numpy(self, invertible_4x4):
        expected = np.linalg.inv(invertible_4x4.as_array())
        np.testing.assert_allclose(invertible_4x4.invert().as_array(), expected, rtol=1e-10, atol=1e-12)

    def test_identity_products(self, invertible_4x4):
        inverse = invertible_4x4.invert()
        identity = Matrix4x4d.identity()
        assert inverse * invertible_4x4 == identity
        assert invertible_4x4 * inverse == identity

    def test_receiver_unchanged(self, invertible_4x4):
        before = invertible_4x4.as_array()
        invertible_4x4.invert()
        np.testing.assert_array_equal(invertible_4x4.as_array(), before)

    def test_permutation_requires_row_swaps(self):
        m = Matrix4x4d(
            0, 1, 0, 0,
            0, 0, 1, 0,
            0, 0, 0, 1,
            1, 0, 0, 0,
        )
        assert m.invert() == m.transpose()

    def test_off_diagonal_pivots(self):
        values = np.array([
            [1.0, 9.0, 0.0, 2.0],
            [3.0, 0.5, 7.0, 0.0],
            [0.0, 2.0, 1.0, 8.0],
            [6.0, 0.0, 0.5, 1.0],
        ])
        result = Matrix4x4d(*values.reshape(-1)).invert()
        np.testing.assert_allclose(result.as_array(), np.linalg.inv(values), atol=1e-12)

    def test_affine_round_trip(self):
        m = (
            Matrix4x4d.rotation(Vector3d(1, 1, 0), 0.4)
            * Matrix4x4d.translation(Vector3d(3, -2, 1))
        )
        assert m.invert().invert() == m

    def test_single_precision(self):
        result = Matrix4x4f(*np.diag([2.0, 4.0, 8.0, 0.5]).reshape(-1)).invert()
        assert type(result) is Matrix4x4f
        assert result == Matrix4x4f(*np.diag([0.5, 0.25, 0.125, 2.0]).reshape(-1))


# ═══════════════════════════════════════════════════════════════════════
# Singular and degenerate matrices
# ═══════════════════════════════════════════════════════════════════════


class TestSingular:

    def test_zero_matrix_raises(self):
        with pytest.raises(SingularMatrixError) as info:
            Matrix4x4d().invert()
        assert info.value.matrix_name == "Matrix4x4d"
        assert info.value.pivot_index == 0
        assert info.value.pivot_value == 0.0

    def test_is_a_numerical_error(self):
        with pytest.raises(NumericalError):
            Matrix4x4d().invert()
        with pytest.raises(ArithmeticError):
            Matrix4x4f().invert()

    def test_tiny_last_pivot(self):
        m = factory.diagonal(1, 1, 1, 1e-12)
        with pytest.raises(SingularMatrixError, match="singular") as info:
            m.invert()
        assert info.value.pivot_index == 3
        assert info.value.pivot_value == pytest.approx(1e-12)

    def test_tolerance_follows_precision(self):
        values = np.diag([1.0, 1.0, 1.0, 1e-7]).reshape(-1)
        inverse = Matrix4x4d(*values).invert()
        assert inverse[3, 3] == pytest.approx(1e7)
        with pytest.raises(SingularMatrixError):
            Matrix4x4f(*values).invert()

    def test_early_abort_warns_and_returns_partial_result(self):
        m = factory.diagonal(1, 0, 0, 0)
        with pytest.warns(DegenerateInversionWarning, match="partially inverted"):
            result = m.invert()
        assert result == factory.diagonal(1, 0, 0, 0)

    def test_early_abort_does_not_raise(self):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DegenerateInversionWarning)
            result = factory.one(4).invert()
        assert result.shape == (4, 4)

    def test_zero_last_pivot_reuses_previous_pivot(self):
        m = factory.diagonal(1, 1, 1, 0)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = m.invert()
        np.testing.assert_array_equal(result.as_array(), np.diag([1.0, 1.0, 1.0, 0.0]))
