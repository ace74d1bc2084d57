"""
Tests for the 3-vector specific operations: direction constants, the
cross product and barycentric interpolation.
"""

import numpy as np
import pytest

from pyvecmat.core.exceptions import DimensionError
from pyvecmat.vectors import Vector2d, Vector3, Vector3d, Vector3f, VectorNd


class TestDirections:

    @pytest.mark.parametrize("name, expected", [
        ("right", (1, 0, 0)),
        ("left", (-1, 0, 0)),
        ("up", (0, 1, 0)),
        ("down", (0, -1, 0)),
        ("forward", (0, 0, 1)),
        ("back", (0, 0, -1)),
    ])
    def test_constants(self, name, expected):
        assert getattr(Vector3d, name)() == Vector3d(*expected)

    def test_constants_keep_precision(self):
        assert type(Vector3f.up()) is Vector3f

    def test_opposites_cancel(self):
        assert Vector3d.left() + Vector3d.right() == Vector3d.zero()


class TestCross:

    def test_basis(self):
        assert Vector3.cross(Vector3d.right(), Vector3d.up()) == Vector3d.forward()
        assert Vector3.cross(Vector3d.up(), Vector3d.forward()) == Vector3d.right()

    def test_anticommutative(self, rng):
        a = Vector3d(*rng.standard_normal(3))
        b = Vector3d(*rng.standard_normal(3))
        assert Vector3.cross(a, b) == -Vector3.cross(b, a)

    def test_orthogonal_to_operands(self, rng):
        a = Vector3d(*rng.standard_normal(3))
        b = Vector3d(*rng.standard_normal(3))
        c = Vector3.cross(a, b)
        assert abs(c.dot(a)) < 1e-12
        assert abs(c.dot(b)) < 1e-12

    def test_matches_numpy(self):
        a = Vector3d(1, 2, 3)
        b = Vector3d(-4, 0.5, 2)
        np.testing.assert_allclose(
            Vector3.cross(a, b).as_array(), np.cross(a.as_array(), b.as_array())
        )

    def test_parallel_is_zero(self):
        assert Vector3.cross(Vector3d(1, 2, 3), Vector3d(2, 4, 6)).is_zero

    def test_result_has_left_type(self):
        assert type(Vector3.cross(Vector3f(1, 0, 0), Vector3f(0, 1, 0))) is Vector3f

    def test_general_three_vector_accepted(self):
        result = Vector3.cross(VectorNd(1, 0, 0), VectorNd(0, 1, 0))
        assert result.to_list() == [0.0, 0.0, 1.0]

    def test_wrong_dimension_raises(self):
        with pytest.raises(DimensionError, match="right") as info:
            Vector3.cross(Vector3d(1, 0, 0), Vector2d(0, 1))
        assert info.value.expected == 3
        assert info.value.actual == 2

    def test_general_vector_of_wrong_dimension_raises(self):
        with pytest.raises(DimensionError, match="left"):
            Vector3.cross(VectorNd(1, 0, 0, 0), Vector3d(0, 1, 0))


class TestBarycentric:

    @pytest.fixture
    def triangle(self):
        return Vector3d(0, 0, 0), Vector3d(4, 0, 0), Vector3d(0, 2, 0)

    @pytest.mark.parametrize("u, v, expected", [
        (0, 0, (0, 0, 0)),
        (1, 0, (4, 0, 0)),
        (0, 1, (0, 2, 0)),
        (0.25, 0.5, (1, 1, 0)),
    ])
    def test_points(self, triangle, u, v, expected):
        a, b, c = triangle
        assert Vector3.barycentric(a, b, c, u, v) == Vector3d(*expected)
