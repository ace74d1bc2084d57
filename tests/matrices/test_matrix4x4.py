"""
Tests for the fixed 4x4 matrices and the affine/projection builders.

Points are row vectors transformed as p @ M.
"""

import math

import numpy as np
import pytest

from pyvecmat.core.exceptions import NullArgumentError
from pyvecmat.matrices import Matrix4x4d, Matrix4x4f, MatrixMxNd, factory
from pyvecmat.vectors import BaseVector, Vector3d, Vector4d, Vector4f


def _transform(m, x, y, z):
    return Vector4d(x, y, z, 1) @ m


# ═══════════════════════════════════════════════════════════════════════
# Storage and accessors
# ═══════════════════════════════════════════════════════════════════════


class TestStorage:

    def test_named_fields(self):
        m = Matrix4x4d(*range(16))
        assert m.x03 == 3.0
        assert m.x30 == 12.0
        assert m[3, 3] == 15.0

    def test_accessors(self):
        m = Matrix4x4d(*range(16))
        assert m.row2 == Vector4d(8, 9, 10, 11)
        assert m.column3 == Vector4d(3, 7, 11, 15)
        assert type(Matrix4x4f().row0) is Vector4f

    def test_setters(self):
        m = Matrix4x4d()
        m.row3 = Vector4d(1, 2, 3, 4)
        m.column0 = Vector4d(5, 6, 7, 8)
        assert m.row3 == Vector4d(8, 2, 3, 4)
        assert m.column0 == Vector4d(5, 6, 7, 8)

    def test_all_row_and_column_properties(self):
        m = Matrix4x4d(*range(16))
        rows = [m.row0, m.row1, m.row2, m.row3]
        columns = [m.column0, m.column1, m.column2, m.column3]
        np.testing.assert_array_equal([r.as_array() for r in rows], m.as_array())
        np.testing.assert_array_equal([c.as_array() for c in columns], m.as_array().T)


class TestArithmetic:

    def test_multiply_matches_numpy(self, rng):
        a = rng.standard_normal(16)
        b = rng.standard_normal(16)
        result = Matrix4x4d(*a) @ Matrix4x4d(*b)
        np.testing.assert_allclose(result.as_array(), a.reshape(4, 4) @ b.reshape(4, 4))

    @pytest.mark.parametrize("op", ["add", "subtract", "multiply"])
    def test_fast_path_matches_general_path(self, rng, op):
        a = rng.standard_normal(16)
        b = rng.standard_normal(16)
        fixed = getattr(Matrix4x4d(*a), op)(Matrix4x4d(*b))
        general = getattr(MatrixMxNd(4, 4, a), op)(MatrixMxNd(4, 4, b), MatrixMxNd(4, 4))
        assert fixed == general

    def test_transpose_and_negate(self, rng):
        a = rng.standard_normal(16)
        m = Matrix4x4d(*a)
        np.testing.assert_array_equal(m.transpose().as_array(), a.reshape(4, 4).T)
        np.testing.assert_array_equal(m.negate().as_array(), -a.reshape(4, 4))

    def test_identity_times_vector(self):
        assert factory.identity(4) * Vector4d(1, 2, 3, 4) == Vector4d(1, 2, 3, 4)


# ═══════════════════════════════════════════════════════════════════════
# Affine builders
# ═══════════════════════════════════════════════════════════════════════


class TestAffine:

    def test_scaling(self):
        m = Matrix4x4d.scaling(Vector3d(2, 3, 4))
        assert _transform(m, 1, 1, 1) == Vector4d(2, 3, 4, 1)

    def test_translation(self):
        m = Matrix4x4d.translation(Vector3d(1, 2, 3))
        assert m.row3 == Vector4d(1, 2, 3, 1)
        assert _transform(m, 0, 0, 0) == Vector4d(1, 2, 3, 1)

    def test_translation_ignores_directions(self):
        m = Matrix4x4d.translation(Vector3d(1, 2, 3))
        assert Vector4d(1, 0, 0, 0) @ m == Vector4d(1, 0, 0, 0)

    def test_composition_left_to_right(self):
        m = Matrix4x4d.scaling(Vector3d(2, 3, 4)) * Matrix4x4d.translation(Vector3d(1, 2, 3))
        assert _transform(m, 1, 1, 1) == Vector4d(3, 5, 7, 1)

    def test_rotation_z_quarter_turn(self):
        m = Matrix4x4d.rotation_z(math.pi / 2)
        assert _transform(m, 1, 0, 0) == Vector4d(0, 1, 0, 1)

    def test_rotation_x_quarter_turn(self):
        m = Matrix4x4d.rotation_x(math.pi / 2)
        assert _transform(m, 0, 1, 0) == Vector4d(0, 0, 1, 1)

    def test_rotation_y_quarter_turn(self):
        m = Matrix4x4d.rotation_y(math.pi / 2)
        assert _transform(m, 0, 0, 1) == Vector4d(1, 0, 0, 1)

    @pytest.mark.parametrize("axis, builder", [
        ((1, 0, 0), "rotation_x"),
        ((0, 1, 0), "rotation_y"),
        ((0, 0, 1), "rotation_z"),
    ])
    def test_axis_rotation_matches_basis_rotation(self, axis, builder):
        angle = 0.7
        assert Matrix4x4d.rotation(Vector3d(*axis), angle) == getattr(Matrix4x4d, builder)(angle)

    def test_rotation_normalizes_axis(self):
        assert Matrix4x4d.rotation(Vector3d(0, 0, 5), 1.2) == Matrix4x4d.rotation_z(1.2)

    def test_rotation_is_orthonormal(self):
        m = Matrix4x4d.rotation(Vector3d(1, 2, 3), 0.9)
        np.testing.assert_allclose(m.as_array() @ m.as_array().T, np.eye(4), atol=1e-12)

    def test_rotation_about_zero_axis_is_nan(self):
        m = Matrix4x4d.rotation(Vector3d(0, 0, 0), 1.0)
        assert np.isnan(m[0, 0])

    def test_builders_keep_precision(self):
        assert type(Matrix4x4f.rotation_y(1.0)) is Matrix4x4f
        assert isinstance(Matrix4x4f.translation(Vector3d(1, 2, 3)).x30, np.float32)

    def test_none_arguments(self):
        with pytest.raises(NullArgumentError):
            Matrix4x4d.translation(None)
        with pytest.raises(NullArgumentError):
            Matrix4x4d.rotation(None, 1.0)


# ═══════════════════════════════════════════════════════════════════════
# look_at
# ═══════════════════════════════════════════════════════════════════════


class TestLookAt:

    def test_eye_maps_to_origin(self):
        m = Matrix4x4d.look_at(Vector3d(0, 0, 5), Vector3d(0, 0, 0), Vector3d.up())
        assert Vector4d(0, 0, 5, 1) @ m == Vector4d(0, 0, 0, 1)

    def test_target_lies_on_negative_z(self):
        m = Matrix4x4d.look_at(Vector3d(0, 0, 5), Vector3d(0, 0, 0), Vector3d.up())
        assert Vector4d(0, 0, 0, 1) @ m == Vector4d(0, 0, -5, 1)

    def test_off_axis_target_distance(self):
        eye = Vector3d(3, 4, 5)
        target = Vector3d(-1, 0, 2)
        m = Matrix4x4d.look_at(eye, target, Vector3d.up())
        view = Vector4d(target.x, target.y, target.z, 1) @ m
        assert view.x == pytest.approx(0.0, abs=1e-12)
        assert view.y == pytest.approx(0.0, abs=1e-12)
        assert view.z == pytest.approx(-float(BaseVector.distance(eye, target)))

    def test_basis_is_orthonormal(self):
        m = Matrix4x4d.look_at(Vector3d(2, 3, 4), Vector3d(0, 0, 0), Vector3d.up())
        rotation = m.as_array()[:3, :3]
        np.testing.assert_allclose(rotation @ rotation.T, np.eye(3), atol=1e-12)

    def test_up_parallel_to_view_direction_uses_fixed_axis(self):
        m = Matrix4x4d.look_at(Vector3d(0, 0, 5), Vector3d(0, 0, 0), Vector3d(0, 0, 1))
        values = m.as_array()
        assert not np.isnan(values).any()
        assert m.column0 == Vector4d(-1, 0, 0, 0)

    def test_up_antiparallel_to_view_direction(self):
        m = Matrix4x4d.look_at(Vector3d(0, 0, 5), Vector3d(0, 0, 0), Vector3d(0, 0, -1))
        assert not np.isnan(m.as_array()).any()
        assert m.column0 == Vector4d(1, 0, 0, 0)

    def test_none_argument(self):
        with pytest.raises(NullArgumentError, match="target"):
            Matrix4x4d.look_at(Vector3d(), None, Vector3d.up())


# ═══════════════════════════════════════════════════════════════════════
# Projections
# ═══════════════════════════════════════════════════════════════════════


class TestProjections:

    def test_orthographic_six_planes(self):
        m = Matrix4x4d.orthographic(-1, 1, -1, 1, 0, 1)
        expected = Matrix4x4d(
            1, 0, 0, 0,
            0, 1, 0, 0,
            0, 0, -2, 0,
            0, 0, -1, 1,
        )
        assert m == expected

    def test_orthographic_centered_overload(self):
        assert Matrix4x4d.orthographic(4, 2, 0.5, 10) == Matrix4x4d.orthographic(-2, 2, -1, 1, 0.5, 10)

    def test_orthographic_maps_box_corners(self):
        m = Matrix4x4d.orthographic(0, 4, 0, 2, 1, 3)
        assert _transform(m, 0, 0, -1) == Vector4d(-1, -1, -1, 1)
        assert _transform(m, 4, 2, -3) == Vector4d(1, 1, 1, 1)

    @pytest.mark.parametrize("args", [(1, 2, 3), (1, 2, 3, 4, 5), ()])
    def test_orthographic_argument_count(self, args):
        with pytest.raises(TypeError, match="4 .* or 6"):
            Matrix4x4d.orthographic(*args)

    def test_frustum(self):
        m = Matrix4x4d.frustum(-1, 1, -1, 1, 1, 3)
        expected = Matrix4x4d(
            1, 0, 0, 0,
            0, 1, 0, 0,
            0, 0, -2, -1,
            0, 0, -3, 0,
        )
        assert m == expected

    def test_frustum_near_plane_maps_to_minus_one(self):
        m = Matrix4x4d.frustum(-1, 1, -1, 1, 1, 3)
        clip = _transform(m, 0, 0, -1)
        assert clip.z / clip.w == pytest.approx(-1.0)
        clip = _transform(m, 0, 0, -3)
        assert clip.z / clip.w == pytest.approx(1.0)

    def test_perspective_is_symmetric_frustum(self):
        fov = math.pi / 3
        top = 0.5 * math.tan(fov / 2)
        expected = Matrix4x4d.frustum(-2 * top, 2 * top, -top, top, 0.5, 100)
        assert Matrix4x4d.perspective(fov, 2.0, 0.5, 100) == expected

    def test_perspective_right_angle(self):
        m = Matrix4x4d.perspective(math.pi / 2, 1.0, 1.0, 10.0)
        assert m[0, 0] == pytest.approx(1.0)
        assert m[1, 1] == pytest.approx(1.0)
        assert m[2, 2] == pytest.approx(-11.0 / 9.0)
        assert m[2, 3] == -1.0
        assert m[3, 2] == pytest.approx(-20.0 / 9.0)
        assert m[3, 3] == 0.0
