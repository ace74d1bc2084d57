"""
4x4 matrices: closed-form arithmetic, affine builders and inversion.

Builders follow the row-vector convention: a point p is transformed as
p * M, so translations live in the last row (x30, x31, x32) and
transforms compose left to right (first A, then B is A * B).

Inversion is Gauss-Jordan elimination with full pivoting on a copy of the
matrix. Degenerate inputs end in one of three ways:

    - a pivot that is approximately zero raises SingularMatrixError
    - a pivot scan that runs into an already used column stops early and
      returns the partially eliminated copy, emitting a
      DegenerateInversionWarning
    - a final scan that finds no nonzero candidate reuses the previous
      pivot, which is already 1, and returns the result silently; for
      example diag(1, 1, 1, 0) comes back unchanged
"""

from __future__ import annotations

import math
import warnings
from typing import Any

import numpy as np

from pyvecmat.core.exceptions import DegenerateInversionWarning, SingularMatrixError
from pyvecmat.core.precision import DOUBLE, SINGLE, approx_equal, quiet_divide
from pyvecmat.core.validation import check_not_none
from pyvecmat.matrices.base import M, Matrix, MatrixD, MatrixF, register_matrix_type
from pyvecmat.matrices.fixed import FixedMatrix
from pyvecmat.vectors import BaseVector, Vector3, vector_type


class Matrix4x4(FixedMatrix):
    """
    4x4 matrix stored in the slots x00 .. x33.

    Row/column accessors return and accept 4-vectors.
    """
    __slots__ = (
        'x00', 'x01', 'x02', 'x03',
        'x10', 'x11', 'x12', 'x13',
        'x20', 'x21', 'x22', 'x23',
        'x30', 'x31', 'x32', 'x33',
    )

    _SIZE = 4
    _FIELDS = __slots__

    def __init__(
        self,
        x00: float = 0.0, x01: float = 0.0, x02: float = 0.0, x03: float = 0.0,
        x10: float = 0.0, x11: float = 0.0, x12: float = 0.0, x13: float = 0.0,
        x20: float = 0.0, x21: float = 0.0, x22: float = 0.0, x23: float = 0.0,
        x30: float = 0.0, x31: float = 0.0, x32: float = 0.0, x33: float = 0.0,
    ):
        Matrix.__init__(self, 4, 4)
        self._assign(
            x00, x01, x02, x03,
            x10, x11, x12, x13,
            x20, x21, x22, x23,
            x30, x31, x32, x33,
        )

    def _values(self) -> tuple[Any, ...]:
        return (
            self.x00, self.x01, self.x02, self.x03,
            self.x10, self.x11, self.x12, self.x13,
            self.x20, self.x21, self.x22, self.x23,
            self.x30, self.x31, self.x32, self.x33,
        )

    # === Rows and columns ===

    @property
    def row0(self) -> BaseVector:
        return self.row(0)

    @row0.setter
    def row0(self, vector: BaseVector) -> None:
        self.set_row(0, vector)

    @property
    def row1(self) -> BaseVector:
        return self.row(1)

    @row1.setter
    def row1(self, vector: BaseVector) -> None:
        self.set_row(1, vector)

    @property
    def row2(self) -> BaseVector:
        return self.row(2)

    @row2.setter
    def row2(self, vector: BaseVector) -> None:
        self.set_row(2, vector)

    @property
    def row3(self) -> BaseVector:
        return self.row(3)

    @row3.setter
    def row3(self, vector: BaseVector) -> None:
        self.set_row(3, vector)

    @property
    def column0(self) -> BaseVector:
        return self.column(0)

    @column0.setter
    def column0(self, vector: BaseVector) -> None:
        self.set_column(0, vector)

    @property
    def column1(self) -> BaseVector:
        return self.column(1)

    @column1.setter
    def column1(self, vector: BaseVector) -> None:
        self.set_column(1, vector)

    @property
    def column2(self) -> BaseVector:
        return self.column(2)

    @column2.setter
    def column2(self, vector: BaseVector) -> None:
        self.set_column(2, vector)

    @property
    def column3(self) -> BaseVector:
        return self.column(3)

    @column3.setter
    def column3(self, vector: BaseVector) -> None:
        self.set_column(3, vector)

    # === Affine builders ===

    @classmethod
    def scaling(cls: type[M], vector: BaseVector) -> M:
        """Scale by vector's x, y and z."""
        check_not_none(vector, 'vector')
        return cls(
            vector[0], 0.0, 0.0, 0.0,
            0.0, vector[1], 0.0, 0.0,
            0.0, 0.0, vector[2], 0.0,
            0.0, 0.0, 0.0, 1.0,
        )

    @classmethod
    def translation(cls: type[M], vector: BaseVector) -> M:
        """Translate by vector's x, y and z."""
        check_not_none(vector, 'vector')
        return cls(
            1.0, 0.0, 0.0, 0.0,
            0.0, 1.0, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            vector[0], vector[1], vector[2], 1.0,
        )

    @classmethod
    def rotation(cls: type[M], axis: BaseVector, angle: float) -> M:
        """
        Rotation by angle radians about an arbitrary axis (Rodrigues' formula).

        The axis is normalized first; a zero axis yields NaN elements.
        """
        check_not_none(axis, 'axis')
        n = np.array([axis[0], axis[1], axis[2]], dtype=np.float64)
        x, y, z = quiet_divide(n, np.sqrt(np.dot(n, n)))

        cos = math.cos(-angle)
        sin = math.sin(-angle)
        inv_cos = 1.0 - cos

        return cls(
            inv_cos * x * x + cos, inv_cos * x * y - sin * z, inv_cos * x * z + sin * y, 0.0,
            inv_cos * x * y + sin * z, inv_cos * y * y + cos, inv_cos * y * z - sin * x, 0.0,
            inv_cos * x * z - sin * y, inv_cos * y * z + sin * x, inv_cos * z * z + cos, 0.0,
            0.0, 0.0, 0.0, 1.0,
        )

    @classmethod
    def rotation_x(cls: type[M], theta: float) -> M:
        """Rotation by theta radians about the x axis."""
        cos = math.cos(theta)
        sin = math.sin(theta)
        return cls(
            1.0, 0.0, 0.0, 0.0,
            0.0, cos, sin, 0.0,
            0.0, -sin, cos, 0.0,
            0.0, 0.0, 0.0, 1.0,
        )

    @classmethod
    def rotation_y(cls: type[M], theta: float) -> M:
        """Rotation by theta radians about the y axis."""
        cos = math.cos(theta)
        sin = math.sin(theta)
        return cls(
            cos, 0.0, -sin, 0.0,
            0.0, 1.0, 0.0, 0.0,
            sin, 0.0, cos, 0.0,
            0.0, 0.0, 0.0, 1.0,
        )

    @classmethod
    def rotation_z(cls: type[M], theta: float) -> M:
        """Rotation by theta radians about the z axis."""
        cos = math.cos(theta)
        sin = math.sin(theta)
        return cls(
            cos, sin, 0.0, 0.0,
            -sin, cos, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            0.0, 0.0, 0.0, 1.0,
        )

    @classmethod
    def look_at(cls: type[M], eye: BaseVector, target: BaseVector, up: BaseVector) -> M:
        """
        View matrix for a camera at eye looking at target.

        The basis is built with two cross products. When up is parallel to
        the view direction the left axis cannot be derived and a fixed axis
        is used instead; the same applies to the derived up axis.

        Args:
            eye: Camera position
            target: Point looked at
            up: Approximate up direction
        """
        for name, vector in (('eye', eye), ('target', target), ('up', up)):
            check_not_none(vector, name)

        vec3 = vector_type(3, cls._PRECISION)
        eye = eye.to_dimension(3).to_precision(cls._PRECISION)
        target = target.to_dimension(3).to_precision(cls._PRECISION)
        up = up.to_dimension(3).to_precision(cls._PRECISION)

        direction = (eye - target).normalized()
        left = Vector3.cross(up, direction).normalized()
        if not left.is_normalized:
            left = vec3.left() if up == direction else vec3.right()

        new_up = Vector3.cross(direction, left).normalized()
        if not new_up.is_normalized:
            new_up = vec3.up() if direction == left else vec3.down()

        result = cls(
            left[0], new_up[0], direction[0], 0.0,
            left[1], new_up[1], direction[1], 0.0,
            left[2], new_up[2], direction[2], 0.0,
            0.0, 0.0, 0.0, 1.0,
        )
        return cls.translation(-eye).multiply(result)

    @classmethod
    def frustum(
        cls: type[M],
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float,
    ) -> M:
        """Perspective projection for the view volume bounded by the six planes."""
        width = right - left
        height = top - bottom
        depth = far - near
        return cls(
            2.0 * near / width, 0.0, 0.0, 0.0,
            0.0, 2.0 * near / height, 0.0, 0.0,
            (right + left) / width, (top + bottom) / height, -(far + near) / depth, -1.0,
            0.0, 0.0, -(far * 2.0 * near / depth), 0.0,
        )

    @classmethod
    def orthographic(cls: type[M], *args: float) -> M:
        """
        Orthographic projection.

        Called either as orthographic(width, height, near, far), centered on
        the origin, or as orthographic(left, right, bottom, top, near, far).

        Raises:
            TypeError: If neither 4 nor 6 arguments are given
        """
        if len(args) == 4:
            width, height, near, far = args
            return cls.orthographic(
                -width / 2.0, width / 2.0, -height / 2.0, height / 2.0, near, far
            )
        if len(args) != 6:
            raise TypeError(
                f"orthographic() takes 4 (width, height, near, far) or 6 "
                f"(left, right, bottom, top, near, far) arguments, got {len(args)}"
            )

        left, right, bottom, top, near, far = args
        inv_width = 1.0 / (right - left)
        inv_height = 1.0 / (top - bottom)
        inv_depth = 1.0 / (far - near)
        return cls(
            2.0 * inv_width, 0.0, 0.0, 0.0,
            0.0, 2.0 * inv_height, 0.0, 0.0,
            0.0, 0.0, -2.0 * inv_depth, 0.0,
            -(right + left) * inv_width, -(top + bottom) * inv_height, -(far + near) * inv_depth, 1.0,
        )

    @classmethod
    def perspective(cls: type[M], fov: float, aspect: float, near: float, far: float) -> M:
        """
        Symmetric perspective projection.

        Args:
            fov: Vertical field of view in radians
            aspect: Width divided by height
            near: Distance of the near plane
            far: Distance of the far plane
        """
        top = near * math.tan(fov / 2.0)
        return cls.frustum(aspect * -top, aspect * top, -top, top, near, far)

    # === Inversion ===

    def invert(self) -> Matrix4x4:
        """
        Inverse of this matrix; self is not modified.

        Returns:
            New 4x4 matrix of the same type

        Raises:
            SingularMatrixError: If a pivot is approximately zero
        """
        result = self.clone()
        pivot_columns = [0, 0, 0, 0]
        pivot_rows = [0, 0, 0, 0]
        # -1: not a pivot yet, 0: pivot, >0: chosen more than once
        used = [-1, -1, -1, -1]

        a = 0
        b = 0
        for i in range(4):
            largest = 0.0
            for j in range(4):
                if used[j] == 0:
                    continue
                for k in range(4):
                    if used[k] == -1:
                        candidate = abs(result.get_at(j, k))
                        if candidate > largest:
                            largest = candidate
                            b = j
                            a = k
                    elif used[k] > 0:
                        warnings.warn(
                            f"pivot column {k} was selected twice at step {i}; "
                            f"returning the partially inverted matrix",
                            DegenerateInversionWarning,
                            stacklevel=2,
                        )
                        return result

            used[a] += 1
            if b != a:
                for k in range(4):
                    swap = result.get_at(b, k)
                    result.set_at(b, k, result.get_at(a, k))
                    result.set_at(a, k, swap)

            pivot_rows[i] = b
            pivot_columns[i] = a

            pivot = result.get_at(a, a)
            if approx_equal(pivot, 0.0, self._PRECISION.epsilon):
                raise SingularMatrixError(
                    f"matrix is singular and cannot be inverted "
                    f"(pivot {float(pivot)!r} at step {i})",
                    matrix_name=type(self).__name__,
                    pivot_index=i,
                    pivot_value=float(pivot),
                )

            inverse_pivot = self._PRECISION.cast(1.0) / pivot
            result.set_at(a, a, 1.0)
            for k in range(4):
                result.set_at(a, k, result.get_at(a, k) * inverse_pivot)

            for j in range(4):
                if j == a:
                    continue
                factor = result.get_at(j, a)
                result.set_at(j, a, 0.0)
                for k in range(4):
                    result.set_at(j, k, result.get_at(j, k) - result.get_at(a, k) * factor)

        for i in range(3, -1, -1):
            first = pivot_rows[i]
            second = pivot_columns[i]
            for j in range(4):
                swap = result.get_at(j, first)
                result.set_at(j, first, result.get_at(j, second))
                result.set_at(j, second, swap)

        return result

    # === Unrolled arithmetic ===

    def _add_into(self, other: Matrix, output: Matrix) -> None:
        if not (isinstance(other, Matrix4x4) and isinstance(output, Matrix4x4)):
            super()._add_into(other, output)
            return
        a, b = self, other
        output._assign(
            a.x00 + b.x00, a.x01 + b.x01, a.x02 + b.x02, a.x03 + b.x03,
            a.x10 + b.x10, a.x11 + b.x11, a.x12 + b.x12, a.x13 + b.x13,
            a.x20 + b.x20, a.x21 + b.x21, a.x22 + b.x22, a.x23 + b.x23,
            a.x30 + b.x30, a.x31 + b.x31, a.x32 + b.x32, a.x33 + b.x33,
        )

    def _subtract_into(self, other: Matrix, output: Matrix) -> None:
        if not (isinstance(other, Matrix4x4) and isinstance(output, Matrix4x4)):
            super()._subtract_into(other, output)
            return
        a, b = self, other
        output._assign(
            a.x00 - b.x00, a.x01 - b.x01, a.x02 - b.x02, a.x03 - b.x03,
            a.x10 - b.x10, a.x11 - b.x11, a.x12 - b.x12, a.x13 - b.x13,
            a.x20 - b.x20, a.x21 - b.x21, a.x22 - b.x22, a.x23 - b.x23,
            a.x30 - b.x30, a.x31 - b.x31, a.x32 - b.x32, a.x33 - b.x33,
        )

    def _multiply_into(self, other: Matrix, output: Matrix) -> None:
        if not (isinstance(other, Matrix4x4) and isinstance(output, Matrix4x4)):
            super()._multiply_into(other, output)
            return
        a, b = self, other
        output._assign(
            a.x00 * b.x00 + a.x01 * b.x10 + a.x02 * b.x20 + a.x03 * b.x30,
            a.x00 * b.x01 + a.x01 * b.x11 + a.x02 * b.x21 + a.x03 * b.x31,
            a.x00 * b.x02 + a.x01 * b.x12 + a.x02 * b.x22 + a.x03 * b.x32,
            a.x00 * b.x03 + a.x01 * b.x13 + a.x02 * b.x23 + a.x03 * b.x33,

            a.x10 * b.x00 + a.x11 * b.x10 + a.x12 * b.x20 + a.x13 * b.x30,
            a.x10 * b.x01 + a.x11 * b.x11 + a.x12 * b.x21 + a.x13 * b.x31,
            a.x10 * b.x02 + a.x11 * b.x12 + a.x12 * b.x22 + a.x13 * b.x32,
            a.x10 * b.x03 + a.x11 * b.x13 + a.x12 * b.x23 + a.x13 * b.x33,

            a.x20 * b.x00 + a.x21 * b.x10 + a.x22 * b.x20 + a.x23 * b.x30,
            a.x20 * b.x01 + a.x21 * b.x11 + a.x22 * b.x21 + a.x23 * b.x31,
            a.x20 * b.x02 + a.x21 * b.x12 + a.x22 * b.x22 + a.x23 * b.x32,
            a.x20 * b.x03 + a.x21 * b.x13 + a.x22 * b.x23 + a.x23 * b.x33,

            a.x30 * b.x00 + a.x31 * b.x10 + a.x32 * b.x20 + a.x33 * b.x30,
            a.x30 * b.x01 + a.x31 * b.x11 + a.x32 * b.x21 + a.x33 * b.x31,
            a.x30 * b.x02 + a.x31 * b.x12 + a.x32 * b.x22 + a.x33 * b.x32,
            a.x30 * b.x03 + a.x31 * b.x13 + a.x32 * b.x23 + a.x33 * b.x33,
        )

    def _scale_into(self, factor: float, output: Matrix) -> None:
        if not isinstance(output, Matrix4x4):
            super()._scale_into(factor, output)
            return
        a = self
        f = self._PRECISION.cast(factor)
        output._assign(
            a.x00 * f, a.x01 * f, a.x02 * f, a.x03 * f,
            a.x10 * f, a.x11 * f, a.x12 * f, a.x13 * f,
            a.x20 * f, a.x21 * f, a.x22 * f, a.x23 * f,
            a.x30 * f, a.x31 * f, a.x32 * f, a.x33 * f,
        )

    def _negate_into(self, output: Matrix) -> None:
        if not isinstance(output, Matrix4x4):
            super()._negate_into(output)
            return
        a = self
        output._assign(
            -a.x00, -a.x01, -a.x02, -a.x03,
            -a.x10, -a.x11, -a.x12, -a.x13,
            -a.x20, -a.x21, -a.x22, -a.x23,
            -a.x30, -a.x31, -a.x32, -a.x33,
        )

    def _transpose_into(self, output: Matrix) -> None:
        if not isinstance(output, Matrix4x4):
            super()._transpose_into(output)
            return
        a = self
        output._assign(
            a.x00, a.x10, a.x20, a.x30,
            a.x01, a.x11, a.x21, a.x31,
            a.x02, a.x12, a.x22, a.x32,
            a.x03, a.x13, a.x23, a.x33,
        )

    def multiply_column(self, vector: BaseVector) -> BaseVector:
        if vector is None or vector.dimension != 4:
            return super().multiply_column(vector)
        a = self
        x, y, z, w = vector[0], vector[1], vector[2], vector[3]
        return vector_type(4, self._PRECISION)(
            a.x00 * x + a.x01 * y + a.x02 * z + a.x03 * w,
            a.x10 * x + a.x11 * y + a.x12 * z + a.x13 * w,
            a.x20 * x + a.x21 * y + a.x22 * z + a.x23 * w,
            a.x30 * x + a.x31 * y + a.x32 * z + a.x33 * w,
        )

    def multiply_row(self, vector: BaseVector) -> BaseVector:
        if vector is None or vector.dimension != 4:
            return super().multiply_row(vector)
        a = self
        x, y, z, w = vector[0], vector[1], vector[2], vector[3]
        return vector_type(4, self._PRECISION)(
            x * a.x00 + y * a.x10 + z * a.x20 + w * a.x30,
            x * a.x01 + y * a.x11 + z * a.x21 + w * a.x31,
            x * a.x02 + y * a.x12 + z * a.x22 + w * a.x32,
            x * a.x03 + y * a.x13 + z * a.x23 + w * a.x33,
        )


@register_matrix_type((4, 4), DOUBLE)
class Matrix4x4d(Matrix4x4, MatrixD):
    __slots__ = ()


@register_matrix_type((4, 4), SINGLE)
class Matrix4x4f(Matrix4x4, MatrixF):
    __slots__ = ()
