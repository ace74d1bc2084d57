"""
3x3 matrices with closed-form arithmetic.

Matrix3x3d and Matrix3x3f override the generic loops of Matrix with fully
unrolled expressions whenever every operand is a 3x3 matrix; mixed
operands (for example a 3x3 plus a general 3x3) fall back to the loops.
"""

from __future__ import annotations

from typing import Any

from pyvecmat.core.precision import DOUBLE, SINGLE
from pyvecmat.matrices.base import Matrix, MatrixD, MatrixF, register_matrix_type
from pyvecmat.matrices.fixed import FixedMatrix
from pyvecmat.vectors import BaseVector, vector_type


class Matrix3x3(FixedMatrix):
    """
    3x3 matrix stored in the slots x00 .. x22.

    Row/column accessors return and accept 3-vectors.
    """
    __slots__ = ('x00', 'x01', 'x02', 'x10', 'x11', 'x12', 'x20', 'x21', 'x22')

    _SIZE = 3
    _FIELDS = __slots__

    def __init__(
        self,
        x00: float = 0.0, x01: float = 0.0, x02: float = 0.0,
        x10: float = 0.0, x11: float = 0.0, x12: float = 0.0,
        x20: float = 0.0, x21: float = 0.0, x22: float = 0.0,
    ):
        Matrix.__init__(self, 3, 3)
        self._assign(x00, x01, x02, x10, x11, x12, x20, x21, x22)

    def _values(self) -> tuple[Any, ...]:
        return (
            self.x00, self.x01, self.x02,
            self.x10, self.x11, self.x12,
            self.x20, self.x21, self.x22,
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

    # === Unrolled arithmetic ===

    def _add_into(self, other: Matrix, output: Matrix) -> None:
        if not (isinstance(other, Matrix3x3) and isinstance(output, Matrix3x3)):
            super()._add_into(other, output)
            return
        a, b = self, other
        output._assign(
            a.x00 + b.x00, a.x01 + b.x01, a.x02 + b.x02,
            a.x10 + b.x10, a.x11 + b.x11, a.x12 + b.x12,
            a.x20 + b.x20, a.x21 + b.x21, a.x22 + b.x22,
        )

    def _subtract_into(self, other: Matrix, output: Matrix) -> None:
        if not (isinstance(other, Matrix3x3) and isinstance(output, Matrix3x3)):
            super()._subtract_into(other, output)
            return
        a, b = self, other
        output._assign(
            a.x00 - b.x00, a.x01 - b.x01, a.x02 - b.x02,
            a.x10 - b.x10, a.x11 - b.x11, a.x12 - b.x12,
            a.x20 - b.x20, a.x21 - b.x21, a.x22 - b.x22,
        )

    def _multiply_into(self, other: Matrix, output: Matrix) -> None:
        if not (isinstance(other, Matrix3x3) and isinstance(output, Matrix3x3)):
            super()._multiply_into(other, output)
            return
        a, b = self, other
        output._assign(
            a.x00 * b.x00 + a.x01 * b.x10 + a.x02 * b.x20,
            a.x00 * b.x01 + a.x01 * b.x11 + a.x02 * b.x21,
            a.x00 * b.x02 + a.x01 * b.x12 + a.x02 * b.x22,

            a.x10 * b.x00 + a.x11 * b.x10 + a.x12 * b.x20,
            a.x10 * b.x01 + a.x11 * b.x11 + a.x12 * b.x21,
            a.x10 * b.x02 + a.x11 * b.x12 + a.x12 * b.x22,

            a.x20 * b.x00 + a.x21 * b.x10 + a.x22 * b.x20,
            a.x20 * b.x01 + a.x21 * b.x11 + a.x22 * b.x21,
            a.x20 * b.x02 + a.x21 * b.x12 + a.x22 * b.x22,
        )

    def _scale_into(self, factor: float, output: Matrix) -> None:
        if not isinstance(output, Matrix3x3):
            super()._scale_into(factor, output)
            return
        a = self
        f = self._PRECISION.cast(factor)
        output._assign(
            a.x00 * f, a.x01 * f, a.x02 * f,
            a.x10 * f, a.x11 * f, a.x12 * f,
            a.x20 * f, a.x21 * f, a.x22 * f,
        )

    def _negate_into(self, output: Matrix) -> None:
        if not isinstance(output, Matrix3x3):
            super()._negate_into(output)
            return
        a = self
        output._assign(
            -a.x00, -a.x01, -a.x02,
            -a.x10, -a.x11, -a.x12,
            -a.x20, -a.x21, -a.x22,
        )

    def _transpose_into(self, output: Matrix) -> None:
        if not isinstance(output, Matrix3x3):
            super()._transpose_into(output)
            return
        a = self
        output._assign(
            a.x00, a.x10, a.x20,
            a.x01, a.x11, a.x21,
            a.x02, a.x12, a.x22,
        )

    def multiply_column(self, vector: BaseVector) -> BaseVector:
        if vector is None or vector.dimension != 3:
            return super().multiply_column(vector)
        a = self
        x, y, z = vector[0], vector[1], vector[2]
        return vector_type(3, self._PRECISION)(
            a.x00 * x + a.x01 * y + a.x02 * z,
            a.x10 * x + a.x11 * y + a.x12 * z,
            a.x20 * x + a.x21 * y + a.x22 * z,
        )

    def multiply_row(self, vector: BaseVector) -> BaseVector:
        if vector is None or vector.dimension != 3:
            return super().multiply_row(vector)
        a = self
        x, y, z = vector[0], vector[1], vector[2]
        return vector_type(3, self._PRECISION)(
            x * a.x00 + y * a.x10 + z * a.x20,
            x * a.x01 + y * a.x11 + z * a.x21,
            x * a.x02 + y * a.x12 + z * a.x22,
        )


@register_matrix_type((3, 3), DOUBLE)
class Matrix3x3d(Matrix3x3, MatrixD):
    __slots__ = ()


@register_matrix_type((3, 3), SINGLE)
class Matrix3x3f(Matrix3x3, MatrixF):
    __slots__ = ()
