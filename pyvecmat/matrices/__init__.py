"""
Fixed-size and general matrices in double and single precision.

Public API (module `factory`):
    zero(rows, columns) -> Matrix
    one(rows, columns, scale) -> Matrix
    identity(size, scale) -> Matrix
    diagonal(*values) -> Matrix
    build(rows, columns, data) -> Matrix
    build_rows(columns, rows) -> Matrix
    from_array(array) -> Matrix
    from_snapshot(snapshot) -> Matrix

Every factory function accepts precision='double' or 'single' and returns
the 3x3 or 4x4 specialization when the shape matches.

Example:
    >>> from pyvecmat.matrices import factory, Matrix4x4d
    >>> m = factory.diagonal(2, 4, 5, 1)
    >>> m.invert() == factory.diagonal(0.5, 0.25, 0.2, 1)
    True
"""

from pyvecmat.matrices.base import (
    Matrix,
    MatrixD,
    MatrixF,
    general_matrix_type,
    matrix_type,
    register_matrix_type,
)
from pyvecmat.matrices.fixed import FixedMatrix
from pyvecmat.matrices.fixed3 import Matrix3x3, Matrix3x3d, Matrix3x3f
from pyvecmat.matrices.fixed4 import Matrix4x4, Matrix4x4d, Matrix4x4f
from pyvecmat.matrices.general import MatrixMxN, MatrixMxNd, MatrixMxNf
from pyvecmat.matrices import factory
from pyvecmat.matrices.factory import from_snapshot

__all__ = [
    "factory",
    "from_snapshot",
    "matrix_type",
    "general_matrix_type",
    "register_matrix_type",
    "Matrix",
    "MatrixD",
    "MatrixF",
    "FixedMatrix",
    "Matrix3x3",
    "Matrix3x3d",
    "Matrix3x3f",
    "Matrix4x4",
    "Matrix4x4d",
    "Matrix4x4f",
    "MatrixMxN",
    "MatrixMxNd",
    "MatrixMxNf",
]
