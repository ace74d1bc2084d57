"""
PyVecMat: fixed-size and arbitrary-size vectors and matrices for Python.

A small linear-algebra kernel in double and single precision with
specialized 2/3/4 component vectors and 3x3/4x4 matrices. Factories pick
the specialized representation whenever the size permits.

Submodules:
    core: Precision tiers, exceptions, validation, hashing, formatting
    vectors: Fixed and general vectors, vector factory
    matrices: Fixed and general matrices, matrix factory
"""

__version__ = "0.1.0"

from pyvecmat.core.precision import DOUBLE, SINGLE, Precision, approx_equal
from pyvecmat.core.exceptions import (
    PyVecMatError,
    ValidationError,
    DimensionError,
    NullArgumentError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
    DataCorruptionError,
    DegenerateInversionWarning,
)
from pyvecmat import vectors
from pyvecmat import matrices
from pyvecmat.vectors import (
    Vector2d,
    Vector2f,
    Vector3d,
    Vector3f,
    Vector4d,
    Vector4f,
    VectorNd,
    VectorNf,
)
from pyvecmat.matrices import (
    Matrix,
    Matrix3x3d,
    Matrix3x3f,
    Matrix4x4d,
    Matrix4x4f,
    MatrixMxNd,
    MatrixMxNf,
)

__all__ = [
    "__version__",
    "vectors",
    "matrices",
    "DOUBLE",
    "SINGLE",
    "Precision",
    "approx_equal",
    # Exceptions
    "PyVecMatError",
    "ValidationError",
    "DimensionError",
    "NullArgumentError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    "DataCorruptionError",
    "DegenerateInversionWarning",
    # Types
    "Vector2d",
    "Vector2f",
    "Vector3d",
    "Vector3f",
    "Vector4d",
    "Vector4f",
    "VectorNd",
    "VectorNf",
    "Matrix",
    "Matrix3x3d",
    "Matrix3x3f",
    "Matrix4x4d",
    "Matrix4x4f",
    "MatrixMxNd",
    "MatrixMxNf",
]
