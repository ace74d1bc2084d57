"""
Fixed-size and general vectors in double and single precision.

Public API:
    build(*values, precision=...) -> Vector
    build_owned(array, precision=...) -> Vector

The factory functions pick the specialized 2/3/4 component types when the
number of values permits and fall back to the general vector otherwise.

Example:
    >>> from pyvecmat.vectors import build, Vector3d
    >>> v = build(1, 0, 0)
    >>> Vector3d.cross(v, Vector3d(0, 1, 0))
    Vector[0.0, 0.0, 1.0]
"""

from pyvecmat.vectors.base import BaseVector, register_vector_type, vector_type
from pyvecmat.vectors.fixed import (
    FixedVector,
    Vector2,
    Vector2d,
    Vector2f,
    Vector3,
    Vector3d,
    Vector3f,
    Vector4,
    Vector4d,
    Vector4f,
)
from pyvecmat.vectors.general import VectorN, VectorNd, VectorNf
from pyvecmat.vectors.factory import build, build_owned

__all__ = [
    "build",
    "build_owned",
    "vector_type",
    "register_vector_type",
    "BaseVector",
    "FixedVector",
    "Vector2",
    "Vector2d",
    "Vector2f",
    "Vector3",
    "Vector3d",
    "Vector3f",
    "Vector4",
    "Vector4d",
    "Vector4f",
    "VectorN",
    "VectorNd",
    "VectorNf",
]
