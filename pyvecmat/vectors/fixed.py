"""
Fixed-dimension vectors.

Vector2, Vector3 and Vector4 are immutable value types with named
components. Each comes in a double precision (…d) and a single precision
(…f) flavor that differ only in their storage dtype:

    Vector2d / Vector2f    (x, y)
    Vector3d / Vector3f    (x, y, z)       + cross, barycentric
    Vector4d / Vector4f    (x, y, z, w)

Components are set once at construction; every operation returns a new
instance.
"""

from __future__ import annotations

from typing import Any, ClassVar

import numpy as np

from pyvecmat.core.exceptions import DimensionError
from pyvecmat.core.precision import DOUBLE, SINGLE
from pyvecmat.vectors.base import BaseVector, V, register_vector_type, snapshot_value


class FixedVector(BaseVector):
    """
    Base of the 2, 3 and 4 component vectors.

    The component array is made read-only on construction.
    """
    __slots__ = ()

    _DIMENSION: ClassVar[int] = 0
    _COMPONENTS: ClassVar[tuple[str, ...]] = ('X', 'Y', 'Z', 'W')

    def __init__(self, *components: float):
        values = np.zeros(self._DIMENSION, dtype=self._PRECISION.dtype)
        values[:len(components)] = components
        values.flags.writeable = False
        self._v = values

    @classmethod
    def _from_array(cls: type[V], values: np.ndarray) -> V:
        obj = cls.__new__(cls)
        values = np.asarray(values, dtype=cls._PRECISION.dtype)
        values.flags.writeable = False
        obj._v = values
        return obj

    @classmethod
    def zero(cls: type[V]) -> V:
        return cls._from_array(np.zeros(cls._DIMENSION))

    @classmethod
    def one(cls: type[V]) -> V:
        return cls._from_array(np.ones(cls._DIMENSION))

    @classmethod
    def nan(cls: type[V]) -> V:
        return cls._from_array(np.full(cls._DIMENSION, np.nan))

    def to_snapshot(self) -> dict[str, Any]:
        """Snapshot of the named components, e.g. {'X': 1.0, 'Y': 2.0}."""
        return {
            name: float(value)
            for name, value in zip(self._COMPONENTS, self._v)
        }

    @classmethod
    def from_snapshot(cls: type[V], snapshot: dict[str, Any]) -> V:
        """
        Restore a vector from to_snapshot output.

        Raises:
            DataCorruptionError: If a component is missing or malformed
        """
        names = cls._COMPONENTS[:cls._DIMENSION]
        return cls._from_array(np.array([snapshot_value(snapshot, n) for n in names]))


class Vector2(FixedVector):
    """Two component vector (x, y)."""
    __slots__ = ()
    _DIMENSION = 2

    def __init__(self, x: float = 0.0, y: float = 0.0):
        super().__init__(x, y)

    @property
    def x(self) -> np.floating:
        return self._v[0]

    @property
    def y(self) -> np.floating:
        return self._v[1]


class Vector3(FixedVector):
    """Three component vector (x, y, z)."""
    __slots__ = ()
    _DIMENSION = 3

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        super().__init__(x, y, z)

    @property
    def x(self) -> np.floating:
        return self._v[0]

    @property
    def y(self) -> np.floating:
        return self._v[1]

    @property
    def z(self) -> np.floating:
        return self._v[2]

    @classmethod
    def right(cls: type[V]) -> V:
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def left(cls: type[V]) -> V:
        return cls(-1.0, 0.0, 0.0)

    @classmethod
    def up(cls: type[V]) -> V:
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def down(cls: type[V]) -> V:
        return cls(0.0, -1.0, 0.0)

    @classmethod
    def forward(cls: type[V]) -> V:
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def back(cls: type[V]) -> V:
        return cls(0.0, 0.0, -1.0)

    @staticmethod
    def cross(left: Vector3, right: Vector3) -> Vector3:
        """
        Cross product left x right.

        Args:
            left: First 3-vector
            right: Second 3-vector

        Returns:
            New vector of left's type

        Raises:
            DimensionError: If either operand is not 3-dimensional
        """
        for name, vector in (('left', left), ('right', right)):
            if vector.dimension != 3:
                raise DimensionError(
                    f"{name}: the cross product requires dimension 3, got {vector.dimension}",
                    expected=3,
                    actual=vector.dimension,
                )
        a = left._v
        b = right._v
        return left._from_array(np.array([
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ]))

    @staticmethod
    def barycentric(a: Vector3, b: Vector3, c: Vector3, u: float, v: float) -> Vector3:
        """Point a + u (b - a) + v (c - a) of the triangle abc."""
        return a + (b - a) * u + (c - a) * v


class Vector4(FixedVector):
    """Four component vector (x, y, z, w)."""
    __slots__ = ()
    _DIMENSION = 4

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0):
        super().__init__(x, y, z, w)

    @property
    def x(self) -> np.floating:
        return self._v[0]

    @property
    def y(self) -> np.floating:
        return self._v[1]

    @property
    def z(self) -> np.floating:
        return self._v[2]

    @property
    def w(self) -> np.floating:
        return self._v[3]


@register_vector_type(2, DOUBLE)
class Vector2d(Vector2):
    __slots__ = ()
    _PRECISION = DOUBLE


@register_vector_type(2, SINGLE)
class Vector2f(Vector2):
    __slots__ = ()
    _PRECISION = SINGLE


@register_vector_type(3, DOUBLE)
class Vector3d(Vector3):
    __slots__ = ()
    _PRECISION = DOUBLE


@register_vector_type(3, SINGLE)
class Vector3f(Vector3):
    __slots__ = ()
    _PRECISION = SINGLE


@register_vector_type(4, DOUBLE)
class Vector4d(Vector4):
    __slots__ = ()
    _PRECISION = DOUBLE


@register_vector_type(4, SINGLE)
class Vector4f(Vector4):
    __slots__ = ()
    _PRECISION = SINGLE
