"""
General N-dimensional vector.

VectorN is array-backed and supports any dimension >= 1. Unlike the fixed
vectors it is mutable through its indexer, but its dimension never changes
after construction.

Construction either copies the supplied values (VectorNd(1, 2, 3)) or takes
ownership of a caller-supplied array without copying
(VectorNd.from_owned(array)); in the latter case the caller must treat the
array as consumed.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pyvecmat.core.exceptions import DataCorruptionError, ValidationError
from pyvecmat.core.precision import DOUBLE, SINGLE
from pyvecmat.core.validation import (
    check_1d,
    check_array,
    check_index,
    check_not_none,
    check_positive_size,
)
from pyvecmat.vectors.base import BaseVector, V, _components_equal, register_vector_type


class VectorN(BaseVector):
    """
    Vector of arbitrary dimension backed by a 1-D numpy array.

    Reads at or beyond the dimension return 0; writes must stay inside
    [0, dimension). The numeric operations inherited from BaseVector
    already work over max(left, right) with zero padding.
    """
    __slots__ = ()

    def __init__(self, *values: float):
        if len(values) == 1 and not np.isscalar(values[0]):
            # VectorNd([1, 2, 3]) behaves like VectorNd(1, 2, 3)
            values = values[0]
        array = check_array(values, 'values')
        self._v = _validated(np.array(array, dtype=self._PRECISION.dtype))

    @classmethod
    def _from_array(cls: type[V], values: np.ndarray) -> V:
        obj = cls.__new__(cls)
        obj._v = np.asarray(values, dtype=cls._PRECISION.dtype)
        return obj

    @classmethod
    def from_owned(cls: type[V], array: np.ndarray) -> V:
        """
        Wrap an existing array without copying it.

        The array is shared when it is already one-dimensional with this
        precision's dtype; writes through the vector are then visible in it.

        Raises:
            NullArgumentError: If array is None
            ValidationError: If array is empty or not numeric
            DimensionError: If array is not one-dimensional
        """
        check_not_none(array, 'array')
        if not isinstance(array, np.ndarray):
            array = check_array(array, 'array')
        obj = cls.__new__(cls)
        obj._v = _validated(np.asarray(array, dtype=cls._PRECISION.dtype))
        return obj

    @classmethod
    def zero(cls: type[V], dimension: int) -> V:
        check_positive_size(dimension, 'dimension')
        return cls._from_array(np.zeros(dimension))

    @classmethod
    def one(cls: type[V], dimension: int) -> V:
        check_positive_size(dimension, 'dimension')
        return cls._from_array(np.ones(dimension))

    def __setitem__(self, index: int, value: float) -> None:
        """
        Overwrite a component in place.

        Raises:
            IndexOutOfRangeError: If index is outside [0, dimension)
        """
        check_index(index, self._v.shape[0], 'index')
        self._v[index] = value

    def __eq__(self, other: Any) -> bool:
        """
        Approximate equality over the larger of the two dimensions.

        Missing trailing components count as 0, so VectorNd(1, 2) equals
        VectorNd(1, 2, 0).
        """
        if not isinstance(other, BaseVector):
            return NotImplemented
        return _components_equal(self, other, max(self.dimension, other.dimension))

    # defining __eq__ resets the inherited hash
    __hash__ = BaseVector.__hash__

    def to_snapshot(self) -> dict[str, Any]:
        """Snapshot of the raw component array."""
        return {'values': [float(v) for v in self._v]}

    @classmethod
    def from_snapshot(cls: type[V], snapshot: dict[str, Any]) -> V:
        """
        Restore a vector from to_snapshot output.

        Raises:
            DataCorruptionError: If 'values' is missing, empty or not numeric
        """
        if not isinstance(snapshot, dict) or 'values' not in snapshot:
            raise DataCorruptionError("values: missing from snapshot", field='values')
        values = snapshot['values']
        if not isinstance(values, (list, tuple)):
            raise DataCorruptionError(
                f"values: expected a list, got {type(values).__name__}", field='values'
            )
        try:
            return cls(values)
        except ValidationError as e:
            raise DataCorruptionError(f"values: {e}", field='values') from e


def _validated(array: np.ndarray) -> np.ndarray:
    check_1d(array, 'values')
    if array.shape[0] == 0:
        raise ValidationError("values: a vector needs at least one dimension")
    return array


@register_vector_type(None, DOUBLE)
class VectorNd(VectorN):
    __slots__ = ()
    _PRECISION = DOUBLE


@register_vector_type(None, SINGLE)
class VectorNf(VectorN):
    __slots__ = ()
    _PRECISION = SINGLE
