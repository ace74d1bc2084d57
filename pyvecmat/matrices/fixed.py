"""
Common base of the fixed-size (3x3 and 4x4) matrices.

Elements are stored as named slots x00 .. x(n-1)(n-1), one numpy scalar of
the matrix's precision each, so element access never goes through an
array. Write elements through set_at or the indexers to keep them in the
storage dtype.
"""

from __future__ import annotations

from typing import Any, ClassVar

import numpy as np

from pyvecmat.core.exceptions import DimensionError
from pyvecmat.core.validation import check_index, check_not_none
from pyvecmat.matrices.base import M, Matrix
from pyvecmat.vectors import BaseVector, vector_type
from pyvecmat.vectors.base import snapshot_value


class FixedMatrix(Matrix):
    """Square matrix of size _SIZE with one slot per element."""
    __slots__ = ()

    _SIZE: ClassVar[int]
    _FIELDS: ClassVar[tuple[str, ...]]

    @classmethod
    def _zeros(cls: type[M], rows: int, columns: int) -> M:
        return cls()

    def _assign(self, *values: Any) -> None:
        """Overwrite every element, row-major, casting to the storage dtype."""
        cast = self._PRECISION.dtype
        for name, value in zip(self._FIELDS, values):
            setattr(self, name, cast(value))

    def get_at(self, row: int, column: int) -> np.floating:
        return getattr(self, self._FIELDS[row * self._SIZE + column])

    def set_at(self, row: int, column: int, value: float) -> None:
        setattr(self, self._FIELDS[row * self._SIZE + column], self._PRECISION.cast(value))

    @classmethod
    def identity(cls: type[M], scale: float = 1.0) -> M:
        """Matrix with scale on the diagonal and 0 elsewhere."""
        result = cls()
        for i in range(cls._SIZE):
            result.set_at(i, i, scale)
        return result

    @classmethod
    def from_rows(cls: type[M], *rows: BaseVector) -> M:
        """
        Build a matrix whose rows are the given vectors.

        Raises:
            NullArgumentError: If a row is None
            DimensionError: If the number of rows is wrong
        """
        _check_vector_count(rows, cls._SIZE, 'rows')
        return cls(*(row[j] for row in rows for j in range(cls._SIZE)))

    @classmethod
    def from_columns(cls: type[M], *columns: BaseVector) -> M:
        """
        Build a matrix whose columns are the given vectors.

        Raises:
            NullArgumentError: If a column is None
            DimensionError: If the number of columns is wrong
        """
        _check_vector_count(columns, cls._SIZE, 'columns')
        return cls(*(column[i] for i in range(cls._SIZE) for column in columns))

    def row(self, index: int) -> BaseVector:
        """Copy of a row as the matching fixed vector."""
        check_index(index, self._SIZE, 'row')
        values = [self.get_at(index, j) for j in range(self._SIZE)]
        return vector_type(self._SIZE, self._PRECISION)._from_array(np.array(values))

    def column(self, index: int) -> BaseVector:
        """Copy of a column as the matching fixed vector."""
        check_index(index, self._SIZE, 'column')
        values = [self.get_at(i, index) for i in range(self._SIZE)]
        return vector_type(self._SIZE, self._PRECISION)._from_array(np.array(values))

    def set_row(self, index: int, vector: BaseVector) -> None:
        """
        Overwrite a row in place; vector components beyond its dimension read as 0.

        Raises:
            NullArgumentError: If vector is None
            IndexOutOfRangeError: If index is outside the matrix
        """
        check_not_none(vector, 'vector')
        check_index(index, self._SIZE, 'row')
        for j in range(self._SIZE):
            self.set_at(index, j, vector[j])

    def set_column(self, index: int, vector: BaseVector) -> None:
        """
        Overwrite a column in place.

        Raises:
            NullArgumentError: If vector is None
            IndexOutOfRangeError: If index is outside the matrix
        """
        check_not_none(vector, 'vector')
        check_index(index, self._SIZE, 'column')
        for i in range(self._SIZE):
            self.set_at(i, index, vector[i])

    def clone(self: M) -> M:
        return type(self)(*self._values())

    def to_snapshot(self) -> dict[str, Any]:
        """Shape, precision and every element by field name."""
        snapshot = super().to_snapshot()
        for name, value in zip(self._FIELDS, self._values()):
            snapshot[name] = float(value)
        return snapshot

    @classmethod
    def from_snapshot(cls: type[M], snapshot: dict[str, Any]) -> M:
        """
        Restore a matrix from to_snapshot output.

        Raises:
            DataCorruptionError: If a field is missing or malformed
        """
        return cls(*(snapshot_value(snapshot, name) for name in cls._FIELDS))


def _check_vector_count(vectors: tuple[BaseVector, ...], expected: int, name: str) -> None:
    if len(vectors) != expected:
        raise DimensionError(
            f"{name}: expected {expected} vectors, got {len(vectors)}",
            expected=expected,
            actual=len(vectors),
        )
    for i, vector in enumerate(vectors):
        check_not_none(vector, f"{name}[{i}]")
