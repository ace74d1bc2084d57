"""
General M x N matrix backed by a flat numpy array.

Element (row, column) lives at index row * columns + column. Arithmetic
between two general matrices runs vectorized on the flat arrays; mixed
operands fall back to the element loops of Matrix.

Text serialization writes every element in invariant format, elements of
a row separated by a single space and rows separated by ';':

    >>> MatrixMxNd(2, 2, [1, 2, 3, 4]).data_string()
    '1.0 2.0;3.0 4.0'
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pyvecmat.core.exceptions import DataCorruptionError, DimensionError
from pyvecmat.core.formatting import invariant_number, parse_invariant_number
from pyvecmat.core.precision import DOUBLE, SINGLE
from pyvecmat.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_length,
    check_not_none,
    check_positive_size,
)
from pyvecmat.matrices.base import M, Matrix, MatrixD, MatrixF, register_matrix_type


class MatrixMxN(Matrix):
    """
    Matrix of any shape.

    Args:
        rows: Number of rows, at least 1
        columns: Number of columns, at least 1
        data: Optional row-major flat data of length rows * columns,
              copied; all zeros when omitted

    Raises:
        ValidationError: If rows or columns is below 1 or data is not numeric
        DimensionError: If data does not hold rows * columns elements
    """
    __slots__ = ('_data',)

    def __init__(self, rows: int, columns: int, data: ArrayLike | None = None):
        super().__init__(rows, columns)
        if data is None:
            self._data = np.zeros(self._rows * self._columns, dtype=self._PRECISION.dtype)
            return
        array = check_array(data, 'data').reshape(-1)
        check_length(array, self._rows * self._columns, 'data')
        self._data = np.array(array, dtype=self._PRECISION.dtype)

    @classmethod
    def _zeros(cls: type[M], rows: int, columns: int) -> M:
        return cls(rows, columns)

    @classmethod
    def from_owned(cls: type[M], rows: int, columns: int, data: np.ndarray) -> M:
        """
        Wrap a flat row-major array without copying it.

        The array is shared when it is 1-D with this precision's dtype; the
        caller must treat it as consumed.

        Raises:
            NullArgumentError: If data is None
            DimensionError: If data is not 1-D or has the wrong length
        """
        check_not_none(data, 'data')
        check_positive_size(rows, 'rows')
        check_positive_size(columns, 'columns')
        array = np.asarray(check_array(data, 'data'), dtype=cls._PRECISION.dtype)
        check_1d(array, 'data')
        check_length(array, rows * columns, 'data')

        result = cls.__new__(cls)
        Matrix.__init__(result, rows, columns)
        result._data = array
        return result

    @classmethod
    def from_array(cls: type[M], array: ArrayLike) -> M:
        """
        Copy a 2-D array-like.

        Raises:
            ValidationError: If array is empty or not numeric
            DimensionError: If array is not 2-D
        """
        array = check_array(array, 'array')
        check_2d(array, 'array')
        rows, columns = array.shape
        return cls(rows, columns, array.reshape(-1))

    @classmethod
    def from_rows(cls: type[M], rows: Sequence[Sequence[float]], columns: int) -> M:
        """
        Build from jagged rows, zero-padding short rows to `columns`.

        Args:
            rows: Sequence of row sequences, at least one
            columns: Number of columns of the result

        Raises:
            NullArgumentError: If rows or one of the rows is None
            ValidationError: If there are no rows or columns is below 1
            DimensionError: If a row holds more than `columns` values
        """
        check_not_none(rows, 'rows')
        check_positive_size(len(rows), 'rows')
        check_positive_size(columns, 'columns')

        result = cls(len(rows), columns)
        for i, row in enumerate(rows):
            check_not_none(row, f"rows[{i}]")
            values = check_array(row, f"rows[{i}]").reshape(-1)
            if values.shape[0] > columns:
                raise DimensionError(
                    f"rows[{i}]: holds {values.shape[0]} values, more than the "
                    f"{columns} columns of the matrix",
                    expected=columns,
                    actual=values.shape[0],
                )
            start = i * columns
            result._data[start:start + values.shape[0]] = values
        return result

    # === Storage ===

    def get_at(self, row: int, column: int) -> np.floating:
        return self._data[row * self._columns + column]

    def set_at(self, row: int, column: int, value: float) -> None:
        self._data[row * self._columns + column] = value

    def _values(self) -> tuple[Any, ...]:
        return tuple(self._data)

    def _grid(self) -> np.ndarray:
        return self._data.reshape(self._rows, self._columns)

    # === Vectorized arithmetic ===

    def _add_into(self, other: Matrix, output: Matrix) -> None:
        if not (isinstance(other, MatrixMxN) and isinstance(output, MatrixMxN)):
            super()._add_into(other, output)
            return
        np.add(self._data, other._data, out=output._data, casting='same_kind')

    def _subtract_into(self, other: Matrix, output: Matrix) -> None:
        if not (isinstance(other, MatrixMxN) and isinstance(output, MatrixMxN)):
            super()._subtract_into(other, output)
            return
        np.subtract(self._data, other._data, out=output._data, casting='same_kind')

    def _multiply_into(self, other: Matrix, output: Matrix) -> None:
        if not (isinstance(other, MatrixMxN) and isinstance(output, MatrixMxN)):
            super()._multiply_into(other, output)
            return
        output._data[:] = np.matmul(self._grid(), other._grid()).reshape(-1)

    def _scale_into(self, factor: float, output: Matrix) -> None:
        if not isinstance(output, MatrixMxN):
            super()._scale_into(factor, output)
            return
        output._data[:] = self._data * self._PRECISION.cast(factor)

    def _negate_into(self, output: Matrix) -> None:
        if not isinstance(output, MatrixMxN):
            super()._negate_into(output)
            return
        output._data[:] = -self._data

    def _transpose_into(self, output: Matrix) -> None:
        if not isinstance(output, MatrixMxN):
            super()._transpose_into(output)
            return
        output._data[:] = self._grid().T.reshape(-1)

    def coerce_zero(self, epsilon: float | None = None) -> None:
        eps = self._PRECISION.epsilon if epsilon is None else epsilon
        self._data[np.abs(self._data) <= eps] = 0.0

    # === Conversions ===

    def clone(self: M) -> M:
        return type(self).from_owned(self._rows, self._columns, self._data.copy())

    def as_array(self) -> np.ndarray:
        return self._grid().copy()

    # === Serialization ===

    def data_string(self) -> str:
        """Elements in invariant format; ' ' between columns, ';' between rows."""
        return ';'.join(
            ' '.join(invariant_number(v) for v in row) for row in self._grid()
        )

    @classmethod
    def parse(cls: type[M], rows: int, columns: int, text: str) -> M:
        """
        Rebuild a matrix from data_string output.

        Args:
            rows: Expected number of rows
            columns: Expected number of columns
            text: Serialized elements

        Raises:
            DataCorruptionError: If the row/column counts or an element's
                format do not match
        """
        if not isinstance(text, str):
            raise DataCorruptionError(
                f"data: expected text, got {type(text).__name__}", field='data'
            )
        row_texts = text.split(';')
        if len(row_texts) != rows:
            raise DataCorruptionError(
                f"data: the amount of rows mismatch the stored amount of rows "
                f"(stored: {rows}, found: {len(row_texts)})",
                field='data',
            )

        result = cls(rows, columns)
        for i, row_text in enumerate(row_texts):
            if not row_text:
                raise DataCorruptionError(f"data: row {i} is empty", field='data')
            cells = row_text.split(' ')
            if len(cells) != columns:
                raise DataCorruptionError(
                    f"data: the amount of columns in row {i} mismatch the stored amount "
                    f"of columns (stored: {columns}, found: {len(cells)})",
                    field='data',
                )
            for j, cell in enumerate(cells):
                result.set_at(i, j, parse_invariant_number(cell, field='data'))
        return result

    def to_snapshot(self) -> dict[str, Any]:
        """Shape, precision and the data_string of the elements."""
        snapshot = super().to_snapshot()
        snapshot['data'] = self.data_string()
        return snapshot

    @classmethod
    def from_snapshot(cls: type[M], snapshot: dict[str, Any]) -> M:
        """
        Restore a matrix from to_snapshot output.

        Raises:
            DataCorruptionError: If a field is missing or does not parse
        """
        rows = snapshot_size(snapshot, 'rows')
        columns = snapshot_size(snapshot, 'columns')
        if 'data' not in snapshot:
            raise DataCorruptionError("data: missing from snapshot", field='data')
        return cls.parse(rows, columns, snapshot['data'])


def snapshot_size(snapshot: dict[str, Any], key: str) -> int:
    """
    Read a positive integer row or column count from a snapshot.

    Raises:
        DataCorruptionError: If the field is missing, not an integer or below 1
    """
    if not isinstance(snapshot, dict) or key not in snapshot:
        raise DataCorruptionError(f"{key}: missing from snapshot", field=key)
    value = snapshot[key]
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise DataCorruptionError(
            f"{key}: expected a positive integer, got {value!r}", field=key
        )
    return int(value)


@register_matrix_type(None, DOUBLE)
class MatrixMxNd(MatrixMxN, MatrixD):
    __slots__ = ()


@register_matrix_type(None, SINGLE)
class MatrixMxNf(MatrixMxN, MatrixF):
    __slots__ = ()
