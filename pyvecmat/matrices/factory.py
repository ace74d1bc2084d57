"""
Matrix factory.

The sole construction surface intended for callers. Every constructor
funnels through matrix_type(), which picks the fixed 3x3 or 4x4 storage
when the shape permits and the general MxN storage otherwise, so callers
never need to know which representation they hold.

Example:
    >>> from pyvecmat.matrices import factory
    >>> m = factory.identity(4)
    >>> type(m).__name__
    'Matrix4x4d'
    >>> type(factory.zero(2, 5, precision='single')).__name__
    'MatrixMxNf'
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pyvecmat.core.exceptions import DataCorruptionError, ValidationError
from pyvecmat.core.precision import DOUBLE, PrecisionLike, resolve_precision
from pyvecmat.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_length,
    check_not_none,
    check_positive_size,
)
from pyvecmat.matrices.base import Matrix, general_matrix_type, matrix_type, new_matrix
from pyvecmat.matrices.fixed import FixedMatrix
from pyvecmat.matrices.general import MatrixMxN, snapshot_size

# register the concrete types
from pyvecmat.matrices import fixed3 as _fixed3  # noqa: F401
from pyvecmat.matrices import fixed4 as _fixed4  # noqa: F401


def zero(rows: int, columns: int | None = None, precision: PrecisionLike = DOUBLE) -> Matrix:
    """
    All-zero matrix.

    Args:
        rows: Number of rows
        columns: Number of columns; defaults to rows (square)
        precision: Scalar precision

    Raises:
        ValidationError: If a size is below 1
    """
    return new_matrix(rows, rows if columns is None else columns, precision)


def one(rows: int, columns: int | None = None, scale: float = 1.0, precision: PrecisionLike = DOUBLE) -> Matrix:
    """
    Matrix with every element equal to scale.

    Raises:
        ValidationError: If a size is below 1
    """
    columns = rows if columns is None else columns
    result = new_matrix(rows, columns, precision)
    for i in range(rows):
        for j in range(columns):
            result.set_at(i, j, scale)
    return result


def identity(size: int, scale: float = 1.0, precision: PrecisionLike = DOUBLE) -> Matrix:
    """
    Square matrix with scale on the diagonal.

    Raises:
        ValidationError: If size is below 1
    """
    result = new_matrix(size, size, precision)
    for i in range(size):
        result.set_at(i, i, scale)
    return result


def diagonal(*values: float, precision: PrecisionLike = DOUBLE) -> Matrix:
    """
    Square matrix with the given values on the diagonal.

    Accepts the values themselves or one array-like holding them:
    diagonal(2, 4, 5, 1) and diagonal([2, 4, 5, 1]) are equivalent.

    Raises:
        NullArgumentError: If the value array is None
        ValidationError: If no values are given
    """
    if len(values) == 1 and not np.isscalar(values[0]):
        values = values[0]
    check_not_none(values, 'values')
    array = check_array(values, 'values').reshape(-1)
    if array.shape[0] == 0:
        raise ValidationError("values: a diagonal matrix needs at least one element")

    size = array.shape[0]
    result = new_matrix(size, size, precision)
    for i, value in enumerate(array):
        result.set_at(i, i, value)
    return result


def build(rows: int, columns: int, data: ArrayLike, precision: PrecisionLike = DOUBLE) -> Matrix:
    """
    Matrix of the given shape filled from row-major flat data (copied).

    Args:
        rows: Number of rows
        columns: Number of columns
        data: rows * columns values, row-major
        precision: Scalar precision

    Raises:
        NullArgumentError: If data is None
        ValidationError: If a size is below 1 or data is not numeric
        DimensionError: If data does not hold rows * columns values
    """
    check_positive_size(rows, 'rows')
    check_positive_size(columns, 'columns')
    check_not_none(data, 'data')
    array = check_array(data, 'data').reshape(-1)
    check_length(array, rows * columns, 'data')
    return _filled(rows, columns, np.array(array), precision)


def build_rows(columns: int, rows: Sequence[Sequence[float]], precision: PrecisionLike = DOUBLE) -> Matrix:
    """
    Matrix built from jagged rows, short rows zero-padded to `columns`.

    Raises:
        NullArgumentError: If rows or one of the rows is None
        ValidationError: If there are no rows or columns is below 1
        DimensionError: If a row holds more than `columns` values
    """
    general = general_matrix_type(precision)
    padded = general.from_rows(rows, columns)
    return _filled(padded.rows, padded.columns, padded.as_array().reshape(-1), precision)


def from_array(array: ArrayLike, precision: PrecisionLike = DOUBLE) -> Matrix:
    """
    Matrix copied from a 2-D array-like.

    Raises:
        ValidationError: If array is not numeric
        DimensionError: If array is not 2-D
    """
    array = check_array(array, 'array')
    check_2d(array, 'array')
    rows, columns = array.shape
    return build(rows, columns, array.reshape(-1), precision)


def from_snapshot(snapshot: dict[str, Any]) -> Matrix:
    """
    Restore any matrix from its to_snapshot output.

    Snapshots with a 'data' string are parsed as general matrices and then
    converted to the best type for their shape; otherwise the named fields
    of the fixed type are read.

    Raises:
        DataCorruptionError: If a field is missing or does not parse
    """
    if not isinstance(snapshot, dict):
        raise DataCorruptionError(
            f"snapshot: expected a dict, got {type(snapshot).__name__}", field=None
        )
    try:
        precision = resolve_precision(snapshot.get('precision', DOUBLE))
    except ValidationError as e:
        raise DataCorruptionError(str(e), field='precision') from e

    rows = snapshot_size(snapshot, 'rows')
    columns = snapshot_size(snapshot, 'columns')

    if 'data' in snapshot:
        general = general_matrix_type(precision).from_snapshot(snapshot)
        return _filled(rows, columns, general.as_array().reshape(-1), precision)

    cls = matrix_type(rows, columns, precision)
    if not issubclass(cls, FixedMatrix):
        raise DataCorruptionError(
            f"data: missing from snapshot of a {rows}x{columns} matrix", field='data'
        )
    return cls.from_snapshot(snapshot)


def _filled(rows: int, columns: int, flat: np.ndarray, precision: PrecisionLike) -> Matrix:
    """Best concrete type for the shape holding the flat row-major values."""
    check_1d(flat, 'data')
    cls = matrix_type(rows, columns, precision)
    if issubclass(cls, MatrixMxN):
        return cls.from_owned(rows, columns, flat)
    return cls(*flat)
