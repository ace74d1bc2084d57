"""
Shared matrix machinery.

Matrix implements the whole arithmetic surface once, in terms of the two
storage primitives get_at(row, column) and set_at(row, column, value).
Concrete shapes (3x3, 4x4, MxN) only provide storage and may override the
protected _*_into hooks with faster closed-form arithmetic.

Every public binary operation validates the shapes of all operands (and of
the output matrix, if one is supplied) before anything is written.

The precision axis is a mixin: MatrixD and MatrixF fix _PRECISION to
DOUBLE/SINGLE, and every concrete type inherits from its shape class and
one of them:

    Matrix3x3d(Matrix3x3, MatrixD)
    Matrix4x4f(Matrix4x4, MatrixF)
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, TypeVar

import numpy as np

from pyvecmat.core.exceptions import DimensionError
from pyvecmat.core.formatting import format_grid
from pyvecmat.core.hashing import hash_values
from pyvecmat.core.precision import DOUBLE, SINGLE, Precision, PrecisionLike, resolve_precision
from pyvecmat.core.validation import (
    check_index,
    check_not_none,
    check_positive_size,
    check_shape,
)
from pyvecmat.vectors import BaseVector, build_owned

M = TypeVar('M', bound='Matrix')

_SCALAR_TYPES = (int, float, np.number)

# ((rows, columns) or None for general, precision name) -> concrete class
_MATRIX_TYPES: dict[tuple[tuple[int, int] | None, str], type[Matrix]] = {}


def register_matrix_type(shape: tuple[int, int] | None, precision: Precision) -> Callable[[type[M]], type[M]]:
    """
    Class decorator registering the concrete type for a shape/precision.

    Args:
        shape: (3, 3) or (4, 4) for fixed matrices, None for the general one
        precision: Precision the class stores
    """
    def decorator(cls: type[M]) -> type[M]:
        _MATRIX_TYPES[(shape, precision.name)] = cls
        return cls
    return decorator


def matrix_type(rows: int, columns: int, precision: PrecisionLike = DOUBLE) -> type[Matrix]:
    """
    Best concrete matrix class for a shape.

    (3, 3) and (4, 4) map to the fixed types, anything else to the general
    MxN type.
    """
    tier = resolve_precision(precision)
    cls = _MATRIX_TYPES.get(((rows, columns), tier.name))
    if cls is None:
        cls = general_matrix_type(tier)
    return cls


def general_matrix_type(precision: PrecisionLike = DOUBLE) -> type[Matrix]:
    """The general MxN class of a precision."""
    return _MATRIX_TYPES[(None, resolve_precision(precision).name)]


def new_matrix(rows: int, columns: int, precision: PrecisionLike = DOUBLE) -> Matrix:
    """
    Zero matrix of the best concrete type for the shape.

    Raises:
        ValidationError: If rows or columns is below 1
    """
    check_positive_size(rows, 'rows')
    check_positive_size(columns, 'columns')
    return matrix_type(rows, columns, precision)._zeros(rows, columns)


class Matrix:
    """
    Abstract base of every matrix.

    Holds only the row and column counts; the elements live in the
    concrete subclass and are reached through get_at/set_at.
    """
    __slots__ = ('_rows', '_columns')

    _PRECISION: Precision

    def __init__(self, rows: int, columns: int):
        check_positive_size(rows, 'rows')
        check_positive_size(columns, 'columns')
        self._rows = int(rows)
        self._columns = int(columns)

    @classmethod
    def _zeros(cls: type[M], rows: int, columns: int) -> M:
        raise NotImplementedError

    # === Storage primitives ===

    def get_at(self, row: int, column: int) -> np.floating:
        """Element at (row, column). No bounds checking."""
        raise NotImplementedError

    def set_at(self, row: int, column: int, value: float) -> None:
        """Overwrite the element at (row, column). No bounds checking."""
        raise NotImplementedError

    # === Shape ===

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._columns)

    @property
    def precision(self) -> Precision:
        return self._PRECISION

    # === Indexers ===

    def _locate(self, key: Any) -> tuple[int, int]:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise TypeError(f"index: expected (row, column), got {len(key)} indices")
            row, column = key
            _check_integer(row, 'row')
            _check_integer(column, 'column')
            check_index(row, self._rows, 'row')
            check_index(column, self._columns, 'column')
            return int(row), int(column)

        _check_integer(key, 'index')
        check_index(key, self._rows * self._columns, 'index')
        row, column = divmod(int(key), self._columns)
        return row, column

    def __getitem__(self, key: int | tuple[int, int]) -> np.floating:
        """
        Flat (m[index], index = row * columns + column) or 2-D (m[row, column]) read.

        Raises:
            IndexOutOfRangeError: If the index is outside the matrix
        """
        row, column = self._locate(key)
        return self.get_at(row, column)

    def __setitem__(self, key: int | tuple[int, int], value: float) -> None:
        row, column = self._locate(key)
        self.set_at(row, column, value)

    def _values(self) -> tuple[Any, ...]:
        """All elements in row-major order."""
        return tuple(
            self.get_at(i, j) for i in range(self._rows) for j in range(self._columns)
        )

    def _new(self, rows: int, columns: int) -> Matrix:
        return new_matrix(rows, columns, self._PRECISION)

    # === Arithmetic ===

    def add(self, other: Matrix, output: Matrix | None = None) -> Matrix:
        """
        Element-wise sum self + other.

        Args:
            other: Matrix of the same shape
            output: Optional pre-sized matrix receiving the result

        Returns:
            output if given, otherwise a new matrix

        Raises:
            NullArgumentError: If other is None
            DimensionError: If other or output has the wrong shape
        """
        check_not_none(other, 'other')
        check_shape(other.shape, self.shape, 'other')
        output = self._prepare_output(output, self.shape)
        self._add_into(other, output)
        return output

    def subtract(self, other: Matrix, output: Matrix | None = None) -> Matrix:
        """
        Element-wise difference self - other.

        Raises:
            NullArgumentError: If other is None
            DimensionError: If other or output has the wrong shape
        """
        check_not_none(other, 'other')
        check_shape(other.shape, self.shape, 'other')
        output = self._prepare_output(output, self.shape)
        self._subtract_into(other, output)
        return output

    def multiply(self, other: Matrix | float, output: Matrix | None = None) -> Matrix:
        """
        Matrix product self * other, or scalar product when other is a number.

        The matrix product requires self.columns == other.rows; the result
        has shape (self.rows, other.columns).

        Args:
            other: Matrix or scalar
            output: Optional pre-sized matrix receiving the result

        Returns:
            output if given, otherwise a new matrix

        Raises:
            NullArgumentError: If other is None
            DimensionError: If the inner dimensions mismatch or output has
                the wrong shape
        """
        check_not_none(other, 'other')
        if isinstance(other, _SCALAR_TYPES):
            output = self._prepare_output(output, self.shape)
            self._scale_into(other, output)
            return output
        if not isinstance(other, Matrix):
            raise TypeError(f"other: expected a matrix or a scalar, got {type(other).__name__}")

        if self._columns != other.rows:
            raise DimensionError(
                f"other: the amount of columns of the left matrix mismatch the amount of "
                f"rows of the right matrix (left: {self._columns}, right: {other.rows})",
                expected=self._columns,
                actual=other.rows,
            )
        output = self._prepare_output(output, (self._rows, other.columns))
        self._multiply_into(other, output)
        return output

    def scale(self, factor: float) -> None:
        """Multiply every element by factor, in place."""
        self._scale_into(factor, self)

    def negate(self, output: Matrix | None = None) -> Matrix:
        """
        Element-wise negation.

        Raises:
            DimensionError: If output has the wrong shape
        """
        output = self._prepare_output(output, self.shape)
        self._negate_into(output)
        return output

    def transpose(self, output: Matrix | None = None) -> Matrix:
        """
        Transposed matrix.

        The output must have shape (columns, rows) and must not be self.

        Raises:
            DimensionError: If output has the wrong shape
        """
        output = self._prepare_output(output, (self._columns, self._rows))
        self._transpose_into(output)
        return output

    def coerce_zero(self, epsilon: float | None = None) -> None:
        """
        Snap every element within epsilon of zero to exactly zero, in place.

        Args:
            epsilon: Tolerance; defaults to the precision's epsilon
        """
        tier = self._PRECISION
        eps = tier.epsilon if epsilon is None else epsilon
        for i in range(self._rows):
            for j in range(self._columns):
                if tier.approx_equal(self.get_at(i, j), 0.0, eps):
                    self.set_at(i, j, 0.0)

    def _prepare_output(self, output: Matrix | None, shape: tuple[int, int]) -> Matrix:
        if output is None:
            return self._new(*shape)
        check_shape(output.shape, shape, 'output')
        return output

    # Internal hooks; shapes are already validated.

    def _add_into(self, other: Matrix, output: Matrix) -> None:
        for i in range(self._rows):
            for j in range(self._columns):
                output.set_at(i, j, self.get_at(i, j) + other.get_at(i, j))

    def _subtract_into(self, other: Matrix, output: Matrix) -> None:
        for i in range(self._rows):
            for j in range(self._columns):
                output.set_at(i, j, self.get_at(i, j) - other.get_at(i, j))

    def _multiply_into(self, other: Matrix, output: Matrix) -> None:
        for i in range(self._rows):
            for j in range(other.columns):
                entry = 0.0
                for k in range(self._columns):
                    entry += self.get_at(i, k) * other.get_at(k, j)
                output.set_at(i, j, entry)

    def _scale_into(self, factor: float, output: Matrix) -> None:
        factor = self._PRECISION.cast(factor)
        for i in range(self._rows):
            for j in range(self._columns):
                output.set_at(i, j, self.get_at(i, j) * factor)

    def _negate_into(self, output: Matrix) -> None:
        for i in range(self._rows):
            for j in range(self._columns):
                output.set_at(i, j, -self.get_at(i, j))

    def _transpose_into(self, output: Matrix) -> None:
        for i in range(self._rows):
            for j in range(self._columns):
                output.set_at(j, i, self.get_at(i, j))

    # === Matrix x vector ===

    def multiply_column(self, vector: BaseVector) -> BaseVector:
        """
        Product self * vector, treating vector as a column.

        result[i] = sum_j self[i, j] * vector[j]

        Raises:
            NullArgumentError: If vector is None
            DimensionError: If vector.dimension != columns
        """
        check_not_none(vector, 'vector')
        if vector.dimension != self._columns:
            raise DimensionError(
                f"vector: the dimension of the vector must match the amount of columns "
                f"in the matrix (dimension: {vector.dimension}, columns: {self._columns})",
                expected=self._columns,
                actual=vector.dimension,
            )
        values = self._PRECISION.zeros(self._rows)
        for i in range(self._rows):
            values[i] = sum(self.get_at(i, j) * vector[j] for j in range(self._columns))
        return build_owned(values, self._PRECISION)

    def multiply_row(self, vector: BaseVector) -> BaseVector:
        """
        Product vector * self, treating vector as a row.

        result[j] = sum_i vector[i] * self[i, j]

        Raises:
            NullArgumentError: If vector is None
            DimensionError: If vector.dimension != rows
        """
        check_not_none(vector, 'vector')
        if vector.dimension != self._rows:
            raise DimensionError(
                f"vector: the dimension of the vector must match the amount of rows "
                f"in the matrix (dimension: {vector.dimension}, rows: {self._rows})",
                expected=self._rows,
                actual=vector.dimension,
            )
        values = self._PRECISION.zeros(self._columns)
        for j in range(self._columns):
            values[j] = sum(vector[i] * self.get_at(i, j) for i in range(self._rows))
        return build_owned(values, self._PRECISION)

    # === Rows and columns ===

    def row(self, index: int) -> BaseVector:
        """
        Copy of a row as a vector of the best type for its length.

        Raises:
            IndexOutOfRangeError: If index is outside [0, rows)
        """
        check_index(index, self._rows, 'row')
        values = self._PRECISION.array([self.get_at(index, j) for j in range(self._columns)])
        return build_owned(values, self._PRECISION)

    def column(self, index: int) -> BaseVector:
        """
        Copy of a column as a vector of the best type for its length.

        Raises:
            IndexOutOfRangeError: If index is outside [0, columns)
        """
        check_index(index, self._columns, 'column')
        values = self._PRECISION.array([self.get_at(i, index) for i in range(self._rows)])
        return build_owned(values, self._PRECISION)

    def __iter__(self) -> Iterator[BaseVector]:
        for i in range(self._rows):
            yield self.row(i)

    # === Conversions ===

    def clone(self: M) -> M:
        """Deep value copy."""
        result = self._new(self._rows, self._columns)
        for i in range(self._rows):
            for j in range(self._columns):
                result.set_at(i, j, self.get_at(i, j))
        return result

    def to_precision(self, precision: PrecisionLike) -> Matrix:
        """
        Element-wise cast into a new matrix of another precision.

        The result is the best concrete type for the shape. Narrowing to
        single precision rounds every element.
        """
        tier = resolve_precision(precision)
        result = new_matrix(self._rows, self._columns, tier)
        for i in range(self._rows):
            for j in range(self._columns):
                result.set_at(i, j, tier.cast(self.get_at(i, j)))
        return result

    def to_double(self) -> Matrix:
        return self.to_precision(DOUBLE)

    def to_single(self) -> Matrix:
        return self.to_precision(SINGLE)

    def as_array(self) -> np.ndarray:
        """2-D numpy copy of the elements."""
        return np.array(self._values(), dtype=self._PRECISION.dtype).reshape(self._rows, self._columns)

    def to_snapshot(self) -> dict[str, Any]:
        """Shape and precision; subclasses add their elements."""
        return {
            'rows': self._rows,
            'columns': self._columns,
            'precision': self._PRECISION.name,
        }

    # === Operators ===

    def __add__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> Matrix:
        return self.negate()

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, BaseVector):
            return self.multiply_column(other)
        if isinstance(other, (Matrix,) + _SCALAR_TYPES):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, BaseVector):
            return self.multiply_row(other)
        if isinstance(other, _SCALAR_TYPES):
            return self.multiply(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> Any:
        if isinstance(other, BaseVector):
            return self.multiply_column(other)
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def __rmatmul__(self, other: Any) -> Any:
        if isinstance(other, BaseVector):
            return self.multiply_row(other)
        return NotImplemented

    def __eq__(self, other: Any) -> bool:
        """Same shape and every element pair approximately equal."""
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        tier = self._PRECISION.narrowest(other.precision)
        return all(
            tier.approx_equal(a, b) for a, b in zip(self._values(), other._values())
        )

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        """
        Hash of the elements rounded to single precision.

        A matrix and its to_single()/to_double() conversion hash alike.
        Equality is approximate, so two matrices within epsilon of each
        other can still hash differently.
        """
        with np.errstate(over='ignore'):
            values = np.array(self._values(), dtype=SINGLE.dtype)
        return hash_values(values)

    def __str__(self) -> str:
        cells = [
            [self.get_at(i, j) for j in range(self._columns)] for i in range(self._rows)
        ]
        header = f"{self._rows}x{self._columns} ({self._PRECISION.label})"
        return format_grid(header, cells)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._rows}x{self._columns}>"

    def __copy__(self: M) -> M:
        return self.clone()

    def __deepcopy__(self: M, memo: dict) -> M:
        return self.clone()


class MatrixD(Matrix):
    """Double precision matrix (np.float64 elements)."""
    __slots__ = ()
    _PRECISION = DOUBLE


class MatrixF(Matrix):
    """Single precision matrix (np.float32 elements)."""
    __slots__ = ()
    _PRECISION = SINGLE


def _check_integer(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name}: expected an integer index, got {type(value).__name__}")
