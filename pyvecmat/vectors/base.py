"""
Shared vector machinery.

BaseVector holds the components in a 1-D numpy array of its precision's
dtype and implements everything that does not depend on whether the
dimension is fixed (2/3/4) or general (N):

    - the Vector capability (dimension, padded indexing, length, add,
      subtract, dot) with the dimension promotion rule
    - component-wise operations (abs, inverse, offset, normalization)
    - the static helpers (lerp, clamp, min/max, distance, angle)
    - conversions between dimensions and precisions
    - approximate equality and FNV hashing

Dimension promotion: a binary operation between vectors of different
dimension is always computed by the operand with the larger dimension,
reading the shorter one as zero-padded. A receiver with the smaller
dimension delegates to the other operand exactly once.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, TypeVar

import numpy as np

from pyvecmat.core.exceptions import DataCorruptionError
from pyvecmat.core.formatting import format_components, parse_invariant_number
from pyvecmat.core.hashing import hash_values
from pyvecmat.core.precision import DOUBLE, SINGLE, Precision, PrecisionLike, quiet_divide, resolve_precision
from pyvecmat.core.validation import check_non_negative_index, check_not_none, check_positive_size

V = TypeVar('V', bound='BaseVector')

# (dimension or None for general, precision name) -> concrete class
_VECTOR_TYPES: dict[tuple[int | None, str], type[BaseVector]] = {}


def register_vector_type(dimension: int | None, precision: Precision) -> Callable[[type[V]], type[V]]:
    """
    Class decorator registering the concrete type for a dimension/precision.

    Args:
        dimension: 2, 3 or 4 for fixed vectors, None for the general vector
        precision: Precision the class stores
    """
    def decorator(cls: type[V]) -> type[V]:
        _VECTOR_TYPES[(dimension, precision.name)] = cls
        return cls
    return decorator


def vector_type(dimension: int, precision: PrecisionLike = DOUBLE) -> type[BaseVector]:
    """
    Best concrete vector class for a dimension.

    Dimensions 2, 3 and 4 map to the fixed types, anything else to the
    general N-dimensional type.
    """
    tier = resolve_precision(precision)
    cls = _VECTOR_TYPES.get((dimension, tier.name))
    if cls is None:
        cls = _VECTOR_TYPES[(None, tier.name)]
    return cls


class BaseVector:
    """
    Abstract base of every vector variant.

    Subclasses set _PRECISION and implement _from_array; the components
    live in self._v.
    """
    __slots__ = ('_v',)

    _PRECISION: Precision = DOUBLE
    _NAME = 'Vector'

    _v: np.ndarray

    @classmethod
    def _from_array(cls: type[V], values: np.ndarray) -> V:
        raise NotImplementedError

    # === Capability ===

    @property
    def precision(self) -> Precision:
        """Scalar precision of the components."""
        return self._PRECISION

    @property
    def dimension(self) -> int:
        """Number of components."""
        return int(self._v.shape[0])

    def __getitem__(self, index: int) -> np.floating:
        """
        Component at index.

        Returns 0 for indices at or beyond the dimension.

        Raises:
            IndexOutOfRangeError: If index is negative
        """
        check_non_negative_index(index, 'index')
        if index >= self._v.shape[0]:
            return self._PRECISION.cast(0)
        return self._v[index]

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[np.floating]:
        return iter(self._v)

    @property
    def squared_length(self) -> np.floating:
        """Squared Euclidean length."""
        return self._v.dtype.type(np.dot(self._v, self._v))

    @property
    def length(self) -> np.floating:
        """Euclidean length."""
        return np.sqrt(self.squared_length)

    def add(self, other: BaseVector) -> BaseVector:
        """
        Add two vectors in the space of the larger dimension.

        Args:
            other: Vector of any dimension and precision

        Returns:
            New vector with the larger of the two dimensions

        Raises:
            NullArgumentError: If other is None
        """
        check_not_none(other, 'other')
        if self.dimension >= other.dimension:
            return self._from_array(self._v + self._padded(other, self.dimension))
        return other.add(self)

    def subtract(self, other: BaseVector) -> BaseVector:
        """
        Subtract other from this vector in the space of the larger dimension.

        Raises:
            NullArgumentError: If other is None
        """
        check_not_none(other, 'other')
        if self.dimension >= other.dimension:
            return self._from_array(self._v - self._padded(other, self.dimension))
        # this - other == -(other - this)
        return -other.subtract(self)

    def dot(self, other: BaseVector) -> np.floating:
        """
        Dot product; components missing in the shorter vector count as 0.

        Raises:
            NullArgumentError: If other is None
        """
        check_not_none(other, 'other')
        if self.dimension >= other.dimension:
            return self._v.dtype.type(np.dot(self._v, self._padded(other, self.dimension)))
        return other.dot(self)

    def _padded(self, other: BaseVector, dimension: int) -> np.ndarray:
        """Other's components read through its indexer up to dimension."""
        return np.array([other[i] for i in range(dimension)], dtype=self._v.dtype)

    # === Predicates ===

    @property
    def is_nan(self) -> bool:
        """True if at least one component is NaN."""
        return bool(np.any(np.isnan(self._v)))

    @property
    def is_infinity(self) -> bool:
        """True if at least one component is +inf or -inf."""
        return bool(np.any(np.isinf(self._v)))

    @property
    def is_zero(self) -> bool:
        return self._PRECISION.approx_equal(self.squared_length, 0.0)

    @property
    def is_normalized(self) -> bool:
        return self._PRECISION.approx_equal(self.squared_length, 1.0)

    # === Component-wise operations ===

    def abs(self: V) -> V:
        return self._from_array(np.abs(self._v))

    def neg_abs(self: V) -> V:
        return self._from_array(-np.abs(self._v))

    def component_inverse(self: V) -> V:
        """Reciprocal of every component; zero components become inf."""
        return self._from_array(quiet_divide(self._PRECISION.cast(1), self._v))

    def inverse(self: V) -> V:
        """Alias of component_inverse."""
        return self.component_inverse()

    def normalized(self: V) -> V:
        """
        This vector divided by its length.

        A zero vector is not guarded against and yields NaN components.
        """
        return self._from_array(quiet_divide(self._v, self.length))

    def offset(self: V, offset: float) -> V:
        """Add the same scalar to every component."""
        return self._from_array(self._v + self._PRECISION.cast(offset))

    def scale(self: V, factor: float) -> V:
        return self._from_array(self._v * self._PRECISION.cast(factor))

    # === Static helpers ===

    @staticmethod
    def component_product(left: V, right: V) -> V:
        """Component-wise product in the space of the larger dimension."""
        return _binary(left, right, np.multiply)

    @staticmethod
    def dot_product(left: BaseVector, right: BaseVector) -> np.floating:
        return left.dot(right)

    @staticmethod
    def squared_distance(a: BaseVector, b: BaseVector) -> np.floating:
        return b.subtract(a).squared_length

    @staticmethod
    def distance(a: BaseVector, b: BaseVector) -> np.floating:
        return np.sqrt(BaseVector.squared_distance(a, b))

    @staticmethod
    def angle(first: BaseVector, second: BaseVector) -> np.floating:
        """
        Angle between two vectors in radians, acos(dot / (|a| |b|)).

        Zero-length operands yield NaN. The cosine is not clamped, so in
        single precision a vector compared with itself (or a parallel one)
        can round the cosine just past 1 and also yield NaN.
        """
        with np.errstate(divide='ignore', invalid='ignore'):
            cosine = first.dot(second) / (first.length * second.length)
            return np.arccos(cosine)

    @staticmethod
    def lerp(start: V, end: V, t: float) -> V:
        """Linear interpolation start + t * (end - start), t unclamped."""
        dim = max(start.dimension, end.dimension)
        owner = start if start.dimension >= end.dimension else end
        a = owner._padded(start, dim)
        b = owner._padded(end, dim)
        t = owner._PRECISION.cast(t)
        return owner._from_array(a + t * (b - a))

    @staticmethod
    def lerp_clamped(start: V, end: V, t: float) -> V:
        """lerp with t clamped to [0, 1]."""
        return BaseVector.lerp(start, end, min(max(float(t), 0.0), 1.0))

    @staticmethod
    def max(left: V, right: V) -> V:
        """Component-wise maximum."""
        return _binary(left, right, np.maximum)

    @staticmethod
    def min(left: V, right: V) -> V:
        """Component-wise minimum."""
        return _binary(left, right, np.minimum)

    @staticmethod
    def clamp(vector: V, lower: V, upper: V) -> V:
        """min(max(vector, lower), upper), component-wise."""
        return BaseVector.min(BaseVector.max(vector, lower), upper)

    @staticmethod
    def length_max(left: V, right: V) -> V:
        """The longer of the two vectors (left on ties)."""
        return left if left.squared_length >= right.squared_length else right

    @staticmethod
    def length_min(left: V, right: V) -> V:
        """The shorter of the two vectors (left on ties)."""
        return left if left.squared_length <= right.squared_length else right

    # === Conversions ===

    def as_array(self) -> np.ndarray:
        """Copy of the components as a numpy array."""
        return self._v.copy()

    def to_list(self) -> list[float]:
        return [float(v) for v in self._v]

    def to_dimension(self, dimension: int) -> BaseVector:
        """
        Convert to another dimension.

        Extra components are 0, surplus trailing components are dropped.
        The result is the best concrete type for the new dimension.
        """
        check_positive_size(dimension, 'dimension')
        values = self._padded(self, dimension)
        return vector_type(dimension, self._PRECISION)._from_array(values)

    def to_precision(self, precision: PrecisionLike) -> BaseVector:
        """Convert every component to another precision by direct cast."""
        tier = resolve_precision(precision)
        values = self._v.astype(tier.dtype)
        return vector_type(self.dimension, tier)._from_array(values)

    def to_double(self) -> BaseVector:
        return self.to_precision(DOUBLE)

    def to_single(self) -> BaseVector:
        return self.to_precision(SINGLE)

    def to_general(self) -> BaseVector:
        """The same components held by the general N-dimensional type."""
        return _VECTOR_TYPES[(None, self._PRECISION.name)]._from_array(self._v.copy())

    def to_vector2(self) -> BaseVector:
        return self.to_dimension(2)

    def to_vector3(self) -> BaseVector:
        return self.to_dimension(3)

    def to_vector4(self) -> BaseVector:
        return self.to_dimension(4)

    # === Snapshot ===

    def to_snapshot(self) -> dict[str, Any]:
        raise NotImplementedError

    # === Operators ===

    def __add__(self, other: Any) -> BaseVector:
        if not isinstance(other, BaseVector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> BaseVector:
        if not isinstance(other, BaseVector):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self: V) -> V:
        return self._from_array(-self._v)

    def __pos__(self: V) -> V:
        return self._from_array(self._v.copy())

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, BaseVector):
            return self.dot(other)
        if isinstance(other, (int, float, np.number)):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, (int, float, np.number)):
            return self.scale(other)
        return NotImplemented

    def __truediv__(self: V, other: Any) -> V:
        if isinstance(other, (int, float, np.number)):
            return self._from_array(quiet_divide(self._v, self._PRECISION.cast(other)))
        return NotImplemented

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BaseVector):
            return NotImplemented
        if self.dimension != other.dimension:
            # lets a general vector compare zero-padded from the right side
            return NotImplemented
        return _components_equal(self, other, self.dimension)

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        """
        Hash of the components rounded to single precision.

        Trailing zeros are skipped so that a fixed vector and a zero-padded
        general vector that compare equal also hash alike, and a precision
        round trip keeps the hash. Equality is approximate, so two vectors
        within epsilon of each other can still hash differently.
        """
        with np.errstate(over='ignore'):
            values = self._v.astype(SINGLE.dtype)
        return hash_values(np.trim_zeros(values, 'b'))

    def __repr__(self) -> str:
        return format_components(self._NAME, self._v)

    def __copy__(self: V) -> V:
        return self._from_array(self._v.copy())

    def __deepcopy__(self: V, memo: dict) -> V:
        return self.__copy__()

    def __reduce__(self):
        return (type(self)._from_array, (self._v.copy(),))


def _binary(left: V, right: V, op: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> V:
    """Apply op component-wise in the space of the larger operand."""
    check_not_none(left, 'left')
    check_not_none(right, 'right')
    owner = left if left.dimension >= right.dimension else right
    dim = owner.dimension
    return owner._from_array(op(owner._padded(left, dim), owner._padded(right, dim)))


def _components_equal(left: BaseVector, right: BaseVector, dimension: int) -> bool:
    """Approximate equality of the first `dimension` padded components."""
    tier = left.precision.narrowest(right.precision)
    return all(tier.approx_equal(left[i], right[i]) for i in range(dimension))


def snapshot_value(snapshot: dict[str, Any], key: str) -> float:
    """
    Read one numeric field of a snapshot.

    Accepts numbers or invariant-format text.

    Raises:
        DataCorruptionError: If the field is missing or malformed
    """
    if not isinstance(snapshot, dict) or key not in snapshot:
        raise DataCorruptionError(f"{key}: missing from snapshot", field=key)
    value = snapshot[key]
    if isinstance(value, str):
        return parse_invariant_number(value, field=key)
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise DataCorruptionError(
            f"{key}: expected a number, got {type(value).__name__}", field=key
        )
    return float(value)

