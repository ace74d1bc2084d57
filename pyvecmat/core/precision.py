"""
Precision tiers and epsilon-tolerant comparison.

Every vector and matrix carries exactly one Precision. The two tiers mirror
each other: they differ only in storage dtype and default tolerance, so the
arithmetic is written once and parameterized by the tier.

    DOUBLE: np.float64 storage, epsilon 1e-9
    SINGLE: np.float32 storage, epsilon 1e-6
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from pyvecmat.core.exceptions import ValidationError


# Tolerance for double precision comparisons (absolute)
DOUBLE_EPSILON: float = 1e-9

# Tolerance for single precision comparisons (absolute)
SINGLE_EPSILON: float = 1e-6


@dataclass(frozen=True)
class Precision:
    """
    Scalar precision specification.

    Attributes:
        name: Canonical name ('double' or 'single')
        dtype: NumPy scalar type used for storage
        epsilon: Default tolerance for approximate equality
        label: Human-readable label used in string forms
        rank: Ordering key, higher means wider
    """
    name: str
    dtype: type
    epsilon: float
    label: str
    rank: int

    def cast(self, value: Any) -> np.floating:
        """Direct numeric cast of a scalar to this precision."""
        return self.dtype(value)

    def array(self, values: Any) -> np.ndarray:
        """Copy values into a 1-D array of this precision."""
        return np.array(values, dtype=self.dtype).reshape(-1)

    def zeros(self, n: int) -> np.ndarray:
        return np.zeros(n, dtype=self.dtype)

    def approx_equal(self, a: float, b: float, epsilon: float | None = None) -> bool:
        """Approximate equality using this tier's default epsilon."""
        return approx_equal(a, b, self.epsilon if epsilon is None else epsilon)

    def narrowest(self, other: Precision) -> Precision:
        """
        The narrower of the two tiers.

        Comparisons between a double and a single operand run in single
        precision, with its coarser epsilon.
        """
        return self if self.rank <= other.rank else other

    def __str__(self) -> str:
        return self.name


DOUBLE = Precision(
    name='double',
    dtype=np.float64,
    epsilon=DOUBLE_EPSILON,
    label='Double',
    rank=1,
)

SINGLE = Precision(
    name='single',
    dtype=np.float32,
    epsilon=SINGLE_EPSILON,
    label='Single',
    rank=0,
)

PrecisionLike = Union[Precision, str, type, np.dtype]

_ALIASES = {
    'double': DOUBLE,
    'd': DOUBLE,
    'float64': DOUBLE,
    'f8': DOUBLE,
    'single': SINGLE,
    'float': SINGLE,
    'f': SINGLE,
    'float32': SINGLE,
    'f4': SINGLE,
}


def resolve_precision(precision: PrecisionLike) -> Precision:
    """
    Resolve a precision specification to a Precision tier.

    Args:
        precision: A Precision, one of the aliases 'double'/'d'/'float64'
                   or 'single'/'f'/'float32', or a float64/float32 dtype

    Returns:
        The matching Precision

    Raises:
        ValidationError: If the specification names no supported precision
    """
    if isinstance(precision, Precision):
        return precision

    if isinstance(precision, str):
        tier = _ALIASES.get(precision.lower())
        if tier is None:
            raise ValidationError(
                f"precision: unknown precision {precision!r}, "
                f"expected one of {sorted(_ALIASES)}"
            )
        return tier

    try:
        dtype = np.dtype(precision)
    except TypeError as e:
        raise ValidationError(f"precision: cannot interpret {precision!r}: {e}") from e

    if dtype == np.float64:
        return DOUBLE
    if dtype == np.float32:
        return SINGLE
    raise ValidationError(f"precision: unsupported dtype {dtype}, expected float64 or float32")


def approx_equal(a: float, b: float, epsilon: float = DOUBLE_EPSILON) -> bool:
    """
    Epsilon-tolerant scalar equality.

    Two values are equal when both are +inf, both are -inf, or their
    absolute difference is at most epsilon. NaN is unequal to everything,
    itself included.

    Args:
        a: First value
        b: Second value
        epsilon: Absolute tolerance

    Returns:
        True if the values are considered equal
    """
    a = float(a)
    b = float(b)

    if math.isinf(a) and math.isinf(b) and (a > 0) == (b > 0):
        return True

    if math.isnan(a) or math.isnan(b):
        return False

    return abs(a - b) <= epsilon


def approx_equal_single(a: float, b: float, epsilon: float = SINGLE_EPSILON) -> bool:
    """approx_equal with the single precision default tolerance."""
    return approx_equal(a, b, epsilon)


def quiet_divide(numerator: Any, denominator: Any) -> Any:
    """
    IEEE division that yields inf/nan for a zero denominator.

    Works for numpy scalars and arrays alike; numpy's divide-by-zero
    warnings are suppressed.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.divide(numerator, denominator)

