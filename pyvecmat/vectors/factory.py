"""
Vector factory.

build() picks the best concrete vector type for the number of values it is
given: 2, 3 and 4 values get the fixed vectors, any other count gets the
general N-dimensional vector. Callers only ever see the Vector capability.

Example:
    >>> from pyvecmat.vectors.factory import build
    >>> build(1, 2, 3)
    Vector[1.0, 2.0, 3.0]
    >>> type(build(1, 2, 3, 4, 5)).__name__
    'VectorNd'
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pyvecmat.core.exceptions import ValidationError
from pyvecmat.core.precision import DOUBLE, Precision, PrecisionLike, resolve_precision
from pyvecmat.core.validation import check_1d, check_array, check_not_none
from pyvecmat.vectors.base import BaseVector, vector_type

# register the concrete types
from pyvecmat.vectors import fixed as _fixed  # noqa: F401
from pyvecmat.vectors.general import VectorN


def build(*values: Any, precision: PrecisionLike = DOUBLE) -> BaseVector:
    """
    Build the best vector for the given components.

    Accepts either the components themselves or a single array-like
    holding them: build(1, 2, 3) and build([1, 2, 3]) are equivalent.
    The values are copied.

    Args:
        *values: Components, or one array-like of components
        precision: Scalar precision of the result

    Returns:
        Vector2/3/4 for 2/3/4 values, otherwise a general vector

    Raises:
        NullArgumentError: If the value array is None
        ValidationError: If no values are given or they are not numeric
    """
    if len(values) == 1 and not np.isscalar(values[0]):
        values = values[0]
    check_not_none(values, 'values')
    array = check_array(values, 'values')
    check_1d(array, 'values')
    return _dispatch(np.array(array), resolve_precision(precision))


def build_owned(array: np.ndarray, precision: PrecisionLike | None = None) -> BaseVector:
    """
    Build the best vector for an array without copying it.

    A general vector shares the array when its dtype already matches the
    precision; the caller must treat the array as consumed. Fixed vectors
    are immutable and may still copy.

    Args:
        array: 1-D array of components
        precision: Scalar precision; inferred from a float32/float64 dtype
                   when omitted

    Raises:
        NullArgumentError: If array is None
        ValidationError: If array is empty or not numeric
    """
    check_not_none(array, 'array')
    array = check_array(array, 'array')
    check_1d(array, 'array')
    if precision is None:
        precision = array.dtype if array.dtype in (np.float32, np.float64) else DOUBLE
    return _dispatch(array, resolve_precision(precision))


def _dispatch(array: np.ndarray, precision: Precision) -> BaseVector:
    if array.shape[0] == 0:
        raise ValidationError("values: a vector needs at least one dimension")
    cls = vector_type(array.shape[0], precision)
    if issubclass(cls, VectorN):
        return cls.from_owned(array)
    return cls._from_array(array)
