"""
Input validation utilities for PyVecMat.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyvecmat.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    NullArgumentError,
    ValidationError,
)


def check_not_none(value: Any, name: str) -> None:
    """
    Verify a required operand was supplied.

    Args:
        value: Operand to check
        name: Parameter name for error messages

    Raises:
        NullArgumentError: If value is None
    """
    if value is None:
        raise NullArgumentError(name)


def check_array(array: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types, ragged nesting
    or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        NullArgumentError: If array is None
        ValidationError: If input cannot be converted to a numeric array
    """
    check_not_none(array, name)

    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_ or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype} is not supported")

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            expected=ndim,
            actual=array.ndim,
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_positive_size(size: int, name: str) -> None:
    """
    Verify a requested row, column or vector size is at least 1.

    Args:
        size: Requested size
        name: Parameter name for error messages

    Raises:
        ValidationError: If size is not an integer or is below 1
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise ValidationError(f"{name}: expected an integer size, got {type(size).__name__}")
    if size < 1:
        raise ValidationError(f"{name}: must be at least 1, got {size}")


def check_length(values: Any, expected: int, name: str) -> None:
    """
    Verify a flat data sequence holds exactly the expected element count.

    Raises:
        DimensionError: If the lengths differ
    """
    actual = len(values)
    if actual != expected:
        raise DimensionError(
            f"{name}: expected {expected} elements, got {actual}",
            expected=expected,
            actual=actual,
        )


def check_index(index: int, bound: int, name: str) -> None:
    """
    Verify 0 <= index < bound.

    Args:
        index: Index to check
        bound: Exclusive upper bound
        name: Parameter name for error messages

    Raises:
        IndexOutOfRangeError: If the index is outside the range
    """
    if index < 0 or index >= bound:
        raise IndexOutOfRangeError(
            f"{name}: must be between 0 (inclusive) and {bound} (exclusive), got {index}",
            index=index,
            bound=bound,
        )


def check_non_negative_index(index: int, name: str) -> None:
    """
    Verify an index is not negative.

    Raises:
        IndexOutOfRangeError: If the index is negative
    """
    if index < 0:
        raise IndexOutOfRangeError(f"{name}: must be positive, got {index}", index=index)


def check_shape(shape: tuple[int, int], expected: tuple[int, int], name: str) -> None:
    """
    Verify a matrix shape equals the required shape.

    Args:
        shape: Actual (rows, columns)
        expected: Required (rows, columns)
        name: Parameter name for error messages

    Raises:
        DimensionError: If the shapes differ
    """
    if tuple(shape) != tuple(expected):
        raise DimensionError(
            f"{name}: the matrix has the wrong size "
            f"(size: {shape[0]}x{shape[1]}, required: {expected[0]}x{expected[1]})",
            expected=tuple(expected),
            actual=tuple(shape),
        )
