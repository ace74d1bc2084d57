"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_not_none: None detection
    - check_array: conversion, dtype coercion, object/bool/complex rejection
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_positive_size: sizes below 1
    - check_length / check_shape: element counts and matrix shapes
    - check_index / check_non_negative_index: index ranges
"""

import numpy as np
import pytest

from pyvecmat.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    NullArgumentError,
    ValidationError,
)
from pyvecmat.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_index,
    check_length,
    check_ndim,
    check_non_negative_index,
    check_not_none,
    check_positive_size,
    check_shape,
)


# ═══════════════════════════════════════════════════════════════════════
# check_not_none / check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNotNone:

    def test_none_raises(self):
        with pytest.raises(NullArgumentError, match="other"):
            check_not_none(None, "other")

    def test_falsy_values_pass(self):
        check_not_none(0, "x")
        check_not_none([], "x")


class TestCheckArray:
    """check_array converts to ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "values")
        assert isinstance(result, np.ndarray)
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float32_preserved(self):
        arr = np.array([1.0, 2.0], dtype=np.float32)
        assert check_array(arr, "values").dtype == np.float32

    def test_none_raises_null_argument(self):
        with pytest.raises(NullArgumentError):
            check_array(None, "values")

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "values")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "values")

    def test_rejects_bool(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array([True, False], "values")

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array([1 + 2j], "values")

    def test_empty_array(self):
        assert check_array([], "values").shape == (0,)


# ═══════════════════════════════════════════════════════════════════════
# Dimensionality
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNdim:

    def test_correct_ndim_passes(self):
        check_ndim(np.zeros((2, 3)), 2, "m")

    def test_wrong_ndim_raises(self):
        with pytest.raises(DimensionError, match="expected 1D") as info:
            check_1d(np.zeros((2, 2)), "values")
        assert info.value.expected == 1
        assert info.value.actual == 2

    def test_check_2d_rejects_1d(self):
        with pytest.raises(DimensionError):
            check_2d(np.zeros(3), "array")


# ═══════════════════════════════════════════════════════════════════════
# Sizes, lengths and shapes
# ═══════════════════════════════════════════════════════════════════════


class TestCheckPositiveSize:

    @pytest.mark.parametrize("size", [1, 3, np.int64(7)])
    def test_valid_sizes(self, size):
        check_positive_size(size, "rows")

    @pytest.mark.parametrize("size", [0, -1])
    def test_below_one_raises(self, size):
        with pytest.raises(ValidationError, match="at least 1"):
            check_positive_size(size, "rows")

    @pytest.mark.parametrize("size", [2.0, "3", True])
    def test_non_integer_raises(self, size):
        with pytest.raises(ValidationError, match="integer"):
            check_positive_size(size, "rows")


class TestCheckLength:

    def test_matching_length_passes(self):
        check_length([1, 2, 3, 4], 4, "data")

    def test_mismatch_raises(self):
        with pytest.raises(DimensionError, match="expected 6 elements, got 5"):
            check_length([0] * 5, 6, "data")


class TestCheckShape:

    def test_matching_shape_passes(self):
        check_shape((3, 4), (3, 4), "other")

    def test_mismatch_message(self):
        with pytest.raises(DimensionError, match=r"size: 2x3, required: 3x3") as info:
            check_shape((2, 3), (3, 3), "output")
        assert info.value.expected == (3, 3)
        assert info.value.actual == (2, 3)


# ═══════════════════════════════════════════════════════════════════════
# Indices
# ═══════════════════════════════════════════════════════════════════════


class TestCheckIndex:

    @pytest.mark.parametrize("index", [0, 3])
    def test_in_range(self, index):
        check_index(index, 4, "index")

    @pytest.mark.parametrize("index", [-1, 4, 10])
    def test_out_of_range(self, index):
        with pytest.raises(IndexOutOfRangeError) as info:
            check_index(index, 4, "index")
        assert info.value.index == index
        assert info.value.bound == 4

    def test_non_negative_index(self):
        check_non_negative_index(100, "index")
        with pytest.raises(IndexOutOfRangeError):
            check_non_negative_index(-1, "index")
