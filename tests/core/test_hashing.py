"""
Tests for FNV style hash combination.
"""

import numpy as np
import pytest

from pyvecmat.core.exceptions import NullArgumentError
from pyvecmat.core.hashing import (
    FNV_OFFSET_BASIS,
    FNV_PRIME,
    NULL_HASH_CODE,
    combine,
    component_hash,
    hash_code,
    hash_values,
)


class TestConstants:

    def test_values(self):
        assert FNV_OFFSET_BASIS == 2166136261
        assert FNV_PRIME == 16777619
        assert NULL_HASH_CODE == 999983


class TestHashValues:

    def test_empty_is_signed_offset_basis(self):
        assert hash_values([]) == FNV_OFFSET_BASIS - (1 << 32)

    def test_result_fits_int32(self, rng):
        result = hash_values(rng.standard_normal(50))
        assert -(1 << 31) <= result < (1 << 31)

    def test_deterministic(self):
        assert hash_values([1.0, 2.5, -3.0]) == hash_values([1.0, 2.5, -3.0])

    def test_order_sensitive(self):
        assert hash_code(1, 2) != hash_code(2, 1)

    def test_none_uses_sentinel(self):
        seed = hash_values([])
        assert combine(seed, None) == combine(seed, NULL_HASH_CODE)
        assert component_hash(None) == NULL_HASH_CODE

    def test_numpy_scalars_hash_like_python_numbers(self):
        assert hash_values([np.float64(1.5), np.float32(2.0)]) == hash_values([1.5, 2.0])

    def test_variadic_matches_iterable(self):
        assert hash_code(1.0, None, 3.0) == hash_values([1.0, None, 3.0])

    def test_none_iterable_raises(self):
        with pytest.raises(NullArgumentError):
            hash_values(None)
