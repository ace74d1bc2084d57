"""
FNV-1a style hash combination.

Components are folded one at a time into a 32-bit accumulator:

    hash = (hash * FNV_PRIME) ^ hash(component)

wrapping on overflow. Missing (None) components contribute NULL_HASH_CODE so
that heterogeneous collections hash consistently.
"""

from typing import Any, Iterable

from pyvecmat.core.exceptions import NullArgumentError


FNV_OFFSET_BASIS: int = 2166136261

FNV_PRIME: int = 16777619

# Sentinel hash for missing/None components
NULL_HASH_CODE: int = 999983

_MASK_32 = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _MASK_32
    return value - (1 << 32) if value & 0x80000000 else value


def component_hash(value: Any) -> int:
    """Hash a single component, mapping None to NULL_HASH_CODE."""
    if value is None:
        return NULL_HASH_CODE
    if hasattr(value, 'dtype'):
        # numpy scalars hash like the equivalent Python number
        value = value.item()
    return hash(value)


def combine(accumulator: int, value: Any) -> int:
    """Fold one component into an accumulator."""
    return _to_int32((accumulator * FNV_PRIME) ^ component_hash(value))


def hash_values(values: Iterable[Any]) -> int:
    """
    Combine an iterable of components into one 32-bit signed hash.

    Args:
        values: Components to fold, in order

    Returns:
        The accumulated hash code

    Raises:
        NullArgumentError: If values itself is None
    """
    if values is None:
        raise NullArgumentError('values')

    result = _to_int32(FNV_OFFSET_BASIS)
    for value in values:
        result = combine(result, value)
    return result


def hash_code(*values: Any) -> int:
    """Variadic form of hash_values."""
    return hash_values(values)
