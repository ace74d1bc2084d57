"""
Core infrastructure for PyVecMat.

Shared numeric building blocks used by the vector and matrix subpackages.

Key components:
    precision: Double/single precision tiers and approx_equal
    exceptions: Exception hierarchy
    validation: Input validators
    hashing: FNV style hash combination
    formatting: Display and invariant number formats
    protocols: Vector, MatrixStorage protocols
"""

from pyvecmat.core.precision import (
    DOUBLE,
    SINGLE,
    DOUBLE_EPSILON,
    SINGLE_EPSILON,
    Precision,
    approx_equal,
    resolve_precision,
)
from pyvecmat.core.protocols import Vector, MatrixStorage
from pyvecmat.core.exceptions import (
    PyVecMatError,
    ValidationError,
    DimensionError,
    NullArgumentError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
    DataCorruptionError,
    DegenerateInversionWarning,
)

__all__ = [
    # Precision
    "DOUBLE",
    "SINGLE",
    "DOUBLE_EPSILON",
    "SINGLE_EPSILON",
    "Precision",
    "approx_equal",
    "resolve_precision",
    # Protocols
    "Vector",
    "MatrixStorage",
    # Exceptions
    "PyVecMatError",
    "ValidationError",
    "DimensionError",
    "NullArgumentError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    "DataCorruptionError",
    "DegenerateInversionWarning",
]
