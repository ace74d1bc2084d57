"""
Exception hierarchy for PyVecMat.

All exceptions inherit from PyVecMatError to allow catching any
library-specific error. Each concrete class additionally inherits from the
builtin exception a Python caller would naturally expect (ValueError,
IndexError, ArithmeticError) so generic handlers keep working.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyVecMatError(Exception):
    """Base exception for all PyVecMat errors."""
    pass


class ValidationError(PyVecMatError, ValueError):
    """
    Invalid argument.

    Raised when user-provided inputs fail validation checks (non-positive
    sizes, malformed data, wrong element counts).
    """
    pass


class NullArgumentError(ValidationError, TypeError):
    """
    A required operand was None.

    Attributes:
        argument: Name of the offending parameter
    """

    def __init__(self, argument: str, message: str | None = None):
        super().__init__(message or f"{argument}: must not be None")
        self.argument = argument


class DimensionError(ValidationError):
    """
    Shapes or dimensions are incorrect or inconsistent.

    Raised when two operands (or an operand and an output instance) do not
    have compatible shapes.

    Attributes:
        expected: Required shape or dimension, if known
        actual: Shape or dimension that was supplied, if known
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, ...] | int | None = None,
        actual: tuple[int, ...] | int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(PyVecMatError, IndexError):
    """
    Flat, 2-D or component index outside the valid range.

    Attributes:
        index: The index that was requested
        bound: Exclusive upper bound that applied
    """

    def __init__(self, message: str, index: int | tuple[int, int] | None = None, bound: int | None = None):
        super().__init__(message)
        self.index = index
        self.bound = bound


class NumericalError(PyVecMatError, ArithmeticError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when an inversion encounters a pivot that is approximately zero.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Elimination step at which the zero pivot was found
        pivot_value: The offending pivot value
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value


class DataCorruptionError(PyVecMatError, ValueError):
    """
    Serialized data does not match its declared shape or format.

    Raised when restoring a snapshot whose row/column counts or per-cell
    numeric text cannot be parsed.

    Attributes:
        field: Snapshot field that failed to parse, if known
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DegenerateInversionWarning(RuntimeWarning):
    """
    4x4 inversion aborted early on a degenerate pivot configuration.

    The returned matrix is the best-effort partial result of the
    elimination, not an inverse.
    """
    pass
