"""
Number formatting for display and for serialization.

Two distinct formats are used:
    - number_string: compact display format (up to 4 decimals, scientific
      notation from SMALLEST_SCIENTIFIC_NUMBER upward); lossy
    - invariant_number / parse_invariant_number: locale-independent,
      round-trippable text used by snapshots
"""

import math
import re
from typing import Sequence

import numpy as np

from pyvecmat.core.exceptions import DataCorruptionError


# Absolute values from here upward are shown in scientific notation
SMALLEST_SCIENTIFIC_NUMBER: int = 1000

_INVARIANT_NUMBER = re.compile(
    r'^[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf|nan)$'
)


def number_string(value: float) -> str:
    """
    Format a number for display with up to 4 decimals.

    Args:
        value: The number to format

    Returns:
        Plain notation below SMALLEST_SCIENTIFIC_NUMBER, otherwise
        scientific notation such as '1.2346e4'
    """
    value = float(value)

    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'

    if abs(value) < SMALLEST_SCIENTIFIC_NUMBER:
        text = f"{value:.4f}".rstrip('0').rstrip('.')
        return '0' if text in ('', '-0') else text

    mantissa, exponent = f"{value:.4e}".split('e')
    mantissa = mantissa.rstrip('0').rstrip('.')
    return f"{mantissa}e{int(exponent)}"


def invariant_number(value: float) -> str:
    """
    Locale-independent, round-trippable text for a scalar.

    Single precision values are widened exactly, so parsing the text and
    narrowing again restores the original bits.
    """
    return repr(float(value))


def parse_invariant_number(text: str, field: str | None = None) -> float:
    """
    Parse text produced by invariant_number.

    Args:
        text: The text to parse
        field: Field name for error messages

    Returns:
        The parsed value as a Python float

    Raises:
        DataCorruptionError: If the text is not a plain invariant number
    """
    if not isinstance(text, str) or not _INVARIANT_NUMBER.match(text):
        raise DataCorruptionError(
            f"{field or 'value'}: {text!r} is not a number in invariant format",
            field=field,
        )
    return float(text)


def format_grid(header: str, cells: Sequence[Sequence[float]]) -> str:
    """
    Render a header line followed by a right-aligned grid.

    Every column is padded to the width of its widest cell and columns are
    separated by two spaces. Each grid line starts with one space.

    Args:
        header: First line of the output
        cells: Row-major nested sequence of values

    Returns:
        The multi-line text
    """
    texts = [[number_string(v) for v in row] for row in cells]
    n_columns = len(texts[0]) if texts else 0
    widths = [
        max(len(row[c]) for row in texts) for c in range(n_columns)
    ]

    lines = [header]
    for row in texts:
        lines.append(' ' + '  '.join(t.rjust(w) for t, w in zip(row, widths)))
    return '\n'.join(lines)


def format_components(name: str, values: np.ndarray) -> str:
    """Render components as 'Name[a, b, c]'."""
    return f"{name}[{', '.join(repr(float(v)) for v in values)}]"
