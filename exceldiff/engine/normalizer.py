"""
Normalization of cell values for equality testing.

The comparable form is used only to decide whether two cells are equal.
Displayed and stored values always stay the original CellValue.
"""
import math
from typing import Any, Tuple

from exceldiff.engine.cells import CellKind, CellValue

ComparableValue = Tuple[CellKind, Any]

_EMPTY_FORM: ComparableValue = (CellKind.EMPTY, None)
_NAN_FORM: ComparableValue = (CellKind.NUMBER, "nan")


def collapse_whitespace(text: str) -> str:
    """
    Trim the string and collapse interior whitespace runs to one space.

    str.split() with no separator splits on any Unicode whitespace
    (space, tab, newline, carriage return, form feed, no-break space, ...).

    Example:
        >>> collapse_whitespace("Hello  \\nWorld  ")
        'Hello World'
    """
    return " ".join(text.split())


def normalize(value: CellValue, ignore_whitespace: bool = False) -> ComparableValue:
    """
    Convert a cell value into its canonical comparable form.

    Rules:
    - NUMBER, BOOLEAN, DATETIME and EMPTY compare by exact kind and value
      (no epsilon on numbers); every NaN compares equal to every other NaN
    - TEXT compares by its raw string unless ignore_whitespace is set, in
      which case leading/trailing whitespace is trimmed and interior runs
      are collapsed
    - With ignore_whitespace, text that trims to "" compares equal to EMPTY

    Args:
        value: Cell to normalize
        ignore_whitespace: Whether whitespace differences in text are ignored

    Returns:
        Hashable (kind, payload) tuple
    """
    if value.kind is CellKind.EMPTY:
        return _EMPTY_FORM

    if value.kind is CellKind.TEXT and ignore_whitespace:
        collapsed = collapse_whitespace(value.value)
        if not collapsed:
            return _EMPTY_FORM
        return (CellKind.TEXT, collapsed)

    if value.kind is CellKind.NUMBER and math.isnan(value.value):
        return _NAN_FORM

    return (value.kind, value.value)


def values_equal(left: CellValue, right: CellValue, ignore_whitespace: bool = False) -> bool:
    """Whether two cells are equal under normalization."""
    return normalize(left, ignore_whitespace) == normalize(right, ignore_whitespace)
