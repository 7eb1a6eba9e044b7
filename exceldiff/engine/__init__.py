"""Excel Diff - comparison engine"""

from .cells import CellKind, CellValue, Row, Worksheet, EMPTY, cell_at, make_row
from .normalizer import ComparableValue, collapse_whitespace, normalize, values_equal
from .result import CellDiff, DiffResult, DiffSummary, RowDiff, RowDiffKind
from .differ import DiffOptions, WorksheetDiffer, compare_rows, diff, filter_differences

__all__ = [
    # Cells
    'CellKind',
    'CellValue',
    'Row',
    'Worksheet',
    'EMPTY',
    'cell_at',
    'make_row',

    # Normalization
    'ComparableValue',
    'collapse_whitespace',
    'normalize',
    'values_equal',

    # Results
    'CellDiff',
    'DiffResult',
    'DiffSummary',
    'RowDiff',
    'RowDiffKind',

    # Differ
    'DiffOptions',
    'WorksheetDiffer',
    'compare_rows',
    'diff',
    'filter_differences',
]
