"""
Excel Diff - Compare two worksheets and highlight differences.

Produces a colour-coded copy of the comparison:
- Modified cells (red text with old → new values)
- Removed rows (yellow background)
- Added rows (orange background)
"""
from .engine import (
    CellKind,
    CellValue,
    DiffOptions,
    DiffResult,
    RowDiff,
    RowDiffKind,
    Worksheet,
    WorksheetDiffer,
    diff,
    filter_differences,
    normalize,
)

__version__ = '0.3.0'

__all__ = [
    'CellKind',
    'CellValue',
    'DiffOptions',
    'DiffResult',
    'RowDiff',
    'RowDiffKind',
    'Worksheet',
    'WorksheetDiffer',
    'diff',
    'filter_differences',
    'normalize',
]
