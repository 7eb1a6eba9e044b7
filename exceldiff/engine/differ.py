"""
Worksheet Differ - positional comparison of two worksheet snapshots.

Rows are paired purely by index. There is no content-based
re-synchronisation: a row inserted in the middle of a sheet shows up as a
run of MODIFIED rows followed by one ADDED row at the end. Moved rows are
reported as a removal plus an addition at their respective positions.

Example:
    >>> left = Worksheet.from_values([["A", "1"], ["B", "2"]])
    >>> right = Worksheet.from_values([["A", "1"], ["B", "3"]])
    >>> result = diff(left, right)
    >>> [entry.kind.value for entry in result]
    ['unchanged', 'modified']
"""
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Optional

from exceldiff.engine.cells import Row, Worksheet, cell_at
from exceldiff.engine.normalizer import normalize
from exceldiff.engine.result import CellDiff, DiffResult, RowDiff, RowDiffKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffOptions:
    """Immutable comparison options, passed explicitly to each comparison."""
    ignore_whitespace: bool = False


def compare_rows(left_row: Row, right_row: Row, ignore_whitespace: bool = False) -> CellDiff:
    """
    Compare two rows column by column.

    Columns are compared up to the longer of the two rows; a missing
    trailing cell is treated as EMPTY.

    Returns:
        Read-only mapping column -> (old, new) of raw values for every
        column whose normalized values differ (empty when rows are equal)
    """
    changes = {}
    width = max(len(left_row), len(right_row))

    for col in range(width):
        old = cell_at(left_row, col)
        new = cell_at(right_row, col)
        if normalize(old, ignore_whitespace) != normalize(new, ignore_whitespace):
            changes[col] = (old, new)

    return MappingProxyType(changes)


def diff(left: Worksheet, right: Worksheet, ignore_whitespace: bool = False) -> DiffResult:
    """
    Compare two worksheets by row position.

    Args:
        left: Baseline worksheet
        right: Worksheet compared against the baseline
        ignore_whitespace: Ignore whitespace differences in text cells

    Returns:
        DiffResult with one entry per row position, in index order
    """
    entries: List[RowDiff] = []
    n = max(len(left.rows), len(right.rows))

    for i in range(n):
        left_row: Optional[Row] = left.rows[i] if i < len(left.rows) else None
        right_row: Optional[Row] = right.rows[i] if i < len(right.rows) else None

        if left_row is not None and right_row is not None:
            changes = compare_rows(left_row, right_row, ignore_whitespace)
            if changes:
                entry = RowDiff(
                    kind=RowDiffKind.MODIFIED,
                    index=i,
                    left_index=i,
                    left_row=left_row,
                    right_index=i,
                    right_row=right_row,
                    cell_diff=changes,
                )
            else:
                entry = RowDiff(
                    kind=RowDiffKind.UNCHANGED,
                    index=i,
                    left_index=i,
                    left_row=left_row,
                    right_index=i,
                    right_row=right_row,
                )
        elif left_row is not None:
            entry = RowDiff(kind=RowDiffKind.REMOVED, index=i, left_index=i, left_row=left_row)
        else:
            entry = RowDiff(kind=RowDiffKind.ADDED, index=i, right_index=i, right_row=right_row)

        entries.append(entry)

    result = DiffResult(entries=tuple(entries), ignore_whitespace=ignore_whitespace)

    summary = result.summary()
    logger.debug(
        f"Compared {len(left.rows)} vs {len(right.rows)} rows: "
        f"{summary.unchanged} unchanged, {summary.modified} modified, "
        f"{summary.removed} removed, {summary.added} added"
    )

    return result


def filter_differences(
    result: DiffResult,
    left: Worksheet,
    include_header: bool = True,
) -> DiffResult:
    """
    Keep only MODIFIED, ADDED and REMOVED entries (diff-only mode).

    When include_header is set and the left worksheet has a header row,
    row 0 of the left worksheet is prepended as a synthetic UNCHANGED
    entry, regardless of how that row itself was classified. A header row
    that differs therefore also appears again at its own position.

    Args:
        result: Unfiltered diff result
        left: Left worksheet the result was computed from
        include_header: Prepend the header row

    Returns:
        New DiffResult with entries re-indexed from 0
    """
    kept = [entry for entry in result if entry.is_difference]

    entries: List[RowDiff] = []
    if include_header and left.has_header and left.rows:
        header = left.rows[0]
        entries.append(RowDiff(
            kind=RowDiffKind.UNCHANGED,
            index=0,
            left_index=0,
            left_row=header,
            right_index=None,
            right_row=None,
        ))

    for entry in kept:
        entries.append(RowDiff(
            kind=entry.kind,
            index=len(entries),
            left_index=entry.left_index,
            left_row=entry.left_row,
            right_index=entry.right_index,
            right_row=entry.right_row,
            cell_diff=entry.cell_diff,
        ))

    logger.debug(f"Filtered {len(result)} entries down to {len(entries)}")

    return DiffResult(entries=tuple(entries), ignore_whitespace=result.ignore_whitespace)


class WorksheetDiffer:
    """
    Compare worksheets with a fixed, immutable set of options.

    Holds no mutable state, so one instance can be shared across threads.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        self.options = options or DiffOptions()

    def compare(self, left: Worksheet, right: Worksheet) -> DiffResult:
        """Compare two worksheets using this differ's options."""
        return diff(left, right, ignore_whitespace=self.options.ignore_whitespace)

    def compare_filtered(
        self,
        left: Worksheet,
        right: Worksheet,
        include_header: bool = True,
    ) -> DiffResult:
        """Compare and keep only differences (see filter_differences)."""
        return filter_differences(self.compare(left, right), left, include_header)
