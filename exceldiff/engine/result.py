"""
Diff result models.

A DiffResult is built once per comparison and never mutated afterwards.
Writers consume it; the CLI summarises it.
"""
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from exceldiff.engine.cells import CellValue, Row

CellDiff = Mapping[int, Tuple[CellValue, CellValue]]

_NO_CHANGES: CellDiff = MappingProxyType({})


class RowDiffKind(str, Enum):
    """Classification of one aligned row position."""
    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class RowDiff:
    """
    One entry of a diff result.

    Attributes:
        kind: Row classification
        index: Position of this entry in the result
        left_index: Row index in the left worksheet (None for ADDED)
        left_row: Left row (None for ADDED)
        right_index: Row index in the right worksheet (None for REMOVED)
        right_row: Right row (None for REMOVED)
        cell_diff: For MODIFIED rows, column -> (old, new) raw values of
            every column whose normalized values differ; empty otherwise
    """
    kind: RowDiffKind
    index: int
    left_index: Optional[int] = None
    left_row: Optional[Row] = None
    right_index: Optional[int] = None
    right_row: Optional[Row] = None
    cell_diff: CellDiff = field(default_factory=lambda: _NO_CHANGES)

    @property
    def row(self) -> Row:
        """Row to render: right-side values, except for REMOVED rows."""
        if self.kind is RowDiffKind.REMOVED or self.right_row is None:
            return self.left_row or ()
        return self.right_row

    @property
    def width(self) -> int:
        return max(len(self.left_row or ()), len(self.right_row or ()))

    @property
    def is_difference(self) -> bool:
        return self.kind is not RowDiffKind.UNCHANGED

    @property
    def modified_columns(self) -> Tuple[int, ...]:
        return tuple(sorted(self.cell_diff))


@dataclass(frozen=True)
class DiffSummary:
    """Row counts per classification."""
    unchanged: int = 0
    modified: int = 0
    added: int = 0
    removed: int = 0

    @property
    def total(self) -> int:
        return self.unchanged + self.modified + self.added + self.removed

    @property
    def differences(self) -> int:
        return self.modified + self.added + self.removed

    def to_dict(self) -> dict:
        return {
            'unchanged': self.unchanged,
            'modified': self.modified,
            'added': self.added,
            'removed': self.removed,
        }


@dataclass(frozen=True)
class DiffResult:
    """Ordered, immutable sequence of row diffs."""
    entries: Tuple[RowDiff, ...] = ()
    ignore_whitespace: bool = False

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RowDiff]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> RowDiff:
        return self.entries[index]

    @property
    def has_differences(self) -> bool:
        return any(entry.is_difference for entry in self.entries)

    def summary(self) -> DiffSummary:
        counts = Counter(entry.kind for entry in self.entries)
        return DiffSummary(
            unchanged=counts[RowDiffKind.UNCHANGED],
            modified=counts[RowDiffKind.MODIFIED],
            added=counts[RowDiffKind.ADDED],
            removed=counts[RowDiffKind.REMOVED],
        )
