"""
Cell and worksheet snapshot models.

A worksheet snapshot is what a reader hands to the differ: an ordered,
immutable sequence of rows, each an ordered sequence of typed cell values.
"""
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional, Tuple


class CellKind(str, Enum):
    """Cell value variants."""
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    EMPTY = "empty"


DATETIME_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class CellValue:
    """
    One spreadsheet cell.

    Equality is variant-aware: a NUMBER and a TEXT are never equal, whatever
    their content, and EMPTY only equals EMPTY.

    Use the named constructors rather than building instances directly:

        CellValue.text("abc")
        CellValue.number(1.5)
        CellValue.from_python(reader_value)
    """
    kind: CellKind
    value: Any = None

    @classmethod
    def text(cls, value: str) -> "CellValue":
        return cls(CellKind.TEXT, str(value))

    @classmethod
    def number(cls, value: float) -> "CellValue":
        return cls(CellKind.NUMBER, float(value))

    @classmethod
    def boolean(cls, value: bool) -> "CellValue":
        return cls(CellKind.BOOLEAN, bool(value))

    @classmethod
    def timestamp(cls, value: datetime) -> "CellValue":
        return cls(CellKind.DATETIME, value)

    @classmethod
    def empty(cls) -> "CellValue":
        return EMPTY

    @classmethod
    def from_python(cls, value: Any) -> "CellValue":
        """
        Type a native Python value as produced by a reader library.

        bool is checked before int because bool is an int subclass.
        Times of day and durations have no variant of their own and are
        kept as their ISO text.
        """
        if value is None:
            return EMPTY
        if isinstance(value, CellValue):
            return value
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, (int, float, Decimal)):
            return cls.number(float(value))
        if isinstance(value, datetime):
            return cls.timestamp(value)
        if isinstance(value, date):
            return cls.timestamp(datetime(value.year, value.month, value.day))
        if isinstance(value, time):
            return cls.text(value.isoformat())
        if isinstance(value, timedelta):
            return cls.text(str(value))
        return cls.text(str(value))

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    def to_python(self) -> Any:
        """Native value suitable for writing back to a spreadsheet cell."""
        return None if self.is_empty else self.value

    def display(self) -> str:
        """Rendered string form, used for diff annotations and column widths."""
        if self.kind is CellKind.EMPTY:
            return ""
        if self.kind is CellKind.BOOLEAN:
            return "TRUE" if self.value else "FALSE"
        if self.kind is CellKind.NUMBER:
            if math.isfinite(self.value) and self.value.is_integer():
                return str(int(self.value))
            return repr(self.value)
        if self.kind is CellKind.DATETIME:
            return self.value.strftime(DATETIME_DISPLAY_FORMAT)
        return self.value

    def __str__(self) -> str:
        return self.display()


EMPTY = CellValue(CellKind.EMPTY)

Row = Tuple[CellValue, ...]


def make_row(values: Iterable[Any]) -> Row:
    """Build a row from native values (or CellValues)."""
    return tuple(CellValue.from_python(v) for v in values)


def cell_at(row: Optional[Row], index: int) -> CellValue:
    """Cell at index, or EMPTY when the row is absent or too short."""
    if row is None or index >= len(row):
        return EMPTY
    return row[index]


@dataclass(frozen=True)
class Worksheet:
    """
    Read-only snapshot of one sheet.

    Attributes:
        rows: Rows in on-disk order; rows may have differing lengths
        name: Sheet name the rows were read from (informational)
        has_header: Whether row 0 is a title row
    """
    rows: Tuple[Row, ...] = ()
    name: str = ""
    has_header: bool = True

    @classmethod
    def from_values(
        cls,
        rows: Iterable[Iterable[Any]],
        name: str = "",
        has_header: bool = True,
    ) -> "Worksheet":
        return cls(
            rows=tuple(make_row(r) for r in rows),
            name=name,
            has_header=has_header,
        )

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    @property
    def max_columns(self) -> int:
        return max((len(r) for r in self.rows), default=0)
