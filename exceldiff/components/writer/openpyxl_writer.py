"""
OpenpyxlWriter - WriterInterface implementation producing a coloured .xlsx

Colour scheme:
- Unchanged rows: no colouring, original values
- Modified rows: changed cells as "old → new" in red text with a comment
- Removed rows: yellow background, left-side values
- Added rows: orange background, right-side values
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.comments import Comment
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from exceldiff.engine import CellKind, CellValue, DiffResult, RowDiff, RowDiffKind, cell_at
from exceldiff.interfaces import WriterInterface, WriteResult, WriterError

logger = logging.getLogger(__name__)

DATETIME_NUMBER_FORMAT = 'yyyy-mm-dd hh:mm:ss'
CHANGE_ARROW = '→'
COMMENT_AUTHOR = 'exceldiff'


def format_change(old: CellValue, new: CellValue) -> str:
    """Rendered text of a modified cell."""
    return f"{old.display()} {CHANGE_ARROW} {new.display()}"


class OpenpyxlWriter(WriterInterface):
    """
    Openpyxl-based diff writer.

    Config keys:
        - sheet_title: Name of the output sheet (default: Diff)
        - modified_font_color: ARGB/RGB hex (default: FF0000)
        - removed_fill_color: RGB hex (default: FFFF00)
        - added_fill_color: RGB hex (default: FFA500)
        - add_comments: Attach a comment to each modified cell (default: True)
        - max_column_width: Upper bound for auto-sized columns (default: 60)
    """

    def __init__(self, config: dict):
        super().__init__(config)
        self.sheet_title = config.get('sheet_title', 'Diff')
        self.add_comments = config.get('add_comments', True)
        self.max_column_width = config.get('max_column_width', 60)

        self.modified_font = Font(color=config.get('modified_font_color', 'FF0000'))
        self.removed_fill = PatternFill('solid', fgColor=config.get('removed_fill_color', 'FFFF00'))
        self.added_fill = PatternFill('solid', fgColor=config.get('added_fill_color', 'FFA500'))

    def write(self, result: DiffResult, output_path: Path) -> WriteResult:
        output_path = Path(output_path)

        wb = Workbook()
        ws = wb.active
        ws.title = self.sheet_title

        widths: Dict[int, int] = {}
        for excel_row, entry in enumerate(result, start=1):
            self._write_entry(ws, excel_row, entry, widths)

        for col, width in widths.items():
            ws.column_dimensions[get_column_letter(col)].width = min(width + 2, self.max_column_width)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            raise WriterError(f"Failed to write output to {output_path}: {e}") from e

        logger.info(f"Wrote {len(result)} rows to {output_path}")

        return WriteResult(success=True, output_path=output_path, rows_written=len(result))

    def get_name(self) -> str:
        return "OpenpyxlWriter"

    def _write_entry(self, ws, excel_row: int, entry: RowDiff, widths: Dict[int, int]) -> None:
        if entry.kind is RowDiffKind.MODIFIED:
            for col in range(entry.width):
                if col in entry.cell_diff:
                    old, new = entry.cell_diff[col]
                    text = format_change(old, new)
                    cell = self._write_value(ws, excel_row, col + 1, CellValue.text(text))
                    cell.font = self.modified_font
                    if self.add_comments:
                        cell.comment = Comment(
                            _clean(f"Changed from '{old.display()}' to '{new.display()}'"),
                            COMMENT_AUTHOR,
                        )
                    _track_width(widths, col + 1, text)
                else:
                    value = cell_at(entry.right_row, col)
                    self._write_value(ws, excel_row, col + 1, value)
                    _track_width(widths, col + 1, value.display())
            return

        fill: Optional[PatternFill] = None
        if entry.kind is RowDiffKind.REMOVED:
            fill = self.removed_fill
        elif entry.kind is RowDiffKind.ADDED:
            fill = self.added_fill

        for col, value in enumerate(entry.row, start=1):
            cell = self._write_value(ws, excel_row, col, value)
            if fill is not None:
                cell.fill = fill
            _track_width(widths, col, value.display())

    @staticmethod
    def _write_value(ws, excel_row: int, excel_col: int, value: CellValue):
        cell = ws.cell(row=excel_row, column=excel_col)
        if value.kind is CellKind.TEXT:
            cell.value = _clean(value.value)
            # Text starting with '=' must not become a formula
            cell.data_type = 's'
        else:
            cell.value = value.to_python()
        if value.kind is CellKind.DATETIME:
            cell.number_format = DATETIME_NUMBER_FORMAT
        return cell


def _clean(text: str) -> str:
    """Strip control characters that cannot be stored in a worksheet."""
    return ILLEGAL_CHARACTERS_RE.sub('', text)


def _track_width(widths: Dict[int, int], col: int, text: str) -> None:
    longest = max((len(line) for line in text.splitlines()), default=0)
    if longest > widths.get(col, 0):
        widths[col] = longest
