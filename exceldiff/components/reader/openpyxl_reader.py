"""
OpenpyxlReader - ReaderInterface implementation for .xlsx/.xlsm workbooks

Loads one worksheet into an immutable Worksheet snapshot using openpyxl in
read-only mode. Formula cells are read as their cached results by default.
"""

import logging
import warnings
from pathlib import Path
from typing import List, Optional
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.cell.cell import TYPE_ERROR
from openpyxl.utils.exceptions import InvalidFileException

from exceldiff.engine import EMPTY, CellValue, Worksheet
from exceldiff.interfaces import ReaderInterface, ReaderError, SheetNotFoundError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('.xlsx', '.xlsm')


class OpenpyxlReader(ReaderInterface):
    """
    Openpyxl-based workbook reader.

    Config keys:
        - data_only: Read cached formula results instead of formulas (default: True)
        - has_header: Whether row 0 is a title row (default: True)
    """

    def __init__(self, config: dict):
        super().__init__(config)
        self.data_only = config.get('data_only', True)
        self.has_header = config.get('has_header', True)

    def can_handle(self, source: Path) -> bool:
        return Path(source).suffix.lower() in SUPPORTED_EXTENSIONS

    def list_sheet_names(self, source: Path) -> List[str]:
        wb = self._open(Path(source))
        try:
            return list(wb.sheetnames)
        finally:
            wb.close()

    def load(self, source: Path, sheet_name: Optional[str] = None) -> Worksheet:
        source = Path(source)
        if not self.can_handle(source):
            raise ReaderError(f"File {source} is not a valid .xlsx file")

        wb = self._open(source)
        try:
            if not wb.sheetnames:
                raise ReaderError(f"Workbook has no sheets: {source}")

            if sheet_name is None:
                sheet_name = wb.sheetnames[0]
            elif sheet_name not in wb.sheetnames:
                raise SheetNotFoundError(sheet_name, source, list(wb.sheetnames))

            ws = wb[sheet_name]
            if not hasattr(ws, 'iter_rows'):
                raise ReaderError(f"Sheet '{sheet_name}' in {source} is not a worksheet")

            rows = tuple(
                tuple(self._convert_cell(cell) for cell in row)
                for row in ws.iter_rows()
            )
        finally:
            wb.close()

        logger.info(f"Loaded {len(rows)} rows from {source.name} [{sheet_name}]")

        return Worksheet(rows=rows, name=sheet_name, has_header=self.has_header)

    def get_name(self) -> str:
        return "OpenpyxlReader"

    def _open(self, source: Path):
        """Open a workbook read-only, translating library errors."""
        if not source.exists():
            raise ReaderError(f"File not found: {source}")

        try:
            with warnings.catch_warnings():
                # openpyxl warns about unsupported extensions (data validation, etc.)
                warnings.simplefilter('ignore', UserWarning)
                return load_workbook(source, read_only=True, data_only=self.data_only)
        except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
            raise ReaderError(f"Failed to open workbook: {source}: {e}") from e

    @staticmethod
    def _convert_cell(cell) -> CellValue:
        """Error cells (#N/A, #DIV/0!, ...) carry no comparable value and read as EMPTY."""
        if getattr(cell, 'data_type', None) == TYPE_ERROR:
            return EMPTY
        return CellValue.from_python(cell.value)
