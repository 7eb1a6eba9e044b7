"""
CsvReader - ReaderInterface implementation for delimited text files

A delimited file holds a single pseudo-sheet named after the file stem.
Fields are typed on load so that numbers, booleans and ISO dates compare
the same way they do when read from a workbook.
"""

import csv
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from exceldiff.engine import EMPTY, CellValue, Row, Worksheet
from exceldiff.interfaces import ReaderInterface, ReaderError, SheetNotFoundError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('.csv', '.tsv', '.txt')
SNIFF_DELIMITERS = ',;\t|'
SNIFF_SAMPLE_BYTES = 64 * 1024

_NUMBER_RE = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')
_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}([T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?)?$')


def infer_cell(field: str) -> CellValue:
    """
    Type one raw field.

    Fields are not stripped: " 12" stays text, so whitespace handling is
    left to the comparison options.
    """
    if field == '':
        return EMPTY
    if _NUMBER_RE.match(field):
        return CellValue.number(float(field))
    lowered = field.lower()
    if lowered in ('true', 'false'):
        return CellValue.boolean(lowered == 'true')
    if _DATE_RE.match(field):
        try:
            return CellValue.timestamp(datetime.fromisoformat(field))
        except ValueError:
            pass
    return CellValue.text(field)


class CsvReader(ReaderInterface):
    """
    Delimited-text reader.

    Config keys:
        - delimiter: Field delimiter (default: tab for .tsv, otherwise sniffed)
        - encoding: File encoding (default: utf-8-sig)
        - infer_types: Type numbers, booleans and dates (default: True)
        - has_header: Whether row 0 is a title row (default: True)
    """

    def __init__(self, config: dict):
        super().__init__(config)
        self.delimiter = config.get('delimiter')
        self.encoding = config.get('encoding', 'utf-8-sig')
        self.infer_types = config.get('infer_types', True)
        self.has_header = config.get('has_header', True)

    def can_handle(self, source: Path) -> bool:
        return Path(source).suffix.lower() in SUPPORTED_EXTENSIONS

    def list_sheet_names(self, source: Path) -> List[str]:
        source = Path(source)
        if not source.is_file():
            raise ReaderError(f"File not found: {source}")
        return [source.stem]

    def load(self, source: Path, sheet_name: Optional[str] = None) -> Worksheet:
        source = Path(source)
        available = self.list_sheet_names(source)
        if sheet_name is not None and sheet_name not in available:
            raise SheetNotFoundError(sheet_name, source, available)

        try:
            with open(source, 'r', encoding=self.encoding, newline='') as f:
                dialect = self._detect_dialect(source, f.read(SNIFF_SAMPLE_BYTES))
                f.seek(0)
                rows = tuple(self._convert_row(raw) for raw in csv.reader(f, dialect))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise ReaderError(f"Failed to read {source}: {e}") from e

        logger.info(f"Loaded {len(rows)} rows from {source.name}")

        return Worksheet(rows=rows, name=available[0], has_header=self.has_header)

    def get_name(self) -> str:
        return "CsvReader"

    def _detect_dialect(self, source: Path, sample: str):
        if self.delimiter:
            return _dialect_with_delimiter(self.delimiter)
        if source.suffix.lower() == '.tsv':
            return csv.excel_tab
        try:
            return csv.Sniffer().sniff(sample, delimiters=SNIFF_DELIMITERS)
        except csv.Error:
            logger.debug(f"Could not sniff delimiter of {source.name}, using ','")
            return csv.excel

    def _convert_row(self, raw: List[str]) -> Row:
        if self.infer_types:
            return tuple(infer_cell(field) for field in raw)
        return tuple(CellValue.text(field) if field else EMPTY for field in raw)


def _dialect_with_delimiter(delimiter: str):
    class _Dialect(csv.excel):
        pass

    _Dialect.delimiter = delimiter
    return _Dialect
