"""
JsonWriter - WriterInterface implementation producing JSON

Formats diff results as JSON for programmatic consumption.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from exceldiff.engine import DiffResult, Row, RowDiff
from exceldiff.interfaces import WriterInterface, WriteResult, WriterError

logger = logging.getLogger(__name__)


def _render_row(row: Optional[Row]) -> Optional[List[str]]:
    if row is None:
        return None
    return [value.display() for value in row]


def entry_to_dict(entry: RowDiff) -> Dict[str, Any]:
    """Serialisable form of one row diff."""
    return {
        'index': entry.index,
        'kind': entry.kind.value,
        'left_index': entry.left_index,
        'right_index': entry.right_index,
        'left': _render_row(entry.left_row),
        'right': _render_row(entry.right_row),
        'modified_columns': list(entry.modified_columns),
        'changes': [
            {'column': col, 'old': old.display(), 'new': new.display()}
            for col, (old, new) in sorted(entry.cell_diff.items())
        ],
    }


def result_to_dict(result: DiffResult) -> Dict[str, Any]:
    """Serialisable form of a diff result."""
    return {
        'ignore_whitespace': result.ignore_whitespace,
        'summary': result.summary().to_dict(),
        'rows': [entry_to_dict(entry) for entry in result],
    }


class JsonWriter(WriterInterface):
    """
    Format diff results as JSON.

    Config keys:
        - pretty: Indent output for readability (default: True)
    """

    def __init__(self, config: dict):
        super().__init__(config)
        self.pretty = config.get('pretty', True)

    def format(self, result: DiffResult) -> str:
        """Format diff result as JSON string."""
        if self.pretty:
            return json.dumps(result_to_dict(result), indent=2, ensure_ascii=False)
        else:
            return json.dumps(result_to_dict(result), ensure_ascii=False)

    def write(self, result: DiffResult, output_path: Path) -> WriteResult:
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(self.format(result))
        except OSError as e:
            raise WriterError(f"Failed to write output to {output_path}: {e}") from e

        logger.info(f"Wrote {len(result)} rows to {output_path}")

        return WriteResult(success=True, output_path=output_path, rows_written=len(result))

    def get_name(self) -> str:
        return "JsonWriter"
