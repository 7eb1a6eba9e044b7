"""
Excel Diff - Component Interfaces

Abstract interfaces for the pluggable readers and writers that sit around
the comparison engine, plus the errors they raise.

Readers turn a persisted spreadsheet into a Worksheet snapshot before the
engine runs; writers render a DiffResult afterwards. The engine itself
never does I/O.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, List
from dataclasses import dataclass, field

from exceldiff.engine import DiffResult, Worksheet


# ============================================================================
# Errors
# ============================================================================

class ExcelDiffError(Exception):
    """Base class for all Excel Diff errors"""


class ReaderError(ExcelDiffError):
    """Raised when a source file cannot be read"""


class SheetNotFoundError(ReaderError):
    """Raised when the requested sheet does not exist in the source"""

    def __init__(self, sheet_name: str, source: Path, available: List[str]):
        self.sheet_name = sheet_name
        self.source = source
        self.available = available
        super().__init__(
            f"Sheet '{sheet_name}' not found in {source}. "
            f"Available: {available}"
        )


class UnsupportedFormatError(ReaderError):
    """Raised when no reader can handle the source file"""


class WriterError(ExcelDiffError):
    """Raised when a diff result cannot be written"""


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class WriteResult:
    """Result from writing a diff"""
    success: bool
    output_path: Optional[Path]
    rows_written: int = 0
    errors: List[str] = field(default_factory=list)


# ============================================================================
# Component Interfaces
# ============================================================================

class ReaderInterface(ABC):
    """Interface for loading worksheet snapshots"""

    def __init__(self, config: dict):
        """Initialize reader with configuration"""
        self.config = config

    @abstractmethod
    def load(self, source: Path, sheet_name: Optional[str] = None) -> Worksheet:
        """
        Load one sheet of a file.

        Args:
            source: Path to the file
            sheet_name: Sheet to read (None = first sheet)

        Raises:
            SheetNotFoundError: If sheet_name does not exist
            ReaderError: If the file cannot be read
        """
        pass

    @abstractmethod
    def list_sheet_names(self, source: Path) -> List[str]:
        """Return sheet names of a file in workbook order"""
        pass

    @abstractmethod
    def can_handle(self, source: Path) -> bool:
        """Check if this reader supports the file"""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return name of this reader implementation"""
        pass


class WriterInterface(ABC):
    """Interface for rendering diff results"""

    def __init__(self, config: dict):
        """Initialize writer with configuration"""
        self.config = config

    @abstractmethod
    def write(self, result: DiffResult, output_path: Path) -> WriteResult:
        """
        Render a diff result to a file.

        Raises:
            WriterError: If the output cannot be written
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return name of this writer implementation"""
        pass
