"""
Excel Diff - Component Registry

Central registry that stores the available reader and writer
implementations and creates instances of them on demand.

HOW IT WORKS:
    1. Implementations are registered by name:
       registry.register_reader('openpyxl', OpenpyxlReader)

    2. The CLI (or a comparison profile) names the implementation to use,
       or asks the registry to pick a reader for a file:
       reader = registry.create_reader('csv', {'delimiter': ';'})
       reader = registry.find_reader(Path('report.xlsx'))

    3. Unknown names give a clear error:
       ValueError: Unknown reader implementation 'ods'.
                   Available: ['openpyxl', 'csv']

GLOBAL INSTANCE:
    Use the module-level 'registry' and call register_all_components()
    once at startup.
"""

from pathlib import Path
from typing import Dict, List, Optional, Type

from .interfaces import (
    ReaderInterface,
    WriterInterface,
    UnsupportedFormatError,
)


class PluginRegistry:
    """Central registry for reader and writer implementations"""

    def __init__(self):
        self._readers: Dict[str, Type[ReaderInterface]] = {}
        self._writers: Dict[str, Type[WriterInterface]] = {}

    def register_reader(self, name: str, reader_class: Type[ReaderInterface]):
        """Register a reader implementation"""
        self._readers[name] = reader_class

    def register_writer(self, name: str, writer_class: Type[WriterInterface]):
        """Register a writer implementation"""
        self._writers[name] = writer_class

    @property
    def available_readers(self) -> List[str]:
        return list(self._readers.keys())

    @property
    def available_writers(self) -> List[str]:
        return list(self._writers.keys())

    def create_reader(self, implementation: str, config: Optional[dict] = None) -> ReaderInterface:
        """Create reader instance"""
        if implementation not in self._readers:
            raise ValueError(
                f"Unknown reader implementation '{implementation}'. "
                f"Available: {self.available_readers}"
            )
        return self._readers[implementation](config or {})

    def create_writer(self, implementation: str, config: Optional[dict] = None) -> WriterInterface:
        """Create writer instance"""
        if implementation not in self._writers:
            raise ValueError(
                f"Unknown writer implementation '{implementation}'. "
                f"Available: {self.available_writers}"
            )
        return self._writers[implementation](config or {})

    def find_reader(self, source: Path, config: Optional[dict] = None) -> ReaderInterface:
        """
        Create the first registered reader that can handle a file.

        Readers are tried in registration order.

        Raises:
            UnsupportedFormatError: If no registered reader accepts the file
        """
        for name in self._readers:
            reader = self.create_reader(name, config)
            if reader.can_handle(source):
                return reader
        raise UnsupportedFormatError(
            f"{source} is not a supported file. "
            f"Available readers: {self.available_readers}"
        )


# Global registry instance
registry = PluginRegistry()


def register_all_components(target: Optional[PluginRegistry] = None) -> PluginRegistry:
    """
    Register the built-in readers and writers.

    Safe to call more than once.

    Args:
        target: Registry to populate (default: the global registry)
    """
    from .components.reader.openpyxl_reader import OpenpyxlReader
    from .components.reader.csv_reader import CsvReader
    from .components.writer.openpyxl_writer import OpenpyxlWriter
    from .components.writer.json_writer import JsonWriter

    target = target or registry

    target.register_reader('openpyxl', OpenpyxlReader)
    target.register_reader('csv', CsvReader)

    target.register_writer('openpyxl', OpenpyxlWriter)
    target.register_writer('json', JsonWriter)

    return target
