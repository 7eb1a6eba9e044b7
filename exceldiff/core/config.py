"""
Excel Diff - Comparison Profile Data Classes
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ComponentConfig:
    """Reader or writer configuration"""
    implementation: str
    config: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ComparisonOptions:
    """
    Comparison and post-filter options.

    Attributes:
        ignore_whitespace: Ignore whitespace differences in text cells
        diff_only: Keep only modified/added/removed rows in the output
        include_header: Re-insert row 0 of the left sheet in diff-only output
    """
    ignore_whitespace: bool = False
    diff_only: bool = False
    include_header: bool = True


@dataclass
class ExcelDiffConfig:
    """
    Comparison profile.

    A reader of None means the reader is picked per file by extension.
    """
    reader: Optional[ComponentConfig] = None
    writer: ComponentConfig = field(default_factory=lambda: ComponentConfig('openpyxl'))
    options: ComparisonOptions = field(default_factory=ComparisonOptions)
