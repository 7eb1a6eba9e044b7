"""
Excel Diff - Settings and comparison profiles
"""

from .config import ComponentConfig, ComparisonOptions, ExcelDiffConfig
from .config_loader import load_config
from .settings import Settings, get_settings

__all__ = [
    'ComponentConfig',
    'ComparisonOptions',
    'ExcelDiffConfig',
    'load_config',
    'Settings',
    'get_settings',
]
