"""Diff writers"""

from .openpyxl_writer import OpenpyxlWriter
from .json_writer import JsonWriter

__all__ = ['OpenpyxlWriter', 'JsonWriter']
