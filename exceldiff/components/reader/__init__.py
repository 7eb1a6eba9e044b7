"""Worksheet readers"""

from .openpyxl_reader import OpenpyxlReader
from .csv_reader import CsvReader

__all__ = ['OpenpyxlReader', 'CsvReader']
