"""
Log parsers for track log formats.

This module contains parsers for:
- Columbus V-900 CSV files (simple and extended mode)
"""

from .base import BaseLogParser
from .columbus_parser import ColumbusCsvParser, tokenize_record, is_columbus_file

__all__ = ["BaseLogParser", "ColumbusCsvParser", "tokenize_record", "is_columbus_file"]
