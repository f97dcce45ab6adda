"""
Utility functions and helpers for Columbus log conversion.

This module contains:
- Error taxonomy and field error handling
- File I/O utilities
- Visualization helpers
"""

from .error_handling import (
    ConversionError, FormatError, FieldConversionError, MissingResourceError,
    FieldErrorHandler,
)
from .io_utils import FileHandler

__all__ = [
    "ConversionError", "FormatError", "FieldConversionError", "MissingResourceError",
    "FieldErrorHandler", "FileHandler",
]
