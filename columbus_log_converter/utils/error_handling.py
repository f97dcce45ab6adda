"""
Error handling utilities for Columbus log conversion.

Defines the conversion error taxonomy and a handler that tolerates
field-level failures while letting structural failures propagate.
"""

from typing import Dict, Any, Optional, List
from contextlib import contextmanager
import logging
import traceback

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Base exception for conversion errors."""
    pass


class FormatError(ConversionError):
    """Fatal error: a record does not have the shape of a Columbus record."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Error in line {line_number}: {message}"
        super().__init__(message)


class FieldConversionError(ConversionError):
    """Recoverable error: a single field could not be converted."""

    def __init__(self, field_name: str, raw_value: str, reason: str = ""):
        self.field_name = field_name
        self.raw_value = raw_value
        message = f"Cannot convert {field_name} value {raw_value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MissingResourceError(ConversionError):
    """Recoverable error: a referenced audio file is not on disk."""

    def __init__(self, file_name: str, directory: Optional[str] = None):
        self.file_name = file_name
        self.directory = directory
        super().__init__(f"Missing audio file: {file_name}")


class FieldErrorHandler:
    """Counts and logs recoverable errors raised while converting records."""

    def __init__(self):
        self.error_log: List[Dict[str, Any]] = []
        self.counters: Dict[str, int] = {}

    @contextmanager
    def tolerate(self, field_name: str, counter: str):
        """
        Context manager that swallows a FieldConversionError.

        Any other exception propagates unchanged.

        Args:
            field_name: Name of the field being converted
            counter: Counter to increment when the conversion fails
        """
        try:
            yield
        except FieldConversionError as e:
            self.counters[counter] = self.counters.get(counter, 0) + 1
            self._log_error(field_name, e)
            logger.warning(f"Tolerated conversion error for {field_name}: {e}")
            logger.debug(f"Full traceback: {traceback.format_exc()}")

    def record(self, error: ConversionError, field_name: str = "audio"):
        """Record a recoverable error detected outside of ``tolerate``."""
        self._log_error(field_name, error)

    def count(self, counter: str) -> int:
        return self.counters.get(counter, 0)

    def _log_error(self, field_name: str, error: Exception):
        self.error_log.append({
            'field': field_name,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })

    def get_error_summary(self) -> Dict[str, Any]:
        """
        Get a summary of all recoverable errors encountered.

        Returns:
            Dictionary with error statistics and details
        """
        if not self.error_log:
            return {'total_errors': 0, 'error_types': {}, 'fields': {}}

        error_types = {}
        fields = {}

        for error in self.error_log:
            error_type = error['error_type']
            field_name = error['field']

            error_types[error_type] = error_types.get(error_type, 0) + 1
            fields[field_name] = fields.get(field_name, 0) + 1

        return {
            'total_errors': len(self.error_log),
            'error_types': error_types,
            'fields': fields,
            'recent_errors': self.error_log[-5:]  # Last 5 errors
        }
