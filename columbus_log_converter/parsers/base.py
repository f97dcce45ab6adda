"""
Base class for track log parsers.

Defines the common interface that all log format parsers must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
from pathlib import Path


class BaseLogParser(ABC):
    """Abstract base class for track log parsers."""

    def __init__(self, config: Optional[Any] = None):
        """
        Initialize the parser with optional configuration.

        Args:
            config: Optional configuration object for parser settings
        """
        self.config = config
        self._supported_extensions = set()

    @property
    def supported_extensions(self) -> set:
        """Return set of supported file extensions."""
        return self._supported_extensions

    @abstractmethod
    def can_parse(self, file_path: str) -> bool:
        """
        Sniff a file to decide whether this parser understands it.

        Args:
            file_path: Path to the log file

        Returns:
            True if the file looks like this parser's format
        """
        pass

    @abstractmethod
    def parse_record(self, fields: List[str], *args, **kwargs) -> Any:
        """
        Convert one tokenized record.

        Args:
            fields: Trimmed fields of a single input line

        Raises:
            FormatError: If the record does not have the expected shape
        """
        pass

    def validate_file(self, file_path: str) -> bool:
        """
        Validate that the file exists and has a supported extension.

        Args:
            file_path: Path to the file to validate

        Returns:
            True if file is valid, False otherwise
        """
        path = Path(file_path)
        return (path.exists() and
                path.is_file() and
                path.suffix.lower() in self._supported_extensions)
