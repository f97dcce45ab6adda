"""
Base classes for post-pass processors.

Processors run after the record stream has been read completely and work
on the full ordered point sequence.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Sequence

from ..models import WayPoint


class BaseProcessor(ABC):
    """Abstract base class for post-pass processors."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the processor with optional configuration.

        Args:
            config: Optional configuration dictionary for processor settings
        """
        self.config = config or {}

    @abstractmethod
    def process(self, points: Sequence[WayPoint], *args, **kwargs) -> Any:
        """
        Process the full point sequence of a conversion.

        Args:
            points: All converted points in file order

        Returns:
            Processor-specific result
        """
        pass

    def validate_input(self, points: Sequence[WayPoint]) -> bool:
        """
        Validate that there is something to process.

        Args:
            points: Point sequence to validate

        Returns:
            True if the sequence is non-empty and holds WayPoints
        """
        return len(points) > 0 and all(isinstance(p, WayPoint) for p in points)
