"""
Configuration management for Columbus log conversion.

Provides centralized configuration handling with validation and defaults.
"""

from dataclasses import dataclass, field, asdict
from typing import List
import json
from pathlib import Path


@dataclass
class ConversionConfig:
    """Configuration class for the Columbus CSV conversion."""

    # User notification settings
    warn_on_conversion_errors: bool = True  # Report date/DOP conversion faults after import
    show_summary: bool = True  # Report imported point counts after import
    warn_on_missing_audio: bool = True  # Report every referenced audio file that is missing

    # Record conversion settings
    ignore_dop_fields: bool = False  # Skip fix mode and DOP columns of extended records
    audio_extension: str = ".wav"  # Appended to the audio reference column
    encoding: str = "utf-8"  # Encoding of the CSV written by the logger

    # Output settings
    output_dir: str = "output"  # Directory for exported files
    output_formats: List[str] = field(default_factory=lambda: ["csv", "json"])
    create_visualizations: bool = False  # Plot the converted track
    verbose: bool = False  # Enable verbose logging

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_config()

    def _validate_config(self):
        """Validate configuration parameters."""
        if not self.audio_extension.startswith('.'):
            raise ValueError("audio_extension must start with '.'")

        if len(self.audio_extension) < 2:
            raise ValueError("audio_extension must not be empty")

        try:
            "".encode(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding}")

        unknown = set(self.output_formats) - {"csv", "json"}
        if unknown:
            raise ValueError(f"output_formats must be a subset of 'csv', 'json' (got {sorted(unknown)})")

    @classmethod
    def from_file(cls, config_path: str) -> 'ConversionConfig':
        """
        Load configuration from JSON file.

        Args:
            config_path: Path to JSON configuration file

        Returns:
            ConversionConfig instance
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, 'r') as f:
            config_dict = json.load(f)

        return cls(**config_dict)

    def to_file(self, config_path: str):
        """
        Save configuration to JSON file.

        Args:
            config_path: Path where to save the configuration
        """
        path = Path(config_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(asdict(self), f, indent=2)

    def copy(self) -> 'ConversionConfig':
        """Create a copy of the configuration."""
        return ConversionConfig(**asdict(self))
