"""
File I/O utilities.

This module provides common file handling operations.
"""

import json
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional


class FileHandler:
    """Handles file I/O operations for the Columbus log converter."""

    def __init__(self, config=None):
        """Initialize file handler."""
        self.config = config or {}
        self._listings: Dict[Path, Dict[str, Path]] = {}

    def find_case_variant(self, directory: str, file_name: str) -> Optional[Path]:
        """
        Locate a file whose name may differ in case from ``file_name``.

        FAT file systems on the logger's card store names in a case the
        reference in the CSV does not always match, so the name as given,
        its lower-case and upper-case forms are probed before falling back
        to a case-folded scan of the directory.

        Args:
            directory: Directory expected to contain the file
            file_name: File name including extension

        Returns:
            Path of the existing file, or None if there is no such file
        """
        directory_path = Path(directory)
        for variant in (file_name, file_name.lower(), file_name.upper()):
            candidate = directory_path / variant
            if candidate.is_file():
                return candidate

        listing = self._listings.get(directory_path)
        if listing is None:
            listing = {}
            if directory_path.is_dir():
                for entry in sorted(directory_path.iterdir()):
                    if entry.is_file():
                        listing.setdefault(entry.name.casefold(), entry)
            self._listings[directory_path] = listing
        return listing.get(file_name.casefold())

    def save_json(self, data: Dict[str, Any], file_path: str):
        """
        Save dictionary to JSON file.

        Args:
            data: Dictionary to save
            file_path: Path where to save the file
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(data, f, indent=2, default=str)

    def save_csv(self, data: pd.DataFrame, file_path: str, **kwargs):
        """
        Save DataFrame to CSV file.

        Args:
            data: DataFrame to save
            file_path: Path where to save the file
            **kwargs: Additional arguments for pandas.to_csv
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data.to_csv(path, index=False, **kwargs)

    def find_log_files(self, directory: str, extensions: Optional[List[str]] = None) -> List[str]:
        """
        Find log files in directory with specified extensions.

        Args:
            directory: Directory to search
            extensions: List of file extensions to look for

        Returns:
            List of found file paths
        """
        if extensions is None:
            extensions = ['.csv', '.CSV']

        directory_path = Path(directory)
        found_files = set()

        for ext in extensions:
            found_files.update(directory_path.glob(f"*{ext}"))

        return [str(f) for f in sorted(found_files)]

    def validate_output_directory(self, output_dir: str) -> bool:
        """
        Validate that output directory can be created/written to.

        Args:
            output_dir: Output directory path

        Returns:
            True if directory is valid, False otherwise
        """
        try:
            path = Path(output_dir)
            path.mkdir(parents=True, exist_ok=True)

            # Test write access
            test_file = path / ".test_write"
            test_file.write_text("test")
            test_file.unlink()

            return True
        except OSError:
            return False
