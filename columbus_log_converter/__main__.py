"""
Main entry point for Columbus Log Converter when run as a module.

This allows running the converter with: python -m columbus_log_converter
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
