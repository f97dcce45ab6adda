"""
Columbus Log Converter - imports Columbus V-900 GPS/audio logger CSV files.

This package converts the logger's native CSV track logs into a track,
plain and audio-tagged waypoints, and re-attaches audio recordings the
logger wrote without a matching CSV reference.
"""

__version__ = "1.0.0"
__author__ = "Columbus Log Converter Team"

from .config import ConversionConfig
from .converter import ColumbusConverter
from .models import ConversionResult
from .parsers import is_columbus_file

__all__ = ["ConversionConfig", "ColumbusConverter", "ConversionResult", "is_columbus_file"]
