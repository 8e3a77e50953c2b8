"""
Logging setup for content_sync.

This module provides console and rotating file output with structured or
colored formatting and masking of keys and personal data.
"""

from .filters import DuplicateFilter, SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter
from .manager import LoggingManager, setup_logging

__all__ = [
    "LoggingManager",
    "setup_logging",
    "StructuredFormatter",
    "ColoredFormatter",
    "SensitiveDataFilter",
    "DuplicateFilter",
]
