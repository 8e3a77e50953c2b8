"""
Data sources consumed by the resource fetchers.
"""

from .base import DataSource
from .rest import RestDataSource

__all__ = ["DataSource", "RestDataSource"]
