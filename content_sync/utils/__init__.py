"""
Utility modules for content_sync.
"""

from .deduplication import PendingRequest, RequestDeduplicator, request_key

__all__ = [
    "PendingRequest",
    "RequestDeduplicator",
    "request_key",
]
