"""
In-flight request tracking for the content_sync library.

Concurrent callers asking for the same (resource kind, search term) join the
request that is already running instead of issuing a second network call.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..models import ResourceKind


def request_key(kind: ResourceKind, query: Optional[str] = None) -> str:
    """Build the registry key for a kind and search term."""
    return f"{kind.value}-{query or 'default'}"


@dataclass
class PendingRequest:
    """A running request with its task and metadata."""

    task: "asyncio.Future[Any]"
    created_at: float = field(default_factory=time.time)
    request_count: int = 1

    def add_waiter(self) -> None:
        """Increment the count of callers waiting for this result."""
        self.request_count += 1

    @property
    def age_seconds(self) -> float:
        """Get the age of this pending request in seconds."""
        return time.time() - self.created_at


class RequestDeduplicator:
    """
    Registry of in-flight requests keyed by kind and search term.

    Holds at most one entry per key. The owner of a request must call
    `release` from a ``finally`` block once it settles, otherwise every later
    caller for that key would join a request that never completes.
    """

    def __init__(self) -> None:
        self._pending: Dict[str, PendingRequest] = {}

    def join(self, key: str) -> Optional["asyncio.Future[Any]"]:
        """
        Return the in-flight request for a key, if any.

        Args:
            key: Registry key from `request_key`

        Returns:
            The running task, or None if nothing is in flight
        """
        pending = self._pending.get(key)
        if pending is None:
            return None
        pending.add_waiter()
        return pending.task

    def register(self, key: str, task: "asyncio.Future[Any]") -> None:
        """Store a newly started request under a key."""
        self._pending[key] = PendingRequest(task)

    def release(self, key: str) -> None:
        """Remove the entry for a key."""
        self._pending.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about current in-flight requests."""
        return {
            "pending_requests": len(self._pending),
            "pending_details": [
                {
                    "key": key,
                    "age_seconds": pending.age_seconds,
                    "request_count": pending.request_count,
                    "is_done": pending.task.done(),
                }
                for key, pending in self._pending.items()
            ],
        }


__all__ = [
    "PendingRequest",
    "RequestDeduplicator",
    "request_key",
]
