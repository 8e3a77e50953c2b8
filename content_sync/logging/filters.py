"""
Custom logging filters for content_sync.

Masks keys and personal data (lead email addresses) before records
reach a handler, and suppresses bursts of identical fetch errors.
"""

import logging
import re
import time
from collections import defaultdict
from typing import Dict, List, Pattern, Tuple


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        self.rules: List[Tuple[Pattern[str], str]] = [
            # API keys and tokens
            (
                re.compile(
                    r'(api[_-]?key|apikey|token|secret)(["\']?\s*[:=]\s*["\']?)([A-Za-z0-9._\-+/=]{16,})',
                    re.IGNORECASE,
                ),
                r"\1\2***MASKED***",
            ),
            # Bearer tokens (JWT-shaped keys included)
            (
                re.compile(r"(bearer\s+)([A-Za-z0-9._\-+/=]{16,})", re.IGNORECASE),
                r"\1***MASKED***",
            ),
            # URLs with credentials
            (re.compile(r"(https?://[^:/\s]+):([^@\s]+)@", re.IGNORECASE), r"\1:***MASKED***@"),
            # Email addresses (keep domain)
            (
                re.compile(r"\b([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b"),
                r"***@\2",
            ),
        ]

    def mask(self, message: str) -> str:
        for pattern, replacement in self.rules:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record to mask sensitive data."""
        try:
            record.msg = self.mask(record.getMessage())
            record.args = ()
        except Exception:
            # If filtering fails, allow the record through
            pass
        return True


class DuplicateFilter(logging.Filter):
    """Filter to prevent duplicate log messages."""

    def __init__(self, max_duplicates: int = 5, time_window: float = 60.0):
        """
        Initialize duplicate filter.

        Args:
            max_duplicates: Maximum duplicate messages allowed
            time_window: Time window in seconds for duplicate detection
        """
        super().__init__()
        self.max_duplicates = max_duplicates
        self.time_window = time_window
        self._message_counts: Dict[str, List[float]] = defaultdict(list)
        self._last_sweep = time.time()

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter duplicate messages."""
        message_key = f"{record.name}:{record.levelname}:{record.getMessage()}"
        current_time = time.time()
        if current_time - self._last_sweep > self.time_window:
            self._sweep(current_time)

        timestamps = self._message_counts[message_key]
        timestamps[:] = [t for t in timestamps if current_time - t <= self.time_window]

        if len(timestamps) >= self.max_duplicates:
            return False

        timestamps.append(current_time)
        return True

    def _sweep(self, current_time: float) -> None:
        """Forget messages with no occurrence inside the window."""
        expired = [
            key
            for key, timestamps in self._message_counts.items()
            if not timestamps or current_time - timestamps[-1] > self.time_window
        ]
        for key in expired:
            del self._message_counts[key]
        self._last_sweep = current_time
