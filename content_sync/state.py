"""
UI-visible content and loading state.

Holds the current collection and loading flag for every resource kind plus
the batch-wide loading flag, and notifies registered callbacks whenever any
of them change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from .models import Record, ResourceKind

logger = logging.getLogger(__name__)


class StateField(str, Enum):
    """Which part of the state changed."""

    CONTENT = "content"
    LOADING = "loading"
    GLOBAL_LOADING = "global_loading"


@dataclass(frozen=True)
class StateChange:
    """Notification passed to change callbacks."""

    field: StateField
    kind: Optional[ResourceKind] = None


ChangeCallback = Callable[[StateChange], None]


class ContentState:
    """Current collections and loading flags for every resource kind."""

    def __init__(self) -> None:
        self._content: Dict[ResourceKind, List[Record]] = {
            kind: [] for kind in ResourceKind
        }
        self._loading: Dict[ResourceKind, bool] = {kind: False for kind in ResourceKind}
        self._global_loading = False
        self._change_callbacks: List[ChangeCallback] = []

    def get(self, kind: ResourceKind) -> List[Record]:
        return self._content[kind]

    def set(self, kind: ResourceKind, data: List[Record]) -> None:
        self._content[kind] = data
        self._notify(StateChange(StateField.CONTENT, kind))

    @property
    def loading(self) -> Mapping[ResourceKind, bool]:
        """Read-only view of the per-kind loading flags."""
        return MappingProxyType(self._loading)

    def set_loading(self, kind: ResourceKind, value: bool) -> None:
        if self._loading[kind] == value:
            return
        self._loading[kind] = value
        self._notify(StateChange(StateField.LOADING, kind))

    @property
    def global_loading(self) -> bool:
        return self._global_loading

    def set_global_loading(self, value: bool) -> None:
        if self._global_loading == value:
            return
        self._global_loading = value
        self._notify(StateChange(StateField.GLOBAL_LOADING))

    def add_change_callback(self, callback: ChangeCallback) -> None:
        """
        Add callback to be called when state changes.

        Args:
            callback: Function receiving a StateChange
        """
        if callback not in self._change_callbacks:
            self._change_callbacks.append(callback)

    def remove_change_callback(self, callback: ChangeCallback) -> None:
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)

    def _notify(self, change: StateChange) -> None:
        # Work on a snapshot to avoid issues if callbacks mutate the list
        for callback in list(self._change_callbacks):
            try:
                callback(change)
            except Exception as e:
                logger.error(f"Error in state change callback: {e}")
