"""
Handler setup for the ``content_sync`` logger hierarchy.

Every module logs through ``logging.getLogger(__name__)``, so all records
flow through the ``content_sync`` logger. `LoggingManager` attaches console
and file handlers there rather than on the root logger, leaving the host
application's own logging untouched.

Example:
    ```python
    config = load_config()
    manager = setup_logging(config.logging)
    ...
    manager.cleanup()
    ```
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Iterator, Optional, Set, Tuple

from ..config.models import LoggingConfig, LogLevel
from .filters import DuplicateFilter, SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter

PACKAGE_LOGGER = "content_sync"


def _to_level(level: LogLevel) -> int:
    return getattr(logging, level.value)


class LoggingManager:
    """Owns the handlers installed on the package logger."""

    def __init__(self, logger_name: str = PACKAGE_LOGGER):
        self.logger_name = logger_name
        self._handlers: Dict[str, logging.Handler] = {}
        self._components: Set[str] = set()
        self._saved_propagate: Optional[bool] = None

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(self.logger_name)

    @property
    def configured(self) -> bool:
        return bool(self._handlers)

    def configure(self, config: LoggingConfig) -> None:
        """
        Replace any installed handlers with ones built from ``config``.

        Args:
            config: Logging configuration
        """
        self.cleanup()

        level = _to_level(config.level)
        self.logger.setLevel(level)
        for name, handler in self._build_handlers(config):
            handler.setLevel(level)
            handler.addFilter(SensitiveDataFilter())
            self.logger.addHandler(handler)
            self._handlers[name] = handler

        # Records handled here must not be printed again by root handlers
        if self._handlers:
            self._saved_propagate = self.logger.propagate
            self.logger.propagate = False

        for component, component_level in config.component_levels.items():
            self.set_level(component_level, component)

        self.logger.debug(
            f"Logging configured at {config.level.value} with handlers: "
            f"{', '.join(self._handlers) or 'none'}"
        )

    def _build_handlers(
        self, config: LoggingConfig
    ) -> Iterator[Tuple[str, logging.Handler]]:
        if config.enable_console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(
                StructuredFormatter()
                if config.enable_structured
                else ColoredFormatter(config.format)
            )
            console.addFilter(DuplicateFilter())
            yield "console", console

        if config.enable_file and config.file_path:
            path = Path(config.file_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                path,
                maxBytes=config.max_file_size,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(
                StructuredFormatter()
                if config.enable_structured
                else logging.Formatter(config.format)
            )
            yield "file", file_handler

    def qualify(self, component: str) -> str:
        """Turn a short component name such as ``"search"`` into a logger name."""
        if component == self.logger_name or component.startswith(f"{self.logger_name}."):
            return component
        return f"{self.logger_name}.{component}"

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Change the level of the package logger or of one component.

        Args:
            level: New level
            component: Component name, short or fully qualified (None for
                the whole package, including its handlers)
        """
        if component is not None:
            name = self.qualify(component)
            logging.getLogger(name).setLevel(_to_level(level))
            self._components.add(name)
            return

        self.logger.setLevel(_to_level(level))
        for handler in self._handlers.values():
            handler.setLevel(_to_level(level))

    def get_handler(self, name: str) -> Optional[logging.Handler]:
        return self._handlers.get(name)

    def cleanup(self) -> None:
        """Detach and close installed handlers and reset component levels."""
        for handler in self._handlers.values():
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()

        for name in self._components:
            logging.getLogger(name).setLevel(logging.NOTSET)
        self._components.clear()

        if self._saved_propagate is not None:
            self.logger.propagate = self._saved_propagate
            self._saved_propagate = None
        self.logger.setLevel(logging.NOTSET)


def setup_logging(
    config: LoggingConfig, manager: Optional[LoggingManager] = None
) -> LoggingManager:
    """Configure package logging and return the manager for later cleanup."""
    manager = manager or LoggingManager()
    manager.configure(config)
    return manager
