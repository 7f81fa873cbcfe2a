"""
Logging manager for gql_fetch.

This module configures the ``gql_fetch`` logger hierarchy. The library never
touches the root logger; applications wanting gql_fetch output call
``setup_logging`` or attach their own handlers.
"""

import logging
import sys
from typing import Dict, Optional

from ..config.models import LoggingConfig, LogLevel
from .filters import SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter

LIBRARY_LOGGER = "gql_fetch"

# Libraries stay silent unless the application configures logging
logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


class LoggingManager:
    """Centralized logging manager."""

    def __init__(self, logger_name: str = LIBRARY_LOGGER) -> None:
        """
        Initialize logging manager.

        Args:
            logger_name: Name of the logger hierarchy to configure
        """
        self.logger_name = logger_name
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}
        self._loggers: Dict[str, logging.Logger] = {}

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Setup logging based on configuration.

        Args:
            config: Logging configuration
        """
        if self._configured:
            self.cleanup()

        logger = logging.getLogger(self.logger_name)
        logger.setLevel(getattr(logging, LogLevel(config.level).value))

        if config.enable_console:
            self._setup_console_handler(config)

        self._setup_component_loggers(config)

        self._configured = True
        logger.debug("Logging system configured")

    def _setup_console_handler(self, config: LoggingConfig) -> None:
        """Setup console logging handler."""
        handler = logging.StreamHandler(sys.stderr)

        formatter: logging.Formatter
        if config.enable_structured:
            formatter = StructuredFormatter()
        else:
            formatter = ColoredFormatter(config.format)

        handler.setFormatter(formatter)
        handler.addFilter(SensitiveDataFilter())

        self.add_handler("console", handler)

    def _setup_component_loggers(self, config: LoggingConfig) -> None:
        """Setup component-specific loggers."""
        for component, level in config.component_levels.items():
            logger = logging.getLogger(component)
            logger.setLevel(getattr(logging, LogLevel(level).value))
            self._loggers[component] = logger

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get logger for specific component.

        Args:
            name: Logger name

        Returns:
            Logger instance
        """
        return logging.getLogger(name)

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Set logging level.

        Args:
            level: New logging level
            component: Specific component (None for the library logger)
        """
        log_level = getattr(logging, LogLevel(level).value)
        logging.getLogger(component or self.logger_name).setLevel(log_level)

    def add_handler(self, name: str, handler: logging.Handler) -> None:
        """
        Add custom logging handler.

        Args:
            name: Handler name
            handler: Logging handler
        """
        self.remove_handler(name)
        logging.getLogger(self.logger_name).addHandler(handler)
        self._handlers[name] = handler

    def remove_handler(self, name: str) -> None:
        """
        Remove logging handler.

        Args:
            name: Handler name
        """
        handler = self._handlers.pop(name, None)
        if handler is not None:
            logging.getLogger(self.logger_name).removeHandler(handler)
            handler.close()

    def cleanup(self) -> None:
        """Remove all handlers installed by this manager."""
        for name in list(self._handlers):
            self.remove_handler(name)

        for logger in self._loggers.values():
            logger.setLevel(logging.NOTSET)

        self._loggers.clear()
        self._configured = False

    def is_configured(self) -> bool:
        """Check if logging is configured."""
        return self._configured


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(config: LoggingConfig) -> None:
    """
    Setup logging with configuration.

    Args:
        config: Logging configuration
    """
    _logging_manager.setup_logging(config)


def get_logger(name: str) -> logging.Logger:
    """Get logger for component."""
    return _logging_manager.get_logger(name)


def cleanup_logging() -> None:
    """Cleanup logging system."""
    _logging_manager.cleanup()
