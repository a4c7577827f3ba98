# utils/logger.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Logging utility for formula construction and evaluation with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for symbolic formula diagnostics."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class SymbolicLogger:
    """Centralized logger for formula construction, evaluation and rendering."""

    def __init__(self, name: str = "symform", level: LogLevel = LogLevel.INFO):
        """Initialize the symbolic logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(SymbolicFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    def is_debug_enabled(self) -> bool:
        """Return True if DEBUG records would be emitted."""
        return self.logger.isEnabledFor(logging.DEBUG)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    # Specialized methods for formula events
    def simplification_applied(self, rule: str, result: str):
        """Log a construction-time simplification."""
        if self.is_debug_enabled():
            self.debug(f"    simplified {rule} -> {result}")

    def node_allocated(self, kind: str, hash_value: int):
        """Log allocation of a fresh formula cell."""
        if self.is_debug_enabled():
            self.debug(f"    new {kind} cell (hash={hash_value:#x})")

    def evaluation_failed(self, formula: str, reason: str):
        """Log an evaluation that raised."""
        if self.is_debug_enabled():
            self.debug(f"    evaluation of {formula} failed: {reason}")

    def visualization_written(self, path: str):
        """Log the location of a rendered formula graph."""
        self.info(f"Formula graph written to {path}")


class SymbolicFormatter(logging.Formatter):
    """Custom formatter for symbolic logging with clean output."""

    def format(self, record):
        # For INFO level and above, show message only (clean output)
        if record.levelno >= logging.INFO:
            return record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[SymbolicLogger] = None


def get_logger(name: str = "symform") -> SymbolicLogger:
    """Get or create the global symbolic logger instance.

    Args:
        name: Logger name (default: "symform")

    Returns:
        SymbolicLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = SymbolicLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    get_logger().set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on caller flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
