# utils/__init__.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Utility module exports

from .logger import (
    LogLevel,
    SymbolicLogger,
    configure_logging,
    get_logger,
    set_log_level,
)

__all__ = [
    "LogLevel",
    "SymbolicLogger",
    "configure_logging",
    "get_logger",
    "set_log_level",
]
