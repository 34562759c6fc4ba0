"""SideBridge logging system.

Structured logging with text and JSON formatting, used by the RPC
transport and the bridge client.
"""

from .core import (
    LogConfig,
    LogContext,
    LogEntry,
    LogFormatter,
    LogHandler,
    LogLevel,
    LogManager,
    SideBridgeLogger,
    get_logger,
    get_manager,
    setup_logging,
    shutdown_logging,
)
from .formatters import JSONFormatter, TextFormatter
from .handlers import ConsoleHandler, MemoryHandler

__all__ = [
    # Core
    "LogLevel",
    "LogConfig",
    "LogContext",
    "LogEntry",
    "LogFormatter",
    "LogHandler",
    "LogManager",
    "SideBridgeLogger",
    "get_logger",
    "get_manager",
    "setup_logging",
    "shutdown_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    # Handlers
    "ConsoleHandler",
    "MemoryHandler",
]
