"""Core logging interfaces and data structures for SideBridge.

This module defines log levels, context and entry records, the log
manager that routes entries to handlers, and the per-module logger
returned by ``get_logger``.
"""

import json
import os
import sys
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LogLevel(Enum):
    """Log levels."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


_LEVEL_ORDER = {level: index for index, level in enumerate(LogLevel)}


@dataclass
class LogContext:
    """Log context information."""

    component: Optional[str] = None
    operation: Optional[str] = None
    request_id: Optional[int] = None
    sidechain_id: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary."""
        return {
            "component": self.component,
            "operation": self.operation,
            "request_id": self.request_id,
            "sidechain_id": self.sidechain_id,
            "metadata": self.metadata,
        }

    def merged_with(self, other: Optional["LogContext"]) -> "LogContext":
        """Return a context where fields set on ``other`` take precedence."""
        if other is None:
            return self
        return LogContext(
            component=other.component or self.component,
            operation=other.operation or self.operation,
            request_id=other.request_id
            if other.request_id is not None
            else self.request_id,
            sidechain_id=other.sidechain_id
            if other.sidechain_id is not None
            else self.sidechain_id,
            metadata={**self.metadata, **other.metadata},
        )


@dataclass
class LogEntry:
    """Log entry data structure."""

    timestamp: float
    level: LogLevel
    message: str
    logger_name: str
    context: LogContext
    exception: Optional[BaseException] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    thread_id: Optional[int] = None
    process_id: Optional[int] = None

    def __post_init__(self):
        if self.thread_id is None:
            self.thread_id = threading.get_ident()
        if self.process_id is None:
            self.process_id = os.getpid()

    def to_dict(self) -> Dict[str, Any]:
        """Convert log entry to dictionary."""
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "message": self.message,
            "logger_name": self.logger_name,
            "context": self.context.to_dict(),
            "exception": str(self.exception) if self.exception else None,
            "extra": self.extra,
            "thread_id": self.thread_id,
            "process_id": self.process_id,
        }

    def to_json(self) -> str:
        """Convert log entry to JSON string."""
        return json.dumps(self.to_dict(), default=str)


class LogConfig:
    """Log configuration."""

    def __init__(
        self,
        name: str = "sidebridge",
        level: LogLevel = LogLevel.INFO,
        format_type: str = "text",
        handlers: List[str] = None,
    ):
        self.name = name
        self.level = level
        self.format_type = format_type
        self.handlers = handlers or ["console"]


class LogFormatter(ABC):
    """Abstract log formatter."""

    @abstractmethod
    def format(self, entry: LogEntry) -> str:
        """Format log entry."""
        pass


class LogHandler(ABC):
    """Abstract log handler."""

    def __init__(self, name: str = None):
        self.name = name or self.__class__.__name__
        self.formatter: Optional[LogFormatter] = None
        self.level: LogLevel = LogLevel.DEBUG
        self._lock = threading.RLock()

    def set_formatter(self, formatter: LogFormatter) -> None:
        """Set formatter."""
        with self._lock:
            self.formatter = formatter

    def set_level(self, level: LogLevel) -> None:
        """Set log level."""
        with self._lock:
            self.level = level

    def should_handle(self, entry: LogEntry) -> bool:
        """Check if handler should handle the entry."""
        return _LEVEL_ORDER[entry.level] >= _LEVEL_ORDER[self.level]

    @abstractmethod
    def emit(self, entry: LogEntry) -> None:
        """Emit log entry."""
        pass

    def handle(self, entry: LogEntry) -> None:
        """Handle log entry."""
        if self.should_handle(entry):
            self.emit(entry)

    def close(self) -> None:
        """Release handler resources."""
        pass


class LogManager:
    """Routes log entries from loggers to the configured handlers."""

    def __init__(self, config: LogConfig = None):
        self.config = config or LogConfig()
        self.loggers: Dict[str, "SideBridgeLogger"] = {}
        self.handlers: Dict[str, LogHandler] = {}
        self._lock = threading.RLock()
        self._context = LogContext()

        self._setup_defaults()

    def _setup_defaults(self) -> None:
        """Setup default logging components."""
        from .formatters import JSONFormatter, TextFormatter
        from .handlers import ConsoleHandler

        console = ConsoleHandler()
        if self.config.format_type == "json":
            console.set_formatter(JSONFormatter())
        else:
            console.set_formatter(TextFormatter())
        self.add_handler("console", console)

    def get_logger(self, name: str) -> "SideBridgeLogger":
        """Get logger."""
        with self._lock:
            if name not in self.loggers:
                self.loggers[name] = SideBridgeLogger(name, self)
            return self.loggers[name]

    def add_handler(self, name: str, handler: LogHandler) -> None:
        """Add handler."""
        with self._lock:
            self.handlers[name] = handler

    def remove_handler(self, name: str) -> None:
        """Remove handler."""
        with self._lock:
            handler = self.handlers.pop(name, None)
        if handler is not None:
            handler.close()

    def set_context(self, context: LogContext) -> None:
        """Set global context."""
        with self._lock:
            self._context = context

    def get_context(self) -> LogContext:
        """Get global context."""
        with self._lock:
            return self._context

    def log(
        self,
        level: LogLevel,
        message: str,
        logger_name: str = "root",
        context: LogContext = None,
        exception: BaseException = None,
        extra: Dict[str, Any] = None,
    ) -> None:
        """Log a message."""
        with self._lock:
            entry = LogEntry(
                timestamp=time.time(),
                level=level,
                message=message,
                logger_name=logger_name,
                context=self._context.merged_with(context),
                exception=exception,
                extra=extra or {},
            )

            for handler_name in self.config.handlers:
                handler = self.handlers.get(handler_name)
                if handler is not None:
                    handler.handle(entry)

    def shutdown(self) -> None:
        """Shutdown log manager."""
        with self._lock:
            for handler in self.handlers.values():
                handler.close()

            self.loggers.clear()
            self.handlers.clear()


class SideBridgeLogger:
    """Named logger.

    A logger created without a manager follows the global manager, so it
    keeps working across ``setup_logging`` and ``shutdown_logging``. Its
    level defaults to the level configured on that manager.
    """

    def __init__(
        self,
        name: str,
        manager: Optional[LogManager] = None,
        level: Optional[LogLevel] = None,
    ):
        self.name = name
        self._manager = manager
        self._level = level

    @property
    def manager(self) -> LogManager:
        return self._manager if self._manager is not None else get_manager()

    @property
    def level(self) -> LogLevel:
        if self._level is not None:
            return self._level
        return self.manager.config.level

    def set_level(self, level: LogLevel) -> None:
        """Set log level."""
        self._level = level

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check if logger is enabled for level."""
        return _LEVEL_ORDER[level] >= _LEVEL_ORDER[self.level]

    def log(
        self,
        level: LogLevel,
        message: str,
        context: LogContext = None,
        exception: BaseException = None,
        extra: Dict[str, Any] = None,
    ) -> None:
        """Log a message."""
        if self.is_enabled_for(level):
            self.manager.log(
                level=level,
                message=message,
                logger_name=self.name,
                context=context,
                exception=exception,
                extra=extra,
            )

    def trace(self, message: str, **kwargs) -> None:
        self.log(LogLevel.TRACE, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self.log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.log(LogLevel.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        self.log(LogLevel.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log message at error level with the exception being handled."""
        exc = sys.exc_info()[1]
        if exc is not None:
            kwargs["exception"] = exc
        self.log(LogLevel.ERROR, message, **kwargs)


# Global log manager instance
_global_manager: Optional[LogManager] = None
_global_loggers: Dict[str, SideBridgeLogger] = {}
_global_lock = threading.RLock()


def get_logger(name: str = "root") -> SideBridgeLogger:
    """Get a logger that routes through the current global manager."""
    with _global_lock:
        if name not in _global_loggers:
            _global_loggers[name] = SideBridgeLogger(name)
        return _global_loggers[name]


def get_manager() -> LogManager:
    """Get the global log manager, creating it on first use."""
    global _global_manager
    with _global_lock:
        if _global_manager is None:
            _global_manager = LogManager()
        return _global_manager


def setup_logging(config: LogConfig) -> LogManager:
    """Replace the global log manager.

    Loggers returned by ``get_logger`` switch to the new manager.
    """
    global _global_manager
    with _global_lock:
        previous = _global_manager
        _global_manager = LogManager(config)
    if previous is not None:
        previous.shutdown()
    return _global_manager


def shutdown_logging() -> None:
    """Shutdown the global log manager.

    Loggers returned by ``get_logger`` stay valid and route through the
    manager created on their next use.
    """
    global _global_manager
    with _global_lock:
        previous, _global_manager = _global_manager, None
    if previous is not None:
        previous.shutdown()
