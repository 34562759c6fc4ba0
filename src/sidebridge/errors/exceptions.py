"""Exception hierarchy for SideBridge.

This module defines the structured errors raised by the bridge. Validation
errors are raised before any RPC dispatch; RPC errors carry the code and
message reported by the mainchain daemon (or the transport failure that
prevented a response).
"""

import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""

    VALIDATION = "validation"
    RPC = "rpc"
    CLIENT = "client"
    CONFIGURATION = "configuration"
    SCRIPT = "script"
    SYSTEM = "system"


@dataclass
class ErrorContext:
    """Context information for an error."""

    timestamp: float = field(default_factory=time.time)
    component: Optional[str] = None
    operation: Optional[str] = None
    request_id: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary."""
        return {
            "timestamp": self.timestamp,
            "component": self.component,
            "operation": self.operation,
            "request_id": self.request_id,
            "metadata": self.metadata,
        }


class SideBridgeError(Exception):
    """Base exception for all SideBridge errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        retryable: bool = False,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context or ErrorContext()
        self.cause = cause
        self.retryable = retryable
        self.metadata = metadata or {}
        self.timestamp = time.time()
        self.traceback = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "severity": self.severity.value,
            "category": self.category.value,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
            "retryable": self.retryable,
            "metadata": self.metadata,
            "timestamp": self.timestamp,
        }

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"{self.__class__.__name__}: {self.message}"]

        if self.error_code:
            parts.append(f"Code: {self.error_code}")

        if self.severity != ErrorSeverity.MEDIUM:
            parts.append(f"Severity: {self.severity.value}")

        if self.retryable:
            parts.append("Retryable: Yes")

        return " | ".join(parts)


class ValidationError(SideBridgeError):
    """An argument or option failed its type, length or range check."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        expected: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.VALIDATION, **kwargs)
        self.field = field
        self.value = value
        self.expected = expected

    def to_dict(self) -> Dict[str, Any]:
        """Convert validation error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "field": self.field,
                "value": repr(self.value) if self.value is not None else None,
                "expected": str(self.expected) if self.expected is not None else None,
            }
        )
        return data


class RPCError(SideBridgeError):
    """The mainchain daemon or the transport reported a failure.

    ``code`` is the JSON-RPC error code returned by the daemon, or ``None``
    when no response body was decoded (connection refused, timeout, HTTP
    error without a JSON body).
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        rpc_method: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(
            message,
            error_code=str(code) if code is not None else None,
            category=ErrorCategory.RPC,
            **kwargs,
        )
        self.code = code
        self.rpc_method = rpc_method
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert RPC error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "code": self.code,
                "rpc_method": self.rpc_method,
                "status_code": self.status_code,
            }
        )
        return data


class ClientError(SideBridgeError):
    """Client used in a state that does not allow the call."""

    def __init__(self, message: str, state: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.CLIENT, **kwargs)
        self.state = state


class ConfigurationError(SideBridgeError):
    """Configuration error."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
        self.config_key = config_key
        self.config_value = config_value

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "config_key": self.config_key,
                "config_value": str(self.config_value)
                if self.config_value is not None
                else None,
            }
        )
        return data


class ScriptError(SideBridgeError):
    """A script could not be built or decoded."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.SCRIPT, **kwargs)


def create_validation_error(
    field: str, value: Any, expected: Any, message: Optional[str] = None
) -> ValidationError:
    """Create a validation error."""
    if message is None:
        message = f"Invalid value for field '{field}': expected {expected}, got {value!r}"

    return ValidationError(message=message, field=field, value=value, expected=expected)


def create_rpc_error(
    rpc_method: str, error: Dict[str, Any], status_code: Optional[int] = None
) -> RPCError:
    """Create an RPC error from a JSON-RPC ``error`` object."""
    code = error.get("code")
    message = error.get("message") or f"RPC method '{rpc_method}' failed"

    return RPCError(
        message=message, code=code, rpc_method=rpc_method, status_code=status_code
    )
