"""SideBridge error handling.

Structured exceptions shared by the sidechain entry model, the
configuration layer and the mainchain RPC bridge.
"""

from .exceptions import (
    ClientError,
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    RPCError,
    ScriptError,
    SideBridgeError,
    ValidationError,
    create_rpc_error,
    create_validation_error,
)

__all__ = [
    "SideBridgeError",
    "ValidationError",
    "RPCError",
    "ClientError",
    "ConfigurationError",
    "ScriptError",
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorContext",
    "create_validation_error",
    "create_rpc_error",
]
