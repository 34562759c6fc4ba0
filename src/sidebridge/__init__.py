"""
SideBridge: sidechain-to-mainchain bridge for BIP300/301 sidechains.

Exposes the sidechain entry model and an asynchronous client for the
mainchain daemon's two-way-peg RPC surface.
"""

__version__ = "0.1.0"

from .client import BridgeClient, BridgeConfig, ClientState, JSONRPCTransport
from .errors import (
    ClientError,
    ConfigurationError,
    RPCError,
    ScriptError,
    SideBridgeError,
    ValidationError,
)
from .protocol import Amount, Network
from .script import Script
from .sidechain import EntryType, SidechainEntry

__all__ = [
    "BridgeClient",
    "BridgeConfig",
    "ClientState",
    "JSONRPCTransport",
    "SidechainEntry",
    "EntryType",
    "Script",
    "Amount",
    "Network",
    "SideBridgeError",
    "ValidationError",
    "RPCError",
    "ClientError",
    "ConfigurationError",
    "ScriptError",
]
