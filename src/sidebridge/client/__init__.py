"""
Mainchain RPC bridge.
"""

from .config import BridgeConfig
from .mainchain import BridgeClient, ClientState, Transport
from .transport import JSONRPCTransport

__all__ = [
    "BridgeClient",
    "BridgeConfig",
    "ClientState",
    "JSONRPCTransport",
    "Transport",
]
