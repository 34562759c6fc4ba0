"""
Protocol parameters: consensus constants, network registry and amounts.
"""

from . import consensus
from .amount import Amount
from .network import DEFAULT_NETWORK, NETWORKS, Network

__all__ = ["consensus", "Amount", "Network", "NETWORKS", "DEFAULT_NETWORK"]
