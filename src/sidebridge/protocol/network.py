"""
Network parameter sets.

Each network supplies the chain-specific defaults the bridge needs, most
importantly the RPC port of the mainchain daemon for that network.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Network:
    """Parameters of one mainchain network."""

    name: str
    mainchain_port: int

    @classmethod
    def get(cls, name: str) -> "Network":
        """Look up a registered network by name."""
        try:
            return NETWORKS[name]
        except KeyError:
            raise ValueError(
                f"Unknown network '{name}', expected one of {', '.join(NETWORKS)}"
            ) from None

    @classmethod
    def names(cls) -> List[str]:
        return list(NETWORKS)

    def __str__(self) -> str:
        return self.name


MAIN = Network(name="main", mainchain_port=8332)
TESTNET = Network(name="testnet", mainchain_port=18332)
REGTEST = Network(name="regtest", mainchain_port=18443)
SIMNET = Network(name="simnet", mainchain_port=18556)

NETWORKS: Dict[str, Network] = {
    network.name: network for network in (MAIN, TESTNET, REGTEST, SIMNET)
}

DEFAULT_NETWORK = "regtest"
