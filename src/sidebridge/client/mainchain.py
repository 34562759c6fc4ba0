"""
Client for the mainchain BIP300/301 RPC surface.

``BridgeClient`` validates every argument before dispatch, maps each
operation to one JSON-RPC method with positional parameters, and returns
the daemon's result unmodified.
"""

import re
from enum import Enum
from typing import Any, List, Optional, Protocol

from ..crypto.hashing import HASH_SIZE, Hash
from ..errors import ClientError, RPCError, create_validation_error
from ..logging import get_logger
from ..protocol import consensus
from ..protocol.amount import Amount
from ..sidechain.entry import EntryType, SidechainEntry
from .config import BridgeConfig
from .transport import JSONRPCTransport

logger = get_logger(__name__)

ENDPOINT = "/"

_HEX_HASH = re.compile(r"[0-9a-f]{64}")


class Transport(Protocol):
    """What the client needs from an RPC transport."""

    async def execute(self, endpoint: str, method: str, params: List[Any]) -> Any:
        ...

    async def close(self) -> None:
        ...


class ClientState(Enum):
    """Lifecycle of a bridge client."""

    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


def _check_int(name: str, value: Any, minimum: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise create_validation_error(name, value, "integer")
    if minimum is not None and value < minimum:
        raise create_validation_error(name, value, f"integer >= {minimum}")
    return value


def _check_str(name: str, value: Any, allow_empty: bool = True) -> str:
    if not isinstance(value, str) or (not allow_empty and not value):
        raise create_validation_error(
            name, value, "string" if allow_empty else "non-empty string"
        )
    return value


def _hex_hash(name: str, value: Any) -> str:
    """Wire form of a 32-byte hash: 64 lowercase hex characters."""
    if isinstance(value, Hash):
        return value.to_hex()
    if isinstance(value, (bytes, bytearray)) and len(value) == HASH_SIZE:
        return bytes(value).hex()
    if isinstance(value, str) and _HEX_HASH.fullmatch(value):
        return value
    raise create_validation_error(name, value, "64-character lowercase hex hash")


def _amount(name: str, value: Any) -> Amount:
    try:
        return Amount(value)
    except (TypeError, ValueError) as e:
        raise create_validation_error(name, value, f"amount ({e})") from e


class BridgeClient:
    """Client that talks to the mainchain daemon for one sidechain node.

    The client composes a transport rather than extending one. No handshake
    is needed: connections are made by the transport on each call.
    """

    def __init__(
        self,
        config: Optional[BridgeConfig] = None,
        transport: Optional[Transport] = None,
        timeout: float = 30.0,
    ):
        self.config = config or BridgeConfig()
        self.transport = transport or JSONRPCTransport(
            self.config.url,
            auth=self.config.auth,
            headers=self.config.headers,
            timeout=timeout,
        )
        self.state = ClientState.UNOPENED
        self._released = False

    @classmethod
    def from_options(cls, options=None, **kwargs) -> "BridgeClient":
        return cls(BridgeConfig.from_options(options), **kwargs)

    @property
    def network(self):
        return self.config.network

    @property
    def opened(self) -> bool:
        return self.state is ClientState.OPEN

    async def open(self) -> "BridgeClient":
        """Open the client. Idempotent."""
        if self.state is ClientState.UNOPENED:
            self.state = ClientState.OPEN
            logger.info(
                f"Mainchain client opened for {self.config.url}",
                extra={"network": self.config.network.name},
            )
        return self

    async def close(self) -> None:
        """Release the transport. Later calls are no-ops."""
        try:
            if not self._released:
                self._released = True
                await self.transport.close()
                logger.info(f"Mainchain client closed for {self.config.url}")
        finally:
            self.state = ClientState.CLOSED

    async def __aenter__(self) -> "BridgeClient":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def execute(self, method: str, params: List[Any]) -> Any:
        if self.state is ClientState.CLOSED:
            raise ClientError(
                f"Cannot call '{method}' on a closed client",
                state=self.state.value,
            )
        return await self.transport.execute(ENDPOINT, method, params)

    async def is_connected(self) -> bool:
        """Whether the daemon answers ``getblockcount`` with a non-zero height.

        A cheap heuristic rather than a liveness probe: a daemon at height 0
        reads as disconnected, and RPC failures read as ``False``.
        """
        try:
            blocks = await self.get_block_count()
        except RPCError as e:
            logger.warning(f"Mainchain connection check failed: {e.message}")
            return False
        return blocks != 0

    # Withdrawal bundles

    async def broadcast_withdrawal_bundle(self, sidechain_id: int, bundle_hash) -> Any:
        """Submit a withdrawal bundle hash for ACK voting."""
        _check_int("sidechain_id", sidechain_id, 0)
        bundle_hash = _hex_hash("bundle_hash", bundle_hash)
        return await self.execute("receivewithdrawalbundle", [sidechain_id, bundle_hash])

    async def broadcast_entry(self, entry: SidechainEntry) -> Any:
        """Submit the withdrawal bundle described by ``entry``."""
        if not isinstance(entry, SidechainEntry):
            raise create_validation_error("entry", entry, "SidechainEntry")
        if entry.kind is not EntryType.WITHDRAWAL_BUNDLE:
            raise create_validation_error(
                "entry_type", entry.entry_type, "withdrawal bundle entry"
            )
        return await self.broadcast_withdrawal_bundle(
            entry.sidechain_id, entry.entry_hash
        )

    async def has_spent_withdrawal(self, bundle_hash, sidechain_id: int) -> Any:
        """Whether the bundle has been paid out on the mainchain."""
        bundle_hash = _hex_hash("bundle_hash", bundle_hash)
        _check_int("sidechain_id", sidechain_id, 0)
        return await self.execute("havespentwithdrawal", [bundle_hash, sidechain_id])

    async def has_failed_withdrawal(self, bundle_hash, sidechain_id: int) -> Any:
        """Whether the bundle failed to gather enough ACKs."""
        bundle_hash = _hex_hash("bundle_hash", bundle_hash)
        _check_int("sidechain_id", sidechain_id, 0)
        return await self.execute("havefailedwithdrawal", [bundle_hash, sidechain_id])

    async def get_work_score(self, sidechain_id: int, bundle_hash: str) -> Any:
        """Current ACK count of a pending bundle."""
        _check_int("sidechain_id", sidechain_id)
        _check_str("bundle_hash", bundle_hash, allow_empty=False)
        return await self.execute("getworkscore", [sidechain_id, bundle_hash])

    async def get_withdrawal_bundle_status(self, sidechain_id: int) -> Any:
        """List the pending withdrawal bundles of a slot."""
        _check_int("sidechain_id", sidechain_id, 0)
        return await self.execute("listwithdrawalstatus", [sidechain_id])

    # Blind merged mining

    async def verify_bmm(self, main_block_hash, bmm_hash, sidechain_id: int) -> Any:
        """Check that ``bmm_hash`` is committed to in a mainchain block."""
        main_block_hash = _hex_hash("main_block_hash", main_block_hash)
        bmm_hash = _hex_hash("bmm_hash", bmm_hash)
        _check_int("sidechain_id", sidechain_id, 0)
        return await self.execute(
            "verifybmm", [main_block_hash, bmm_hash, sidechain_id]
        )

    async def send_bmm_request(
        self,
        amount,
        height: int,
        critical_hash,
        sidechain_id: int,
        prev_main_block_hash,
    ) -> Any:
        """Create the critical-data transaction committing to a sidechain block.

        A zero ``amount`` is replaced by ``consensus.CRITICAL_DATA_AMT``.
        """
        amt = _amount("amount", amount)
        _check_int("height", height, 0)
        critical_hash = _hex_hash("critical_hash", critical_hash)
        _check_int("sidechain_id", sidechain_id, 0)
        prev_main_block_hash = _hex_hash("prev_main_block_hash", prev_main_block_hash)

        if amt.is_zero():
            amt = Amount(consensus.CRITICAL_DATA_AMT)

        return await self.execute(
            "createbmmcriticaldatatx",
            [amt.to_string(), height, critical_hash, sidechain_id, prev_main_block_hash],
        )

    # Chain state

    async def get_mainchain_info(self) -> Any:
        return await self.execute("getblockchaininfo", [])

    async def get_mainchain_tip(self) -> Any:
        return await self.execute("getbestblockhash", [])

    async def get_block_count(self) -> Any:
        return await self.execute("getblockcount", [])

    async def get_recent_block_hashes(self) -> Any:
        """The most recent mainchain block hashes."""
        return await self.execute("listpreviousblockhashes", [])

    async def get_mainchain_block_hash(self, height: int) -> Any:
        _check_int("height", height, 0)
        return await self.execute("getblockhash", [height])

    async def get_sidechain_tip(self, sidechain_id: int) -> Any:
        """CTIP (last accepted deposit/withdrawal output) of a slot."""
        _check_int("sidechain_id", sidechain_id, 0)
        return await self.execute("listsidechainctip", [sidechain_id])

    async def get_average_mainchain_fees(self, block_count: int) -> Any:
        _check_int("block_count", block_count, 1)
        return await self.execute("getaveragefee", [block_count])

    # Deposits

    async def verify_deposit(self, main_block_hash, txid, tx_payload) -> Any:
        """Check that a deposit transaction is included in a mainchain block.

        ``tx_payload`` is the transaction's index in the block or its raw hex.
        """
        main_block_hash = _hex_hash("main_block_hash", main_block_hash)
        txid = _hex_hash("txid", txid)
        if isinstance(tx_payload, str):
            _check_str("tx_payload", tx_payload, allow_empty=False)
        else:
            _check_int("tx_payload", tx_payload, 0)
        return await self.execute("verifydeposit", [main_block_hash, txid, tx_payload])

    async def create_sidechain_deposit(
        self, sidechain_id: int, address: str, amount, fee
    ) -> Any:
        """Deposit ``amount`` to ``address`` on the sidechain; returns the txid."""
        _check_int("sidechain_id", sidechain_id, 0)
        _check_str("address", address, allow_empty=False)
        amt = _amount("amount", amount)
        fee_amt = _amount("fee", fee)
        return await self.execute(
            "createsidechaindeposit",
            [sidechain_id, address, amt.to_string(), fee_amt.to_string()],
        )

    # Sidechain activation

    async def create_sidechain_proposal(
        self,
        sidechain_id: int,
        name: str,
        description: str,
        version: int,
        hash_id1: str,
        hash_id2: str,
    ) -> Any:
        """Propose a sidechain for activation in the given slot.

        The proposal always carries this node's own release hashes
        (``SIDECHAIN_BUILD_TAR_HASH`` / ``SIDECHAIN_BUILD_COMMIT_HASH``);
        ``hash_id1`` and ``hash_id2`` are checked but not sent.
        """
        _check_int("sidechain_id", sidechain_id, consensus.THIS_SIDECHAIN)
        _check_str("name", name)
        _check_str("description", description)
        _check_int("version", version, 0)
        _check_str("hash_id1", hash_id1)
        _check_str("hash_id2", hash_id2)

        tar = consensus.SIDECHAIN_BUILD_TAR_HASH
        commit = consensus.SIDECHAIN_BUILD_COMMIT_HASH
        if (hash_id1, hash_id2) != (tar, commit):
            logger.debug(
                "Proposal uses this node's build hashes",
                extra={"hash_id1": hash_id1, "hash_id2": hash_id2},
            )

        return await self.execute(
            "createsidechainproposal",
            [sidechain_id, name, description, version, tar, commit],
        )

    async def get_sidechain_activation_status(self, sidechain_id: int) -> Any:
        """Activation vote tally of a slot."""
        _check_int("sidechain_id", sidechain_id, 0)
        return await self.execute("getsidechainactivationstatus", [sidechain_id])
