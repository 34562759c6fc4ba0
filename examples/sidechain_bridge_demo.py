#!/usr/bin/env python3
"""
Sidechain Bridge Demo for SideBridge

Runs one block cycle of a BIP300/301 sidechain node against a mainchain
daemon:
- Checks the connection and reads the mainchain tip
- Submits a BMM request committing to a sidechain block
- Broadcasts a withdrawal bundle and polls its workscore

Connection settings come from SIDEBRIDGE_RPC_HOST, SIDEBRIDGE_RPC_PORT,
SIDEBRIDGE_RPC_USER, SIDEBRIDGE_RPC_PASSWORD and SIDEBRIDGE_NETWORK.
"""

import asyncio
import os

from sidebridge import (
    BridgeClient,
    BridgeConfig,
    EntryType,
    RPCError,
    SidechainEntry,
)
from sidebridge.crypto import SHA256Hasher
from sidebridge.logging import LogConfig, LogLevel, get_logger, setup_logging

logger = get_logger(__name__)


async def run_block_cycle(client: BridgeClient, sidechain_id: int) -> None:
    """Run the per-block bridge calls for one sidechain block."""
    if not await client.is_connected():
        logger.warning("Mainchain daemon is not reachable or has no blocks")
        return

    height = await client.get_block_count()
    tip = await client.get_mainchain_tip()
    logger.info(f"Mainchain tip {tip} at height {height}")

    block_hash = SHA256Hasher.double_hash(os.urandom(80))
    txid = await client.send_bmm_request(0, height, block_hash, sidechain_id, tip)
    logger.info(f"BMM request sent: {txid}")

    bundle = SidechainEntry(
        sidechain_id=sidechain_id,
        entry_hash=SHA256Hasher.double_hash(b"withdrawal bundle").value,
        entry_type=EntryType.WITHDRAWAL_BUNDLE,
    )
    await client.broadcast_entry(bundle)

    score = await client.get_work_score(sidechain_id, bundle.hash_hex)
    logger.info(f"Bundle {bundle.hash_hex} workscore: {score}")


async def main() -> None:
    setup_logging(LogConfig(level=LogLevel.DEBUG))
    config = BridgeConfig.from_env()

    async with BridgeClient(config) as client:
        try:
            await run_block_cycle(client, sidechain_id=0)
        except RPCError as e:
            logger.error(f"Block cycle failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
