"""
Consensus constants for the BIP300/301 two-way peg.
"""

# Sidechain slot this node operates.
THIS_SIDECHAIN = 0

COIN = 100_000_000

MAX_MONEY = 21_000_000 * COIN

# Amount (in satoshis) paid by a BMM critical-data transaction when the
# caller does not choose one.
CRITICAL_DATA_AMT = 10_000

# Identifiers of this node's release, submitted with every sidechain proposal.
# hashID1: sha256 of the release tarball, hashID2: git commit (160 bit).
SIDECHAIN_BUILD_TAR_HASH = (
    "5b1a2cd4a0f8e9d6c3b7e1f02a4d6c8e0b2f4a6c8e1d3f5a7c9e0b2d4f6a8c1e"
)
SIDECHAIN_BUILD_COMMIT_HASH = "a3f9c2e1d4b6a8c0e2f4d6b8a1c3e5f7092b4d6f"
