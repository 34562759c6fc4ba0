"""
Sidechain entry model for BIP300/301 sidechains.
"""

from .entry import EntryType, SidechainEntry, check_hash

__all__ = ["EntryType", "SidechainEntry", "check_hash"]
