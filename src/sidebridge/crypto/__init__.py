"""
Cryptographic primitives for SideBridge.
"""

from .hashing import HASH_SIZE, Hash, SHA256Hasher

__all__ = ["HASH_SIZE", "Hash", "SHA256Hasher"]
