"""
Hash values and SHA-256 helpers for SideBridge.

Sidechain entries hold 32-byte identifiers in binary form; the mainchain
RPC surface expects them as 64-character lowercase hex strings.
"""

from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives import hashes

HASH_SIZE = 32


@dataclass(frozen=True)
class Hash:
    """Immutable 32-byte hash value."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, bytes) or len(self.value) != HASH_SIZE:
            raise ValueError("Hash must be exactly 32 bytes")

    def __str__(self) -> str:
        return self.value.hex()

    def __repr__(self) -> str:
        return f"Hash('{self.value.hex()}')"

    @classmethod
    def from_hex(cls, hex_string: str) -> "Hash":
        """Create a Hash from a hexadecimal string."""
        return cls(bytes.fromhex(hex_string))

    @classmethod
    def zero(cls) -> "Hash":
        """Create a zero hash (all zeros)."""
        return cls(b"\x00" * HASH_SIZE)

    def to_hex(self) -> str:
        """Convert hash to hexadecimal string."""
        return self.value.hex()


class SHA256Hasher:
    """SHA-256 hashing backed by ``cryptography``."""

    @staticmethod
    def digest(data: Union[bytes, str]) -> bytes:
        if isinstance(data, str):
            data = data.encode("utf-8")

        h = hashes.Hash(hashes.SHA256())
        h.update(data)
        return h.finalize()

    @staticmethod
    def hash(data: Union[bytes, str]) -> Hash:
        """
        Hash data using SHA-256.

        Args:
            data: Data to hash (bytes or string)

        Returns:
            Hash object containing the SHA-256 hash
        """
        return Hash(SHA256Hasher.digest(data))

    @staticmethod
    def double_hash(data: Union[bytes, str]) -> Hash:
        """
        Double SHA-256 hash (Bitcoin-style).

        Args:
            data: Data to hash (bytes or string)

        Returns:
            Hash object containing the double SHA-256 hash
        """
        return Hash(SHA256Hasher.digest(SHA256Hasher.digest(data)))
