"""
Output scripts for sidechain entries.

Only the two script shapes the two-way peg needs are built here: the
OP_RETURN commitment carrying a 32-byte entry hash, and the BIP300
OP_DRIVECHAIN deposit output for a sidechain slot.
"""

from typing import Optional

from ..crypto.hashing import HASH_SIZE, Hash, SHA256Hasher
from ..errors import ScriptError

OP_TRUE = 0x51
OP_RETURN = 0x6A
OP_DRIVECHAIN = 0xB4  # OP_NOP5


class Script:
    """Immutable script byte string."""

    __slots__ = ("raw",)

    def __init__(self, raw: bytes = b""):
        if not isinstance(raw, (bytes, bytearray)):
            raise ScriptError(f"Script must be bytes, got {type(raw).__name__}")
        self.raw = bytes(raw)

    @classmethod
    def from_hex(cls, hex_string: str) -> "Script":
        try:
            return cls(bytes.fromhex(hex_string))
        except ValueError as e:
            raise ScriptError(f"Invalid script hex: {e}") from e

    @classmethod
    def from_sidechain_entry(cls, entry_hash: bytes) -> "Script":
        """Build the commitment script for a sidechain entry hash.

        Layout: ``OP_RETURN <32-byte push> <hash>``.
        """
        if not isinstance(entry_hash, bytes) or len(entry_hash) != HASH_SIZE:
            raise ScriptError("Sidechain entry hash must be 32 bytes")
        return cls(bytes([OP_RETURN, HASH_SIZE]) + entry_hash)

    @classmethod
    def from_drivechain(cls, sidechain_id: int) -> "Script":
        """BIP300 deposit output: ``OP_DRIVECHAIN <1-byte slot> OP_TRUE``."""
        if not 0 <= sidechain_id <= 0xFF:
            raise ScriptError(f"Sidechain slot out of range: {sidechain_id}")
        return cls(bytes([OP_DRIVECHAIN, 0x01, sidechain_id, OP_TRUE]))

    def is_empty(self) -> bool:
        return not self.raw

    def is_sidechain_commitment(self) -> bool:
        return (
            len(self.raw) == HASH_SIZE + 2
            and self.raw[0] == OP_RETURN
            and self.raw[1] == HASH_SIZE
        )

    def is_drivechain(self) -> bool:
        return (
            len(self.raw) == 4
            and self.raw[0] == OP_DRIVECHAIN
            and self.raw[1] == 0x01
            and self.raw[3] == OP_TRUE
        )

    def get_entry_hash(self) -> bytes:
        """Decode the entry hash committed to by this script."""
        if not self.is_sidechain_commitment():
            raise ScriptError("Script is not a sidechain entry commitment")
        return self.raw[2:]

    def get_sidechain_id(self) -> Optional[int]:
        """Slot of a drivechain deposit output, or None for other scripts."""
        if not self.is_drivechain():
            return None
        return self.raw[2]

    def sha256(self) -> Hash:
        return SHA256Hasher.hash(self.raw)

    def to_hex(self) -> str:
        return self.raw.hex()

    def __len__(self) -> int:
        return len(self.raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Script):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    def __str__(self) -> str:
        return self.raw.hex()

    def __repr__(self) -> str:
        return f"Script('{self.raw.hex()}')"
