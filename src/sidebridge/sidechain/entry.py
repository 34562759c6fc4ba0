"""
Sidechain ledger entries.

A ``SidechainEntry`` is the base record for the objects the two-way peg
tracks: deposits, withdrawals and withdrawal bundles. Entries are built
from optional fields and treated as values once constructed.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional

from ..crypto.hashing import HASH_SIZE
from ..errors import ValidationError, create_validation_error
from ..protocol import consensus
from ..script import Script

EMPTY = b""


class EntryType(IntEnum):
    """Kinds of sidechain entries."""

    UNKNOWN = -1
    DEPOSIT = 0
    WITHDRAWAL = 1
    WITHDRAWAL_BUNDLE = 2


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_hash(value: Any, field_name: str = "entry_hash") -> bytes:
    """Return ``value`` as bytes if it is a 32-byte binary hash."""
    if not isinstance(value, (bytes, bytearray)) or len(value) != HASH_SIZE:
        raise create_validation_error(field_name, value, "32-byte binary hash")
    return bytes(value)


def _check_field(name: str, value: Any) -> Any:
    if name == "sidechain_id":
        if not _is_int(value) or value < 0:
            raise create_validation_error(name, value, "non-negative integer")
        return value
    if name in ("entry_type", "version"):
        if not _is_int(value):
            raise create_validation_error(name, value, "integer")
        return value
    if name == "entry_hash":
        return check_hash(value)
    if name == "script":
        if not isinstance(value, Script):
            raise create_validation_error(name, value, "Script")
        return value
    raise ValidationError(f"Unknown sidechain entry option '{name}'", field=name)


@dataclass(repr=False)
class SidechainEntry:
    """Base object for sidechain related entries.

    Attributes:
        sidechain_id: Sidechain slot the entry belongs to.
        entry_hash: 32-byte identifier (bundle hash, deposit txid, ...),
            empty until set.
        script: Output script associated with the entry.
        entry_type: One of ``EntryType`` (``-1`` when unknown).
        version: Protocol version tag, ``-1`` when unset.
    """

    sidechain_id: int = consensus.THIS_SIDECHAIN
    entry_hash: bytes = EMPTY
    script: Script = field(default_factory=Script)
    entry_type: int = EntryType.UNKNOWN
    version: int = -1

    FIELDS = ("sidechain_id", "entry_hash", "script", "entry_type", "version")

    def __post_init__(self) -> None:
        for name in self.FIELDS:
            value = getattr(self, name)
            if name == "entry_hash" and value == EMPTY:
                continue
            setattr(self, name, _check_field(name, value))

    @classmethod
    def from_options(
        cls, options: Optional[Mapping[str, Any]] = None
    ) -> "SidechainEntry":
        """Create an entry with defaults, then merge ``options`` into it."""
        entry = cls()
        if options:
            entry.merge(options)
        return entry

    def merge(self, options: Mapping[str, Any]) -> "SidechainEntry":
        """Inject the fields present in ``options``.

        Every present field is validated before any is assigned, so a
        failing option leaves the entry untouched. Keys mapped to ``None``
        count as absent.
        """
        if not isinstance(options, Mapping):
            raise create_validation_error("options", options, "mapping")

        updates = {
            name: _check_field(name, value)
            for name, value in options.items()
            if value is not None
        }

        for name, value in updates.items():
            setattr(self, name, value)

        return self

    @property
    def kind(self) -> EntryType:
        try:
            return EntryType(self.entry_type)
        except ValueError:
            return EntryType.UNKNOWN

    @property
    def hash_hex(self) -> str:
        return self.entry_hash.hex()

    def hash_of(self, candidate: Any) -> bytes:
        """Check that ``candidate`` is a 32-byte hash and return it unchanged."""
        check_hash(candidate, "candidate")
        return candidate

    def script_of(self, candidate: Any) -> Script:
        """Resolve the output script committing to ``candidate``.

        Raises:
            ValidationError: ``candidate`` is not a 32-byte hash.
            ScriptError: the script layer cannot build a script for it.
        """
        return self.script.from_sidechain_entry(check_hash(candidate, "candidate"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sidechain_id": self.sidechain_id,
            "entry_hash": self.hash_hex,
            "script": self.script.to_hex(),
            "entry_type": int(self.entry_type),
            "version": self.version,
        }

    def __repr__(self) -> str:
        return (
            "<SidechainEntry:"
            f" sidechain_id={self.sidechain_id}"
            f" entry_hash={self.hash_hex}"
            f" script={self.script}"
            f" entry_type={int(self.entry_type)}"
            ">"
        )
