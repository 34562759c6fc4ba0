"""
Unit tests for scripts and hashes.
"""

import hashlib
import os

import pytest

from sidebridge.crypto import Hash, SHA256Hasher
from sidebridge.errors import ScriptError
from sidebridge.script import OP_DRIVECHAIN, OP_RETURN, OP_TRUE, Script


class TestScript:
    """Test Script construction and decoding."""

    def test_empty(self):
        """Test the empty script."""
        script = Script()
        assert script.is_empty()
        assert len(script) == 0
        assert str(script) == ""

    def test_commitment_round_trip(self):
        """Test building and decoding an entry commitment."""
        entry_hash = os.urandom(32)
        script = Script.from_sidechain_entry(entry_hash)

        assert script.raw[:2] == bytes([OP_RETURN, 32])
        assert script.is_sidechain_commitment()
        assert script.get_entry_hash() == entry_hash

    @pytest.mark.parametrize("entry_hash", [b"", b"\x00" * 31, "00" * 32])
    def test_commitment_rejects_bad_hash(self, entry_hash):
        """Test that only 32-byte hashes can be committed to."""
        with pytest.raises(ScriptError):
            Script.from_sidechain_entry(entry_hash)

    def test_get_entry_hash_not_commitment(self):
        """Test decoding a script that is not a commitment."""
        with pytest.raises(ScriptError):
            Script(b"\x51").get_entry_hash()

    def test_drivechain(self):
        """Test the BIP300 deposit output script."""
        script = Script.from_drivechain(7)

        assert script.raw == bytes([OP_DRIVECHAIN, 0x01, 7, OP_TRUE])
        assert script.is_drivechain()
        assert script.get_sidechain_id() == 7
        assert Script(b"\x6a").get_sidechain_id() is None

    def test_drivechain_slot_range(self):
        """Test slot bounds."""
        with pytest.raises(ScriptError):
            Script.from_drivechain(256)

    def test_hex(self):
        """Test hex conversion."""
        script = Script.from_hex("b4010051")
        assert script.to_hex() == "b4010051"
        with pytest.raises(ScriptError):
            Script.from_hex("zz")

    def test_raw_must_be_bytes(self):
        """Test the raw type check."""
        with pytest.raises(ScriptError):
            Script("6a")

    def test_sha256(self):
        """Test script hashing."""
        script = Script.from_drivechain(1)
        assert script.sha256().value == hashlib.sha256(script.raw).digest()


class TestHash:
    """Test Hash and SHA256Hasher."""

    def test_hash_size(self):
        """Test that hashes are exactly 32 bytes."""
        with pytest.raises(ValueError):
            Hash(b"\x00" * 31)

    def test_hex(self):
        """Test hex conversion."""
        value = Hash.from_hex("ab" * 32)
        assert value.to_hex() == "ab" * 32
        assert str(value) == "ab" * 32
        assert Hash.zero().value == b"\x00" * 32

    def test_sha256(self):
        """Test SHA-256 against hashlib."""
        assert SHA256Hasher.hash(b"abc").value == hashlib.sha256(b"abc").digest()
        assert SHA256Hasher.hash("abc") == SHA256Hasher.hash(b"abc")

    def test_double_sha256(self):
        """Test Bitcoin-style double SHA-256."""
        expected = hashlib.sha256(hashlib.sha256(b"abc").digest()).digest()
        assert SHA256Hasher.double_hash(b"abc").value == expected
