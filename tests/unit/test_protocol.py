"""
Unit tests for amounts, networks and consensus constants.
"""

import dataclasses
from decimal import Decimal

import pytest

from sidebridge.protocol import NETWORKS, Amount, Network, consensus


class TestAmount:
    """Test the Amount collaborator."""

    @pytest.mark.parametrize(
        "satoshis,text",
        [
            (0, "0.0"),
            (1, "0.00000001"),
            (1000, "0.00001"),
            (10000, "0.0001"),
            (100000000, "1.0"),
            (150000000, "1.5"),
            (2100000000000000, "21000000.0"),
        ],
    )
    def test_to_string(self, satoshis, text):
        """Test canonical string formatting."""
        assert Amount(satoshis).to_string() == text
        assert str(Amount(satoshis)) == text

    def test_from_btc(self):
        """Test parsing BTC decimal values."""
        assert Amount.from_btc("0.0001") == Amount(10000)
        assert Amount(Decimal("1.5")).value == 150000000
        assert Amount("2").value == 200000000

    def test_copy(self):
        """Test building an amount from another amount."""
        amount = Amount(42)
        assert Amount(amount) == amount
        assert Amount(amount) is not amount

    def test_is_zero(self):
        """Test zero detection."""
        assert Amount().is_zero()
        assert Amount(0).is_zero()
        assert not Amount(1).is_zero()

    @pytest.mark.parametrize(
        "value,error",
        [
            (-1, ValueError),
            ("0.000000001", ValueError),
            ("abc", ValueError),
            ("NaN", ValueError),
            (consensus.MAX_MONEY + 1, ValueError),
            (0.5, TypeError),
            (True, TypeError),
            (None, TypeError),
        ],
    )
    def test_invalid(self, value, error):
        """Test rejected amounts."""
        with pytest.raises(error):
            Amount(value)

    def test_to_btc(self):
        """Test conversion to Decimal BTC."""
        assert Amount(10000).to_btc() == Decimal("0.0001")

    def test_critical_data_amount(self):
        """Test the default BMM amount."""
        assert Amount(consensus.CRITICAL_DATA_AMT).to_string() == "0.0001"


class TestNetwork:
    """Test network parameter sets."""

    @pytest.mark.parametrize(
        "name,port",
        [("main", 8332), ("testnet", 18332), ("regtest", 18443), ("simnet", 18556)],
    )
    def test_mainchain_ports(self, name, port):
        """Test the mainchain RPC port of each network."""
        assert Network.get(name).mainchain_port == port

    def test_registry(self):
        """Test that every registered network is reachable by name."""
        for name, network in NETWORKS.items():
            assert Network.get(name) is network
            assert str(network) == name
        assert Network.names() == list(NETWORKS)

    def test_unknown(self):
        """Test lookup of an unknown network."""
        with pytest.raises(ValueError, match="Unknown network"):
            Network.get("nonet")

    def test_fields(self):
        """Test that a network carries only its name and mainchain port."""
        assert [f.name for f in dataclasses.fields(Network)] == ["name", "mainchain_port"]


class TestConsensus:
    """Test consensus constants."""

    def test_build_hashes(self):
        """Test the shape of this node's release hashes."""
        assert len(consensus.SIDECHAIN_BUILD_TAR_HASH) == 64
        assert len(consensus.SIDECHAIN_BUILD_COMMIT_HASH) == 40
        int(consensus.SIDECHAIN_BUILD_TAR_HASH, 16)
        int(consensus.SIDECHAIN_BUILD_COMMIT_HASH, 16)

    def test_this_sidechain(self):
        """Test the node's own slot."""
        assert consensus.THIS_SIDECHAIN >= 0

