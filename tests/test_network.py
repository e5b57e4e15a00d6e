"""
Tests for Network configuration.
"""

import hashlib

import pytest
from pydantic import ValidationError

from stellar_client.network import (
    PUBLIC_NETWORK_PASSPHRASE,
    TESTNET_NETWORK_PASSPHRASE,
    Network,
)


class TestNetwork:
    """Tests for network presets and network id derivation."""

    def test_presets(self):
        assert Network.public().passphrase == PUBLIC_NETWORK_PASSPHRASE
        assert Network.testnet().passphrase == TESTNET_NETWORK_PASSPHRASE
        assert Network.futurenet().passphrase != Network.testnet().passphrase

    def test_network_id(self):
        network = Network(passphrase="Custom Network ; 2024")
        assert network.network_id == hashlib.sha256(b"Custom Network ; 2024").digest()
        assert len(network.network_id) == 32

    def test_empty_passphrase(self):
        with pytest.raises(ValidationError):
            Network(passphrase="")

    def test_frozen(self):
        network = Network.testnet()
        with pytest.raises(ValidationError):
            network.passphrase = "other"

    def test_equality(self):
        assert Network.testnet() == Network(passphrase=TESTNET_NETWORK_PASSPHRASE)
        assert Network.testnet() != Network.public()

    def test_to_dict(self):
        data = Network.public().to_dict()
        assert data["passphrase"] == PUBLIC_NETWORK_PASSPHRASE
        assert data["networkId"] == hashlib.sha256(PUBLIC_NETWORK_PASSPHRASE.encode()).hexdigest()
