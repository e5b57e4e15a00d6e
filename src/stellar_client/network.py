"""
Network identity configuration.

A network is identified by its passphrase; the 32-byte network id mixed into
every signature base is SHA-256 of that passphrase.
"""

from __future__ import annotations
from typing import Dict, Any
from pydantic import BaseModel, Field

from .codec.hashes import sha256_bytes

PUBLIC_NETWORK_PASSPHRASE = "Public Global Stellar Network ; September 2015"
TESTNET_NETWORK_PASSPHRASE = "Test SDF Network ; September 2015"
FUTURENET_NETWORK_PASSPHRASE = "Test SDF Future Network ; October 2022"


class Network(BaseModel):
    """
    Network passphrase and derived network id.
    """
    passphrase: str = Field(min_length=1, description="Human-readable network passphrase")

    model_config = {"frozen": True}

    @classmethod
    def public(cls) -> Network:
        """The public Stellar network."""
        return cls(passphrase=PUBLIC_NETWORK_PASSPHRASE)

    @classmethod
    def testnet(cls) -> Network:
        """The SDF test network."""
        return cls(passphrase=TESTNET_NETWORK_PASSPHRASE)

    @classmethod
    def futurenet(cls) -> Network:
        """The SDF future network."""
        return cls(passphrase=FUTURENET_NETWORK_PASSPHRASE)

    @property
    def network_id(self) -> bytes:
        """32-byte SHA-256 of the passphrase."""
        return sha256_bytes(self.passphrase.encode("utf-8"))

    def to_dict(self) -> Dict[str, Any]:
        return {"passphrase": self.passphrase, "networkId": self.network_id.hex()}

    def __str__(self) -> str:
        return self.passphrase
