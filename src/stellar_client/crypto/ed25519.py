r"""
Ed25519 key pairs for Stellar accounts.

Wraps the ``cryptography`` Ed25519 primitives with StrKey account id and
secret seed handling. A key pair built from an account id alone can verify
but not sign.
"""

from __future__ import annotations
import logging
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..signers.signer import Signer, SignerError
from . import strkey

logger = logging.getLogger(__name__)


class Ed25519Error(SignerError):
    """Base exception for Ed25519 operations."""
    pass


class KeyPair(Signer):
    """
    Ed25519 key pair identified by a Stellar account id.

    Provides signing, verification and StrKey serialization.
    """

    def __init__(self, public_key: bytes, private_key: Optional[CryptoEd25519PrivateKey] = None):
        """
        Initialize from a 32-byte public key and an optional private key.

        Args:
            public_key: 32-byte Ed25519 public key
            private_key: Matching private key, if this key pair can sign

        Raises:
            Ed25519Error: If the key is invalid
        """
        if len(public_key) != 32:
            raise Ed25519Error(f"Ed25519 public key must be 32 bytes, got {len(public_key)}")

        try:
            self._crypto_public = CryptoEd25519PublicKey.from_public_bytes(bytes(public_key))
        except ValueError as e:
            raise Ed25519Error(f"Invalid Ed25519 public key: {e}", cause=e) from e

        self._public_key = bytes(public_key)
        self._private_key = private_key

    @classmethod
    def random(cls) -> KeyPair:
        """Generate a new random key pair."""
        return cls._from_private(CryptoEd25519PrivateKey.generate())

    @classmethod
    def from_raw_seed(cls, seed: bytes) -> KeyPair:
        """
        Create key pair from a 32-byte Ed25519 seed.

        Raises:
            Ed25519Error: If seed is not exactly 32 bytes
        """
        if len(seed) != 32:
            raise Ed25519Error(f"Ed25519 seed must be 32 bytes, got {len(seed)}")
        return cls._from_private(CryptoEd25519PrivateKey.from_private_bytes(bytes(seed)))

    @classmethod
    def from_secret_seed(cls, secret: str) -> KeyPair:
        """Create key pair from an ``S...`` secret seed."""
        return cls.from_raw_seed(strkey.decode_secret_seed(secret))

    @classmethod
    def from_account_id(cls, account_id: str) -> KeyPair:
        """Create a verify-only key pair from a ``G...`` account id."""
        return cls(strkey.decode_account_id(account_id))

    @classmethod
    def from_public_key(cls, public_key: bytes) -> KeyPair:
        """Create a verify-only key pair from raw public key bytes."""
        return cls(public_key)

    @classmethod
    def _from_private(cls, private_key: CryptoEd25519PrivateKey) -> KeyPair:
        public_bytes = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return cls(public_bytes, private_key)

    @property
    def account_id(self) -> str:
        """The ``G...`` account id of this key."""
        return strkey.encode_account_id(self._public_key)

    @property
    def secret_seed(self) -> str:
        """The ``S...`` secret seed of this key."""
        return strkey.encode_secret_seed(self.raw_secret_seed())

    def raw_secret_seed(self) -> bytes:
        """Get the 32-byte private key seed."""
        if self._private_key is None:
            raise Ed25519Error("KeyPair does not contain secret key. Use KeyPair.from_secret_seed method to create a new KeyPair with a secret key.")
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def can_sign(self) -> bool:
        """Whether this key pair holds a private key."""
        return self._private_key is not None

    def get_public_key(self) -> bytes:
        return self._public_key

    def sign(self, digest: bytes) -> bytes:
        """
        Sign a message.

        Args:
            digest: Message to sign, normally a transaction hash

        Returns:
            64-byte Ed25519 signature

        Raises:
            Ed25519Error: If this key pair has no private key
        """
        if self._private_key is None:
            raise Ed25519Error("KeyPair does not contain secret key. Use KeyPair.from_secret_seed method to create a new KeyPair with a secret key.")
        return self._private_key.sign(digest)

    def verify(self, signature: bytes, digest: bytes) -> bool:
        """
        Verify a signature against a message.

        Args:
            signature: 64-byte Ed25519 signature
            digest: Message that was signed

        Returns:
            True if signature is valid
        """
        if len(signature) != 64:
            return False
        try:
            self._crypto_public.verify(signature, digest)
            return True
        except InvalidSignature:
            logger.debug("Signature verification failed for %s", self.account_id)
            return False

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyPair):
            return False
        return self._public_key == other._public_key

    def __hash__(self) -> int:
        return hash(self._public_key)

    def __str__(self) -> str:
        return f"KeyPair({self.account_id})"

    def __repr__(self) -> str:
        return f"KeyPair.from_account_id('{self.account_id}')"
