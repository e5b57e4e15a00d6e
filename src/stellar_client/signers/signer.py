"""
Base signer interface.

Defines the capability a transaction needs from a signing key: raw
signatures over a transaction hash plus the 4-byte hint that lets a
verifier select the matching key.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from ..codec.hashes import signature_hint
from ..codec.writer import XdrWriter
from ..runtime.errors import StellarError

KEY_TYPE_ED25519 = 0


class SignerError(StellarError):
    """Base exception for signer operations."""
    pass


class Signer(ABC):
    """
    Base signer interface.

    Implementations sign the 32-byte transaction hash and expose the public
    key the signature verifies against.
    """

    @abstractmethod
    def sign(self, digest: bytes) -> bytes:
        """
        Sign a digest.

        Args:
            digest: 32-byte hash to sign

        Returns:
            Signature bytes

        Raises:
            SignerError: If signing fails
        """
        pass

    @abstractmethod
    def verify(self, signature: bytes, digest: bytes) -> bool:
        """
        Verify a signature against a digest.

        Args:
            signature: Signature bytes to verify
            digest: 32-byte hash that was signed

        Returns:
            True if signature is valid
        """
        pass

    @abstractmethod
    def get_public_key(self) -> bytes:
        """
        Get the raw 32-byte public key.
        """
        pass

    def get_public_key_xdr(self) -> bytes:
        """
        Get the XDR ``PublicKey`` encoding of the key.

        This is the value the signature hint is taken from.
        """
        writer = XdrWriter()
        writer.uint32(KEY_TYPE_ED25519)
        writer.fixed_opaque(self.get_public_key(), 32)
        return writer.to_bytes()

    def get_signature_hint(self) -> bytes:
        """
        Get the 4-byte signature hint: the tail of the XDR public key.
        """
        return signature_hint(self.get_public_key_xdr())
