"""
Hash Functions

SHA-256 helpers shared by transaction hashing, network id derivation and
signature hint computation.
"""

import hashlib

SIGNATURE_HINT_LENGTH = 4


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def signature_hint(value: bytes) -> bytes:
    """
    Return the last four bytes of ``value``.

    A verifier uses the hint to pick the candidate key for a signature
    without trying every signer.
    """
    if len(value) < SIGNATURE_HINT_LENGTH:
        raise ValueError(f"hint source must be at least {SIGNATURE_HINT_LENGTH} bytes, got {len(value)}")
    return bytes(value[-SIGNATURE_HINT_LENGTH:])


def preimage_hint(preimage: bytes) -> bytes:
    """Signature hint for a hash-preimage signature: last 4 bytes of SHA-256(preimage)."""
    return signature_hint(sha256_bytes(preimage))
