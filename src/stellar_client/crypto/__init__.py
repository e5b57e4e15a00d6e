"""
Cryptographic primitives for Stellar accounts.

Provides Ed25519 key pairs and StrKey encoding.
"""

from .ed25519 import Ed25519Error, KeyPair
from .strkey import (
    StrKeyError,
    VersionByte,
    decode_account_id,
    encode_account_id,
    is_valid_account_id,
)

__all__ = [
    "KeyPair",
    "Ed25519Error",
    "StrKeyError",
    "VersionByte",
    "decode_account_id",
    "encode_account_id",
    "is_valid_account_id",
]
