"""
StrKey encoding for Stellar keys.

A StrKey is base32(version_byte || payload || crc16_xmodem_le(version_byte || payload))
without padding. The version byte selects the leading character: ``G`` for
account ids, ``S`` for secret seeds.
"""

from __future__ import annotations
import base64
import binascii
from enum import IntEnum


class StrKeyError(ValueError):
    """Malformed StrKey string."""
    pass


class VersionByte(IntEnum):
    """StrKey version bytes."""

    ACCOUNT_ID = 6 << 3
    MUXED_ACCOUNT = 12 << 3
    SEED = 18 << 3
    PRE_AUTH_TX = 19 << 3
    SHA256_HASH = 23 << 3


def crc16_xmodem(data: bytes) -> int:
    """CRC-16/XMODEM (poly 0x1021, init 0) of ``data``."""
    return binascii.crc_hqx(data, 0)


def encode_check(version: VersionByte, payload: bytes) -> str:
    """
    Encode ``payload`` as a StrKey with the given version byte.

    Args:
        version: Version byte selecting the key kind
        payload: Raw key bytes

    Returns:
        StrKey string
    """
    data = bytes([version]) + bytes(payload)
    checksum = crc16_xmodem(data).to_bytes(2, "little")
    return base64.b32encode(data + checksum).decode("ascii").rstrip("=")


def decode_check(version: VersionByte, encoded: str) -> bytes:
    """
    Decode a StrKey and verify its version byte and checksum.

    Args:
        version: Expected version byte
        encoded: StrKey string

    Returns:
        Raw payload bytes

    Raises:
        StrKeyError: If the string is malformed, of the wrong kind, or fails
            its checksum
    """
    if not isinstance(encoded, str) or not encoded:
        raise StrKeyError("StrKey must be a non-empty string")

    padded = encoded + "=" * (-len(encoded) % 8)
    try:
        raw = base64.b32decode(padded, casefold=False)
    except (binascii.Error, ValueError) as e:
        raise StrKeyError(f"Invalid base32 in StrKey: {e}") from e

    if len(raw) < 3:
        raise StrKeyError("StrKey too short")
    if base64.b32encode(raw).decode("ascii").rstrip("=") != encoded:
        raise StrKeyError("StrKey is not canonically encoded")

    data, checksum = raw[:-2], raw[-2:]
    if data[0] != version:
        raise StrKeyError(f"Version byte mismatch: expected {version.name}, got {data[0]}")
    if crc16_xmodem(data).to_bytes(2, "little") != checksum:
        raise StrKeyError("StrKey checksum mismatch")
    return bytes(data[1:])


def encode_account_id(public_key: bytes) -> str:
    """Encode a 32-byte Ed25519 public key as a ``G...`` account id."""
    return encode_check(VersionByte.ACCOUNT_ID, public_key)


def decode_account_id(account_id: str) -> bytes:
    """Decode a ``G...`` account id to its 32-byte public key."""
    key = decode_check(VersionByte.ACCOUNT_ID, account_id)
    if len(key) != 32:
        raise StrKeyError(f"Account id must carry 32 bytes, got {len(key)}")
    return key


def encode_secret_seed(seed: bytes) -> str:
    """Encode a 32-byte Ed25519 seed as an ``S...`` secret seed."""
    return encode_check(VersionByte.SEED, seed)


def decode_secret_seed(secret: str) -> bytes:
    """Decode an ``S...`` secret seed to its 32 raw bytes."""
    seed = decode_check(VersionByte.SEED, secret)
    if len(seed) != 32:
        raise StrKeyError(f"Secret seed must carry 32 bytes, got {len(seed)}")
    return seed


def is_valid_account_id(account_id: str) -> bool:
    """Check whether ``account_id`` is a well-formed ``G...`` address."""
    try:
        decode_account_id(account_id)
        return True
    except StrKeyError:
        return False
