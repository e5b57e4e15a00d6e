"""
Transaction memo.

A memo is a tagged union attached to a transaction: none, a text of at most
28 bytes, a 64-bit id, or a 32-byte hash / return hash.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Optional, Union

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import InvalidArgumentError, UnmarshalError

MEMO_TEXT_MAX_LENGTH = 28


class MemoType(IntEnum):
    """XDR MemoType discriminants."""

    MEMO_NONE = 0
    MEMO_TEXT = 1
    MEMO_ID = 2
    MEMO_HASH = 3
    MEMO_RETURN = 4


class Memo:
    """
    Immutable memo value. Use the factory methods rather than the constructor.
    """

    def __init__(self, memo_type: MemoType, value: Optional[Union[bytes, int]] = None):
        self.type = MemoType(memo_type)
        self.value = value

    @classmethod
    def none(cls) -> Memo:
        return cls(MemoType.MEMO_NONE)

    @classmethod
    def text(cls, text: Union[str, bytes]) -> Memo:
        """
        Text memo. Stored as raw bytes; at most 28 bytes once UTF-8 encoded.

        Raises:
            InvalidArgumentError: If the text is too long
        """
        raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        if len(raw) > MEMO_TEXT_MAX_LENGTH:
            raise InvalidArgumentError(f"text cannot be more than {MEMO_TEXT_MAX_LENGTH} bytes, got {len(raw)}")
        return cls(MemoType.MEMO_TEXT, raw)

    @classmethod
    def id(cls, memo_id: int) -> Memo:
        if not 0 <= memo_id < 2**64:
            raise InvalidArgumentError(f"memo id must be a uint64: {memo_id}")
        return cls(MemoType.MEMO_ID, memo_id)

    @classmethod
    def hash(cls, memo_hash: Union[bytes, str]) -> Memo:
        return cls(MemoType.MEMO_HASH, cls._hash_bytes(memo_hash))

    @classmethod
    def return_hash(cls, memo_hash: Union[bytes, str]) -> Memo:
        return cls(MemoType.MEMO_RETURN, cls._hash_bytes(memo_hash))

    @staticmethod
    def _hash_bytes(value: Union[bytes, str]) -> bytes:
        raw = bytes.fromhex(value) if isinstance(value, str) else bytes(value)
        if len(raw) != 32:
            raise InvalidArgumentError(f"memo hash must be 32 bytes, got {len(raw)}")
        return raw

    @property
    def text_value(self) -> Optional[str]:
        """Decoded text of a text memo, or None for other memo types."""
        if self.type != MemoType.MEMO_TEXT:
            return None
        return self.value.decode("utf-8", errors="replace")

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.uint32(self.type)
        if self.type == MemoType.MEMO_TEXT:
            writer.var_opaque(self.value, MEMO_TEXT_MAX_LENGTH)
        elif self.type == MemoType.MEMO_ID:
            writer.uint64(self.value)
        elif self.type in (MemoType.MEMO_HASH, MemoType.MEMO_RETURN):
            writer.fixed_opaque(self.value, 32)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Memo:
        discriminant = reader.uint32()
        if discriminant == MemoType.MEMO_NONE:
            return cls.none()
        elif discriminant == MemoType.MEMO_TEXT:
            # kept as bytes: the network does not require valid UTF-8
            return cls(MemoType.MEMO_TEXT, reader.var_opaque(MEMO_TEXT_MAX_LENGTH))
        elif discriminant == MemoType.MEMO_ID:
            return cls(MemoType.MEMO_ID, reader.uint64())
        elif discriminant == MemoType.MEMO_HASH:
            return cls(MemoType.MEMO_HASH, reader.fixed_opaque(32))
        elif discriminant == MemoType.MEMO_RETURN:
            return cls(MemoType.MEMO_RETURN, reader.fixed_opaque(32))
        raise UnmarshalError(f"unknown memo type: {discriminant}")

    def encode(self) -> bytes:
        writer = XdrWriter()
        self.write_xdr(writer)
        return writer.to_bytes()

    @classmethod
    def decode(cls, data: bytes) -> Memo:
        reader = XdrReader(data)
        memo = cls.read_xdr(reader)
        reader.expect_eof()
        return memo

    def __eq__(self, other) -> bool:
        if not isinstance(other, Memo):
            return False
        return self.type == other.type and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.type, self.value))

    def __repr__(self) -> str:
        return f"Memo({self.type.name}, {self.value!r})"
