"""
Decorated signatures attached to transaction envelopes.

The order of the signature list is part of the envelope encoding and always
matches the order in which signatures were added.
"""

from __future__ import annotations
from typing import Any, Dict, List, Sequence

from ..codec.hashes import SIGNATURE_HINT_LENGTH
from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import InvalidArgumentError

MAX_SIGNATURE_LENGTH = 64
MAX_SIGNATURES = 20


class DecoratedSignature:
    """
    A (hint, signature) pair.

    ``hint`` is 4 bytes identifying the signing key (or preimage hash);
    ``signature`` is at most 64 raw bytes.
    """

    __slots__ = ("hint", "signature")

    def __init__(self, hint: bytes, signature: bytes):
        if len(hint) != SIGNATURE_HINT_LENGTH:
            raise InvalidArgumentError(f"signature hint must be {SIGNATURE_HINT_LENGTH} bytes, got {len(hint)}")
        if len(signature) > MAX_SIGNATURE_LENGTH:
            raise InvalidArgumentError(f"signature cannot exceed {MAX_SIGNATURE_LENGTH} bytes, got {len(signature)}")
        self.hint = bytes(hint)
        self.signature = bytes(signature)

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.fixed_opaque(self.hint, SIGNATURE_HINT_LENGTH)
        writer.var_opaque(self.signature, MAX_SIGNATURE_LENGTH)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> DecoratedSignature:
        hint = reader.fixed_opaque(SIGNATURE_HINT_LENGTH)
        signature = reader.var_opaque(MAX_SIGNATURE_LENGTH)
        return cls(hint, signature)

    def to_dict(self) -> Dict[str, Any]:
        return {"hint": self.hint.hex(), "signature": self.signature.hex()}

    def __eq__(self, other) -> bool:
        if not isinstance(other, DecoratedSignature):
            return False
        return self.hint == other.hint and self.signature == other.signature

    def __hash__(self) -> int:
        return hash((self.hint, self.signature))

    def __repr__(self) -> str:
        return f"DecoratedSignature(hint={self.hint.hex()}, signature={self.signature.hex()[:16]}...)"


def write_signatures(writer: XdrWriter, signatures: Sequence[DecoratedSignature]) -> None:
    """Write a ``DecoratedSignature<20>`` array."""
    writer.array(signatures, lambda w, s: s.write_xdr(w), MAX_SIGNATURES)


def read_signatures(reader: XdrReader) -> List[DecoratedSignature]:
    """Read a ``DecoratedSignature<20>`` array, preserving order."""
    return reader.array(DecoratedSignature.read_xdr, MAX_SIGNATURES)
