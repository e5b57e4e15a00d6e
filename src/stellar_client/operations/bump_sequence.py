"""
BumpSequence operation: raises the source account's sequence number.
"""

from __future__ import annotations

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from .base import Operation, OperationType, register_operation


@register_operation
class BumpSequenceOperation(Operation):
    """Bumps the source account sequence number to ``bump_to``."""

    TYPE = OperationType.BUMP_SEQUENCE

    def __init__(self, bump_to: int, source_account=None):
        super().__init__(source_account)
        self.bump_to = bump_to

    def write_body(self, writer: XdrWriter) -> None:
        writer.int64(self.bump_to)

    @classmethod
    def read_body(cls, reader: XdrReader) -> BumpSequenceOperation:
        return cls(reader.int64())

    def __repr__(self) -> str:
        return f"BumpSequenceOperation(bump_to={self.bump_to})"
