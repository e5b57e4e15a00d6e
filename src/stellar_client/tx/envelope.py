"""
Transaction envelope tagged union.

A TransactionEnvelope is a uint32 EnvelopeType discriminant followed by the
matching envelope: v0 (legacy), v1 (current) or fee bump. Decoding matches
the tag explicitly; every other discriminant is rejected.
"""

from __future__ import annotations
import base64
import binascii
import logging
from enum import IntEnum
from typing import TYPE_CHECKING, Union

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..network import Network
from ..runtime.errors import UnmarshalError, UnsupportedEnvelopeTypeError

if TYPE_CHECKING:
    from .fee_bump import FeeBumpTransaction
    from .transaction import Transaction

logger = logging.getLogger(__name__)


class EnvelopeType(IntEnum):
    """XDR EnvelopeType discriminants."""

    ENVELOPE_TYPE_TX_V0 = 0
    ENVELOPE_TYPE_SCP = 1
    ENVELOPE_TYPE_TX = 2
    ENVELOPE_TYPE_AUTH = 3
    ENVELOPE_TYPE_SCPVALUE = 4
    ENVELOPE_TYPE_TX_FEE_BUMP = 5
    ENVELOPE_TYPE_OP_ID = 6


TRANSACTION_ENVELOPE_TYPES = (
    EnvelopeType.ENVELOPE_TYPE_TX_V0,
    EnvelopeType.ENVELOPE_TYPE_TX,
    EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP,
)


class TransactionEnvelope:
    """
    One envelope variant: the discriminant plus the transaction it carries.

    ``ENVELOPE_TYPE_TX_V0`` and ``ENVELOPE_TYPE_TX`` carry a Transaction,
    ``ENVELOPE_TYPE_TX_FEE_BUMP`` carries a FeeBumpTransaction.
    """

    def __init__(self, envelope_type: EnvelopeType,
                 transaction: Union["Transaction", "FeeBumpTransaction"]):
        if envelope_type not in TRANSACTION_ENVELOPE_TYPES:
            raise UnsupportedEnvelopeTypeError(int(envelope_type))
        self.type = EnvelopeType(envelope_type)
        self.transaction = transaction

    @property
    def discriminant(self) -> EnvelopeType:
        return self.type

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.uint32(self.type)
        if self.type == EnvelopeType.ENVELOPE_TYPE_TX_V0:
            self.transaction.write_v0_envelope(writer)
        elif self.type == EnvelopeType.ENVELOPE_TYPE_TX:
            self.transaction.write_v1_envelope(writer)
        elif self.type == EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP:
            self.transaction.write_envelope(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader, network: Network) -> TransactionEnvelope:
        """
        Decode an envelope, dispatching on its discriminant.

        Raises:
            UnsupportedEnvelopeTypeError: If the discriminant is not a
                transaction envelope type
        """
        # Import here to avoid circular imports
        from .fee_bump import FeeBumpTransaction
        from .transaction import Transaction

        discriminant = reader.uint32()
        if discriminant == EnvelopeType.ENVELOPE_TYPE_TX:
            transaction = Transaction.read_v1_envelope(reader, network)
        elif discriminant == EnvelopeType.ENVELOPE_TYPE_TX_V0:
            transaction = Transaction.read_v0_envelope(reader, network)
        elif discriminant == EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP:
            transaction = FeeBumpTransaction.read_envelope(reader, network)
        else:
            raise UnsupportedEnvelopeTypeError(discriminant)

        logger.debug(f"Decoded {EnvelopeType(discriminant).name} envelope with "
                     f"{len(transaction.signatures)} signature(s)")
        return cls(EnvelopeType(discriminant), transaction)

    def to_xdr(self) -> bytes:
        """Binary encoding of the envelope."""
        writer = XdrWriter()
        self.write_xdr(writer)
        return writer.to_bytes()

    def to_xdr_base64(self) -> str:
        """Base64 transport encoding of the envelope."""
        return base64.b64encode(self.to_xdr()).decode("ascii")

    @classmethod
    def from_xdr(cls, data: bytes, network: Network) -> TransactionEnvelope:
        reader = XdrReader(data)
        envelope = cls.read_xdr(reader, network)
        reader.expect_eof()
        return envelope

    @classmethod
    def from_xdr_base64(cls, envelope: str, network: Network) -> TransactionEnvelope:
        """
        Decode a base64 envelope string.

        Raises:
            UnmarshalError: If the string is not valid base64
        """
        try:
            data = base64.b64decode(envelope, validate=True)
        except (binascii.Error, ValueError) as e:
            raise UnmarshalError("envelope is not valid base64", cause=e) from e
        return cls.from_xdr(data, network)

    def __repr__(self) -> str:
        return f"TransactionEnvelope({self.type.name}, {self.transaction!r})"
