"""
Transactions and their signature base.

A transaction is fixed at construction except for its signature list, which
only grows. Its hash is SHA-256 of the signature base:

    network_id (32 bytes) || uint32 envelope type || XDR body

Any failure while encoding the signature base is raised as EncodingError.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Union
import base64
import logging

from ..codec.hashes import preimage_hint, sha256_bytes
from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..network import Network
from ..operations.base import Operation
from ..runtime.account_id import AccountId
from ..runtime.errors import (
    EmptyOperationListError,
    EncodingError,
    InvalidArgumentError,
    UnmarshalError,
    UnsignedTransactionError,
)
from ..signers.signer import Signer
from .account import MuxedAccount
from .envelope import EnvelopeType, TransactionEnvelope
from .memo import Memo
from .signatures import DecoratedSignature, read_signatures, write_signatures
from .time_bounds import TimeBounds

logger = logging.getLogger(__name__)

MIN_BASE_FEE = 100
MAX_OPERATIONS = 100


def _write_operation(writer: XdrWriter, operation: Operation) -> None:
    operation.write_xdr(writer)


def _read_ext(reader: XdrReader) -> None:
    ext = reader.uint32()
    if ext != 0:
        raise UnmarshalError(f"unsupported extension version: {ext}")


class AbstractTransaction(ABC):
    """
    State and behaviour shared by Transaction and FeeBumpTransaction:
    the network, the ordered signature list, hashing and signing.
    """

    MIN_BASE_FEE = MIN_BASE_FEE

    def __init__(self, network: Network):
        if network is None:
            raise InvalidArgumentError("network cannot be None")
        self._network = network
        self._signatures: List[DecoratedSignature] = []

    @property
    def network(self) -> Network:
        return self._network

    @property
    def signatures(self) -> List[DecoratedSignature]:
        """Attached signatures in the order they were added (a copy)."""
        return list(self._signatures)

    @abstractmethod
    def signature_base(self) -> bytes:
        """
        Bytes that are hashed to produce the transaction hash.

        Raises:
            EncodingError: If any part of the body cannot be encoded
        """
        pass

    @abstractmethod
    def to_envelope_xdr(self) -> TransactionEnvelope:
        pass

    def _build_signature_base(self, envelope_type: EnvelopeType,
                              write_body: Callable[[XdrWriter], None]) -> bytes:
        try:
            writer = XdrWriter()
            # Hashed NetworkID
            writer.raw(self._network.network_id)
            # Envelope Type - 4 bytes
            writer.uint32(envelope_type)
            # Transaction XDR bytes
            write_body(writer)
            return writer.to_bytes()
        except EncodingError:
            raise
        except (ValueError, TypeError, AttributeError) as e:
            raise EncodingError(f"failed to encode signature base: {e}", cause=e) from e

    def hash(self) -> bytes:
        """Transaction hash: SHA-256 of the signature base."""
        return sha256_bytes(self.signature_base())

    def hash_hex(self) -> str:
        """Transaction hash as lowercase hex, the transaction's public identifier."""
        return self.hash().hex()

    def sign(self, signer: Signer) -> None:
        """
        Sign the transaction hash with ``signer`` and append the signature.

        Args:
            signer: Signing capability, usually a KeyPair with a secret key
        """
        if signer is None:
            raise InvalidArgumentError("signer cannot be None")
        tx_hash = self.hash()
        signature = DecoratedSignature(signer.get_signature_hint(), signer.sign(tx_hash))
        self._signatures.append(signature)
        logger.debug(f"Added signature {len(self._signatures)} with hint {signature.hint.hex()} "
                     f"to transaction {tx_hash.hex()[:16]}...")

    def sign_hash(self, preimage: bytes) -> None:
        """
        Authorize with a hash preimage: the preimage itself is the signature
        and its hint is the tail of SHA-256(preimage).
        """
        if preimage is None:
            raise InvalidArgumentError("preimage cannot be None")
        self._signatures.append(DecoratedSignature(preimage_hint(preimage), preimage))

    def add_signature(self, signature: DecoratedSignature) -> None:
        """Append an externally produced signature."""
        if signature is None:
            raise InvalidArgumentError("signature cannot be None")
        self._signatures.append(signature)

    def to_envelope_xdr_base64(self) -> str:
        """
        Base64-encoded TransactionEnvelope of this transaction.
        """
        return base64.b64encode(self.to_envelope_xdr().to_xdr()).decode("ascii")

    @staticmethod
    def from_envelope_xdr(envelope: Union[TransactionEnvelope, bytes],
                          network: Network) -> AbstractTransaction:
        """
        Reconstruct a typed transaction from an envelope.

        Args:
            envelope: Decoded TransactionEnvelope or its binary encoding
            network: Network the transaction belongs to

        Returns:
            Transaction for v0/v1 envelopes, FeeBumpTransaction for fee bumps

        Raises:
            UnsupportedEnvelopeTypeError: On any other discriminant
        """
        if isinstance(envelope, TransactionEnvelope):
            return envelope.transaction
        return TransactionEnvelope.from_xdr(envelope, network).transaction

    @staticmethod
    def from_envelope_xdr_string(envelope: str, network: Network) -> AbstractTransaction:
        """Reconstruct a typed transaction from a base64 envelope string."""
        return TransactionEnvelope.from_xdr_base64(envelope, network).transaction


class Transaction(AbstractTransaction):
    """
    A transaction: source account, fee, sequence number, operations, memo
    and optional time bounds.

    ``envelope_type`` records whether the transaction travels in a legacy v0
    envelope or a current v1 envelope. Both shapes sign the same v1
    signature base.
    """

    def __init__(self, source_account: Union[str, AccountId, MuxedAccount], fee: int,
                 sequence_number: int, operations: Sequence[Operation],
                 memo: Optional[Memo] = None, time_bounds: Optional[TimeBounds] = None,
                 network: Optional[Network] = None,
                 envelope_type: EnvelopeType = EnvelopeType.ENVELOPE_TYPE_TX):
        super().__init__(network)
        if source_account is None:
            raise InvalidArgumentError("sourceAccount cannot be None")
        if sequence_number is None:
            raise InvalidArgumentError("sequenceNumber cannot be None")
        if operations is None:
            raise InvalidArgumentError("operations cannot be None")
        if len(operations) == 0:
            raise EmptyOperationListError()
        if len(operations) > MAX_OPERATIONS:
            raise InvalidArgumentError(
                f"a transaction holds at most {MAX_OPERATIONS} operations, got {len(operations)}"
            )
        if envelope_type not in (EnvelopeType.ENVELOPE_TYPE_TX_V0, EnvelopeType.ENVELOPE_TYPE_TX):
            raise InvalidArgumentError(f"invalid envelope type for a transaction: {envelope_type}")

        self._source_account = MuxedAccount.parse(source_account)
        if envelope_type == EnvelopeType.ENVELOPE_TYPE_TX_V0 and self._source_account.id is not None:
            raise InvalidArgumentError("v0 transactions cannot have a multiplexed source account")
        self._fee = fee
        self._sequence_number = sequence_number
        self._operations = tuple(operations)
        self._memo = memo if memo is not None else Memo.none()
        self._time_bounds = time_bounds
        self._envelope_type = EnvelopeType(envelope_type)

    @staticmethod
    def builder(source_account, network: Network):
        """Create a TransactionBuilder for ``source_account``."""
        # Import here to avoid circular imports
        from .builder import TransactionBuilder
        return TransactionBuilder(source_account, network)

    @property
    def source_account(self) -> str:
        return self._source_account.account_id

    @property
    def source_muxed_account(self) -> MuxedAccount:
        return self._source_account

    @property
    def fee(self) -> int:
        """Fee paid for this transaction in stroops (1 stroop = 0.0000001 XLM)."""
        return self._fee

    @property
    def sequence_number(self) -> int:
        return self._sequence_number

    @property
    def operations(self) -> List[Operation]:
        return list(self._operations)

    @property
    def memo(self) -> Memo:
        return self._memo

    @property
    def time_bounds(self) -> Optional[TimeBounds]:
        """Time bounds, or None when the transaction has no time restriction."""
        return self._time_bounds

    @property
    def envelope_type(self) -> EnvelopeType:
        return self._envelope_type

    def signature_base(self) -> bytes:
        return self._build_signature_base(EnvelopeType.ENVELOPE_TYPE_TX, self.write_xdr)

    def _write_tail(self, writer: XdrWriter) -> None:
        writer.uint32(self._fee)
        writer.int64(self._sequence_number)
        writer.optional(self._time_bounds, lambda w, tb: tb.write_xdr(w))
        self._memo.write_xdr(writer)
        writer.array(self._operations, _write_operation, MAX_OPERATIONS)
        # ext
        writer.uint32(0)

    def write_xdr(self, writer: XdrWriter) -> None:
        """Encode the v1 ``Transaction`` body."""
        self._source_account.write_xdr(writer)
        self._write_tail(writer)

    def write_v0_xdr(self, writer: XdrWriter) -> None:
        """Encode the legacy ``TransactionV0`` body (plain Ed25519 source)."""
        writer.fixed_opaque(self._source_account.ed25519, 32)
        self._write_tail(writer)

    def to_xdr(self) -> bytes:
        """Canonical v1 body encoding."""
        writer = XdrWriter()
        self.write_xdr(writer)
        return writer.to_bytes()

    def to_v0_xdr(self) -> bytes:
        """Canonical legacy v0 body encoding."""
        writer = XdrWriter()
        self.write_v0_xdr(writer)
        return writer.to_bytes()

    def to_envelope_xdr(self) -> TransactionEnvelope:
        """
        Envelope of this transaction in its own shape (v0 or v1).

        Raises:
            UnsignedTransactionError: If no signature is attached
        """
        if not self._signatures:
            raise UnsignedTransactionError()
        return TransactionEnvelope(self._envelope_type, self)

    def write_v1_envelope(self, writer: XdrWriter) -> None:
        self.write_xdr(writer)
        write_signatures(writer, self._signatures)

    def write_v0_envelope(self, writer: XdrWriter) -> None:
        self.write_v0_xdr(writer)
        write_signatures(writer, self._signatures)

    @classmethod
    def _read_tail(cls, reader: XdrReader, source, network: Network,
                   envelope_type: EnvelopeType) -> Transaction:
        fee = reader.uint32()
        sequence_number = reader.int64()
        time_bounds = TimeBounds.read_optional_xdr(reader)
        memo = Memo.read_xdr(reader)
        operations = reader.array(Operation.read_xdr, MAX_OPERATIONS)
        _read_ext(reader)
        transaction = cls(source, fee, sequence_number, operations, memo, time_bounds,
                          network, envelope_type)
        transaction._signatures.extend(read_signatures(reader))
        return transaction

    @classmethod
    def read_v1_envelope(cls, reader: XdrReader, network: Network) -> Transaction:
        source = MuxedAccount.read_xdr(reader)
        return cls._read_tail(reader, source, network, EnvelopeType.ENVELOPE_TYPE_TX)

    @classmethod
    def read_v0_envelope(cls, reader: XdrReader, network: Network) -> Transaction:
        source = AccountId.from_public_key(reader.fixed_opaque(32))
        return cls._read_tail(reader, source, network, EnvelopeType.ENVELOPE_TYPE_TX_V0)

    @classmethod
    def from_v1_envelope_xdr(cls, data: bytes, network: Network) -> Transaction:
        """Create a Transaction from an encoded ``TransactionV1Envelope``."""
        reader = XdrReader(data)
        transaction = cls.read_v1_envelope(reader, network)
        reader.expect_eof()
        return transaction

    @classmethod
    def from_v0_envelope_xdr(cls, data: bytes, network: Network) -> Transaction:
        """Create a Transaction from an encoded ``TransactionV0Envelope``."""
        reader = XdrReader(data)
        transaction = cls.read_v0_envelope(reader, network)
        reader.expect_eof()
        return transaction

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transaction):
            return False
        return (self._network == other._network
                and self._envelope_type == other._envelope_type
                and self.to_xdr() == other.to_xdr()
                and self._signatures == other._signatures)

    def __repr__(self) -> str:
        return (f"Transaction(source={self.source_account}, fee={self._fee}, "
                f"seq={self._sequence_number}, ops={len(self._operations)}, "
                f"envelope={self._envelope_type.name}, signatures={len(self._signatures)})")
