"""
Fee bump transactions.

A fee bump wraps an already signed v1 transaction and pays a new, higher fee
from a separate fee account without touching the inner operations.
"""

from __future__ import annotations
from typing import Optional, Union
import logging

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..network import Network
from ..runtime.account_id import AccountId
from ..runtime.errors import (
    AlreadySetError,
    FeeOverflowError,
    InvalidArgumentError,
    MissingFieldError,
    UnmarshalError,
)
from .account import MuxedAccount
from .envelope import EnvelopeType, TransactionEnvelope
from .signatures import read_signatures, write_signatures
from .transaction import MIN_BASE_FEE, AbstractTransaction, Transaction, _read_ext

logger = logging.getLogger(__name__)

INT64_MAX = 2**63 - 1


class FeeBumpTransaction(AbstractTransaction):
    """
    Fee bump transaction around a v1 inner transaction.

    Args:
        fee_account: Account paying the fee
        fee: Maximum total fee in stroops, int64
        inner_transaction: Signed transaction in the v1 envelope shape
    """

    def __init__(self, fee_account: Union[str, AccountId, MuxedAccount], fee: int,
                 inner_transaction: Transaction):
        if inner_transaction is None:
            raise InvalidArgumentError("inner transaction cannot be None")
        super().__init__(inner_transaction.network)
        if fee_account is None:
            raise InvalidArgumentError("feeAccount cannot be None")
        if fee is None:
            raise InvalidArgumentError("fee cannot be None")
        if inner_transaction.envelope_type != EnvelopeType.ENVELOPE_TYPE_TX:
            raise InvalidArgumentError("fee bump inner transaction must use the v1 envelope")
        if fee < inner_transaction.fee:
            raise InvalidArgumentError(
                f"fee bump fee {fee} is lower than the inner transaction fee {inner_transaction.fee}"
            )

        self._fee_account = MuxedAccount.parse(fee_account)
        self._fee = fee
        self._inner = inner_transaction

    @staticmethod
    def builder(inner_transaction: Transaction) -> FeeBumpTransactionBuilder:
        return FeeBumpTransactionBuilder(inner_transaction)

    @property
    def fee(self) -> int:
        return self._fee

    @property
    def fee_account(self) -> str:
        return self._fee_account.account_id

    @property
    def fee_muxed_account(self) -> MuxedAccount:
        return self._fee_account

    @property
    def inner_transaction(self) -> Transaction:
        return self._inner

    def signature_base(self) -> bytes:
        """
        Bytes hashed to produce the fee bump hash. The inner transaction
        is embedded as a signed envelope.

        Raises:
            UnsignedTransactionError: If the inner transaction has no signature
            EncodingError: If any part of the body cannot be encoded
        """
        return self._build_signature_base(EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP, self.write_xdr)

    def write_xdr(self, writer: XdrWriter) -> None:
        """
        Encode the ``FeeBumpTransaction`` body.

        Raises:
            UnsignedTransactionError: If the inner transaction has no signature
        """
        inner_envelope = self._inner.to_envelope_xdr()
        self._fee_account.write_xdr(writer)
        writer.int64(self._fee)
        # innerTx union, only the v1 arm exists
        writer.uint32(EnvelopeType.ENVELOPE_TYPE_TX)
        inner_envelope.transaction.write_v1_envelope(writer)
        # ext
        writer.uint32(0)

    def to_xdr(self) -> bytes:
        writer = XdrWriter()
        self.write_xdr(writer)
        return writer.to_bytes()

    def to_envelope_xdr(self) -> TransactionEnvelope:
        return TransactionEnvelope(EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP, self)

    def write_envelope(self, writer: XdrWriter) -> None:
        self.write_xdr(writer)
        write_signatures(writer, self._signatures)

    @classmethod
    def read_envelope(cls, reader: XdrReader, network: Network) -> FeeBumpTransaction:
        fee_account = MuxedAccount.read_xdr(reader)
        fee = reader.int64()
        inner_type = reader.uint32()
        if inner_type != EnvelopeType.ENVELOPE_TYPE_TX:
            raise UnmarshalError(f"fee bump inner transaction must be ENVELOPE_TYPE_TX, got {inner_type}")
        inner = Transaction.read_v1_envelope(reader, network)
        _read_ext(reader)
        fee_bump = cls(fee_account, fee, inner)
        fee_bump._signatures.extend(read_signatures(reader))
        return fee_bump

    @classmethod
    def from_fee_bump_transaction_envelope(cls, data: bytes, network: Network) -> FeeBumpTransaction:
        """Create a FeeBumpTransaction from an encoded ``FeeBumpTransactionEnvelope``."""
        reader = XdrReader(data)
        fee_bump = cls.read_envelope(reader, network)
        reader.expect_eof()
        return fee_bump

    def __eq__(self, other) -> bool:
        if not isinstance(other, FeeBumpTransaction):
            return False
        return (self._fee_account == other._fee_account
                and self._fee == other._fee
                and self._inner == other._inner
                and self._signatures == other._signatures)

    def __repr__(self) -> str:
        return (f"FeeBumpTransaction(fee_account={self.fee_account}, fee={self._fee}, "
                f"inner={self._inner!r}, signatures={len(self._signatures)})")


def _round_half_up_div(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


class FeeBumpTransactionBuilder:
    """
    Builds a FeeBumpTransaction.

    A v0-shaped inner transaction is first rebuilt in the v1 shape with its
    signatures copied over; the v0 and v1 shapes share a signature base, so
    those signatures stay valid.
    """

    def __init__(self, inner: Transaction):
        if inner is None:
            raise InvalidArgumentError("inner cannot be None")
        if inner.envelope_type == EnvelopeType.ENVELOPE_TYPE_TX_V0:
            upgraded = Transaction(
                inner.source_muxed_account,
                inner.fee,
                inner.sequence_number,
                inner.operations,
                inner.memo,
                inner.time_bounds,
                inner.network,
                EnvelopeType.ENVELOPE_TYPE_TX,
            )
            for signature in inner.signatures:
                upgraded.add_signature(signature)
            logger.debug(f"Upgraded v0 inner transaction to v1 with {len(inner.signatures)} signature(s)")
            self._inner = upgraded
        else:
            self._inner = inner
        self._max_fee: Optional[int] = None
        self._fee_account: Optional[MuxedAccount] = None

    @property
    def inner_transaction(self) -> Transaction:
        return self._inner

    def set_base_fee(self, base_fee: int) -> FeeBumpTransactionBuilder:
        """
        Set the per-operation fee; the total is ``base_fee * (ops + 1)``.

        Raises:
            AlreadySetError: If the base fee was already set
            InvalidArgumentError: If ``base_fee`` is below MIN_BASE_FEE or
                below the inner transaction's per-operation fee
            FeeOverflowError: If the total does not fit int64
        """
        if self._max_fee is not None:
            raise AlreadySetError("base fee has been already set.")
        if base_fee < MIN_BASE_FEE:
            raise InvalidArgumentError(
                f"baseFee cannot be smaller than the BASE_FEE ({MIN_BASE_FEE}): {base_fee}"
            )

        num_operations = len(self._inner.operations)
        inner_base_fee = self._inner.fee
        if num_operations > 0:
            inner_base_fee = _round_half_up_div(inner_base_fee, num_operations)

        if base_fee < inner_base_fee:
            raise InvalidArgumentError(
                "base fee cannot be lower than provided inner transaction base fee",
                details={"base_fee": base_fee, "inner_base_fee": inner_base_fee},
            )

        max_fee = base_fee * (num_operations + 1)
        if max_fee > INT64_MAX:
            raise FeeOverflowError(details={"base_fee": base_fee, "operations": num_operations})

        self._max_fee = max_fee
        return self

    def set_fee_account(self, fee_account: Union[str, AccountId, MuxedAccount]) -> FeeBumpTransactionBuilder:
        """
        Raises:
            AlreadySetError: If the fee account was already set
        """
        if self._fee_account is not None:
            raise AlreadySetError("fee account has been already been set.")
        if fee_account is None:
            raise InvalidArgumentError("feeAccount cannot be None")
        self._fee_account = MuxedAccount.parse(fee_account)
        return self

    def build(self) -> FeeBumpTransaction:
        """
        Raises:
            MissingFieldError: If the fee account or base fee was never set
        """
        if self._fee_account is None:
            raise MissingFieldError("fee account has to be set. you must call set_fee_account().")
        if self._max_fee is None:
            raise MissingFieldError("base fee has to be set. you must call set_base_fee().")
        return FeeBumpTransaction(self._fee_account, self._max_fee, self._inner)
