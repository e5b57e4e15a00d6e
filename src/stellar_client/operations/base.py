"""
Operation base class and type registry.

Every operation encodes as an optional source account, a uint32 operation
type and a type-specific body. Concrete operations register themselves so
that decoding can dispatch on the type tag.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from enum import IntEnum
from typing import ClassVar, Dict, List, Optional, Type, Union
import logging

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.account_id import AccountId
from ..runtime.errors import InvalidArgumentError, UnmarshalError
from ..tx.account import MuxedAccount

logger = logging.getLogger(__name__)

ONE = Decimal(10_000_000)
INT64_MAX = 2**63 - 1


class OperationType(IntEnum):
    """XDR OperationType discriminants."""

    CREATE_ACCOUNT = 0
    PAYMENT = 1
    PATH_PAYMENT_STRICT_RECEIVE = 2
    MANAGE_SELL_OFFER = 3
    CREATE_PASSIVE_SELL_OFFER = 4
    SET_OPTIONS = 5
    CHANGE_TRUST = 6
    ALLOW_TRUST = 7
    ACCOUNT_MERGE = 8
    INFLATION = 9
    MANAGE_DATA = 10
    BUMP_SEQUENCE = 11
    MANAGE_BUY_OFFER = 12
    PATH_PAYMENT_STRICT_SEND = 13


class Operation(ABC):
    """
    Abstract operation.

    Subclasses set ``TYPE`` and implement the body codec.
    """

    TYPE: ClassVar[OperationType]

    def __init__(self, source_account: Optional[Union[str, AccountId, MuxedAccount]] = None):
        self._source_account = MuxedAccount.parse(source_account) if source_account is not None else None

    @property
    def source_account(self) -> Optional[str]:
        """Operation-level source account id, if set."""
        return self._source_account.account_id if self._source_account is not None else None

    @property
    def source_muxed_account(self) -> Optional[MuxedAccount]:
        return self._source_account

    @abstractmethod
    def write_body(self, writer: XdrWriter) -> None:
        """Encode the type-specific body."""
        pass

    @classmethod
    @abstractmethod
    def read_body(cls, reader: XdrReader) -> Operation:
        """Decode the type-specific body."""
        pass

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.optional(self._source_account, lambda w, a: a.write_xdr(w))
        writer.uint32(self.TYPE)
        self.write_body(writer)

    @staticmethod
    def read_xdr(reader: XdrReader) -> Operation:
        """
        Decode any registered operation.

        Raises:
            UnmarshalError: If the operation type is not registered
        """
        source = reader.optional(MuxedAccount.read_xdr)
        type_value = reader.uint32()
        operation_class = get_operation_class(type_value)
        if operation_class is None:
            raise UnmarshalError(f"unsupported operation type: {type_value}")
        operation = operation_class.read_body(reader)
        operation._source_account = source
        return operation

    def encode(self) -> bytes:
        """Canonical XDR encoding of this operation."""
        writer = XdrWriter()
        self.write_xdr(writer)
        return writer.to_bytes()

    @classmethod
    def decode(cls, data: bytes) -> Operation:
        """Decode a single XDR-encoded operation."""
        reader = XdrReader(data)
        operation = Operation.read_xdr(reader)
        reader.expect_eof()
        if cls is not Operation and not isinstance(operation, cls):
            raise UnmarshalError(f"expected {cls.__name__}, decoded {type(operation).__name__}")
        return operation

    @staticmethod
    def to_xdr_amount(value: str) -> int:
        """
        Convert a decimal amount string to int64 stroops (10^-7 units).

        Raises:
            InvalidArgumentError: If the amount is malformed, has more than
                seven decimal places, or does not fit int64
        """
        try:
            scaled = Decimal(value) * ONE
        except (InvalidOperation, TypeError) as e:
            raise InvalidArgumentError(f"invalid amount: {value!r}", cause=e) from e
        if not scaled.is_finite():
            raise InvalidArgumentError(f"invalid amount: {value!r}")
        if scaled != scaled.to_integral_value():
            raise InvalidArgumentError(f"amount has more than 7 decimal places: {value}")
        result = int(scaled)
        if not 0 <= result <= INT64_MAX:
            raise InvalidArgumentError(f"amount out of range: {value}")
        return result

    @staticmethod
    def from_xdr_amount(value: int) -> str:
        """Convert int64 stroops to a decimal amount string with 7 places."""
        return f"{Decimal(value) / ONE:.7f}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Operation):
            return False
        return self.encode() == other.encode()

    def __hash__(self) -> int:
        return hash(self.encode())


_OPERATION_REGISTRY: Dict[OperationType, Type[Operation]] = {}


def register_operation(operation_class: Type[Operation]) -> Type[Operation]:
    """
    Register an operation class for decoding. Usable as a class decorator.
    """
    _OPERATION_REGISTRY[operation_class.TYPE] = operation_class
    logger.debug(f"Registered operation {operation_class.__name__} for {operation_class.TYPE.name}")
    return operation_class


def get_operation_class(type_value: int) -> Optional[Type[Operation]]:
    """Look up the registered class for an operation type tag."""
    try:
        return _OPERATION_REGISTRY.get(OperationType(type_value))
    except ValueError:
        return None


def list_registered_operations() -> List[OperationType]:
    return list(_OPERATION_REGISTRY.keys())
