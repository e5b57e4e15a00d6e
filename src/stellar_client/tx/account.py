"""
Accounts as seen by the transaction layer.

Provides the multiplexed-account wire type and the sequence-number provider
a TransactionBuilder consumes.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, Union
import logging

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..crypto.ed25519 import KeyPair
from ..runtime.account_id import AccountId
from ..runtime.errors import UnmarshalError

logger = logging.getLogger(__name__)

KEY_TYPE_ED25519 = 0
KEY_TYPE_MUXED_ED25519 = 0x100


class MuxedAccount:
    """
    Multiplexed account: an Ed25519 account optionally qualified by a
    64-bit sub-account id.

    Encodes as the Ed25519 variant unless a sub-account id is present.
    """

    def __init__(self, account_id: Union[str, AccountId], id: Optional[int] = None):
        self._account_id = AccountId.parse(account_id)
        self.id = id

    @classmethod
    def parse(cls, value: Union[str, AccountId, "MuxedAccount"]) -> MuxedAccount:
        """Coerce an account id string or AccountId into a MuxedAccount."""
        if isinstance(value, MuxedAccount):
            return value
        return cls(value)

    @property
    def account_id(self) -> str:
        """The underlying ``G...`` account id."""
        return str(self._account_id)

    @property
    def ed25519(self) -> bytes:
        """Raw 32-byte Ed25519 key."""
        return self._account_id.public_key

    def write_xdr(self, writer: XdrWriter) -> None:
        if self.id is None:
            writer.uint32(KEY_TYPE_ED25519)
            writer.fixed_opaque(self.ed25519, 32)
        else:
            writer.uint32(KEY_TYPE_MUXED_ED25519)
            writer.uint64(self.id)
            writer.fixed_opaque(self.ed25519, 32)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> MuxedAccount:
        key_type = reader.uint32()
        if key_type == KEY_TYPE_ED25519:
            return cls(AccountId.from_public_key(reader.fixed_opaque(32)))
        elif key_type == KEY_TYPE_MUXED_ED25519:
            sub_id = reader.uint64()
            return cls(AccountId.from_public_key(reader.fixed_opaque(32)), sub_id)
        raise UnmarshalError(f"unknown crypto key type for muxed account: {key_type}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, MuxedAccount):
            return False
        return self.account_id == other.account_id and self.id == other.id

    def __hash__(self) -> int:
        return hash((self.account_id, self.id))

    def __repr__(self) -> str:
        if self.id is None:
            return f"MuxedAccount('{self.account_id}')"
        return f"MuxedAccount('{self.account_id}', id={self.id})"


def write_account_id(writer: XdrWriter, account_id: str) -> None:
    """Write an XDR ``AccountID`` (a PublicKey union, Ed25519 arm)."""
    writer.uint32(KEY_TYPE_ED25519)
    writer.fixed_opaque(AccountId.parse(account_id).public_key, 32)


def read_account_id(reader: XdrReader) -> str:
    """Read an XDR ``AccountID`` and return its ``G...`` form."""
    key_type = reader.uint32()
    if key_type != KEY_TYPE_ED25519:
        raise UnmarshalError(f"unknown public key type: {key_type}")
    return str(AccountId.from_public_key(reader.fixed_opaque(32)))


class TransactionBuilderAccount(ABC):
    """
    Sequence-number provider bound to a TransactionBuilder.

    The builder reads ``incremented_sequence_number`` for each new
    transaction and calls ``increment_sequence_number()`` only after the
    transaction was constructed. Callers building from the same account on
    several threads must serialize those builds themselves.
    """

    @property
    @abstractmethod
    def account_id(self) -> str:
        pass

    @property
    @abstractmethod
    def sequence_number(self) -> int:
        pass

    @property
    def incremented_sequence_number(self) -> int:
        """The sequence number the next transaction will use."""
        return self.sequence_number + 1

    @abstractmethod
    def increment_sequence_number(self) -> None:
        pass


class Account(TransactionBuilderAccount):
    """
    In-memory account with a locally tracked sequence number.
    """

    def __init__(self, account_id: Union[str, AccountId, KeyPair], sequence_number: int):
        """
        Initialize account.

        Args:
            account_id: ``G...`` account id, AccountId, or the account's KeyPair
            sequence_number: Current sequence number as stored on the ledger
        """
        if isinstance(account_id, KeyPair):
            account_id = account_id.account_id
        self._account_id = AccountId.parse(account_id)
        self._sequence_number = int(sequence_number)

    @property
    def account_id(self) -> str:
        return str(self._account_id)

    @property
    def sequence_number(self) -> int:
        return self._sequence_number

    def increment_sequence_number(self) -> None:
        self._sequence_number += 1
        logger.debug(f"Account {self.account_id} sequence number advanced to {self._sequence_number}")

    def __repr__(self) -> str:
        return f"Account('{self.account_id}', sequence_number={self._sequence_number})"
