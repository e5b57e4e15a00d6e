"""
Transaction builder.

Collects operations, an optional memo and optional time bounds for a source
account, then builds a Transaction that consumes the account's next sequence
number.
"""

from __future__ import annotations
from typing import List, Optional
import logging

from ..network import Network
from ..operations.base import Operation
from ..runtime.errors import AlreadySetError, EmptyOperationListError, InvalidArgumentError
from .account import TransactionBuilderAccount
from .memo import Memo
from .time_bounds import TimeBounds
from .transaction import MIN_BASE_FEE, Transaction

logger = logging.getLogger(__name__)


class TransactionBuilder:
    """
    Builds a v1 Transaction for a source account.

    ``build()`` reads ``account.incremented_sequence_number`` for the new
    transaction and advances the account's counter only once the transaction
    was constructed, so a failed build never consumes a sequence number.
    """

    def __init__(self, source_account: TransactionBuilderAccount, network: Network):
        """
        Initialize transaction builder.

        Args:
            source_account: Account whose sequence number the transaction consumes
            network: Network the transaction is built for
        """
        if source_account is None:
            raise InvalidArgumentError("sourceAccount cannot be None")
        if network is None:
            raise InvalidArgumentError("Network cannot be None")
        self._source_account = source_account
        self._network = network
        self._operations: List[Operation] = []
        self._memo: Optional[Memo] = None
        self._time_bounds: Optional[TimeBounds] = None

    @property
    def operations_count(self) -> int:
        return len(self._operations)

    def add_operation(self, operation: Operation) -> TransactionBuilder:
        """
        Append an operation.

        Args:
            operation: Operation to append

        Returns:
            Self for method chaining
        """
        if operation is None:
            raise InvalidArgumentError("operation cannot be None")
        self._operations.append(operation)
        return self

    def add_memo(self, memo: Memo) -> TransactionBuilder:
        """
        Raises:
            AlreadySetError: If a memo was already added
        """
        if self._memo is not None:
            raise AlreadySetError("Memo has been already added.")
        if memo is None:
            raise InvalidArgumentError("memo cannot be None")
        self._memo = memo
        return self

    def add_time_bounds(self, time_bounds: TimeBounds) -> TransactionBuilder:
        """
        Raises:
            AlreadySetError: If time bounds were already added
        """
        if self._time_bounds is not None:
            raise AlreadySetError("TimeBounds has been already added.")
        if time_bounds is None:
            raise InvalidArgumentError("timeBounds cannot be None")
        self._time_bounds = time_bounds
        return self

    def set_timeout(self, timeout: int) -> TransactionBuilder:
        """
        Add time bounds that expire ``timeout`` seconds from now.

        Raises:
            AlreadySetError: If time bounds were already added
            InvalidArgumentError: If ``timeout`` is negative
        """
        if timeout < 0:
            raise InvalidArgumentError(f"timeout cannot be negative: {timeout}")
        return self.add_time_bounds(TimeBounds.expires_after(timeout))

    def build(self) -> Transaction:
        """
        Build the transaction and advance the source account's sequence number.

        Returns:
            Unsigned Transaction with ``fee = len(operations) * MIN_BASE_FEE``

        Raises:
            EmptyOperationListError: If no operation was added
        """
        if not self._operations:
            raise EmptyOperationListError()

        fee = len(self._operations) * MIN_BASE_FEE
        sequence_number = self._source_account.incremented_sequence_number
        transaction = Transaction(
            self._source_account.account_id,
            fee,
            sequence_number,
            self._operations,
            self._memo,
            self._time_bounds,
            self._network,
        )
        # only a successfully constructed transaction consumes the sequence number
        self._source_account.increment_sequence_number()
        logger.debug(f"Built transaction for {transaction.source_account} with seq={sequence_number}, "
                     f"{len(self._operations)} operation(s), fee={fee}")
        return transaction
