"""
Transaction layer: transactions, fee bumps, builders and envelopes.
"""

from .account import Account, MuxedAccount, TransactionBuilderAccount
from .builder import TransactionBuilder
from .envelope import EnvelopeType, TransactionEnvelope
from .fee_bump import FeeBumpTransaction, FeeBumpTransactionBuilder
from .memo import Memo, MemoType
from .signatures import DecoratedSignature
from .time_bounds import TimeBounds
from .transaction import MIN_BASE_FEE, AbstractTransaction, Transaction

__all__ = [
    "Account",
    "MuxedAccount",
    "TransactionBuilderAccount",
    "TransactionBuilder",
    "EnvelopeType",
    "TransactionEnvelope",
    "FeeBumpTransaction",
    "FeeBumpTransactionBuilder",
    "Memo",
    "MemoType",
    "DecoratedSignature",
    "TimeBounds",
    "MIN_BASE_FEE",
    "AbstractTransaction",
    "Transaction",
]
