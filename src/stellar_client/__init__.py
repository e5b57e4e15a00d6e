"""
Stellar Python Client - transaction envelope core

Builds, signs, hashes and (de)serializes Stellar transactions and fee bump
transactions in their XDR envelope forms.
"""

from .network import Network
from .runtime.errors import *  # noqa: F401,F403
from .runtime.account_id import AccountId
from .crypto import KeyPair, StrKeyError
from .signers import Signer, SignerError
from .operations import *  # noqa: F401,F403
from .tx import *  # noqa: F401,F403

__version__ = "0.1.0"
__all__ = [
    "Network",
    "AccountId",
    "KeyPair",
    "StrKeyError",
    "Signer",
    "SignerError",
    # Errors
    "ErrorCode",
    "StellarError",
    "InvalidArgumentError",
    "FeeOverflowError",
    "AlreadySetError",
    "MissingFieldError",
    "EmptyOperationListError",
    "UnsignedTransactionError",
    "EncodingError",
    "MarshalError",
    "UnmarshalError",
    "UnsupportedEnvelopeTypeError",
    # Operations
    "Asset",
    "AssetType",
    "Price",
    "Operation",
    "OperationType",
    "register_operation",
    "BumpSequenceOperation",
    "ManageBuyOfferOperation",
    # Transactions
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
