"""
Stellar operations.

Importing this package registers every concrete operation for decoding.
"""

from .assets import Asset, AssetType, Price
from .base import (
    Operation,
    OperationType,
    get_operation_class,
    list_registered_operations,
    register_operation,
)
from .bump_sequence import BumpSequenceOperation
from .manage_buy_offer import ManageBuyOfferOperation

__all__ = [
    "Asset",
    "AssetType",
    "Price",
    "Operation",
    "OperationType",
    "get_operation_class",
    "list_registered_operations",
    "register_operation",
    "BumpSequenceOperation",
    "ManageBuyOfferOperation",
]
