"""
ManageBuyOffer operation: creates, updates or deletes an offer to buy a
fixed amount of one asset in exchange for another.
"""

from __future__ import annotations
from typing import Optional, Union

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import InvalidArgumentError, UnmarshalError
from .assets import Asset, Price
from .base import Operation, OperationType, register_operation


@register_operation
class ManageBuyOfferOperation(Operation):
    """
    Offer to buy ``amount`` of ``buying`` paying with ``selling``.

    Args:
        selling: The asset being sold
        buying: The asset being bought
        amount: Amount of ``buying`` to buy, as a decimal string; ``"0"``
            deletes the offer
        price: Price of 1 unit of ``buying`` in terms of ``selling``, as a
            decimal string or Price
        offer_id: 0 creates a new offer; an existing id updates that offer
        source_account: Optional operation source account
    """

    TYPE = OperationType.MANAGE_BUY_OFFER

    def __init__(self, selling: Asset, buying: Asset, amount: str,
                 price: Union[str, Price], offer_id: int = 0,
                 source_account: Optional[str] = None):
        super().__init__(source_account)
        self.selling = selling
        self.buying = buying
        # validates eagerly so a bad amount fails at construction
        self._amount_stroops = Operation.to_xdr_amount(amount)
        self.amount = Operation.from_xdr_amount(self._amount_stroops)
        self.price = price if isinstance(price, Price) else Price.from_string(price)
        self.offer_id = offer_id

    def write_body(self, writer: XdrWriter) -> None:
        self.selling.write_xdr(writer)
        self.buying.write_xdr(writer)
        writer.int64(self._amount_stroops)
        self.price.write_xdr(writer)
        writer.int64(self.offer_id)

    @classmethod
    def read_body(cls, reader: XdrReader) -> ManageBuyOfferOperation:
        selling = Asset.read_xdr(reader)
        buying = Asset.read_xdr(reader)
        amount = Operation.from_xdr_amount(reader.int64())
        price = Price.read_xdr(reader)
        offer_id = reader.int64()
        try:
            return cls(selling, buying, amount, price, offer_id)
        except InvalidArgumentError as e:
            raise UnmarshalError(str(e.message), cause=e) from e

    def __repr__(self) -> str:
        return (f"ManageBuyOfferOperation(selling={self.selling}, buying={self.buying}, "
                f"amount={self.amount}, price={self.price}, offer_id={self.offer_id})")
