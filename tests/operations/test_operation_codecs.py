"""
Tests for operation encoding, the operation registry, assets and prices.
"""

from decimal import Decimal

import pytest

from stellar_client.operations import (
    Asset,
    AssetType,
    BumpSequenceOperation,
    ManageBuyOfferOperation,
    Operation,
    OperationType,
    Price,
    get_operation_class,
    list_registered_operations,
)
from stellar_client.runtime.errors import InvalidArgumentError, UnmarshalError


@pytest.fixture
def issuer(fee_keypair):
    return fee_keypair.account_id


class TestRegistry:
    """Tests for the operation type registry."""

    def test_concrete_operations_registered(self):
        registered = list_registered_operations()
        assert OperationType.BUMP_SEQUENCE in registered
        assert OperationType.MANAGE_BUY_OFFER in registered

    def test_lookup(self):
        assert get_operation_class(11) is BumpSequenceOperation
        assert get_operation_class(12) is ManageBuyOfferOperation
        assert get_operation_class(0) is None
        assert get_operation_class(999) is None

    def test_decode_unregistered_type(self):
        # no source account, type PAYMENT
        with pytest.raises(UnmarshalError):
            Operation.decode(b"\x00\x00\x00\x00" + b"\x00\x00\x00\x01")


class TestBumpSequence:
    """Tests for BumpSequenceOperation."""

    def test_layout(self):
        operation = BumpSequenceOperation(5)
        assert operation.encode() == (
            b"\x00\x00\x00\x00"            # no source account
            + b"\x00\x00\x00\x0b"          # BUMP_SEQUENCE
            + (5).to_bytes(8, "big")
        )

    def test_decode_with_source_account(self, keypair):
        operation = BumpSequenceOperation(123, source_account=keypair.account_id)
        decoded = Operation.decode(operation.encode())
        assert isinstance(decoded, BumpSequenceOperation)
        assert decoded.bump_to == 123
        assert decoded.source_account == keypair.account_id
        assert decoded == operation

    def test_decode_as_wrong_subclass(self):
        with pytest.raises(UnmarshalError):
            ManageBuyOfferOperation.decode(BumpSequenceOperation(1).encode())


class TestManageBuyOffer:
    """Tests for ManageBuyOfferOperation."""

    def test_round_trip(self, issuer):
        operation = ManageBuyOfferOperation(
            selling=Asset.native(),
            buying=Asset.credit("USD", issuer),
            amount="12.5",
            price="0.5",
            offer_id=7,
        )
        decoded = Operation.decode(operation.encode())
        assert isinstance(decoded, ManageBuyOfferOperation)
        assert decoded.amount == "12.5000000"
        assert decoded.price == Price(1, 2)
        assert str(decoded.price) == "0.5"
        assert decoded.offer_id == 7
        assert decoded.buying.code == "USD"
        assert decoded.buying.issuer == issuer
        assert decoded.selling.is_native

    def test_decode_negative_amount(self):
        operation = ManageBuyOfferOperation(Asset.native(), Asset.native(), "1", "1")
        data = bytearray(operation.encode())
        # amount follows the optional source, the type tag and two native assets
        data[16:24] = (-1).to_bytes(8, "big", signed=True)
        with pytest.raises(UnmarshalError):
            Operation.decode(bytes(data))

    def test_amount_too_precise(self):
        with pytest.raises(InvalidArgumentError):
            ManageBuyOfferOperation(Asset.native(), Asset.native(), "0.00000001", "1")

    def test_amount_not_a_number(self):
        with pytest.raises(InvalidArgumentError):
            ManageBuyOfferOperation(Asset.native(), Asset.native(), "ten", "1")


class TestAmounts:
    """Tests for stroop conversion."""

    def test_to_xdr_amount(self):
        assert Operation.to_xdr_amount("1") == 10_000_000
        assert Operation.to_xdr_amount("0.0000001") == 1

    def test_from_xdr_amount(self):
        assert Operation.from_xdr_amount(10_000_000) == "1.0000000"

    def test_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            Operation.to_xdr_amount("922337203685.4775808")


class TestAssetsAndPrices:
    """Tests for Asset and Price values."""

    def test_alphanum_arm_selection(self, issuer):
        assert Asset.credit("USD", issuer).type == AssetType.ASSET_TYPE_CREDIT_ALPHANUM4
        assert Asset.credit("LONGCODE", issuer).type == AssetType.ASSET_TYPE_CREDIT_ALPHANUM12

    def test_invalid_code(self, issuer):
        with pytest.raises(InvalidArgumentError):
            Asset.credit("THIRTEENCHARS", issuer)

    @pytest.mark.parametrize("text,n,d", [
        ("1", 1, 1),
        ("1.5", 3, 2),
        ("0.25", 1, 4),
        ("2.2", 11, 5),
    ])
    def test_price_from_string(self, text, n, d):
        assert Price.from_string(text) == Price(n, d)

    def test_price_approximation_fits_int32(self):
        price = Price.from_string("0.333333333333")
        assert price.n <= 2**31 - 1 and price.d <= 2**31 - 1
        assert abs(price.to_decimal() - Decimal("0.333333333333")) < Decimal("1e-9")

    def test_invalid_price(self):
        with pytest.raises(InvalidArgumentError):
            Price.from_string("abc")
        with pytest.raises(InvalidArgumentError):
            Price(1, 0)
