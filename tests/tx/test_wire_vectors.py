"""
Known-answer tests pinning envelope bytes and hashes to the Stellar wire format.

Expected encodings are spelled out as hex literals, independent of the XDR
writer and reader. The signing key is RFC 8032 test vector 1, whose public
key is fixed, and Ed25519 signatures are deterministic.
"""

import base64
import hashlib

import pytest

from stellar_client.crypto import KeyPair
from stellar_client.network import Network
from stellar_client.operations import BumpSequenceOperation
from stellar_client.tx import (
    AbstractTransaction,
    EnvelopeType,
    FeeBumpTransaction,
    Memo,
    MuxedAccount,
    TimeBounds,
    Transaction,
)

RFC8032_SEED = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
RFC8032_PUBLIC_KEY = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
TESTNET_NETWORK_ID = "cee0302d59844d32bdca915c8203dd44b33fbb7edc19051ea37abedf28ecd472"

PREIMAGE = b"stellar"

# fee 200, seq 2^32 + 1, time bounds (1, 2), memo text "hi", one BumpSequence(7), ext 0
TX_TAIL = (
    "000000c8"
    "0000000100000001"
    "00000001" "0000000000000001" "0000000000000002"
    "00000001" "00000002" "68690000"
    "00000001" "00000000" "0000000b" "0000000000000007"
    "00000000"
)
V1_BODY = "00000000" + RFC8032_PUBLIC_KEY + TX_TAIL
V0_BODY = RFC8032_PUBLIC_KEY + TX_TAIL


@pytest.fixture
def vector_key():
    return KeyPair.from_raw_seed(bytes.fromhex(RFC8032_SEED))


@pytest.fixture
def vector_transaction(vector_key):
    def _make(envelope_type=EnvelopeType.ENVELOPE_TYPE_TX):
        return Transaction(
            vector_key.account_id, 200, 2**32 + 1, [BumpSequenceOperation(7)],
            Memo.text("hi"), TimeBounds(1, 2), Network.testnet(), envelope_type,
        )
    return _make


def _key_signature(key, tx_hash):
    return bytes.fromhex("f707511a") + bytes.fromhex("00000040") + key.sign(tx_hash)


def _preimage_signature():
    hint = hashlib.sha256(PREIMAGE).digest()[-4:]
    return hint + bytes.fromhex("00000007") + PREIMAGE + b"\x00"


class TestFixedInputs:
    """The constants the vectors below are built from."""

    def test_rfc8032_public_key(self, vector_key):
        assert vector_key.get_public_key().hex() == RFC8032_PUBLIC_KEY

    def test_rfc8032_signature_of_empty_message(self, vector_key):
        assert vector_key.sign(b"").hex() == (
            "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e06522490155"
            "5fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
        )

    def test_testnet_network_id(self):
        assert Network.testnet().network_id.hex() == TESTNET_NETWORK_ID

    def test_public_network_id(self):
        assert Network.public().network_id.hex() == (
            "7ac33997544e3175d266bd022439b22cdb16508c01163f26e5cb2a3e1045a979"
        )


class TestV1Vector:
    """v1 transaction with memo, time bounds, a key and a preimage signature."""

    def test_body_and_hash(self, vector_transaction):
        transaction = vector_transaction()
        expected_base = bytes.fromhex(TESTNET_NETWORK_ID + "00000002" + V1_BODY)
        assert transaction.to_xdr().hex() == V1_BODY
        assert transaction.signature_base() == expected_base
        assert transaction.hash_hex() == hashlib.sha256(expected_base).hexdigest()

    def test_envelope(self, vector_transaction, vector_key):
        transaction = vector_transaction()
        tx_hash = hashlib.sha256(bytes.fromhex(TESTNET_NETWORK_ID + "00000002" + V1_BODY)).digest()
        transaction.sign(vector_key)
        transaction.sign_hash(PREIMAGE)

        expected = (bytes.fromhex("00000002" + V1_BODY + "00000002")
                    + _key_signature(vector_key, tx_hash)
                    + _preimage_signature())
        assert transaction.to_envelope_xdr().to_xdr() == expected
        assert transaction.to_envelope_xdr_base64() == base64.b64encode(expected).decode("ascii")

        decoded = AbstractTransaction.from_envelope_xdr(expected, Network.testnet())
        assert decoded.hash() == tx_hash
        assert decoded.to_envelope_xdr().to_xdr() == expected


class TestV0Vector:
    """Legacy v0 envelope of the same transaction."""

    def test_envelope(self, vector_transaction, vector_key):
        transaction = vector_transaction(EnvelopeType.ENVELOPE_TYPE_TX_V0)
        # v0 signs the v1 signature base
        tx_hash = hashlib.sha256(bytes.fromhex(TESTNET_NETWORK_ID + "00000002" + V1_BODY)).digest()
        assert transaction.to_v0_xdr().hex() == V0_BODY
        assert transaction.hash() == tx_hash

        transaction.sign(vector_key)
        expected = bytes.fromhex("00000000" + V0_BODY + "00000001") + _key_signature(vector_key, tx_hash)
        assert transaction.to_envelope_xdr().to_xdr() == expected

        decoded = AbstractTransaction.from_envelope_xdr_string(base64.b64encode(expected).decode("ascii"),
                                                               Network.testnet())
        assert decoded.envelope_type == EnvelopeType.ENVELOPE_TYPE_TX_V0
        assert decoded.to_envelope_xdr().to_xdr() == expected


class TestFeeBumpVector:
    """Fee bump with a multiplexed fee account around the signed v1 transaction."""

    def test_envelope(self, vector_transaction, vector_key):
        inner = vector_transaction()
        inner_hash = inner.hash()
        inner.sign(vector_key)
        inner_envelope = bytes.fromhex(V1_BODY + "00000001") + _key_signature(vector_key, inner_hash)

        fee_bump = FeeBumpTransaction(MuxedAccount(vector_key.account_id, 5), 400, inner)
        body = (bytes.fromhex("00000100" "0000000000000005" + RFC8032_PUBLIC_KEY
                              + "0000000000000190" "00000002")
                + inner_envelope
                + bytes.fromhex("00000000"))
        expected_base = bytes.fromhex(TESTNET_NETWORK_ID + "00000005") + body
        assert fee_bump.signature_base() == expected_base
        fee_hash = hashlib.sha256(expected_base).digest()
        assert fee_bump.hash() == fee_hash

        fee_bump.sign(vector_key)
        expected = (bytes.fromhex("00000005") + body + bytes.fromhex("00000001")
                    + _key_signature(vector_key, fee_hash))
        assert fee_bump.to_envelope_xdr().to_xdr() == expected
        assert fee_bump.to_envelope_xdr_base64() == base64.b64encode(expected).decode("ascii")

        decoded = AbstractTransaction.from_envelope_xdr(expected, Network.testnet())
        assert isinstance(decoded, FeeBumpTransaction)
        assert decoded.hash() == fee_hash
