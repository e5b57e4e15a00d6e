"""
Tests for StrKey encoding, AccountId and Ed25519 key pairs.
"""

import pytest
from pydantic import BaseModel, ValidationError

from stellar_client.crypto import Ed25519Error, KeyPair, StrKeyError
from stellar_client.crypto import strkey
from stellar_client.runtime.account_id import AccountId


class TestStrKey:
    """Tests for StrKey encode/decode."""

    def test_crc16_xmodem_check_value(self):
        # Standard CRC-16/XMODEM check value
        assert strkey.crc16_xmodem(b"123456789") == 0x31C3

    def test_account_id_prefix(self):
        encoded = strkey.encode_account_id(b"\x00" * 32)
        assert encoded.startswith("G")
        assert len(encoded) == 56
        assert strkey.decode_account_id(encoded) == b"\x00" * 32

    def test_secret_seed_prefix(self):
        encoded = strkey.encode_secret_seed(b"\x01" * 32)
        assert encoded.startswith("S")
        assert strkey.decode_secret_seed(encoded) == b"\x01" * 32

    def test_checksum_mismatch(self):
        encoded = strkey.encode_account_id(b"\x07" * 32)
        # Flip the last character to another valid base32 symbol
        tampered = encoded[:-1] + ("A" if encoded[-1] != "A" else "B")
        with pytest.raises(StrKeyError):
            strkey.decode_account_id(tampered)

    def test_version_mismatch(self):
        seed = strkey.encode_secret_seed(b"\x02" * 32)
        with pytest.raises(StrKeyError):
            strkey.decode_account_id(seed)

    def test_invalid_base32(self):
        with pytest.raises(StrKeyError):
            strkey.decode_account_id("G!!!")

    def test_is_valid_account_id(self):
        assert strkey.is_valid_account_id(strkey.encode_account_id(b"\x03" * 32))
        assert not strkey.is_valid_account_id("GABC")


class TestAccountId:
    """Tests for the AccountId pydantic type."""

    def test_from_public_key(self):
        account_id = AccountId.from_public_key(b"\x05" * 32)
        assert account_id.public_key == b"\x05" * 32
        assert str(account_id).startswith("G")

    def test_equality_with_string(self):
        account_id = AccountId.from_public_key(b"\x05" * 32)
        assert account_id == str(account_id)
        assert AccountId.parse(str(account_id)) == account_id

    def test_rejects_non_g_address(self):
        with pytest.raises(ValueError):
            AccountId(strkey.encode_secret_seed(b"\x05" * 32))

    def test_pydantic_field(self):
        class Holder(BaseModel):
            account: AccountId

        address = str(AccountId.from_public_key(b"\x06" * 32))
        assert Holder(account=address).account == address
        with pytest.raises(ValidationError):
            Holder(account="not-an-account")


class TestKeyPair:
    """Tests for KeyPair signing and serialization."""

    def test_secret_seed_round_trip(self, keypair):
        restored = KeyPair.from_secret_seed(keypair.secret_seed)
        assert restored == keypair
        assert restored.account_id == keypair.account_id

    def test_sign_and_verify(self, keypair):
        digest = b"\x11" * 32
        signature = keypair.sign(digest)
        assert len(signature) == 64
        assert keypair.verify(signature, digest)
        assert not keypair.verify(signature, b"\x12" * 32)

    def test_verify_only_key_cannot_sign(self, keypair):
        public_only = KeyPair.from_account_id(keypair.account_id)
        assert not public_only.can_sign()
        assert public_only.verify(keypair.sign(b"msg"), b"msg")
        with pytest.raises(Ed25519Error):
            public_only.sign(b"msg")

    def test_seed_length(self):
        with pytest.raises(Ed25519Error):
            KeyPair.from_raw_seed(b"\x00" * 31)

    def test_signature_hint(self, keypair):
        """Hint is the last 4 bytes of the XDR public key, i.e. of the raw key."""
        assert keypair.get_public_key_xdr() == b"\x00\x00\x00\x00" + keypair.get_public_key()
        assert keypair.get_signature_hint() == keypair.get_public_key()[-4:]

    def test_random_keys_differ(self):
        assert KeyPair.random() != KeyPair.random()
