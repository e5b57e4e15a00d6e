"""
Tests for the XDR writer/reader pair and hash helpers.
"""

import hashlib

import pytest

from stellar_client.codec import XdrReader, XdrWriter, preimage_hint, sha256_bytes, signature_hint
from stellar_client.runtime.errors import EncodingError, MarshalError, UnmarshalError


class TestXdrWriter:
    """Tests for XdrWriter primitives."""

    def test_integers_are_big_endian(self):
        writer = XdrWriter()
        writer.uint32(1)
        writer.int64(-2)
        assert writer.to_bytes() == b"\x00\x00\x00\x01" + b"\xff" * 7 + b"\xfe"

    def test_uint32_out_of_range(self):
        """Negative and oversized values are marshal errors, not silent wraps."""
        with pytest.raises(MarshalError):
            XdrWriter().uint32(-1)
        with pytest.raises(MarshalError):
            XdrWriter().uint32(2**32)

    def test_int64_overflow(self):
        with pytest.raises(MarshalError):
            XdrWriter().int64(2**63)

    def test_marshal_error_is_encoding_error(self):
        with pytest.raises(EncodingError):
            XdrWriter().uint64(-5)

    def test_var_opaque_is_padded(self):
        writer = XdrWriter()
        writer.var_opaque(b"abcde")
        assert writer.to_bytes() == b"\x00\x00\x00\x05abcde\x00\x00\x00"

    def test_var_opaque_max_size(self):
        with pytest.raises(MarshalError):
            XdrWriter().var_opaque(b"x" * 65, 64)

    def test_fixed_opaque_length_mismatch(self):
        with pytest.raises(MarshalError):
            XdrWriter().fixed_opaque(b"abc", 4)

    def test_optional_flags(self):
        writer = XdrWriter()
        writer.optional(None, lambda w, v: w.uint32(v))
        writer.optional(7, lambda w, v: w.uint32(v))
        assert writer.to_bytes() == b"\x00\x00\x00\x00" + b"\x00\x00\x00\x01" + b"\x00\x00\x00\x07"

    def test_array_max_size(self):
        with pytest.raises(MarshalError):
            XdrWriter().array([1, 2, 3], lambda w, v: w.uint32(v), 2)


class TestXdrReader:
    """Tests for XdrReader decoding and malformed input."""

    def test_reads_what_writer_wrote(self):
        writer = XdrWriter()
        writer.uint32(42)
        writer.int32(-42)
        writer.uint64(2**64 - 1)
        writer.boolean(True)
        writer.string("hello")
        writer.array([1, 2], lambda w, v: w.int64(v))

        reader = XdrReader(writer.to_bytes())
        assert reader.uint32() == 42
        assert reader.int32() == -42
        assert reader.uint64() == 2**64 - 1
        assert reader.boolean() is True
        assert reader.string() == "hello"
        assert reader.array(lambda r: r.int64()) == [1, 2]
        reader.expect_eof()

    def test_truncated_input(self):
        with pytest.raises(UnmarshalError):
            XdrReader(b"\x00\x00").uint32()

    def test_invalid_boolean(self):
        with pytest.raises(UnmarshalError):
            XdrReader(b"\x00\x00\x00\x02").boolean()

    def test_non_zero_padding(self):
        with pytest.raises(UnmarshalError):
            XdrReader(b"\x00\x00\x00\x01a\x00\x01\x00").var_opaque()

    def test_declared_length_above_max(self):
        with pytest.raises(UnmarshalError):
            XdrReader(b"\x00\x00\x00\x05abcde\x00\x00\x00").var_opaque(4)

    def test_trailing_bytes(self):
        reader = XdrReader(b"\x00\x00\x00\x01\x00")
        reader.uint32()
        with pytest.raises(UnmarshalError):
            reader.expect_eof()

    def test_absent_optional(self):
        assert XdrReader(b"\x00\x00\x00\x00").optional(lambda r: r.uint32()) is None


class TestHashes:
    """Tests for SHA-256 and signature hint helpers."""

    def test_sha256(self):
        assert sha256_bytes(b"abc") == hashlib.sha256(b"abc").digest()

    def test_signature_hint_is_tail(self):
        assert signature_hint(b"\x01\x02\x03\x04\x05\x06") == b"\x03\x04\x05\x06"

    def test_signature_hint_too_short(self):
        with pytest.raises(ValueError):
            signature_hint(b"\x01\x02")

    def test_preimage_hint(self):
        preimage = b"secret preimage"
        assert preimage_hint(preimage) == hashlib.sha256(preimage).digest()[-4:]
