"""Tests for hex and base64url conversions."""

import base64

import pytest

from pact_api.codec import base64url_decode, base64url_encode, bin_to_hex, hex_to_bin
from pact_api.errors import InvalidArgument, TypeMismatch


class TestHex:
    def test_round_trip(self):
        raw = bytes(range(256))
        assert hex_to_bin(bin_to_hex(raw)) == raw

    def test_lowercase_output(self):
        assert bin_to_hex(b"\xab\xcd\xef") == "abcdef"

    def test_bytearray_accepted(self):
        assert bin_to_hex(bytearray(b"\x00\x01")) == "0001"

    def test_empty(self):
        assert bin_to_hex(b"") == ""
        assert hex_to_bin("") == b""

    @pytest.mark.parametrize("bad", ["abcd", [1, 2, 3], None, 42, memoryview(b"ab")])
    def test_bin_to_hex_rejects_non_bytes(self, bad):
        with pytest.raises(TypeMismatch):
            bin_to_hex(bad)

    def test_type_mismatch_is_type_error(self):
        with pytest.raises(TypeError):
            bin_to_hex("not bytes")

    @pytest.mark.parametrize("bad", [b"abcd", 1234, None])
    def test_hex_to_bin_rejects_non_string(self, bad):
        with pytest.raises(TypeMismatch, match="Expected string"):
            hex_to_bin(bad)

    def test_hex_to_bin_rejects_non_hex(self):
        with pytest.raises(InvalidArgument):
            hex_to_bin("zz")

    def test_uppercase_hex_accepted(self):
        assert hex_to_bin("ABCD") == b"\xab\xcd"


class TestBase64Url:
    def test_no_padding(self):
        # 32 bytes would carry one '=' in padded base64
        token = base64url_encode(b"\xff" * 32)
        assert "=" not in token
        assert len(token) == 43

    def test_url_safe_alphabet(self):
        token = base64url_encode(b"\xfb\xff\xbf" * 10)
        assert "+" not in token
        assert "/" not in token
        assert "-" in token or "_" in token

    def test_matches_stdlib_without_padding(self):
        raw = b"hello pact"
        assert base64url_encode(raw) == base64.urlsafe_b64encode(raw).decode().rstrip("=")

    def test_decode_round_trip(self):
        for n in range(0, 40):
            raw = bytes(range(n))
            assert base64url_decode(base64url_encode(raw)) == raw

    def test_encode_rejects_string(self):
        with pytest.raises(TypeMismatch):
            base64url_encode("abc")
