"""Tests for insertion-ordered JSON serialization of commands."""

import pytest

from pact_api.canonicaljson import serialize
from pact_api.errors import CanonicalizationError, InvalidArgument


class TestSerialize:
    def test_compact_insertion_order(self):
        assert serialize({"b": 1, "a": [1, "x", None, True]}) == '{"b":1,"a":[1,"x",null,true]}'

    def test_nested_order_kept(self):
        assert serialize({"z": {"y": 1, "x": 2}, "a": 0}) == '{"z":{"y":1,"x":2},"a":0}'

    def test_integral_float_as_int(self):
        assert serialize({"n": 1.0}) == '{"n":1}'

    @pytest.mark.parametrize(
        "val, expected",
        [
            (0.00001, "0.00001"),
            (0.1, "0.1"),
            (1.5, "1.5"),
            (1e-7, "1e-7"),
            (1.25e-7, "1.25e-7"),
            (123.456, "123.456"),
            (-0.5, "-0.5"),
            (-0.0, "0"),
            (2.0**53, "9007199254740992"),
            (2.0**60, "1152921504606847000"),
            (1.2345678901234567e20, "123456789012345670000"),
            (1e21, "1e+21"),
            (2.5e22, "2.5e+22"),
        ],
    )
    def test_numbers_match_javascript(self, val, expected):
        assert serialize({"n": val}) == '{"n":%s}' % expected

    def test_unicode_not_escaped(self):
        assert serialize({"s": "héllo"}) == '{"s":"héllo"}'

    def test_nan_rejected(self):
        with pytest.raises(CanonicalizationError):
            serialize({"n": float("nan")})

    def test_non_json_rejected(self):
        with pytest.raises(InvalidArgument):
            serialize({"s": {1, 2}})

    def test_non_object_rejected(self):
        with pytest.raises(CanonicalizationError, match="JSON object"):
            serialize([1, 2])
