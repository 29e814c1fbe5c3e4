"""Tests for the wallet signing API client (HTTP replaced via monkeypatch)."""

import pytest
import requests

from pact_api.command import mk_cap
from pact_api.errors import MissingField, TypeMismatch
from pact_api.wallet import DEFAULT_SIGNING_URL, WalletSigner, mk_signing_request

GAS = mk_cap("Gas", "pay gas", "coin.GAS")


class _FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class TestSigningRequest:
    def test_required_only(self):
        req = mk_signing_request("(+ 1 2)", GAS)
        assert req == {
            "code": "(+ 1 2)",
            "caps": [{"role": "Gas", "description": "pay gas",
                      "cap": {"name": "coin.GAS", "args": []}}],
        }

    def test_all_fields(self):
        req = mk_signing_request(
            "(+ 1 2)", [GAS], {"k": 1}, "alice", "0", 600, "n1", 28800
        )
        assert list(req) == [
            "code", "caps", "data", "sender", "chainId", "gasLimit", "nonce", "ttl",
        ]
        assert req["data"] == {"k": 1}
        assert req["gasLimit"] == 600

    def test_code_required(self):
        with pytest.raises(MissingField, match="Pact Code"):
            mk_signing_request(None, GAS)

    def test_caps_required(self):
        with pytest.raises(MissingField, match="Caps"):
            mk_signing_request("(+ 1 2)", None)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"env_data": "x"},
            {"sender": 1},
            {"chain_id": 0},
            {"gas_limit": "600"},
            {"nonce": 5},
            {"ttl": "1"},
        ],
    )
    def test_optional_fields_type_checked(self, kwargs):
        with pytest.raises(TypeMismatch):
            mk_signing_request("(+ 1 2)", GAS, **kwargs)

    def test_code_type_checked(self):
        with pytest.raises(TypeMismatch):
            mk_signing_request(42, GAS)


class TestWalletSigner:
    def test_posts_to_daemon_and_returns_body(self, monkeypatch):
        captured = {}
        signed = {"hash": "h", "sigs": [{"sig": "ab"}], "cmd": "{}"}

        def fake_post(url, json, timeout):
            captured["url"] = url
            captured["json"] = json
            return _FakeResponse({"body": signed})

        monkeypatch.setattr("pact_api.wallet.requests.post", fake_post)
        result = WalletSigner().sign("(+ 1 2)", GAS, sender="alice")

        assert result == signed
        assert captured["url"] == DEFAULT_SIGNING_URL == "http://127.0.0.1:9467/v1/sign"
        assert captured["json"]["sender"] == "alice"
        assert "chainId" not in captured["json"]

    def test_validation_happens_before_io(self, monkeypatch):
        def fail_post(*args, **kwargs):
            raise AssertionError("should not be called")

        monkeypatch.setattr("pact_api.wallet.requests.post", fail_post)
        with pytest.raises(MissingField):
            WalletSigner().sign(None, GAS)

    def test_response_without_body(self, monkeypatch):
        monkeypatch.setattr(
            "pact_api.wallet.requests.post", lambda url, json, timeout: _FakeResponse({})
        )
        with pytest.raises(MissingField, match="body"):
            WalletSigner().sign("(+ 1 2)", GAS)

    def test_http_error_propagates(self, monkeypatch):
        monkeypatch.setattr(
            "pact_api.wallet.requests.post",
            lambda url, json, timeout: _FakeResponse({}, status_code=500),
        )
        with pytest.raises(requests.HTTPError):
            WalletSigner().sign("(+ 1 2)", GAS)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PACT_SIGNING_URL", "http://127.0.0.1:1/v1/sign")
        assert WalletSigner.from_env().url == "http://127.0.0.1:1/v1/sign"
        monkeypatch.delenv("PACT_SIGNING_URL")
        assert WalletSigner.from_env().url == DEFAULT_SIGNING_URL
