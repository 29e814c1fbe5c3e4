"""Delegated signing through a local wallet signing daemon.

The daemon (e.g. Chainweaver) holds the keys, asks the user for consent and
returns a fully signed envelope. Nothing is signed locally here.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import requests

from .errors import MissingField, TypeMismatch
from .types import NUMBER, Capability, Envelope, as_capabilities, enforce_type

_LOG = logging.getLogger(__name__)

DEFAULT_SIGNING_URL = "http://127.0.0.1:9467/v1/sign"


def mk_signing_request(
    pact_code: str,
    caps: Capability | list[Capability],
    env_data: Mapping[str, Any] | None = None,
    sender: str | None = None,
    chain_id: str | None = None,
    gas_limit: int | float | None = None,
    nonce: str | None = None,
    ttl: int | float | None = None,
) -> dict[str, Any]:
    """Validate inputs and build the unsigned request body for the daemon.

    Optional fields left as ``None`` are omitted from the body.

    Raises:
        MissingField: If *pact_code* or *caps* is absent.
        TypeMismatch: If any provided field has the wrong type.
    """
    if pact_code is None:
        raise MissingField("No Pact Code provided")
    if caps is None:
        raise MissingField("No Caps provided")
    enforce_type(pact_code, str, "pactCode")
    cap_list = as_capabilities(caps)
    if env_data is not None and not isinstance(env_data, Mapping):
        raise TypeMismatch(f"envData must be an object: {env_data!r}")
    for val, typ, name in (
        (sender, str, "sender"),
        (chain_id, str, "chainId"),
        (gas_limit, NUMBER, "gasLimit"),
        (nonce, str, "nonce"),
        (ttl, NUMBER, "ttl"),
    ):
        if val is not None:
            enforce_type(val, typ, name)

    body = {
        "code": pact_code,
        "caps": [c.to_wallet_cap() for c in cap_list],
        "data": dict(env_data) if env_data is not None else None,
        "sender": sender,
        "chainId": chain_id,
        "gasLimit": gas_limit,
        "nonce": nonce,
        "ttl": ttl,
    }
    return {k: v for k, v in body.items() if v is not None}


class WalletSigner:
    """Client for the wallet signing API."""

    def __init__(self, url: str = DEFAULT_SIGNING_URL, timeout: float | None = None):
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> "WalletSigner":
        """Use ``PACT_SIGNING_URL`` if set, else the default daemon endpoint."""
        return cls(url=os.environ.get("PACT_SIGNING_URL", DEFAULT_SIGNING_URL))

    def sign(
        self,
        pact_code: str,
        caps: Capability | list[Capability],
        env_data: Mapping[str, Any] | None = None,
        sender: str | None = None,
        chain_id: str | None = None,
        gas_limit: int | float | None = None,
        nonce: str | None = None,
        ttl: int | float | None = None,
    ) -> Envelope:
        """Ask the daemon to sign a command and return the signed envelope.

        Raises:
            MissingField: On missing inputs, or a response without ``body``.
            TypeMismatch: On wrongly typed inputs.
        """
        req = mk_signing_request(
            pact_code, caps, env_data, sender, chain_id, gas_limit, nonce, ttl
        )
        _LOG.debug("wallet sign request to %s caps=%d", self.url, len(req["caps"]))
        resp = requests.post(self.url, json=req, timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, Mapping) or "body" not in data:
            raise MissingField(f"Signing API response has no 'body': {data!r}")
        return data["body"]
