"""Exec command construction, multi-signer signing, and envelope assembly.

The canonical command string is the exact byte sequence every signer signs.
Its key order and compact separators are a wire format shared with Pact
servers and wallets and must not change.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from .canonicaljson import serialize
from .crypto import hash_b64, sign
from .errors import HashMismatch, InvalidArgument, MissingField, TypeMismatch
from .types import (
    EMPTY_META,
    Capability,
    Envelope,
    KeyPair,
    Meta,
    SendRequest,
    SignatureResult,
    as_key_pairs,
    enforce_type,
)

_LOG = logging.getLogger(__name__)

Clock = Callable[[], str]


def iso_now() -> str:
    """Current UTC instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def mk_meta(
    sender: str,
    chain_id: str,
    gas_price: int | float,
    gas_limit: int | float,
    creation_time: int | float,
    ttl: int | float,
) -> Meta:
    """Type-checked chainweb public meta."""
    return Meta(
        sender=sender,
        chain_id=chain_id,
        gas_price=gas_price,
        gas_limit=gas_limit,
        creation_time=creation_time,
        ttl=ttl,
    )


def mk_cap(role: str, description: str, name: str, args: Sequence[Any] = ()) -> Capability:
    """Type-checked capability for a signer clist or a wallet signing request."""
    return Capability(name=name, args=args, role=role, description=description)


def mk_signer(kp: KeyPair) -> dict[str, Any]:
    return {
        "clist": [c.to_clist_entry() for c in kp.clist],
        "pubKey": kp.public_key,
    }


def _resolve_meta(meta: Meta | Mapping[str, Any] | None) -> Meta:
    if meta is None:
        return EMPTY_META
    if isinstance(meta, Meta):
        return meta
    if isinstance(meta, Mapping):
        return Meta.from_dict(meta)
    raise TypeMismatch(f"meta must be a Meta: {meta!r}")


def build_command(
    key_pairs: KeyPair | Sequence[KeyPair],
    nonce: str | None,
    pact_code: str,
    env_data: Mapping[str, Any] | None = None,
    meta: Meta | None = None,
    network_id: str | None = None,
    *,
    clock: Clock | None = None,
) -> tuple[list[SignatureResult], str]:
    """Build the canonical command string and sign it with every keypair.

    Args:
        key_pairs: One keypair or a sequence of them; order is kept in the
            signers list and in the returned signatures.
        nonce: Nonce string; ``None`` takes the current time from *clock*.
        pact_code: Pact code to execute.
        env_data: JSON object made available to the code; defaults to ``{}``.
        meta: Public meta; defaults to an all-empty meta.
        network_id: Network identifier, or ``None``.
        clock: Zero-argument callable returning the default nonce.

    Returns:
        ``(sigs, cmd)`` ready for :func:`mk_single_cmd`.
    """
    if nonce is None:
        nonce = (clock or iso_now)()
    if not isinstance(nonce, str):
        raise InvalidArgument(f"nonce must be a string: {nonce!r}")
    if not isinstance(pact_code, str):
        raise InvalidArgument(f"pactCode must be a string: {pact_code!r}")
    if env_data is not None and not isinstance(env_data, Mapping):
        raise TypeMismatch(f"envData must be an object: {env_data!r}")
    if network_id is not None:
        enforce_type(network_id, str, "networkId")

    kps = as_key_pairs(key_pairs)
    cmd_json = {
        "networkId": network_id,
        "payload": {
            "exec": {
                "data": dict(env_data or {}),
                "code": pact_code,
            }
        },
        "signers": [mk_signer(kp) for kp in kps],
        "meta": _resolve_meta(meta).to_json(),
        "nonce": json.dumps(nonce, ensure_ascii=False),
    }
    cmd = serialize(cmd_json)
    sigs = [sign(cmd, kp) for kp in kps]
    return sigs, cmd


def _pull_sig(s: Mapping[str, Any]) -> dict[str, str]:
    if not isinstance(s, Mapping) or "sig" not in s:
        raise MissingField(f"Expected to find key 'sig' in {s!r}")
    return {"sig": s["sig"]}


def _pull_and_check_hashes(sigs: Sequence[Mapping[str, Any]]) -> str:
    hsh = sigs[0].get("hash")
    for s in sigs[1:]:
        if s.get("hash") != hsh:
            raise HashMismatch(f"Sigs for different hashes found: {list(sigs)!r}")
    return hsh


def mk_single_cmd(sigs: Sequence[SignatureResult], cmd: str) -> Envelope:
    """Assemble a signed envelope, enforcing that all signers hashed *cmd* alike.

    Raises:
        InvalidArgument: If *sigs* is empty or not a list, or *cmd* is not a string.
        HashMismatch: If any signature was made over a different hash, or
            the signed hash is not the digest of *cmd*.
    """
    if isinstance(sigs, (str, bytes, Mapping)) or not isinstance(sigs, Sequence):
        raise InvalidArgument(f"sigs must be a list: {sigs!r}")
    if not sigs:
        raise InvalidArgument("sigs must not be empty")
    if not all(isinstance(s, Mapping) for s in sigs):
        raise InvalidArgument(f"every sig must be an object: {sigs!r}")
    if not isinstance(cmd, str):
        raise InvalidArgument(f"cmd must be a string: {cmd!r}")
    hsh = _pull_and_check_hashes(sigs)
    if hsh != hash_b64(cmd):
        raise HashMismatch(f"Sigs are for hash {hsh!r}, not for the given cmd")
    _LOG.debug("assembled cmd hash=%s sigs=%d", hsh, len(sigs))
    return Envelope(hash=hsh, sigs=[_pull_sig(s) for s in sigs], cmd=cmd)


def prepare_exec_cmd(
    key_pairs: KeyPair | Sequence[KeyPair],
    nonce: str | None,
    pact_code: str,
    env_data: Mapping[str, Any] | None = None,
    meta: Meta | None = None,
    network_id: str | None = None,
    *,
    clock: Clock | None = None,
) -> Envelope:
    """Build, sign and assemble one exec command for send or local use."""
    sigs, cmd = build_command(
        key_pairs, nonce, pact_code, env_data, meta, network_id, clock=clock
    )
    return mk_single_cmd(sigs, cmd)


def mk_public_send(cmds: Envelope | Sequence[Envelope]) -> SendRequest:
    """Wrap one or more envelopes in the body of the send endpoint."""
    if isinstance(cmds, Mapping):
        cmds = [cmds]
    return SendRequest(cmds=list(cmds))


def simple_exec_command(
    key_pairs: KeyPair | Sequence[KeyPair],
    nonce: str | None,
    pact_code: str,
    env_data: Mapping[str, Any] | None = None,
    meta: Meta | None = None,
    network_id: str | None = None,
) -> SendRequest:
    """A complete send-endpoint body for a single exec command."""
    return mk_public_send(
        prepare_exec_cmd(key_pairs, nonce, pact_code, env_data, meta, network_id)
    )
