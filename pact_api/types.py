"""Data model for Pact commands: caller-side dataclasses and JSON wire dicts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypedDict

from .errors import MalformedKeyPair, MissingField, TypeMismatch

NUMBER = (int, float)


def enforce_type(val: Any, typ: type | tuple[type, ...], name: str) -> None:
    if not isinstance(val, typ) or (isinstance(val, bool) and typ is NUMBER):
        raise TypeMismatch(f"{name} must be a {_type_label(typ)}: {val!r}")


def _type_label(typ: type | tuple[type, ...]) -> str:
    return "number" if typ is NUMBER else typ.__name__


@dataclass(frozen=True)
class Capability:
    """A scoped permission a signer grants to a command."""

    name: str
    args: tuple[Any, ...] = ()
    role: str = ""
    description: str = ""

    def __post_init__(self):
        enforce_type(self.name, str, "name of capability")
        enforce_type(self.role, str, "role")
        enforce_type(self.description, str, "description")
        if isinstance(self.args, (str, bytes)) or not isinstance(self.args, Sequence):
            raise TypeMismatch(f"arguments to capability must be a list: {self.args!r}")
        object.__setattr__(self, "args", tuple(self.args))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Capability":
        """Accept either a clist entry ``{name, args}`` or a wallet cap
        ``{role, description, cap: {name, args}}``."""
        if not isinstance(raw, Mapping):
            raise TypeMismatch(f"capability must be an object: {raw!r}")
        inner = raw.get("cap", raw)
        if not isinstance(inner, Mapping) or "name" not in inner:
            raise MissingField(f"capability has no name: {raw!r}")
        return cls(
            name=inner["name"],
            args=inner.get("args", ()),
            role=raw.get("role", ""),
            description=raw.get("description", ""),
        )

    def to_clist_entry(self) -> dict[str, Any]:
        return {"name": self.name, "args": list(self.args)}

    def to_wallet_cap(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "description": self.description,
            "cap": {"name": self.name, "args": list(self.args)},
        }


def as_capabilities(caps: Any) -> list[Capability]:
    """Normalize one capability or a sequence of them into a list."""
    if isinstance(caps, (Capability, Mapping)):
        caps = [caps]
    if isinstance(caps, (str, bytes)) or not isinstance(caps, Sequence):
        raise TypeMismatch(f"caps must be a capability or a list of them: {caps!r}")
    return [c if isinstance(c, Capability) else Capability.from_dict(c) for c in caps]


@dataclass(frozen=True)
class KeyPair:
    """Hex-encoded Ed25519 keypair. ``secret_key`` is the 32-byte seed only."""

    public_key: str
    secret_key: str
    clist: tuple[Capability, ...] = ()

    def __post_init__(self):
        enforce_type(self.public_key, str, "publicKey")
        enforce_type(self.secret_key, str, "secretKey")
        object.__setattr__(self, "clist", tuple(as_capabilities(self.clist)))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "KeyPair":
        """Build from the JSON shape ``{publicKey, secretKey, clist?}``.

        Raises:
            MalformedKeyPair: If publicKey or secretKey is absent.
        """
        if not isinstance(raw, Mapping) or "publicKey" not in raw or "secretKey" not in raw:
            raise MalformedKeyPair(
                "Invalid KeyPair: expected to find keys of name "
                f"'secretKey' and 'publicKey': {raw!r}"
            )
        return cls(
            public_key=raw["publicKey"],
            secret_key=raw["secretKey"],
            clist=raw.get("clist") or (),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"publicKey": self.public_key, "secretKey": self.secret_key}
        if self.clist:
            out["clist"] = [c.to_clist_entry() for c in self.clist]
        return out


def as_key_pairs(key_pairs: Any) -> list[KeyPair]:
    """Normalize one keypair or a sequence of them into a list."""
    if isinstance(key_pairs, (KeyPair, Mapping)):
        key_pairs = [key_pairs]
    if isinstance(key_pairs, (str, bytes)) or not isinstance(key_pairs, Sequence):
        raise TypeMismatch(f"keyPairs must be a keypair or a list of them: {key_pairs!r}")
    return [kp if isinstance(kp, KeyPair) else KeyPair.from_dict(kp) for kp in key_pairs]


@dataclass(frozen=True)
class Meta:
    """Chainweb public meta. All fields required and type-checked."""

    sender: str
    chain_id: str
    gas_price: int | float
    gas_limit: int | float
    creation_time: int | float
    ttl: int | float

    def __post_init__(self):
        enforce_type(self.sender, str, "sender")
        enforce_type(self.chain_id, str, "chainId")
        enforce_type(self.gas_price, NUMBER, "gasPrice")
        enforce_type(self.gas_limit, NUMBER, "gasLimit")
        enforce_type(self.creation_time, NUMBER, "creationTime")
        enforce_type(self.ttl, NUMBER, "ttl")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Meta":
        """Build from the camelCase wire shape produced by ``to_json``."""
        keys = ("sender", "chainId", "gasPrice", "gasLimit", "creationTime", "ttl")
        missing = [k for k in keys if k not in raw]
        if missing:
            raise MissingField(f"meta is missing fields: {missing}")
        return cls(
            sender=raw["sender"],
            chain_id=raw["chainId"],
            gas_price=raw["gasPrice"],
            gas_limit=raw["gasLimit"],
            creation_time=raw["creationTime"],
            ttl=raw["ttl"],
        )

    def to_json(self) -> dict[str, Any]:
        # Field order is part of the signed wire format.
        return {
            "creationTime": self.creation_time,
            "ttl": self.ttl,
            "gasLimit": self.gas_limit,
            "chainId": self.chain_id,
            "gasPrice": self.gas_price,
            "sender": self.sender,
        }


EMPTY_META = Meta(sender="", chain_id="", gas_price=0, gas_limit=0, creation_time=0, ttl=0)


@dataclass
class ExecCmd:
    """Inputs for one exec command, as accepted by the transport client."""

    pact_code: str
    key_pairs: Any
    nonce: str | None = None
    env_data: dict[str, Any] | None = None
    meta: Meta | None = None
    network_id: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ExecCmd":
        """Build from the camelCase shape ``{pactCode, keyPairs, nonce, ...}``."""
        for key in ("pactCode", "keyPairs"):
            if key not in raw:
                raise MissingField(f"exec command has no {key}: {raw!r}")
        return cls(
            pact_code=raw["pactCode"],
            key_pairs=raw["keyPairs"],
            nonce=raw.get("nonce"),
            env_data=raw.get("envData"),
            meta=raw.get("meta"),
            network_id=raw.get("networkId"),
        )


# -- JSON wire objects --


class SignatureResult(TypedDict):
    hash: str
    sig: str
    pubKey: str


class Sig(TypedDict):
    sig: str


class Envelope(TypedDict):
    hash: str
    sigs: list[Sig]
    cmd: str


class SendRequest(TypedDict):
    cmds: list[Envelope]


class PollRequest(TypedDict):
    requestKeys: list[str]


class ListenRequest(TypedDict):
    listen: str


class PollResult(TypedDict):
    reqKey: str
    result: Any
