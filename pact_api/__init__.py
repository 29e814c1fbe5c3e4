"""Python client for building, signing and submitting Pact commands."""

from .client import PactClient
from .codec import base64url_decode, base64url_encode, bin_to_hex, hex_to_bin
from .command import (
    build_command,
    mk_cap,
    mk_meta,
    mk_public_send,
    mk_single_cmd,
    prepare_exec_cmd,
    simple_exec_command,
)
from .crypto import gen_key_pair, hash_b64, hash_bin, sign, to_signing_key, verify_sig
from .errors import (
    PactError,
    TypeMismatch,
    InvalidArgument,
    MissingField,
    MissingEndpoint,
    MalformedKeyPair,
    HashMismatch,
    SignatureError,
    CanonicalizationError,
)
from .lang import Exp, Symbol, mk_exp
from .request_keys import (
    listen_request,
    listen_request_from_exec,
    poll_request,
    poll_request_from_exec,
)
from .types import Capability, ExecCmd, KeyPair, Meta
from .wallet import WalletSigner, mk_signing_request

__all__ = [
    "PactClient",
    "WalletSigner",
    "KeyPair",
    "Capability",
    "Meta",
    "ExecCmd",
    "bin_to_hex",
    "hex_to_bin",
    "base64url_encode",
    "base64url_decode",
    "hash_bin",
    "hash_b64",
    "gen_key_pair",
    "to_signing_key",
    "sign",
    "verify_sig",
    "mk_meta",
    "mk_cap",
    "build_command",
    "prepare_exec_cmd",
    "mk_single_cmd",
    "mk_public_send",
    "simple_exec_command",
    "poll_request",
    "listen_request",
    "poll_request_from_exec",
    "listen_request_from_exec",
    "mk_signing_request",
    "Exp",
    "Symbol",
    "mk_exp",
    "PactError",
    "TypeMismatch",
    "InvalidArgument",
    "MissingField",
    "MissingEndpoint",
    "MalformedKeyPair",
    "HashMismatch",
    "SignatureError",
    "CanonicalizationError",
]
