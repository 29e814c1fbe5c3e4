"""Blake2b-256 hashing and Ed25519 keypair generation, signing, verification.

Commands are hash-then-sign: the Ed25519 signature covers the 32-byte
blake2b digest of the canonical command string, never the raw bytes.
"""

from __future__ import annotations

import logging

import nacl.bindings
import nacl.encoding
import nacl.hash
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from .codec import base64url_encode, bin_to_hex, hex_to_bin
from .errors import InvalidArgument, MalformedKeyPair, SignatureError, TypeMismatch
from .types import KeyPair, SignatureResult

_LOG = logging.getLogger(__name__)

HASH_SIZE = 32
SIGNING_KEY_SIZE = nacl.bindings.crypto_sign_SECRETKEYBYTES


def _as_bytes(msg: str | bytes) -> bytes:
    if isinstance(msg, str):
        try:
            return msg.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidArgument(f"Message is not valid UTF-8 text: {e}") from e
    if isinstance(msg, (bytes, bytearray)):
        return bytes(msg)
    raise TypeMismatch(f"Expected str or bytes, got {type(msg).__name__}")


def hash_bin(msg: str | bytes) -> bytes:
    """Unkeyed blake2b with a 32-byte digest. Strings are hashed as UTF-8."""
    return nacl.hash.blake2b(
        _as_bytes(msg), digest_size=HASH_SIZE, encoder=nacl.encoding.RawEncoder
    )


def hash_b64(msg: str | bytes) -> str:
    """Blake2b-256 digest as unpadded base64url; this is a command's request key."""
    return base64url_encode(hash_bin(msg))


def gen_key_pair() -> KeyPair:
    """Generate a random Ed25519 keypair (in-memory only)."""
    sk = SigningKey.generate()
    return KeyPair(
        public_key=bin_to_hex(bytes(sk.verify_key)),
        secret_key=bin_to_hex(bytes(sk)),
    )


def _require_key_pair(key_pair) -> KeyPair:
    if isinstance(key_pair, KeyPair):
        kp = key_pair
    else:
        kp = KeyPair.from_dict(key_pair)
    if not kp.public_key or not kp.secret_key:
        raise MalformedKeyPair(
            "Invalid KeyPair: expected non-empty 'secretKey' and 'publicKey'"
        )
    return kp


def to_signing_key(key_pair: KeyPair) -> bytes:
    """Concatenate seed and public key into the 64-byte Ed25519 signing key.

    Raises:
        MalformedKeyPair: If either half is absent or the result is not 64 bytes.
    """
    kp = _require_key_pair(key_pair)
    try:
        signing_key = hex_to_bin(kp.secret_key + kp.public_key)
    except InvalidArgument as e:
        raise MalformedKeyPair(f"Invalid KeyPair: {e}") from e
    if len(signing_key) != SIGNING_KEY_SIZE:
        raise MalformedKeyPair(
            f"Invalid KeyPair: expected {SIGNING_KEY_SIZE} key bytes, got {len(signing_key)}"
        )
    return signing_key


def sign(msg: str | bytes, key_pair: KeyPair) -> SignatureResult:
    """Sign the blake2b-256 digest of *msg* with *key_pair*.

    Returns:
        ``{"hash": <base64url digest>, "sig": <hex signature>, "pubKey": <hex>}``.
    """
    kp = _require_key_pair(key_pair)
    signing_key = to_signing_key(kp)
    digest = hash_bin(msg)
    signed = nacl.bindings.crypto_sign(digest, signing_key)
    sig = signed[: nacl.bindings.crypto_sign_BYTES]
    result = SignatureResult(
        hash=base64url_encode(digest), sig=bin_to_hex(sig), pubKey=kp.public_key
    )
    _LOG.debug("signed hash=%s pubKey=%s", result["hash"], kp.public_key)
    return result


def verify_sig(msg: str | bytes, sig: str, pub_key: str, strict: bool = False) -> bool:
    """Check a hex signature over the blake2b-256 digest of *msg*.

    With ``strict=True`` a bad signature raises instead of returning False.

    Raises:
        SignatureError: On verification failure when *strict* is set.
    """
    try:
        VerifyKey(hex_to_bin(pub_key)).verify(hash_bin(msg), hex_to_bin(sig))
    except (BadSignatureError, InvalidArgument, ValueError) as e:
        if strict:
            raise SignatureError(f"Signature verification failed: {e}") from e
        return False
    return True
