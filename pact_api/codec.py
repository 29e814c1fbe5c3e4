"""Binary, hex and base64url conversions used across command signing."""

import base64
import binascii

from .errors import InvalidArgument, TypeMismatch


def bin_to_hex(b: bytes) -> str:
    """Encode raw bytes as lowercase hex.

    Raises:
        TypeMismatch: If *b* is not ``bytes`` or ``bytearray``.
    """
    if not isinstance(b, (bytes, bytearray)):
        raise TypeMismatch(f"Expected bytes, got {type(b).__name__}")
    return bytes(b).hex()


def hex_to_bin(h: str) -> bytes:
    """Decode a hex string to raw bytes.

    Raises:
        TypeMismatch: If *h* is not a string.
        InvalidArgument: If *h* is not valid hex.
    """
    if not isinstance(h, str):
        raise TypeMismatch(f"Expected string: {h!r}")
    try:
        return bytes.fromhex(h)
    except ValueError as e:
        raise InvalidArgument(f"Invalid hex string: {e}") from e


def base64url_encode(b: bytes) -> str:
    """Unpadded base64url (RFC 4648 §5), usable verbatim as a request key."""
    if not isinstance(b, (bytes, bytearray)):
        raise TypeMismatch(f"Expected bytes, got {type(b).__name__}")
    return base64.urlsafe_b64encode(bytes(b)).decode("ascii").rstrip("=")


def base64url_decode(s: str) -> bytes:
    """Decode an unpadded base64url token back to bytes."""
    if not isinstance(s, str):
        raise TypeMismatch(f"Expected string: {s!r}")
    try:
        return base64.urlsafe_b64decode(s + "=" * (-len(s) % 4))
    except (binascii.Error, ValueError) as e:
        raise InvalidArgument(f"Invalid base64url string: {e}") from e
