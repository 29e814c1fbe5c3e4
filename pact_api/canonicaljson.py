"""Compact, insertion-ordered JSON matching JavaScript's JSON.stringify.

Delegates to the ``jcs`` library (a Python implementation of RFC 8785).
Its unsorted serializer keeps key insertion order and formats numbers the
ES6 way, so the output matches what JavaScript Pact clients sign.
"""

from collections.abc import Mapping

from jcs import _jcs

from .errors import CanonicalizationError


def serialize(obj: Mapping) -> str:
    """Serialize a JSON object without reordering its keys.

    Args:
        obj: A JSON-serializable mapping; key order is preserved.

    Returns:
        The serialized text.

    Raises:
        CanonicalizationError: If the input cannot be serialized.
    """
    if not isinstance(obj, Mapping):
        raise CanonicalizationError("Input must be a JSON object (dict)")
    try:
        out = _jcs.serialize(obj)
    except Exception as e:
        raise CanonicalizationError(f"Serialization failed: {e}") from e
    return out.decode("utf-8") if isinstance(out, bytes) else out
