"""Hashing helpers.

`context_hash` reproduces the short 32-bit rolling digest used to tag UI
states: the same input always gives the same tag, and tags stay stable across
processes (no salted `hash()`). `fingerprint` is the fast xxhash64 key used
for caches.
"""

from typing import Any

import xxhash

from .json import safe_json_dumps

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_CONTEXT_HASH_LENGTH = 12


def _to_int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


def rolling_hash32(text: str) -> int:
    """
    `h = h * 31 + c` over UTF-16 code units with signed 32-bit wraparound.

    Iterating code units rather than code points keeps the digest identical
    to the browser implementation for text outside the BMP.
    """
    encoded = text.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32((h << 5) - h + unit)
    return h


def to_base36(value: int) -> str:
    """Lower-case base-36 rendering of a non-negative integer."""
    if value < 0:
        raise ValueError("to_base36 expects a non-negative integer")
    if value == 0:
        return "0"

    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def context_hash(obj: Any) -> str:
    """
    Short deterministic digest of a JSON-serializable input.

    Examples:
        >>> context_hash({"stars": 1}) == context_hash({"stars": 1})
        True
    """
    digest = rolling_hash32(safe_json_dumps(obj))
    return to_base36(abs(digest))[:_CONTEXT_HASH_LENGTH]


def fingerprint(*parts: Any) -> str:
    """xxhash64 hex digest of the compact JSON encoding of `parts`."""
    hasher = xxhash.xxh64()
    for part in parts:
        hasher.update(safe_json_dumps(part).encode("utf-8"))
        hasher.update(b"\x00")
    return hasher.hexdigest()


__all__ = ["rolling_hash32", "to_base36", "context_hash", "fingerprint"]
