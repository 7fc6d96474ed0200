"""Digests for translator cache keys and design fingerprints.

xxh3 is fast and stable across processes, which is all a cache key needs.
Nothing here is meant to resist tampering.
"""

from typing import Any

import orjson
import xxhash

KEY_LENGTH = 16


def digest(text: str, length: int | None = KEY_LENGTH) -> str:
    """Hex xxh3-128 digest of ``text``, cut to ``length`` characters."""
    value = xxhash.xxh3_128_hexdigest(text.encode("utf-8"))
    return value[:length] if length else value


def canonical_json(data: Any) -> bytes:
    """Key-sorted compact JSON, so equal documents encode identically."""
    return orjson.dumps(data, option=orjson.OPT_SORT_KEYS)


def fingerprint(data: Any) -> str:
    """Short digest of a JSON document, independent of key order."""
    return xxhash.xxh3_64_hexdigest(canonical_json(data))


def translation_key(prompt: str, schema: dict[str, Any]) -> str:
    """
    Cache key for one translation.

    Whitespace in the prompt is collapsed; case is kept because component
    ids are case-sensitive. The design is fingerprinted.
    """
    normalized = " ".join(prompt.split())
    return digest(f"{normalized}\x00{fingerprint(schema)}")


__all__ = [
    "KEY_LENGTH",
    "digest",
    "canonical_json",
    "fingerprint",
    "translation_key",
]
