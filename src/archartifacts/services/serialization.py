"""Value encoding for string-only backing stores (Redis, Memcached)."""

from __future__ import annotations

import json
from typing import Any, Union


def encode_json(value: Any) -> str:
    """Encode any JSON-serializable value, strings included, as JSON text.

    Used by the Redis providers so every value type round-trips exactly.
    """
    return json.dumps(value, separators=(",", ":"))


def coerce_to_text(value: Any) -> str:
    """Store strings verbatim and JSON-encode everything else.

    Used by the Memcached provider. A string that happens to be valid JSON
    (``"123"``, ``"true"``) reads back as the decoded value.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def decode_text(raw: Union[str, bytes]) -> Any:
    """JSON-decode ``raw``, falling back to the raw text on parse failure."""
    text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    try:
        return json.loads(text)
    except ValueError:
        return text
