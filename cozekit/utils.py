"""Small helpers shared across the client."""

from __future__ import annotations

import json
import secrets
from typing import Any


def generate_random_string(length: int) -> str:
    """Return a random lowercase hex string built from ``length // 2`` random bytes."""
    if length < 0:
        raise ValueError("length must not be negative")
    return bytes_to_hex(secrets.token_bytes(length // 2))


def bytes_to_hex(data: bytes) -> str:
    """Encode ``data`` as lowercase hexadecimal."""
    return bytes(data).hex()


def must_to_json(obj: Any) -> str:
    """Serialise ``obj`` as compact JSON, falling back to ``"{}"`` when it cannot be encoded."""
    try:
        return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return "{}"