"""Canonical hashing helpers for snapshot digests and write-skipping.

A discovery pass is only reproducible if the same tree always produces the
same bytes, so every digest goes through one canonical JSON encoding.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def canonical_json_bytes(obj: Any) -> bytes:
    """Encode *obj* so that equal snapshots always hash to equal digests.

    Key order and whitespace are fixed, and non-ASCII labels are escaped.
    """
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Hex SHA-256 of *data*."""
    return hashlib.sha256(data).hexdigest()


def content_address(obj: Any) -> str:
    """Digest of a registry snapshot as ``sha256:<hex>``, stamped as ``DIGEST``."""
    return f"sha256:{sha256_hex(canonical_json_bytes(obj))}"


def text_digest(text: str) -> str:
    """SHA-256 of a rendered text artifact, UTF-8 encoded."""
    return sha256_hex(text.encode("utf-8"))
