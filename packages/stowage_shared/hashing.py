"""Content digest helpers for blob metadata."""

from __future__ import annotations

import hashlib
from typing import BinaryIO

DEFAULT_DIGEST_ALGORITHM = "md5"
DEFAULT_CHUNK_SIZE = 1024 * 1024


def stream_digest(
    stream: BinaryIO,
    *,
    algorithm: str = DEFAULT_DIGEST_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Return the lowercase hex digest of the remaining stream content."""
    digest = hashlib.new(algorithm)
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        digest.update(chunk)
    return digest.hexdigest()


def normalize_digest_algorithm(value: str) -> str:
    """Validate one algorithm name against ``hashlib`` and lowercase it."""
    normalized = value.strip().lower()
    if normalized == "":
        raise ValueError("digest_algorithm is required")
    if normalized not in hashlib.algorithms_available:
        raise ValueError(f"digest_algorithm is not supported: {normalized}")
    if normalized.startswith("shake_"):
        raise ValueError("digest_algorithm must have a fixed digest size")
    return normalized
