"""Validation helpers for filesystem substrate inputs."""

from __future__ import annotations

from packages.stowage_shared.blob_validation import (
    BlobValidationError,
    check_blob_id,
    check_blob_id_collection,
    check_blob_ids,
    check_blob_prefix,
    check_source_stream,
)
from packages.stowage_shared.hashing import normalize_digest_algorithm

__all__ = [
    "BlobValidationError",
    "check_blob_id",
    "check_blob_id_collection",
    "check_blob_ids",
    "check_blob_prefix",
    "check_source_stream",
    "normalize_digest_algorithm",
]
