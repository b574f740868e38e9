"""Tests for backend-neutral blob contract models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from packages.stowage_shared.blobs import BlobId, BlobItemKind, BlobMeta


def test_full_path_joins_folder_and_name() -> None:
    entry = BlobId(folder_path="/a/b", name="c.txt", kind=BlobItemKind.FILE)

    assert entry.full_path == "/a/b/c.txt"
    assert not entry.is_folder


def test_root_level_entries_have_single_separator() -> None:
    entry = BlobId(folder_path="/", name="docs", kind=BlobItemKind.FOLDER)

    assert entry.full_path == "/docs"
    assert entry.is_folder


def test_blob_models_are_frozen_value_objects() -> None:
    """Equal fields mean equal entries; instances cannot be mutated."""
    meta = BlobMeta(size=1, digest="ab")

    assert meta == BlobMeta(size=1, digest="ab")
    with pytest.raises(ValidationError):
        meta.size = 2  # type: ignore[misc]
    with pytest.raises(ValidationError):
        BlobId(folder_path="/", name="x", kind="link")
