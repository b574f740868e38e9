"""Tests for the asyncio facade over a blocking blob provider."""

from __future__ import annotations

import asyncio
import io
from pathlib import Path

import pytest

from packages.stowage_shared.async_blobs import AsyncBlobStorage
from packages.stowage_shared.blob_validation import BlobValidationError
from packages.stowage_shared.blobs import BlobItemKind, UnsupportedOperationError
from resources.substrates.filesystem import LocalFilesystemBlobSubstrate


def _storage(root: Path) -> AsyncBlobStorage:
    return AsyncBlobStorage(LocalFilesystemBlobSubstrate.from_directory(root))


def test_async_write_read_and_metadata(tmp_path: Path) -> None:
    """Bytes and streams are both accepted as write sources."""
    storage = _storage(tmp_path)

    async def scenario() -> None:
        await storage.write("a/one", b"hello")
        await storage.write("a/one", io.BytesIO(b" world"), append=True)

        assert await storage.read_bytes("a/one") == b"hello world"
        assert await storage.read_bytes("a/missing") is None
        assert await storage.exists(["a/one", "a/missing"]) == [True, False]
        metas = await storage.get_meta(["a/missing", "a/one"])
        assert metas is not None
        assert metas[0] is None
        assert metas[1] is not None and metas[1].size == 11

    asyncio.run(scenario())


def test_async_listing_and_delete(tmp_path: Path) -> None:
    storage = _storage(tmp_path)

    async def scenario() -> None:
        await storage.write("dir/x", b"1")
        await storage.write("top", b"2")

        entries = await storage.list_blobs()
        assert [(entry.name, entry.kind) for entry in entries or []] == [
            ("dir", BlobItemKind.FOLDER),
            ("top", BlobItemKind.FILE),
        ]
        assert await storage.delete(["dir/x", "never"]) is True
        assert await storage.exists(["dir/x"]) == [False]

    asyncio.run(scenario())


def test_async_absent_inputs_mirror_provider(tmp_path: Path) -> None:
    """Absent id collections produce the same results as the sync provider."""
    storage = _storage(tmp_path)

    async def scenario() -> None:
        assert await storage.delete(None) is None
        assert await storage.exists(None) == []
        assert await storage.get_meta(None) is None
        assert await storage.list_blobs() == []

    asyncio.run(scenario())


def test_async_validation_happens_before_any_io(tmp_path: Path) -> None:
    """A bad id anywhere in a batch fails before the first worker hop."""
    root = tmp_path / "root"
    storage = _storage(root)

    with pytest.raises(BlobValidationError):
        asyncio.run(storage.read_bytes(""))
    with pytest.raises(BlobValidationError):
        asyncio.run(storage.exists(["ok", ""]))
    with pytest.raises(BlobValidationError, match="single string"):
        asyncio.run(storage.delete("abc"))  # type: ignore[arg-type]

    assert not root.exists()


def test_async_close_propagates_unsupported(tmp_path: Path) -> None:
    storage = _storage(tmp_path)

    with pytest.raises(UnsupportedOperationError):
        asyncio.run(storage.close())
