"""Asynchronous facade over a blocking blob storage provider.

Each blocking step runs in a worker thread via ``asyncio.to_thread``. Batch
operations hop once per id, so task cancellation lands between ids and never
interrupts a copy already in flight.
"""

from __future__ import annotations

import asyncio
import io
from typing import BinaryIO, Iterable

from packages.stowage_shared.blobs import BlobId, BlobMeta, BlobStorageProvider
from packages.stowage_shared.blob_validation import (
    check_blob_id,
    check_blob_id_collection,
    check_blob_ids,
)


class AsyncBlobStorage:
    """Expose one provider's operation set as coroutines."""

    def __init__(self, provider: BlobStorageProvider) -> None:
        self._provider = provider

    async def list_blobs(
        self,
        folder_path: str | None = None,
        prefix: str | None = None,
        recurse: bool = False,
    ) -> list[BlobId] | None:
        return await asyncio.to_thread(
            self._provider.list_blobs, folder_path, prefix, recurse
        )

    async def write(
        self, blob_id: str, source: BinaryIO | bytes, append: bool = False
    ) -> None:
        """Store ``source``; raw bytes are wrapped in an in-memory stream."""
        stream = io.BytesIO(source) if isinstance(source, bytes) else source
        await asyncio.to_thread(self._provider.write, blob_id, stream, append)

    async def read_bytes(self, blob_id: str) -> bytes | None:
        """Return the full blob content, or ``None`` when it does not exist."""
        check_blob_id(blob_id)
        return await asyncio.to_thread(self._read_all, blob_id)

    async def delete(self, blob_ids: Iterable[str] | None) -> bool | None:
        if blob_ids is None:
            return None
        check_blob_id_collection(blob_ids)
        for blob_id in blob_ids:
            await asyncio.to_thread(self._provider.delete, [blob_id])
        return True

    async def exists(self, blob_ids: Iterable[str] | None) -> list[bool]:
        if blob_ids is None:
            return []
        check_blob_id_collection(blob_ids)
        ids = list(blob_ids)
        check_blob_ids(ids)
        results: list[bool] = []
        for blob_id in ids:
            results.extend(await asyncio.to_thread(self._provider.exists, [blob_id]))
        return results

    async def get_meta(
        self, blob_ids: Iterable[str] | None
    ) -> list[BlobMeta | None] | None:
        if blob_ids is None:
            return None
        check_blob_id_collection(blob_ids)
        ids = list(blob_ids)
        check_blob_ids(ids)
        results: list[BlobMeta | None] = []
        for blob_id in ids:
            batch = await asyncio.to_thread(self._provider.get_meta, [blob_id])
            results.extend(batch or [None])
        return results

    async def close(self) -> None:
        await asyncio.to_thread(self._provider.close)

    def _read_all(self, blob_id: str) -> bytes | None:
        """Open, drain and close one blob inside a worker thread."""
        handle = self._provider.open_read(blob_id)
        if handle is None:
            return None
        with handle:
            return handle.read()
