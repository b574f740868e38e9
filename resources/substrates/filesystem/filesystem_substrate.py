"""Directory-backed blob substrate addressed by hierarchical blob identifiers."""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import BinaryIO, Iterable

from packages.stowage_shared.blobs import (
    BlobId,
    BlobItemKind,
    BlobMeta,
    UnsupportedOperationError,
)
from packages.stowage_shared.hashing import stream_digest
from packages.stowage_shared.logging import (
    fields,
    get_logger,
    log_context,
    public_api_logged,
)
from packages.stowage_shared.storage_path import combine_parts
from resources.substrates.filesystem.codec import decode_segment, is_encoded_name
from resources.substrates.filesystem.component import RESOURCE_COMPONENT_ID
from resources.substrates.filesystem.config import FilesystemSubstrateSettings
from resources.substrates.filesystem.resolver import PathResolver
from resources.substrates.filesystem.substrate import (
    FilesystemBlobSubstrate,
    FilesystemHealthStatus,
)
from resources.substrates.filesystem.validation import (
    check_blob_id,
    check_blob_id_collection,
    check_blob_ids,
    check_blob_prefix,
    check_source_stream,
)

_LOGGER = get_logger(__name__)


class LocalFilesystemBlobSubstrate(FilesystemBlobSubstrate):
    """Persist/retrieve blobs as files beneath one local root directory.

    Every operation validates its arguments before touching the disk. Missing
    blobs surface as ``None`` results, filesystem failures propagate as
    ``OSError`` unchanged.
    """

    def __init__(self, *, settings: FilesystemSubstrateSettings) -> None:
        self._settings = settings
        self._root = settings.root_path()
        self._resolver = PathResolver(self._root)

    @classmethod
    def from_directory(
        cls, root_dir: str | Path, **overrides: object
    ) -> "LocalFilesystemBlobSubstrate":
        """Build one substrate rooted at ``root_dir`` with optional overrides."""
        settings = FilesystemSubstrateSettings(root_dir=str(root_dir), **overrides)
        return cls(settings=settings)

    @property
    def root(self) -> Path:
        """Return the absolute root directory."""
        return self._root

    def health(self) -> FilesystemHealthStatus:
        """Return readiness for root directory access without creating it."""
        try:
            if not self._root.exists():
                return FilesystemHealthStatus(
                    ready=False,
                    detail=f"root directory does not exist: {self._root}",
                )
            if not self._root.is_dir():
                return FilesystemHealthStatus(
                    ready=False,
                    detail=f"root path is not a directory: {self._root}",
                )
            if not os.access(self._root, os.W_OK | os.X_OK):
                return FilesystemHealthStatus(
                    ready=False,
                    detail=f"root directory is not writable: {self._root}",
                )
        except OSError as exc:
            return FilesystemHealthStatus(
                ready=False,
                detail=f"filesystem health check failed: {type(exc).__name__}",
            )
        return FilesystemHealthStatus(ready=True, detail="ok")

    @public_api_logged(
        logger=_LOGGER,
        component_id=RESOURCE_COMPONENT_ID,
        id_fields=("folder_path", "prefix"),
    )
    def list_blobs(
        self,
        folder_path: str | None = None,
        prefix: str | None = None,
        recurse: bool = False,
    ) -> list[BlobId] | None:
        """List folders then files under ``folder_path`` matching ``prefix``.

        Returns ``None`` when the root directory itself is missing and an
        empty list when only the requested folder is missing.
        """
        check_blob_prefix(prefix)

        if not self._root.is_dir():
            return None

        folder = self._resolver.resolve_folder(folder_path, create_if_missing=False)
        if folder is None:
            return []

        folders: list[BlobId] = []
        files: list[BlobId] = []
        for current, dirnames, filenames in os.walk(folder, onerror=_raise_walk_error):
            dirnames[:] = [name for name in dirnames if is_encoded_name(name)]
            base = Path(current)
            folders.extend(
                self._to_blob_id(base / name, BlobItemKind.FOLDER)
                for name in dirnames
                if _matches_prefix(name, prefix)
            )
            files.extend(
                self._to_blob_id(base / name, BlobItemKind.FILE)
                for name in filenames
                if is_encoded_name(name) and _matches_prefix(name, prefix)
            )
            if not recurse:
                break
        return [*folders, *files]

    @public_api_logged(
        logger=_LOGGER,
        component_id=RESOURCE_COMPONENT_ID,
        id_fields=("blob_id",),
    )
    def write(self, blob_id: str, source: BinaryIO, append: bool = False) -> None:
        """Copy all of ``source`` into the blob, replacing or appending."""
        check_blob_id(blob_id)
        check_source_stream(source)

        if not self._root.exists():
            self._root.mkdir(parents=True, exist_ok=True)
            with log_context({fields.ROOT_DIR: str(self._root)}):
                _LOGGER.info("Created storage root directory")
        if not self._root.is_dir():
            raise NotADirectoryError(
                errno.ENOTDIR,
                "filesystem substrate root is not a directory",
                str(self._root),
            )
        path = self._resolver.resolve_blob_path(blob_id, create_if_missing=True)

        if append or not self._settings.atomic_writes:
            with path.open("ab" if append else "wb") as handle:
                shutil.copyfileobj(source, handle, self._settings.copy_chunk_size)
                self._sync(handle)
            return
        self._write_atomic(path=path, source=source)

    @public_api_logged(
        logger=_LOGGER,
        component_id=RESOURCE_COMPONENT_ID,
        id_fields=("blob_id",),
    )
    def open_read(self, blob_id: str) -> BinaryIO | None:
        """Open one blob for binary reading, or return ``None`` when missing.

        The caller owns the returned handle and must close it.
        """
        check_blob_id(blob_id)
        path = self._resolver.resolve_blob_path(blob_id, create_if_missing=False)
        if not path.is_file():
            return None
        try:
            return path.open("rb")
        except FileNotFoundError:
            return None

    @public_api_logged(
        logger=_LOGGER,
        component_id=RESOURCE_COMPONENT_ID,
        id_fields=("blob_ids",),
    )
    def delete(self, blob_ids: Iterable[str] | None) -> bool | None:
        """Delete each existing blob; missing blobs are skipped silently.

        Returns ``None`` when no collection was supplied at all.
        """
        if blob_ids is None:
            return None
        check_blob_id_collection(blob_ids)

        for blob_id in blob_ids:
            check_blob_id(blob_id)
            path = self._resolver.resolve_blob_path(blob_id, create_if_missing=False)
            if not path.is_file():
                continue
            path.unlink(missing_ok=True)
            with log_context({fields.BLOB_ID: blob_id}):
                _LOGGER.debug("Deleted blob file")
        return True

    @public_api_logged(
        logger=_LOGGER,
        component_id=RESOURCE_COMPONENT_ID,
        id_fields=("blob_ids",),
    )
    def exists(self, blob_ids: Iterable[str] | None) -> list[bool]:
        """Report per id, in input order, whether a blob file exists."""
        if blob_ids is None:
            return []
        check_blob_id_collection(blob_ids)
        ids = list(blob_ids)
        check_blob_ids(ids)

        return [
            self._resolver.resolve_blob_path(blob_id, create_if_missing=False).is_file()
            for blob_id in ids
        ]

    @public_api_logged(
        logger=_LOGGER,
        component_id=RESOURCE_COMPONENT_ID,
        id_fields=("blob_ids",),
    )
    def get_meta(
        self, blob_ids: Iterable[str] | None
    ) -> list[BlobMeta | None] | None:
        """Return size and content digest per id; ``None`` entries when missing."""
        if blob_ids is None:
            return None
        check_blob_id_collection(blob_ids)
        ids = list(blob_ids)
        check_blob_ids(ids)

        return [self._read_meta(blob_id) for blob_id in ids]

    def close(self) -> None:
        """Lifecycle teardown is not supported by this substrate."""
        raise UnsupportedOperationError(
            "filesystem substrate does not support close(); it holds no resources"
        )

    def _read_meta(self, blob_id: str) -> BlobMeta | None:
        """Compute metadata for one blob, tolerating concurrent deletion."""
        path = self._resolver.resolve_blob_path(blob_id, create_if_missing=False)
        if not path.is_file():
            return None
        try:
            with path.open("rb") as handle:
                size = os.fstat(handle.fileno()).st_size
                digest = stream_digest(
                    handle,
                    algorithm=self._settings.digest_algorithm,
                    chunk_size=self._settings.copy_chunk_size,
                )
        except FileNotFoundError:
            with log_context({fields.BLOB_ID: blob_id}):
                _LOGGER.debug("Blob vanished before metadata read")
            return None
        return BlobMeta(size=size, digest=digest)

    def _write_atomic(self, *, path: Path, source: BinaryIO) -> None:
        """Write through a sibling temp file and atomically replace the target."""
        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="wb",
                prefix=f".{self._settings.temp_prefix}-",
                suffix=".tmp",
                dir=path.parent,
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                shutil.copyfileobj(source, handle, self._settings.copy_chunk_size)
                self._sync(handle)

            os.replace(tmp_path, path)
            with log_context({fields.FOLDER_PATH: str(path.parent)}):
                _LOGGER.debug("Atomically replaced blob file")
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink(missing_ok=True)

    def _sync(self, handle: BinaryIO) -> None:
        """Flush one destination handle and fsync it when configured."""
        handle.flush()
        if self._settings.fsync_writes:
            os.fsync(handle.fileno())

    def _to_blob_id(self, path: Path, kind: BlobItemKind) -> BlobId:
        """Rebuild one listing entry from a path beneath root."""
        parts = self._resolver.relative_parts(path)
        return BlobId(
            folder_path=combine_parts(parts[:-1]),
            name=parts[-1],
            kind=kind,
        )


def _matches_prefix(encoded_name: str, prefix: str | None) -> bool:
    """Return True when the decoded entry name starts with ``prefix``."""
    if not prefix:
        return True
    return decode_segment(encoded_name).startswith(prefix)


def _raise_walk_error(exc: OSError) -> None:
    """Propagate directory enumeration failures instead of skipping entries."""
    raise exc
