"""Backend-neutral blob storage contracts shared by every provider."""

from __future__ import annotations

from enum import Enum
from typing import BinaryIO, Iterable, Protocol

from pydantic import BaseModel, ConfigDict

from packages.stowage_shared.storage_path import combine


class BlobItemKind(str, Enum):
    """Kind of one listed storage entry."""

    FILE = "file"
    FOLDER = "folder"


class BlobId(BaseModel):
    """One listing entry: containing folder, leaf name and entry kind."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    folder_path: str
    name: str
    kind: BlobItemKind

    @property
    def full_path(self) -> str:
        """Return the absolute abstract path usable as a blob identifier."""
        return combine(self.folder_path, self.name)

    @property
    def is_folder(self) -> bool:
        """Return True for folder entries."""
        return self.kind is BlobItemKind.FOLDER


class BlobMeta(BaseModel):
    """Current size and content digest of one stored blob."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    size: int
    digest: str


class BlobStorageProvider(Protocol):
    """Protocol every blob storage backend satisfies structurally."""

    def list_blobs(
        self,
        folder_path: str | None = None,
        prefix: str | None = None,
        recurse: bool = False,
    ) -> list[BlobId] | None:
        """List entries in a folder; ``None`` when the storage root is missing."""

    def write(self, blob_id: str, source: BinaryIO, append: bool = False) -> None:
        """Store all bytes from ``source`` under ``blob_id``."""

    def open_read(self, blob_id: str) -> BinaryIO | None:
        """Open one blob for reading; ``None`` when it does not exist."""

    def delete(self, blob_ids: Iterable[str] | None) -> bool | None:
        """Delete blobs, ignoring missing ones; ``None`` for absent input."""

    def exists(self, blob_ids: Iterable[str] | None) -> list[bool]:
        """Report, in input order, whether each blob exists."""

    def get_meta(
        self, blob_ids: Iterable[str] | None
    ) -> list[BlobMeta | None] | None:
        """Return metadata per id in input order; ``None`` for absent input."""

    def close(self) -> None:
        """Release provider resources."""


class UnsupportedOperationError(NotImplementedError):
    """Raised by providers for contract operations they do not implement."""
