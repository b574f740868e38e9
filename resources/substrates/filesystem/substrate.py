"""Transport-agnostic protocol for directory-backed blob substrate operations."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from packages.stowage_shared.blobs import BlobStorageProvider


class FilesystemHealthStatus(BaseModel):
    """Filesystem blob substrate readiness payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ready: bool
    detail: str


class FilesystemBlobSubstrate(BlobStorageProvider, Protocol):
    """Blob storage provider contract plus local-directory specifics."""

    @property
    def root(self) -> Path:
        """Return the root directory all blobs resolve beneath."""

    def health(self) -> FilesystemHealthStatus:
        """Report local filesystem substrate readiness without side effects."""
