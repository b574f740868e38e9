"""Pydantic settings for the filesystem substrate component."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.stowage_shared.config import StowageSettings, resolve_component_settings
from resources.substrates.filesystem.component import RESOURCE_COMPONENT_ID
from resources.substrates.filesystem.validation import normalize_digest_algorithm


class FilesystemSubstrateSettings(BaseModel):
    """Filesystem substrate runtime settings for blob persistence."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_dir: str = "./var/blobs"
    temp_prefix: str = "blobtmp"
    atomic_writes: bool = True
    fsync_writes: bool = False
    digest_algorithm: str = "md5"
    copy_chunk_size: int = Field(default=1024 * 1024, gt=0)

    @field_validator("root_dir")
    @classmethod
    def _validate_root_dir(cls, value: str) -> str:
        """Require a non-empty root directory path."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("root_dir is required")
        return normalized

    @field_validator("temp_prefix")
    @classmethod
    def _validate_temp_prefix(cls, value: str) -> str:
        """Require a non-empty temporary filename prefix."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("temp_prefix is required")
        if "/" in normalized or "\\" in normalized:
            raise ValueError("temp_prefix cannot contain path separators")
        return normalized

    @field_validator("digest_algorithm")
    @classmethod
    def _validate_digest_algorithm(cls, value: str) -> str:
        """Require a fixed-size digest supported by ``hashlib``."""
        return normalize_digest_algorithm(value)

    def root_path(self) -> Path:
        """Return the expanded absolute root path for substrate operations."""
        return Path(self.root_dir).expanduser().resolve()


def resolve_filesystem_substrate_settings(
    settings: StowageSettings,
) -> FilesystemSubstrateSettings:
    """Resolve filesystem substrate settings from ``components.substrate.filesystem``."""
    return resolve_component_settings(
        settings=settings,
        component_id=RESOURCE_COMPONENT_ID,
        model=FilesystemSubstrateSettings,
    )
