"""Filesystem substrate resource exports."""

from resources.substrates.filesystem.codec import decode_segment, encode_segment
from resources.substrates.filesystem.component import (
    RESOURCE_COMPONENT_ID,
    build_component,
)
from resources.substrates.filesystem.config import (
    FilesystemSubstrateSettings,
    resolve_filesystem_substrate_settings,
)
from resources.substrates.filesystem.filesystem_substrate import (
    LocalFilesystemBlobSubstrate,
)
from resources.substrates.filesystem.resolver import PathOutsideRootError, PathResolver
from resources.substrates.filesystem.substrate import (
    FilesystemBlobSubstrate,
    FilesystemHealthStatus,
)

__all__ = [
    "RESOURCE_COMPONENT_ID",
    "FilesystemSubstrateSettings",
    "FilesystemBlobSubstrate",
    "FilesystemHealthStatus",
    "LocalFilesystemBlobSubstrate",
    "PathOutsideRootError",
    "PathResolver",
    "build_component",
    "decode_segment",
    "encode_segment",
    "resolve_filesystem_substrate_settings",
]
