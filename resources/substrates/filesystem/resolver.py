"""Translate abstract blob identifiers and folder paths into paths under root."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

from packages.stowage_shared.errors import (
    ErrorDetail,
    codes,
    policy_error,
    validation_error,
)
from packages.stowage_shared.logging import fields, get_logger, log_context
from packages.stowage_shared.storage_path import get_parts
from resources.substrates.filesystem.codec import decode_segment, encode_segment

_LOGGER = get_logger(__name__)


class PathOutsideRootError(ValueError):
    """Raised when a resolved location would fall outside the storage root."""

    def __init__(self, error: ErrorDetail) -> None:
        super().__init__(error.message)
        self.error = error


class PathResolver:
    """Resolve abstract locations beneath one fixed root directory.

    Folder paths and blob identifiers are both split on ``/`` and every
    segment goes through the codec, so a folder created implicitly by
    writing ``a:b/c`` is addressed later as folder ``a:b``.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        """Return the root directory every location resolves beneath."""
        return self._root

    def resolve_folder(
        self, folder_path: str | None, *, create_if_missing: bool
    ) -> Path | None:
        """Return the directory for ``folder_path``, or ``None`` when missing."""
        if folder_path is None:
            return self._root

        path = self._join([encode_segment(part) for part in get_parts(folder_path)])
        if path.is_dir():
            return path
        if not create_if_missing:
            return None
        path.mkdir(parents=True, exist_ok=True)
        with log_context({fields.FOLDER_PATH: str(path)}):
            _LOGGER.debug("Created blob folder")
        return path

    def resolve_blob_path(self, blob_id: str, *, create_if_missing: bool) -> Path:
        """Return the file path for ``blob_id``, creating parents on request."""
        parts = [encode_segment(part) for part in get_parts(blob_id)]
        if len(parts) == 0:
            raise ValueError(f"blob id must contain a name, got {blob_id!r}")

        directory = self._join(parts[:-1])
        if create_if_missing and len(parts) > 1 and not directory.is_dir():
            directory.mkdir(parents=True, exist_ok=True)
            with log_context({fields.FOLDER_PATH: str(directory)}):
                _LOGGER.debug("Created blob folder")
        return self._join(parts)

    def relative_parts(self, path: Path) -> list[str]:
        """Decode every segment between root and ``path``."""
        relative = path.relative_to(self._root)
        return [decode_segment(part) for part in relative.parts]

    def _join(self, encoded_parts: Sequence[str]) -> Path:
        """Join encoded segments onto root, refusing anything that escapes it."""
        path = self._root.joinpath(*encoded_parts)
        normalized = Path(os.path.normpath(path))
        if normalized != self._root and not normalized.is_relative_to(self._root):
            raise PathOutsideRootError(
                validation_error(
                    f"path resolves outside the storage root: {path}",
                    code=codes.PATH_OUTSIDE_ROOT,
                )
            )
        if len(encoded_parts) != len(normalized.relative_to(self._root).parts):
            raise PathOutsideRootError(
                validation_error(
                    f"path segments do not map one-to-one under root: {path}",
                    code=codes.PATH_OUTSIDE_ROOT,
                )
            )
        if not path.resolve().is_relative_to(self._root.resolve()):
            raise PathOutsideRootError(
                policy_error(
                    f"path follows a link outside the storage root: {path}",
                    code=codes.PATH_OUTSIDE_ROOT,
                )
            )
        return path
