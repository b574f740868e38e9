"""Shared helpers for abstract, storage-agnostic blob paths.

Blob paths always use ``/`` regardless of host platform. Empty segments are
dropped, so ``"/a//b/"`` and ``"a/b"`` name the same location.
"""

from __future__ import annotations

from typing import Iterable

PATH_SEPARATOR = "/"
ROOT_PATH = PATH_SEPARATOR


def get_parts(path: str | None) -> list[str]:
    """Split one abstract path into its non-empty segments."""
    if path is None:
        return []
    return [part for part in path.split(PATH_SEPARATOR) if part != ""]


def combine(*paths: str | None) -> str:
    """Join abstract path fragments into one normalized absolute path."""
    return combine_parts(part for path in paths for part in get_parts(path))


def combine_parts(parts: Iterable[str]) -> str:
    """Join already-split segments into one normalized absolute path."""
    return ROOT_PATH + PATH_SEPARATOR.join(parts)

