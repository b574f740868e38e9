"""Shared validation helpers for blob identifiers, prefixes and streams.

Every storage provider calls these before touching its backing store, so a
rejected argument never causes a side effect.
"""

from __future__ import annotations

from collections.abc import Iterable

from packages.stowage_shared.errors import ErrorDetail, codes, validation_error
from packages.stowage_shared.storage_path import PATH_SEPARATOR, get_parts

MAX_BLOB_ID_LENGTH = 4096


class BlobValidationError(ValueError):
    """Raised when a blob identifier, prefix or source stream is invalid."""

    def __init__(self, error: ErrorDetail) -> None:
        super().__init__(error.message)
        self.error = error


def check_blob_id(blob_id: object) -> None:
    """Require one non-empty string identifier with at least one segment."""
    if blob_id is None:
        raise _invalid("blob id is required", code=codes.MISSING_REQUIRED_FIELD)
    if not isinstance(blob_id, str):
        raise _invalid(
            f"blob id must be a string, got {type(blob_id).__name__}",
            code=codes.INVALID_BLOB_ID,
        )
    if blob_id.strip() == "":
        raise _invalid("blob id cannot be empty", code=codes.INVALID_BLOB_ID)
    if len(blob_id) > MAX_BLOB_ID_LENGTH:
        raise _invalid(
            f"blob id exceeds {MAX_BLOB_ID_LENGTH} characters",
            code=codes.INVALID_BLOB_ID,
        )
    if len(get_parts(blob_id)) == 0:
        raise _invalid(
            f"blob id must contain a name, got {blob_id!r}",
            code=codes.INVALID_BLOB_ID,
        )


def check_blob_id_collection(blob_ids: object) -> None:
    """Require a collection of identifiers without inspecting its items."""
    if blob_ids is None:
        raise _invalid("blob ids are required", code=codes.MISSING_REQUIRED_FIELD)
    if isinstance(blob_ids, (str, bytes)):
        raise _invalid(
            "blob ids must be a collection of identifiers, not a single string",
            code=codes.INVALID_BLOB_ID,
        )
    if not isinstance(blob_ids, Iterable):
        raise _invalid(
            f"blob ids must be iterable, got {type(blob_ids).__name__}",
            code=codes.INVALID_BLOB_ID,
        )


def check_blob_ids(blob_ids: Iterable[object] | None) -> None:
    """Require a collection of valid identifiers; fail on the first bad one."""
    check_blob_id_collection(blob_ids)
    assert blob_ids is not None
    for blob_id in blob_ids:
        check_blob_id(blob_id)


def check_blob_prefix(prefix: object) -> None:
    """Allow an absent prefix; otherwise require a separator-free string."""
    if prefix is None:
        return
    if not isinstance(prefix, str):
        raise _invalid(
            f"blob prefix must be a string, got {type(prefix).__name__}",
            code=codes.INVALID_BLOB_PREFIX,
        )
    if PATH_SEPARATOR in prefix:
        raise _invalid(
            f"blob prefix cannot contain {PATH_SEPARATOR!r}; pass a folder path instead",
            code=codes.INVALID_BLOB_PREFIX,
        )


def check_source_stream(stream: object) -> None:
    """Require a readable binary stream."""
    if stream is None:
        raise _invalid("source stream is required", code=codes.MISSING_REQUIRED_FIELD)
    read = getattr(stream, "read", None)
    if not callable(read):
        raise _invalid(
            f"source stream must be readable, got {type(stream).__name__}",
            code=codes.INVALID_SOURCE_STREAM,
        )
    readable = getattr(stream, "readable", None)
    if callable(readable) and not readable():
        raise _invalid(
            "source stream is not open for reading",
            code=codes.INVALID_SOURCE_STREAM,
        )


def _invalid(message: str, *, code: str) -> BlobValidationError:
    """Build one validation exception carrying a shared error detail."""
    return BlobValidationError(validation_error(message, code=code))
