"""Tests for shared exception-to-error normalization."""

from __future__ import annotations

import errno

import pytest

from packages.stowage_shared.blob_validation import BlobValidationError, check_blob_id
from packages.stowage_shared.blobs import UnsupportedOperationError
from packages.stowage_shared.errors import ErrorCategory, codes, exception_to_error


def test_carried_error_detail_is_returned_unchanged() -> None:
    """Validation exceptions keep their precise code."""
    with pytest.raises(BlobValidationError) as exc_info:
        check_blob_id("/")

    error = exception_to_error(exc_info.value)

    assert error is exc_info.value.error
    assert error.code == codes.INVALID_BLOB_ID
    assert error.summary().startswith("INVALID_BLOB_ID: ")


@pytest.mark.parametrize(
    ("number", "category", "code"),
    [
        (errno.ENOENT, ErrorCategory.NOT_FOUND, codes.RESOURCE_NOT_FOUND),
        (errno.EACCES, ErrorCategory.POLICY, codes.PERMISSION_DENIED),
        (errno.EROFS, ErrorCategory.POLICY, codes.READ_ONLY_STORAGE),
        (errno.ENOSPC, ErrorCategory.STORAGE, codes.STORAGE_FULL),
        (errno.ENAMETOOLONG, ErrorCategory.VALIDATION, codes.NAME_TOO_LONG),
        (errno.EISDIR, ErrorCategory.STORAGE, codes.PATH_KIND_CONFLICT),
        (errno.ENOTDIR, ErrorCategory.STORAGE, codes.PATH_KIND_CONFLICT),
        (errno.EIO, ErrorCategory.STORAGE, codes.IO_FAILURE),
    ],
)
def test_filesystem_errors_map_by_errno(
    number: int, category: ErrorCategory, code: str
) -> None:
    """The errno decides the category, whatever OSError subclass carries it."""
    exc = OSError(number, "failed", "/store/blob")

    error = exception_to_error(exc)

    assert error.category is category
    assert error.code == code
    assert error.errno == number
    assert error.metadata["path"] == "/store/blob"


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (FileNotFoundError("gone"), codes.RESOURCE_NOT_FOUND),
        (PermissionError("denied"), codes.PERMISSION_DENIED),
        (NotADirectoryError("file in the way"), codes.PATH_KIND_CONFLICT),
        (OSError("no errno at all"), codes.IO_FAILURE),
    ],
)
def test_errno_less_os_errors_fall_back_to_their_type(exc: OSError, code: str) -> None:
    assert exception_to_error(exc).code == code


@pytest.mark.parametrize(
    ("exc", "category", "code"),
    [
        (ValueError("bad"), ErrorCategory.VALIDATION, codes.INVALID_ARGUMENT),
        (
            UnsupportedOperationError("no"),
            ErrorCategory.UNSUPPORTED,
            codes.UNSUPPORTED_OPERATION,
        ),
        (RuntimeError("boom"), ErrorCategory.INTERNAL, codes.UNEXPECTED_EXCEPTION),
    ],
)
def test_non_filesystem_exceptions_map_by_type(
    exc: Exception, category: ErrorCategory, code: str
) -> None:
    error = exception_to_error(exc)

    assert error.category is category
    assert error.code == code
    assert error.errno is None
    assert error.metadata["exception_type"] == type(exc).__name__
