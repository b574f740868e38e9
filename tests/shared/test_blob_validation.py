"""Tests for shared blob argument validation helpers."""

from __future__ import annotations

import io

import pytest

from packages.stowage_shared.blob_validation import (
    MAX_BLOB_ID_LENGTH,
    BlobValidationError,
    check_blob_id,
    check_blob_id_collection,
    check_blob_ids,
    check_blob_prefix,
    check_source_stream,
)
from packages.stowage_shared.errors import ErrorCategory, codes


@pytest.mark.parametrize("blob_id", ["a", "/a", "a/b/c", "a//b", " x ", "é/ü"])
def test_check_blob_id_accepts_named_ids(blob_id: str) -> None:
    """Any id with at least one non-empty segment is accepted."""
    check_blob_id(blob_id)


@pytest.mark.parametrize(
    ("blob_id", "message"),
    [
        (None, "required"),
        (7, "must be a string"),
        ("", "cannot be empty"),
        ("   ", "cannot be empty"),
        ("/", "must contain a name"),
        ("///", "must contain a name"),
        ("a" * (MAX_BLOB_ID_LENGTH + 1), "exceeds"),
    ],
)
def test_check_blob_id_rejects_invalid_ids(blob_id: object, message: str) -> None:
    """Invalid ids fail with a validation-category error."""
    with pytest.raises(BlobValidationError, match=message) as exc_info:
        check_blob_id(blob_id)

    assert exc_info.value.error.category is ErrorCategory.VALIDATION


def test_blob_validation_error_is_value_error() -> None:
    """Callers catching ``ValueError`` should see validation failures."""
    with pytest.raises(ValueError):
        check_blob_id("")


def test_missing_id_uses_required_field_code() -> None:
    """A null id is reported as a missing field."""
    with pytest.raises(BlobValidationError) as exc_info:
        check_blob_id(None)

    assert exc_info.value.error.code == codes.MISSING_REQUIRED_FIELD


def test_check_blob_id_collection_rejects_strings() -> None:
    """A single string is not a collection of ids."""
    with pytest.raises(BlobValidationError, match="single string"):
        check_blob_id_collection("abc")
    with pytest.raises(BlobValidationError, match="single string"):
        check_blob_id_collection(b"abc")


def test_check_blob_id_collection_rejects_non_iterables() -> None:
    with pytest.raises(BlobValidationError, match="iterable"):
        check_blob_id_collection(42)


def test_check_blob_ids_fails_on_any_invalid_member() -> None:
    """One bad member rejects the whole batch."""
    check_blob_ids(["a", "b/c"])
    check_blob_ids([])

    with pytest.raises(BlobValidationError, match="cannot be empty"):
        check_blob_ids(["a", "", "b"])


def test_check_blob_prefix_rules() -> None:
    """Prefixes are optional single-segment strings."""
    check_blob_prefix(None)
    check_blob_prefix("")
    check_blob_prefix("report-")

    with pytest.raises(BlobValidationError, match="cannot contain"):
        check_blob_prefix("a/b")
    with pytest.raises(BlobValidationError, match="must be a string"):
        check_blob_prefix(3)


def test_check_source_stream_accepts_readable_streams() -> None:
    check_source_stream(io.BytesIO(b"x"))


def test_check_source_stream_rejects_missing_and_unreadable(tmp_path) -> None:
    """Null, non-stream and write-only sources are rejected."""
    with pytest.raises(BlobValidationError, match="required"):
        check_source_stream(None)
    with pytest.raises(BlobValidationError, match="must be readable"):
        check_source_stream(b"raw bytes")

    with (tmp_path / "out").open("wb") as write_only:
        with pytest.raises(BlobValidationError, match="not open for reading"):
            check_source_stream(write_only)
