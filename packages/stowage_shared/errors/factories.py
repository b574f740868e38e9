"""Constructors for ``ErrorDetail`` values, one per category in use."""

from __future__ import annotations

from typing import Mapping

from . import codes
from .types import ErrorCategory, ErrorDetail


def make_error(
    category: ErrorCategory,
    message: str,
    *,
    code: str,
    errno: int | None = None,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Build one detail, copying ``metadata`` so callers can reuse theirs."""
    return ErrorDetail(
        code=code,
        message=message,
        category=category,
        errno=errno,
        metadata=dict(metadata or {}),
    )


def validation_error(
    message: str,
    *,
    code: str = codes.INVALID_ARGUMENT,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Caller input was rejected before any filesystem access."""
    return make_error(ErrorCategory.VALIDATION, message, code=code, metadata=metadata)


def policy_error(
    message: str,
    *,
    code: str = codes.PERMISSION_DENIED,
    errno: int | None = None,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """The location exists but may not be accessed through this store."""
    return make_error(
        ErrorCategory.POLICY, message, code=code, errno=errno, metadata=metadata
    )
