"""Map raised exceptions onto shared ``ErrorDetail`` values.

Filesystem failures are classified by ``errno`` so callers can tell a full
disk from a missing file or a read-only mount without parsing messages.
"""

from __future__ import annotations

import errno as errno_codes

from . import codes
from .factories import make_error
from .types import ErrorCategory, ErrorDetail

_ERRNO_MAP: dict[int, tuple[ErrorCategory, str]] = {
    errno_codes.ENOENT: (ErrorCategory.NOT_FOUND, codes.RESOURCE_NOT_FOUND),
    errno_codes.EACCES: (ErrorCategory.POLICY, codes.PERMISSION_DENIED),
    errno_codes.EPERM: (ErrorCategory.POLICY, codes.PERMISSION_DENIED),
    errno_codes.EROFS: (ErrorCategory.POLICY, codes.READ_ONLY_STORAGE),
    errno_codes.ENOSPC: (ErrorCategory.STORAGE, codes.STORAGE_FULL),
    errno_codes.EDQUOT: (ErrorCategory.STORAGE, codes.STORAGE_FULL),
    errno_codes.ENAMETOOLONG: (ErrorCategory.VALIDATION, codes.NAME_TOO_LONG),
    errno_codes.EISDIR: (ErrorCategory.STORAGE, codes.PATH_KIND_CONFLICT),
    errno_codes.ENOTDIR: (ErrorCategory.STORAGE, codes.PATH_KIND_CONFLICT),
}

# Used when an OSError subclass is raised by hand without an errno.
_ERRNO_BY_TYPE: tuple[tuple[type[OSError], int], ...] = (
    (FileNotFoundError, errno_codes.ENOENT),
    (PermissionError, errno_codes.EACCES),
    (IsADirectoryError, errno_codes.EISDIR),
    (NotADirectoryError, errno_codes.ENOTDIR),
)


def exception_to_error(exc: Exception) -> ErrorDetail:
    """Return the ``ErrorDetail`` describing ``exc``.

    Exceptions that already carry a detail on ``.error`` (validation and path
    errors) keep it unchanged.
    """
    carried = getattr(exc, "error", None)
    if isinstance(carried, ErrorDetail):
        return carried

    metadata = {"exception_type": type(exc).__name__}
    if isinstance(exc, OSError):
        return _os_error(exc, metadata)
    if isinstance(exc, ValueError):
        return make_error(
            ErrorCategory.VALIDATION,
            str(exc),
            code=codes.INVALID_ARGUMENT,
            metadata=metadata,
        )
    if isinstance(exc, NotImplementedError):
        return make_error(
            ErrorCategory.UNSUPPORTED,
            str(exc) or "operation not supported",
            code=codes.UNSUPPORTED_OPERATION,
            metadata=metadata,
        )
    return make_error(
        ErrorCategory.INTERNAL,
        str(exc) or "unexpected exception",
        code=codes.UNEXPECTED_EXCEPTION,
        metadata=metadata,
    )


def _os_error(exc: OSError, metadata: dict[str, str]) -> ErrorDetail:
    """Classify one filesystem failure by its errno."""
    number = exc.errno
    if number is None:
        number = next(
            (value for kind, value in _ERRNO_BY_TYPE if isinstance(exc, kind)), None
        )
    category, code = _ERRNO_MAP.get(
        number if number is not None else -1,
        (ErrorCategory.STORAGE, codes.IO_FAILURE),
    )
    if exc.filename is not None:
        metadata["path"] = str(exc.filename)
    return make_error(
        category,
        str(exc) or "filesystem failure",
        code=code,
        errno=number,
        metadata=metadata,
    )
