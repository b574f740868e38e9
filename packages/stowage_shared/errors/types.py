"""Error shape shared by blob providers, the CLI and public API logging."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class ErrorCategory(str, Enum):
    """Broad failure classes a blob storage caller can act on."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    POLICY = "policy"
    STORAGE = "storage"
    UNSUPPORTED = "unsupported"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ErrorDetail:
    """One categorized failure, optionally tied to an OS ``errno``."""

    code: str
    message: str
    category: ErrorCategory
    errno: int | None = None
    metadata: Mapping[str, str] = field(default_factory=dict)

    def summary(self) -> str:
        """Return the ``CODE: message`` form used in logs and CLI output."""
        return f"{self.code}: {self.message}"
