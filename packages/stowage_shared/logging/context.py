"""Structured log context carried in a ``contextvars.ContextVar``.

The context is an immutable mapping of string fields. Every change installs a
new mapping, so values bound inside a thread started by ``asyncio.to_thread``
(which copies the caller's context) never leak back to the caller.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Iterator, Mapping

_EMPTY: Mapping[str, str] = MappingProxyType({})
_LOG_CONTEXT: ContextVar[Mapping[str, str]] = ContextVar(
    "stowage_log_context", default=_EMPTY
)


def _merged(values: Mapping[str, object]) -> Mapping[str, str]:
    """Return the current context updated with the non-``None`` ``values``."""
    merged = dict(_LOG_CONTEXT.get())
    merged.update({str(k): str(v) for k, v in values.items() if v is not None})
    return MappingProxyType(merged)


def get_context() -> dict[str, str]:
    """Return a mutable copy of the active context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Add fields to the active context until cleared; ``None`` is skipped."""
    _LOG_CONTEXT.set(_merged(values))


def clear_context(*keys: str) -> None:
    """Drop the named fields, or every field when none are named."""
    if not keys:
        _LOG_CONTEXT.set(_EMPTY)
        return
    remaining = {k: v for k, v in _LOG_CONTEXT.get().items() if k not in keys}
    _LOG_CONTEXT.set(MappingProxyType(remaining))


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` for the duration of the block only."""
    token = _LOG_CONTEXT.set(_merged(values))
    try:
        yield
    finally:
        _LOG_CONTEXT.reset(token)
