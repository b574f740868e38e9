"""Reversible encoding of abstract path segments into safe file names.

Segments are percent-encoded over their UTF-8 bytes with only RFC 3986
unreserved characters left as-is, so an encoded name never contains a path
separator, NUL, or a character reserved on common filesystems. A leading dot
is escaped too: encoded names are never ``.``/``..`` and never hidden files.
Lone surrogates pass through ``surrogatepass`` so every ``str`` round-trips.
"""

from __future__ import annotations

from urllib.parse import quote, unquote_to_bytes

_ENCODING = "utf-8"
_ERRORS = "surrogatepass"
_ESCAPED_DOT = "%2E"


def encode_segment(segment: str) -> str:
    """Return the filesystem-safe form of one path segment."""
    encoded = quote(segment.encode(_ENCODING, _ERRORS), safe="")
    if encoded.startswith("."):
        encoded = _ESCAPED_DOT + encoded[1:]
    return encoded


def decode_segment(safe_segment: str) -> str:
    """Return the original path segment for one encoded file name."""
    raw = unquote_to_bytes(safe_segment.encode(_ENCODING, _ERRORS))
    return raw.decode(_ENCODING, _ERRORS)


def is_encoded_name(name: str) -> bool:
    """Return True only for names ``encode_segment`` would produce itself.

    Dot-prefixed entries, undecodable escapes such as ``%FF`` and spellings
    that re-encode differently (``a b``, ``%3a``) are foreign to the store.
    """
    if name.startswith("."):
        return False
    try:
        return encode_segment(decode_segment(name)) == name
    except UnicodeDecodeError:
        return False
