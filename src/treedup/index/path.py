"""Path encoding helpers.

Paths produced by the walker come from os.scandir() names, which carry any bytes
that are not valid in the filesystem encoding as surrogate escapes. The path
value therefore always round-trips to the exact bytes on disk; text is only
demanded at the edges, where these helpers decide what happens to names that
are not valid UTF-8.
"""

import os
from pathlib import Path

from ..errors import PathEncodingError


def encode_path(path: str | os.PathLike) -> bytes:
    """Return the raw filesystem bytes of path."""
    return os.fsencode(path)


def decode_raw_path(raw: bytes) -> Path:
    """Inverse of encode_path()."""
    return Path(os.fsdecode(raw))


def decode_path(path: str | os.PathLike) -> str:
    """Return path as strict UTF-8 text.

    Raises:
        PathEncodingError: The raw bytes of path are not valid UTF-8
    """
    raw = encode_path(path)
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        raise PathEncodingError(raw) from None


def display_path(path: str | os.PathLike) -> str:
    """Return path as printable text, escaping bytes that are not valid UTF-8."""
    return encode_path(path).decode('utf-8', errors='backslashreplace')
