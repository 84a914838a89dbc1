"""Exception taxonomy for tree scanning.

Fatal errors (SubtreeUnreadable, RootUnreadable, ConfigError, PathEncodingError)
abort the current scan and are reported once by the CLI. EntryUnreadable and
DigestFailure describe recoverable conditions: the affected entry is dropped and
scanning continues.
"""

import os
from pathlib import Path


class ScanError(Exception):
    """Base class for all errors raised by treedup."""


class SubtreeUnreadable(ScanError):
    """A directory below the scan root could not be listed."""

    def __init__(self, path: str | os.PathLike, cause: OSError | None = None):
        self.path = Path(path)
        self.cause = cause
        reason = f": {cause.strerror or cause}" if cause is not None else ""
        super().__init__(f"cannot list directory {self.path}{reason}")


class RootUnreadable(SubtreeUnreadable):
    """The scan root does not exist, is not a directory, or cannot be listed."""


class EntryUnreadable(ScanError):
    """A single directory entry could not be stat'ed."""

    def __init__(self, path: str | os.PathLike, cause: OSError):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"cannot stat {self.path}: {cause.strerror or cause}")


class DigestFailure(ScanError):
    """A regular file could not be read for hashing."""

    def __init__(self, path: str | os.PathLike, cause: OSError):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"cannot digest {self.path}: {cause.strerror or cause}")


class PathEncodingError(ScanError, ValueError):
    """A path's raw bytes are not valid text where text is required."""

    def __init__(self, raw: bytes):
        self.raw = raw
        super().__init__(f"path is not valid UTF-8: {raw!r}")


class ConfigError(ScanError):
    """Settings file is missing, malformed, or holds a value of the wrong type."""
