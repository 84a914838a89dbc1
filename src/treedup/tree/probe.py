import os
import stat
from enum import StrEnum
from pathlib import Path
from typing import NamedTuple


class EntryKind(StrEnum):
    DIRECTORY = 'directory'
    REGULAR_FILE = 'regular_file'
    SYMLINK = 'symlink'
    SPECIAL = 'special'
    UNREADABLE = 'unreadable'


class Probe(NamedTuple):
    """Outcome of probing a single path.

    Attributes:
        kind: Classification of the entry
        stat: Result of lstat(), None when kind is UNREADABLE
        error: The OSError raised by lstat(), None unless kind is UNREADABLE
    """
    kind: EntryKind
    stat: os.stat_result | None = None
    error: OSError | None = None


def probe(path: Path) -> Probe:
    """Classify path without dereferencing symlinks.

    A symlink is reported as SYMLINK even if it points to a directory. Failure to
    stat (permission denied, entry removed since listing) is reported as
    UNREADABLE rather than raised; the caller decides whether to skip.
    """
    try:
        st = path.stat(follow_symlinks=False)
    except OSError as e:
        return Probe(EntryKind.UNREADABLE, error=e)

    if stat.S_ISLNK(st.st_mode):
        kind = EntryKind.SYMLINK
    elif stat.S_ISDIR(st.st_mode):
        kind = EntryKind.DIRECTORY
    elif stat.S_ISREG(st.st_mode):
        kind = EntryKind.REGULAR_FILE
    else:
        kind = EntryKind.SPECIAL

    return Probe(kind, st)
