import logging
import os
from pathlib import Path
from typing import Iterator, NamedTuple

from .filters import EntryFilter, HiddenEntryFilter
from .nodes import Directory, FileMetadata, Node, RegularFile, Symlink
from .probe import EntryKind, Probe, probe
from ..errors import EntryUnreadable, RootUnreadable, SubtreeUnreadable

logger = logging.getLogger(__name__)


class _PendingDirectory(NamedTuple):
    """A directory being built: its remaining names and the children built so far."""
    path: Path
    names: Iterator[str]
    children: list[Node]


def walk_tree(root: str | os.PathLike, entry_filter: EntryFilter | None = None) -> Directory:
    """Build an immutable snapshot of the tree under root.

    Each directory is listed exactly once. For every entry the filter is consulted
    first, by name only; rejected entries are never stat'ed and rejected directories
    are never listed. Symlinks are recorded as leaves and never traversed, so the
    result is a strict tree even if links point back into it.

    The walk keeps its own stack of open directories, so the depth of the tree is
    not limited by the interpreter's recursion limit.

    Args:
        root: Directory to scan. The root itself is not subject to the filter.
        entry_filter: Filter deciding which entries are kept. Defaults to skipping
                      hidden entries.

    Returns:
        Directory node for root, whose path is root as given

    Raises:
        RootUnreadable: root does not exist, is not a directory, or cannot be listed
        SubtreeUnreadable: a directory below root cannot be listed
    """
    if entry_filter is None:
        entry_filter = HiddenEntryFilter()

    root_path = Path(root)
    try:
        entries = _list_directory(root_path)
    except SubtreeUnreadable as e:
        raise RootUnreadable(root_path, e.cause) from e.cause

    stack = [_PendingDirectory(root_path, iter(entries), [])]
    while True:
        current = stack[-1]
        for name in current.names:
            child_path = current.path / name
            if not entry_filter.matches(name):
                logger.debug(f"Filtered out: {child_path}")
                continue

            probed = probe(child_path)
            if probed.kind == EntryKind.DIRECTORY:
                # Listing failures below the root are fatal for the whole walk
                stack.append(_PendingDirectory(child_path, iter(_list_directory(child_path)), []))
                break

            node = _build_leaf(child_path, probed)
            if node is not None:
                current.children.append(node)
        else:
            # All names consumed: the directory is complete and joins its parent
            stack.pop()
            directory = Directory(current.path, tuple(current.children))
            if not stack:
                return directory
            stack[-1].children.append(directory)


def _list_directory(path: Path) -> list[str]:
    """Read the names in path in the order the filesystem reports them."""
    try:
        with os.scandir(path) as it:
            return [entry.name for entry in it]
    except OSError as e:
        raise SubtreeUnreadable(path, e) from e


def _build_leaf(path: Path, probed: Probe) -> Node | None:
    match probed.kind:
        case EntryKind.REGULAR_FILE:
            return RegularFile(path, FileMetadata.from_stat(probed.stat))
        case EntryKind.SYMLINK:
            try:
                target = os.readlink(path)
            except OSError as e:
                logger.debug(f"Skipping symlink: {EntryUnreadable(path, e)}")
                return None
            return Symlink(path, target, FileMetadata.from_stat(probed.stat))
        case EntryKind.UNREADABLE:
            logger.debug(f"Skipping entry: {EntryUnreadable(path, probed.error)}")
            return None
        case _:
            logger.debug(f"Skipping special file: {path}")
            return None
