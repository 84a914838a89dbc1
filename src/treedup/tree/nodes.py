"""In-memory snapshot of a scanned directory tree."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple


class FileMetadata(NamedTuple):
    """Metadata captured when a leaf entry was probed (never follows symlinks)."""
    size: int
    mtime_ns: int
    mode: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> 'FileMetadata':
        return cls(st.st_size, st.st_mtime_ns, st.st_mode)


@dataclass(frozen=True)
class RegularFile:
    path: Path
    metadata: FileMetadata

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class Symlink:
    """A symbolic link recorded as a leaf. The target is kept exactly as read."""
    path: Path
    target: str
    metadata: FileMetadata

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class Directory:
    """A directory and its children, in the order the filesystem listed them."""
    path: Path
    children: tuple['Node', ...] = ()

    @property
    def name(self) -> str:
        return self.path.name


Node = Directory | RegularFile | Symlink


def iter_nodes(directory: Directory) -> Iterator[Node]:
    """Yield every descendant of directory, depth-first, parents before children."""
    stack = [iter(directory.children)]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue

        yield child
        if isinstance(child, Directory):
            stack.append(iter(child.children))


def iter_files(directory: Directory) -> Iterator[RegularFile]:
    for node in iter_nodes(directory):
        if isinstance(node, RegularFile):
            yield node
