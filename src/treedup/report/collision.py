"""Turning index buckets into duplicate groups."""

from enum import StrEnum
from typing import Iterable, Iterator

from ..index.duplicate_index import DuplicateIndex
from ..tree.nodes import RegularFile


class DuplicateKind(StrEnum):
    CONTENT = 'content'
    NAME = 'name'


class DuplicateGroup:
    """Files sharing one index key.

    Attributes:
        kind: Which index the group comes from. CONTENT groups are probable
              duplicates (same fingerprint); NAME groups only share a normalized name.
        key: The fingerprint or normalized name shared by the members
        members: All files in the bucket, in bucket order. Always two or more.
    """

    def __init__(self, kind: DuplicateKind, key: str, members: Iterable[RegularFile]):
        self.kind = DuplicateKind(kind)
        self.key = key
        self.members: list[RegularFile] = list(members)

    @property
    def representative(self) -> RegularFile:
        """The file the group is reported under, the first one recorded."""
        return self.members[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DuplicateGroup):
            return False
        return self.kind == other.kind and self.key == other.key and self.members == other.members

    def __repr__(self) -> str:
        return f"DuplicateGroup({self.kind.value}, {self.key!r}, {len(self.members)} members)"


class DuplicateReport:
    """Content groups and name groups of one scan, kept apart.

    The same pair of files may legitimately appear in both lists.
    """

    def __init__(self, content_groups: Iterable[DuplicateGroup] = (), name_groups: Iterable[DuplicateGroup] = ()):
        self.content_groups: list[DuplicateGroup] = list(content_groups)
        self.name_groups: list[DuplicateGroup] = list(name_groups)

    def groups(self) -> Iterator[DuplicateGroup]:
        """Yield content groups first, then name groups."""
        yield from self.content_groups
        yield from self.name_groups

    def __bool__(self) -> bool:
        return bool(self.content_groups or self.name_groups)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DuplicateReport):
            return False
        return self.content_groups == other.content_groups and self.name_groups == other.name_groups

    def __repr__(self) -> str:
        return f"DuplicateReport(content_groups={self.content_groups!r}, name_groups={self.name_groups!r})"


def _collisions(kind: DuplicateKind, buckets: Iterable[tuple[str, list[RegularFile]]]) -> list[DuplicateGroup]:
    return [DuplicateGroup(kind, key, files) for key, files in buckets if len(files) > 1]


def find_collisions(index: DuplicateIndex) -> DuplicateReport:
    """Collect every bucket of index with two or more files. The index is not modified."""
    return DuplicateReport(
        _collisions(DuplicateKind.CONTENT, index.buckets_by_content()),
        _collisions(DuplicateKind.NAME, index.buckets_by_name()),
    )
