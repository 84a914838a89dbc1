import os
from pathlib import Path
from typing import Iterator

from ..errors import DigestFailure
from ..tree.nodes import RegularFile


def normalize_name(path: str | os.PathLike) -> str:
    """Reduce a path to the key used by the name index.

    Only the final path segment is kept, minus its last extension:

        >>> normalize_name('a/report.pdf')
        'report'
        >>> normalize_name('b/archive.tar.gz')
        'archive.tar'
        >>> normalize_name('c/.profile')
        '.profile'
        >>> normalize_name('d/report.')
        'report'
    """
    name = Path(path).name
    stem, dot, _ = name.rpartition('.')
    # A leading dot starts the name, it does not separate an extension
    return stem if dot and stem else name


class DuplicateIndex:
    """Two independent groupings of the same regular files.

    by-content maps a content fingerprint to the files sharing it, by-name maps a
    normalized name (see normalize_name()) to the files sharing it. Buckets keep
    insertion order, and buckets are iterated in the order their keys were first
    recorded. The index is a plain owned value: whoever builds it is the only
    writer.
    """

    def __init__(self):
        self._by_content: dict[str, list[RegularFile]] = {}
        self._by_name: dict[str, list[RegularFile]] = {}
        self._digest_failures: list[DigestFailure] = []

    def record_by_content(self, fingerprint: str, file: RegularFile) -> None:
        self._by_content.setdefault(fingerprint, []).append(file)

    def record_by_name(self, file: RegularFile) -> None:
        self._by_name.setdefault(normalize_name(file.path), []).append(file)

    def record_digest_failure(self, failure: DigestFailure) -> None:
        """Remember a file left out of the content index because it could not be read."""
        self._digest_failures.append(failure)

    @property
    def digest_failures(self) -> list[DigestFailure]:
        return list(self._digest_failures)

    def by_content(self, fingerprint: str) -> list[RegularFile] | None:
        return self._by_content.get(fingerprint)

    def by_name(self, name: str) -> list[RegularFile] | None:
        return self._by_name.get(name)

    def buckets_by_content(self) -> Iterator[tuple[str, list[RegularFile]]]:
        yield from self._by_content.items()

    def buckets_by_name(self) -> Iterator[tuple[str, list[RegularFile]]]:
        yield from self._by_name.items()

    @property
    def content_file_count(self) -> int:
        """Number of files recorded in the content index."""
        return sum(len(files) for files in self._by_content.values())

    @property
    def name_file_count(self) -> int:
        return sum(len(files) for files in self._by_name.values())
