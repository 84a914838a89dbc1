"""Entry filters applied to directory entry names.

A filter answers one question, ``matches(name)``: should this entry be kept?
The walker asks it for every entry before looking at the entry on disk, so a
rejected directory is never listed. The index builder can use a second filter
to decide which regular files are indexed.

Filters compose with ``&`` (or AllOf) without changing the walker's signature:

    entry_filter = HiddenEntryFilter() & ExcludeFilter(['*.tmp', 'node_modules'])
    tree = walk_tree(root, entry_filter)
"""

import fnmatch
import re
from abc import ABC, abstractmethod
from typing import Iterable


class EntryFilter(ABC):
    @abstractmethod
    def matches(self, name: str) -> bool:
        """Return True if the entry called name should be kept."""

    def __and__(self, other: 'EntryFilter') -> 'EntryFilter':
        return AllOf(self, other)


class AcceptAll(EntryFilter):
    def matches(self, name: str) -> bool:
        return True

    def __repr__(self):
        return "AcceptAll()"


class HiddenEntryFilter(EntryFilter):
    """Rejects names beginning with a dot."""

    def matches(self, name: str) -> bool:
        return not name.startswith('.')

    def __repr__(self):
        return "HiddenEntryFilter()"


class _PatternFilter(EntryFilter):
    def __init__(self, patterns: Iterable[str]):
        self.patterns: tuple[str, ...] = tuple(patterns)
        # fnmatch.translate gives the same semantics as fnmatch.fnmatchcase
        self._regex = re.compile('|'.join(fnmatch.translate(p) for p in self.patterns)) if self.patterns else None

    def _any_match(self, name: str) -> bool:
        return self._regex is not None and self._regex.match(name) is not None

    def __repr__(self):
        return f"{type(self).__name__}({list(self.patterns)!r})"


class ExcludeFilter(_PatternFilter):
    """Rejects names matching any of the glob patterns."""

    def matches(self, name: str) -> bool:
        return not self._any_match(name)


class IncludeFilter(_PatternFilter):
    """Keeps only names matching at least one glob pattern.

    With no patterns every name is kept.
    """

    def matches(self, name: str) -> bool:
        return not self.patterns or self._any_match(name)


class AllOf(EntryFilter):
    def __init__(self, *filters: EntryFilter):
        self.filters: tuple[EntryFilter, ...] = filters

    def matches(self, name: str) -> bool:
        return all(f.matches(name) for f in self.filters)

    def __and__(self, other: EntryFilter) -> EntryFilter:
        return AllOf(*self.filters, other)

    def __repr__(self):
        return f"AllOf({', '.join(repr(f) for f in self.filters)})"


def default_filter(exclude_patterns: Iterable[str] = (), *, include_hidden: bool = False) -> EntryFilter:
    """Build the walker filter: skip hidden entries unless asked, then apply exclusions."""
    exclude_patterns = tuple(exclude_patterns)
    filters: list[EntryFilter] = []
    if not include_hidden:
        filters.append(HiddenEntryFilter())
    if exclude_patterns:
        filters.append(ExcludeFilter(exclude_patterns))

    if not filters:
        return AcceptAll()
    if len(filters) == 1:
        return filters[0]
    return AllOf(*filters)
