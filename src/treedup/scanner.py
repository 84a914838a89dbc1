import asyncio
import os
from pathlib import Path
from typing import Iterable

from .commands.scan import ScanArgs, ScanResult, do_scan
from .index.settings import ScanSettings
from .tree.filters import IncludeFilter, default_filter
from .utils.processor import Processor


class Scanner:
    """Workflow entry point for finding duplicates under a directory.

    Scanner holds the scan policy (which entries are walked, which files are
    indexed) and runs the walk/index/report pipeline on a Processor. The
    Processor is owned by the caller, so one pool can serve several scans:

        with Processor() as processor:
            scanner = Scanner(processor, exclude_patterns=['*.tmp'])
            result = scanner.scan('/photos')
            for group in result.report.groups():
                ...

    Each scan builds a fresh tree and index; nothing is kept between scans.
    """

    def __init__(self, processor: Processor, *,
                 exclude_patterns: Iterable[str] = (),
                 include_patterns: Iterable[str] = (),
                 include_hidden: bool = False):
        """Initialize the scanner.

        Args:
            processor: Digest backend
            exclude_patterns: Glob patterns; matching entries, and the subtrees of
                              matching directories, are not walked
            include_patterns: Glob patterns; when given, only regular files whose
                              name matches one of them are indexed
            include_hidden: Walk entries whose name starts with a dot
        """
        self._processor = processor
        self.exclude_patterns: tuple[str, ...] = tuple(exclude_patterns)
        self.include_patterns: tuple[str, ...] = tuple(include_patterns)
        self.include_hidden = include_hidden

    @classmethod
    def from_settings(cls, processor: Processor, settings: ScanSettings) -> 'Scanner':
        return cls(
            processor,
            exclude_patterns=settings.exclude_patterns,
            include_patterns=settings.include_patterns,
            include_hidden=settings.include_hidden,
        )

    def scan(self, root: str | os.PathLike) -> ScanResult:
        """Scan root and report duplicates.

        Raises:
            RootUnreadable: root does not exist, is not a directory, or cannot be listed
            SubtreeUnreadable: a directory below root cannot be listed
        """
        return asyncio.run(do_scan(Path(root), self._scan_args()))

    def _scan_args(self) -> ScanArgs:
        entry_filter = default_filter(self.exclude_patterns, include_hidden=self.include_hidden)
        file_filter = IncludeFilter(self.include_patterns) if self.include_patterns else None
        return ScanArgs(self._processor, entry_filter, file_filter)
