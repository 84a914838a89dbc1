import logging
from pathlib import Path
from typing import NamedTuple

from ..index.builder import IndexArgs, build_index
from ..index.duplicate_index import DuplicateIndex
from ..report.collision import DuplicateReport, find_collisions
from ..tree.filters import EntryFilter
from ..tree.nodes import Directory
from ..tree.walker import walk_tree
from ..utils.processor import Processor

logger = logging.getLogger(__name__)


class ScanArgs(NamedTuple):
    """Arguments for a scan."""
    processor: Processor  # Digest backend
    entry_filter: EntryFilter  # Applied by the walker to every entry name
    file_filter: EntryFilter | None = None  # Applied to regular files before indexing


class ScanResult(NamedTuple):
    tree: Directory
    index: DuplicateIndex
    report: DuplicateReport


async def do_scan(root: Path, args: ScanArgs) -> ScanResult:
    """Walk root, index its regular files and collect collisions.

    Raises:
        RootUnreadable: root cannot be listed
        SubtreeUnreadable: a directory below root cannot be listed
    """
    logger.info(f"Walking {root} with {args.entry_filter!r}")
    tree = walk_tree(root, args.entry_filter)

    index = await build_index(tree, IndexArgs(
        args.processor.digest,
        args.processor.concurrency * 2,
        args.file_filter,
    ))
    logger.info(f"Indexed {index.name_file_count} files, {len(index.digest_failures)} unreadable")

    report = find_collisions(index)
    logger.info(f"Found {len(report.content_groups)} content groups and {len(report.name_groups)} name groups")

    return ScanResult(tree, index, report)
