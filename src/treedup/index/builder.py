import asyncio
import logging
from asyncio import TaskGroup
from pathlib import Path
from typing import Awaitable, Callable, NamedTuple

from .duplicate_index import DuplicateIndex
from ..errors import DigestFailure
from ..tree.filters import EntryFilter
from ..tree.nodes import Directory, RegularFile, iter_files
from ..utils.throttler import Throttler

logger = logging.getLogger(__name__)


class IndexArgs(NamedTuple):
    """Arguments for building a duplicate index."""
    calculate_digest: Callable[[Path], Awaitable[str]]  # Usually Processor.digest
    concurrency: int  # Maximum number of digests in flight
    file_filter: EntryFilter | None = None  # Restricts which regular files are indexed


class IndexBuilder:
    """Builds a DuplicateIndex from one traversal of a tree's regular files.

    Names are indexed as files are visited. Digests are computed concurrently,
    throttled to the configured concurrency, and recorded by this coordinator
    once all of them are done, in traversal order. Only the coordinator touches
    the index, so bucket contents are deterministic for a given tree.

    A file whose content cannot be read is logged, left out of the content index
    and recorded as a DigestFailure on the index; it stays in the name index.
    """

    def __init__(self, args: IndexArgs):
        self._calculate_digest = args.calculate_digest
        self._concurrency = args.concurrency
        self._file_filter = args.file_filter

    async def run(self, tree: Directory) -> DuplicateIndex:
        index = DuplicateIndex()
        pending: list[tuple[RegularFile, asyncio.Task]] = []

        async with TaskGroup() as tg:
            throttler = Throttler(tg, self._concurrency)

            for file in iter_files(tree):
                if self._file_filter is not None and not self._file_filter.matches(file.name):
                    logger.debug(f"Not indexed: {file.path}")
                    continue

                index.record_by_name(file)
                pending.append((file, await throttler.schedule(self._digest(file))))

        for file, task in pending:
            result = task.result()
            if isinstance(result, DigestFailure):
                index.record_digest_failure(result)
            else:
                index.record_by_content(result, file)

        return index

    async def _digest(self, file: RegularFile) -> str | DigestFailure:
        try:
            return await self._calculate_digest(file.path)
        except OSError as e:
            failure = DigestFailure(file.path, e)
            logger.warning(f"Skipping content: {failure}")
            return failure


async def build_index(tree: Directory, args: IndexArgs) -> DuplicateIndex:
    return await IndexBuilder(args).run(tree)
