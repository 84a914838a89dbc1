import asyncio
import hashlib
import logging
import multiprocessing
from multiprocessing.pool import Pool
import pathlib
from typing import Awaitable

logger = logging.getLogger(__name__)

DEFAULT_HASH_ALGORITHM = 'sha256'


def supported_hash_algorithms() -> list[str]:
    """Fixed-length digests available on every platform."""
    return sorted(a for a in hashlib.algorithms_guaranteed if not a.startswith('shake_'))


def compute_digest_for_path(path: pathlib.Path, algorithm: str = DEFAULT_HASH_ALGORITHM) -> str:
    with open(path, "rb") as f:
        # file_digest reads in chunks, the file is never loaded whole
        # noinspection PyTypeChecker
        return hashlib.file_digest(f, algorithm).hexdigest()


class Processor:
    """Pool of worker processes computing file digests for asyncio callers.

    Each call returns an awaitable resolved on the caller's event loop once a
    worker has finished. Errors raised in a worker (OSError for unreadable files)
    are re-raised at the await.
    """

    def __init__(self, concurrency: int | None = None, hash_algorithm: str = DEFAULT_HASH_ALGORITHM):
        if concurrency is None:
            concurrency = multiprocessing.cpu_count()

        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")

        if hash_algorithm not in supported_hash_algorithms():
            raise ValueError(f"Unknown hash algorithm: {hash_algorithm}")

        self._concurrency = concurrency
        self._hash_algorithm = hash_algorithm
        self._pool: Pool = Pool(self._concurrency)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self._pool.close()
        self._pool.join()

    @property
    def concurrency(self):
        return self._concurrency

    @property
    def hash_algorithm(self):
        return self._hash_algorithm

    def digest(self, path: pathlib.Path) -> Awaitable[str]:
        """Digest path with the processor's configured algorithm."""
        return self._digest(path, self._hash_algorithm)

    def sha256(self, path: pathlib.Path) -> Awaitable[str]:
        return self._digest(path, 'sha256')

    def _digest(self, path: pathlib.Path, algorithm: str) -> Awaitable[str]:
        logger.info(f"Starting {algorithm} computation for: {path}")

        async def log_and_compute():
            result = await self._evaluate(compute_digest_for_path, path, algorithm)
            logger.info(f"Completed {algorithm} computation for: {path}")
            return result

        return log_and_compute()

    def _evaluate(self, func, *args):
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        self._pool.apply_async(func, args=args,
                               callback=lambda v: loop.call_soon_threadsafe(future.set_result, v),
                               error_callback=lambda e: loop.call_soon_threadsafe(future.set_exception, e))

        return future
