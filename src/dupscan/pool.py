"""Bounded thread pool that hashes files in parallel."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from concurrent.futures import as_completed
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from dupscan.aggregator import aggregate
from dupscan.aggregator import DuplicateGroups
from dupscan.hasher import hash_file
from dupscan.hasher import HashResult

import logging
import os


logger = logging.getLogger(__name__)


def default_workers() -> int:
    """Number of hashing workers to use when none is configured."""
    return os.cpu_count() or 1


class WorkerPool:
    """Hash files on at most *workers* threads.

    Each worker holds at most one open file, so the number of concurrently
    open handles never exceeds the worker count.
    """

    def __init__(
        self,
        workers: int | None = None,
        hasher: Callable[[str], int] = hash_file,
    ) -> None:
        if workers is None:
            workers = default_workers()
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self.hasher = hasher

    def _hash(self, path: str) -> HashResult:
        try:
            fingerprint = self.hasher(path)
        except Exception as exc:
            return HashResult(path=path, error=exc)
        return HashResult(path=path, fingerprint=fingerprint)

    def imap_unordered(self, paths: Iterable[str]) -> Iterator[HashResult]:
        """Yield exactly one HashResult per path, in completion order.

        Every path is submitted before the first result is awaited. The
        iterator counts results down from the number of paths and finishes
        when the count reaches zero; the executor is shut down and its
        threads joined before it returns. Closing the iterator early cancels
        the paths not yet started and still joins every thread.
        """
        paths = list(paths)
        if not paths:
            return

        n = min(self.workers, len(paths))
        executor = ThreadPoolExecutor(max_workers=n, thread_name_prefix="dupscan-hasher")
        logger.debug(f"hashing {len(paths)} file(s) on {n} worker(s)")
        remaining = len(paths)
        try:
            futures = [executor.submit(self._hash, path) for path in paths]
            for future in as_completed(futures):
                remaining -= 1
                yield future.result()
        finally:
            if remaining:
                logger.debug(f"cancelling {remaining} outstanding file(s)")
            executor.shutdown(wait=True, cancel_futures=True)


def find_duplicates_concurrently(
    paths: Iterable[str],
    workers: int | None = None,
    hasher: Callable[[str], int] = hash_file,
    progress: Callable[[HashResult], None] | None = None,
) -> DuplicateGroups:
    """Hash *paths* on a WorkerPool and group them by fingerprint.

    Raises the first hashing failure received; remaining work is cancelled.
    *progress* is called once for every result consumed.
    """
    pool = WorkerPool(workers=workers, hasher=hasher)
    with closing(pool.imap_unordered(paths)) as results:
        if progress is not None:
            results = _observed(results, progress)
        return aggregate(results)


def _observed(
    results: Iterator[HashResult],
    progress: Callable[[HashResult], None],
) -> Iterator[HashResult]:
    for result in results:
        progress(result)
        yield result
