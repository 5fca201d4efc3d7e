"""Group hash results by fingerprint."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from collections.abc import Iterable
from dupscan.hasher import hash_file
from dupscan.hasher import hash_paths
from dupscan.hasher import HashResult

import logging


logger = logging.getLogger(__name__)

DuplicateGroups = dict[int, list[str]]


def aggregate(results: Iterable[HashResult]) -> DuplicateGroups:
    """Group result paths by fingerprint, in arrival order.

    Raises the error of the first failed result without consuming any
    further results. Groups of one are kept; see duplicates().
    """
    groups: defaultdict[int, list[str]] = defaultdict(list)
    consumed = 0
    for result in results:
        if result.error is not None:
            logger.debug(f"aborting after {consumed} result(s): {result.path} failed")
            raise result.error
        groups[result.fingerprint].append(result.path)
        consumed += 1

    logger.debug(f"aggregated {consumed} file(s) into {len(groups)} group(s)")
    return dict(groups)


def duplicates(groups: DuplicateGroups) -> DuplicateGroups:
    """Keep only the groups with two or more members."""
    return {fp: paths for fp, paths in groups.items() if len(paths) >= 2}


def find_duplicates(
    paths: Iterable[str],
    hasher: Callable[[str], int] = hash_file,
) -> DuplicateGroups:
    """Single-threaded counterpart of pool.find_duplicates_concurrently."""
    return aggregate(hash_paths(paths, hasher=hasher))
