"""Recursive file discovery beneath one or more root directories."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dupscan.errors import ListError
from dupscan.errors import OpenError

import logging
import os


logger = logging.getLogger(__name__)


def _distinct_roots(roots: Iterable[str | os.PathLike]) -> list[str]:
    """Drop roots that repeat or lie inside another root.

    Comparison uses fully resolved paths, since symlinked directories
    below a root are not followed; the kept roots retain the caller's
    spelling so discovered paths read the way they were given.
    """
    candidates = [(os.fspath(r), os.path.realpath(r)) for r in roots]
    kept: list[str] = []
    seen: list[str] = []
    for original, resolved in candidates:
        covered = any(os.path.commonpath([resolved, other]) == other for other in seen)
        if covered:
            logger.debug(f"skipping root {original}: already covered")
            continue
        # A later root may contain earlier ones.
        nested = [i for i, other in enumerate(seen)
                  if os.path.commonpath([resolved, other]) == resolved]
        for i in reversed(nested):
            logger.debug(f"skipping root {kept[i]}: inside {original}")
            del kept[i]
            del seen[i]
        kept.append(original)
        seen.append(resolved)
    return kept


def find_files(roots: Iterable[str | os.PathLike]) -> list[str]:
    """Return every regular file beneath *roots*.

    Directories are visited through a growing work list: subdirectories
    found while draining it are appended and visited in turn. Symlinks to
    directories are not followed. Raises OpenError if a directory cannot
    be opened and ListError if its entries cannot be read; nothing is
    returned in either case.
    """
    pending: deque[str] = deque(_distinct_roots(roots))
    files: list[str] = []
    visited = 0
    while pending:
        directory = pending.popleft()
        try:
            entries = os.scandir(directory)
        except OSError as exc:
            raise OpenError.wrap(exc, directory) from exc
        with entries:
            try:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        pending.append(entry.path)
                    elif entry.is_file():
                        files.append(entry.path)
                    else:
                        logger.debug(f"skipping {entry.path}: not a regular file")
            except OSError as exc:
                raise ListError.wrap(exc, directory) from exc
        visited += 1

    logger.debug(f"traversal: {visited} director{'y' if visited == 1 else 'ies'}, {len(files)} file(s)")
    return files
