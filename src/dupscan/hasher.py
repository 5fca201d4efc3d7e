"""Streaming XXH64 content fingerprints."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from dupscan.errors import OpenError
from dupscan.errors import ReadError

import logging
import os
import xxhash


logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096


@dataclass(frozen=True)
class HashResult:
    """Outcome of hashing one file: a fingerprint or the failure."""

    path: str
    fingerprint: int | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def hash_file(path: str | os.PathLike, chunk_size: int = CHUNK_SIZE) -> int:
    """Compute the 64-bit XXH64 fingerprint of a file's content.

    The file is read through one reusable buffer of *chunk_size* bytes.
    Raises OpenError if the file cannot be opened and ReadError if a read
    fails before end of stream.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    digest = xxhash.xxh64()
    buffer = bytearray(chunk_size)
    view = memoryview(buffer)
    try:
        f = open(path, "rb", buffering=0)
    except OSError as exc:
        raise OpenError.wrap(exc, path) from exc
    with f:
        while True:
            try:
                n = f.readinto(buffer)
            except OSError as exc:
                raise ReadError.wrap(exc, path) from exc
            if not n:
                break
            digest.update(view[:n])
    return digest.intdigest()


def hash_paths(
    paths: Iterable[str],
    hasher: Callable[[str], int] = hash_file,
) -> Iterator[HashResult]:
    """Hash *paths* one after another on the calling thread.

    Yields one HashResult per path in input order. Failures are captured
    into the result rather than raised.
    """
    for path in paths:
        try:
            fingerprint = hasher(path)
        except OSError as exc:
            logger.debug(f"failed to hash {path}: {exc}")
            yield HashResult(path=path, error=exc)
        else:
            yield HashResult(path=path, fingerprint=fingerprint)
