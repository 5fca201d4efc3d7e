"""Typed failures raised by the scanning core."""

from __future__ import annotations

import os


class ScanError(OSError):
    """Base class for failures while scanning for duplicates."""

    @classmethod
    def wrap(cls, exc: OSError, path) -> ScanError:
        """Build an instance carrying *exc*'s errno and message for *path*."""
        return cls(exc.errno, exc.strerror or str(exc), os.fspath(path))


class OpenError(ScanError):
    """A directory or file could not be opened."""


class ListError(ScanError):
    """The entries of a directory could not be enumerated."""


class ReadError(ScanError):
    """Reading a file failed before end of stream."""
