"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception taxonomy for the duplicate detection pipeline.

TraversalError, HashError and DeletionError are recovered locally and turned into
ScanError records; FatalWalkError is the only one that aborts a scan.
"""

from typing import Optional

from mediadupes.core.models import ErrorKind, ScanError


class MediaDupesError(Exception):
    """Base class for all pipeline errors."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class TraversalError(MediaDupesError):
    """A directory or file entry could not be accessed while walking."""
    kind = ErrorKind.TRAVERSAL


class HashError(MediaDupesError):
    """A file could not be opened or fully read for digesting."""
    kind = ErrorKind.HASH


class DeletionError(MediaDupesError):
    """A confirmed duplicate could not be removed."""
    kind = ErrorKind.DELETION


class FatalWalkError(MediaDupesError):
    """The root path itself is missing, not a directory, or unreadable."""


def notify(error_callback, exc: MediaDupesError) -> None:
    """Forward a recovered error to the caller's error channel, if any."""
    if error_callback is not None:
        error_callback(ScanError.from_exception(exc))
