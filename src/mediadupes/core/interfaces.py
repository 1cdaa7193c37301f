"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate detection pipeline.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (BLAKE2b by default).
- Hasher: Interface for computing the full-content digest of a file.
- FileWalker: Interface for traversing a tree and yielding candidate files.
- FileGrouper: Interface for grouping files by size.
- SizeStage / DigestStage: Interfaces for the two pipeline stages.
- Deduplicator: Interface for the engine coordinating the stages.
"""

from typing import Protocol, List, Tuple, Optional, Iterator, Any

from mediadupes.core.models import (
    CandidateFile,
    DeduplicationParams,
    DeduplicationStats,
    DuplicateGroup,
    SizeBuckets,
    ErrorCallback,
    ProgressCallback,
)


# ===== Interfaces =====

class HashAlgorithm(Protocol):
    """
    Interface for incremental hash algorithms.

    new() must return an object with update(bytes) and digest() -> bytes,
    like the objects produced by hashlib.
    """

    @staticmethod
    def new() -> Any:
        ...


class Hasher(Protocol):
    """Interface for hashing the full content of a file."""
    def compute_digest(self, file: CandidateFile) -> bytes: ...
    def contents_equal(self, first: CandidateFile, second: CandidateFile) -> bool: ...


class FileWalker(Protocol):
    """Interface for traversing a directory tree."""
    def walk(self, error_callback: Optional[ErrorCallback] = None) -> Iterator[CandidateFile]:
        """
        Validate the root and return a lazy iterator over candidate files.

        Raises:
            FatalWalkError: root is missing, not a directory, or unreadable.
        """
        ...


class FileGrouper(Protocol):
    """Interface for grouping files before any content is read."""
    def group_by_size(self, files: List[CandidateFile]) -> SizeBuckets:
        """Group files by their size in bytes, dropping singleton sizes."""
        ...


# =============================
# Stage Interfaces
# =============================

class SizeStage(Protocol):
    def process(
        self,
        files: List[CandidateFile],
        progress_callback: Optional[ProgressCallback] = None
    ) -> SizeBuckets:
        """
        Partition files into size buckets of 2+ members.

        Args:
            files: Candidate files in discovery order.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            Buckets keyed by size, members in discovery order.
        """
        ...


class DigestStage(Protocol):
    def process(
        self,
        buckets: SizeBuckets,
        progress_callback: Optional[ProgressCallback] = None,
        error_callback: Optional[ErrorCallback] = None
    ) -> Tuple[List[DuplicateGroup], List[str]]:
        """
        Hash every bucket member once and resolve keepers and duplicates.

        Returns:
            A tuple containing:
                - Duplicate groups (keeper first)
                - Duplicate paths in bucket-then-discovery order
        """
        ...


class Deduplicator(Protocol):
    def find_duplicates(
        self,
        files: List[CandidateFile],
        params: DeduplicationParams,
        progress_callback: Optional[ProgressCallback] = None,
        error_callback: Optional[ErrorCallback] = None
    ) -> Tuple[List[DuplicateGroup], List[str], DeduplicationStats]:
        """
        Run size bucketing and digest resolution over scanned files.

        Returns:
            A tuple containing:
                - Duplicate groups
                - Ordered duplicate paths
                - Statistics collected during processing
        """
        ...
