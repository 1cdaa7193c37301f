"""
Core duplicate detection engine: walker, grouper, hasher, and pipeline orchestrator.

This package contains the whole detection pipeline:
- FileWalkerImpl: recursive traversal filtered by an immutable extension allow-list
- FileGrouperImpl: size bucketing that drops singleton sizes
- HasherImpl + Blake2bAlgorithmImpl: streaming BLAKE2b-256 full-content digests
- DeduplicatorImpl: two-stage pipeline (size → digest) with keeper resolution
- Models: CandidateFile, DuplicateGroup, ScanError, ScanResult and parameters

All components are pure Python with no terminal dependencies.
"""

from .config import DEFAULT_EXTENSIONS, HASH_CHUNK_SIZE
from .scanner import FileWalkerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, Blake2bAlgorithmImpl
from .stages import SizeStageImpl, DigestStageImpl
from .deduplicator import DeduplicatorImpl
from .errors import (
    MediaDupesError, TraversalError, HashError, FatalWalkError, DeletionError)
from .models import (
    CandidateFile, DuplicateGroup, DeduplicationParams, DeduplicationStats,
    ErrorKind, ScanError, ScanResult, SizeBuckets)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "HASH_CHUNK_SIZE",
    "FileWalkerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "Blake2bAlgorithmImpl",
    "SizeStageImpl",
    "DigestStageImpl",
    "DeduplicatorImpl",
    "MediaDupesError",
    "TraversalError",
    "HashError",
    "FatalWalkError",
    "DeletionError",
    "CandidateFile",
    "DuplicateGroup",
    "DeduplicationParams",
    "DeduplicationStats",
    "ErrorKind",
    "ScanError",
    "ScanResult",
    "SizeBuckets",
]
