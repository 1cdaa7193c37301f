"""
Unified command orchestrator for duplicate detection.
This is the single entry point into the core, used by the CLI and by library callers.
No terminal I/O here: results and recovered errors are returned as data.
"""
import logging
from typing import List, Optional

from mediadupes.core.config import DEFAULT_EXTENSIONS
from mediadupes.core.deduplicator import DeduplicatorImpl
from mediadupes.core.interfaces import Hasher
from mediadupes.core.models import (
    DeduplicationParams, ScanError, ScanResult, CandidateFile, ErrorCallback, ProgressCallback)
from mediadupes.core.scanner import FileWalkerImpl

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the whole detection workflow:
    1. Walk the root directory to completion
    2. Bucket candidates by size
    3. Hash bucket members and resolve keepers / duplicates

    Usage:
        params = DeduplicationParams(root_dir="~/Music")
        result = DeduplicationCommand().execute(params, error_callback=print)
        for path in result.duplicate_paths:
            ...
    """

    def __init__(self, hasher: Hasher = None):
        self._deduplicator = DeduplicatorImpl(hasher=hasher)
        self._files: List[CandidateFile] = []

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[ProgressCallback] = None,
            error_callback: Optional[ErrorCallback] = None
    ) -> ScanResult:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            error_callback: (error: ScanError) -> None, called for every recovered failure

        Returns:
            ScanResult with groups, ordered duplicate paths and all recovered errors

        Raises:
            FatalWalkError: root directory is missing, not a directory, or unreadable
        """
        errors: List[ScanError] = []

        def collect_error(error: ScanError) -> None:
            errors.append(error)
            if error_callback:
                error_callback(error)

        walker = FileWalkerImpl(root_dir=params.root_dir, extensions=params.extensions)
        self._files = walker.scan(
            error_callback=collect_error,
            progress_callback=progress_callback
        )

        groups, duplicate_paths, stats = self._deduplicator.find_duplicates(
            self._files,
            params,
            progress_callback=progress_callback,
            error_callback=collect_error
        )

        logger.debug(
            f"Scan of {params.root_dir} finished: {len(self._files)} candidates, "
            f"{len(duplicate_paths)} duplicates, {len(errors)} errors"
        )

        return ScanResult(
            groups=groups,
            duplicate_paths=duplicate_paths,
            errors=errors,
            files_scanned=len(self._files),
            stats=stats
        )

    def get_files(self) -> List[CandidateFile]:
        """Get scanned files after execution."""
        return self._files.copy()


def find_duplicates(
        root_path: str,
        extensions=DEFAULT_EXTENSIONS,
        workers: int = 1,
        verify_content: bool = False,
        error_callback: Optional[ErrorCallback] = None
) -> List[str]:
    """
    Returns the paths of all redundant copies under root_path, keepers excluded,
    in bucket-then-discovery order.

    Raises:
        FatalWalkError: root_path is missing, not a directory, or unreadable
    """
    params = DeduplicationParams(
        root_dir=root_path,
        extensions=extensions,
        workers=workers,
        verify_content=verify_content
    )
    return DeduplicationCommand().execute(params, error_callback=error_callback).duplicate_paths
