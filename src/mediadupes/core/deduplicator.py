"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the two-stage duplicate detection pipeline over scanned files:
    size buckets → full-content digest (BLAKE2b-256)
"""
import time
from typing import List, Tuple, Optional

from mediadupes.core.models import (
    CandidateFile, DuplicateGroup, DeduplicationStats, DeduplicationParams,
    ErrorCallback, ProgressCallback)
from mediadupes.core.grouper import FileGrouperImpl
from mediadupes.core.hasher import HasherImpl
from mediadupes.core.interfaces import Deduplicator, Hasher
from mediadupes.core.stages import SizeStageImpl, DigestStageImpl


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Runs size bucketing and digest resolution strictly in sequence
    and collects per-stage statistics.
    """
    def __init__(self, grouper: FileGrouperImpl = None, hasher: Hasher = None):
        self.grouper = grouper or FileGrouperImpl()
        self.hasher = hasher or HasherImpl()

    def find_duplicates(
        self,
        files: List[CandidateFile],
        params: DeduplicationParams,
        progress_callback: Optional[ProgressCallback] = None,
        error_callback: Optional[ErrorCallback] = None
    ) -> Tuple[List[DuplicateGroup], List[str], DeduplicationStats]:
        """
        Main pipeline over scanned files.
        Args:
            files: Candidate files in discovery order
            params: Run configuration (workers, verify_content)
            progress_callback: Reports progress per stage.
            error_callback: Receives a ScanError for each file that could not be hashed.
        Returns:
            Tuple[groups, duplicate_paths, stats]
        """
        stats = DeduplicationStats()
        total_start_time = time.time()

        # Stage 1: group by size
        start_time = time.time()
        buckets = SizeStageImpl(self.grouper).process(files, progress_callback=progress_callback)
        bucketed_files = sum(len(bucket) for bucket in buckets.values())
        stats.update_stage(
            stage_name="size",
            groups_found=len(buckets),
            files_processed=bucketed_files,
            duration=time.time() - start_time
        )

        # Stage 2: full-content digest
        digest_stage = DigestStageImpl(
            self.hasher,
            workers=params.workers,
            verify_content=params.verify_content
        )
        start_time = time.time()
        groups, duplicate_paths = digest_stage.process(
            buckets,
            progress_callback=progress_callback,
            error_callback=error_callback
        )
        stats.files_hashed = digest_stage.files_hashed
        stats.update_stage(
            stage_name="digest",
            groups_found=len(groups),
            files_processed=sum(len(g.files) for g in groups),
            duration=time.time() - start_time
        )

        stats.total_time = time.time() - total_start_time
        return groups, duplicate_paths, stats
