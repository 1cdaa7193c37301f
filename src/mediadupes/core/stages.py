"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages for mediadupes' two-pass duplicate detection engine.

STAGES
------
SizeStageImpl   : Partitions candidates into size buckets, drops singleton sizes
DigestStageImpl : Hashes every bucket member exactly once and resolves keepers

STAGE CONTRACTS
---------------
  • Size bucketing finishes before any file is opened
  • Only files in buckets of 2+ members are hashed; no file is hashed twice
  • Per bucket, the first file with a new digest is the keeper; later files with
    the same digest are duplicates. Order is discovery order, even when digests
    are computed by a thread pool
  • A file that fails to hash is reported and takes no role at all
  • With verification, an unreadable keeper is reported and its first duplicate takes over
  • Progress is reported via callback (stage name, processed count, total count)

PER-FILE STATES (digest stage)
------------------------------
Pending → Hashed → KeeperAssigned | MarkedDuplicate
Pending → Failed
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Dict, Optional, Tuple

from mediadupes.core.errors import HashError, notify
from mediadupes.core.grouper import FileGrouperImpl
from mediadupes.core.hasher import HasherImpl
from mediadupes.core.interfaces import SizeStage, DigestStage, Hasher
from mediadupes.core.models import (
    CandidateFile, DuplicateGroup, SizeBuckets, Stage, ErrorCallback, ProgressCallback)

logger = logging.getLogger(__name__)

# (file, digest, error): exactly one of digest / error is set
HashOutcome = Tuple[CandidateFile, Optional[bytes], Optional[HashError]]


class SizeStageImpl(SizeStage):
    def __init__(self, grouper: FileGrouperImpl = None):
        self.grouper = grouper or FileGrouperImpl()

    def process(
            self,
            files: List[CandidateFile],
            progress_callback: Optional[ProgressCallback] = None
    ) -> SizeBuckets:
        """
        Group by file size.
        Returns buckets with 2+ files of the same size.
        """
        buckets = self.grouper.group_by_size(files)

        if progress_callback:
            total_files = len(files)
            progress_callback(Stage.SIZE.value, total_files, total_files)  # Instant, in-memory

        logger.debug(
            f"Size grouping: {len(files)} files → {len(buckets)} buckets "
            f"({sum(len(b) for b in buckets.values())} files to hash)"
        )
        return buckets


class DigestStageImpl(DigestStage):
    """
    Resolves size buckets into duplicate groups by full-content digest.

    Args:
        hasher: Digest provider (BLAKE2b-256 streaming hasher by default)
        workers: Threads used for hashing; 1 means hash on the calling thread
        verify_content: Compare bytes against the keeper before accepting a digest match
    """

    def __init__(self, hasher: Hasher = None, workers: int = 1, verify_content: bool = False):
        self.hasher = hasher or HasherImpl()
        self.workers = workers
        self.verify_content = verify_content
        # Digests computed successfully by the last process() call
        self.files_hashed = 0

    def process(
            self,
            buckets: SizeBuckets,
            progress_callback: Optional[ProgressCallback] = None,
            error_callback: Optional[ErrorCallback] = None
    ) -> Tuple[List[DuplicateGroup], List[str]]:
        files = [file for bucket in buckets.values() for file in bucket]
        outcomes = self._compute_digests(files, progress_callback)
        self.files_hashed = sum(1 for _, digest, _ in outcomes if digest is not None)

        groups: List[DuplicateGroup] = []
        duplicate_paths: List[str] = []

        offset = 0
        for size, bucket in buckets.items():
            bucket_outcomes = outcomes[offset:offset + len(bucket)]
            offset += len(bucket)
            groups.extend(self._resolve_bucket(size, bucket_outcomes, duplicate_paths, error_callback))

        return groups, duplicate_paths

    def _compute_digests(
            self,
            files: List[CandidateFile],
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[HashOutcome]:
        """
        Hashes every file once. Results come back in input order regardless of
        which worker finished first.
        """
        total_files = len(files)
        outcomes: List[HashOutcome] = []

        def work(file: CandidateFile) -> HashOutcome:
            try:
                return file, self.hasher.compute_digest(file), None
            except HashError as e:
                return file, None, e

        def collect(results) -> None:
            for outcome in results:
                outcomes.append(outcome)
                if progress_callback:
                    progress_callback(Stage.DIGEST.value, len(outcomes), total_files)

        if self.workers > 1 and total_files > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                collect(executor.map(work, files))
        else:
            collect(map(work, files))

        return outcomes

    def _resolve_bucket(
            self,
            size: int,
            outcomes: List[HashOutcome],
            duplicate_paths: List[str],
            error_callback: Optional[ErrorCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Assigns keeper / duplicate roles inside one size bucket.
        Appends duplicate paths in discovery order and returns groups with 2+ files.
        """
        groups_by_digest: Dict[bytes, List[DuplicateGroup]] = {}
        bucket_groups: List[DuplicateGroup] = []

        for file, digest, error in outcomes:
            if error is not None:
                self._fail(error, error_callback)
                continue

            candidates = groups_by_digest.setdefault(digest, [])
            if candidates:
                try:
                    group = self._find_matching_group(file, candidates, duplicate_paths, error_callback)
                except HashError as e:
                    self._fail(e, error_callback)
                    continue

                if group is not None:
                    group.add_file(file)
                    duplicate_paths.append(file.path)
                    logger.debug(f"Duplicate: {file.path} (keeper: {group.keeper.path})")
                    continue

                # Candidates may have been emptied by unreadable keepers
                if candidates:
                    logger.warning(
                        f"Digest collision: {file.path} matches {candidates[0].keeper.path} "
                        f"by digest but not by content"
                    )

            group = DuplicateGroup(size=size, digest=digest, files=[file])
            candidates.append(group)
            bucket_groups.append(group)
            logger.debug(f"Keeper: {file.path}")

        return [g for g in bucket_groups if g.is_duplicate()]

    def _find_matching_group(
            self,
            file: CandidateFile,
            candidates: List[DuplicateGroup],
            duplicate_paths: List[str],
            error_callback: Optional[ErrorCallback] = None
    ) -> Optional[DuplicateGroup]:
        """
        Picks the group whose keeper this file duplicates.
        Without content verification the digest match is trusted.

        With verification, a keeper that can no longer be read is reported once and
        dropped; its first duplicate takes over. Groups left empty leave `candidates`.

        Raises:
            HashError: the file itself could not be read during comparison
        """
        if not self.verify_content:
            return candidates[0]

        for group in list(candidates):
            while group.files:
                keeper = group.keeper
                try:
                    if self.hasher.contents_equal(keeper, file):
                        return group
                    break
                except HashError as e:
                    if e.path != keeper.path:
                        raise HashError(
                            f"Could not verify {file.path} against {keeper.path}: {e}",
                            path=file.path
                        ) from e
                    self._drop_keeper(group, duplicate_paths, e, error_callback)
            if not group.files:
                candidates.remove(group)
        return None

    def _drop_keeper(
            self,
            group: DuplicateGroup,
            duplicate_paths: List[str],
            error: HashError,
            error_callback: Optional[ErrorCallback]
    ) -> None:
        """Removes an unreadable keeper and promotes the next file in discovery order."""
        self._fail(error, error_callback)
        group.files.pop(0)
        if group.files:
            duplicate_paths.remove(group.keeper.path)
            logger.debug(f"Keeper: {group.keeper.path} (replaces unreadable {error.path})")

    @staticmethod
    def _fail(error: HashError, error_callback: Optional[ErrorCallback]) -> None:
        logger.warning(f"Skipping file: {error}")
        notify(error_callback, error)
