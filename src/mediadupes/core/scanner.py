"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements the tree walker that feeds the duplicate detection pipeline.
Features:
- Validates the root eagerly (FatalWalkError), then walks lazily with os.walk
- Recursively scans directories in sorted order so discovery order is stable
- Applies the extension allow-list before touching the entry with stat
- Skips symlinks and non-regular files; unreadable entries are reported, not fatal
"""

import os
import stat
import time
from typing import List, Optional, Iterator
from pathlib import Path
import logging

from mediadupes.core.config import DEFAULT_EXTENSIONS, normalize_extensions
from mediadupes.core.errors import FatalWalkError, TraversalError, notify
from mediadupes.core.interfaces import FileWalker
from mediadupes.core.models import (
    CandidateFile, Stage, ErrorCallback, ProgressCallback, file_extension)

logger = logging.getLogger(__name__)


class FileWalkerImpl(FileWalker):
    """
    Walks a directory tree and yields files whose extension is allow-listed.

    Attributes:
        root_dir: Root directory to scan
        extensions: Immutable allow-list of dotted, case-sensitive suffixes
    """

    def __init__(self, root_dir: str, extensions=DEFAULT_EXTENSIONS):
        self.root_dir = root_dir
        self.extensions = normalize_extensions(extensions)

    def walk(self, error_callback: Optional[ErrorCallback] = None) -> Iterator[CandidateFile]:
        """
        Validates the root directory and returns a lazy iterator of candidate files.
        Every call starts a fresh traversal.

        Raises:
            FatalWalkError: root is missing, not a directory, or cannot be listed
        """
        root_path = self._validate_root()
        return self._iter_files(root_path, error_callback)

    def scan(
            self,
            error_callback: Optional[ErrorCallback] = None,
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[CandidateFile]:
        """
        Runs a full traversal and returns all candidates in discovery order.
        """
        logger.debug(f"Root directory: {self.root_dir}")
        logger.debug(f"Extensions: {sorted(self.extensions)}")

        found_files = []
        start_time = time.time()

        # Progress throttling: update every N files to reduce output overhead
        progress_interval = 5000
        progress_counter = 0

        for candidate in self.walk(error_callback=error_callback):
            found_files.append(candidate)
            progress_counter += 1
            if progress_callback and progress_counter >= progress_interval:
                progress_callback(Stage.SCAN.value, len(found_files), None)
                progress_counter = 0

        # Final update for small datasets
        if progress_callback and progress_counter > 0:
            progress_callback(Stage.SCAN.value, len(found_files), None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} matching files.")
        return found_files

    def _validate_root(self) -> Path:
        root_path = Path(self.root_dir)

        try:
            exists = root_path.exists()
            is_dir = exists and root_path.is_dir()
        except OSError as e:
            error_msg = f"Cannot access directory {self.root_dir}: {e}"
            logger.error(error_msg)
            raise FatalWalkError(error_msg, path=self.root_dir) from e

        if not exists:
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise FatalWalkError(error_msg, path=self.root_dir)
        if not is_dir:
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise FatalWalkError(error_msg, path=self.root_dir)

        try:
            with os.scandir(root_path):
                pass
        except OSError as e:
            error_msg = f"Cannot read directory {self.root_dir}: {e}"
            logger.error(error_msg)
            raise FatalWalkError(error_msg, path=self.root_dir) from e

        return root_path

    def _iter_files(self, root_path: Path, error_callback: Optional[ErrorCallback]) -> Iterator[CandidateFile]:
        def on_walk_error(err: OSError) -> None:
            path = err.filename or str(root_path)
            exc = TraversalError(f"Cannot access directory {path}: {err.strerror or err}", path=path)
            logger.warning(str(exc))
            notify(error_callback, exc)

        # followlinks=False: symlinked directories are listed but never entered
        for root, dirs, files in os.walk(str(root_path), onerror=on_walk_error, followlinks=False):
            dirs.sort()
            for filename in sorted(files):
                candidate = self._process_file(os.path.join(root, filename), error_callback)
                if candidate is not None:
                    yield candidate

    def _process_file(self, path: str, error_callback: Optional[ErrorCallback]) -> Optional[CandidateFile]:
        """
        Return a CandidateFile if the entry passes all filters, else None.
        Args:
            path: Path of the directory entry
            error_callback: Receives a ScanError when the entry cannot be statted
        """
        if not self._extension_passes(path):
            return None

        try:
            stat_result = os.lstat(path)
        except OSError as e:
            exc = TraversalError(f"Could not stat {path}: {e.strerror or e}", path=path)
            logger.warning(str(exc))
            notify(error_callback, exc)
            return None

        if stat.S_ISLNK(stat_result.st_mode):
            if not os.path.exists(path):
                exc = TraversalError(f"Broken symbolic link: {path}", path=path)
                logger.warning(str(exc))
                notify(error_callback, exc)
            else:
                logger.debug(f"Skipping symbolic link: {path}")
            return None

        # FIFOs, sockets and devices would block or misbehave when hashed
        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        logger.debug(f"Accepted file: {os.path.basename(path)} ({stat_result.st_size} bytes)")
        return CandidateFile(path=path, size=stat_result.st_size)

    def _extension_passes(self, path: str) -> bool:
        """
        Check if the file name ends with one of the allowed extensions.
        Comparison is case-sensitive: 'song.MP3' does not match '.mp3'.
        """
        return file_extension(os.path.basename(path)) in self.extensions
