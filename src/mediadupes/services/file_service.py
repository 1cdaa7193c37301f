"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File removal for confirmed duplicates.
Default is moving to the system trash (send2trash); permanent unlink is opt-in.
"""
import logging
from pathlib import Path
from typing import List, Tuple

from send2trash import send2trash

from mediadupes.core.errors import DeletionError
from mediadupes.core.models import ScanError

logger = logging.getLogger(__name__)


class FileService:
    """
    Removes files one at a time; every failure is raised as DeletionError.
    """

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise DeletionError(f"File not found: {path}", path=file_path)

        try:
            send2trash(str(path))
        except Exception as e:
            raise DeletionError(f"Failed to move to trash: {e}", path=file_path) from e

    @staticmethod
    def delete_file(file_path: str):
        """Removes a file permanently."""
        path = Path(file_path)

        if not path.exists():
            raise DeletionError(f"File not found: {path}", path=file_path)

        try:
            path.unlink()
        except OSError as e:
            raise DeletionError(f"Failed to delete: {e}", path=file_path) from e

    @classmethod
    def delete_many(cls, file_paths: List[str], permanent: bool = False) -> Tuple[List[str], List[ScanError]]:
        """
        Removes each file independently; one failure never stops the rest.
        Returns:
            - Paths that were removed
            - One ScanError per failed path
        """
        remove = cls.delete_file if permanent else cls.move_to_trash
        deleted = []
        failures = []
        for path in file_paths:
            try:
                remove(path)
                deleted.append(path)
            except DeletionError as e:
                logger.warning(str(e))
                failures.append(ScanError.from_exception(e))
        return deleted, failures
