from typing import List

from mediadupes.core.models import DuplicateGroup


class DuplicateService:
    @staticmethod
    def files_to_delete(groups: List[DuplicateGroup]) -> List[str]:
        """
        Keeps the keeper of every group and marks the rest for deletion.
        Returns file paths in group order, keepers excluded.
        """
        files_to_delete = []
        for group in groups:
            for file in group.duplicates:
                files_to_delete.append(file.path)
        return files_to_delete

    @staticmethod
    def reclaimable_bytes(groups: List[DuplicateGroup]) -> int:
        """Total space freed by removing every duplicate (keepers stay)."""
        return sum(group.size * len(group.duplicates) for group in groups)

