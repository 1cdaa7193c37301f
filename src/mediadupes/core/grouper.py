"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups candidate files by cheap metadata before any content is read.
"""

from typing import List, Dict, Any, Callable
from collections import defaultdict

from mediadupes.core.interfaces import FileGrouper
from mediadupes.core.models import CandidateFile, SizeBuckets


class FileGrouperImpl(FileGrouper):
    """
    Partitions files in memory. Never opens a file.
    """

    def group_by_size(self, files: List[CandidateFile]) -> SizeBuckets:
        """Groups files by their size, keeping only sizes shared by 2+ files."""
        return self._group_by(files, lambda f: f.size)

    @staticmethod
    def _group_by(files: List[CandidateFile], key_func: Callable[[CandidateFile], Any]) -> Dict[Any, List[CandidateFile]]:
        """
        Helper method to group files by any computed key.
        Keys keep first-seen order and members keep input order.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a CandidateFile
        Returns:
            Dict[key, List[CandidateFile]] without singleton groups
        """
        groups = defaultdict(list)
        for file in files:
            groups[key_func(file)].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}
