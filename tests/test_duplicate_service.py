"""
Tests for DuplicateService — selecting which files to remove and how much space that frees.
"""
from mediadupes.core.models import CandidateFile, DuplicateGroup
from mediadupes.services.duplicate_service import DuplicateService


def make_group(size, *paths):
    return DuplicateGroup(size=size, digest=b"d" * 32, files=[CandidateFile(path=p, size=size) for p in paths])


class TestFilesToDelete:
    def test_keeper_is_never_selected(self):
        groups = [make_group(100, "/keep.mp3", "/dup1.mp3", "/dup2.mp3")]

        assert DuplicateService.files_to_delete(groups) == ["/dup1.mp3", "/dup2.mp3"]

    def test_multiple_groups_keep_one_each(self):
        groups = [
            make_group(100, "/a.mp3", "/a_copy.mp3"),
            make_group(200, "/b.wav", "/b_copy.wav", "/b_copy2.wav"),
        ]

        to_delete = DuplicateService.files_to_delete(groups)

        assert to_delete == ["/a_copy.mp3", "/b_copy.wav", "/b_copy2.wav"]
        assert "/a.mp3" not in to_delete
        assert "/b.wav" not in to_delete

    def test_no_groups(self):
        assert DuplicateService.files_to_delete([]) == []


class TestReclaimableBytes:
    def test_counts_only_duplicates(self):
        groups = [
            make_group(100, "/a.mp3", "/a_copy.mp3"),
            make_group(200, "/b.wav", "/b_copy.wav", "/b_copy2.wav"),
        ]

        assert DuplicateService.reclaimable_bytes(groups) == 100 + 2 * 200
