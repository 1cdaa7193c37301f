"""
Tests for file service — per-file deletion with error aggregation.
Trash operations are mocked so tests never depend on the platform's trash location.
"""
from unittest import mock

import pytest

from mediadupes.core.errors import DeletionError
from mediadupes.core.models import ErrorKind
from mediadupes.services.file_service import FileService


class TestMoveToTrash:
    def test_calls_send2trash_with_resolved_path(self, make_file):
        path = make_file("dup.mp3", b"content")

        with mock.patch("mediadupes.services.file_service.send2trash") as mock_trash:
            FileService.move_to_trash(str(path))

        mock_trash.assert_called_once_with(str(path.resolve()))

    def test_raises_deletion_error_for_nonexistent_file(self, tmp_path):
        with pytest.raises(DeletionError, match="File not found"):
            FileService.move_to_trash(str(tmp_path / "does_not_exist.mp3"))

    def test_wraps_send2trash_failures(self, make_file):
        path = make_file("dup.mp3", b"content")

        with mock.patch("mediadupes.services.file_service.send2trash", side_effect=OSError("no trash")):
            with pytest.raises(DeletionError, match="Failed to move to trash") as exc_info:
                FileService.move_to_trash(str(path))

        assert exc_info.value.path == str(path)
        assert path.exists()


class TestDeleteFile:
    def test_removes_file_permanently(self, make_file):
        path = make_file("dup.mp3", b"content")

        FileService.delete_file(str(path))

        assert not path.exists()

    def test_preserves_other_files_in_directory(self, make_file):
        keep = make_file("keep.mp3", b"content")
        drop = make_file("drop.mp3", b"content")

        FileService.delete_file(str(drop))

        assert keep.exists()
        assert keep.read_bytes() == b"content"

    def test_raises_deletion_error_for_nonexistent_file(self, tmp_path):
        with pytest.raises(DeletionError, match="File not found"):
            FileService.delete_file(str(tmp_path / "gone.mp3"))


class TestDeleteMany:
    def test_failure_does_not_abort_remaining_deletions(self, make_file, tmp_path):
        """CRITICAL: one failing file must not stop deletion of the others."""
        first = make_file("first.mp3", b"1")
        missing = tmp_path / "missing.mp3"
        last = make_file("last.mp3", b"3")

        deleted, failures = FileService.delete_many([str(first), str(missing), str(last)], permanent=True)

        assert deleted == [str(first), str(last)]
        assert not first.exists()
        assert not last.exists()
        assert len(failures) == 1
        assert failures[0].path == str(missing)
        assert failures[0].kind == ErrorKind.DELETION

    def test_uses_trash_by_default(self, make_file):
        path = make_file("dup.mp3", b"content")

        with mock.patch.object(FileService, "move_to_trash") as mock_trash, \
                mock.patch.object(FileService, "delete_file") as mock_delete:
            deleted, failures = FileService.delete_many([str(path)])

        mock_trash.assert_called_once_with(str(path))
        mock_delete.assert_not_called()
        assert deleted == [str(path)]
        assert failures == []
