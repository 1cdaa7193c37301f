"""
Unit tests for HasherImpl with Blake2bAlgorithmImpl.
Verifies streaming full-content digests and HashError on unreadable or changed files.
"""
import hashlib
import pytest

from mediadupes.core.errors import HashError
from mediadupes.core.hasher import HasherImpl, Blake2bAlgorithmImpl
from mediadupes.core.models import CandidateFile, ErrorKind


def candidate(path) -> CandidateFile:
    return CandidateFile(path=str(path), size=path.stat().st_size)


class TestHasherImpl:
    """Test BLAKE2b-256 computation with chunk-based reading."""

    def test_same_content_produces_same_digest(self, make_file):
        content = b"test content " * 1000
        f1 = make_file("one.mp3", content)
        f2 = make_file("two.mp3", content)

        hasher = HasherImpl(Blake2bAlgorithmImpl())
        digest1 = hasher.compute_digest(candidate(f1))
        digest2 = hasher.compute_digest(candidate(f2))

        assert digest1 == digest2
        assert isinstance(digest1, bytes)
        assert len(digest1) == 32  # BLAKE2b-256

    def test_different_content_produces_different_digests(self, make_file):
        f1 = make_file("one.mp3", b"A" * 1024)
        f2 = make_file("two.mp3", b"B" * 1024)

        hasher = HasherImpl()

        assert hasher.compute_digest(candidate(f1)) != hasher.compute_digest(candidate(f2))

    def test_digest_matches_whole_file_blake2b(self, make_file):
        """Chunked streaming must give the same digest as hashing the whole content."""
        content = bytes(range(256)) * 41  # not a multiple of the chunk size
        path = make_file("track.flac", content)

        digest = HasherImpl(chunk_size=100).compute_digest(candidate(path))

        assert digest == hashlib.blake2b(content, digest_size=32).digest()

    def test_empty_file(self, make_file):
        path = make_file("silence.wav", b"")

        digest = HasherImpl().compute_digest(candidate(path))

        assert digest == hashlib.blake2b(b"", digest_size=32).digest()

    def test_missing_file_raises_hash_error(self, tmp_path):
        file = CandidateFile(path=str(tmp_path / "gone.mp3"), size=10)

        with pytest.raises(HashError) as exc_info:
            HasherImpl().compute_digest(file)

        assert exc_info.value.path == file.path
        assert exc_info.value.kind == ErrorKind.HASH

    def test_size_change_since_stat_raises_hash_error(self, make_file):
        """A file that grew or shrank after walking must not be matched on stale size."""
        path = make_file("track.mp3", b"12345")
        file = CandidateFile(path=str(path), size=5)
        path.write_bytes(b"1234567")

        with pytest.raises(HashError, match="changed during scan"):
            HasherImpl().compute_digest(file)

    def test_permission_error_raises_hash_error(self, make_file, monkeypatch):
        path = make_file("locked.mp3", b"data")

        def denied(*args, **kwargs):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("mediadupes.core.hasher.open", denied, raising=False)

        with pytest.raises(HashError, match="Permission denied"):
            HasherImpl().compute_digest(candidate(path))


class TestContentsEqual:
    def test_identical_files(self, make_file):
        f1 = make_file("a.mp3", b"X" * 5000)
        f2 = make_file("b.mp3", b"X" * 5000)

        assert HasherImpl(chunk_size=64).contents_equal(candidate(f1), candidate(f2)) is True

    def test_files_differing_in_last_byte(self, make_file):
        f1 = make_file("a.mp3", b"X" * 4999 + b"1")
        f2 = make_file("b.mp3", b"X" * 4999 + b"2")

        assert HasherImpl(chunk_size=64).contents_equal(candidate(f1), candidate(f2)) is False

    def test_unreadable_file_names_the_failing_path(self, make_file, tmp_path):
        f1 = make_file("a.mp3", b"X")
        missing = CandidateFile(path=str(tmp_path / "missing.mp3"), size=1)

        with pytest.raises(HashError) as exc_info:
            HasherImpl().contents_equal(candidate(f1), missing)

        assert exc_info.value.path == missing.path
