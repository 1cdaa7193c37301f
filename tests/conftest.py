"""
Shared fixtures for duplicate detection tests.
Creates isolated temporary directories with controlled media files.
"""
import pytest
from pathlib import Path
from typing import Callable, Dict

from mediadupes.core.hasher import HasherImpl
from mediadupes.core.models import CandidateFile


@pytest.fixture
def make_file(tmp_path) -> Callable[..., Path]:
    """Writes bytes to a path relative to tmp_path, creating parent directories."""
    def _make(relative: str, content: bytes) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return _make


@pytest.fixture
def media_tree(tmp_path, make_file) -> Dict[str, Path]:
    """
    Creates a controlled music library:
    - 3 identical tracks (1KB of 'A'), one in a subdirectory
    - 2 identical tracks (2KB of 'B')
    - 1 track sharing the 1KB size but with different content
    - 1 track with a unique size (never hashed)
    - 2 identical text files (extension not allow-listed)
    """
    content_a = b"A" * 1024
    content_b = b"B" * 2048
    return {
        "a1": make_file("album/a1.mp3", content_a),
        "a2": make_file("album/a2.mp3", content_a),
        "a3": make_file("album/nested/a3.flac", content_a),
        "b1": make_file("b1.wav", content_b),
        "b2": make_file("mix/b2.wav", content_b),
        "same_size": make_file("album/other.ogg", b"C" * 1024),
        "unique": make_file("single.mp3", b"D" * 1500),
        "notes1": make_file("notes1.txt", content_a),
        "notes2": make_file("notes2.txt", content_a),
    }


class CountingHasher(HasherImpl):
    """HasherImpl that records every path it hashes."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hashed_paths = []

    def compute_digest(self, file: CandidateFile) -> bytes:
        self.hashed_paths.append(file.path)
        return super().compute_digest(file)


@pytest.fixture
def counting_hasher() -> CountingHasher:
    return CountingHasher()
