"""
Unit tests for FileGrouperImpl and SizeStageImpl.
Verifies size bucketing drops singletons and keeps discovery order.
"""
from mediadupes.core import FileGrouperImpl, SizeStageImpl
from mediadupes.core import CandidateFile


class TestFileGrouperImpl:
    """Test in-memory size bucketing."""

    def test_groups_by_size_filters_single_files(self):
        """
        group_by_size returns ONLY buckets with 2+ files of the same size.
        Singleton sizes cannot contain duplicates and are dropped.
        """
        files = [
            CandidateFile(path="/a.mp3", size=1024),
            CandidateFile(path="/b.mp3", size=1024),
            CandidateFile(path="/c.mp3", size=2048),
        ]

        buckets = FileGrouperImpl().group_by_size(files)

        assert list(buckets.keys()) == [1024]
        assert [f.path for f in buckets[1024]] == ["/a.mp3", "/b.mp3"]

    def test_every_file_lands_in_the_bucket_of_its_size(self):
        files = [CandidateFile(path=f"/{i}.mp3", size=i % 3) for i in range(9)]

        buckets = FileGrouperImpl().group_by_size(files)

        assert sum(len(b) for b in buckets.values()) == 9
        for size, members in buckets.items():
            assert all(f.size == size for f in members)

    def test_preserves_discovery_order(self):
        """Bucket keys follow first-seen size; members follow input order."""
        files = [
            CandidateFile(path="/z.mp3", size=20),
            CandidateFile(path="/y.mp3", size=10),
            CandidateFile(path="/x.mp3", size=20),
            CandidateFile(path="/w.mp3", size=10),
        ]

        buckets = FileGrouperImpl().group_by_size(files)

        assert list(buckets.keys()) == [20, 10]
        assert [f.path for f in buckets[20]] == ["/z.mp3", "/x.mp3"]
        assert [f.path for f in buckets[10]] == ["/y.mp3", "/w.mp3"]

    def test_empty_input(self):
        assert FileGrouperImpl().group_by_size([]) == {}


class TestSizeStageImpl:
    def test_reports_instant_progress(self):
        files = [CandidateFile(path="/a.mp3", size=1), CandidateFile(path="/b.mp3", size=1)]
        calls = []

        buckets = SizeStageImpl().process(files, progress_callback=lambda *args: calls.append(args))

        assert len(buckets[1]) == 2
        assert calls == [("Size grouping", 2, 2)]
