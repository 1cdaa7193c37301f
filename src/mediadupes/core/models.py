"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for scanning media trees and resolving duplicates.
All models live only for the duration of one scan; nothing is persisted.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Callable, FrozenSet
import os
from enum import Enum

from mediadupes.core.config import DEFAULT_EXTENSIONS, normalize_extensions


# =============================
# Enums
# =============================

class ErrorKind(str, Enum):
    TRAVERSAL = "traversal"
    HASH = "hash"
    DELETION = "deletion"


class Stage(str, Enum):
    SCAN = "Scanning"
    SIZE = "Size grouping"
    DIGEST = "Full Hash"

    @classmethod
    def get_all(cls):
        return [cls.SCAN, cls.SIZE, cls.DIGEST]


# ======================
#  Core Data Models
# ======================

def file_extension(name: str) -> str:
    """Suffix after the last dot, case preserved ('' when the name has no dot)."""
    dot = name.rfind(".")
    return name[dot:] if dot != -1 else ""


@dataclass(frozen=True)
class CandidateFile:
    """
    A file that passed the extension allow-list.
    Size comes from the walker's stat call and is never refreshed.
    """
    path: str
    size: int  # in bytes

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def extension(self) -> str:
        return file_extension(self.name)

    def __repr__(self):
        return f"<CandidateFile path={self.path}, size={self.size}>"


# Size -> members in discovery order; only sizes with 2+ members are kept
SizeBuckets = Dict[int, List[CandidateFile]]


@dataclass
class DuplicateGroup:
    """
    Files that share size and digest.
    files[0] is the keeper, files[1:] are the duplicates in discovery order.
    """
    size: int
    digest: bytes
    files: List[CandidateFile] = field(default_factory=list)

    @property
    def keeper(self) -> CandidateFile:
        return self.files[0]

    @property
    def duplicates(self) -> List[CandidateFile]:
        return self.files[1:]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group, keeper included."""
        return len(self.files)

    def add_file(self, file: CandidateFile) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a group.")
        self.files.append(file)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


@dataclass(frozen=True)
class ScanError:
    """A recovered failure reported through the error channel."""
    kind: ErrorKind
    path: str
    message: str

    @classmethod
    def from_exception(cls, exc) -> "ScanError":
        return cls(kind=exc.kind, path=exc.path or "", message=str(exc))

    def __str__(self):
        return f"[{self.kind.value}] {self.path}: {self.message}"


ErrorCallback = Callable[[ScanError], None]
ProgressCallback = Callable[[str, int, Optional[int]], None]


class DeduplicationStats:
    """
    Statistics collected while running the pipeline.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.files_hashed: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            "size": "📁 Size Buckets",
            "digest": "🔍 Full Content Hash Groups",
        }

        lines = [
            "📊 Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files Hashed: {self.files_hashed}\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


@dataclass
class ScanResult:
    """Everything one scan produces: groups, the flat duplicate list and recovered errors."""
    groups: List[DuplicateGroup] = field(default_factory=list)
    duplicate_paths: List[str] = field(default_factory=list)
    errors: List[ScanError] = field(default_factory=list)
    files_scanned: int = 0
    stats: DeduplicationStats = field(default_factory=DeduplicationStats)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicate_paths)


"""
DTO for scan parameters with built-in validation.
"""

@dataclass
class DeduplicationParams:
    """Parameters for a scan with validation."""
    root_dir: str
    extensions: FrozenSet[str] = DEFAULT_EXTENSIONS
    workers: int = 1
    verify_content: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.workers < 1:
            raise ValueError("Number of workers must be at least 1")

        self.extensions = normalize_extensions(self.extensions)
        if not self.extensions:
            raise ValueError("Extension allow-list cannot be empty")
