"""
mediadupes — finds byte-identical duplicate audio files and removes redundant copies.

Core features:
- Two-pass detection: size buckets first, full-content BLAKE2b-256 digest only for shared sizes
- Deterministic keeper: the first file discovered for each digest is never reported
- Unreadable entries are reported and skipped, only a bad root aborts a scan
- Safe deletion to system trash (via send2trash), with per-file error reporting
- CLI interface with interactive confirmation
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("mediadupes")
except PackageNotFoundError:
    import tomllib
    from pathlib import Path

    _pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if _pyproject.exists():
        with open(_pyproject, "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    else:
        __version__ = "0.0.0"

# Public API: only what users should import directly
from mediadupes.commands import DeduplicationCommand, find_duplicates
from mediadupes.core import (
    DEFAULT_EXTENSIONS, DeduplicationParams, CandidateFile, DuplicateGroup,
    ScanError, ScanResult, ErrorKind,
    MediaDupesError, TraversalError, HashError, FatalWalkError, DeletionError)
from mediadupes.utils.convert_utils import ConvertUtils
from mediadupes.services import DuplicateService, FileService

__all__ = [
    "find_duplicates",
    "DeduplicationCommand",
    "DeduplicationParams",
    "DEFAULT_EXTENSIONS",
    "CandidateFile",
    "DuplicateGroup",
    "ScanError",
    "ScanResult",
    "ErrorKind",
    "MediaDupesError",
    "TraversalError",
    "HashError",
    "FatalWalkError",
    "DeletionError",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "__version__",
]
