"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/config.py
Static configuration for the duplicate detection pipeline.

The extension allow-list is an immutable value: pass a different frozenset to
FileWalkerImpl / DeduplicationParams to scan other media types.
"""

from typing import FrozenSet

# Matching is case-sensitive on the suffix after the last dot.
DEFAULT_EXTENSIONS: FrozenSet[str] = frozenset({
    ".mp3",
    ".wav",
    ".flac",
    ".ogg",
    ".oga",
    ".opus",
    ".m4a",
    ".aac",
    ".aiff",
    ".aif",
    ".wma",
    ".ape",
})

HASH_CHUNK_SIZE = 1024 * 1024  # 1 MiB per read when streaming file contents

DIGEST_SIZE = 32  # BLAKE2b-256


def normalize_extensions(extensions) -> FrozenSet[str]:
    """
    Returns the allow-list as a frozenset of dotted suffixes.
    Case is preserved: '.MP3' and '.mp3' are different entries.
    """
    normalized = set()
    for ext in extensions:
        ext = ext.strip()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        normalized.add(ext)
    return frozenset(normalized)
