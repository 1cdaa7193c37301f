"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements full-content hashing using the CandidateFile class and a pluggable hash algorithm.

Files are streamed in fixed-size chunks, so arbitrarily large files are never
loaded into memory. Every read failure is raised as HashError; the caller decides
whether to skip the file.
"""

import hashlib
import logging

from mediadupes.core.config import HASH_CHUNK_SIZE, DIGEST_SIZE
from mediadupes.core.errors import HashError
from mediadupes.core.interfaces import Hasher, HashAlgorithm
from mediadupes.core.models import CandidateFile

logger = logging.getLogger(__name__)


class Blake2bAlgorithmImpl(HashAlgorithm):
    @staticmethod
    def new():
        return hashlib.blake2b(digest_size=DIGEST_SIZE)


class HasherImpl(Hasher):
    """
    Computes the digest of a whole file with any HashAlgorithm.
    Stateless: results are not cached, each call reads the file again.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = HASH_CHUNK_SIZE):
        self.algorithm = algorithm or Blake2bAlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_digest(self, file: CandidateFile) -> bytes:
        """
        Streams the file through the hash function.

        Raises:
            HashError: the file cannot be opened or read, or its length no longer
                       matches the size recorded by the walker.
        """
        hasher = self.algorithm.new()
        total = 0
        try:
            with open(file.path, "rb") as f:
                for chunk in iter(lambda: f.read(self.chunk_size), b""):
                    hasher.update(chunk)
                    total += len(chunk)
        except OSError as e:
            raise HashError(f"Failed to read {file.path}: {e}", path=file.path) from e

        if total != file.size:
            raise HashError(
                f"Size of {file.path} changed during scan ({file.size} -> {total} bytes)",
                path=file.path
            )

        digest = hasher.digest()
        logger.debug(f"Hashed {file.path}: {digest.hex()}")
        return digest

    def contents_equal(self, first: CandidateFile, second: CandidateFile) -> bool:
        """
        Byte-for-byte comparison of two files.

        Raises:
            HashError: naming the file that could not be read.
        """
        try:
            f1 = open(first.path, "rb")
        except OSError as e:
            raise HashError(f"Failed to read {first.path}: {e}", path=first.path) from e
        with f1:
            try:
                f2 = open(second.path, "rb")
            except OSError as e:
                raise HashError(f"Failed to read {second.path}: {e}", path=second.path) from e
            with f2:
                while True:
                    try:
                        b1 = f1.read(self.chunk_size)
                    except OSError as e:
                        raise HashError(f"Failed to read {first.path}: {e}", path=first.path) from e
                    try:
                        b2 = f2.read(self.chunk_size)
                    except OSError as e:
                        raise HashError(f"Failed to read {second.path}: {e}", path=second.path) from e
                    if b1 != b2:
                        return False
                    if not b1:
                        return True
