"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file fingerprinting using pluggable hash algorithms.

HasherImpl reads the complete content of a file in fixed-size blocks and
returns the digest produced by its HashAlgorithm. The file handle never
outlives the call.
"""

import hashlib
import logging
from typing import BinaryIO, Dict

import xxhash

from mediascanner.core.errors import FileUnreadableError
from mediascanner.core.interfaces import Hasher, HashAlgorithm
from mediascanner.core.models import HashAlgorithmName

logger = logging.getLogger(__name__)

BLOCK_SIZE = 1024 * 1024  # 1 MiB


def _digest_stream(state, stream: BinaryIO) -> bytes:
    """Feeds `stream` into a hashlib-compatible state object until EOF."""
    for block in iter(lambda: stream.read(BLOCK_SIZE), b""):
        state.update(block)
    return state.digest()


# Use the same way to implement and use any other hashing algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.SHA256.value

    def hash_stream(self, stream: BinaryIO) -> bytes:
        return _digest_stream(hashlib.sha256(), stream)


class Blake2bAlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.BLAKE2B.value

    def hash_stream(self, stream: BinaryIO) -> bytes:
        return _digest_stream(hashlib.blake2b(), stream)


class XXHashAlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.XXH128.value

    def hash_stream(self, stream: BinaryIO) -> bytes:
        return _digest_stream(xxhash.xxh128(), stream)


_ALGORITHMS: Dict[HashAlgorithmName, type] = {
    HashAlgorithmName.SHA256: Sha256AlgorithmImpl,
    HashAlgorithmName.BLAKE2B: Blake2bAlgorithmImpl,
    HashAlgorithmName.XXH128: XXHashAlgorithmImpl,
}


def get_algorithm(name: HashAlgorithmName) -> HashAlgorithm:
    """Returns a fresh algorithm instance for the given enum value."""
    try:
        return _ALGORITHMS[name]()
    except KeyError:
        raise ValueError(f"Unsupported hash algorithm: {name!r}") from None


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Fingerprints always cover the whole file; there is no partial-content mode.
    """

    def __init__(self, algorithm: HashAlgorithm = None):
        self.algorithm = algorithm or Sha256AlgorithmImpl()

    def compute_fingerprint(self, path: str) -> bytes:
        """
        Returns the digest of the file's complete byte content.

        Raises:
            FileUnreadableError: If the file cannot be opened or read.
        """
        try:
            with open(path, 'rb') as f:
                return self.algorithm.hash_stream(f)
        except OSError as e:
            logger.debug(f"Error reading full content of {path}: {e}")
            raise FileUnreadableError(path, e.strerror or str(e)) from e
