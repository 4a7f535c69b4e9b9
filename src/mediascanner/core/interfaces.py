"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the scanner.
These protocols use Python's `typing.Protocol` for structural typing, so tests
and callers can pass their own implementations without inheriting anything.

Key Components:
---------------
- HashAlgorithm: Standardized interface for digest functions (SHA-256, BLAKE2b, xxHash).
- Hasher: Interface for computing the full-content fingerprint of a file.
- TreeBuilder: Interface for walking a directory into a tree of entries.
- Matcher: Interface for flattening a tree and grouping its entries.
"""

from typing import Protocol, List, BinaryIO
from mediascanner.core.models import Entry, MatchGroup, Tree


# ===== Interfaces =====

class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the scanning logic.
    """
    name: str

    def hash_stream(self, stream: BinaryIO) -> bytes:
        """Consumes the stream to EOF and returns its digest."""
        ...


class Hasher(Protocol):
    """Interface for fingerprinting a file's complete content."""
    def compute_fingerprint(self, path: str) -> bytes: ...


class TreeBuilder(Protocol):
    """
    Interface for scanning a directory into an in-memory tree.

    Methods:
        build_tree: Returns the entries under `root` (level 0), recursively populated.
    """
    def build_tree(self, root: str) -> Tree:
        """
        Raises:
            InvalidRootError: If `root` is not a listable directory.
        """
        ...


class Matcher(Protocol):
    """
    Interface for grouping scanned entries by content fingerprint.
    """
    def flatten(self, tree: Tree) -> List[Entry]:
        """Pre-order list of every entry in the tree."""
        ...

    def find_duplicates(self, tree: Tree) -> List[MatchGroup]:
        """Groups of 2+ files with identical content."""
        ...

    def find_matching(self, tree: Tree, query: str) -> List[MatchGroup]:
        """Groups of 2+ files with identical content whose names contain `query`."""
        ...
