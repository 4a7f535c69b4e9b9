"""
Core scanning engine — tree builder, hasher and matcher.

This package contains the filesystem-facing foundation of mediascanner:
- TreeBuilderImpl: recursive directory traversal into a tree of Entry objects
- HasherImpl + *AlgorithmImpl: full-content fingerprints (SHA-256, BLAKE2b, xxHash128)
- MatcherImpl: pre-order flattening and fingerprint grouping, with optional name filter
- Models: Entry, Match, MatchGroup and configuration objects

All components are pure Python and do not print — suitable for CLI and library usage.
"""

from .errors import (
    MediaScannerError, TraversalError, InvalidRootError, DirectoryUnrecursableError,
    FileUnreadableError, DeletionError)
from .hasher import (
    HasherImpl, Sha256AlgorithmImpl, Blake2bAlgorithmImpl, XXHashAlgorithmImpl, get_algorithm)
from .tree_builder import TreeBuilderImpl
from .matcher import MatcherImpl
from .models import (
    Entry, Tree, Match, MatchGroup, ReconcileReport, ScanStats, ScanParams,
    HashAlgorithmName, Stage)

__all__ = [
    "MediaScannerError",
    "TraversalError",
    "InvalidRootError",
    "DirectoryUnrecursableError",
    "FileUnreadableError",
    "DeletionError",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "Blake2bAlgorithmImpl",
    "XXHashAlgorithmImpl",
    "get_algorithm",
    "TreeBuilderImpl",
    "MatcherImpl",
    "Entry",
    "Tree",
    "Match",
    "MatchGroup",
    "ReconcileReport",
    "ScanStats",
    "ScanParams",
    "HashAlgorithmName",
    "Stage",
]
