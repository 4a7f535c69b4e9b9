"""
mediascanner — duplicate file finder for directory trees.

Core features:
- Recursive tree of every file and directory under a root, with a full-content fingerprint per file
- Duplicate search (same fingerprint) and name search (case-insensitive substring + same fingerprint)
- Keep-one reconciliation: first file of each group is kept, the rest go to trash (via send2trash)
- Persisted report: 'Hash: <hex>' line followed by member paths
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("mediascanner")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API — only what users should import directly
from mediascanner.commands import ScanCommand
from mediascanner.core import (
    ScanParams, HashAlgorithmName, Entry, Match, MatchGroup, ReconcileReport,
    TreeBuilderImpl, MatcherImpl, InvalidRootError)
from mediascanner.services import DuplicateService, FileService, ReportService

__all__ = [
    "ScanCommand",
    "ScanParams",
    "HashAlgorithmName",
    "Entry",
    "Match",
    "MatchGroup",
    "ReconcileReport",
    "TreeBuilderImpl",
    "MatcherImpl",
    "InvalidRootError",
    "DuplicateService",
    "FileService",
    "ReportService",
    "__version__",
]
