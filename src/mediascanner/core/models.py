"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for directory scanning and fingerprint matching.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple
from enum import Enum


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Content fingerprint algorithm selectable from the CLI.
    """
    SHA256 = "sha256"
    BLAKE2B = "blake2b"
    XXH128 = "xxh128"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            HashAlgorithmName.SHA256: "SHA-256",
            HashAlgorithmName.BLAKE2B: "BLAKE2b",
            HashAlgorithmName.XXH128: "xxHash128",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            HashAlgorithmName.SHA256:
                "Cryptographic, 32-byte digest (default)",
            HashAlgorithmName.BLAKE2B:
                "Cryptographic, 64-byte digest",
            HashAlgorithmName.XXH128:
                "Non-cryptographic, 16-byte digest (fastest)",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    SCAN = "Directory scan"
    GROUP = "Fingerprint grouping"


# ======================
#  Core Data Models
# ======================

@dataclass
class Entry:
    """
    A node of the scanned filesystem tree.

    Files are leaves and may carry a content fingerprint; directories own their
    children in enumeration order and never carry a fingerprint.
    """
    name: str
    path: str
    is_file: bool
    level: int = 0
    fingerprint: Optional[bytes] = None
    children: List["Entry"] = field(default_factory=list)

    def __post_init__(self):
        if self.level < 0:
            raise ValueError("Entry level cannot be negative")
        if self.is_file and self.children:
            raise ValueError(f"File entry cannot have children: {self.path}")
        if not self.is_file and self.fingerprint is not None:
            raise ValueError(f"Directory entry cannot have a fingerprint: {self.path}")
        if self.fingerprint is not None and not isinstance(self.fingerprint, bytes):
            raise ValueError("Field 'fingerprint' must be bytes or None")

    @property
    def has_fingerprint(self) -> bool:
        return self.is_file and self.fingerprint is not None

    @property
    def folder_count(self) -> int:
        """Number of direct child directories."""
        return sum(1 for child in self.children if not child.is_file)

    @property
    def file_count(self) -> int:
        """Number of direct child files."""
        return sum(1 for child in self.children if child.is_file)

    def __repr__(self):
        kind = "file" if self.is_file else "dir"
        return f"<Entry {kind} path={self.path}, level={self.level}>"


# Entries found directly under the scan root (level 0)
Tree = List[Entry]


@dataclass(frozen=True)
class Match:
    """A single member of a match group."""
    name: str
    path: str

    @classmethod
    def from_entry(cls, entry: Entry) -> "Match":
        return cls(name=entry.name, path=entry.path)


@dataclass
class MatchGroup:
    """
    Files sharing a content fingerprint.
    For name search, all members also contain `query` in their name.
    """
    key: bytes
    matches: List[Match]
    query: Optional[str] = None

    @property
    def key_hex(self) -> str:
        """Fingerprint rendered as lowercase hex."""
        return self.key.hex()

    @property
    def match_count(self) -> int:
        """How many files are in this group."""
        return len(self.matches)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.match_count >= 2

    @property
    def paths(self) -> List[str]:
        return [m.path for m in self.matches]

    def __repr__(self):
        return f"<MatchGroup key={self.key_hex[:16]}, count={self.match_count}>"


@dataclass
class ReconcileReport:
    """Outcome of keeping one file per group and removing the rest."""
    kept: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # same file as the kept member
    failed: List[Tuple[str, str]] = field(default_factory=list)  # (path, error message)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)


class ScanStats:
    """
    Statistics collected while building the tree and grouping entries.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.directories: int = 0
        self.files: int = 0
        self.hashed: int = 0
        self.unreadable: int = 0
        self.unrecursable: int = 0
        self.skipped: int = 0
        self.groups: int = 0
        self.stage_times: Dict[str, float] = {}

    def reset_counters(self) -> None:
        """Clears per-scan counters so a reused instance reports only the latest scan."""
        self.directories = 0
        self.files = 0
        self.hashed = 0
        self.unreadable = 0
        self.unrecursable = 0
        self.skipped = 0

    def update_stage(self, stage_name: str, duration: float) -> None:
        self.stage_times[stage_name] = self.stage_times.get(stage_name, 0.0) + duration

    def print_summary(self) -> str:
        lines = [
            "📊 Scan Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"📁 Directories: {self.directories}",
            f"📄 Files: {self.files} ({self.hashed} hashed, {self.unreadable} unreadable)",
        ]
        if self.unrecursable:
            lines.append(f"🚫 Unreadable directories: {self.unrecursable}")
        if self.skipped:
            lines.append(f"⏭️  Skipped entries: {self.skipped}")
        lines.append(f"🔍 Match groups: {self.groups}")

        for stage, seconds in self.stage_times.items():
            lines.append(f"{stage}: {seconds:.3f}s")

        return "\n".join(lines)


"""
DTO for scan parameters with built-in validation.
Interface-agnostic — used by the CLI and by library callers.
"""

@dataclass
class ScanParams:
    """Parameters for a scan with validation."""
    root_dir: str
    query: Optional[str] = None
    algorithm: HashAlgorithmName = HashAlgorithmName.SHA256
    follow_symlinks: bool = False
    sort_entries: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if isinstance(self.algorithm, str):
            try:
                self.algorithm = HashAlgorithmName(self.algorithm.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown hash algorithm: {self.algorithm}") from None

        if self.query is not None and not self.query.strip():
            raise ValueError("Name query cannot be blank")

    @property
    def is_name_search(self) -> bool:
        return self.query is not None
