"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/tree_builder.py
Builds an in-memory tree of the scanned directory.
Features:
- Depth-first recursion with os.scandir, one Entry per file or directory
- Full-content fingerprint for every regular file via an injected Hasher
- Unreadable files and directories are kept (without fingerprint / children)
- Symbolic links are skipped unless follow_symlinks is set; other object
  types (sockets, FIFOs, devices) are always skipped

There is no symlink-cycle guard: with follow_symlinks=True a looping link
keeps recursing until the OS or the interpreter refuses to go deeper.
"""

import os
import time
import logging
from pathlib import Path
from typing import List, Optional, Callable

# Local imports
from mediascanner.core.models import Entry, ScanStats, Tree
from mediascanner.core.interfaces import TreeBuilder, Hasher
from mediascanner.core.hasher import HasherImpl
from mediascanner.core.errors import (
    InvalidRootError, DirectoryUnrecursableError, FileUnreadableError)


class TreeBuilderImpl(TreeBuilder):
    """
    Walks a directory recursively and fingerprints every regular file.

    Attributes:
        hasher: Computes file fingerprints (SHA-256 by default)
        follow_symlinks: Follow symbolic links instead of skipping them
        sort_entries: Order children by name instead of enumeration order
        logger: Logger receiving per-entry diagnostics
        progress_callback: (stage, current, total) called every N files
        stats: Counters updated during the scan
    """

    progress_interval = 5000  # Update every 5,000 files

    def __init__(
        self,
        hasher: Optional[Hasher] = None,
        follow_symlinks: bool = False,
        sort_entries: bool = False,
        logger: Optional[logging.Logger] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
        stats: Optional[ScanStats] = None,
    ):
        self.hasher = hasher or HasherImpl()
        self.follow_symlinks = follow_symlinks
        self.sort_entries = sort_entries
        self.logger = logger or logging.getLogger(__name__)
        self.progress_callback = progress_callback
        self.stats = stats or ScanStats()
        self._processed_files = 0
        self._progress_counter = 0

    def build_tree(self, root: str) -> Tree:
        """
        Returns the entries directly under `root` (level 0), recursively populated.

        Raises:
            InvalidRootError: If root does not exist, is not a directory or cannot be listed.
        """
        root_path = Path(root)
        if not root_path.exists():
            self.logger.error(f"Directory does not exist: {root}")
            raise InvalidRootError(str(root), "directory does not exist")
        if not root_path.is_dir():
            self.logger.error(f"Not a directory: {root}")
            raise InvalidRootError(str(root), "not a directory")

        self.logger.debug(f"Building tree for: {root}")
        self._processed_files = 0
        self._progress_counter = 0
        self.stats.reset_counters()
        start_time = time.time()

        try:
            tree = self._build_level(str(root), level=0)
        except DirectoryUnrecursableError as e:
            self.logger.error(f"Cannot list root directory {root}: {e.reason}")
            raise InvalidRootError(e.path, e.reason) from e

        # Final update for small datasets
        if self.progress_callback and self._progress_counter > 0:
            self.progress_callback('scanning', self._processed_files, None)

        self.logger.debug(f"Tree built in {time.time() - start_time:.2f} seconds")
        self.logger.debug(
            f"Found {self.stats.files} files in {self.stats.directories} directories "
            f"({self.stats.unreadable} unreadable)")
        return tree

    def _list_directory(self, directory: str) -> List[os.DirEntry]:
        """Returns the directory's children, closing the scandir handle before returning."""
        try:
            with os.scandir(directory) as it:
                items = list(it)
        except OSError as e:
            raise DirectoryUnrecursableError(directory, e.strerror or str(e)) from e

        if self.sort_entries:
            items.sort(key=lambda item: item.name)
        return items

    def _build_level(self, directory: str, level: int) -> Tree:
        entries = []
        for item in self._list_directory(directory):
            entry = self._build_entry(item, level)
            if entry is not None:
                entries.append(entry)
        return entries

    def _build_entry(self, item: os.DirEntry, level: int) -> Optional[Entry]:
        try:
            if item.is_symlink() and not self.follow_symlinks:
                self.logger.debug(f"Skipping symbolic link: {item.path}")
                self.stats.skipped += 1
                return None
            is_file = item.is_file(follow_symlinks=self.follow_symlinks)
            is_dir = not is_file and item.is_dir(follow_symlinks=self.follow_symlinks)
        except OSError as e:
            self.logger.debug(f"Could not determine type of {item.path}: {e}")
            self.stats.skipped += 1
            return None

        if is_file:
            return self._file_entry(item, level)
        if is_dir:
            return self._directory_entry(item, level)

        self.logger.debug(f"Skipping unsupported filesystem object: {item.path}")
        self.stats.skipped += 1
        return None

    def _file_entry(self, item: os.DirEntry, level: int) -> Entry:
        entry = Entry(name=item.name, path=item.path, is_file=True, level=level)
        self.stats.files += 1
        try:
            entry.fingerprint = self.hasher.compute_fingerprint(item.path)
            self.stats.hashed += 1
        except FileUnreadableError as e:
            self.logger.warning(f"Unreadable file, no fingerprint: {e}")
            self.stats.unreadable += 1

        self._processed_files += 1
        self._progress_counter += 1
        if self.progress_callback and self._progress_counter >= self.progress_interval:
            self.progress_callback('scanning', self._processed_files, None)
            self._progress_counter = 0
        return entry

    def _directory_entry(self, item: os.DirEntry, level: int) -> Entry:
        entry = Entry(name=item.name, path=item.path, is_file=False, level=level)
        self.stats.directories += 1
        try:
            entry.children = self._build_level(item.path, level + 1)
        except DirectoryUnrecursableError as e:
            self.logger.warning(f"Cannot list directory, keeping it empty: {e}")
            self.stats.unrecursable += 1
        return entry
