"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/matcher.py
Flattens a scanned tree and groups its entries by content fingerprint.
"""

import logging
from typing import List, Callable, Optional
from collections import defaultdict

from mediascanner.core.interfaces import Matcher
from mediascanner.core.models import Entry, Match, MatchGroup, Tree

logger = logging.getLogger(__name__)


class MatcherImpl(Matcher):
    """
    Groups files with identical content.

    Groups are returned in the order their fingerprint is first seen while
    walking the flattened tree; members keep flatten order, so the first
    member of a group is the one encountered first during the scan.
    """

    def flatten(self, tree: Tree) -> List[Entry]:
        """Pre-order flattening: every entry precedes its children."""
        flat = []
        stack = list(reversed(tree))
        while stack:
            entry = stack.pop()
            flat.append(entry)
            stack.extend(reversed(entry.children))
        return flat

    def find_duplicates(self, tree: Tree) -> List[MatchGroup]:
        """Returns groups of 2+ files sharing a fingerprint."""
        return self._group_by_fingerprint(self.flatten(tree))

    def find_matching(self, tree: Tree, query: str) -> List[MatchGroup]:
        """
        Returns groups of 2+ files sharing a fingerprint whose names contain
        `query`, compared case-insensitively.
        """
        if not query:
            raise ValueError("Name query cannot be empty")

        needle = query.upper()
        candidates = [e for e in self.flatten(tree) if needle in e.name.upper()]
        logger.debug(f"{len(candidates)} entries match name query '{query}'")
        return self._group_by_fingerprint(candidates, query=query)

    @staticmethod
    def _group_by_fingerprint(entries: List[Entry], query: Optional[str] = None) -> List[MatchGroup]:
        return [
            MatchGroup(key=key, matches=[Match.from_entry(e) for e in group], query=query)
            for key, group in MatcherImpl._group_by(entries, lambda e: e.fingerprint).items()
        ]

    @staticmethod
    def _group_by(entries: List[Entry], key_func: Callable[[Entry], Optional[bytes]]) -> dict:
        """
        Helper method to group file entries by any computed key.
        Directories and entries whose key is None never join a group.
        Returns:
            Dict[key, List[Entry]] with only groups of 2+ entries, in first-seen order
        """
        groups = defaultdict(list)
        ungroupable = 0
        for entry in entries:
            if not entry.is_file:
                continue
            key = key_func(entry)
            if key is None:
                ungroupable += 1
                continue
            groups[key].append(entry)

        if ungroupable > 0:
            logger.debug(f"Excluded {ungroupable} files without fingerprint from grouping")

        # Avoid groups with less than 2 files
        return {key: group for key, group in groups.items() if len(group) >= 2}
