"""
Unified command orchestrator for scanning.
This is the SINGLE source of truth for the scan workflow — used by the CLI and library callers.
"""
import time
import logging
from typing import List, Optional, Callable, Tuple
from mediascanner.core.models import MatchGroup, ScanParams, ScanStats, Stage, Tree
from mediascanner.core.tree_builder import TreeBuilderImpl
from mediascanner.core.hasher import HasherImpl, get_algorithm
from mediascanner.core.matcher import MatcherImpl

logger = logging.getLogger(__name__)


class ScanCommand:
    """
    Orchestrates the entire scan workflow:
    1. Build the tree under the root directory, fingerprinting every file
    2. Flatten the tree and group entries (duplicates, or name search)
    3. Return the tree, the groups and the statistics

    Usage:
        params = ScanParams(root_dir="~/Pictures", query="img")
        command = ScanCommand()
        tree, groups, stats = command.execute(params, progress_callback=cli_progress_printer)
    """

    def __init__(self, matcher: Optional[MatcherImpl] = None):
        self._matcher = matcher or MatcherImpl()

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[Tree, List[MatchGroup], ScanStats]:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (tree, match_groups, statistics)

        Raises:
            InvalidRootError: If the root is not a listable directory
        """
        stats = ScanStats()
        start_time = time.time()

        # Step 1: Build the tree
        builder = TreeBuilderImpl(
            hasher=HasherImpl(get_algorithm(params.algorithm)),
            follow_symlinks=params.follow_symlinks,
            sort_entries=params.sort_entries,
            progress_callback=progress_callback,
            stats=stats,
        )
        stage_start = time.time()
        tree = builder.build_tree(params.root_dir)
        stats.update_stage(Stage.SCAN.value, time.time() - stage_start)

        # Step 2: Group by fingerprint (the full tree is built before grouping starts)
        stage_start = time.time()
        if params.is_name_search:
            groups = self._matcher.find_matching(tree, params.query)
        else:
            groups = self._matcher.find_duplicates(tree)
        stats.update_stage(Stage.GROUP.value, time.time() - stage_start)

        stats.groups = len(groups)
        stats.total_time = time.time() - start_time
        logger.info(f"Scan of {params.root_dir} finished: {len(groups)} groups")
        return tree, groups, stats

