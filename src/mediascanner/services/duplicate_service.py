import os
import logging
from typing import List, Callable

from mediascanner.core.errors import DeletionError
from mediascanner.core.models import MatchGroup, ReconcileReport

logger = logging.getLogger(__name__)


def _is_alias_of(path: str, kept: str) -> bool:
    """
    True if removing `path` would remove the data behind `kept`.
    A symbolic link member is never an alias: only the link itself is removed.
    """
    if os.path.islink(path):
        return False
    try:
        return os.path.samefile(path, kept)
    except OSError:
        return False


class DuplicateService:
    @staticmethod
    def files_to_delete(groups: List[MatchGroup]) -> List[str]:
        """
        Paths that keep-one reconciliation would remove: every member but the
        first of each group, in group order.
        """
        paths = []
        for group in groups:
            for match in group.matches[1:]:
                paths.append(match.path)
        return paths

    @staticmethod
    def reconcile(groups: List[MatchGroup], remove: Callable[[str], None]) -> ReconcileReport:
        """
        Keeps the first member of each group and passes every other member to `remove`.

        Members that are the same file as the kept one (reached through a followed
        symbolic link) are skipped. A failing removal is logged and recorded, then
        processing continues with the remaining members and groups.

        Returns:
            ReconcileReport with kept, deleted, skipped and failed paths.
        """
        report = ReconcileReport()
        for group in groups:
            if not group.matches:
                continue
            kept = group.matches[0].path
            report.kept.append(kept)
            for match in group.matches[1:]:
                if _is_alias_of(match.path, kept):
                    logger.warning(f"Not deleting {match.path}: same file as kept {kept}")
                    report.skipped.append(match.path)
                    continue
                try:
                    remove(match.path)
                except (DeletionError, OSError) as e:
                    logger.warning(f"Failed to delete {match.path}: {e}")
                    report.failed.append((match.path, str(e)))
                    continue
                report.deleted.append(match.path)
        return report
