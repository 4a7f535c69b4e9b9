"""
Text rendering of scan results: the indented tree view and the persisted
`Hash:` report.

Report file layout, one block per group and nothing else:

    Hash: <hex fingerprint>
    <path of first member>
    <path of second member>
    ...
"""
import logging
from pathlib import Path
from typing import List, Union

from mediascanner.core.models import Entry, MatchGroup, Tree

logger = logging.getLogger(__name__)

INDENT = "    "


class ReportService:

    @staticmethod
    def format_groups(groups: List[MatchGroup]) -> List[str]:
        """Lines of the persisted report, without line terminators."""
        lines = []
        for group in groups:
            lines.append(f"Hash: {group.key_hex}")
            lines.extend(match.path for match in group.matches)
        return lines

    @classmethod
    def write_groups(cls, groups: List[MatchGroup], output_path: Union[str, Path]) -> Path:
        """Writes the report to `output_path`, replacing any previous content."""
        path = Path(output_path)
        content = "".join(f"{line}\n" for line in cls.format_groups(groups))
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        logger.info(f"Wrote {len(groups)} groups to {path}")
        return path

    @classmethod
    def render_tree(cls, tree: Tree) -> List[str]:
        """
        Indented tree view. Directories open with `=> "name" (level n)` and close
        with a count of their direct child folders and files.
        """
        lines = []
        for entry in tree:
            cls._render_entry(entry, lines)
        return lines

    @classmethod
    def _render_entry(cls, entry: Entry, lines: List[str]) -> None:
        indent = INDENT * entry.level
        if entry.is_file:
            lines.append(f'{indent}"{entry.name}"')
            return

        lines.append(f'{indent}=> "{entry.name}" (level {entry.level})')
        for child in entry.children:
            cls._render_entry(child, lines)
        lines.append(f"{indent}-----Folders:{entry.folder_count} Files:{entry.file_count}-----")
