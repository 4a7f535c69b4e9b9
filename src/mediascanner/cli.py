#!/usr/bin/env python3
"""
mediascanner CLI — Command line interface for duplicate file detection and removal.
Scans a directory tree, fingerprints every file, and reports files with identical content.
Deletion keeps the first file of each group; the rest go to the system trash unless --permanent.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import itertools
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install mediascanner", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from mediascanner.core.errors import InvalidRootError
from mediascanner.core.models import MatchGroup, ScanParams, HashAlgorithmName, Tree
from mediascanner.commands import ScanCommand
from mediascanner.services.file_service import FileService
from mediascanner.services.duplicate_service import DuplicateService
from mediascanner.services.report_service import ReportService
from mediascanner.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse and validate command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="mediascanner",
            description="mediascanner — find files with identical content in a directory tree",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Input directory to scan"
        )

        # Search options
        parser.add_argument(
            "--name", "-n",
            default=None,
            type=str,
            metavar='',
            dest="query",
            help="Only consider files whose name contains this text (case-insensitive)"
        )
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="sha256",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--sorted",
            action="store_true",
            dest="sort_entries",
            help="Visit directory entries in name order instead of filesystem order"
        )
        parser.add_argument(
            "--follow-symlinks",
            action="store_true",
            help="Follow symbolic links (no loop detection). Default: skip them.\n"
                 "With --keep-one, a member that is the same file as the kept one\n"
                 "is never deleted; a member that is itself a link is removed as a link"
        )

        # Output options
        parser.add_argument(
            "--tree",
            action="store_true",
            help="Print the scanned directory tree"
        )
        parser.add_argument(
            "--output", "-o",
            default=None,
            type=str,
            metavar='',
            help="Write match groups to this file ('Hash: <hex>' line, then one path per line)"
        )

        # Actions
        parser.add_argument(
            "--keep-one",
            action="store_true",
            help="Keep the first file of each group and move the rest to trash. "
                 "Always shows preview before deletion for safety."
        )
        parser.add_argument(
            "--permanent",
            action="store_true",
            help="With --keep-one, delete files permanently instead of moving them to trash"
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --keep-one (for automation/scripts)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.keep_one:
            self.error_exit("--force can only be used with --keep-one")
        if args.permanent and not args.keep_one:
            self.error_exit("--permanent can only be used with --keep-one")

        # Prevent interactive confirmation in non-TTY environments
        if args.keep_one and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        root_path = Path(args.input).resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.input}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.input}")

        if args.query is not None and not args.query.strip():
            self.error_exit("Name query cannot be empty")

        if args.output:
            output_dir = Path(args.output).resolve().parent
            if not output_dir.is_dir():
                self.error_exit(f"Output directory not found: {output_dir}")

        # Validate hash algorithm
        if args.algorithm not in ALGORITHM_ALIASES:
            self.error_exit(
                f"Invalid hash algorithm: '{args.algorithm}'.\n"
                f"Valid options: {', '.join(ALGORITHM_CHOICES)}"
            )

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams(
                root_dir=str(Path(args.input).resolve()),
                query=args.query,
                algorithm=ALGORITHM_ALIASES.get(args.algorithm, HashAlgorithmName.SHA256),
                follow_symlinks=args.follow_symlinks,
                sort_entries=args.sort_entries,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
            sys.stderr.flush()
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
            sys.stderr.flush()

    def run_scan(self, params: ScanParams) -> tuple[Tree, List[MatchGroup]]:
        """Execute the scan workflow."""
        command = ScanCommand()
        if self.verbose:
            print(f"Fingerprinting files (algorithm: {params.algorithm.display_name})...")

        try:
            tree, groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except InvalidRootError as e:
            self.error_exit(f"Invalid scan root: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            print("\nScan Statistics:")
            print(stats.print_summary())

        return tree, groups

    def output_tree(self, tree: Tree) -> None:
        """Print the scanned tree."""
        if self.quiet:
            return
        for line in ReportService.render_tree(tree):
            print(line)

    def output_results(self, groups: List[MatchGroup], query: Optional[str] = None) -> None:
        """Output match groups as plain text in discovery order."""
        if self.quiet:
            return

        if not groups:
            if query:
                print(f"No duplicate files matching '{query}' found.")
            else:
                print("No duplicate groups found.")
            return

        total_files = sum(g.match_count for g in groups)
        print(f"\nFound {len(groups)} duplicate groups ({total_files} files)")

        for idx, group in enumerate(groups, 1):
            print(f"\n📁 Group {idx} | Hash: {group.key_hex} | Files: {group.match_count}")
            for match in group.matches:
                print(f"   {match.path}")

    def save_results(self, groups: List[MatchGroup], output: str) -> None:
        """Persist match groups to the report file."""
        try:
            path = ReportService.write_groups(groups, output)
        except OSError as e:
            self.error_exit(f"Cannot write report to {output}: {e}")
        if not self.quiet:
            print(f"\nReport saved to {path} ({len(groups)} groups)")

    def execute_keep_one(self, groups: List[MatchGroup], force: bool = False, permanent: bool = False) -> None:
        """Keep one file per group, delete the rest. Always shows preview before deletion."""
        if not groups:
            if not self.quiet:
                print("No duplicate groups found.")
            return

        files_to_delete = DuplicateService.files_to_delete(groups)

        if not files_to_delete:
            if not self.quiet:
                print("No files to delete (all groups already have only one file).")
            return

        action = "delete permanently" if permanent else "move to trash"

        # Always show deletion preview before action (safety first)
        print()
        for idx, group in enumerate(groups, 1):
            print(f"📁 Group {idx} | Hash: {group.key_hex} | Files: {group.match_count}")
            print("-" * 60)

            # File that will be preserved (first file in scan order)
            print(f"   [KEEP] {group.matches[0].path}")

            # Files that would be deleted
            for match in group.matches[1:]:
                print(f"   [DEL]  {match.path}")
            print()

        print("=" * 60)
        print(f"Summary: Keep 1 file per group ({len(groups)} files preserved, "
              f"{len(files_to_delete)} files to {action})")
        print()

        # Skip confirmation if --force is used
        if force:
            print("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
        else:
            # Safety check: confirm we're still in interactive mode
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )

            # Ask for confirmation before actual deletion
            response = input(f"Are you sure you want to {action} {len(files_to_delete)} files? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Deletion cancelled by user.")
                return

        # Execute deletion with error resilience (continue on individual file errors)
        print(f"\nRemoving {len(files_to_delete)} files...")
        remove = FileService.remover(permanent=permanent)

        if self.verbose:
            position = itertools.count(1)

            def remove_verbose(path: str) -> None:
                print(f"  [{next(position)}/{len(files_to_delete)}] {os.path.basename(path)}")
                remove(path)

            report = DuplicateService.reconcile(groups, remove_verbose)
        else:
            report = DuplicateService.reconcile(groups, remove)

        for path in report.skipped:
            self.warning(f"Kept {path}: same file as the kept member of its group")
        for path, error in report.failed:
            self.warning(f"Failed to delete {path}: {error}")

        # Report results
        if report.has_failures:
            print(f"\n⚠️  Partial success: {len(report.deleted)}/{len(files_to_delete)} files removed.")
            print(f"Failed to delete {len(report.failed)} file(s):")
            for path, error in report.failed[:5]:  # Show first 5 errors
                print(f"  • {os.path.basename(path)}: {error.split(':')[-1].strip()}")
            if len(report.failed) > 5:
                print(f"  ...and {len(report.failed) - 5} more files")
        else:
            print(f"✅ Successfully removed {len(report.deleted)} files.")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        if self.verbose:
            logging.getLogger("mediascanner").setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet:
            print(f"Scanning directory: {params.root_dir}")

        tree, groups = self.run_scan(params)

        if args.tree:
            self.output_tree(tree)

        if args.output:
            self.save_results(groups, args.output)

        # Conditional output based on flags
        if args.keep_one:
            # Always show preview before deletion (safety first)
            self.execute_keep_one(groups, force=args.force, permanent=args.permanent)
        elif not args.tree:
            self.output_results(groups, query=params.query)

        # Show completion time
        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
