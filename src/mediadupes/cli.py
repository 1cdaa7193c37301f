#!/usr/bin/env python3
"""
mediadupes CLI — command line interface for duplicate audio file detection and removal.
The core returns data only; this shell owns printing, prompting and deletion.
By default deletion moves files to the system trash.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
import logging
from typing import List, Optional, NoReturn

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
try:
    import send2trash  # noqa: F401
except ImportError:
    print("❌ Missing required dependency:", file=sys.stderr)
    print("   pip install send2trash", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from mediadupes.commands import DeduplicationCommand
from mediadupes.core.errors import FatalWalkError
from mediadupes.core.models import DeduplicationParams, ScanError, ScanResult
from mediadupes.services.duplicate_service import DuplicateService
from mediadupes.services.file_service import FileService
from mediadupes.utils.convert_utils import ConvertUtils

# English and Spanish affirmatives, compared case-insensitively
AFFIRMATIVE_ANSWERS = ("y", "yes", "s", "si", "sí")

EPILOG_TEXT = """
Examples:
  List duplicates and confirm before moving them to trash
  %(prog)s ~/Music

  Only list duplicates, never delete
  %(prog)s ~/Music --dry-run

  Hash with 4 threads, delete permanently without confirmation (for scripts)
  %(prog)s ~/Music -j 4 --force --permanent
"""


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments. Missing or extra positionals exit with usage."""
        parser = argparse.ArgumentParser(
            prog="mediadupes",
            description="mediadupes — find byte-identical duplicate audio files",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "root",
            type=str,
            help="Root directory to scan for duplicates"
        )

        # Detection options
        parser.add_argument(
            "--workers", "-j",
            default=1,
            type=int,
            metavar="N",
            help="Threads used for hashing. Default: 1"
        )
        parser.add_argument(
            "--verify",
            action="store_true",
            help="Compare file bytes after a digest match before reporting a duplicate"
        )

        # Actions
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only list duplicates, never delete"
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Delete without confirmation prompt (for automation/scripts)"
        )
        parser.add_argument(
            "--permanent",
            action="store_true",
            help="Delete files permanently instead of moving them to trash"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show groups, statistics, progress and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and args.dry_run:
            self.error_exit("--force cannot be combined with --dry-run")
        if args.workers < 1:
            self.error_exit("--workers must be at least 1")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams(
                root_dir=os.path.abspath(args.root),
                workers=args.workers,
                verify_content=args.verify
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def run_scan(self, params: DeduplicationParams) -> ScanResult:
        """Execute the detection pipeline; a bad root is fatal."""
        command = DeduplicationCommand()
        try:
            result = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except FatalWalkError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")
            print(f"\nScanned {result.files_scanned} candidate files")
            print(result.stats.print_summary())

        return result

    def report_errors(self, errors: List[ScanError]) -> None:
        """Print every recovered traversal/hash error to stderr."""
        for error in errors:
            self.warning(f"Skipped {error.path}: {error.message}")

    def output_results(self, result: ScanResult) -> None:
        """Print the duplicate count and one duplicate path per line."""
        if not result.has_duplicates:
            if not self.quiet:
                print("No duplicates found.")
            return

        reclaimable = ConvertUtils.bytes_to_human(DuplicateService.reclaimable_bytes(result.groups))
        print(f"\nFound {len(result.duplicate_paths)} duplicate files ({reclaimable} reclaimable):")

        if self.verbose:
            for idx, group in enumerate(result.groups, 1):
                size_str = ConvertUtils.bytes_to_human(group.size)
                print(f"\n📁 Group {idx} | Size: {size_str} | Files: {len(group.files)}")
                print(f"   [KEEP] {group.keeper.path}")
                for file in group.duplicates:
                    print(f"   [DEL]  {file.path}")
            print()
        else:
            for path in result.duplicate_paths:
                print(path)

    def confirm_deletion(self, count: int, permanent: bool) -> bool:
        """Ask for confirmation; 'y'/'s' in any case means yes."""
        if not sys.stdin.isatty():
            self.error_exit(
                "Cannot request interactive confirmation in non-interactive session.\n"
                "Use --force to delete without confirmation or --dry-run to only list duplicates."
            )

        action = "permanently delete" if permanent else "move to trash"
        try:
            response = input(f"Are you sure you want to {action} {count} files? [y/N]: ")
        except EOFError:
            return False
        return response.strip().lower() in AFFIRMATIVE_ANSWERS

    def execute_deletion(self, paths: List[str], permanent: bool = False) -> None:
        """Delete duplicates one by one; failures are reported per file and never abort the rest."""
        verb = "Deleting" if permanent else "Moving to trash"
        print(f"\n{verb} {len(paths)} files...")

        deleted, failures = FileService.delete_many(paths, permanent=permanent)

        for failure in failures:
            # Not silenced by --quiet
            print(f"⚠️  Failed to delete {failure.path}: {failure.message}", file=sys.stderr)

        if failures:
            print(f"\n⚠️  Partial success: {len(deleted)}/{len(paths)} files removed.")
        else:
            print(f"✅ Successfully removed {len(deleted)} files.")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point: scan, report, confirm, delete."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet:
            print(f"Scanning directory: {params.root_dir}")

        result = self.run_scan(params)
        self.report_errors(result.errors)
        self.output_results(result)

        if result.has_duplicates and not args.dry_run:
            if args.force or self.confirm_deletion(len(result.duplicate_paths), args.permanent):
                self.execute_deletion(result.duplicate_paths, permanent=args.permanent)
            else:
                print("Deletion cancelled by user.")

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main(argv=None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run(argv)
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
