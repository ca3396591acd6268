#!/usr/bin/env python3
"""
repoquill: Pack a directory tree into a single text or JSON document

Common usage:
  repoquill .
  repoquill src/ --include '*.py' -o context.txt
  repoquill . --tree-only '*.lock' --exclude 'docs/**' --format json
  repoquill . --list-files

Patterns use `*`, `?` and `**`. A pattern without `/` matches the file name
only; a pattern with `/` matches the whole path relative to the root.
Settings can also be placed in `.repoquill.toml`, `repoquill.toml`, or
`[tool.repoquill]` in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import signal
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from strif import atomic_output_file

from repoquill.cancellation import CancellationToken, OperationCancelledError
from repoquill.config import find_config_file, load_config, merge_cli_with_config
from repoquill.engine import QuillEngine
from repoquill.formatting import format_size
from repoquill.models import FileState, OutputFormat, QuillConfig
from repoquill.progress import UNKNOWN, ProgressReport

logger = logging.getLogger(__name__)

EXIT_CANCELLED = 130


@dataclass
class Options:
    """Command-line options for the repoquill tool."""

    root: str
    output: str
    include: list[str]
    exclude: list[str]
    tree_only: list[str]
    respect_gitignore: bool
    strip_comments: bool
    normalize_whitespace: bool
    format: str
    list_files: bool
    progress: bool
    verbose: bool
    version: bool


# argparse dest name -> Options field name, for flags a config file may also set.
_TRACKED_FLAGS: dict[str, str] = {
    "include": "include",
    "exclude": "exclude",
    "tree_only": "tree_only",
    "no_respect_gitignore": "respect_gitignore",
    "strip_comments": "strip_comments",
    "normalize_whitespace": "normalize_whitespace",
    "format": "format",
}


def _add_tracked_arguments(parser: argparse.ArgumentParser, defaults: dict[str, Any]) -> None:
    """Add the arguments that can also come from a config file."""
    parser.add_argument(
        "--include",
        action="append",
        default=defaults.get("include"),
        metavar="PATTERN",
        help="Only include files matching this pattern with full content. Can be repeated",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=defaults.get("exclude"),
        metavar="PATTERN",
        help="Leave out files matching this pattern entirely. Can be repeated",
    )
    parser.add_argument(
        "--tree-only",
        action="append",
        default=defaults.get("tree_only"),
        dest="tree_only",
        metavar="PATTERN",
        help="List files matching this pattern in the tree without their content. Can be repeated",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_true",
        dest="no_respect_gitignore",
        default=defaults.get("no_respect_gitignore", False),
        help="Disable .gitignore integration",
    )
    parser.add_argument(
        "--strip-comments",
        action="store_true",
        dest="strip_comments",
        default=defaults.get("strip_comments", False),
        help="Strip comments from recognized source files",
    )
    parser.add_argument(
        "--normalize-whitespace",
        action="store_true",
        dest="normalize_whitespace",
        default=defaults.get("normalize_whitespace", False),
        help="Normalize line endings, trailing whitespace and blank lines",
    )
    parser.add_argument(
        "--format",
        type=str,
        default=defaults.get("format", OutputFormat.text.value),
        help="Output format: 'text' or 'json' (default: %(default)s)",
    )


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=str,
        default=".",
        help="Root directory to scan (default: current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="-",
        help="Output file (use '-' for stdout)",
    )
    _add_tracked_arguments(parser, {})
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        help="Print each listed file with its classification, without loading content",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Report progress on stderr",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied,
    # even when the user passes the default value.
    _SENTINEL = object()
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    _add_tracked_arguments(
        sentinel_parser,
        {
            "no_respect_gitignore": _SENTINEL,
            "strip_comments": _SENTINEL,
            "normalize_whitespace": _SENTINEL,
            "format": _SENTINEL,
        },
    )
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    for dest_name, field_name in _TRACKED_FLAGS.items():
        val = getattr(sentinel_opts, dest_name, _SENTINEL)
        # For append actions, None means not supplied; a list means supplied
        if dest_name in ("include", "exclude", "tree_only"):
            if val is not None:
                explicit_flags.add(field_name)
        elif val is not _SENTINEL:
            explicit_flags.add(field_name)

    return (
        Options(
            root=opts.root,
            output=opts.output,
            include=opts.include or [],
            exclude=opts.exclude or [],
            tree_only=opts.tree_only or [],
            respect_gitignore=not opts.no_respect_gitignore,
            strip_comments=opts.strip_comments,
            normalize_whitespace=opts.normalize_whitespace,
            format=opts.format,
            list_files=opts.list_files,
            progress=opts.progress,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _to_quill_config(options: Options) -> QuillConfig:
    return QuillConfig(
        root_path=options.root,
        include_patterns=tuple(options.include),
        exclude_patterns=tuple(options.exclude),
        tree_only_patterns=tuple(options.tree_only),
        respect_gitignore=options.respect_gitignore,
        strip_comments=options.strip_comments,
        normalize_whitespace=options.normalize_whitespace,
        output_format=OutputFormat(options.format),
    )


def _print_progress(report: ProgressReport) -> None:
    total = "?" if report.total_count == UNKNOWN else str(report.total_count)
    percent = "" if report.percent == UNKNOWN else f" ({report.percent}%)"
    line = f"{report.phase.value}: {report.processed_count}/{total}{percent}"
    if report.current_file:
        line += f" {report.current_file}"
    print(line, file=sys.stderr)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the repoquill CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for usage errors, 130 if interrupted)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("repoquill")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    _configure_logging(options.verbose)

    root = Path(options.root)
    if not root.is_dir():
        print(f"Error: Not a directory: {options.root}", file=sys.stderr)
        return 1

    config_path = find_config_file(root)
    if config_path:
        try:
            file_config = load_config(config_path)
        except ValueError as e:
            print(f"Error: Invalid config file {config_path}: {e}", file=sys.stderr)
            return 1
        merge_cli_with_config(options, file_config, explicit_flags)

    try:
        config = _to_quill_config(options)
    except ValueError:
        print(
            f"Error: Unknown format {options.format!r} (expected 'text' or 'json')",
            file=sys.stderr,
        )
        return 1

    engine = QuillEngine()
    progress = _print_progress if options.progress else None
    token = CancellationToken()
    # Signal handlers can only be installed from the main thread.
    on_main_thread = threading.current_thread() is threading.main_thread()
    if on_main_thread:
        previous_handler = signal.signal(signal.SIGINT, lambda _signum, _frame: token.cancel())
    try:
        if options.list_files:
            for entry in engine.scan(config, progress, token):
                marker = "  [tree-only]" if entry.state == FileState.tree_only else ""
                print(f"{entry.relative_path}{marker}")
            return 0

        result = engine.execute(config, progress, token)
    except OperationCancelledError:
        print("Cancelled.", file=sys.stderr)
        return EXIT_CANCELLED
    finally:
        if on_main_thread:
            signal.signal(signal.SIGINT, previous_handler)

    for error in result.errors:
        print(f"Warning: {error.file_path}: {error.message}", file=sys.stderr)

    if options.output == "-":
        sys.stdout.write(result.output)
    else:
        with atomic_output_file(options.output, make_parents=True) as tmp_path:
            Path(tmp_path).write_text(result.output, encoding="utf-8")
        print(
            f"Wrote {options.output}: {result.total_files} files "
            f"({result.full_files} full, {result.tree_only_files} tree-only, "
            f"{format_size(result.total_size_bytes)})",
            file=sys.stderr,
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
