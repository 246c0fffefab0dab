#!/usr/bin/env python3
"""
fjoin: Concatenate files into a single document with clear headers and relative paths

Common usage:
  fjoin file1.py file2.py
  fjoin 'src/**/*.py' -o combined.md
  fjoin 'src/*' -i
  fjoin 'src/*' -I '*.tsbuildinfo'
  fjoin 'src/*' -x .fjoinignore
  fjoin --list-files 'src/**/*'

Files matched by .gitignore are skipped unless -i or -I is given.
Quote globs so fjoin, not the shell, expands them (this is what makes `**` and
.gitignore reporting work).
"""

from __future__ import annotations

import argparse
import importlib.metadata
import sys
from dataclasses import dataclass
from pathlib import Path

from fjoin.config import find_config_file, load_config, merge_cli_with_config
from fjoin.file_selection import (
    REPO_IGNORE_NAME,
    FileResolver,
    IgnoreRuleStore,
    IgnoreSourceSpec,
    IncludeOverrideSet,
    SelectionReport,
    SourceKind,
    select_files,
)
from fjoin.render import STDOUT, check_output_path, render_document, write_output


@dataclass
class Options:
    """Command-line options for the fjoin tool."""

    files: list[str]
    output: str
    force: bool
    respect_gitignore: bool
    include: list[str]
    ignore_files: list[str]
    quiet: bool
    list_files: bool
    version: bool


def _build_parser() -> argparse.ArgumentParser:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="fjoin",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=str,
        default=[],
        help="Input files or glob patterns",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=STDOUT,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite the output file if it exists",
    )
    parser.add_argument(
        "-i",
        "--no-gitignore",
        action="store_true",
        dest="no_gitignore",
        help="Don't skip files matched by .gitignore",
    )
    parser.add_argument(
        "-I",
        "--include",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Include files matching PATTERN even if ignored. Can be repeated",
    )
    parser.add_argument(
        "-x",
        "--ignore-file",
        action="append",
        default=[],
        dest="ignore_files",
        metavar="FILE",
        help="Also skip files matched by patterns in FILE (gitignore syntax). Can be repeated",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress warnings about skipped and force-included files",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        help="Print the selected file paths instead of their contents",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    return parser


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns `(options, explicit_flags)` where `explicit_flags` tracks which
    config-backed options the user passed explicitly (for config merge precedence).
    """
    opts = _build_parser().parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied.
    # append actions use None as sentinel (argparse creates a list when the flag is used).
    _SENTINEL = object()
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    # Untracked short flags are declared so combined forms like `-qf` still parse.
    sentinel_parser.add_argument("-o", "--output")
    sentinel_parser.add_argument("-f", "--force", action="store_true")
    sentinel_parser.add_argument("-I", "--include", action="append", default=None)
    sentinel_parser.add_argument(
        "-x", "--ignore-file", dest="ignore_files", action="append", default=None
    )
    sentinel_parser.add_argument(
        "-i", "--no-gitignore", dest="no_gitignore", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument("-q", "--quiet", action="store_true", default=_SENTINEL)
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    if sentinel_opts.include is not None:
        explicit_flags.add("include")
    if sentinel_opts.ignore_files is not None:
        explicit_flags.add("ignore_files")
    if sentinel_opts.no_gitignore is not _SENTINEL:
        explicit_flags.add("respect_gitignore")
    if sentinel_opts.quiet is not _SENTINEL:
        explicit_flags.add("quiet")

    return (
        Options(
            files=opts.files,
            output=opts.output,
            force=opts.force,
            respect_gitignore=not opts.no_gitignore,
            include=opts.include,
            ignore_files=opts.ignore_files,
            quiet=opts.quiet,
            list_files=opts.list_files,
            version=opts.version,
        ),
        explicit_flags,
    )


def _ignore_sources(options: Options, root: Path) -> list[IgnoreSourceSpec]:
    sources: list[IgnoreSourceSpec] = []
    if options.respect_gitignore:
        sources.append(IgnoreSourceSpec(SourceKind.REPO, root / REPO_IGNORE_NAME))
    for location in options.ignore_files:
        sources.append(IgnoreSourceSpec(SourceKind.CUSTOM, root / location))
    return sources


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _print_warnings(report: SelectionReport) -> None:
    """Print the end-of-run summary of skipped and force-included files to stderr."""
    for rel_path in report.skipped_directory:
        print(f"Skipping directory: {rel_path} (pass files or use globs)", file=sys.stderr)
    for rel_path in report.skipped_binary:
        print(f"Skipping binary file: {rel_path}", file=sys.stderr)

    if report.force_included:
        print(
            f"{len(report.force_included)} gitignored file(s) included via --include.",
            file=sys.stderr,
        )

    if report.skipped_ignored:
        print(
            f"Warning: {len(report.skipped_ignored)} gitignored file(s) skipped:",
            file=sys.stderr,
        )
        for pattern, count in report.pattern_counts.items():
            print(f"  {pattern} ({_plural(count, 'file')})", file=sys.stderr)
        if report.unattributed:
            print(
                f"  (no single pattern) ({_plural(report.unattributed, 'file')})",
                file=sys.stderr,
            )
        print(
            "Use -i/--no-gitignore to include them, "
            "or -I/--include <pattern> to selectively include.",
            file=sys.stderr,
        )


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the fjoin CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("fjoin")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not options.files:
        _build_parser().print_help()
        return 0

    root = Path.cwd()

    # Config warnings wait until the merge so a config-level `quiet` applies to them
    config_warnings: list[str] = []
    config_path = find_config_file(root)
    if config_path:
        config = load_config(config_path, config_warnings)
        merge_cli_with_config(options, config, explicit_flags)
    if not options.quiet:
        for warning in config_warnings:
            print(warning, file=sys.stderr)

    # Fail before reading anything if we'd refuse to write the result anyway
    if not options.list_files:
        try:
            check_output_path(options.output, options.force)
        except FileExistsError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    try:
        store = IgnoreRuleStore.load(_ignore_sources(options, root))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    overrides = IncludeOverrideSet.resolve(options.include, root)

    resolver = FileResolver(root)
    candidates = resolver.resolve(options.files)
    if not options.quiet:
        if not candidates:
            print("Warning: no files matched the given arguments.", file=sys.stderr)
        else:
            for argument in resolver.unmatched:
                print(f"Warning: no files matched '{argument}'", file=sys.stderr)

    report = SelectionReport()
    selected = select_files(candidates, store, overrides, report)

    if not options.quiet:
        _print_warnings(report)

    if options.list_files:
        for candidate in selected:
            print(candidate.rel_path)
        return 0

    text = render_document(selected, report)

    try:
        write_output(text, options.output, force=options.force)
    except FileExistsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if options.output != STDOUT and not options.quiet:
        print(f"Context written to {options.output}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
