"""Main CLI entry point for the minify-xml command-line tool.

Provides batch minification of XML files and inspection of the effective
minification options.
"""

import argparse
import json
import logging
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from minify_xml import __version__, minify_file
from minify_xml.api import XMLMinifier
from minify_xml.shared.config import (
    PRESETS,
    STRICT,
    ConfigError,
    MinifyOptions,
)
from minify_xml.shared.logging import get_logger

XML_SUFFIXES = frozenset({".xml", ".xhtml", ".svg"})
STDIN_PATH = "-"


def parse_option_value(value: str) -> Union[bool, str]:
    """Convert a command-line option value to a flag value."""
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "on", "1"):
        return True
    if lowered in ("false", "no", "off", "0"):
        return False
    if lowered == STRICT:
        return STRICT
    raise ConfigError(f"Invalid option value: {value!r}")


def parse_option_overrides(assignments: Optional[List[str]]) -> Dict[str, Any]:
    """Parse ``name=value`` assignments given with ``-O``."""
    overrides: Dict[str, Any] = {}
    for assignment in assignments or []:
        name, separator, value = assignment.partition("=")
        if not separator or not name.strip():
            raise ConfigError(f"Expected NAME=VALUE, got {assignment!r}")
        overrides[name.strip()] = parse_option_value(value)
    return overrides


def build_options(args: argparse.Namespace) -> MinifyOptions:
    """Combine preset, config file and ``-O`` overrides, in that order."""
    options = MinifyOptions.preset(args.preset) if args.preset else MinifyOptions()
    if args.config:
        options = MinifyOptions.from_file(args.config, base=options)
    return options.merged(parse_option_overrides(args.option))


class ProgressTracker:
    """Progress reporting on stderr for batch runs."""

    def __init__(self, total: int, description: str = "Minifying", enabled: bool = True):
        self.total = total
        self.completed = 0
        self.description = description
        self.enabled = enabled
        self.start_time = time.time()

    def update(self, increment: int = 1) -> None:
        """Advance progress and redraw the status line."""
        self.completed += increment
        if self.enabled and self.total > 1:
            self._display_progress()

    def _display_progress(self) -> None:
        percentage = (self.completed / self.total) * 100
        elapsed = time.time() - self.start_time
        print(f"\r{self.description}: {self.completed}/{self.total} "
              f"({percentage:.0f}%, {elapsed:.1f}s)",
              end="", file=sys.stderr)
        if self.completed >= self.total:
            print(file=sys.stderr)


def output_path_for(path: Path, args: argparse.Namespace) -> Optional[Path]:
    """Decide where the minified version of ``path`` is written.

    Returns None when the result goes to stdout.
    """
    if args.in_place:
        return path
    if args.output_dir:
        return args.output_dir / f"{path.stem}{args.suffix}{path.suffix}"
    if args.suffix:
        return path.parent / f"{path.stem}{args.suffix}{path.suffix}"
    return None


def process_file(path: Path, options: MinifyOptions,
                 destination: Optional[Path]) -> Dict[str, Any]:
    """Minify one file, write it out and return its report."""
    logger = get_logger(__name__, None, "cli_processor")
    try:
        result = minify_file(path, options)
        report = result.to_dict()
        if destination is not None:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(result.text.encode(result.encoding or "utf-8"))
            report["output"] = str(destination)
        else:
            report["text"] = result.text
        report["success"] = True
        return report
    except (OSError, UnicodeError) as e:
        logger.error("Failed to minify file", extra={"file": str(path)})
        return {"source": str(path), "success": False, "error": str(e)}


def find_xml_files(path: Path, recursive: bool = False) -> Iterator[Path]:
    """Yield XML files for a path; directories are scanned by suffix."""
    if path.is_dir():
        candidates = path.rglob("*") if recursive else path.glob("*")
        for candidate in sorted(candidates):
            if candidate.is_file() and candidate.suffix.lower() in XML_SUFFIXES:
                yield candidate
    else:
        yield path


def batch_process(paths: List[Path], args: argparse.Namespace,
                  options: MinifyOptions) -> List[Dict[str, Any]]:
    """Minify every file, in parallel when more than one worker is allowed."""
    files: List[Path] = []
    for path in paths:
        files.extend(find_xml_files(path, args.recursive))

    progress = ProgressTracker(len(files), enabled=not args.quiet)
    results: List[Dict[str, Any]] = []

    if len(files) <= 1 or args.workers == 1:
        for path in files:
            results.append(process_file(path, options, output_path_for(path, args)))
            progress.update()
        return results

    with ProcessPoolExecutor(max_workers=args.workers) as executor:
        futures = [
            executor.submit(process_file, path, options, output_path_for(path, args))
            for path in files
        ]
        for future in as_completed(futures):
            results.append(future.result())
            progress.update()

    results.sort(key=lambda report: report["source"])
    return results


def format_report(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format per-file reports."""
    summaries = [
        {key: value for key, value in result.items() if key != "text"}
        for result in results
    ]
    if format_type == "json":
        return json.dumps(summaries, indent=2)

    lines = []
    for summary in summaries:
        if not summary.get("success"):
            lines.append(f"✗ {summary['source']}: {summary.get('error', '')}")
            continue
        lines.append(
            f"✓ {summary['source']}: {summary['original_length']} -> "
            f"{summary['minified_length']} characters "
            f"(-{summary['reduction_ratio']:.1%})"
        )
    saved = sum(summary.get("characters_saved", 0) for summary in summaries)
    lines.append(f"Minified {len(summaries)} files, {saved} characters saved")
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="minify-xml",
        description="Minify XML documents while preserving their meaning"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    option_parent = argparse.ArgumentParser(add_help=False)
    option_parent.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON file with minification options"
    )
    option_parent.add_argument(
        "--preset",
        choices=PRESETS,
        help="Start from a named option preset"
    )
    option_parent.add_argument(
        "--option", "-O",
        action="append",
        metavar="NAME=VALUE",
        help="Set an option, e.g. -O removeComments=false or "
             "-O trim_whitespace_from_texts=strict (repeatable)"
    )

    minify_parser = subparsers.add_parser(
        "minify", parents=[option_parent], help="Minify XML files"
    )
    minify_parser.add_argument(
        "paths",
        nargs="+",
        help="XML files or directories to minify, '-' for stdin"
    )
    minify_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively scan directories"
    )
    destination = minify_parser.add_mutually_exclusive_group()
    destination.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file for a single input (default: stdout)"
    )
    destination.add_argument(
        "--output-dir", "-d",
        type=Path,
        help="Output directory for minified files"
    )
    destination.add_argument(
        "--in-place",
        action="store_true",
        help="Overwrite input files"
    )
    minify_parser.add_argument(
        "--suffix",
        default="",
        help="Suffix for minified file names, e.g. '.min'"
    )
    minify_parser.add_argument(
        "--report",
        choices=["json", "text"],
        help="Print a size report to stderr"
    )
    minify_parser.add_argument(
        "--workers", "-w",
        type=int,
        help="Number of parallel workers"
    )

    subparsers.add_parser(
        "options", parents=[option_parent], help="Print the effective options as JSON"
    )

    return parser


def cmd_minify(args: argparse.Namespace) -> int:
    """Handle minify command."""
    options = build_options(args)

    if args.paths == [STDIN_PATH]:
        minifier = XMLMinifier(options)
        text = minifier.minify(sys.stdin.read())
        if args.output:
            args.output.write_text(text, encoding="utf-8")
        else:
            sys.stdout.write(text)
        return 0

    paths = [Path(path) for path in args.paths]
    if args.output:
        if len(paths) != 1 or paths[0].is_dir():
            print("--output requires a single input file", file=sys.stderr)
            return 2
        args.suffix = ""
        args.output_dir = None

    try:
        results = batch_process(paths, args, options)
    except KeyboardInterrupt:
        print("\nMinification interrupted by user", file=sys.stderr)
        return 130

    if not results:
        print("No XML files found", file=sys.stderr)
        return 1

    for result in results:
        if not result.get("success"):
            continue
        if args.output:
            args.output.write_bytes(
                result["text"].encode(result.get("encoding") or "utf-8")
            )
        elif "text" in result:
            sys.stdout.write(result["text"])
            sys.stdout.write("\n")

    if args.report:
        print(format_report(results, args.report), file=sys.stderr)

    failures = [result for result in results if not result.get("success")]
    for failure in failures:
        print(f"Failed to minify {failure['source']}: {failure['error']}",
              file=sys.stderr)
    return 0 if not failures else 1


def cmd_options(args: argparse.Namespace) -> int:
    """Handle options command."""
    print(build_options(args).to_json())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        if args.command == "minify":
            return cmd_minify(args)
        if args.command == "options":
            return cmd_options(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    except ConfigError as e:
        print(f"Invalid options: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
