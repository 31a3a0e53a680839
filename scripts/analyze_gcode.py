#!/usr/bin/env python3
"""Analyze one or more G-code files and print a report for each.

Directories are expanded to the .nc/.gcode/.ngc/.tap files they contain.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Ensure package is importable when running from the scripts/ directory
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT))

from gcodeanalyzer.analysis.result import AnalysisResult
from gcodeanalyzer.gcode.parser import GCodeParser, is_gcode_file

logger = logging.getLogger("analyze_gcode")


def collect_files(paths: list[str]) -> list[Path]:
    """Expand directories into the G-code files they contain (sorted)."""
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(sorted(p for p in path.iterdir() if p.is_file() and is_gcode_file(p)))
        else:
            files.append(path)
    return files


def print_report(
    path: Path,
    result: AnalysisResult,
    hide_redundant: bool,
    hide_duplicates: bool,
    max_errors: int | None,
) -> None:
    print("=" * 60)
    print(path)
    print("=" * 60)
    print(result.get_summary())

    errors = result.filter_errors(hide_redundant, hide_duplicates)
    hidden = len(result.errors) - len(errors)
    if hidden:
        print(f"({hidden} filtered)")

    shown = errors if max_errors is None else errors[:max_errors]
    for err in shown:
        print(f"  {err}")
    if len(shown) < len(errors):
        print(f"  ... {len(errors) - len(shown)} more")
    print()


def main() -> int:
    parser = argparse.ArgumentParser(description="Analyze CNC G-code files")
    parser.add_argument("paths", nargs="+", help="G-code files or directories")
    parser.add_argument("--hide-redundant", action="store_true",
                        help="Do not list redundant (zero-length) moves")
    parser.add_argument("--hide-duplicates", action="store_true",
                        help="Do not list duplicate toolpath segments")
    parser.add_argument("--max-errors", type=int, default=None,
                        help="List at most this many errors per file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    gcode_parser = GCodeParser()
    exit_code = 0

    for path in collect_files(args.paths):
        try:
            result = gcode_parser.parse_file(path)
        except (FileNotFoundError, ValueError) as exc:
            logger.error("%s", exc)
            exit_code = 1
            continue
        print_report(path, result, args.hide_redundant, args.hide_duplicates, args.max_errors)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
