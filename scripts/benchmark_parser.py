#!/usr/bin/env python3
"""Benchmark G-code parsing and run-time estimation."""

import sys
import time
import argparse
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT))

from gcodeanalyzer.gcode.parser import GCodeParser, split_lines
from gcodeanalyzer.gcode.library import facing_gcode, circular_pocket_gcode


def benchmark_parse(lines: list[str], repeats: int) -> float:
    """Return parsed lines per second."""
    parser = GCodeParser()
    start = time.perf_counter()
    for _ in range(repeats):
        parser.parse_lines(lines)
    elapsed = time.perf_counter() - start
    return len(lines) * repeats / max(elapsed, 1e-9)


def benchmark_estimate(lines: list[str], repeats: int) -> float:
    """Return run-time estimates per second."""
    result = GCodeParser().parse_lines(lines)
    start = time.perf_counter()
    for _ in range(repeats):
        result.get_estimated_run_time()
    elapsed = time.perf_counter() - start
    return repeats / max(elapsed, 1e-9)


def main():
    parser = argparse.ArgumentParser(description="Benchmark gcodeanalyzer")
    parser.add_argument("--repeats", type=int, default=20)
    parser.add_argument("--stepover", type=float, default=0.1)
    args = parser.parse_args()

    program = facing_gcode(width=200.0, height=200.0, stepover=args.stepover)
    program += circular_pocket_gcode(depth=20.0, step_down=0.1)
    lines = split_lines(program)

    print("=" * 60)
    print("gcodeanalyzer benchmark")
    print("=" * 60)
    print(f"\nProgram: {len(lines):,} lines")

    lines_per_sec = benchmark_parse(lines, args.repeats)
    print(f"  Parsed lines/sec: {lines_per_sec:,.0f}")

    estimates_per_sec = benchmark_estimate(lines, args.repeats)
    print(f"  Run-time estimates/sec: {estimates_per_sec:,.1f}")

    result = GCodeParser().parse_lines(lines)
    print(f"\n{result.get_summary()}")
    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
