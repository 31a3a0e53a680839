"""Toolpath length and run-time estimation.

All functions are pure: they read the resolved end points of an ordered
command list and never modify it. Lengths are in program units and feed
rates in units per minute.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Callable, Sequence
from datetime import timedelta

import numpy as np

from gcodeanalyzer.config import DEFAULT_CONFIG, AnalyzerConfig
from gcodeanalyzer.gcode.commands import CommandType, GCodeCommand
from gcodeanalyzer.utils.math_helpers import Point3, distance, sweep_angle


def linear_distance(start: Point3, end: Point3) -> float:
    """Straight-line distance between *start* and *end*."""
    return distance(start, end)


def arc_length(
    cmd: GCodeCommand,
    start: Point3,
    min_radius: float = DEFAULT_CONFIG.min_arc_radius,
) -> float:
    """Length of a G2/G3 move starting at *start*.

    The centre is ``start + (I, J)``; K only matters through the helical
    Z term. Without I or J the move is measured as a straight line, and a
    radius below *min_radius* yields zero.
    """
    end = cmd.end_point
    if not cmd.has_center_offset:
        return linear_distance(start, end)

    i = cmd.i or 0.0
    j = cmd.j or 0.0
    radius = math.hypot(i, j)
    if radius < min_radius:
        return 0.0

    cx = start[0] + i
    cy = start[1] + j
    start_angle = math.atan2(start[1] - cy, start[0] - cx)
    end_angle = math.atan2(end[1] - cy, end[0] - cx)

    clockwise = cmd.command_type is CommandType.ARC_CLOCKWISE
    arc_2d = abs(sweep_angle(start_angle, end_angle, clockwise)) * radius

    dz = end[2] - start[2]
    return math.hypot(arc_2d, dz)


def segment_length(
    cmd: GCodeCommand,
    start: Point3,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> float:
    """Length travelled by *cmd* when it starts at *start*."""
    if cmd.command_type.is_arc:
        return arc_length(cmd, start, config.min_arc_radius)
    return linear_distance(start, cmd.end_point)


def segment_lengths(
    commands: Sequence[GCodeCommand],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """Per-command travel lengths.

    Entry ``n`` is the length of the move from command ``n-1``'s end
    point to command ``n``'s. The first command has no predecessor and
    contributes ``0``.
    """
    lengths = np.zeros(len(commands), dtype=np.float64)
    for idx in range(1, len(commands)):
        lengths[idx] = segment_length(commands[idx], commands[idx - 1].end_point, config)
    return lengths


def feed_rates(
    commands: Sequence[GCodeCommand],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """Effective feed rate of every command (units/min).

    The modal feed starts at ``config.default_feed_rate`` and is updated
    by any positive F word before that command is costed, including an F
    carried over from a dropped zero-length line (``inherited_f``). Rapid moves
    always use ``config.rapid_feed_rate``.
    """
    rates = np.empty(len(commands), dtype=np.float64)
    current_feed = config.default_feed_rate
    for idx, cmd in enumerate(commands):
        for feed in (cmd.inherited_f, cmd.f):
            if feed is not None and feed > 0.0:
                current_feed = feed
        rates[idx] = config.rapid_feed_rate if cmd.is_rapid else current_feed
    return rates


def estimate_run_time(
    commands: Sequence[GCodeCommand],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> timedelta:
    """Estimated machining time ignoring acceleration."""
    if not commands:
        return timedelta(0)

    lengths = segment_lengths(commands, config)
    rates = feed_rates(commands, config)

    mask = (rates > 0.0) & (lengths > 0.0)
    total_minutes = float(np.sum(lengths[mask] / rates[mask]))
    return timedelta(minutes=total_minutes)


def _mask_for(
    commands: Sequence[GCodeCommand],
    predicate: Callable[[GCodeCommand], bool],
) -> np.ndarray:
    return np.fromiter(
        (predicate(cmd) for cmd in commands),
        dtype=bool,
        count=len(commands),
    )


def total_distance(
    commands: Sequence[GCodeCommand],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> float:
    """Sum of every move's length."""
    return float(np.sum(segment_lengths(commands, config)))


def cutting_distance(
    commands: Sequence[GCodeCommand],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> float:
    """Length travelled under feed (G1, G2, G3)."""
    lengths = segment_lengths(commands, config)
    mask = _mask_for(commands, lambda cmd: cmd.is_cutting_move)
    return float(np.sum(lengths[mask]))


def rapid_distance(
    commands: Sequence[GCodeCommand],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> float:
    """Length travelled at rapid rate (G0)."""
    lengths = segment_lengths(commands, config)
    mask = _mask_for(commands, lambda cmd: cmd.is_rapid)
    return float(np.sum(lengths[mask]))


def move_counts(commands: Sequence[GCodeCommand]) -> Counter[CommandType]:
    """Number of commands of each motion type."""
    return Counter(cmd.command_type for cmd in commands)
