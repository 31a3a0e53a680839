"""Aggregate output of one G-code parse."""

from __future__ import annotations

import math
from datetime import timedelta

from gcodeanalyzer.analysis import estimator
from gcodeanalyzer.analysis.errors import GCodeError
from gcodeanalyzer.config import DEFAULT_CONFIG, AnalyzerConfig
from gcodeanalyzer.gcode.commands import CommandType, GCodeCommand


def format_time(time: timedelta) -> str:
    """Render *time* as ``1h 2m 3s``, ``2m 3s`` or ``3.4s``."""
    total_seconds = time.total_seconds()
    minutes = int(total_seconds // 60) % 60
    seconds = int(total_seconds) % 60
    if total_seconds >= 3600:
        return f"{int(total_seconds // 3600)}h {minutes}m {seconds}s"
    if total_seconds >= 60:
        return f"{minutes}m {seconds}s"
    return f"{total_seconds:.1f}s"


class AnalysisResult:
    """Bounds, motion commands and diagnostics collected from a program.

    Populated once by ``GCodeParser.parse_lines`` and read-only afterwards.
    The bounds start at +/- infinity; check ``total_commands`` before
    reading ``width``, ``height`` or ``depth``.
    """

    def __init__(self, config: AnalyzerConfig = DEFAULT_CONFIG) -> None:
        self.config: AnalyzerConfig = config

        self.min_x: float = math.inf
        self.max_x: float = -math.inf
        self.min_y: float = math.inf
        self.max_y: float = -math.inf
        self.min_z: float = math.inf
        self.max_z: float = -math.inf

        self.total_lines: int = 0
        self.commands: list[GCodeCommand] = []
        self.errors: list[GCodeError] = []

    # ------------------------------------------------------------------ #
    #  Bounds                                                             #
    # ------------------------------------------------------------------ #

    def update_bounds(self, x: float, y: float, z: float) -> None:
        """Grow the bounding box to include (x, y, z)."""
        self.min_x = min(self.min_x, x)
        self.max_x = max(self.max_x, x)
        self.min_y = min(self.min_y, y)
        self.max_y = max(self.max_y, y)
        self.min_z = min(self.min_z, z)
        self.max_z = max(self.max_z, z)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def depth(self) -> float:
        return self.max_z - self.min_z

    # ------------------------------------------------------------------ #
    #  Counts                                                             #
    # ------------------------------------------------------------------ #

    @property
    def total_commands(self) -> int:
        return len(self.commands)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def _count(self, command_type: CommandType) -> int:
        return sum(1 for cmd in self.commands if cmd.command_type is command_type)

    @property
    def rapid_move_count(self) -> int:
        return self._count(CommandType.RAPID_MOVE)

    @property
    def linear_move_count(self) -> int:
        return self._count(CommandType.LINEAR_MOVE)

    @property
    def arc_cw_move_count(self) -> int:
        return self._count(CommandType.ARC_CLOCKWISE)

    @property
    def arc_ccw_move_count(self) -> int:
        return self._count(CommandType.ARC_COUNTER_CLOCKWISE)

    @property
    def arc_move_count(self) -> int:
        return self.arc_cw_move_count + self.arc_ccw_move_count

    # ------------------------------------------------------------------ #
    #  Distances and time                                                 #
    # ------------------------------------------------------------------ #

    def get_total_distance(self) -> float:
        return estimator.total_distance(self.commands, self.config)

    def get_cutting_distance(self) -> float:
        return estimator.cutting_distance(self.commands, self.config)

    def get_rapid_distance(self) -> float:
        return estimator.rapid_distance(self.commands, self.config)

    def get_estimated_run_time(self) -> timedelta:
        return estimator.estimate_run_time(self.commands, self.config)

    # ------------------------------------------------------------------ #
    #  Errors                                                             #
    # ------------------------------------------------------------------ #

    def filter_errors(
        self,
        hide_redundant: bool = False,
        hide_duplicates: bool = False,
    ) -> list[GCodeError]:
        """Errors in detection order, optionally without redundant moves
        and/or duplicate toolpaths."""
        errors = self.errors
        if hide_redundant:
            errors = [err for err in errors if not err.is_redundant_move]
        if hide_duplicates:
            errors = [err for err in errors if not err.is_duplicate_toolpath]
        return list(errors)

    def errors_for_line(self, line_number: int) -> list[GCodeError]:
        return [err for err in self.errors if err.line_number == line_number]

    # ------------------------------------------------------------------ #
    #  Summary                                                            #
    # ------------------------------------------------------------------ #

    def get_summary(self) -> str:
        """Multi-section, human-readable report."""
        if self.total_commands == 0:
            return "No movement commands found."

        lines = [
            "=== FILE STATISTICS ===",
            f"Total Lines: {self.total_lines}",
            f"Movement Commands: {self.total_commands}",
            "",
            "=== MOVE COUNTS ===",
            f"Rapid Moves (G0): {self.rapid_move_count}",
            f"Linear Moves (G1): {self.linear_move_count}",
            f"Arc CW Moves (G2): {self.arc_cw_move_count}",
            f"Arc CCW Moves (G3): {self.arc_ccw_move_count}",
            "",
            "=== DISTANCES ===",
            f"Total Distance: {self.get_total_distance():.2f} mm",
            f"Cutting Distance: {self.get_cutting_distance():.2f} mm",
            f"Rapid Distance: {self.get_rapid_distance():.2f} mm",
            "",
            "=== BOUNDING BOX ===",
            f"X: {self.min_x:.3f} to {self.max_x:.3f} (Width: {self.width:.3f} mm)",
            f"Y: {self.min_y:.3f} to {self.max_y:.3f} (Height: {self.height:.3f} mm)",
            f"Z: {self.min_z:.3f} to {self.max_z:.3f} (Depth: {self.depth:.3f} mm)",
            "",
            "=== TIME ESTIMATE ===",
            f"Estimated Run Time: {format_time(self.get_estimated_run_time())}",
            "",
            "=== ERRORS ===",
            f"Errors Found: {len(self.errors)}",
        ]
        return "\n".join(lines)
