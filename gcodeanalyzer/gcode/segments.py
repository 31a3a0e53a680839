"""Redundant-move and duplicate-toolpath detection.

Every motion after the first one forms a segment between the previous
tool position and the new one. A segment whose end points coincide is a
redundant move; a segment that retraces an earlier one, in either
direction, is a duplicate toolpath.
"""

from __future__ import annotations

from gcodeanalyzer.analysis.errors import (
    DUPLICATE_TOOLPATH_PREFIX,
    REDUNDANT_MOVE_PREFIX,
    GCodeError,
)
from gcodeanalyzer.config import DEFAULT_CONFIG, AnalyzerConfig
from gcodeanalyzer.utils.math_helpers import Point3, grid_key, points_equal


class PathSegment:
    """Direction-agnostic key for a straight segment between two points.

    ``PathSegment(a, b) == PathSegment(b, a)``. Coordinates are compared
    per axis within *tolerance*. The hash XORs the hashes of both end
    points snapped to the tolerance grid, so swapping start and end
    leaves it unchanged.
    """

    __slots__ = ("start", "end", "tolerance")

    def __init__(
        self,
        start: Point3,
        end: Point3,
        tolerance: float = DEFAULT_CONFIG.position_tolerance,
    ) -> None:
        self.start = start
        self.end = end
        self.tolerance = tolerance

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathSegment):
            return NotImplemented
        tol = self.tolerance
        same_direction = points_equal(self.start, other.start, tol) and points_equal(
            self.end, other.end, tol
        )
        reverse_direction = points_equal(self.start, other.end, tol) and points_equal(
            self.end, other.start, tol
        )
        return same_direction or reverse_direction

    def __hash__(self) -> int:
        start_hash = hash(grid_key(self.start, self.tolerance))
        end_hash = hash(grid_key(self.end, self.tolerance))
        return start_hash ^ end_hash

    def __repr__(self) -> str:
        return f"PathSegment(start={self.start!r}, end={self.end!r})"


class SegmentDeduplicator:
    """Remembers every segment of one program and flags repeats.

    All segments are kept until the parse finishes because a retrace can
    occur arbitrarily far from the original cut; memory grows linearly
    with the number of distinct segments.
    """

    def __init__(self, config: AnalyzerConfig = DEFAULT_CONFIG) -> None:
        self.tolerance: float = config.position_tolerance
        self._first_seen: dict[PathSegment, int] = {}

    def __len__(self) -> int:
        return len(self._first_seen)

    def check(
        self,
        previous: Point3,
        end: Point3,
        line_number: int,
    ) -> GCodeError | None:
        """Classify the move from *previous* to *end*.

        Returns a redundant-move or duplicate-toolpath error, or ``None``
        for a new segment (which is then remembered).
        """
        if points_equal(previous, end, self.tolerance):
            return GCodeError(
                line_number,
                f"{REDUNDANT_MOVE_PREFIX} tool is already at position "
                f"X{end[0]:.3f} Y{end[1]:.3f} Z{end[2]:.3f}",
            )

        segment = PathSegment(previous, end, self.tolerance)
        original_line = self._first_seen.get(segment)
        if original_line is not None:
            return GCodeError(
                line_number,
                f"{DUPLICATE_TOOLPATH_PREFIX} segment from "
                f"({previous[0]:.3f}, {previous[1]:.3f}, {previous[2]:.3f}) to "
                f"({end[0]:.3f}, {end[1]:.3f}, {end[2]:.3f}) "
                f"duplicates line {original_line}",
                related_line_number=original_line,
            )

        self._first_seen[segment] = line_number
        return None
