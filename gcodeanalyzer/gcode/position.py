"""Absolute tool position tracking across a G-code program."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gcodeanalyzer.utils.math_helpers import Point3

if TYPE_CHECKING:
    from gcodeanalyzer.gcode.parser import GCodeCommand


class PositionTracker:
    """Walks motion commands in source order and resolves their end points.

    The machine starts at the origin in absolute mode (G90). Incremental
    positioning (G91) is not modelled: every X/Y/Z word is an absolute
    coordinate and axes missing from a command keep their last value.
    """

    def __init__(self) -> None:
        self.x: float = 0.0
        self.y: float = 0.0
        self.z: float = 0.0
        self.has_moved: bool = False

    @property
    def position(self) -> Point3:
        return (self.x, self.y, self.z)

    def reset(self) -> None:
        """Return to the origin and forget any previous movement."""
        self.x = 0.0
        self.y = 0.0
        self.z = 0.0
        self.has_moved = False

    def apply(self, cmd: GCodeCommand) -> tuple[Point3, Point3]:
        """Move to the target of *cmd* and record it on the command.

        Returns
        -------
        tuple[Point3, Point3]
            The position before and after the move.
        """
        previous = self.position

        if cmd.x is not None:
            self.x = cmd.x
        if cmd.y is not None:
            self.y = cmd.y
        if cmd.z is not None:
            self.z = cmd.z

        cmd.end_x = self.x
        cmd.end_y = self.y
        cmd.end_z = self.z

        self.has_moved = True
        return previous, self.position
