"""Parsed G-code command records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CommandType(Enum):
    """Motion commands understood by the analyzer."""

    UNKNOWN = "unknown"
    RAPID_MOVE = "G0"
    LINEAR_MOVE = "G1"
    ARC_CLOCKWISE = "G2"
    ARC_COUNTER_CLOCKWISE = "G3"

    @property
    def is_motion(self) -> bool:
        return self is not CommandType.UNKNOWN

    @property
    def is_arc(self) -> bool:
        return self in (CommandType.ARC_CLOCKWISE, CommandType.ARC_COUNTER_CLOCKWISE)

    @property
    def is_cutting(self) -> bool:
        return self in (
            CommandType.LINEAR_MOVE,
            CommandType.ARC_CLOCKWISE,
            CommandType.ARC_COUNTER_CLOCKWISE,
        )


# Normalised command word -> type. Anything else is UNKNOWN.
_COMMAND_TYPES: dict[str, CommandType] = {
    "G0": CommandType.RAPID_MOVE,
    "G1": CommandType.LINEAR_MOVE,
    "G2": CommandType.ARC_CLOCKWISE,
    "G3": CommandType.ARC_COUNTER_CLOCKWISE,
}


def classify(token: str) -> CommandType:
    """Map a command word such as ``"g01"`` to its CommandType.

    Leading zeros in the number are ignored, so ``G0``, ``G00`` and
    ``G000`` are all rapid moves.
    """
    token = token.upper()
    letter, digits = token[:1], token[1:]
    if not digits.isdigit():
        return CommandType.UNKNOWN
    return _COMMAND_TYPES.get(f"{letter}{int(digits)}", CommandType.UNKNOWN)


@dataclass
class GCodeCommand:
    """A single parsed motion command.

    Parameter fields are ``None`` when the word is absent from the line,
    which is distinct from an explicit ``0``. ``end_x``/``end_y``/``end_z``
    hold the absolute tool position after the move and are filled in by
    the position tracker.
    """

    command_type: CommandType
    line_number: int
    raw: str = ""
    token: str = ""  # command word as written, e.g. "G02"

    x: float | None = None
    y: float | None = None
    z: float | None = None
    i: float | None = None
    j: float | None = None
    k: float | None = None
    f: float | None = None  # feed rate
    s: float | None = None  # spindle speed
    e: float | None = None  # extrusion

    # F from zero-length lines dropped just before this one; applied
    # before this command's own F when costing the move
    inherited_f: float | None = None

    end_x: float = 0.0
    end_y: float = 0.0
    end_z: float = 0.0

    @property
    def is_rapid(self) -> bool:
        return self.command_type is CommandType.RAPID_MOVE

    @property
    def is_cutting_move(self) -> bool:
        return self.command_type.is_cutting

    @property
    def has_center_offset(self) -> bool:
        """True when I or J is present (K alone does not locate a centre)."""
        return self.i is not None or self.j is not None

    @property
    def end_point(self) -> tuple[float, float, float]:
        return (self.end_x, self.end_y, self.end_z)
