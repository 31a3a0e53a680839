"""Diagnostics recorded while analysing a G-code program."""

from __future__ import annotations

from dataclasses import dataclass

REDUNDANT_MOVE_PREFIX = "Redundant move:"
DUPLICATE_TOOLPATH_PREFIX = "Duplicate toolpath:"
NO_MOVEMENT_MESSAGE = "No movement commands found in file."


@dataclass(frozen=True)
class GCodeError:
    """A single issue tied to a source line.

    ``related_line_number`` is only set for duplicate toolpaths and points
    at the line where the segment was first cut.
    """

    line_number: int
    message: str
    related_line_number: int | None = None

    @property
    def is_redundant_move(self) -> bool:
        return self.message.startswith(REDUNDANT_MOVE_PREFIX)

    @property
    def is_duplicate_toolpath(self) -> bool:
        return self.message.startswith(DUPLICATE_TOOLPATH_PREFIX)

    def __str__(self) -> str:
        text = f"Line {self.line_number}: {self.message}"
        if self.related_line_number is not None:
            text += f" (see line {self.related_line_number})"
        return text
