"""G-code tokenizer and parser.

Parses raw G-code text into GCodeCommand objects, resolves the absolute
end point of every motion, and records structural problems in an
AnalysisResult.
"""

from __future__ import annotations

import io
import logging
import math
import os
import re
from collections.abc import Iterable
from pathlib import Path

from gcodeanalyzer.analysis.errors import NO_MOVEMENT_MESSAGE, GCodeError
from gcodeanalyzer.analysis.result import AnalysisResult
from gcodeanalyzer.config import DEFAULT_CONFIG, AnalyzerConfig
from gcodeanalyzer.gcode.commands import CommandType, GCodeCommand, classify
from gcodeanalyzer.gcode.position import PositionTracker
from gcodeanalyzer.gcode.segments import SegmentDeduplicator

logger = logging.getLogger(__name__)

__all__ = [
    "CommandType",
    "GCodeCommand",
    "GCodeParser",
    "is_gcode_file",
    "split_lines",
    "strip_comment",
]

# Regex patterns
_COMMAND_RE = re.compile(r"^[GMT]\d+", re.IGNORECASE)
_PARAM_RE = re.compile(r"([XYZIJKFSE])([+-]?(?:\d+\.?\d*|\.\d+))", re.IGNORECASE)
_COMMENT_RE = re.compile(r"[;(]")


def strip_comment(line: str) -> str:
    """Trim *line* and drop everything from the first ``;`` or ``(``.

    Parenthesised comments are not balanced: text after a closing ``)``
    on the same line is discarded as well.
    """
    line = line.strip()
    match = _COMMENT_RE.search(line)
    if match is not None:
        line = line[: match.start()].strip()
    return line


def split_lines(text: str) -> list[str]:
    """Split *text* on LF, CRLF or CR only.

    Unlike ``str.splitlines`` this does not break on form feeds, vertical
    tabs or Unicode separators, which would shift every later line number.
    A trailing newline does not produce an extra empty line.
    """
    return io.StringIO(text, newline=None).readlines()


def is_gcode_file(path: str | os.PathLike, config: AnalyzerConfig = DEFAULT_CONFIG) -> bool:
    """Return True if *path* has one of the recognised G-code extensions."""
    return Path(path).suffix.lower() in config.gcode_extensions


class GCodeParser:
    """Stateless parser that turns G-code lines into an AnalysisResult.

    The parser holds only its configuration; every call builds its own
    result, position tracker and segment map, so one instance may be
    shared between threads.
    """

    def __init__(self, config: AnalyzerConfig = DEFAULT_CONFIG) -> None:
        self.config: AnalyzerConfig = config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_file(self, path: str | os.PathLike) -> AnalysisResult:
        """Read a G-code file from disk and analyse it.

        Raises
        ------
        ValueError
            If *path* is empty or whitespace.
        FileNotFoundError
            If *path* does not point at an existing file.
        """
        if not str(path).strip():
            raise ValueError("G-code file path must not be empty.")

        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"G-code file not found: {file_path}")

        logger.debug("Reading G-code from %s", file_path)
        text = file_path.read_text(encoding="utf-8", errors="replace")
        return self.parse_lines(split_lines(text))

    def parse_text(self, gcode_text: str) -> AnalysisResult:
        """Analyse a complete G-code program held in a string."""
        return self.parse_lines(split_lines(gcode_text))

    def parse_lines(self, lines: Iterable[str]) -> AnalysisResult:
        """Analyse an ordered sequence of G-code lines.

        Only G0/G1/G2/G3 end up in ``result.commands``. Problems are
        recorded in ``result.errors`` in source order; nothing short of a
        bug in the caller's iterable escapes this method.
        """
        result = AnalysisResult(self.config)
        tracker = PositionTracker()
        segments = SegmentDeduplicator(self.config)

        line_count = 0
        pending_feed: float | None = None
        for line_count, line in enumerate(lines, start=1):
            try:
                pending_feed = self._process_line(
                    line, line_count, result, tracker, segments, pending_feed
                )
            except Exception as exc:
                logger.exception("Unexpected failure parsing line %d", line_count)
                result.errors.append(
                    GCodeError(line_count, f"Failed to parse line: {exc}")
                )

        if not tracker.has_moved:
            logger.warning("No movement commands found in %d lines", line_count)
            result.errors.append(GCodeError(0, NO_MOVEMENT_MESSAGE))

        result.total_lines = line_count
        logger.debug(
            "Parsed %d lines: %d motion commands, %d errors, %d unique segments",
            line_count,
            result.total_commands,
            len(result.errors),
            len(segments),
        )
        return result

    def parse_line(
        self,
        line: str,
        line_number: int = 0,
        errors: list[GCodeError] | None = None,
    ) -> GCodeCommand | None:
        """Tokenize and classify a single line.

        Parameters
        ----------
        line:
            G-code text, possibly still carrying a comment.
        line_number:
            The source line number (1-indexed by convention).
        errors:
            List that receives parameter and arc diagnostics. Diagnostics
            are dropped when omitted.

        Returns
        -------
        GCodeCommand for a G0/G1/G2/G3 line, otherwise None (blank lines,
        comments, other G/M/T codes and modal continuations without a
        command word).
        """
        if errors is None:
            errors = []

        code = strip_comment(line)
        if not code:
            return None

        upper = code.upper()
        cmd_match = _COMMAND_RE.match(upper)
        if cmd_match is None:
            if _PARAM_RE.search(upper):
                logger.debug("Line %d: parameters without a command word", line_number)
            return None

        token = cmd_match.group(0)
        command_type = classify(token)
        if not command_type.is_motion:
            return None

        cmd = GCodeCommand(
            command_type=command_type,
            line_number=line_number,
            raw=code,
            token=token,
        )

        for param_match in _PARAM_RE.finditer(upper):
            letter = param_match.group(1)
            try:
                value = float(param_match.group(2))
            except ValueError:
                value = math.nan
            if not math.isfinite(value):
                # e.g. a digit run long enough to overflow to inf
                errors.append(
                    GCodeError(line_number, f"Invalid parameter value: {param_match.group(0)}")
                )
                continue
            setattr(cmd, letter.lower(), value)

        if command_type.is_arc and cmd.i is None and cmd.j is None and cmd.k is None:
            errors.append(
                GCodeError(
                    line_number,
                    f"Arc command {token} missing I, J, or K offset parameters.",
                )
            )

        return cmd

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _process_line(
        self,
        line: str,
        line_number: int,
        result: AnalysisResult,
        tracker: PositionTracker,
        segments: SegmentDeduplicator,
        pending_feed: float | None = None,
    ) -> float | None:
        """Handle one line; return the feed still waiting for a command.

        A redundant move is reported but left out of ``result.commands``.
        Its positive F word stays modal and is handed to the next appended
        command as ``inherited_f``.
        """
        cmd = self.parse_line(line, line_number, result.errors)
        if cmd is None:
            return pending_feed

        first_move = not tracker.has_moved
        previous, end = tracker.apply(cmd)

        if not first_move:
            error = segments.check(previous, end, line_number)
            if error is not None:
                result.errors.append(error)
                if error.is_redundant_move:
                    if cmd.f is not None and cmd.f > 0.0:
                        return cmd.f
                    return pending_feed

        cmd.inherited_f = pending_feed
        result.commands.append(cmd)
        result.update_bounds(*end)
        return None
