"""Tests for the G-code tokenizer, classifier and parse entry points."""
import pytest
from gcodeanalyzer.analysis.errors import GCodeError
from gcodeanalyzer.gcode.commands import CommandType, classify
from gcodeanalyzer.gcode.parser import GCodeParser, is_gcode_file, split_lines, strip_comment


class TestStripComment:
    def test_semicolon_comment(self):
        assert strip_comment("G1 X10 ; move") == "G1 X10"

    def test_paren_comment(self):
        assert strip_comment("  G1 X10 (cut) Y5") == "G1 X10"

    def test_comment_only(self):
        assert strip_comment("(header)") == ""
        assert strip_comment("; note") == ""

    def test_whitespace(self):
        assert strip_comment("\tG0 X1  \r") == "G0 X1"


class TestClassify:
    def test_leading_zeros(self):
        assert classify("G0") is CommandType.RAPID_MOVE
        assert classify("G00") is CommandType.RAPID_MOVE
        assert classify("g000") is CommandType.RAPID_MOVE
        assert classify("G01") is CommandType.LINEAR_MOVE
        assert classify("G02") is CommandType.ARC_CLOCKWISE
        assert classify("G3") is CommandType.ARC_COUNTER_CLOCKWISE

    def test_other_codes_unknown(self):
        for token in ("G17", "G21", "G90", "M3", "M30", "T1", "G10"):
            assert classify(token) is CommandType.UNKNOWN

    def test_type_predicates(self):
        assert not CommandType.UNKNOWN.is_motion
        assert all(t.is_motion for t in CommandType if t is not CommandType.UNKNOWN)
        assert not CommandType.RAPID_MOVE.is_cutting
        assert CommandType.LINEAR_MOVE.is_cutting
        assert CommandType.ARC_COUNTER_CLOCKWISE.is_cutting
        assert CommandType.ARC_CLOCKWISE.is_arc
        assert not CommandType.LINEAR_MOVE.is_arc


class TestParseLine:
    def setup_method(self):
        self.parser = GCodeParser()

    def test_parse_g1_move(self):
        cmd = self.parser.parse_line("G1 X10.5 Y20.0 Z-1 F1200 S8000 E0.5", 1)
        assert cmd is not None
        assert cmd.command_type is CommandType.LINEAR_MOVE
        assert cmd.token == "G1"
        assert cmd.line_number == 1
        assert cmd.x == 10.5
        assert cmd.y == 20.0
        assert cmd.z == -1.0
        assert cmd.f == 1200.0
        assert cmd.s == 8000.0
        assert cmd.e == 0.5
        assert cmd.i is None

    def test_case_insensitive(self):
        lower = self.parser.parse_line("g0 x-5.500", 1)
        upper = self.parser.parse_line("G00 X-5.5", 1)
        assert lower.command_type is CommandType.RAPID_MOVE
        assert upper.command_type is CommandType.RAPID_MOVE
        assert lower.x == upper.x == -5.5

    def test_missing_axis_distinct_from_zero(self):
        cmd = self.parser.parse_line("G1 X0", 1)
        assert cmd.x == 0.0
        assert cmd.y is None

    def test_signed_and_bare_decimal(self):
        cmd = self.parser.parse_line("G1 X+5 Y.25", 1)
        assert cmd.x == 5.0
        assert cmd.y == 0.25

    def test_no_spaces(self):
        cmd = self.parser.parse_line("G01X10Y-2.5", 1)
        assert cmd.command_type is CommandType.LINEAR_MOVE
        assert cmd.x == 10.0
        assert cmd.y == -2.5

    def test_repeated_letter_keeps_last(self):
        cmd = self.parser.parse_line("G1 X1 X2", 1)
        assert cmd.x == 2.0

    def test_non_motion_codes_ignored(self):
        assert self.parser.parse_line("M3 S12000", 1) is None
        assert self.parser.parse_line("G21", 1) is None
        assert self.parser.parse_line("T1", 1) is None

    def test_parameters_without_command(self):
        errors: list[GCodeError] = []
        assert self.parser.parse_line("X10 Y20", 1, errors) is None
        assert errors == []

    def test_parse_comment_only(self):
        assert self.parser.parse_line("; this is a comment", 1) is None
        assert self.parser.parse_line("(another)", 1) is None

    def test_parse_empty_line(self):
        assert self.parser.parse_line("", 1) is None
        assert self.parser.parse_line("   ", 1) is None

    def test_parse_inline_comment(self):
        cmd = self.parser.parse_line("G1 X10 ; Y99", 1)
        assert cmd.x == 10.0
        assert cmd.y is None
        assert cmd.raw == "G1 X10"

    def test_arc_missing_offsets(self):
        errors: list[GCodeError] = []
        cmd = self.parser.parse_line("G02 X10 Y0 F300", 7, errors)
        assert cmd is not None
        assert errors == [
            GCodeError(7, "Arc command G02 missing I, J, or K offset parameters.")
        ]

    def test_arc_with_only_k_is_not_flagged(self):
        errors: list[GCodeError] = []
        cmd = self.parser.parse_line("G3 X10 K1", 1, errors)
        assert errors == []
        assert not cmd.has_center_offset

    def test_overflowing_parameter_is_invalid(self):
        errors: list[GCodeError] = []
        huge = "9" * 400
        cmd = self.parser.parse_line(f"G1 X{huge} Y5", 3, errors)
        assert errors == [GCodeError(3, f"Invalid parameter value: X{huge}")]
        assert cmd.x is None
        assert cmd.y == 5.0


class TestParseLines:
    def setup_method(self):
        self.parser = GCodeParser()

    def test_round_trip_scenario(self):
        lines = ["G21", "G90", "G0 X0 Y0 Z5", "G1 X10 Y0 F500", "G1 X10 Y0 F500"]
        result = self.parser.parse_lines(lines)

        assert result.total_lines == 5
        assert result.total_commands == 2
        assert [c.command_type for c in result.commands] == [
            CommandType.RAPID_MOVE,
            CommandType.LINEAR_MOVE,
        ]
        assert (result.min_x, result.max_x) == (0.0, 10.0)
        assert (result.min_y, result.max_y) == (0.0, 0.0)
        assert (result.min_z, result.max_z) == (5.0, 5.0)
        assert result.errors == [
            GCodeError(5, "Redundant move: tool is already at position X10.000 Y0.000 Z5.000")
        ]
        assert not any(err.is_duplicate_toolpath for err in result.errors)

    def test_position_continuity(self):
        result = self.parser.parse_lines(["G0 X1 Y2 Z3", "G1 X5", "G1 Y7", "G1 Z-1"])
        ends = [c.end_point for c in result.commands]
        assert ends == [(1.0, 2.0, 3.0), (5.0, 2.0, 3.0), (5.0, 7.0, 3.0), (5.0, 7.0, -1.0)]

    def test_first_move_exempt(self):
        result = self.parser.parse_lines(["G0 X0 Y0 Z0"])
        assert result.total_commands == 1
        assert result.errors == []

    def test_duplicate_reverse_direction(self):
        result = self.parser.parse_lines(["G0 X0 Y0", "G1 X10 Y0", "G1 X0 Y0"])
        assert result.errors == [
            GCodeError(
                3,
                "Duplicate toolpath: segment from (10.000, 0.000, 0.000) to "
                "(0.000, 0.000, 0.000) duplicates line 2",
                related_line_number=2,
            )
        ]
        # duplicates are still part of the toolpath
        assert result.total_commands == 3

    def test_duplicate_swapped_order(self):
        result = self.parser.parse_lines(["G0 X10 Y0", "G1 X0 Y0", "G1 X10 Y0"])
        assert len(result.errors) == 1
        assert result.errors[0].is_duplicate_toolpath
        assert result.errors[0].line_number == 3
        assert result.errors[0].related_line_number == 2

    def test_duplicate_keeps_first_occurrence(self):
        result = self.parser.parse_lines(["G0 X0 Y0", "G1 X10", "G1 X0", "G1 X10"])
        assert [e.related_line_number for e in result.errors] == [2, 2]

    def test_tolerance_boundary(self):
        equal = self.parser.parse_lines(["G1 X10 Y10 Z0", "G1 X10.00005 Y10.00005 Z0.00005"])
        assert len(equal.errors) == 1
        assert equal.errors[0].is_redundant_move
        assert equal.errors[0].message.endswith("X10.000 Y10.000 Z0.000")

        distinct = self.parser.parse_lines(["G1 X10 Y10 Z0", "G1 X10.0002 Y10 Z0"])
        assert distinct.errors == []
        assert distinct.total_commands == 2

    def test_missing_offset_scenario(self):
        result = self.parser.parse_lines(["G2 X10 Y0 F300"])
        assert result.errors == [
            GCodeError(1, "Arc command G2 missing I, J, or K offset parameters.")
        ]
        assert result.total_commands == 1
        assert result.commands[0].end_point == (10.0, 0.0, 0.0)

    def test_empty_file_scenario(self):
        result = self.parser.parse_lines(["; header", "", "(comment)", "   "])
        assert result.total_commands == 0
        assert result.total_lines == 4
        assert result.errors == [GCodeError(0, "No movement commands found in file.")]

    def test_no_lines(self):
        result = self.parser.parse_lines([])
        assert result.total_lines == 0
        assert result.errors == [GCodeError(0, "No movement commands found in file.")]

    def test_idempotent(self):
        lines = ["G0 X0 Y0 Z5", "G1 Z-1 F200", "G2 X10 Y0 I5 J0", "G1 X0 Y0", "G1 X0 Y0"]
        first = self.parser.parse_lines(lines)
        second = self.parser.parse_lines(lines)
        assert first.commands == second.commands
        assert first.errors == second.errors

    def test_line_failure_is_isolated(self):
        class ExplodingParser(GCodeParser):
            def parse_line(self, line, line_number=0, errors=None):
                if "BOOM" in line:
                    raise RuntimeError("boom")
                return super().parse_line(line, line_number, errors)

        result = ExplodingParser().parse_lines(["G0 X0", "G1 X10 BOOM", "G1 X20"])
        assert result.total_commands == 2
        assert result.errors == [GCodeError(2, "Failed to parse line: boom")]

    def test_parse_text(self):
        result = self.parser.parse_text("G0 X0\r\nG1 X10 F100\r\n")
        assert result.total_lines == 2
        assert result.total_commands == 2

    def test_overflowing_parameter_does_not_abort_line(self):
        result = self.parser.parse_lines(["G0 X0", "G1 X" + "9" * 400, "G1 Y5", "G1 X1 Y1"])
        assert [e.line_number for e in result.errors if "Invalid parameter value" in e.message] == [2]
        assert not any(e.message.startswith("Failed to parse line") for e in result.errors)
        assert result.commands[-1].end_point == (1.0, 1.0, 0.0)

    def test_huge_finite_coordinates_are_deduplicated(self):
        huge = "9" * 308
        result = self.parser.parse_lines(["G0 X0", f"G1 X{huge}", "G1 X0"])
        assert len(result.errors) == 1
        assert result.errors[0].is_duplicate_toolpath
        assert result.errors[0].related_line_number == 2

    def test_dropped_redundant_line_keeps_feed(self):
        result = self.parser.parse_lines(["G0 X0 Y0 Z5", "G1 F300", "G1 Z-1"])
        assert result.total_commands == 2
        assert result.errors[0].is_redundant_move
        assert result.commands[1].f is None
        assert result.commands[1].inherited_f == 300.0
        # 6 units at F300
        assert result.get_estimated_run_time().total_seconds() == pytest.approx(1.2)

    def test_form_feed_does_not_shift_line_numbers(self):
        result = self.parser.parse_text("G0 X0\n\f\nG1 X10 F100\x0bG1\n")
        assert result.total_lines == 3
        assert [c.line_number for c in result.commands] == [1, 3]

    def test_old_mac_line_endings(self):
        result = self.parser.parse_text("G0 X0\rG1 X10\r")
        assert result.total_lines == 2
        assert result.total_commands == 2


class TestParseFile:
    def setup_method(self):
        self.parser = GCodeParser()

    def test_parse_file(self, tmp_path):
        path = tmp_path / "part.nc"
        path.write_bytes(b"G0 X0 Y0 Z5\r\nG1 Z0 F100\r\nG1 X10\r\n")
        result = self.parser.parse_file(path)
        assert result.total_lines == 3
        assert result.total_commands == 3
        assert result.errors == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            self.parser.parse_file(tmp_path / "missing.gcode")

    def test_blank_path(self):
        with pytest.raises(ValueError):
            self.parser.parse_file("  ")

    def test_extension_agnostic(self, tmp_path):
        path = tmp_path / "program.txt"
        path.write_text("G0 X1\n")
        assert self.parser.parse_file(path).total_commands == 1

    def test_form_feed_in_file(self, tmp_path):
        path = tmp_path / "paged.nc"
        path.write_bytes(b"G0 X0\r\n\f\r\nG1 X10\r\n")
        result = self.parser.parse_file(path)
        assert result.total_lines == 3
        assert result.commands[1].line_number == 3


def test_split_lines():
    assert split_lines("a\r\nb\rc\nd\n") == ["a\n", "b\n", "c\n", "d\n"]
    assert split_lines("a\fb\u2028c") == ["a\fb\u2028c"]
    assert split_lines("") == []


def test_is_gcode_file():
    assert is_gcode_file("part.nc")
    assert is_gcode_file("PART.GCODE")
    assert is_gcode_file("a/b/c.ngc")
    assert is_gcode_file("c.tap")
    assert not is_gcode_file("notes.txt")
