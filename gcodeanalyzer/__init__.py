from gcodeanalyzer.config import AnalyzerConfig, DEFAULT_CONFIG
from gcodeanalyzer.analysis.errors import GCodeError
from gcodeanalyzer.analysis.result import AnalysisResult, format_time
from gcodeanalyzer.gcode.commands import CommandType, GCodeCommand
from gcodeanalyzer.gcode.parser import GCodeParser, is_gcode_file

__all__ = [
    "AnalyzerConfig",
    "DEFAULT_CONFIG",
    "GCodeError",
    "AnalysisResult",
    "format_time",
    "CommandType",
    "GCodeCommand",
    "GCodeParser",
    "is_gcode_file",
]
