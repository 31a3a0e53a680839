"""Tolerances and machine defaults used during analysis."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalyzerConfig:
    """Numeric defaults for G-code parsing and run-time estimation."""

    # --- Geometry ---
    position_tolerance: float = 0.0001  # per-axis equality tolerance
    min_arc_radius: float = 0.001  # arcs below this radius have zero length

    # --- Feed rates (units/min) ---
    default_feed_rate: float = 1000.0  # G1/G2/G3 before any F word
    rapid_feed_rate: float = 5000.0  # G0, regardless of F

    # --- Files ---
    gcode_extensions: tuple[str, ...] = (".nc", ".gcode", ".ngc", ".tap")


# Singleton default config
DEFAULT_CONFIG = AnalyzerConfig()
