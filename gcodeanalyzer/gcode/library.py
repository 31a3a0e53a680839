"""Sample G-code programs.

Provides functions that return ready-to-use milling programs for
benchmarks and tests without requiring external .nc files.
"""

from __future__ import annotations

import math


def _fmt(value: float) -> str:
    return f"{value:.3f}"


def facing_gcode(
    width: float = 100.0,
    height: float = 50.0,
    stepover: float = 5.0,
    depth: float = 0.5,
    feed_rate: float = 1200.0,
    plunge_rate: float = 300.0,
    safe_z: float = 5.0,
) -> str:
    """Generate a zig-zag facing pass over a rectangle.

    The tool rapids to the origin at *safe_z*, plunges to ``-depth`` and
    sweeps along X, stepping over in Y after every pass.

    Parameters
    ----------
    width, height:
        Size of the faced area.
    stepover:
        Y distance between passes.
    depth:
        Cut depth below Z0.
    feed_rate, plunge_rate:
        Cutting and plunge feed rates (units/min).
    safe_z:
        Retract height for rapid moves.

    Returns
    -------
    Multi-line G-code string.
    """
    passes = max(1, math.ceil(height / stepover) + 1)

    lines: list[str] = [
        "; Facing program",
        f"; Area: {width} x {height}, stepover: {stepover}, depth: {depth}",
        "G21 ; millimetres",
        "G90 ; absolute positioning",
        "M3 S12000 ; spindle on",
        f"G0 X0 Y0 Z{_fmt(safe_z)}",
        f"G1 Z{_fmt(-depth)} F{plunge_rate:.0f}",
    ]

    x = 0.0
    for row in range(passes):
        y = min(row * stepover, height)
        if row > 0:
            lines.append(f"G1 Y{_fmt(y)}")
        x = width if x == 0.0 else 0.0
        feed = f" F{feed_rate:.0f}" if row == 0 else ""
        lines.append(f"G1 X{_fmt(x)}{feed}")

    lines += [
        f"G0 Z{_fmt(safe_z)}",
        "M5 ; spindle off",
        "M30",
    ]
    return "\n".join(lines) + "\n"


def circular_pocket_gcode(
    center_x: float = 50.0,
    center_y: float = 50.0,
    radius: float = 20.0,
    depth: float = 3.0,
    step_down: float = 1.0,
    feed_rate: float = 800.0,
    plunge_rate: float = 200.0,
    safe_z: float = 5.0,
) -> str:
    """Generate a circular contour cut in several depth passes.

    Each pass is four clockwise quarter arcs (G2 with I/J offsets), so
    no two segments share the same pair of end points.
    """
    num_passes = max(1, math.ceil(depth / step_down))
    start_x = center_x + radius

    # (end point, I, J) for each clockwise quarter starting at 3 o'clock
    quarters = [
        ((center_x, center_y - radius), -radius, 0.0),
        ((center_x - radius, center_y), 0.0, radius),
        ((center_x, center_y + radius), radius, 0.0),
        ((start_x, center_y), 0.0, -radius),
    ]

    lines: list[str] = [
        "; Circular pocket",
        f"; Centre: ({center_x}, {center_y}), radius: {radius}, depth: {depth}",
        "G21",
        "G90",
        "G17 ; XY plane",
        "M3 S10000",
        f"G0 X{_fmt(start_x)} Y{_fmt(center_y)} Z1.000",
    ]

    for p in range(1, num_passes + 1):
        z = -min(p * step_down, depth)
        lines.append(f"(pass {p})")
        lines.append(f"G1 Z{_fmt(z)} F{plunge_rate:.0f}")
        for idx, ((x, y), i, j) in enumerate(quarters):
            feed = f" F{feed_rate:.0f}" if idx == 0 else ""
            lines.append(f"G2 X{_fmt(x)} Y{_fmt(y)} I{_fmt(i)} J{_fmt(j)}{feed}")

    lines += [
        f"G0 Z{_fmt(safe_z)}",
        "M5",
        "M30",
    ]
    return "\n".join(lines) + "\n"


def retrace_gcode(size: float = 10.0, laps: int = 2) -> str:
    """Generate a square contour cut *laps* times at the same depth.

    Every lap after the first retraces the first one, so each of its
    segments is reported as a duplicate toolpath.
    """
    lines: list[str] = [
        "; Square contour traced repeatedly",
        "G90",
        "G0 X0 Y0 Z1",
        "G1 Z-1 F300",
    ]
    for _ in range(laps):
        lines += [
            f"G1 X{_fmt(size)} F600",
            f"G1 Y{_fmt(size)}",
            "G1 X0",
            "G1 Y0",
        ]
    lines.append("G0 Z5")
    return "\n".join(lines) + "\n"
