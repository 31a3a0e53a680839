"""Utility math functions for toolpath geometry."""

from __future__ import annotations

import math

import numpy as np

Point3 = tuple[float, float, float]


def values_equal(a: float, b: float, tolerance: float) -> bool:
    """Return True when *a* and *b* differ by less than *tolerance*."""
    return abs(a - b) < tolerance


def points_equal(a: Point3, b: Point3, tolerance: float) -> bool:
    """Compare two points axis by axis (not by Euclidean distance)."""
    return (
        values_equal(a[0], b[0], tolerance)
        and values_equal(a[1], b[1], tolerance)
        and values_equal(a[2], b[2], tolerance)
    )


def distance(a: Point3, b: Point3) -> float:
    """Euclidean distance between two 3D points."""
    return float(np.linalg.norm(np.subtract(b, a)))


def sweep_angle(start_angle: float, end_angle: float, clockwise: bool) -> float:
    """Signed angle swept from *start_angle* to *end_angle* (radians).

    Clockwise sweeps are forced non-positive and counter-clockwise sweeps
    non-negative by adding or removing one full turn.
    """
    diff = end_angle - start_angle
    if clockwise and diff > 0.0:
        diff -= 2.0 * math.pi
    if not clockwise and diff < 0.0:
        diff += 2.0 * math.pi
    return diff


def grid_key(point: Point3, tolerance: float) -> tuple[float, float, float]:
    """Snap *point* onto the tolerance grid (used for hashing).

    Coordinates too large for the grid snap to +/-inf instead of raising.
    """
    with np.errstate(over="ignore"):
        snapped = np.round(np.asarray(point, dtype=np.float64) / tolerance)
    return (float(snapped[0]), float(snapped[1]), float(snapped[2]))
