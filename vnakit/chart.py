"""Shared helpers for drawing traces on cartesian, polar and Smith charts.

These cover mapping a horizontal cursor position to a stimulus value,
reading a trace between its samples, and the resistance and reactance
circles of a Smith chart with their legends.
"""

from __future__ import annotations

import math
from typing import Sequence

from vnakit.smith import Z0
from vnakit.spline import spline_interpolate

__all__ = [
    "R_CIRCLES",
    "X_CIRCLES",
    "sweep_value_at",
    "interpolate_trace",
    "resistance_circles",
    "reactance_circles",
    "resistance_label",
    "reactance_label",
]

# Normalized reactances whose circles are drawn on a Smith chart.
X_CIRCLES = (5.0, 2.0, 1.0, 0.5, 0.2)

# Normalized resistances whose circles are drawn on a Smith chart.
R_CIRCLES = (
    5.00, 2.00, 1.00, 0.50, 0.20,           # within the normal chart
    0.0,                                    # the outer ring
    -0.25, -0.40, -0.50, -0.60, -0.80,      # negative resistance, left of the plane
    -1.20, -1.50, -1.70,                    # negative resistance, right of the plane
    -2.00, -2.20, -2.50, -3.00, -4.00, -7.00,
)


def _lerp(low: complex, high: complex, fraction: float) -> complex:
    return low + (high - low) * fraction


def sweep_value_at(
    sweep_start: float, sweep_stop: float, fraction: float, logarithmic: bool = False
) -> float:
    """Stimulus value at ``fraction`` (0-1) of the way across the sweep.

    A logarithmic sweep is interpolated on the logarithm of the stimulus.
    """
    if not logarithmic:
        return _lerp(sweep_start, sweep_stop, fraction)
    if sweep_start <= 0.0 or sweep_stop <= 0.0:
        raise ValueError("logarithmic sweep limits must be positive")
    log_start = math.log10(sweep_start)
    log_stop = math.log10(sweep_stop)
    return 10.0 ** (log_start + (log_stop - log_start) * fraction)


def interpolate_trace(
    points: Sequence[complex], sample_point: float, spline: bool = False
) -> complex:
    """Trace value at a fractional sample index.

    With ``spline`` the smooth Bezier curve through the points is used,
    otherwise the two neighbouring samples are joined by a straight line.
    """
    if not points:
        raise ValueError("cannot interpolate an empty trace")
    if spline:
        return spline_interpolate(points, sample_point)
    if not 0.0 <= sample_point <= len(points) - 1:
        raise ValueError(f"sample {sample_point} is outside the trace")
    low = math.floor(sample_point)
    high = math.ceil(sample_point)
    return complex(_lerp(complex(points[low]), complex(points[high]), sample_point - low))


def resistance_circles(admittance: bool = False) -> list[tuple[float, float, float]]:
    """``(r, centre_x, radius)`` of each constant-resistance circle.

    The centre lies on the real axis.  The radius carries the sign of
    ``1 / (r + 1)``, so circles of negative resistance beyond -1 have a
    negative radius; draw with its absolute value.  On an admittance chart
    the circles are mirrored about the imaginary axis.
    """
    circles = []
    for r in R_CIRCLES:
        radius = 1.0 / (r + 1.0)
        centre = r / (r + 1.0)
        if admittance:
            centre = -centre
        circles.append((r, centre, radius))
    return circles


def reactance_circles(admittance: bool = False) -> list[tuple[float, float, float, float]]:
    """``(x, centre_x, centre_y, radius)`` of each constant-reactance circle.

    Each reactance gives two circles, one above and one below the real
    axis.  On an admittance chart they are centred on -1 instead of +1.
    """
    centre_x = -1.0 if admittance else 1.0
    circles = []
    for x in X_CIRCLES:
        radius = 1.0 / x
        circles.append((x, centre_x, radius, radius))
        circles.append((x, centre_x, -radius, radius))
    return circles


def _whole_or_tenths(value: float, scaled: float) -> str:
    whole = math.modf(float(round(scaled)))[0] <= 0.01
    return f"{value:.0f}" if whole else f"{value:.1f}"


def resistance_label(r: float, admittance: bool = False) -> str:
    """Legend of a resistance circle: ohms, or millisiemens on an admittance chart."""
    if not admittance:
        return _whole_or_tenths(r * Z0, r * Z0)
    if r == 0.0:
        return ""
    return _whole_or_tenths(1000.0 / (r * Z0), r * Z0) + "m"


def reactance_label(x: float, admittance: bool = False) -> str:
    """Legend of a reactance circle, ``"-j..."``; drop the ``-`` for the upper half."""
    if not admittance:
        return "-j" + _whole_or_tenths(x * Z0, x * Z0)
    return "-j" + _whole_or_tenths(1000.0 * x / Z0, x * Z0) + "m"