"""Bezier splines through trace points, and small numeric helpers.

Points are complex numbers: the real part is x, the imaginary part is y.
A smooth curve through a sequence of points is made of one cubic Bezier
segment between each pair of neighbours.  The control points come from
the neighbouring segments, so the curve has matching tangents at every
sample.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

__all__ = [
    "CURVE_FACTOR",
    "line_angle",
    "bezier_control_points",
    "bezier_segments",
    "bezier_interpolate",
    "spline_interpolate",
    "hsv_to_rgb",
    "format_with_spaces",
]

# How far along the tangent the control points sit: the "curviness".
CURVE_FACTOR = 0.25

LineSegment = tuple[complex, complex]


def line_angle(start: complex, end: complex) -> float:
    """Angle in radians of the line from ``start`` to ``end``."""
    return math.atan2(end.imag - start.imag, end.real - start.real)


def _polar_offset(length: float, angle: float) -> complex:
    return complex(length * math.cos(angle), length * math.sin(angle))


def bezier_control_points(g: LineSegment, l: LineSegment) -> tuple[complex, complex]:
    """Control points for the segment joining ``g``'s end to ``l``'s start.

    ``g`` is the segment before and ``l`` the segment after the one whose
    control points are wanted.
    """
    g_start, g_end = g
    l_start, l_end = l
    length = abs(g_end - l_start)

    # Tangent at g's end: from a point back along g to l's start.
    tangent_start = g_end - _polar_offset(length, line_angle(g_start, g_end))
    first = g_end + _polar_offset(length * CURVE_FACTOR, line_angle(tangent_start, l_start))

    # Tangent at l's start: from g's end to a point forward along l.
    tangent_end = l_start + _polar_offset(length, line_angle(l_start, l_end))
    second = l_start - _polar_offset(length * CURVE_FACTOR, line_angle(g_end, tangent_end))
    return first, second


def _controls_for(points: Sequence[complex], n: int) -> tuple[complex, complex]:
    count = len(points)
    g = (points[(n + count - 2) % count], points[(n + count - 1) % count])
    l = (points[n % count], points[(n + 1) % count])
    first, second = bezier_control_points(g, l)
    # The curve is open, so its ends are not bent towards the other end.
    if n == 1:
        first = g[1]
    if n == count - 1:
        second = l[0]
    return first, second


def bezier_segments(points: Sequence[complex]) -> list[tuple[complex, complex, complex]]:
    """The cubic segments of a smooth curve through ``points``.

    Each entry is ``(control1, control2, end)``; the curve starts at
    ``points[0]`` and each segment ends at the next point.
    """
    segments = []
    for n, end in enumerate(points[1:], start=1):
        first, second = _controls_for(points, n)
        segments.append((first, second, end))
    return segments


def _between(a: complex, b: complex, fraction: float) -> complex:
    return a - (a - b) * fraction


def bezier_interpolate(
    pt0: complex, pt1: complex, ctl0: complex, ctl1: complex, fraction: float
) -> complex:
    """Point at ``fraction`` along a cubic Bezier (de Casteljau's method)."""
    p1 = _between(pt0, ctl0, fraction)
    p2 = _between(ctl0, ctl1, fraction)
    p3 = _between(ctl1, pt1, fraction)
    p4 = _between(p1, p2, fraction)
    p5 = _between(p2, p3, fraction)
    return _between(p4, p5, fraction)


def spline_interpolate(curve: Sequence[complex], sample_point: float) -> complex:
    """Value of the smooth curve through ``curve`` at a fractional index.

    A sample at or before the first point gives the first point, one at
    or beyond the last point gives the last point.
    """
    if not curve:
        raise ValueError("cannot interpolate an empty curve")
    n = math.ceil(sample_point)
    if n <= 0:
        return curve[0]
    if n >= len(curve):
        return curve[-1]
    first, second = _controls_for(curve, n)
    fraction = math.modf(sample_point)[0]
    return bezier_interpolate(curve[n - 1], curve[n], first, second, fraction)


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    """Convert hue (degrees, 0-360), saturation and value to RGB (0-1).

    A hue outside 0-360 gives black.
    """
    sector = 0.0 if h == 360.0 else h / 60.0
    fract = sector - math.floor(sector)
    p = v * (1.0 - s)
    q = v * (1.0 - s * fract)
    t = v * (1.0 - s * (1.0 - fract))

    if not 0.0 <= sector < 6.0:
        return (0.0, 0.0, 0.0)
    return [
        (v, t, p),
        (q, v, p),
        (p, v, t),
        (p, q, v),
        (t, p, v),
        (v, p, q),
    ][int(sector)]


def _group_from_right(digits: str) -> list[str]:
    head_len = len(digits) % 3 or 3
    groups = [digits[:head_len]]
    groups.extend(digits[i : i + 3] for i in range(head_len, len(digits), 3))
    return groups


def format_with_spaces(value: float, units: Optional[str] = None) -> str:
    """Format with six decimals, digits grouped in threes by spaces.

    ``1234.5`` becomes ``"1 234.500 000"``; ``units`` is appended after a
    space when given.
    """
    whole, _, decimals = f"{value:.6f}".partition(".")
    text = " ".join(_group_from_right(whole)) + "." + f"{decimals[:3]} {decimals[3:]}"
    if units:
        text += " " + units
    return text