"""Read-outs and geometry for Smith chart displays.

A reflection coefficient (gamma) is a complex number.  Its normalized
impedance is ``r + jx`` and its normalized admittance is ``g + jb``.
Scaling by the system impedance ``z0`` gives ohms and siemens.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

__all__ = [
    "Z0",
    "SmithReading",
    "search_stimulus_in_segment",
    "circle_intersection_angles",
    "smith_reading",
    "reactive_component",
]

# System impedance in ohms.
Z0 = 50.0


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0.0:
        return math.inf if numerator >= 0.0 else -math.inf
    return numerator / denominator


@dataclass(frozen=True)
class SmithReading:
    """Everything shown for a point on a Smith chart."""

    gamma: complex
    z0: float
    magnitude: float
    angle_degrees: float
    return_loss: float
    vswr: float
    r: float
    x: float
    g: float
    b: float

    @property
    def resistance(self) -> float:
        """Series resistance in ohms."""
        return self.r * self.z0

    @property
    def reactance(self) -> float:
        """Series reactance in ohms."""
        return self.x * self.z0

    @property
    def parallel_resistance(self) -> float:
        """Resistance in ohms of the parallel (admittance) form."""
        return _ratio(self.z0, self.g)

    @property
    def conductance_ms(self) -> float:
        """Conductance in millisiemens."""
        return self.g * 1000.0 / self.z0

    @property
    def susceptance_ms(self) -> float:
        """Susceptance in millisiemens."""
        return self.b * 1000.0 / self.z0


def search_stimulus_in_segment(
    stimulus: Sequence[float], start: int, end: int, target: float
) -> float:
    """Fractional sample index of ``target`` within ``stimulus[start:end + 1]``.

    The stimulus values of the segment must be ascending.  An exact match
    gives a whole index; otherwise the index is linearly interpolated
    between the neighbouring samples.
    """
    end = min(end, len(stimulus) - 1)
    if start < 0 or start > end:
        raise ValueError("empty stimulus segment")
    if not stimulus[start] <= target <= stimulus[end]:
        raise ValueError(f"stimulus {target} is outside the segment")

    head, tail = start, end
    mid = (head + tail) // 2
    while head <= tail:
        value = stimulus[mid]
        if value < target:
            head = mid + 1
        elif value == target:
            return float(mid)
        else:
            tail = mid - 1
        mid = (head + tail) // 2

    low, high = stimulus[mid], stimulus[mid + 1]
    return mid + (target - low) / (high - low)


def circle_intersection_angles(
    x1: float, y1: float, r1: float, x2: float, y2: float, r2: float
) -> tuple[float, float]:
    """Angles, seen from the first circle's centre, where two circles meet.

    Raises :class:`ValueError` when the circles do not intersect.
    """
    d = math.hypot(x1 - x2, y1 - y2)
    if d + r1 < r2 or d + r2 < r1 or r1 + r2 < d or d == 0.0:
        raise ValueError("the circles do not intersect")

    along = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    across = math.sqrt(max(r1 * r1 - along * along, 0.0))
    ux, uy = (x2 - x1) / d, (y2 - y1) / d

    first_x = along * ux + across * uy + x1
    second_x = along * ux - across * uy + x1
    first_y = along * uy - across * ux + y1
    second_y = along * uy + across * ux + y1

    return (
        math.atan2(first_y - y1, first_x - x1),
        math.atan2(second_y - y1, second_x - x1),
    )


def smith_reading(gamma: complex, z0: float = Z0) -> SmithReading:
    """Impedance, admittance, VSWR and return loss for a reflection coefficient."""
    gamma = complex(gamma)
    gr, gi = gamma.real, gamma.imag
    magnitude = abs(gamma)
    return_loss = math.inf if magnitude == 0.0 else -20.0 * math.log10(magnitude)
    vswr = _ratio(1.0 + magnitude, 1.0 - magnitude)
    angle = math.degrees(math.atan2(gi, gr))

    z_denominator = (1.0 - gr) ** 2 + gi * gi
    r = _ratio(1.0 - gr * gr - gi * gi, z_denominator)
    x = _ratio(2.0 * gi, z_denominator)

    y_denominator = 1.0 + gr * gr + 2.0 * gr + gi * gi
    g = _ratio(1.0 - gr * gr - gi * gi, y_denominator)
    b = _ratio(-2.0 * gi, y_denominator)

    return SmithReading(
        gamma=gamma,
        z0=z0,
        magnitude=magnitude,
        angle_degrees=angle,
        return_loss=return_loss,
        vswr=vswr,
        r=r,
        x=x,
        g=g,
        b=b,
    )


def reactive_component(
    reading: SmithReading, frequency: float, admittance: bool = False
) -> tuple[float, str]:
    """Equivalent capacitance (``"F"``) or inductance (``"H"``) at ``frequency``.

    A negative reactance is shown as a capacitance, otherwise as an
    inductance.  ``admittance`` selects the parallel form.
    """
    if frequency == 0.0:
        raise ValueError("frequency must be non-zero")
    omega = 2.0 * math.pi * frequency
    z0 = reading.z0
    if reading.x < 0:
        if not admittance:
            value = 1.0 / ((-reading.x * z0) * omega)
        else:
            value = (reading.b / z0) / omega
        return value, "F"
    if not admittance:
        value = (reading.x * z0) / omega
    else:
        value = _ratio(1.0, (-reading.b / z0) * omega)
    return value, "H"