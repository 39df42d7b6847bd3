"""Read-outs and graticule for polar displays of a reflection coefficient."""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = [
    "UNIT_CIRCLE",
    "PolarReading",
    "polar_reading",
    "polar_ring_radii",
    "polar_ring_labels",
]

# Radius of |gamma| = 1 in chart units.
UNIT_CIRCLE = 1.0


@dataclass(frozen=True)
class PolarReading:
    """Magnitude and angle (degrees) of a point on a polar chart."""

    magnitude: float
    angle_degrees: float

    def __str__(self) -> str:
        return f"{self.magnitude:4.3f} U ∠ {self.angle_degrees:5.3f}°"


def polar_reading(gamma: complex) -> PolarReading:
    """Magnitude and angle of a complex reflection coefficient."""
    gamma = complex(gamma)
    return PolarReading(abs(gamma), math.degrees(math.atan2(gamma.imag, gamma.real)))


def _range_multiplier(gamma_scale: float) -> tuple[float, float]:
    if gamma_scale == 0.0:
        gamma_scale = 1.0
    if gamma_scale < 0.0:
        raise ValueError("gamma scale must be positive")
    power = math.modf(math.log(gamma_scale) / math.log(2.0))[1]
    return gamma_scale, 2.0 ** power


def _rings(gamma_scale: float, multiplier: float) -> list[tuple[int, float]]:
    rings = []
    i = 1
    while UNIT_CIRCLE * i / 5 * multiplier < UNIT_CIRCLE * gamma_scale:
        rings.append((i, UNIT_CIRCLE * i / 5 * multiplier))
        i += 1
    return rings


def polar_ring_radii(gamma_scale: float) -> list[float]:
    """Radii of the dashed magnitude rings inside the full-scale circle.

    A scale of 0 stands for the default full scale of 1.
    """
    gamma_scale, multiplier = _range_multiplier(gamma_scale)
    return [radius for _, radius in _rings(gamma_scale, multiplier)]


def polar_ring_labels(gamma_scale: float) -> list[tuple[float, str]]:
    """``(radius, text)`` of the rings that carry a label.

    When the rings bunch up, only every second ring is labelled.
    """
    gamma_scale, multiplier = _range_multiplier(gamma_scale)
    crowded = not (UNIT_CIRCLE * 8.5 / 5.0 * multiplier > UNIT_CIRCLE * gamma_scale)
    labels = []
    for i, radius in _rings(gamma_scale, multiplier):
        if crowded and i % 2 == 0:
            continue
        text = f"{radius:.1f}" if round(radius) != radius else f"{radius:.0f}"
        labels.append((radius, text))
    return labels