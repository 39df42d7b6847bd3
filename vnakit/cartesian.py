"""Grid and axis values for cartesian (rectangular) trace plots."""

from __future__ import annotations

import math

__all__ = [
    "NVGRIDS",
    "NHGRIDS",
    "LOG_GRIDS",
    "cartesian_tick_values",
    "log_grid_positions",
    "linear_grid_positions",
]

# Number of vertical and horizontal divisions of the graticule.
NVGRIDS = 10
NHGRIDS = 10

# log10 of 1..9; the first two entries both mark the decade line.
LOG_GRIDS = (
    0.0,
    0.0,
    0.301029995664,
    0.477121254720,
    0.602059991328,
    0.698970004336,
    0.778151250384,
    0.845098040014,
    0.903089986992,
    0.954242509439,
)

_DEFAULT_PER_DIV = 10.0
_DEFAULT_REF_POS = 5.0


def cartesian_tick_values(
    ref_pos: float, per_div: float, ref_val: float, valid: bool
) -> list[float]:
    """Y-axis values of the grid lines, bottom to top.

    ``ref_pos`` is the division (0-10) holding the reference line and
    ``ref_val`` its value.  Without valid data a default scale is used.
    """
    if not valid:
        per_div = _DEFAULT_PER_DIV
        ref_pos = _DEFAULT_REF_POS
    bottom = -ref_pos * per_div + ref_val
    values = []
    for i in range(NVGRIDS + 1):
        value = bottom + i * per_div
        # Avoid showing rounding residue as a tiny non-zero number.
        if ref_val != 0.0 and abs(value) < per_div / 1.0e6:
            value = 0.0
        values.append(value)
    return values


def log_grid_positions(sweep_start: float, sweep_stop: float, grid_width: float) -> list[float]:
    """X positions of the 1-9 per decade grid lines of a log sweep.

    The grid edges themselves are not included.
    """
    if sweep_start <= 0.0 or sweep_stop <= 0.0:
        raise ValueError("logarithmic sweep limits must be positive")
    log_start = math.log10(sweep_start)
    log_stop = math.log10(sweep_stop)
    log_span = log_stop - log_start
    if log_span == 0.0:
        raise ValueError("logarithmic sweep has zero span")
    start_offset, start_decade = math.modf(log_start)

    i = 1
    while i < len(LOG_GRIDS) and LOG_GRIDS[i] < start_offset:
        i += 1

    positions = []
    decades = 0.0
    while True:
        if i >= len(LOG_GRIDS):
            i = 1
            decades += 1.0
        if LOG_GRIDS[i] + start_decade + decades > log_stop:
            break
        positions.append((LOG_GRIDS[i] - start_offset + decades) / log_span * grid_width)
        i += 1
    return positions


def linear_grid_positions(grid_width: float) -> list[float]:
    """X positions of the evenly spaced vertical grid lines, edges included."""
    return [i * grid_width / NHGRIDS for i in range(NHGRIDS + 1)]