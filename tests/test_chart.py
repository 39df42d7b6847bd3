import math

import pytest

from vnakit.chart import (
    R_CIRCLES,
    X_CIRCLES,
    interpolate_trace,
    reactance_circles,
    reactance_label,
    resistance_circles,
    resistance_label,
    sweep_value_at,
)
from vnakit.spline import spline_interpolate


@pytest.mark.parametrize("logarithmic", [False, True])
def test_sweep_value_at_ends(logarithmic):
    assert sweep_value_at(1e6, 1e9, 0.0, logarithmic) == pytest.approx(1e6)
    assert sweep_value_at(1e6, 1e9, 1.0, logarithmic) == pytest.approx(1e9)


def test_sweep_value_linear_midpoint_is_mean():
    assert sweep_value_at(100.0, 300.0, 0.5) == pytest.approx(200.0)


def test_sweep_value_log_midpoint_is_geometric_mean():
    start, stop = 1e6, 1e8
    assert sweep_value_at(start, stop, 0.5, True) == pytest.approx(math.sqrt(start * stop))


def test_sweep_value_log_rejects_non_positive():
    with pytest.raises(ValueError):
        sweep_value_at(0.0, 1e6, 0.5, True)


POINTS = [0.1 + 0.2j, 0.3 - 0.1j, -0.2 + 0.4j, 0.5 + 0.5j, -0.1 - 0.3j]


def test_linear_interpolation_midpoint_is_average():
    value = interpolate_trace(POINTS, 1.5)
    assert value == pytest.approx((POINTS[1] + POINTS[2]) / 2)


def test_spline_interpolation_matches_spline_module():
    assert interpolate_trace(POINTS, 2.3, True) == pytest.approx(spline_interpolate(POINTS, 2.3))


def test_linear_interpolation_out_of_range():
    with pytest.raises(ValueError):
        interpolate_trace(POINTS, 4.5)


def test_interpolate_empty_trace():
    with pytest.raises(ValueError):
        interpolate_trace([], 0.0)


def test_resistance_circles_cover_all_values():
    circles = resistance_circles()
    assert [r for r, _, _ in circles] == list(R_CIRCLES)


def test_zero_resistance_circle_is_outer_ring():
    r, centre, radius = next(c for c in resistance_circles() if c[0] == 0.0)
    assert centre == 0.0
    assert radius == 1.0


def test_resistance_circles_touch_open_circuit_point():
    for r, centre, radius in resistance_circles():
        assert centre + radius == pytest.approx(1.0)


def test_admittance_resistance_circles_are_mirrored():
    for (r1, c1, rad1), (r2, c2, rad2) in zip(resistance_circles(), resistance_circles(True)):
        assert r1 == r2
        assert c2 == -c1
        assert rad2 == rad1


@pytest.mark.parametrize("admittance", [False, True])
def test_reactance_circles_pass_through_edge_point(admittance):
    circles = reactance_circles(admittance)
    assert len(circles) == 2 * len(X_CIRCLES)
    edge = -1.0 if admittance else 1.0
    for x, cx, cy, radius in circles:
        assert cx == edge
        assert math.hypot(edge - cx, cy) == pytest.approx(radius)
        assert radius == pytest.approx(1.0 / x)


def test_reactance_circles_come_in_mirrored_pairs():
    circles = reactance_circles()
    for upper, lower in zip(circles[::2], circles[1::2]):
        assert upper[2] == -lower[2]


def test_resistance_label_ohms():
    assert resistance_label(1.0) == "50"


def test_resistance_label_admittance_outer_ring_is_blank():
    assert resistance_label(0.0, True) == ""


def test_admittance_labels_end_in_milli():
    assert resistance_label(2.0, True).endswith("m")
    assert reactance_label(2.0, True).endswith("m")


def test_reactance_label_form():
    label = reactance_label(1.0)
    assert label == "-j50"
    assert label[1:] == "j50"
    assert all(reactance_label(x).startswith("-j") for x in X_CIRCLES)