import math

import pytest

from vnakit.spline import (
    bezier_control_points,
    bezier_interpolate,
    bezier_segments,
    format_with_spaces,
    hsv_to_rgb,
    line_angle,
    spline_interpolate,
)


def test_line_angle_vertical():
    assert line_angle(0j, 1j) == pytest.approx(math.pi / 2)


def test_line_angle_backwards():
    assert line_angle(1 + 0j, 0j) == pytest.approx(math.pi)


def test_control_points_on_straight_line():
    first, second = bezier_control_points((0j, 1 + 0j), (2 + 0j, 3 + 0j))
    assert first == pytest.approx(1.25 + 0j)
    assert second == pytest.approx(1.75 + 0j)


def test_bezier_interpolate_endpoints():
    pt0, pt1, c0, c1 = 0j, 4 + 4j, 1 + 3j, 3 + 5j
    assert bezier_interpolate(pt0, pt1, c0, c1, 0.0) == pytest.approx(pt0)
    assert bezier_interpolate(pt0, pt1, c0, c1, 1.0) == pytest.approx(pt1)


def test_bezier_interpolate_straight_line_midpoint():
    result = bezier_interpolate(0j, 3 + 0j, 1 + 0j, 2 + 0j, 0.5)
    assert result == pytest.approx(1.5 + 0j)


def test_bezier_segments_ends_and_count():
    points = [0j, 1 + 1j, 2 + 0j, 3 + 2j, 4 + 1j]
    segments = bezier_segments(points)
    assert len(segments) == len(points) - 1
    assert [end for _, _, end in segments] == points[1:]
    assert segments[0][0] == points[0]
    assert segments[-1][1] == points[-1]


def test_bezier_segments_short_input():
    assert bezier_segments([1 + 1j]) == []


def test_spline_interpolate_straight_line_interior():
    curve = [complex(k, 0) for k in range(6)]
    assert spline_interpolate(curve, 2.5) == pytest.approx(2.5 + 0j)


def test_spline_interpolate_before_start():
    curve = [1 + 1j, 2 + 2j, 3 + 3j]
    assert spline_interpolate(curve, -0.5) == curve[0]
    assert spline_interpolate(curve, 0.0) == curve[0]


def test_spline_interpolate_past_end():
    curve = [1 + 1j, 2 + 2j, 3 + 3j]
    assert spline_interpolate(curve, 7.2) == curve[-1]


def test_spline_interpolate_empty():
    with pytest.raises(ValueError):
        spline_interpolate([], 0.5)


def test_hsv_primaries():
    assert hsv_to_rgb(0.0, 1.0, 1.0) == pytest.approx((1.0, 0.0, 0.0))
    assert hsv_to_rgb(120.0, 1.0, 1.0) == pytest.approx((0.0, 1.0, 0.0))
    assert hsv_to_rgb(240.0, 1.0, 1.0) == pytest.approx((0.0, 0.0, 1.0))


def test_hsv_360_is_same_as_zero():
    assert hsv_to_rgb(360.0, 0.7, 0.9) == hsv_to_rgb(0.0, 0.7, 0.9)


def test_hsv_no_saturation_is_grey():
    assert hsv_to_rgb(200.0, 0.0, 0.4) == pytest.approx((0.4, 0.4, 0.4))


def test_hsv_out_of_range_is_black():
    assert hsv_to_rgb(-10.0, 1.0, 1.0) == (0.0, 0.0, 0.0)


def test_format_with_spaces_groups():
    assert format_with_spaces(1234567.0) == "1 234 567.000 000"


def test_format_with_spaces_units():
    text = format_with_spaces(12.5, "MHz")
    assert text.endswith(" MHz")
    assert text.startswith("12.500 000")


def test_format_with_spaces_round_trip():
    for value in (0.0, 3.25, 98765.4321, 1000000.0):
        assert float(format_with_spaces(value).replace(" ", "")) == pytest.approx(value)