import math

import pytest

from vnakit.cartesian import (
    LOG_GRIDS,
    NHGRIDS,
    NVGRIDS,
    cartesian_tick_values,
    linear_grid_positions,
    log_grid_positions,
)


def test_tick_values_spacing_and_start():
    values = cartesian_tick_values(5.0, 2.0, -20.0, True)
    assert len(values) == NVGRIDS + 1
    assert values[0] == pytest.approx(-5.0 * 2.0 + -20.0)
    assert all(b - a == pytest.approx(2.0) for a, b in zip(values, values[1:]))


def test_tick_values_reference_line_holds_reference_value():
    values = cartesian_tick_values(3.0, 5.0, 7.0, True)
    assert values[3] == pytest.approx(7.0)


def test_tick_values_default_scale_without_data():
    values = cartesian_tick_values(1.0, 0.5, 0.0, False)
    assert values[5] == pytest.approx(0.0)
    assert values[6] - values[5] == pytest.approx(10.0)


def test_tick_values_rounding_residue_becomes_zero():
    values = cartesian_tick_values(3.0, 0.1, 0.3, True)
    assert values[0] == 0.0


def test_log_grid_positions_one_decade():
    positions = log_grid_positions(1e6, 1e7, 1000.0)
    assert len(positions) == 10
    assert positions[0] == pytest.approx(0.0)
    assert positions[1] == pytest.approx(1000.0 * LOG_GRIDS[2])
    assert positions[-1] == pytest.approx(1000.0)
    assert all(a < b for a, b in zip(positions, positions[1:]))


def test_log_grid_positions_within_grid():
    positions = log_grid_positions(3e5, 2e8, 500.0)
    assert positions
    assert all(0.0 <= x <= 500.0 + 1e-9 for x in positions)
    assert all(a < b for a, b in zip(positions, positions[1:]))


def test_log_grid_positions_decade_lines_at_powers_of_ten():
    positions = log_grid_positions(1e6, 1e8, 200.0)
    assert positions[0] == pytest.approx(0.0)
    assert 100.0 == pytest.approx(positions[9])
    assert positions[-1] == pytest.approx(200.0)
    assert positions[1] == pytest.approx(200.0 * math.log10(2) / 2)


def test_log_grid_positions_rejects_non_positive():
    with pytest.raises(ValueError):
        log_grid_positions(0.0, 1e6, 100.0)


def test_log_grid_positions_rejects_zero_span():
    with pytest.raises(ValueError):
        log_grid_positions(1e6, 1e6, 100.0)


def test_linear_grid_positions():
    positions = linear_grid_positions(800.0)
    assert len(positions) == NHGRIDS + 1
    assert positions[0] == 0.0
    assert positions[-1] == pytest.approx(800.0)
    assert all(b - a == pytest.approx(800.0 / NHGRIDS) for a, b in zip(positions, positions[1:]))