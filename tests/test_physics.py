import math

import numpy as np
import pytest

from acoustolev import physics


def test_wavelength_and_wavenumber_are_consistent():
    assert physics.wavelength() == pytest.approx(physics.c_a() / physics.frequency())
    assert physics.wavenumber() * physics.wavelength() == pytest.approx(2 * math.pi)
    assert physics.omega() == pytest.approx(2 * math.pi * physics.frequency())


def test_side_by_side_first_transducer_position():
    assert physics.transducer_pos_side_by_side((0, 0), 0.01) == pytest.approx((-0.075, 0.075, 0.0))


def test_side_by_side_top_board_mirrors_bottom_columns():
    bottom = physics.transducer_pos_side_by_side((3, 5), 0.0105)
    top = physics.transducer_pos_side_by_side((19, 5), 0.0105)
    assert top[:2] == pytest.approx(bottom[:2])
    assert top[2] == pytest.approx(0.2388)
    assert bottom[2] == 0.0


def test_top_bottom_layout_uses_rows_for_board():
    bottom = physics.transducer_pos_top_bottom((4, 2), 0.01)
    top = physics.transducer_pos_top_bottom((4, 18), 0.01)
    assert top[:2] == pytest.approx(bottom[:2])
    assert top[2] == pytest.approx(physics.TOP_BOARD_HEIGHT)


def test_side_by_side_positions_order_matches_single_lookup():
    positions = physics.side_by_side_positions((32, 16), 0.0105)
    assert positions.shape == (512, 3)
    for i, j in [(0, 0), (31, 0), (7, 9), (20, 15)]:
        assert tuple(positions[32 * j + i]) == pytest.approx(
            physics.transducer_pos_side_by_side((i, j), 0.0105)
        )


def test_on_axis_amplitude_at_one_metre_is_reference_pressure():
    amplitude, distance = physics.amplitude_and_distance((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
    assert distance == pytest.approx(1.0)
    assert amplitude == pytest.approx(8.02, rel=1e-6)


def test_amplitude_drops_off_axis():
    on_axis, d1 = physics.amplitude_and_distance((0, 0, 0), (0.0, 0.0, 0.1))
    off_axis, d2 = physics.amplitude_and_distance((0, 0, 0), (0.06, 0.0, 0.08))
    assert d1 == pytest.approx(d2)
    assert 0 <= off_axis < on_axis


def test_coincident_point_is_rejected():
    with pytest.raises(ValueError):
        physics.amplitude_and_distance((0.1, 0.2, 0.3), (0.1, 0.2, 0.3))


def test_single_transducer_field_matches_amplitude_and_phase():
    point = (0.01, -0.02, 0.1)
    pos = (0.0, 0.0, 0.0)
    amplitude, distance = physics.amplitude_and_distance(pos, point)
    result = physics.propagate_field(point, [1 + 0j], [pos])
    assert abs(result) == pytest.approx(amplitude)
    assert np.angle(result) == pytest.approx(
        np.angle(np.exp(1j * physics.wavenumber() * distance))
    )


def test_field_is_linear_in_transducer_states():
    rng = np.random.default_rng(1)
    positions = physics.side_by_side_positions((4, 4), 0.0105)
    a = rng.normal(size=16) + 1j * rng.normal(size=16)
    b = rng.normal(size=16) + 1j * rng.normal(size=16)
    point = (0.003, 0.001, 0.09)
    combined = physics.propagate_field(point, 2 * a + b, positions)
    separate = 2 * physics.propagate_field(point, a, positions) + physics.propagate_field(point, b, positions)
    assert combined == pytest.approx(separate)


def test_grid_propagation_matches_explicit_positions():
    rng = np.random.default_rng(2)
    field = np.exp(1j * rng.uniform(0, 2 * math.pi, size=32 * 16))
    point = (0.0, 0.0, 0.12)
    on_grid = physics.propagate_field_on_grid(point, field, (32, 16), 0.0105)
    explicit = physics.propagate_field(point, field, physics.side_by_side_positions((32, 16), 0.0105))
    assert on_grid == pytest.approx(explicit)


def test_phases_match_unit_complex_states():
    rng = np.random.default_rng(3)
    phases = rng.uniform(-math.pi, math.pi, size=64)
    point = (0.01, 0.01, 0.05)
    from_phases = physics.propagate_field_from_phases(point, phases, (8, 8), 0.0105)
    from_states = physics.propagate_field_on_grid(point, np.exp(1j * phases), (8, 8), 0.0105)
    assert from_phases == pytest.approx(from_states)


def test_short_field_is_rejected():
    positions = physics.side_by_side_positions((2, 2), 0.01)
    with pytest.raises(ValueError):
        physics.propagate_field((0, 0, 0.1), [1, 1], positions)