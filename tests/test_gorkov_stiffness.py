import numpy as np
import pytest

from acoustolev.gorkov_stiffness import (
    force_derivative,
    force_gradients,
    gorkov_second_derivative,
    stiffness,
)

POSITIONS = np.array([[-0.01, 0.0, 0.0], [0.01, 0.0, 0.0], [0.0, 0.01, 0.0]])
FIELD = np.array([1.0 + 0j, 0.5 + 0.5j, -0.3 + 0.8j])
POINT = np.array([0.002, -0.001, 0.04])
DIRECTION = np.array([0.0, 0.6, 0.8])


def test_force_derivative_antisymmetric_in_direction():
    forward = force_derivative(POINT, DIRECTION, FIELD, POSITIONS)
    backward = force_derivative(POINT, -DIRECTION, FIELD, POSITIONS)
    assert forward.shape == (3,)
    np.testing.assert_allclose(backward, -forward, rtol=1e-9, atol=1e-30)
    assert np.any(forward != 0)


def test_second_derivative_symmetric_in_direction():
    forward = gorkov_second_derivative(POINT, DIRECTION, FIELD, POSITIONS)
    backward = gorkov_second_derivative(POINT, -DIRECTION, FIELD, POSITIONS)
    assert backward == pytest.approx(forward, rel=1e-9)


def test_stiffness_is_minus_axis_second_derivatives():
    result = stiffness(POINT, FIELD, POSITIONS)
    axes = np.eye(3)
    expected = [-gorkov_second_derivative(POINT, axis, FIELD, POSITIONS) for axis in axes]
    np.testing.assert_allclose(result, expected, rtol=1e-12)


def test_force_gradients_is_sum_of_axis_force_derivatives():
    result = force_gradients(POINT, FIELD, POSITIONS)
    expected = sum(force_derivative(POINT, axis, FIELD, POSITIONS) for axis in np.eye(3))
    np.testing.assert_allclose(result, expected, rtol=1e-12, atol=1e-30)


def test_zero_field_gives_zero_results():
    zero = np.zeros(3, dtype=complex)
    np.testing.assert_array_equal(stiffness(POINT, zero, POSITIONS), np.zeros(3))
    np.testing.assert_array_equal(force_gradients(POINT, zero, POSITIONS), np.zeros(3))


def test_stiffness_scales_with_square_of_field():
    base = stiffness(POINT, FIELD, POSITIONS)
    scaled = stiffness(POINT, 2.0 * FIELD, POSITIONS)
    np.testing.assert_allclose(scaled, 4.0 * base, rtol=1e-9)


def test_second_derivative_scales_with_square_of_p0():
    base = gorkov_second_derivative(POINT, DIRECTION, FIELD, POSITIONS, p0=1.0)
    scaled = gorkov_second_derivative(POINT, DIRECTION, FIELD, POSITIONS, p0=3.0)
    assert scaled == pytest.approx(9.0 * base, rel=1e-9)


def test_explicit_default_delta_matches_none():
    from acoustolev.gorkov import default_delta

    implicit = stiffness(POINT, FIELD, POSITIONS)
    explicit = stiffness(POINT, FIELD, POSITIONS, delta=default_delta())
    np.testing.assert_array_equal(implicit, explicit)


@pytest.mark.parametrize(
    "call",
    [
        lambda: force_derivative(POINT, DIRECTION, FIELD, POSITIONS, delta=0),
        lambda: gorkov_second_derivative(POINT, DIRECTION, FIELD, POSITIONS, delta=0),
        lambda: stiffness(POINT, FIELD, POSITIONS, delta=0),
        lambda: force_gradients(POINT, FIELD, POSITIONS, delta=0),
    ],
)
def test_zero_delta_rejected(call):
    with pytest.raises(ValueError):
        call()