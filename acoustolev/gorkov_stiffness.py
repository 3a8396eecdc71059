"""Trap stiffness and force gradients derived from the Gor'kov potential.

Second derivatives use the five-point stencil (locations -2, -1, 0, 1, 2,
derivative order 2); force derivatives use the five-point first-order stencil.
"""

from __future__ import annotations

import numpy as np

from acoustolev.gorkov import acoustic_force, default_delta, gorkov_potential
from acoustolev.physics import DEFAULT_P0

_AXES = (
    np.array([1.0, 0.0, 0.0]),
    np.array([0.0, 1.0, 0.0]),
    np.array([0.0, 0.0, 1.0]),
)


def _resolve_delta(delta: float | None) -> float:
    step = default_delta() if delta is None else float(delta)
    if step == 0:
        raise ValueError("delta must be non-zero")
    return step


def _stencil_points(point, direction, delta: float) -> tuple[np.ndarray, ...]:
    p = np.asarray(point, dtype=float).reshape(3)
    d = np.asarray(direction, dtype=float).reshape(3)
    return p + 2 * delta * d, p + delta * d, p - delta * d, p - 2 * delta * d


def force_derivative(
    point, direction, field, transducer_positions, delta: float | None = None, p0: float = DEFAULT_P0
) -> np.ndarray:
    """Derivative of the radiation force vector at point along a unit direction."""
    step = _resolve_delta(delta)
    plus2, plus1, minus1, minus2 = (
        acoustic_force(p, field, transducer_positions, step, p0)
        for p in _stencil_points(point, direction, step)
    )
    return (minus2 - 8 * minus1 + 8 * plus1 - plus2) / (12 * step)


def gorkov_second_derivative(
    point, direction, field, transducer_positions, delta: float | None = None, p0: float = DEFAULT_P0
) -> float:
    """Second derivative of the Gor'kov potential at point along a unit direction."""
    step = _resolve_delta(delta)
    plus2, plus1, minus1, minus2 = (
        gorkov_potential(p, field, transducer_positions, step, p0)
        for p in _stencil_points(point, direction, step)
    )
    centre = gorkov_potential(
        np.asarray(point, dtype=float).reshape(3), field, transducer_positions, step, p0
    )
    return float(
        (-minus2 + 16 * minus1 - 30 * centre + 16 * plus1 - plus2) / (12 * step * step)
    )


def stiffness(
    point, field, transducer_positions, delta: float | None = None, p0: float = DEFAULT_P0
) -> np.ndarray:
    """Stiffness along X, Y and Z: minus the second derivative of the potential on each axis."""
    step = _resolve_delta(delta)
    return np.array(
        [
            -gorkov_second_derivative(point, axis, field, transducer_positions, step, p0)
            for axis in _AXES
        ]
    )


def force_gradients(
    point, field, transducer_positions, delta: float | None = None, p0: float = DEFAULT_P0
) -> np.ndarray:
    """Sum of the force derivatives along X, Y and Z, as a 3-vector."""
    step = _resolve_delta(delta)
    return sum(
        (force_derivative(point, axis, field, transducer_positions, step, p0) for axis in _AXES),
        np.zeros(3),
    )