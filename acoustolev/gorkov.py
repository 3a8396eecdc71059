"""Gor'kov potential and acoustic radiation force on a small particle.

Derivatives are taken with a five-point central-difference stencil
(locations -2, -1, 0, 1, 2) along a unit direction vector.
"""

from __future__ import annotations

import math
from typing import Callable, TypeVar

import numpy as np

from acoustolev.physics import (
    DEFAULT_P0,
    c_a,
    c_p,
    omega,
    particle_radius,
    propagate_field,
    rho_a,
    rho_p,
    wavelength,
)

_T = TypeVar("_T")

_AXES = (
    np.array([1.0, 0.0, 0.0]),
    np.array([0.0, 1.0, 0.0]),
    np.array([0.0, 0.0, 1.0]),
)


def default_delta() -> float:
    """Default finite-difference step: one sixty-fourth of a wavelength."""
    return wavelength() / 64


def _resolve_delta(delta: float | None) -> float:
    step = default_delta() if delta is None else float(delta)
    if step == 0:
        raise ValueError("delta must be non-zero")
    return step


def _first_derivative(
    func: Callable[[np.ndarray], _T], point, direction, delta: float
) -> _T:
    """Five-point first derivative of func at point along direction."""
    p = np.asarray(point, dtype=float).reshape(3)
    d = np.asarray(direction, dtype=float).reshape(3)
    plus2 = func(p + 2 * delta * d)
    plus1 = func(p + delta * d)
    minus1 = func(p - delta * d)
    minus2 = func(p - 2 * delta * d)
    return (minus2 - 8 * minus1 + 8 * plus1 - plus2) / (12 * delta)


def _contrast_factors() -> tuple[float, float, float, float]:
    kapa = 1.0 / (rho_a() * c_a() ** 2)
    kapa_p = 1.0 / (rho_p() * c_p() ** 2)
    f_1 = 1.0 - kapa_p / kapa
    rho_tilde = rho_p() / rho_a()
    f_2 = 2.0 * (rho_tilde - 1.0) / (2.0 * rho_tilde + 1.0)
    volume = (4.0 / 3.0) * math.pi * particle_radius() ** 3
    return kapa, f_1, f_2, volume


def gorkov_k1() -> float:
    """Pressure coefficient K1 of the Gor'kov potential."""
    kapa, f_1, _, volume = _contrast_factors()
    return volume * (f_1 * 0.5 * kapa * 0.5)


def gorkov_k2() -> float:
    """Velocity coefficient K2 of the Gor'kov potential (applied to pressure gradients)."""
    _, _, f_2, volume = _contrast_factors()
    pressure_to_velocity = 1.0 / (rho_a() * omega())
    velocity_term = f_2 * (3.0 / 4.0) * rho_a() * 0.5
    return volume * velocity_term * pressure_to_velocity**2


def field_derivative(
    point, direction, field, transducer_positions, delta: float | None = None, p0: float = DEFAULT_P0
) -> complex:
    """Derivative of the complex pressure at point along a unit direction."""
    step = _resolve_delta(delta)
    return complex(
        _first_derivative(
            lambda p: propagate_field(p, field, transducer_positions, p0), point, direction, step
        )
    )


def gorkov_potential(
    point, field, transducer_positions, delta: float | None = None, p0: float = DEFAULT_P0
) -> float:
    """Gor'kov potential K1*|p|^2 - K2*|grad p|^2 at point."""
    step = _resolve_delta(delta)
    pressure = propagate_field(point, field, transducer_positions, p0)
    gradient_sq = sum(
        abs(field_derivative(point, axis, field, transducer_positions, step, p0)) ** 2
        for axis in _AXES
    )
    return gorkov_k1() * abs(pressure) ** 2 - gorkov_k2() * gradient_sq


def gorkov_derivative(
    point, direction, field, transducer_positions, delta: float | None = None, p0: float = DEFAULT_P0
) -> float:
    """Derivative of the Gor'kov potential at point along a unit direction."""
    step = _resolve_delta(delta)
    return float(
        _first_derivative(
            lambda p: gorkov_potential(p, field, transducer_positions, step, p0),
            point,
            direction,
            step,
        )
    )


def acoustic_force(
    point, field, transducer_positions, delta: float | None = None, p0: float = DEFAULT_P0
) -> np.ndarray:
    """Radiation force at point as minus the gradient of the Gor'kov potential."""
    step = _resolve_delta(delta)
    return np.array(
        [
            -gorkov_derivative(point, axis, field, transducer_positions, step, p0)
            for axis in _AXES
        ]
    )