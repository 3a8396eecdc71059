"""Acoustic constants, transducer layouts and piston-model field propagation."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from scipy.special import j1

DEFAULT_P0 = 8.02
"""Reference pressure of a transducer (Pa at 1 m)."""

TOP_BOARD_HEIGHT = 0.2388
"""Height of the top board above the bottom board, in metres."""

_BOARD_SIDE = 16
_HALF_SPAN = 7.5
_MIN_SIN_ALPHA = 1e-9


def rho_p() -> float:
    """Density of the levitated particles (kg/m^3)."""
    return 25.0


def rho_a() -> float:
    """Density of air (kg/m^3)."""
    return 1.184


def c_p() -> float:
    """Speed of sound in the particle (m/s)."""
    return 2600.0


def c_a() -> float:
    """Speed of sound in air (m/s)."""
    return 346.0


def frequency() -> float:
    """Transducer emission frequency (Hz)."""
    return 40000.0


def wavelength() -> float:
    """Wavelength in air (m)."""
    return c_a() / frequency()


def wavenumber() -> float:
    """Wavenumber K = 2*pi/lambda (rad/m)."""
    return 2 * math.pi / wavelength()


def omega() -> float:
    """Angular frequency (rad/s)."""
    return 2 * math.pi * frequency()


def particle_radius() -> float:
    """Radius of the levitated particle (m)."""
    return 0.001


def transducer_radius() -> float:
    """Radius of a transducer's emitting surface (m)."""
    return 0.005


def transducer_pos_top_bottom(index: Sequence[int], pitch: float) -> tuple[float, float, float]:
    """Position of transducer (i, j) when boards are stacked top/bottom (j >= 16 is the top board)."""
    i, j = index
    x = (i - _HALF_SPAN) * pitch
    if j < _BOARD_SIDE:
        return (x, (_HALF_SPAN - j) * pitch, 0.0)
    return (x, (_HALF_SPAN - (j - _BOARD_SIDE)) * pitch, TOP_BOARD_HEIGHT)


def transducer_pos_side_by_side(index: Sequence[int], pitch: float) -> tuple[float, float, float]:
    """Position of transducer (i, j) when boards are laid side by side (i >= 16 is the top board)."""
    i, j = index
    y = (_HALF_SPAN - j) * pitch
    if i < _BOARD_SIDE:
        return ((i - _HALF_SPAN) * pitch, y, 0.0)
    return ((i - _BOARD_SIDE - _HALF_SPAN) * pitch, y, TOP_BOARD_HEIGHT)


def side_by_side_positions(board_size: Sequence[int], pitch: float) -> np.ndarray:
    """All positions of a side-by-side grid, row by row, as an (w*h, 3) array."""
    w, h = board_size
    rows = [transducer_pos_side_by_side((i, j), pitch) for j in range(h) for i in range(w)]
    return np.array(rows, dtype=float).reshape(-1, 3)


def _amplitudes_and_distances(positions, point, p0: float) -> tuple[np.ndarray, np.ndarray]:
    positions = np.asarray(positions, dtype=float).reshape(-1, 3)
    offsets = np.asarray(point, dtype=float).reshape(3) - positions
    distances = np.linalg.norm(offsets, axis=1)
    if np.any(distances == 0):
        raise ValueError("point coincides with a transducer position")
    sin_alpha = np.hypot(offsets[:, 0], offsets[:, 1]) / distances
    sin_alpha = np.where(sin_alpha == 0, _MIN_SIN_ALPHA, sin_alpha)
    arg = wavenumber() * transducer_radius() * sin_alpha
    amplitudes = np.abs(2 * j1(arg) * p0 / (arg * distances))
    return amplitudes, distances


def amplitude_and_distance(transducer_pos, point, p0: float = DEFAULT_P0) -> tuple[float, float]:
    """Piston-model amplitude emitted by a transducer at a point, and their distance."""
    amplitudes, distances = _amplitudes_and_distances(transducer_pos, point, p0)
    return float(amplitudes[0]), float(distances[0])


def propagate_field(point, field, transducer_positions, p0: float = DEFAULT_P0) -> complex:
    """Complex pressure at a point, summed over transducers with the given complex states."""
    positions = np.asarray(transducer_positions, dtype=float).reshape(-1, 3)
    states = np.asarray(field, dtype=complex).ravel()
    count = len(positions)
    if states.size < count:
        raise ValueError(
            f"field has {states.size} transducer states, {count} positions were given"
        )
    if count == 0:
        return 0j
    amplitudes, distances = _amplitudes_and_distances(positions, point, p0)
    propagation = amplitudes * np.exp(1j * wavenumber() * distances)
    return complex(np.sum(states[:count] * propagation))


def propagate_field_on_grid(point, field, board_size: Sequence[int], pitch: float) -> complex:
    """Complex pressure at a point from a side-by-side grid; field is indexed i + j*w."""
    return propagate_field(point, field, side_by_side_positions(board_size, pitch))


def propagate_field_from_phases(point, phases, board_size: Sequence[int], pitch: float) -> complex:
    """Complex pressure at a point from a side-by-side grid driven at unit amplitude with the given phases."""
    states = np.exp(1j * np.asarray(phases, dtype=float).ravel())
    return propagate_field_on_grid(point, states, board_size, pitch)