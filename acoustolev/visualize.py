"""Render the propagated pressure amplitude across a plane as an RGB image.

The plane is spanned by three corners: pixel (px, py) sits at
``a + px * (b - a) / width + py * (c - a) / height``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from acoustolev.physics import DEFAULT_P0, propagate_field, side_by_side_positions

logger = logging.getLogger(__name__)

DEFAULT_PITCH = 0.0105
"""Default spacing between neighbouring transducers (m)."""

_COLOUR_LEVELS = 3 * 256


@dataclass(frozen=True)
class PlaneRender:
    """Result of rendering a plane: amplitudes, their colour image and summary statistics."""

    image: np.ndarray
    """RGB image, shape (height, width, 3), dtype uint8, indexed [py, px]."""
    amplitudes: np.ndarray
    """Pressure amplitude per pixel, shape (height, width), indexed [py, px]."""
    mean_amplitude: float
    min_amplitude: float
    max_amplitude: float

    def summary(self) -> str:
        """Short text with the average, minimum and maximum amplitude."""
        return (
            f"AVG Amp= {self.mean_amplitude:f}; "
            f"MIN Amp={self.min_amplitude:f}; "
            f"MAX amp={self.max_amplitude:f}"
        )


def amplitude_to_rgb(amplitudes) -> np.ndarray:
    """Map amplitudes to a black-red-yellow-white ramp scaled by their maximum.

    The maximum maps to level 768; levels 0-255 fill red, 256-511 green and
    512 upwards blue, stored as 8-bit values.
    """
    amps = np.asarray(amplitudes, dtype=float)
    peak = float(amps.max()) if amps.size else 0.0
    if peak <= 0:
        return np.zeros(amps.shape + (3,), dtype=np.uint8)
    levels = (amps * (_COLOUR_LEVELS / peak)).astype(np.int64)
    red = np.where(levels < 256, levels, 255)
    green = np.where(levels < 256, 0, np.where(levels < 512, levels - 256, 255))
    blue = np.where(levels < 512, 0, levels - 512)
    rgb = np.stack([red, green, blue], axis=-1) & 0xFF
    return rgb.astype(np.uint8)


def _validate_size(image_size: Sequence[int]) -> tuple[int, int]:
    width, height = (int(v) for v in image_size)
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")
    return width, height


def _render(a, b, c, image_size, states, positions, p0: float) -> PlaneRender:
    width, height = _validate_size(image_size)
    origin = np.asarray(a, dtype=float).reshape(3)
    step_ab = (np.asarray(b, dtype=float).reshape(3) - origin) / width
    step_ac = (np.asarray(c, dtype=float).reshape(3) - origin) / height
    amplitudes = np.empty((height, width), dtype=float)
    for py in range(height):
        for px in range(width):
            pixel = origin + px * step_ab + py * step_ac
            amplitudes[py, px] = abs(propagate_field(pixel, states, positions, p0))
    render = PlaneRender(
        image=amplitude_to_rgb(amplitudes),
        amplitudes=amplitudes,
        mean_amplitude=float(amplitudes.mean()),
        min_amplitude=float(amplitudes.min()),
        max_amplitude=float(amplitudes.max()),
    )
    logger.info(render.summary())
    return render


def render_plane(a, b, c, image_size, field, transducer_positions) -> PlaneRender:
    """Render the field of transducers with complex states at arbitrary positions."""
    positions = np.asarray(transducer_positions, dtype=float).reshape(-1, 3)
    states = np.asarray(field, dtype=complex).ravel()
    return _render(a, b, c, image_size, states, positions, DEFAULT_P0)


def render_plane_grid(
    a, b, c, image_size, field, board_size, pitch: float = DEFAULT_PITCH
) -> PlaneRender:
    """Render the field of a side-by-side grid; field is indexed i + j*width."""
    positions = side_by_side_positions(board_size, pitch)
    states = np.asarray(field, dtype=complex).ravel()
    return _render(a, b, c, image_size, states, positions, DEFAULT_P0)


def render_plane_from_phases(a, b, c, image_size, phases, transducer_positions) -> PlaneRender:
    """Render the field of unit-amplitude transducers driven at the given phases."""
    states = np.exp(1j * np.asarray(phases, dtype=float).ravel())
    return render_plane(a, b, c, image_size, states, transducer_positions)