"""Byte messages sent to the boards: phase/amplitude frames and control frames.

A board message holds one phase byte per transducer followed by one amplitude
byte per transducer. Setting 128 in the first byte flags a new update.
"""

from __future__ import annotations

import math
from typing import Sequence

UPDATE_FLAG = 128
"""Added to the first byte of a board's message to mark a new update."""

MAX_DIVIDER = 256
"""Largest FPGA update-rate divider (update rate = 40000/divider Hz)."""

_DIVIDER_FIRST_BIT = 26
_DIVIDER_BITS = 8
_DIVIDER_END = 34
_ON_LEVEL = 64


def discretize_phase(phase: float, discrete_phase_max: int) -> int:
    """Map a phase in radians onto 0..discrete_phase_max-1."""
    two_pi = 2 * math.pi
    mod_phase = math.fmod(phase, two_pi)
    if mod_phase < 0:
        mod_phase += two_pi
    return int(mod_phase / two_pi * discrete_phase_max) & 0xFF


def discretize_amplitude(amplitude: float, discrete_amplitude_max: int) -> int:
    """Map an amplitude in [0, 1] onto 0..discrete_amplitude_max (arcsine law)."""
    if not 0.0 <= amplitude <= 1.0:
        raise ValueError(f"amplitude must lie in [0, 1], got {amplitude}")
    return int(discrete_amplitude_max * 2.0 / math.pi * math.asin(amplitude)) & 0xFF


def discretize_message(
    phases: Sequence[float],
    amplitudes: Sequence[float],
    phase_adjust: Sequence[int],
    transducer_ids: Sequence[int],
    discrete_phase_max: int = 128,
) -> bytes:
    """Build one board's message from phases (radians) and amplitudes in [0, 1].

    phase_adjust holds per-transducer corrections in degrees; transducer_ids maps
    each transducer to its slot in the message.
    """
    count = len(phases)
    if not len(amplitudes) == len(phase_adjust) == len(transducer_ids) == count:
        raise ValueError("phases, amplitudes, phase_adjust and transducer_ids differ in length")
    if discrete_phase_max <= 0:
        raise ValueError(f"discrete_phase_max must be positive, got {discrete_phase_max}")
    amplitude_max = discrete_phase_max // 2
    message = bytearray(2 * count)
    for phase, amplitude, adjust, pin in zip(phases, amplitudes, phase_adjust, transducer_ids):
        if not 0 <= pin < count:
            raise ValueError(f"transducer id {pin} out of range 0..{count - 1}")
        corrected = phase - adjust * math.pi / 180.0
        discrete_phase = discretize_phase(corrected, discrete_phase_max)
        discrete_amplitude = discretize_amplitude(amplitude, amplitude_max)
        shift = ((amplitude_max - discrete_amplitude) // 2) & 0xFF
        shifted = discrete_phase + shift
        if shifted >= discrete_phase_max:
            shifted -= discrete_phase_max
        message[pin] = shifted & 0xFF
        message[pin + count] = discrete_amplitude
    if count:
        message[0] = (message[0] + UPDATE_FLAG) & 0xFF
    return bytes(message)


def _check_sizes(message_size: int, num_boards: int, minimum: int = 1) -> None:
    if message_size < minimum:
        raise ValueError(f"message size must be at least {minimum}, got {message_size}")
    if num_boards < 1:
        raise ValueError(f"number of boards must be positive, got {num_boards}")


def transducers_off_message(message_size: int, num_boards: int) -> bytes:
    """All phases and amplitudes zero, flagged as an update on every board."""
    _check_sizes(message_size, num_boards)
    board = bytes([UPDATE_FLAG]) + bytes(message_size - 1)
    return board * num_boards


def transducers_on_message(message_size: int, num_boards: int) -> bytes:
    """All phases and amplitudes at 64, flagged as an update on every board."""
    _check_sizes(message_size, num_boards)
    board = bytes([_ON_LEVEL + UPDATE_FLAG]) + bytes([_ON_LEVEL]) * (message_size - 1)
    return board * num_boards


def divider_message(divider: int, message_size: int, num_boards: int) -> bytes:
    """Control message setting the FPGA update divider (update rate = 40000/divider Hz)."""
    if not 0 <= divider <= MAX_DIVIDER:
        raise ValueError(f"The maximum number of divider is {MAX_DIVIDER}, got {divider}")
    _check_sizes(message_size, num_boards, _DIVIDER_END + 1)
    board = bytearray(message_size)
    board[0] = UPDATE_FLAG
    for bit in range(_DIVIDER_BITS):
        board[_DIVIDER_FIRST_BIT + bit] = UPDATE_FLAG * ((divider >> bit) & 1)
    board[_DIVIDER_END] = UPDATE_FLAG
    return bytes(board) * num_boards