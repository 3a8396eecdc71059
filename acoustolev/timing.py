"""Microsecond timestamps, timeval arithmetic and busy-wait helpers."""

from __future__ import annotations

import time
from dataclasses import dataclass

_USEC_PER_SEC = 1_000_000
_DWORD = 1 << 32


@dataclass(frozen=True)
class Timeval:
    """A time split into whole seconds and microseconds."""

    sec: int = 0
    usec: int = 0


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _micros() -> int:
    return time.perf_counter_ns() // 1000


def now() -> Timeval:
    """Current reading of the high-resolution monotonic clock."""
    micros = _micros()
    return Timeval(micros // _USEC_PER_SEC, micros % _USEC_PER_SEC)


def timeval_from_millis(millis: float) -> Timeval:
    """Build a Timeval from a duration in milliseconds."""
    total = int(millis * 1000)
    usec = total - _USEC_PER_SEC * _trunc_div(total, _USEC_PER_SEC)
    return Timeval(_trunc_div(total - usec, _USEC_PER_SEC), usec)


def timeval_subtract(x: Timeval, y: Timeval) -> tuple[Timeval, int]:
    """Return x - y as a Timeval together with the difference in microseconds."""
    y_sec, y_usec = y.sec, y.usec
    if x.usec < y_usec:
        nsec = _trunc_div(y_usec - x.usec, _USEC_PER_SEC) + 1
        y_usec -= _USEC_PER_SEC * nsec
        y_sec += nsec
    if x.usec - y_usec > _USEC_PER_SEC:
        nsec = _trunc_div(y_usec - x.usec, _USEC_PER_SEC)
        y_usec += _USEC_PER_SEC * nsec
        y_sec -= nsec
    result = Timeval(x.sec - y_sec, x.usec - y_usec)
    return result, result.sec * _USEC_PER_SEC + result.usec


def timeval_add(x: Timeval, y: Timeval) -> Timeval:
    """Return x + y, carrying microseconds above one second."""
    sec = x.sec + y.sec
    usec = x.usec + y.usec
    if usec > _USEC_PER_SEC:
        usec -= _USEC_PER_SEC
        sec += 1
    return Timeval(sec, usec)


def time_elapsed(start: Timeval, end: Timeval) -> float:
    """Seconds elapsed between two timestamps."""
    elapsed, _ = timeval_subtract(end, start)
    return elapsed.sec + 0.000001 * elapsed.usec


def time_elapsed_millis(start: Timeval, end: Timeval) -> float:
    """Milliseconds elapsed between two timestamps."""
    elapsed, _ = timeval_subtract(end, start)
    return 1000 * elapsed.sec + 0.001 * elapsed.usec


def micro_time(base_time: int = 0) -> int:
    """Microsecond counter (32-bit, wrapping) minus base_time."""
    return (_micros() - base_time) % _DWORD


def micro_wait(wait_time: int) -> None:
    """Busy-wait for wait_time microseconds."""
    start = micro_time()
    while wait_time > micro_time(start):
        pass


class UpdatePeriodKeeper:
    """Spaces successive calls to wait() at least a given number of microseconds apart."""

    def __init__(self) -> None:
        self._previous = 0

    def wait(self, update_period: int) -> int:
        """Busy-wait until update_period microseconds have passed since the last call; return the time."""
        current = micro_time()
        while (current - self._previous) % _DWORD < update_period:
            current = micro_time()
        self._previous = current
        return current