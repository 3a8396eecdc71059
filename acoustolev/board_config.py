"""Per-board calibration files (``board_<id>.pat``): parsing and writing.

A file holds seven lines: the hardware id, the number of transducers, the
number of discrete levels, the transducer positions as ``(x, y, z),`` groups,
then comma-separated PIN mapping, phase corrections and amplitude corrections.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, TypeVar

MAX_TRANSDUCERS = 256
"""Largest number of transducers a board configuration can describe."""

_T = TypeVar("_T")

_POSITIONS_LINE = re.compile(r"(?:\s*\([^()]*\)\s*,?)*\s*")
_POSITION = re.compile(r"\(([^()]*)\)")


class BoardConfigError(ValueError):
    """A board configuration is malformed or inconsistent."""


@dataclass
class BoardConfig:
    """Calibration data of one transducer board."""

    hardware_id: str
    num_discrete_levels: int
    positions: list[tuple[float, float, float]] = field(default_factory=list)
    pin_mapping: list[int] = field(default_factory=list)
    phase_adjust: list[int] = field(default_factory=list)
    amplitude_adjust: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.hardware_id or len(self.hardware_id.split()) != 1:
            raise BoardConfigError(
                f"hardware id must be one non-empty word, got {self.hardware_id!r}"
            )
        positions = []
        for position in self.positions:
            coords = tuple(float(v) for v in position)
            if len(coords) != 3:
                raise BoardConfigError(f"position must have three coordinates: {position!r}")
            positions.append(coords)
        self.positions = positions
        self.pin_mapping = [int(v) for v in self.pin_mapping]
        self.phase_adjust = [int(v) for v in self.phase_adjust]
        self.amplitude_adjust = [float(v) for v in self.amplitude_adjust]
        self.num_discrete_levels = int(self.num_discrete_levels)
        count = len(self.positions)
        if count > MAX_TRANSDUCERS:
            raise BoardConfigError(
                f"a board holds at most {MAX_TRANSDUCERS} transducers, got {count}"
            )
        for name in ("pin_mapping", "phase_adjust", "amplitude_adjust"):
            if len(getattr(self, name)) != count:
                raise BoardConfigError(
                    f"{name} has {len(getattr(self, name))} entries, expected {count}"
                )

    @property
    def num_transducers(self) -> int:
        """Number of transducers on the board."""
        return len(self.positions)

    def to_text(self) -> str:
        """Serialise the configuration in the board file format."""
        lines = [
            self.hardware_id,
            str(self.num_transducers),
            str(self.num_discrete_levels),
            "".join(f"({x:f}, {y:f}, {z:f})," for x, y, z in self.positions),
            "".join(f"{v:d}," for v in self.pin_mapping),
            "".join(f"{v:d}," for v in self.phase_adjust),
            "".join(f"{v:f}," for v in self.amplitude_adjust),
        ]
        return "\n".join(lines) + "\n"


def _convert(token: str, kind: Callable[[str], _T], what: str) -> _T:
    try:
        return kind(token.strip())
    except ValueError:
        raise BoardConfigError(f"invalid value {token.strip()!r} in {what}") from None


def _parse_list(line: str, kind: Callable[[str], _T], count: int, what: str) -> list[_T]:
    items = line.split(",")
    if items and not items[-1].strip():
        items.pop()
    values = [_convert(item, kind, what) for item in items]
    if len(values) != count:
        raise BoardConfigError(f"{what} has {len(values)} entries, expected {count}")
    return values


def _parse_positions(line: str, count: int) -> list[tuple[float, float, float]]:
    if not _POSITIONS_LINE.fullmatch(line):
        raise BoardConfigError("malformed transducer positions")
    positions = []
    for group in _POSITION.findall(line):
        coords = group.split(",")
        if len(coords) != 3:
            raise BoardConfigError(f"transducer position needs three coordinates: ({group})")
        x, y, z = (_convert(c, float, "transducer positions") for c in coords)
        positions.append((x, y, z))
    if len(positions) != count:
        raise BoardConfigError(
            f"transducer positions has {len(positions)} entries, expected {count}"
        )
    return positions


def parse_board_config(text: str) -> BoardConfig:
    """Parse the text of a board file."""
    lines = [line.strip() for line in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    if len(lines) != 7:
        raise BoardConfigError(f"expected 7 lines, found {len(lines)}")
    hardware_line, count_line, levels_line, pos_line, pin_line, phase_line, amp_line = lines
    words = hardware_line.split()
    if len(words) != 1:
        raise BoardConfigError(f"malformed hardware id line {hardware_line!r}")
    count = _convert(count_line, int, "number of transducers")
    if not 0 <= count <= MAX_TRANSDUCERS:
        raise BoardConfigError(
            f"number of transducers must be between 0 and {MAX_TRANSDUCERS}, got {count}"
        )
    levels = _convert(levels_line, int, "number of discrete levels")
    return BoardConfig(
        hardware_id=words[0],
        num_discrete_levels=levels,
        positions=_parse_positions(pos_line, count),
        pin_mapping=_parse_list(pin_line, int, count, "PIN mapping"),
        phase_adjust=_parse_list(phase_line, int, count, "phase corrections"),
        amplitude_adjust=_parse_list(amp_line, float, count, "amplitude corrections"),
    )


def read_board_config(path: str | Path) -> BoardConfig:
    """Read and parse a board file."""
    return parse_board_config(Path(path).read_text())


def _board_path(board_id: int, directory: str | Path) -> Path:
    return Path(directory) / f"board_{board_id}.pat"


def read_board_config_by_id(board_id: int, directory: str | Path = ".") -> BoardConfig:
    """Read ``board_<board_id>.pat`` from a directory."""
    try:
        return read_board_config(_board_path(board_id, directory))
    except BoardConfigError as exc:
        raise BoardConfigError(f"board {board_id}: {exc}") from exc


def write_board_config(config: BoardConfig, board_id: int, directory: str | Path = ".") -> Path:
    """Write ``board_<board_id>.pat`` into a directory and return its path."""
    path = _board_path(board_id, directory)
    path.write_text(config.to_text())
    return path