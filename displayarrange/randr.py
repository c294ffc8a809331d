"""Model of the outputs and modes reported by the display configuration tool."""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass, field
from typing import Optional


class Transform(str, enum.Enum):
    """Rotation and reflection of an output."""

    NORMAL = "normal"
    ROTATE90 = "rotate90"
    ROTATE180 = "rotate180"
    ROTATE270 = "rotate270"
    FLIPPED = "flipped"
    FLIPPED90 = "flipped90"
    FLIPPED180 = "flipped180"
    FLIPPED270 = "flipped270"

    def __str__(self) -> str:
        return self.value

    def is_landscape(self) -> bool:
        """Whether the output keeps its native width as its width."""
        return self in (
            Transform.NORMAL,
            Transform.ROTATE180,
            Transform.FLIPPED,
            Transform.FLIPPED180,
        )


@dataclass(frozen=True)
class Mode:
    """A display mode; ``refresh_rate`` is in millihertz."""

    size: tuple[int, int]
    refresh_rate: int
    preferred: bool = False


@dataclass
class Output:
    """A connected display output."""

    name: str
    enabled: bool = True
    make: Optional[str] = None
    model: str = ""
    mirroring: Optional[str] = None
    physical: tuple[int, int] = (0, 0)
    position: tuple[int, int] = (0, 0)
    scale: float = 1.0
    transform: Optional[Transform] = Transform.NORMAL
    modes: list[int] = field(default_factory=list)
    current: Optional[int] = None


class OutputList:
    """Outputs and modes, each addressed by a key handed out on insertion."""

    def __init__(self) -> None:
        self.modes: dict[int, Mode] = {}
        self.outputs: dict[int, Output] = {}
        self._keys = itertools.count(1)

    def add_mode(self, mode: Mode) -> int:
        """Store a mode and return its key."""
        key = next(self._keys)
        self.modes[key] = mode
        return key

    def add_output(self, output: Output) -> int:
        """Store an output and return its key."""
        key = next(self._keys)
        self.outputs[key] = output
        return key

    def current_mode(self, key: int) -> Optional[Mode]:
        """The current mode of the output under ``key``, if it has a known one."""
        output = self.outputs.get(key)
        if output is None or output.current is None:
            return None
        return self.modes.get(output.current)