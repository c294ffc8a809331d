"""Requests for the display configuration tool and the command lines that apply them."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Optional, Union

from displayarrange.randr import Output, OutputList, Transform

PROGRAM = "cosmic-randr"
"""Name of the program that applies display configuration changes."""


@dataclass(frozen=True)
class Mirror:
    """Make an output mirror the output under ``source``."""

    source: int


@dataclass(frozen=True)
class Position:
    """Move an output to ``(x, y)`` in output pixels."""

    x: int
    y: int


@dataclass(frozen=True)
class RefreshRate:
    """Set the refresh rate, in millihertz."""

    rate: int


@dataclass(frozen=True)
class Resolution:
    """Set the resolution of an output."""

    width: int
    height: int


@dataclass(frozen=True)
class Scale:
    """Set the scale of an output, in percent."""

    scale: int


@dataclass(frozen=True)
class SetTransform:
    """Set the rotation or reflection of an output."""

    transform: Transform


@dataclass(frozen=True)
class Toggle:
    """Enable or disable an output."""

    enable: bool


Request = Union[Mirror, Position, RefreshRate, Resolution, Scale, SetTransform, Toggle]


def _fraction(value: int, divisor: int) -> str:
    return f"{value // divisor}.{value % divisor}"


def randr_args(
    outputs: OutputList, output: Output, request: Request
) -> Optional[list[str]]:
    """Arguments that apply ``request`` to ``output``.

    Returns None when the request refers to an unknown output, or needs the
    current mode of an output that has none.
    """
    match request:
        case Mirror(source=source):
            other = outputs.outputs.get(source)
            if other is None:
                return None
            return ["mirror", output.name, other.name]
        case Resolution(width=width, height=height):
            return ["mode", output.name, str(width), str(height)]
        case Toggle(enable=enable):
            return ["enable" if enable else "disable", output.name]

    mode = outputs.modes.get(output.current) if output.current is not None else None
    if mode is None:
        return None

    match request:
        case Position(x=x, y=y):
            options = ["--pos-x", str(x), "--pos-y", str(y)]
        case RefreshRate(rate=rate):
            options = ["--refresh", _fraction(rate, 1000)]
        case Scale(scale=scale):
            options = ["--scale", _fraction(scale, 100)]
        case SetTransform(transform=transform):
            options = ["--transform", str(transform)]
        case _:
            raise TypeError(f"unknown request: {request!r}")

    return ["mode", *options, output.name, str(mode.size[0]), str(mode.size[1])]


def format_refresh_rate(rate: int) -> str:
    """Human-readable label for a refresh rate given in millihertz."""
    return f"{rate // 1000:>3}.{rate % 1000:02} Hz"


def cache_rates(rates: list[int]) -> list[str]:
    """Labels for each of ``rates``, in the same order."""
    return [format_refresh_rate(rate) for rate in rates]


def run_randr(args: list[str]) -> int:
    """Run the configuration program with ``args`` and return its exit status."""
    return subprocess.run([PROGRAM, *args], check=False).returncode