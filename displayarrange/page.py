"""State and actions of the display settings page."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from displayarrange.arrangement import Pan
from displayarrange.commands import (
    Mirror,
    Position,
    RefreshRate,
    Request,
    Resolution,
    Scale,
    SetTransform,
    Toggle,
    cache_rates,
    randr_args,
    run_randr,
)
from displayarrange.randr import Output, OutputList, Transform
from displayarrange.tabs import DisplayTabs

_log = logging.getLogger(__name__)

DIALOG_SECONDS = 10
"""Seconds before an unconfirmed change is reverted."""

ORIENTATIONS = ["Standard", "Rotate 90°", "Rotate 180°", "Rotate 270°"]
SCALES = ["50%", "75%", "100%", "125%", "150%", "175%", "200%"]

_PAN_STEP = 0.01
_ORIENTATION_INDEX = {
    Transform.NORMAL: 0,
    Transform.ROTATE90: 1,
    Transform.ROTATE180: 2,
    Transform.ROTATE270: 3,
}
_REVERT_TRANSFORM = {1: Transform.ROTATE90, 2: Transform.FLIPPED180, 3: Transform.FLIPPED270}
_SCALE_THRESHOLDS = (75, 100, 125, 150, 175, 200)


class MirrorKind(enum.Enum):
    """What a mirroring choice does."""

    DISABLE = "disable"
    PROJECT = "project"
    MIRROR = "mirror"


@dataclass(frozen=True)
class Mirroring:
    """A mirroring choice; ``key`` names the other output, if any."""

    kind: MirrorKind
    key: Optional[int] = None

    @classmethod
    def disable(cls) -> Mirroring:
        return cls(MirrorKind.DISABLE)

    @classmethod
    def project(cls, key: int) -> Mirroring:
        return cls(MirrorKind.PROJECT, key)

    @classmethod
    def mirror(cls, key: int) -> Mirroring:
        return cls(MirrorKind.MIRROR, key)


@dataclass
class _Config:
    refresh_rate: Optional[int] = None
    resolution: Optional[tuple[int, int]] = None
    scale: int = 0


@dataclass
class _ViewCache:
    modes: dict[tuple[int, int], list[int]] = field(default_factory=dict)
    orientations: list[str] = field(default_factory=lambda: list(ORIENTATIONS))
    refresh_rates: list[str] = field(default_factory=list)
    resolutions: list[str] = field(default_factory=list)
    orientation_selected: Optional[int] = None
    refresh_rate_selected: Optional[int] = None
    resolution_selected: Optional[int] = None
    scale_selected: Optional[int] = None


class Page:
    """Display settings: the outputs, the active one and pending changes.

    Changes are applied through ``runner``, which receives the arguments of
    the configuration program. A change that can be undone opens a dialog
    that reverts it unless confirmed before its countdown runs out; call
    :meth:`dialog_tick` once a second to drive the countdown.
    """

    def __init__(self, runner: Optional[Callable[[list[str]], int]] = None) -> None:
        self.runner = runner if runner is not None else run_randr
        self.outputs = OutputList()
        self.tabs = DisplayTabs()
        self.mirror_map: dict[int, int] = {}
        self.mirror_menu: list[list[tuple[str, Mirroring]]] = []
        self.mirror_selected: Optional[Mirroring] = None
        self.active_display: Optional[int] = None
        self.config = _Config()
        self.cache = _ViewCache()
        self.last_pan = 0.5
        self.dialog: Optional[Request] = None
        self.dialog_countdown = 0
        self.show_display_options = True

    def update_displays(self, outputs: OutputList) -> None:
        """Load a new output list, keeping the active display when it is still there."""
        active_name = self.tabs.text_of(self.tabs.active()) or ""
        active_pos = 0

        self.active_display = None
        self.tabs.clear()
        self.mirror_map.clear()
        self.outputs = outputs

        by_name = {output.name: key for key, output in outputs.outputs.items()}
        for pos, (name, key) in enumerate(sorted(by_name.items())):
            output = outputs.outputs[key]
            if output.mirroring is not None:
                source = next(
                    (k for k, other in outputs.outputs.items() if other.name == output.mirroring),
                    None,
                )
                if source is not None:
                    self.mirror_map[key] = source
            if name == active_name:
                active_pos = pos
            self.tabs.insert(name, key)

        self.tabs.activate_position(active_pos)
        self.set_display(self.tabs.active())
        self.cache.orientations = list(ORIENTATIONS)
        self.last_pan = 0.5

    def set_display(self, entity: Optional[int]) -> None:
        """Make the display behind ``entity`` active and rebuild its options."""
        key = self.tabs.key_of(entity)
        output = self.outputs.outputs.get(key) if key is not None else None
        if output is None:
            return

        self.tabs.activate(entity)
        self.active_display = key
        self.config.refresh_rate = None
        self.config.resolution = None
        self.config.scale = int(output.scale * 100.0)

        cache = self.cache
        cache.modes = {}
        cache.refresh_rates = []
        cache.resolutions = []
        cache.orientation_selected = _ORIENTATION_INDEX.get(output.transform)
        cache.resolution_selected = None
        cache.refresh_rate_selected = None
        cache.scale_selected = next(
            (i for i, limit in enumerate(_SCALE_THRESHOLDS) if self.config.scale < limit),
            len(_SCALE_THRESHOLDS),
        )

        if output.current is not None:
            for mode_id in output.modes:
                mode = self.outputs.modes.get(mode_id)
                if mode is None:
                    continue
                rates = cache.modes.setdefault(mode.size, [])
                rates.append(mode.refresh_rate)
                if mode_id == output.current:
                    cache.refresh_rate_selected = len(rates) - 1
                    cache.resolution_selected = len(cache.modes) - 1
                    self.config.resolution = mode.size
                    self.config.refresh_rate = mode.refresh_rate

        for resolution, rates in sorted(cache.modes.items(), reverse=True):
            cache.resolutions.append(f"{resolution[0]}x{resolution[1]}")
            if resolution == self.config.resolution:
                cache.refresh_rates = cache_rates(rates)

        others = [(k, o) for k, o in self.outputs.outputs.items() if k != key]
        self.mirror_menu = [
            [("Don't mirror", Mirroring.disable())],
            [(f"Project to {o.name}", Mirroring.project(k)) for k, o in others],
            [(f"Mirror {o.name}", Mirroring.mirror(k)) for k, o in others],
        ]

        source = self.mirror_map.get(key)
        self.mirror_selected = Mirroring.mirror(source) if source is not None else None
        self.show_display_options = self.mirror_selected is None
        if self.mirror_selected is None:
            projected = next(
                (k for k, mirrored in self.mirror_map.items() if mirrored == key), None
            )
            self.mirror_selected = (
                Mirroring.project(projected) if projected is not None else Mirroring.disable()
            )
        self.last_pan = 0.5

    def set_orientation(self, transform: Transform) -> None:
        """Rotate the active display."""
        request = SetTransform(transform)
        selected = self.cache.orientation_selected
        if selected is not None:
            revert = SetTransform(_REVERT_TRANSFORM.get(selected, Transform.NORMAL))
            self._set_dialog(revert, request)

        output = self._active_output()
        if output is None:
            return
        self.cache.orientation_selected = _ORIENTATION_INDEX.get(transform, 3)
        self._finish(self._exec_randr(output, request))

    def set_position(self, display: int, x: int, y: int) -> None:
        """Move ``display`` to ``(x, y)``."""
        output = self.outputs.outputs.get(display)
        if output is None:
            return
        output.position = (x, y)
        self._finish(self._exec_randr(output, Position(x, y)))

    def set_refresh_rate(self, option: int) -> None:
        """Pick refresh rate number ``option`` of the current resolution."""
        output = self._active_output()
        if output is None or self.config.resolution is None:
            return
        rates = self.cache.modes.get(self.config.resolution)
        if rates is None or not 0 <= option < len(rates):
            return
        rate = rates[option]
        self.cache.refresh_rate_selected = option
        self.config.refresh_rate = rate
        self._finish(self._exec_randr(output, RefreshRate(rate)))

    def set_resolution(self, option: int) -> None:
        """Pick resolution number ``option``, largest first, at its first refresh rate."""
        output = self._active_output()
        if output is None:
            return
        choices = sorted(self.cache.modes.items(), reverse=True)
        if not 0 <= option < len(choices):
            return
        resolution, rates = choices[option]
        self.cache.refresh_rates = cache_rates(rates)
        if not rates:
            return

        request = Resolution(*resolution)
        revert = Resolution(*self.config.resolution) if self.config.resolution else request

        self.config.refresh_rate = rates[0]
        self.config.resolution = resolution
        self.cache.refresh_rate_selected = 0
        self.cache.resolution_selected = option
        completes = self._exec_randr(output, request)
        self._set_dialog(revert, request)
        self._finish(completes)

    def set_scale(self, option: int) -> None:
        """Pick scale number ``option``: 50% plus 25% per step."""
        output = self._active_output()
        if output is None:
            return
        scale = option * 25 + 50
        request = Scale(scale)
        revert = Scale(self.config.scale)
        self.cache.scale_selected = option
        self.config.scale = scale
        completes = self._exec_randr(output, request)
        self._set_dialog(revert, request)
        self._finish(completes)

    def toggle_display(self, enable: bool) -> None:
        """Enable or disable the active display."""
        output = self._active_output()
        if output is None:
            return
        request = Toggle(enable)
        revert = Toggle(output.enabled)
        output.enabled = enable
        completes = self._exec_randr(output, request)
        self._set_dialog(revert, request)
        self._finish(completes)

    def set_mirroring(self, mirroring: Mirroring) -> None:
        """Apply a mirroring choice to the active display."""
        if mirroring.kind is MirrorKind.DISABLE:
            self.toggle_display(True)
            return
        if mirroring.kind is MirrorKind.MIRROR:
            output = self._active_output()
            request = Mirror(mirroring.key)
        else:
            output = self.outputs.outputs.get(mirroring.key)
            request = Mirror(self.active_display)
        if output is None:
            return
        self._finish(self._exec_randr(output, request))

    def dialog_cancel(self) -> None:
        """Revert the change the open dialog is about."""
        request = self.dialog
        output = self._active_output()
        if request is None or output is None:
            return
        self.dialog = None
        self.dialog_countdown = 0
        self._finish(self._exec_randr(output, request))

    def dialog_complete(self) -> None:
        """Keep the change the open dialog is about."""
        self.dialog = None
        self.dialog_countdown = 0
        self.last_pan = 0.5

    def dialog_tick(self) -> int:
        """Advance the dialog countdown by one second; reverts when it is spent.

        Returns the seconds left.
        """
        if self.dialog_countdown > 0:
            self.dialog_countdown -= 1
        elif self.dialog is not None:
            self.dialog_cancel()
        else:
            self.last_pan = 0.5
        return self.dialog_countdown

    def pan(self, direction: Pan) -> float:
        """Scroll the arrangement view a step; returns the relative offset."""
        if direction is Pan.LEFT:
            self.last_pan = max(0.0, self.last_pan - _PAN_STEP)
        else:
            self.last_pan = min(1.0, self.last_pan + _PAN_STEP)
        return self.last_pan

    def _active_output(self) -> Optional[Output]:
        if self.active_display is None:
            return None
        return self.outputs.outputs.get(self.active_display)

    def _set_dialog(self, revert: Request, current: Request) -> None:
        if revert == current:
            return
        self.dialog = revert
        self.dialog_countdown = DIALOG_SECONDS

    def _exec_randr(self, output: Output, request: Request) -> bool:
        """Apply ``request``; True if it undoes what the open dialog is about."""
        args = randr_args(self.outputs, output, request)
        if args is None:
            return False
        completes = request == self.dialog
        try:
            status = self.runner(args)
        except OSError as error:
            _log.error("display configuration failed: %s", error)
        else:
            _log.debug("display configuration %s exited with %s", args, status)
        return completes

    def _finish(self, completes: bool) -> None:
        if completes:
            self.dialog_complete()