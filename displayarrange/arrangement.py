"""Interactive arrangement of display outputs on a scaled-down canvas."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator
from typing import Any, Optional

from displayarrange.geometry import Point, Rectangle
from displayarrange.randr import OutputList
from displayarrange.tabs import DisplayTabs

UNIT_PIXELS = 12.0
"""Output pixels represented by one logical unit of the canvas."""

_PAN_MARGIN = 150.0
_SELECT_DISTANCE = 4.0
_SNAP = 8.0


class Pan(enum.Enum):
    """Direction in which the arrangement view should scroll."""

    LEFT = "left"
    RIGHT = "right"


class _Side(enum.Enum):
    EAST = enum.auto()
    NORTH = enum.auto()
    SOUTH = enum.auto()
    WEST = enum.auto()


def _is_landscape(transform) -> bool:
    return transform is None or transform.is_landscape()


def layout_size(
    outputs: OutputList,
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Canvas size and largest display dimensions, both in canvas units.

    The canvas leaves room of twice the largest display around the
    area occupied by the enabled outputs.
    """
    max_w = max_h = 0
    area_w = area_h = 0
    for output in outputs.outputs.values():
        if not output.enabled or output.current is None:
            continue
        mode = outputs.modes.get(output.current)
        if mode is None:
            continue
        width, height = mode.size
        if not _is_landscape(output.transform):
            width, height = height, width
        width = int(width / output.scale)
        height = int(height / output.scale)
        max_w = max(max_w, width)
        max_h = max(max_h, height)
        area_w = max(area_w, width + output.position[0])
        area_h = max(area_h, height + output.position[1])

    size = (
        (int(max_w * 2.0) + area_w) / UNIT_PIXELS,
        (int(max_h * 2.0) + area_h) / UNIT_PIXELS,
    )
    return size, (max_w / UNIT_PIXELS, max_h / UNIT_PIXELS)


def display_regions(
    tabs: DisplayTabs,
    outputs: OutputList,
    bounds: Rectangle,
    max_dimensions: tuple[float, float],
) -> Iterator[tuple[int, Rectangle]]:
    """Yield the canvas region of every enabled output, in tab order."""
    for entity in tabs.entities():
        key = tabs.key_of(entity)
        output = outputs.outputs.get(key) if key is not None else None
        if output is None or not output.enabled or output.current is None:
            continue
        mode = outputs.modes.get(output.current)
        if mode is None:
            continue
        width = mode.size[0] / output.scale / UNIT_PIXELS
        height = mode.size[1] / output.scale / UNIT_PIXELS
        if not _is_landscape(output.transform):
            width, height = height, width
        yield key, Rectangle(
            x=max_dimensions[0] + bounds.x + output.position[0] / UNIT_PIXELS,
            y=max_dimensions[1] + bounds.y + output.position[1] / UNIT_PIXELS,
            width=width,
            height=height,
        )


def region_at(
    tabs: DisplayTabs,
    outputs: OutputList,
    bounds: Rectangle,
    max_dimensions: tuple[float, float],
    point: Point,
) -> Optional[tuple[int, Rectangle]]:
    """The first output whose region contains ``point``."""
    return next(
        (
            (key, region)
            for key, region in display_regions(tabs, outputs, bounds, max_dimensions)
            if region.contains(point)
        ),
        None,
    )


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def update_dragged_region(
    tabs: DisplayTabs,
    outputs: OutputList,
    bounds: Rectangle,
    output: int,
    region: Rectangle,
    max_dimensions: tuple[float, float],
    position: tuple[float, float],
) -> Rectangle:
    """Move ``region`` towards ``position``, attached to its nearest neighbour.

    The moved region snaps to the neighbour's edges when close to them.
    If it would overlap another display, ``region`` is returned unchanged.
    """
    x, y = position
    width, height = region.width, region.height
    others = [
        (key, other)
        for key, other in display_regions(tabs, outputs, bounds, max_dimensions)
        if key != output
    ]

    nearest = float("inf")
    nearest_region = Rectangle()
    nearest_side = _Side.EAST
    center = Rectangle(x, y, width, height).center()

    for _, other in others:
        candidates = (
            (Point(other.x, other.center_y()).distance(center) * 1.25, _Side.EAST),
            (
                Point(other.x + other.width, other.center_y()).distance(center) * 1.25,
                _Side.WEST,
            ),
            (Point(other.center_x(), other.y).distance(center), _Side.NORTH),
            (
                Point(other.center_x(), other.y + other.height).distance(center),
                _Side.SOUTH,
            ),
        )
        nearer = False
        for dist, side in candidates:
            if nearest > dist:
                nearest, nearest_side, nearer = dist, side, True
        if nearer:
            nearest_region = other

    n = nearest_region
    if nearest_side is _Side.EAST:
        x = n.x - width
        y = _clamp(y, n.y - height + _SNAP, n.y + n.height - _SNAP)
    elif nearest_side is _Side.WEST:
        x = n.x + n.width
        y = _clamp(y, n.y - height + _SNAP, n.y + n.height - _SNAP)
    elif nearest_side is _Side.NORTH:
        y = n.y - height
        x = _clamp(x, n.x - width + _SNAP, n.x + n.width - _SNAP)
    else:
        y = n.y + n.height
        x = _clamp(x, n.x - width + _SNAP, n.x + n.width - _SNAP)

    if abs(x - n.x) <= _SNAP:
        x = n.x
    if abs((x + width) - (n.x + n.width)) <= _SNAP:
        x = n.x + n.width - width
    if abs(y - n.y) <= _SNAP:
        y = n.y
    if abs((y + height) - (n.y + n.height)) <= _SNAP:
        y = n.y + n.height - height

    dragged = Rectangle(x, y, width, height)
    if any(other.intersects(dragged) for _, other in others):
        return region
    return dragged


class Arrangement:
    """Canvas on which displays are shown and dragged into new positions.

    Event handlers invoke the callbacks given at construction and return
    whether the event was consumed.
    """

    def __init__(
        self,
        outputs: OutputList,
        tabs: DisplayTabs,
        on_pan: Optional[Callable[[Pan], Any]] = None,
        on_placement: Optional[Callable[[int, int, int], Any]] = None,
        on_select: Optional[Callable[[int], Any]] = None,
    ) -> None:
        self.outputs = outputs
        self.tabs = tabs
        self.on_pan = on_pan
        self.on_placement = on_placement
        self.on_select = on_select
        self.drag_from = Point()
        self.dragging: Optional[tuple[int, Rectangle]] = None
        self.offset: tuple[float, float] = (0.0, 0.0)
        self.max_dimensions: tuple[float, float] = (0.0, 0.0)

    def layout(self) -> tuple[float, float]:
        """Compute the canvas size and remember the largest display size."""
        size, self.max_dimensions = layout_size(self.outputs)
        return size

    def display_regions(self, bounds: Rectangle) -> Iterator[tuple[int, Rectangle]]:
        """Regions of the displays within ``bounds``."""
        return display_regions(self.tabs, self.outputs, bounds, self.max_dimensions)

    def cursor_moved(
        self, bounds: Rectangle, viewport_width: float, position: Point
    ) -> bool:
        """Move the dragged display, panning when near the viewport edges."""
        if self.dragging is None:
            return False
        key, region = self.dragging
        if self.on_pan is not None:
            if bounds.x + viewport_width - _PAN_MARGIN < position.x:
                self.on_pan(Pan.RIGHT)
            elif bounds.x + _PAN_MARGIN > position.x:
                self.on_pan(Pan.LEFT)
        region = update_dragged_region(
            self.tabs,
            self.outputs,
            bounds,
            key,
            region,
            self.max_dimensions,
            (position.x - self.offset[0], position.y - self.offset[1]),
        )
        self.dragging = (key, region)
        return True

    def button_pressed(self, bounds: Rectangle, position: Optional[Point]) -> bool:
        """Start dragging the display under ``position``."""
        if position is None:
            return False
        hit = region_at(
            self.tabs, self.outputs, bounds, self.max_dimensions, position
        )
        if hit is None:
            return False
        key, region = hit
        self.drag_from = position
        self.offset = (position.x - region.x, position.y - region.y)
        self.dragging = (key, region)
        return True

    def button_released(self, bounds: Rectangle, position: Optional[Point]) -> bool:
        """Finish a drag: a short one selects the display, a longer one places it."""
        if self.dragging is None:
            return False
        key, region = self.dragging
        self.dragging = None

        if position is not None and position.distance(self.drag_from) < _SELECT_DISTANCE:
            if self.on_select is not None:
                for entity in self.tabs.entities():
                    if self.tabs.key_of(entity) == key:
                        self.on_select(entity)
            return True

        if self.on_placement is not None:
            self.on_placement(
                key,
                int((region.x - self.max_dimensions[0] - bounds.x) * UNIT_PIXELS),
                int((region.y - self.max_dimensions[1] - bounds.y) * UNIT_PIXELS),
            )
        return True

    def mouse_interaction(self, bounds: Rectangle, position: Optional[Point]) -> str:
        """``"grab"`` when the cursor is over a display, otherwise ``"idle"``."""
        if position is not None and any(
            region.contains(position) for _, region in self.display_regions(bounds)
        ):
            return "grab"
        return "idle"