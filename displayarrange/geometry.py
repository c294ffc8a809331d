"""Plain 2D geometry used to lay out display regions."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A point in logical layout coordinates."""

    x: float = 0.0
    y: float = 0.0

    def distance(self, other: Point) -> float:
        """Euclidean distance between this point and ``other``."""
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle anchored at its top-left corner."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def center_x(self) -> float:
        """Horizontal coordinate of the centre."""
        return self.x + self.width / 2.0

    def center_y(self) -> float:
        """Vertical coordinate of the centre."""
        return self.y + self.height / 2.0

    def center(self) -> Point:
        """The centre point of the rectangle."""
        return Point(self.center_x(), self.center_y())

    def contains(self, point: Point) -> bool:
        """Whether ``point`` lies inside; the right and bottom edges are excluded."""
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )

    def intersects(self, other: Rectangle) -> bool:
        """Whether the two rectangles overlap; touching edges do not count."""
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.y + other.height
            and other.y < self.y + self.height
        )