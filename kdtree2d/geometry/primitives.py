"""
Geometry Primitives for the 2d-tree

This module defines the two immutable value types the spatial index is built
on: a point in the plane and an axis-aligned rectangle. Both are frozen
dataclasses so they are hashable and safe to share between the tree, the
brute-force reference set and the renderer.

Coordinates must be finite. NaN breaks equality (NaN != NaN) and infinities
break the ordering used to place points in the tree, so both are rejected
with a ValueError when a value is constructed.

Complexity:
    All operations are O(1).
"""

import math
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np


def _check_finite(name: str, value: Any) -> float:
    """Coerce a coordinate to float, rejecting NaN and infinities."""
    try:
        value = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"{name} must be a real number, got {value!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return value


@dataclass(frozen=True)
class Point2D:
    """
    An immutable point in the plane.

    Equality is exact value equality on both coordinates.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate

    Example:
        >>> p = Point2D(0.2, 0.3)
        >>> p.distance_squared_to(Point2D(0.5, 0.7))
        0.25
    """
    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', _check_finite('x', self.x))
        object.__setattr__(self, 'y', _check_finite('y', self.y))

    @classmethod
    def coerce(cls, value: Any) -> "Point2D":
        """
        Accept a Point2D or any (x, y) pair (tuple, list, numpy array).

        Raises:
            ValueError: If the value is not a pair of finite numbers
        """
        if isinstance(value, cls):
            return value
        try:
            coords = np.asarray(value, dtype=np.float64).ravel()
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"Expected an (x, y) pair, got {value!r}") from None
        if coords.shape != (2,):
            raise ValueError(f"Expected an (x, y) pair, got {value!r}")
        return cls(coords[0], coords[1])

    def distance_squared_to(self, other: "Point2D") -> float:
        """Squared Euclidean distance; used for all internal comparisons."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: "Point2D") -> float:
        """Euclidean distance to another point."""
        return math.sqrt(self.distance_squared_to(other))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def as_array(self) -> np.ndarray:
        """Return coordinates as numpy array for vectorized operations."""
        return np.array([self.x, self.y], dtype=np.float64)

    def __iter__(self):
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class RectHV:
    """
    An immutable axis-aligned rectangle [xmin, xmax] x [ymin, ymax].

    All predicates are inclusive of the boundary, so a degenerate rectangle
    (zero width or height) still contains the points on it.

    Attributes:
        xmin, ymin: Lower-left corner
        xmax, ymax: Upper-right corner
    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self):
        for name in ('xmin', 'ymin', 'xmax', 'ymax'):
            object.__setattr__(self, name, _check_finite(name, getattr(self, name)))
        if self.xmin > self.xmax:
            raise ValueError(f"xmin ({self.xmin}) is greater than xmax ({self.xmax})")
        if self.ymin > self.ymax:
            raise ValueError(f"ymin ({self.ymin}) is greater than ymax ({self.ymax})")

    @classmethod
    def coerce(cls, value: Any) -> "RectHV":
        """Accept a RectHV or a (xmin, ymin, xmax, ymax) sequence."""
        if isinstance(value, cls):
            return value
        try:
            bounds = list(value)
        except TypeError:
            raise ValueError(f"Expected (xmin, ymin, xmax, ymax), got {value!r}") from None
        if len(bounds) != 4:
            raise ValueError(f"Expected (xmin, ymin, xmax, ymax), got {value!r}")
        return cls(*bounds)

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def contains(self, p: Point2D) -> bool:
        """True if the point lies inside or on the boundary."""
        return (self.xmin <= p.x <= self.xmax and
                self.ymin <= p.y <= self.ymax)

    def intersects(self, other: "RectHV") -> bool:
        """True if the rectangles overlap, touching edges included."""
        return (self.xmax >= other.xmin and self.ymax >= other.ymin and
                other.xmax >= self.xmin and other.ymax >= self.ymin)

    def distance_squared_to(self, p: Point2D) -> float:
        """
        Squared distance from a point to the closest point of the rectangle.

        Each coordinate is clamped into its bound range independently; the
        result is 0 for a point inside the rectangle.
        """
        dx = 0.0
        dy = 0.0
        if p.x < self.xmin:
            dx = p.x - self.xmin
        elif p.x > self.xmax:
            dx = p.x - self.xmax
        if p.y < self.ymin:
            dy = p.y - self.ymin
        elif p.y > self.ymax:
            dy = p.y - self.ymax
        return dx * dx + dy * dy

    def distance_to(self, p: Point2D) -> float:
        return math.sqrt(self.distance_squared_to(p))

    def split(self, p: Point2D, vertical: bool) -> Tuple["RectHV", "RectHV"]:
        """
        Cut the rectangle through a point.

        Args:
            p: Point the splitting line passes through (must lie inside)
            vertical: True to cut along x = p.x, False along y = p.y

        Returns:
            Tuple of (left/bottom half, right/top half)
        """
        if vertical:
            return (RectHV(self.xmin, self.ymin, p.x, self.ymax),
                    RectHV(p.x, self.ymin, self.xmax, self.ymax))
        return (RectHV(self.xmin, self.ymin, self.xmax, p.y),
                RectHV(self.xmin, p.y, self.xmax, self.ymax))

    def expanded_to(self, p: Point2D) -> "RectHV":
        """Smallest rectangle covering both this rectangle and the point."""
        if self.contains(p):
            return self
        return RectHV(min(self.xmin, p.x), min(self.ymin, p.y),
                      max(self.xmax, p.x), max(self.ymax, p.y))

    def __str__(self) -> str:
        return f"[{self.xmin}, {self.xmax}] x [{self.ymin}, {self.ymax}]"


# Conventional coordinate domain of the tree
UNIT_SQUARE = RectHV(0.0, 0.0, 1.0, 1.0)
