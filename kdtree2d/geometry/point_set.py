"""
Brute-Force Point Set (baseline)

A reference implementation of the 2d-tree API with no spatial indexing.
Range and nearest-neighbor queries scan every point, vectorized with numpy.
It is used to cross-check the 2d-tree in tests and as the baseline in
benchmarks, and is perfectly adequate for tiny inputs.

Complexity:
- Insert / contains: O(1) average (hash set)
- Range search / nearest neighbor: O(n)
"""

from typing import Any, Iterator, List, Optional, Set, Tuple

import numpy as np

from .primitives import Point2D, RectHV


def brute_force_nearest(points: np.ndarray, query: Any) -> Tuple[int, float]:
    """
    Brute-force nearest neighbor search.

    Computes the distance to every point and returns the minimum. Ties are
    broken in favour of the lowest index.

    Args:
        points: Array of shape (n, 2) containing data points
        query: Query point as [x, y]

    Returns:
        Tuple of (index of nearest point, distance)

    Raises:
        ValueError: If points is empty
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    query = Point2D.coerce(query).as_array()

    if len(points) == 0:
        raise ValueError("Cannot query an empty point array")

    distances = np.sqrt(np.sum((points - query) ** 2, axis=1))
    nearest_idx = np.argmin(distances)

    return int(nearest_idx), float(distances[nearest_idx])


def brute_force_range(points: np.ndarray, rect: Any) -> np.ndarray:
    """
    Brute-force range search.

    Args:
        points: Array of shape (n, 2) containing data points
        rect: RectHV or (xmin, ymin, xmax, ymax); boundary is inclusive

    Returns:
        Indices of the points inside the rectangle, in input order
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    rect = RectHV.coerce(rect)

    mask = ((points[:, 0] >= rect.xmin) & (points[:, 0] <= rect.xmax) &
            (points[:, 1] >= rect.ymin) & (points[:, 1] <= rect.ymax))
    return np.nonzero(mask)[0]


class PointSET:
    """
    Unindexed set of points with the same API as KdTree.

    Points are kept in insertion order; duplicates are ignored.

    Example:
        >>> s = PointSET()
        >>> s.insert((0.2, 0.3))
        >>> s.nearest((0.0, 0.0))
        Point2D(x=0.2, y=0.3)
    """

    def __init__(self):
        self._points: List[Point2D] = []
        self._members: Set[Point2D] = set()

    @classmethod
    def from_array(cls, points: np.ndarray) -> 'PointSET':
        point_set = cls()
        for row in np.asarray(points, dtype=np.float64).reshape(-1, 2):
            point_set.insert(row)
        return point_set

    @property
    def size(self) -> int:
        return len(self._points)

    def is_empty(self) -> bool:
        return not self._points

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point2D]:
        return iter(self._points)

    def __contains__(self, point: Any) -> bool:
        return self.contains(point)

    def insert(self, point: Any) -> None:
        """Add the point if it is not already in the set."""
        p = Point2D.coerce(point)
        if p not in self._members:
            self._members.add(p)
            self._points.append(p)

    def contains(self, point: Any) -> bool:
        return Point2D.coerce(point) in self._members

    def range(self, rect: Any) -> List[Point2D]:
        """All points inside the rectangle, in insertion order."""
        rect = RectHV.coerce(rect)
        if not self._points:
            return []
        return [self._points[i] for i in brute_force_range(self.to_array(), rect)]

    def nearest(self, point: Any) -> Optional[Point2D]:
        """A nearest point to the query, or None if the set is empty."""
        query = Point2D.coerce(point)
        if not self._points:
            return None
        idx, _ = brute_force_nearest(self.to_array(), query)
        return self._points[idx]

    def to_array(self) -> np.ndarray:
        """Points as an (n, 2) array in insertion order."""
        if not self._points:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([p.as_tuple() for p in self._points], dtype=np.float64)
