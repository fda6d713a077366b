"""
Point Data Generation and File I/O

This module produces the point sets the 2d-tree is exercised with, either
generated programmatically or read from plain text files.

File Format:
    One point per line as two whitespace-separated numbers, `x y`.
    Blank lines and lines starting with '#' are ignored.

        # five points in the unit square
        0.7 0.2
        0.5 0.4
        0.2 0.3
        0.4 0.7
        0.9 0.6

Key Features:
- Uniform random points with seed control for reproducibility
- Regular grids (many ties on the splitting coordinates)
- Sorted points (degenerate insertion order, worst-case tree shape)
- Loading/saving the text format above
- Building a KdTree or PointSET by replaying inserts

Example Usage:
    >>> from kdtree2d.point_data import generate_uniform_points, build_tree
    >>> points = generate_uniform_points(1000, seed=42)
    >>> tree = build_tree(points)
    >>> tree.size
    1000
"""

from pathlib import Path
from typing import Any, Union

import numpy as np

from .geometry import KdTree, PointSET, UNIT_SQUARE


def generate_uniform_points(n: int, seed: int = 42) -> np.ndarray:
    """
    Generate points uniformly at random in the unit square.

    Args:
        n: Number of points
        seed: Random seed for reproducibility

    Returns:
        Array of shape (n, 2)
    """
    if n < 0:
        raise ValueError(f"Number of points must be non-negative, got {n}")
    rng = np.random.RandomState(seed)
    return rng.uniform(0.0, 1.0, size=(n, 2))


def generate_grid_points(side: int) -> np.ndarray:
    """
    Generate a side x side regular grid covering the unit square.

    Grid points share coordinates along both axes, which exercises the
    greater-or-equal tie rule of the tree.

    Returns:
        Array of shape (side * side, 2), row-major
    """
    if side < 0:
        raise ValueError(f"Grid side must be non-negative, got {side}")
    if side == 0:
        return np.empty((0, 2), dtype=np.float64)
    ticks = np.linspace(0.0, 1.0, side) if side > 1 else np.array([0.5])
    xx, yy = np.meshgrid(ticks, ticks)
    return np.column_stack([xx.ravel(), yy.ravel()]).astype(np.float64)


def generate_sorted_points(n: int, seed: int = 42) -> np.ndarray:
    """
    Generate uniform random points sorted by x, then y.

    Inserting these in order degrades the tree to a path-like shape, the
    worst case for every operation.
    """
    points = generate_uniform_points(n, seed)
    order = np.lexsort((points[:, 1], points[:, 0]))
    return points[order]


def load_points(filepath: Union[str, Path]) -> np.ndarray:
    """
    Load points from a text file.

    Args:
        filepath: Path to a file in the `x y` per-line format

    Returns:
        Array of shape (n, 2)

    Raises:
        ValueError: If a line does not hold exactly two finite numbers
        OSError: If the file cannot be read
    """
    path = Path(filepath)
    rows = []
    with open(path, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            text = line.strip()
            if not text or text.startswith('#'):
                continue
            fields = text.split()
            if len(fields) != 2:
                raise ValueError(
                    f"{path}:{line_no}: expected 2 coordinates, got {len(fields)}"
                )
            try:
                x, y = float(fields[0]), float(fields[1])
            except ValueError:
                raise ValueError(f"{path}:{line_no}: not a number: {text!r}") from None
            if not (np.isfinite(x) and np.isfinite(y)):
                raise ValueError(f"{path}:{line_no}: coordinates must be finite")
            rows.append((x, y))

    if not rows:
        return np.empty((0, 2), dtype=np.float64)
    return np.array(rows, dtype=np.float64)


def save_points(points: Any, filepath: Union[str, Path]) -> str:
    """
    Save points in the text format read by load_points.

    Args:
        points: Array of shape (n, 2), or an iterable of Point2D
        filepath: Output path; parent directories are created

    Returns:
        Path of the written file
    """
    if not isinstance(points, np.ndarray):
        points = [tuple(p) for p in points]
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        for x, y in points:
            f.write(f"{float(x)!r} {float(y)!r}\n")

    return str(path)


def build_tree(points: np.ndarray, domain: Any = UNIT_SQUARE) -> KdTree:
    """Build a 2d-tree by inserting the points in array order."""
    return KdTree.from_array(points, domain)


def build_point_set(points: np.ndarray) -> PointSET:
    """Build the brute-force reference set from the same points."""
    return PointSET.from_array(points)
