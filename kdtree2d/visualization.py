"""
Rendering of 2d-Trees and Point Sets

Draws the stored points together with the splitting line of every node:
red for vertical (x) splits, blue for horizontal (y) splits. Each line spans
only its node's implicit rectangle, so the picture shows how the tree
partitions the plane.

The geometry comes from KdTree.traverse(), a read-only export; drawing
never touches tree internals. matplotlib is imported lazily and is only
needed for the plotting functions, not for splitting_segments().
"""

from typing import Any, List, Optional, Tuple

import numpy as np

from .geometry import KdTree, PointSET, Point2D, RectHV

Segment = Tuple[Tuple[float, float], Tuple[float, float]]


def splitting_segments(tree: KdTree) -> Tuple[List[Segment], List[Segment]]:
    """
    Compute the splitting lines of a tree clipped to each node's rectangle.

    Returns:
        Tuple of (vertical segments, horizontal segments), each segment a
        pair of (x, y) end points, in pre-order
    """
    vertical: List[Segment] = []
    horizontal: List[Segment] = []

    for point, rect, is_vertical in tree.traverse():
        if is_vertical:
            vertical.append(((point.x, rect.ymin), (point.x, rect.ymax)))
        else:
            horizontal.append(((rect.xmin, point.y), (rect.xmax, point.y)))

    return vertical, horizontal


def draw_tree(
    tree: KdTree,
    ax: Any = None,
    save_path: Optional[str] = None,
    query_rect: Optional[RectHV] = None,
    query_point: Optional[Point2D] = None
) -> Any:
    """
    Plot the points and splitting lines of a 2d-tree.

    Args:
        tree: Tree to draw
        ax: Existing matplotlib Axes to draw into; a new figure otherwise
        save_path: If provided, save figure to this path instead of showing
        query_rect: Optional range query to overlay (green outline)
        query_point: Optional nearest-neighbor query to overlay, connected
            to its nearest stored point

    Returns:
        The Axes drawn into, or None if matplotlib is not available
    """
    try:
        import matplotlib.pyplot as plt
        from matplotlib.collections import LineCollection
        from matplotlib.patches import Rectangle
    except ImportError:
        print("matplotlib not available for visualization")
        return None

    own_figure = ax is None
    if own_figure:
        fig, ax = plt.subplots(figsize=(8, 8))

    vertical, horizontal = splitting_segments(tree)
    if vertical:
        ax.add_collection(LineCollection(vertical, colors='red', linewidths=1))
    if horizontal:
        ax.add_collection(LineCollection(horizontal, colors='blue', linewidths=1))

    points = tree.to_array()
    if len(points):
        ax.scatter(points[:, 0], points[:, 1], c='black', s=12, zorder=3)

    if query_rect is not None:
        ax.add_patch(Rectangle(
            (query_rect.xmin, query_rect.ymin),
            query_rect.width,
            query_rect.height,
            fill=False,
            edgecolor='green',
            linewidth=2,
            zorder=4
        ))
        found = np.array([p.as_tuple() for p in tree.range(query_rect)]).reshape(-1, 2)
        if len(found):
            ax.scatter(found[:, 0], found[:, 1], c='green', s=30, zorder=5)

    if query_point is not None:
        ax.scatter([query_point.x], [query_point.y], c='magenta', marker='x', s=60, zorder=5)
        nearest = tree.nearest(query_point)
        if nearest is not None:
            ax.plot([query_point.x, nearest.x], [query_point.y, nearest.y],
                    color='magenta', linewidth=1, zorder=4)

    bounds = tree.bounds
    ax.set_xlim(bounds.xmin, bounds.xmax)
    ax.set_ylim(bounds.ymin, bounds.ymax)
    ax.set_aspect('equal', adjustable='box')
    ax.set_title(f'2d-tree: {tree.size} points, height {tree.height()}')

    if own_figure:
        _finish(plt, save_path)
    return ax


def draw_point_set(
    point_set: PointSET,
    ax: Any = None,
    save_path: Optional[str] = None
) -> Any:
    """Plot the points of a brute-force point set (no splitting lines)."""
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib not available for visualization")
        return None

    own_figure = ax is None
    if own_figure:
        fig, ax = plt.subplots(figsize=(8, 8))

    points = point_set.to_array()
    if len(points):
        ax.scatter(points[:, 0], points[:, 1], c='black', s=12)
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.set_aspect('equal', adjustable='box')
    ax.set_title(f'Point set: {point_set.size} points')

    if own_figure:
        _finish(plt, save_path)
    return ax


def _finish(plt: Any, save_path: Optional[str]) -> None:
    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Visualization saved to {save_path}")
    else:
        plt.show()
    plt.close()
