"""
2d-Tree Point Index

This package indexes a dynamic set of points in the plane for fast
axis-aligned range search and nearest-neighbor search.

Main modules:
- geometry: Point2D/RectHV value types, KdTree, brute-force PointSET
- point_data: Point generation and text file I/O
- visualization: Drawing of points and splitting lines
- perf: Timing and benchmarking utilities
"""

from .geometry import KdTree, PointSET, Point2D, RectHV, UNIT_SQUARE

__version__ = "1.0.0"

__all__ = ['KdTree', 'PointSET', 'Point2D', 'RectHV', 'UNIT_SQUARE']
