"""
Geometry Module for the 2d-Tree Point Index

This module provides the spatial index and the types it is built on:
- Point2D and RectHV value types
- KdTree for range and nearest-neighbor search
- PointSET brute-force reference with the same API

The rectangle type does double duty: it is the query argument of range
search and the pruning bound of both query algorithms.
"""

from .primitives import Point2D, RectHV, UNIT_SQUARE
from .kd_tree import KdTree, KDNode, validate_kdtree
from .point_set import PointSET, brute_force_nearest, brute_force_range

__all__ = [
    'Point2D',
    'RectHV',
    'UNIT_SQUARE',
    'KdTree',
    'KDNode',
    'validate_kdtree',
    'PointSET',
    'brute_force_nearest',
    'brute_force_range'
]
