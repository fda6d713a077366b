"""
Test Suite for the 2d-Tree Point Index

This package contains unit tests and integration tests for:
- Point2D / RectHV geometry
- 2d-tree insertion, containment, range and nearest-neighbor search
- Brute-force reference point set
- Point file I/O, rendering, timing and the command-line driver

Run tests with: pytest -v
"""
