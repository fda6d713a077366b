"""
Tests for Point Generation and File I/O

Run with: pytest tests/test_point_data.py -v
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kdtree2d.point_data import (
    generate_uniform_points,
    generate_grid_points,
    generate_sorted_points,
    load_points,
    save_points,
    build_tree,
    build_point_set
)
from kdtree2d.geometry.primitives import Point2D


class TestGeneration:
    """Tests for generated point sets."""

    def test_uniform_shape_and_range(self):
        points = generate_uniform_points(500, seed=1)
        assert points.shape == (500, 2)
        assert points.min() >= 0.0
        assert points.max() <= 1.0

    def test_uniform_reproducible(self):
        assert np.array_equal(generate_uniform_points(50, seed=3),
                              generate_uniform_points(50, seed=3))
        assert not np.array_equal(generate_uniform_points(50, seed=3),
                                  generate_uniform_points(50, seed=4))

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            generate_uniform_points(-1)

    def test_grid(self):
        grid = generate_grid_points(5)
        assert grid.shape == (25, 2)
        assert set(np.unique(grid[:, 0])) == {0.0, 0.25, 0.5, 0.75, 1.0}
        assert generate_grid_points(0).shape == (0, 2)
        assert np.array_equal(generate_grid_points(1), [[0.5, 0.5]])

    def test_sorted(self):
        points = generate_sorted_points(100, seed=2)
        assert np.all(np.diff(points[:, 0]) >= 0)

    def test_sorted_order_gives_taller_tree(self):
        """Test sorted insertion produces a taller tree than random order."""
        random_tree = build_tree(generate_uniform_points(500, seed=8))
        sorted_tree = build_tree(generate_sorted_points(500, seed=8))
        assert sorted_tree.height() > random_tree.height()


class TestFileIO:
    """Tests for the `x y` per-line text format."""

    def test_round_trip(self, tmp_path):
        points = generate_uniform_points(20, seed=5)
        path = save_points(points, tmp_path / "sub" / "points.txt")
        assert np.array_equal(load_points(path), points)

    def test_save_point_objects(self, tmp_path):
        path = save_points([Point2D(0.5, 0.25)], tmp_path / "one.txt")
        assert Path(path).read_text() == "0.5 0.25\n"

    def test_comments_and_blank_lines(self, tmp_path):
        path = tmp_path / "points.txt"
        path.write_text("# header\n0.7 0.2\n\n  0.5   0.4  \n# trailing\n")
        assert np.array_equal(load_points(path), [[0.7, 0.2], [0.5, 0.4]])

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")
        assert load_points(path).shape == (0, 2)

    @pytest.mark.parametrize("content", [
        "0.1 0.2 0.3\n",
        "0.1\n",
        "0.1 abc\n",
        "nan 0.5\n",
        "0.5 inf\n",
    ])
    def test_malformed_lines(self, tmp_path, content):
        """Test malformed lines raise ValueError naming the line."""
        path = tmp_path / "bad.txt"
        path.write_text("0.0 0.0\n" + content)
        with pytest.raises(ValueError, match=":2:"):
            load_points(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_points(tmp_path / "missing.txt")


class TestBuilders:
    """Tests for building indexes from arrays."""

    def test_build_tree_and_point_set_agree(self):
        points = generate_uniform_points(200, seed=6)
        tree = build_tree(points)
        point_set = build_point_set(points)

        assert tree.size == point_set.size == 200
        query = Point2D(0.3, 0.6)
        assert (tree.nearest(query).distance_to(query) ==
                point_set.nearest(query).distance_to(query))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
