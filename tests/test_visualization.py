"""
Tests for Tree Rendering

Segment computation is tested without matplotlib; drawing tests are
skipped when matplotlib is not installed.

Run with: pytest tests/test_visualization.py -v
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kdtree2d.geometry import KdTree, PointSET, Point2D, RectHV
from kdtree2d.visualization import splitting_segments, draw_tree, draw_point_set


@pytest.fixture
def example_tree():
    tree = KdTree()
    for p in [(0.2, 0.3), (0.4, 0.7), (0.9, 0.1)]:
        tree.insert(p)
    return tree


@pytest.fixture
def agg_backend():
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    return matplotlib


class TestSplittingSegments:

    def test_empty_tree(self):
        assert splitting_segments(KdTree()) == ([], [])

    def test_segments_clipped_to_node_rectangles(self, example_tree):
        vertical, horizontal = splitting_segments(example_tree)

        assert vertical == [
            ((0.2, 0.0), (0.2, 1.0)),
            ((0.9, 0.0), (0.9, 0.7)),
        ]
        assert horizontal == [((0.2, 0.7), (1.0, 0.7))]


class TestDrawing:

    def test_draw_tree_to_file(self, agg_backend, example_tree, tmp_path):
        out = tmp_path / "tree.png"
        ax = draw_tree(
            example_tree,
            save_path=str(out),
            query_rect=RectHV(0.0, 0.0, 0.5, 0.5),
            query_point=Point2D(0.5, 0.5)
        )
        assert ax is not None
        assert out.exists() and out.stat().st_size > 0

    def test_draw_empty_tree(self, agg_backend, tmp_path):
        out = tmp_path / "empty.png"
        draw_tree(KdTree(), save_path=str(out), query_point=Point2D(0.5, 0.5))
        assert out.exists()

    def test_draw_into_existing_axes(self, agg_backend, example_tree):
        import matplotlib.pyplot as plt
        fig, ax = plt.subplots()
        assert draw_tree(example_tree, ax=ax) is ax
        assert len(ax.collections) >= 2
        plt.close(fig)

    def test_draw_point_set(self, agg_backend, tmp_path):
        point_set = PointSET()
        point_set.insert((0.5, 0.5))
        out = tmp_path / "points.png"
        draw_point_set(point_set, save_path=str(out))
        assert out.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
