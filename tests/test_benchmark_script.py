"""
Tests for the standalone benchmark script helpers.
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "benchmarks"))

from benchmark_kdtree_vs_brute import benchmark_nearest, benchmark_range, random_rects
from kdtree2d.point_data import generate_uniform_points, build_tree


@pytest.fixture
def tree():
    return build_tree(generate_uniform_points(100, seed=3))


class TestBenchmarkHelpers:
    """Tests for batch timing with node-visit averages."""

    def test_nearest_batch_records_visits(self, tree):
        queries = np.random.RandomState(0).uniform(0.0, 1.0, size=(10, 2))
        result = benchmark_nearest(tree.nearest, queries, "nn", tree=tree, n_trials=2)

        assert result.num_trials == 2
        assert result.mean_visits >= 1

    def test_empty_nearest_batch(self, tree):
        """Test an empty query batch records zero visits instead of failing."""
        queries = np.empty((0, 2))
        result = benchmark_nearest(tree.nearest, queries, "nn", tree=tree, n_trials=1)

        assert result.num_trials == 1
        assert result.mean_visits == 0

    def test_empty_range_batch(self, tree):
        result = benchmark_range(tree, [], "range", n_trials=1)

        assert result.num_trials == 1
        assert result.mean_visits == 0

    def test_range_batch(self, tree):
        rects = random_rects(5, side=0.2, seed=1)
        result = benchmark_range(tree, rects, "range", n_trials=1)

        assert result.mean_visits >= 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
