"""
Tests for Timing and Benchmarking Utilities

Run with: pytest tests/test_timing.py -v
"""

import time

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kdtree2d.perf.timing import (
    Timer,
    compute_speedup,
    BenchmarkResult,
    Benchmark,
    benchmark_function
)
from kdtree2d.point_data import generate_uniform_points, build_tree, build_point_set


class TestTimer:

    def test_measures_elapsed(self):
        with Timer(verbose=False) as t:
            time.sleep(0.01)
        assert t.elapsed >= 0.01
        assert t.elapsed_ms == pytest.approx(t.elapsed * 1000)

    def test_verbose_prints_name(self, capsys):
        with Timer("Build"):
            pass
        assert "Build:" in capsys.readouterr().out


class TestBenchmarkResult:

    def test_statistics(self):
        result = BenchmarkResult("query")
        for ms in (1.0, 2.0, 3.0):
            result.add_trial(ms, visits=10)

        assert result.num_trials == 3
        assert result.mean_ms == 2.0
        assert result.min_ms == 1.0
        assert result.max_ms == 3.0
        assert result.std_ms == 1.0
        assert result.mean_visits == 10
        assert "nodes visited" in result.summary()

    def test_empty(self):
        result = BenchmarkResult("nothing")
        assert result.mean_ms == 0.0
        assert result.std_ms == 0.0
        assert result.to_dict()['num_trials'] == 0

    def test_speedup(self):
        assert compute_speedup(100.0, 25.0) == 4.0
        assert compute_speedup(1.0, 0.0) == float('inf')


class TestBenchmark:

    def test_compares_tree_and_brute_force(self, capsys):
        """Test visit counts are recorded for the tree only."""
        points = generate_uniform_points(500, seed=1)
        tree = build_tree(points)
        point_set = build_point_set(points)

        bench = Benchmark("Nearest neighbor")
        bench.add_implementation("brute_force", point_set.nearest)
        bench.add_implementation("kdtree", tree.nearest)
        results = bench.run((0.5, 0.5), n_trials=3, warmup=1)

        assert results["brute_force"].num_trials == 3
        assert results["brute_force"].visits == []
        assert len(results["kdtree"].visits) == 3
        assert 0 < results["kdtree"].mean_visits < 500

        bench.print_comparison(baseline="brute_force")
        assert "(baseline)" in capsys.readouterr().out
        assert set(bench.get_speedups("brute_force")) == {"brute_force", "kdtree"}

    def test_benchmark_function(self):
        tree = build_tree(generate_uniform_points(100, seed=2))
        result = benchmark_function(tree.range, args=((0.0, 0.0, 0.5, 0.5),), n_trials=2)
        assert result.name == "range"
        assert result.num_trials == 2
        assert result.visits[0] == tree.last_visits


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
