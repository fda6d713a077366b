#!/usr/bin/env python3
"""
Benchmark Script: 2d-Tree vs Brute-Force Queries

This script measures the cost of range and nearest-neighbor queries on the
2d-tree against the linear-scan point set, for several problem sizes and
insertion orders:

1. Brute force: numpy-vectorized scan over every point
2. 2d-tree: pruned traversal, nearer subtree first
3. 2d-tree, far subtree first: same answers, weaker pruning

Besides wall-clock time, the average number of tree nodes examined per query
is reported, which isolates the effect of pruning from interpreter overhead.

Usage:
    python benchmarks/benchmark_kdtree_vs_brute.py
    python benchmarks/benchmark_kdtree_vs_brute.py --sizes 1000,10000 --trials 5

Output:
    - Console table with timing results
    - CSV file with detailed results
"""

import argparse
import csv
import sys
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kdtree2d.geometry import KdTree, RectHV
from kdtree2d.point_data import (
    generate_uniform_points,
    generate_sorted_points,
    build_tree,
    build_point_set
)
from kdtree2d.perf.timing import Timer, BenchmarkResult, compute_speedup


def benchmark_nearest(
    query_fn,
    queries: np.ndarray,
    name: str,
    tree: KdTree = None,
    n_trials: int = 3
) -> BenchmarkResult:
    """
    Time a batch of nearest-neighbor queries.

    If a tree is given, its node-visit counter is averaged over the batch.
    """
    result = BenchmarkResult(name)

    for _ in range(n_trials):
        visits = 0
        with Timer(verbose=False) as t:
            for q in queries:
                query_fn(q)
                if tree is not None:
                    visits += tree.last_visits
        result.add_trial(t.elapsed_ms, visits // max(1, len(queries)) if tree is not None else None)

    return result


def benchmark_range(
    index,
    rects: List[RectHV],
    name: str,
    n_trials: int = 3
) -> BenchmarkResult:
    """Time a batch of range queries against a KdTree or PointSET."""
    result = BenchmarkResult(name)
    is_tree = isinstance(index, KdTree)

    for _ in range(n_trials):
        visits = 0
        with Timer(verbose=False) as t:
            for rect in rects:
                index.range(rect)
                if is_tree:
                    visits += index.last_visits
        result.add_trial(t.elapsed_ms, visits // max(1, len(rects)) if is_tree else None)

    return result


def random_rects(n: int, side: float, seed: int) -> List[RectHV]:
    """Square query rectangles of the given side inside the unit square."""
    rng = np.random.RandomState(seed)
    corners = rng.uniform(0.0, 1.0 - side, size=(n, 2))
    return [RectHV(x, y, x + side, y + side) for x, y in corners]


def run_benchmark_suite(
    sizes: List[int],
    orders: List[str],
    n_queries: int = 200,
    n_trials: int = 3,
    verbose: bool = True
) -> List[Dict[str, Any]]:
    """
    Run the benchmark for every size and insertion order.

    Args:
        sizes: Number of points per problem
        orders: Insertion orders ('random', 'sorted')
        n_queries: Queries of each kind per trial
        n_trials: Number of timing trials per benchmark
        verbose: Print progress information

    Returns:
        List of result dictionaries
    """
    results = []
    rng = np.random.RandomState(7)

    for size in sizes:
        for order in orders:
            if verbose:
                print(f"\n{'='*60}")
                print(f"Benchmarking size: {size} ({order} insertion order)")
                print('='*60)

            if order == 'sorted':
                points = generate_sorted_points(size, seed=42 + size)
            else:
                points = generate_uniform_points(size, seed=42 + size)

            with Timer(verbose=False) as t:
                tree = build_tree(points)
            build_ms = t.elapsed_ms
            point_set = build_point_set(points)

            queries = rng.uniform(0.0, 1.0, size=(n_queries, 2))
            rects = random_rects(n_queries, side=0.05, seed=size)

            brute_nn = benchmark_nearest(point_set.nearest, queries, "Brute force NN",
                                         n_trials=n_trials)
            tree_nn = benchmark_nearest(tree.nearest, queries, "2d-tree NN",
                                        tree=tree, n_trials=n_trials)
            far_nn = benchmark_nearest(lambda q: tree.nearest(q, nearer_first=False),
                                       queries, "2d-tree NN (far first)",
                                       tree=tree, n_trials=n_trials)
            brute_range = benchmark_range(point_set, rects, "Brute force range", n_trials)
            tree_range = benchmark_range(tree, rects, "2d-tree range", n_trials)

            if verbose:
                print(f"  Height: {tree.height()}, build: {build_ms:.2f} ms")
                for r in (brute_nn, tree_nn, far_nn, brute_range, tree_range):
                    print(f"    {r.summary()}")

            results.append({
                'num_points': tree.size,
                'order': order,
                'height': tree.height(),
                'build_ms': build_ms,
                'brute_nn_ms': brute_nn.mean_ms,
                'kdtree_nn_ms': tree_nn.mean_ms,
                'kdtree_nn_visits': tree_nn.mean_visits,
                'far_first_nn_ms': far_nn.mean_ms,
                'far_first_nn_visits': far_nn.mean_visits,
                'brute_range_ms': brute_range.mean_ms,
                'kdtree_range_ms': tree_range.mean_ms,
                'kdtree_range_visits': tree_range.mean_visits,
                'speedup_nn': compute_speedup(brute_nn.mean_ms, tree_nn.mean_ms),
                'speedup_range': compute_speedup(brute_range.mean_ms, tree_range.mean_ms)
            })

    return results


def save_results_csv(results: List[Dict[str, Any]], filepath: str):
    """Save benchmark results to CSV file."""
    if not results:
        return

    with open(filepath, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=list(results[0].keys()))
        writer.writeheader()
        writer.writerows(results)

    print(f"\nResults saved to: {filepath}")


def print_results_table(results: List[Dict[str, Any]]):
    """Print formatted results table."""
    print("\n" + "=" * 90)
    print("BENCHMARK RESULTS SUMMARY")
    print("=" * 90)

    print(f"{'Size':>8} {'Order':>8} {'Height':>7} {'NN visits':>10} {'Far-first':>10} "
          f"{'NN speedup':>11} {'Rng visits':>11} {'Rng speedup':>12}")
    print("-" * 90)

    for r in results:
        print(f"{r['num_points']:>8} {r['order']:>8} {r['height']:>7} "
              f"{r['kdtree_nn_visits']:>10.1f} {r['far_first_nn_visits']:>10.1f} "
              f"{r['speedup_nn']:>10.2f}× {r['kdtree_range_visits']:>11.1f} "
              f"{r['speedup_range']:>11.2f}×")

    print("=" * 90)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Benchmark 2d-tree queries against brute force'
    )
    parser.add_argument(
        '--sizes', type=str, default='1000,5000,20000',
        help='Comma-separated problem sizes (default: 1000,5000,20000)'
    )
    parser.add_argument(
        '--orders', type=str, default='random,sorted',
        help='Comma-separated insertion orders (default: random,sorted)'
    )
    parser.add_argument(
        '--queries', type=int, default=200,
        help='Queries of each kind per trial (default: 200)'
    )
    parser.add_argument(
        '--trials', type=int, default=3,
        help='Number of timing trials per benchmark (default: 3)'
    )
    parser.add_argument(
        '--output', type=str, default='benchmarks/benchmark_results.csv',
        help='Output CSV file path'
    )
    parser.add_argument(
        '--quiet', '-q', action='store_true',
        help='Minimal output'
    )

    args = parser.parse_args()

    sizes = [int(s.strip()) for s in args.sizes.split(',')]
    orders = [s.strip() for s in args.orders.split(',')]

    if not args.quiet:
        print("=" * 60)
        print("  2D-TREE QUERY BENCHMARK")
        print("  Brute Force vs 2d-Tree")
        print("=" * 60)
        print(f"\nProblem sizes: {sizes}")
        print(f"Insertion orders: {orders}")
        print(f"Trials per size: {args.trials}")

    results = run_benchmark_suite(sizes, orders, args.queries, args.trials,
                                  verbose=not args.quiet)

    print_results_table(results)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    save_results_csv(results, str(output_path))

    return 0


if __name__ == "__main__":
    sys.exit(main())
