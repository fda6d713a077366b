"""
Main Entry Point for the 2d-Tree Point Index

This script provides a command-line interface for building a 2d-tree from a
point file or from generated points and running queries against it. It
orchestrates:

1. Point loading / generation
2. Tree construction (insertion in file or generated order)
3. Range and nearest-neighbor queries, cross-checked against brute force
4. Optional rendering and benchmarking

Usage:
    # Query points read from a file
    python -m kdtree2d.main --input data/circle10.txt --nearest 0.5 0.5

    # Generate points and run a range query
    python -m kdtree2d.main --generate 1000 --range 0.2 0.2 0.4 0.4

    # Compare against brute force at several sizes
    python -m kdtree2d.main --benchmark --sizes 1000,10000,100000
"""

import argparse
import csv
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from .geometry import KdTree, PointSET, Point2D, RectHV
from .point_data import (
    generate_uniform_points,
    generate_sorted_points,
    load_points,
    save_points,
    build_tree,
    build_point_set
)
from .perf.timing import Timer, BenchmarkResult, compute_speedup
from .visualization import draw_tree


def print_header():
    """Print application header."""
    print("=" * 70)
    print("  2D-TREE POINT INDEX")
    print("  Range Search and Nearest-Neighbor Search")
    print("=" * 70)
    print()


def load_data(args) -> np.ndarray:
    """
    Read points from the input file or generate them.

    Args:
        args: Command line arguments

    Returns:
        Array of shape (n, 2)
    """
    if args.input:
        print(f"Loading points from: {args.input}")
        points = load_points(args.input)
    else:
        print(f"Generating {args.generate} points ({args.order} order, seed {args.seed})")
        if args.order == 'sorted':
            points = generate_sorted_points(args.generate, seed=args.seed)
        else:
            points = generate_uniform_points(args.generate, seed=args.seed)
    print("-" * 40)
    print(f"  Points: {len(points)}")
    print()

    if args.save_points:
        path = save_points(points, args.save_points)
        print(f"Points saved to: {path}")
        print()

    return points


def build(points: np.ndarray, args) -> KdTree:
    """Insert the points into a new tree and report its shape."""
    with Timer(verbose=False) as t:
        tree = build_tree(points)

    if not args.quiet:
        print("Tree Statistics:")
        print("-" * 40)
        print(f"  Size:       {tree.size}")
        print(f"  Height:     {tree.height()}")
        print(f"  Bounds:     {tree.bounds}")
        print(f"  Build time: {t.elapsed_ms:.2f} ms")
        print()

    return tree


def run_range(tree: KdTree, point_set: PointSET, rect: RectHV, args) -> None:
    """Run a range query and compare it with the brute-force result."""
    with Timer(verbose=False) as t:
        found = tree.range(rect)
    expected = point_set.range(rect)

    print(f"Range Query {rect}:")
    print("-" * 40)
    print(f"  Points found:  {len(found)}")
    print(f"  Nodes visited: {tree.last_visits} of {tree.size}")
    print(f"  Query time:    {t.elapsed_ms:.3f} ms")
    print(f"  Brute force agrees: {set(found) == set(expected)}")

    if args.verbose:
        for p in found[:20]:
            print(f"    {p}")
        if len(found) > 20:
            print(f"    ... and {len(found) - 20} more points")
    print()


def run_nearest(tree: KdTree, point_set: PointSET, query: Point2D, args) -> None:
    """Run a nearest-neighbor query and compare it with brute force."""
    with Timer(verbose=False) as t:
        nearest = tree.nearest(query)
    expected = point_set.nearest(query)

    print(f"Nearest Neighbor Query {query}:")
    print("-" * 40)
    if nearest is None:
        print("  Tree is empty: no nearest point")
        print()
        return

    agrees = np.isclose(nearest.distance_to(query), expected.distance_to(query))
    print(f"  Nearest point: {nearest}")
    print(f"  Distance:      {nearest.distance_to(query):.6f}")
    print(f"  Nodes visited: {tree.last_visits} of {tree.size}")
    print(f"  Query time:    {t.elapsed_ms:.3f} ms")
    print(f"  Brute force agrees: {bool(agrees)}")
    print()


def run_benchmark(args) -> None:
    """Compare 2d-tree and brute-force queries across problem sizes."""
    print("Running Performance Benchmarks...")
    print("-" * 40)

    sizes = [int(s.strip()) for s in args.sizes.split(',')]
    print(f"  Problem sizes: {sizes}")
    print(f"  Queries per trial: {args.queries}")
    print(f"  Trials per size: {args.trials}")
    print()

    rng = np.random.RandomState(args.seed)
    results = []

    for size in sizes:
        print(f"\nBenchmarking size: {size}")
        if args.order == 'sorted':
            points = generate_sorted_points(size, seed=args.seed + size)
        else:
            points = generate_uniform_points(size, seed=args.seed + size)
        queries = rng.uniform(0.0, 1.0, size=(args.queries, 2))

        with Timer(verbose=False) as t:
            tree = build_tree(points)
        build_ms = t.elapsed_ms
        point_set = build_point_set(points)

        brute = BenchmarkResult("Brute force")
        kdtree = BenchmarkResult("2d-tree")
        for _ in range(args.trials):
            with Timer(verbose=False) as t:
                for q in queries:
                    point_set.nearest(q)
            brute.add_trial(t.elapsed_ms)

            visits = 0
            with Timer(verbose=False) as t:
                for q in queries:
                    tree.nearest(q)
                    visits += tree.last_visits
            kdtree.add_trial(t.elapsed_ms, visits // max(1, len(queries)))

        speedup = compute_speedup(brute.mean_ms, kdtree.mean_ms)
        result = {
            'num_points': tree.size,
            'height': tree.height(),
            'build_ms': build_ms,
            'brute_force_ms': brute.mean_ms,
            'kdtree_ms': kdtree.mean_ms,
            'mean_visits': kdtree.mean_visits,
            'speedup': speedup
        }
        results.append(result)

        print(f"  Height:      {result['height']}")
        print(f"  {brute.summary()}")
        print(f"  {kdtree.summary()}")
        print(f"  Speedup:     {speedup:.2f}×")

    print("\n" + "=" * 70)
    print("BENCHMARK SUMMARY")
    print("=" * 70)
    print(f"{'Size':>10} {'Height':>8} {'Brute(ms)':>12} {'2d-tree(ms)':>12} "
          f"{'Visits':>10} {'Speedup':>10}")
    print("-" * 70)
    for r in results:
        print(f"{r['num_points']:>10} {r['height']:>8} {r['brute_force_ms']:>12.2f} "
              f"{r['kdtree_ms']:>12.2f} {r['mean_visits']:>10.1f} {r['speedup']:>10.2f}×")

    if args.save_benchmark and results:
        output_path = Path(args.save_benchmark)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=results[0].keys())
            writer.writeheader()
            writer.writerows(results)
        print(f"\nResults saved to: {output_path}")

    print()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='2d-tree point index: range and nearest-neighbor search',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Nearest neighbor among points read from a file
  python -m kdtree2d.main --input points.txt --nearest 0.5 0.5

  # Range query over generated points, drawn to a file
  python -m kdtree2d.main --generate 500 --range 0.1 0.1 0.3 0.6 --save-plot tree.png

  # Run benchmarks
  python -m kdtree2d.main --benchmark --sizes 1000,10000
        """
    )

    data_group = parser.add_mutually_exclusive_group()
    data_group.add_argument('--input', '-i', type=str,
                            help='Path to a point file (one "x y" pair per line)')
    data_group.add_argument('--generate', '-g', type=int, metavar='N',
                            help='Generate N random points in the unit square')
    data_group.add_argument('--benchmark', '-b', action='store_true',
                            help='Run performance benchmarks')

    gen_group = parser.add_argument_group('Data Generation')
    gen_group.add_argument('--seed', type=int, default=42,
                           help='Random seed (default: 42)')
    gen_group.add_argument('--order', type=str, default='random',
                           choices=['random', 'sorted'],
                           help='Insertion order of generated points (default: random)')

    query_group = parser.add_argument_group('Queries')
    query_group.add_argument('--range', type=float, nargs=4,
                             metavar=('XMIN', 'YMIN', 'XMAX', 'YMAX'),
                             help='Report points inside this rectangle')
    query_group.add_argument('--nearest', type=float, nargs=2, metavar=('X', 'Y'),
                             help='Report the point closest to (X, Y)')

    bench_group = parser.add_argument_group('Benchmarking')
    bench_group.add_argument('--sizes', type=str, default='1000,10000,50000',
                             help='Comma-separated problem sizes (default: 1000,10000,50000)')
    bench_group.add_argument('--queries', type=int, default=100,
                             help='Nearest-neighbor queries per trial (default: 100)')
    bench_group.add_argument('--trials', type=int, default=3,
                             help='Number of timing trials (default: 3)')
    bench_group.add_argument('--save-benchmark', type=str, metavar='PATH',
                             help='Save benchmark results to CSV')

    out_group = parser.add_argument_group('Output')
    out_group.add_argument('--save-points', type=str, metavar='PATH',
                           help='Write the points in use to a file')
    out_group.add_argument('--draw', '-d', action='store_true',
                           help='Show the tree with its splitting lines')
    out_group.add_argument('--save-plot', type=str, metavar='PATH',
                           help='Save the tree drawing to PATH instead of showing it')
    out_group.add_argument('--verbose', '-v', action='store_true',
                           help='List the points found by range queries')
    out_group.add_argument('--quiet', '-q', action='store_true',
                           help='Minimal output')

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.quiet:
        print_header()

    if args.benchmark:
        run_benchmark(args)
        return 0

    if args.input is None and args.generate is None:
        args.generate = 100

    try:
        points = load_data(args)
        rect = RectHV(*args.range) if args.range else None
        query = Point2D(*args.nearest) if args.nearest else None
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    tree = build(points, args)
    point_set = build_point_set(points)

    if rect is not None:
        run_range(tree, point_set, rect, args)
    if query is not None:
        run_nearest(tree, point_set, query, args)

    if args.draw or args.save_plot:
        draw_tree(tree, save_path=args.save_plot, query_rect=rect, query_point=query)

    return 0


if __name__ == "__main__":
    sys.exit(main())
