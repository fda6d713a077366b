"""
Performance Measurement Module

Timing and benchmarking utilities used by the command-line driver and the
benchmark script to compare the 2d-tree against the brute-force baseline.
"""

from .timing import (
    Timer,
    compute_speedup,
    BenchmarkResult,
    Benchmark,
    benchmark_function
)

__all__ = [
    'Timer',
    'compute_speedup',
    'BenchmarkResult',
    'Benchmark',
    'benchmark_function'
]
