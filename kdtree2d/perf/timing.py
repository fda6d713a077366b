"""
Timing and Benchmarking Utilities

Measures how long index operations take and how many tree nodes a query
examines, so the 2d-tree can be compared against the brute-force baseline.

Features:
- Timer context manager for easy timing
- Speedup calculation
- Benchmark result containers with trial statistics
- Benchmark runner comparing several query implementations

Example:
    >>> with Timer("Build 2d-tree") as t:
    ...     tree = KdTree.from_array(points)
    Build 2d-tree: 12.31 ms

    >>> bench = Benchmark("Nearest neighbor, n=10000")
    >>> bench.add_implementation("brute_force", point_set.nearest)
    >>> bench.add_implementation("kdtree", tree.nearest)
    >>> bench.run((0.5, 0.5), n_trials=5)
    >>> bench.print_comparison(baseline="brute_force")
"""

import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


class Timer:
    """
    Context manager for timing code blocks.

    Uses time.perf_counter() for high-resolution timing.

    Attributes:
        name: Optional name for the timed operation
        elapsed: Elapsed time in seconds
        elapsed_ms: Elapsed time in milliseconds
    """

    def __init__(self, name: Optional[str] = None, verbose: bool = True):
        """
        Args:
            name: Optional name to print with timing
            verbose: Whether to print timing on exit
        """
        self.name = name
        self.verbose = verbose
        self._start: float = 0
        self.elapsed: float = 0

    def __enter__(self) -> 'Timer':
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self.elapsed = time.perf_counter() - self._start
        if self.verbose and self.name:
            print(f"{self.name}: {self.elapsed_ms:.2f} ms")

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000

    @property
    def elapsed_us(self) -> float:
        return self.elapsed * 1_000_000


def compute_speedup(baseline_time: float, optimized_time: float) -> float:
    """
    Speedup = baseline_time / optimized_time.

    A speedup > 1 means the optimized version is faster.

    Example:
        >>> compute_speedup(100.0, 25.0)
        4.0
    """
    if optimized_time <= 0:
        return float('inf')
    return baseline_time / optimized_time


@dataclass
class BenchmarkResult:
    """
    Container for benchmark results.

    Attributes:
        name: Name of the benchmarked operation
        times_ms: Timing of each trial in milliseconds
        visits: Tree nodes examined per trial, when the operation reports it
        metadata: Optional additional information (problem size, order, ...)
    """
    name: str
    times_ms: List[float] = field(default_factory=list)
    visits: List[int] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_trial(self, time_ms: float, visits: Optional[int] = None) -> None:
        self.times_ms.append(time_ms)
        if visits is not None:
            self.visits.append(visits)

    @property
    def mean_ms(self) -> float:
        if not self.times_ms:
            return 0.0
        return statistics.mean(self.times_ms)

    @property
    def std_ms(self) -> float:
        if len(self.times_ms) < 2:
            return 0.0
        return statistics.stdev(self.times_ms)

    @property
    def min_ms(self) -> float:
        if not self.times_ms:
            return 0.0
        return min(self.times_ms)

    @property
    def max_ms(self) -> float:
        if not self.times_ms:
            return 0.0
        return max(self.times_ms)

    @property
    def mean_visits(self) -> float:
        if not self.visits:
            return 0.0
        return statistics.mean(self.visits)

    @property
    def num_trials(self) -> int:
        return len(self.times_ms)

    def summary(self) -> str:
        """Generate summary string."""
        text = (f"{self.name}: {self.mean_ms:.2f} ± {self.std_ms:.2f} ms "
                f"(n={self.num_trials}, min={self.min_ms:.2f}, max={self.max_ms:.2f})")
        if self.visits:
            text += f", {self.mean_visits:.1f} nodes visited"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'mean_ms': self.mean_ms,
            'std_ms': self.std_ms,
            'min_ms': self.min_ms,
            'max_ms': self.max_ms,
            'mean_visits': self.mean_visits,
            'num_trials': self.num_trials,
            'metadata': self.metadata
        }


class Benchmark:
    """
    Benchmark runner for comparing query implementations.

    An implementation may be a bound method of a KdTree; after each call its
    `last_visits` counter is recorded alongside the timing.
    """

    def __init__(self, name: str):
        self.name = name
        self.implementations: Dict[str, Callable] = {}
        self.results: Dict[str, BenchmarkResult] = {}

    def add_implementation(self, name: str, func: Callable) -> None:
        self.implementations[name] = func
        self.results[name] = BenchmarkResult(name)

    def run(
        self,
        *args,
        n_trials: int = 5,
        warmup: int = 1,
        **kwargs
    ) -> Dict[str, BenchmarkResult]:
        """
        Run every implementation with the same arguments.

        Args:
            *args: Arguments to pass to implementations
            n_trials: Number of timing trials
            warmup: Number of warmup runs (not timed)
            **kwargs: Keyword arguments to pass to implementations

        Returns:
            Dictionary mapping implementation names to results
        """
        for impl_name, func in self.implementations.items():
            for _ in range(warmup):
                func(*args, **kwargs)

            result = self.results[impl_name]
            for _ in range(n_trials):
                with Timer(verbose=False) as t:
                    func(*args, **kwargs)
                result.add_trial(t.elapsed_ms, _visits_of(func))

        return self.results

    def print_comparison(self, baseline: Optional[str] = None) -> None:
        """Print comparison table of results."""
        print(f"\nBenchmark: {self.name}")
        print("=" * 70)

        if baseline is None:
            baseline = list(self.results.keys())[0]
        baseline_time = self.results[baseline].mean_ms

        print(f"{'Implementation':<20} {'Mean (ms)':>12} {'Std (ms)':>10} "
              f"{'Visits':>10} {'Speedup':>12}")
        print("-" * 70)

        for name, result in self.results.items():
            speedup = compute_speedup(baseline_time, result.mean_ms)
            speedup_str = f"{speedup:.2f}x" if name != baseline else "(baseline)"
            visits_str = f"{result.mean_visits:.1f}" if result.visits else "-"
            print(f"{name:<20} {result.mean_ms:>12.3f} {result.std_ms:>10.3f} "
                  f"{visits_str:>10} {speedup_str:>12}")

        print()

    def get_speedups(self, baseline: str) -> Dict[str, float]:
        baseline_time = self.results[baseline].mean_ms
        return {
            name: compute_speedup(baseline_time, result.mean_ms)
            for name, result in self.results.items()
        }


def _visits_of(func: Callable) -> Optional[int]:
    """Node-visit count of a bound KdTree query method, if any."""
    owner = getattr(func, '__self__', None)
    return getattr(owner, 'last_visits', None)


def benchmark_function(
    func: Callable,
    args: tuple = (),
    kwargs: dict = None,
    n_trials: int = 5,
    warmup: int = 1,
    name: Optional[str] = None
) -> BenchmarkResult:
    """
    Benchmark a single function.

    Args:
        func: Function to benchmark
        args: Positional arguments for function
        kwargs: Keyword arguments for function
        n_trials: Number of timing trials
        warmup: Number of warmup runs
        name: Optional name for result

    Returns:
        BenchmarkResult with timing statistics
    """
    if kwargs is None:
        kwargs = {}
    if name is None:
        name = getattr(func, '__name__', 'function')

    result = BenchmarkResult(name)

    for _ in range(warmup):
        func(*args, **kwargs)

    for _ in range(n_trials):
        with Timer(verbose=False) as t:
            func(*args, **kwargs)
        result.add_trial(t.elapsed_ms, _visits_of(func))

    return result
