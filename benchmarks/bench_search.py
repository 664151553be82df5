"""
gallop Benchmark Suite
======================

Compares the galloping search against a linear scan on predicates of
increasing boundary, reporting evaluation counts and wall time.

Usage:
    python -m benchmarks.bench_search
"""

import math
import os
import statistics
import sys
import time

# Ensure gallop is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from gallop.search.engine import SearchEngine
from gallop.utils.helpers import Timer, format_ns, format_savings, linear_scan


ITERATIONS = 20
BOUNDARIES = [0, 1, 41, 1_000, 100_000, 1_000_000]
SLOW_PREDICATE_NS = 2_000   # simulated per-evaluation cost


def costly(k: int):
    """Predicate true on [0, k] that burns a fixed amount of time per call."""
    def predicate(i):
        deadline = time.perf_counter_ns() + SLOW_PREDICATE_NS
        while time.perf_counter_ns() < deadline:
            pass
        return i <= k
    return predicate


def counting(k: int):
    calls = [0]

    def predicate(i):
        calls[0] += 1
        return i <= k
    return predicate, calls


def bench_evaluations():
    print("\n── Evaluation counts ─────────────────────────────────────────")
    print(f"  {'boundary':>10s}  {'linear':>10s}  {'gallop':>8s}  {'bound':>6s}  savings")
    engine = SearchEngine()
    for k in BOUNDARIES + [10 ** 12, 2 ** 63]:
        predicate, calls = counting(k)
        result = engine.run(predicate)
        linear = k + 2
        bound = 2 * math.ceil(math.log2(k + 2)) + 4
        print(
            f"  {result.boundary:>10d}  {linear:>10d}  {calls[0]:>8d}  {bound:>6d}  "
            f"{format_savings(linear, calls[0])}"
        )


def bench_wall_time():
    print("\n── Wall time with a costly predicate ─────────────────────────")
    engine = SearchEngine()
    for k in BOUNDARIES[:4]:
        predicate = costly(k)
        times = []
        for _ in range(ITERATIONS):
            with Timer() as t:
                engine.run(predicate)
            times.append(t.elapsed_ns)
        with Timer() as t:
            linear_scan(predicate, k + 2)
        print(
            f"  k={k:>8d}  gallop median {format_ns(statistics.median(times)):>10s}"
            f"  linear {format_ns(t.elapsed_ns):>10s}"
        )


def bench_widths():
    print("\n── Worst case per index width ────────────────────────────────")
    for width in (8, 16, 32, 64):
        engine = SearchEngine(width=width)
        top = 2 ** width - 1
        result = engine.run(lambda i: i < top)
        print(
            f"  W={width:>2d}  evaluations {result.evaluations_used:>3d}"
            f"  default budget {engine.budget:>3d}  boundary {result.boundary}"
        )


def main():
    print("gallop benchmarks")
    bench_evaluations()
    bench_wall_time()
    bench_widths()


if __name__ == '__main__':
    main()
