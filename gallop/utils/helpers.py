"""Utility helpers for gallop."""

import time
from typing import Callable


class Timer:
    """High-resolution timer context."""

    def __init__(self):
        self.start_ns = 0
        self.end_ns = 0

    def __enter__(self):
        self.start_ns = time.perf_counter_ns()
        return self

    def __exit__(self, *exc):
        self.end_ns = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        return self.end_ns - self.start_ns

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000.0


def linear_scan(predicate: Callable[[int], bool], limit: int) -> int:
    """
    Reference boundary by walking 0, 1, 2, ... up to ``limit``.

    Costs boundary + 1 evaluations; used as the baseline the galloping
    search is measured against.
    """
    for index in range(limit):
        if not predicate(index):
            return index
    return limit


def format_ns(ns: float) -> str:
    """Format nanoseconds into a human-readable string."""
    if ns < 1_000:
        return f"{ns:.0f} ns"
    elif ns < 1_000_000:
        return f"{ns / 1_000:.1f} µs"
    elif ns < 1_000_000_000:
        return f"{ns / 1_000_000:.2f} ms"
    else:
        return f"{ns / 1_000_000_000:.3f} s"


def format_savings(baseline_evals: int, search_evals: int) -> str:
    """Format how many fewer evaluations the search needed than a baseline."""
    if search_evals <= 0:
        return "no evaluations"
    if baseline_evals <= 0:
        return f"{search_evals} more evaluations than a free baseline"
    ratio = baseline_evals / search_evals
    if ratio >= 1:
        return f"{ratio:.1f}x fewer evaluations"
    return f"{1 / ratio:.1f}x more evaluations"
