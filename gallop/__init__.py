"""
gallop: Budgeted Boundary Search for Monotonic Predicates
=========================================================

Counts how many leading indices satisfy a monotonic predicate, without
knowing an upper bound, using a logarithmic number of evaluations and a
hard evaluation budget.

The search gallops (P(1), P(2), P(4), ...) until the predicate turns false,
then bisects the last doubling interval. Every evaluation is memoized and
charged against the budget; a search that would exceed it fails with the
last bracket it examined rather than returning a guess.

Core Components:
    - search: probe, galloping bound finder, bisection refiner, engine
    - registry: append-only registry and the counter built on it
    - runtime: running many independent searches concurrently

Usage:
    >>> import gallop
    >>> gallop.search(lambda i: i <= 41).boundary
    42

    >>> result = gallop.search(lambda i: True, width=16)
    >>> result.exhausted, result.boundary
    (True, 65536)

    >>> gallop.search(lambda i: i < 10, budget=0).status
    <SearchStatus.INVALID_CONFIGURATION: 4>
"""

__version__ = "1.0.0"

from gallop.errors import (
    SearchError,
    InvalidConfigurationError,
    BudgetExceededError,
    PredicateViolationError,
)
from gallop.search import (
    IndexSpace,
    EvaluationBudget,
    PredicateProbe,
    ExponentialBoundFinder,
    BinaryRefiner,
    SearchEngine,
    SearchResult,
    SearchState,
    SearchStatus,
    search,
)
from gallop.registry import AppendOnlyRegistry, RegistrySnapshot, MonotonicCounter
from gallop.runtime import ParallelSearch
