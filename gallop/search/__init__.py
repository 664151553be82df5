"""
Budgeted Boundary Search
========================

Galloping (exponential + binary) search for the point where a monotonic
predicate over unsigned indices turns from true to false:

    probe.py        - PredicateProbe: memoized, budget-charged evaluation
    exponential.py  - ExponentialBoundFinder: doubling probe, bracket or exhausted
    binary.py       - BinaryRefiner: bisection of the bracket
    engine.py       - SearchEngine / search(): the orchestrating state machine
    budget.py       - EvaluationBudget: the checked evaluation counter
    index_space.py  - IndexSpace: fixed-width index domain, numpy dtypes

Cost:
    For a boundary at k + 1, the search makes at most
    2 * ceil(log2(k + 2)) + 4 predicate evaluations, and never more than
    2W + 1 for a W-bit index.

References:
    - Bentley, J.L. & Yao, A.C. (1976). An almost optimal algorithm for
      unbounded searching.
"""

from gallop.search.index_space import IndexSpace
from gallop.search.budget import EvaluationBudget
from gallop.search.probe import PredicateProbe, ProbeStats
from gallop.search.exponential import ExponentialBoundFinder, BoundOutcome
from gallop.search.binary import BinaryRefiner, Refinement
from gallop.search.engine import (
    SearchEngine,
    SearchResult,
    SearchState,
    SearchStatus,
    search,
)

__all__ = [
    'IndexSpace',
    'EvaluationBudget',
    'PredicateProbe',
    'ProbeStats',
    'ExponentialBoundFinder',
    'BoundOutcome',
    'BinaryRefiner',
    'Refinement',
    'SearchEngine',
    'SearchResult',
    'SearchState',
    'SearchStatus',
    'search',
]
