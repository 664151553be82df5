"""
Predicate Probe
===============

Memoizing front for the caller's predicate.

Phases driven over the same probe can ask for the same index more than once
(galloping from 2^0 after P(1) was already checked, say); the probe answers
repeats from its cache so each index costs at most one real evaluation and
one unit of budget.

While it caches, the probe also watches for contradictions: it remembers
the highest index observed true and the lowest observed false. A true
answer at or above the lowest false index, or a false answer at or below
the highest true index, means the predicate is not monotonic and the
search cannot be trusted.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from gallop.errors import PredicateViolationError
from gallop.search.budget import EvaluationBudget
from gallop.search.index_space import IndexSpace

logger = logging.getLogger(__name__)


@dataclass
class ProbeStats:
    """Cache statistics for one probe."""
    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class PredicateProbe:
    """
    Wraps a monotonic predicate with memoization and budget accounting.

    Usage:
        >>> budget = EvaluationBudget(limit=10)
        >>> probe = PredicateProbe(lambda i: i <= 5, budget)
        >>> probe.evaluate(3), probe.evaluate(3)
        (True, True)
        >>> budget.used
        1
    """

    def __init__(
        self,
        predicate: Callable[[int], bool],
        budget: EvaluationBudget,
        space: Optional[IndexSpace] = None,
        check_monotonicity: bool = True,
    ):
        self.predicate = predicate
        self.budget = budget
        self.space = space or IndexSpace()
        self.check_monotonicity = check_monotonicity
        self.stats = ProbeStats()
        self.trace: List[Tuple[int, bool]] = []
        self._cache: Dict[int, bool] = {}
        self._highest_true: Optional[int] = None
        self._lowest_false: Optional[int] = None

    def evaluate(self, index: int) -> bool:
        cached = self._cache.get(index)
        if cached is not None:
            self.stats.hits += 1
            return cached

        self.budget.charge(index)
        self.stats.misses += 1
        result = bool(self.predicate(self.space.box(index)))
        self._cache[index] = result
        self.trace.append((index, result))
        logger.debug(f"P({index}) = {result} [{self.budget.used}/{self.budget.limit}]")

        if self.check_monotonicity:
            self._check(index, result)
        if result:
            if self._highest_true is None or index > self._highest_true:
                self._highest_true = index
        elif self._lowest_false is None or index < self._lowest_false:
            self._lowest_false = index
        return result

    def cached(self, index: int) -> Optional[bool]:
        """Return the memoized answer for ``index`` without evaluating."""
        return self._cache.get(index)

    @property
    def evaluations(self) -> int:
        return len(self.trace)

    def _check(self, index: int, result: bool) -> None:
        if result and self._lowest_false is not None and index >= self._lowest_false:
            raise PredicateViolationError(true_index=index, false_index=self._lowest_false)
        if not result and self._highest_true is not None and index <= self._highest_true:
            raise PredicateViolationError(true_index=self._highest_true, false_index=index)
