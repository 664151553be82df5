"""
Search Engine
=============

Finds the boundary of a monotonic predicate over a fixed-width index space.

Given P with P(i) true for i <= k and false beyond, the engine returns k + 1,
the number of true indices, without knowing k in advance. The search runs
as a small state machine:

    INIT -> CHECK_ZERO -> CHECK_ONE -> EXPONENTIAL -> BINARY -> DONE
                                                              \\-> FAILED

  CHECK_ZERO:   P(0) false          -> boundary 0
  CHECK_ONE:    P(1) false          -> boundary 1
  EXPONENTIAL:  gallop 2, 4, 8, ...  -> bracket, or exhausted (max index + 1)
  BINARY:       bisect the bracket  -> boundary

Every genuine predicate evaluation is charged against an explicit budget
(default 2W + 4 for a W-bit space). Running out of budget fails the search
with the last bracket examined instead of guessing. The worst case for a
W-bit space is W + 2 galloping evaluations plus W - 1 bisection steps, which
always fits the default.

Failures come back as values: ``search`` and ``SearchEngine.run`` return a
SearchResult whatever happens, apart from exceptions raised by the predicate
itself, which propagate unchanged, and PredicateViolationError when the
probe catches the predicate contradicting itself. ``SearchResult.unwrap`` converts a failed
result into the matching exception for callers that prefer raising.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, List, Optional, Tuple

import numpy as np

from gallop.errors import (
    BudgetExceededError,
    InvalidConfigurationError,
    SearchError,
)
from gallop.search.binary import BinaryRefiner
from gallop.search.budget import EvaluationBudget
from gallop.search.exponential import ExponentialBoundFinder
from gallop.search.index_space import IndexSpace
from gallop.search.probe import PredicateProbe
from gallop.utils.helpers import format_ns

logger = logging.getLogger(__name__)


class SearchState(Enum):
    INIT = auto()
    CHECK_ZERO = auto()
    CHECK_ONE = auto()
    EXPONENTIAL = auto()
    BINARY = auto()
    DONE = auto()
    FAILED = auto()


class SearchStatus(Enum):
    """Outcome of a search."""
    FOUND = auto()                   # Boundary located inside the index space
    EXHAUSTED = auto()               # Predicate true everywhere; boundary = max index + 1
    BUDGET_EXCEEDED = auto()         # Ran out of evaluations before pinning the boundary
    INVALID_CONFIGURATION = auto()   # Rejected before any evaluation


@dataclass
class SearchResult:
    """Result of one boundary search."""
    status: SearchStatus
    boundary: Optional[int]
    evaluations_used: int
    budget: int
    width: int
    last_bracket: Optional[Tuple[int, int]] = None
    trace: List[Tuple[int, bool]] = field(default_factory=list)
    final_state: SearchState = SearchState.DONE
    message: str = ""
    wall_time_seconds: float = 0.0
    error: Optional[SearchError] = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.status in (SearchStatus.FOUND, SearchStatus.EXHAUSTED)

    @property
    def exhausted(self) -> bool:
        return self.status is SearchStatus.EXHAUSTED

    def unwrap(self) -> int:
        """Return the boundary, or raise the error that stopped the search."""
        if self.ok:
            return self.boundary
        if self.error is not None:
            raise self.error
        raise SearchError(self.message or self.status.name)

    def summary(self) -> str:
        if self.ok:
            outcome = f"boundary={self.boundary}"
        else:
            outcome = f"{self.status.name.lower()} at {self.last_bracket}"
        return (
            f"SearchResult({self.status.name}: {outcome}, "
            f"evals={self.evaluations_used}/{self.budget}, W={self.width}, "
            f"{format_ns(self.wall_time_seconds * 1e9)})"
        )


class SearchEngine:
    """
    Budgeted galloping search for the boundary of a monotonic predicate.

    Usage:
        >>> engine = SearchEngine(width=32)
        >>> result = engine.run(lambda i: i <= 41)
        >>> result.boundary
        42
        >>> result.evaluations_used <= 14
        True

    The predicate must be pure and monotonic non-increasing; the engine can
    only spot-check the latter. ``check_monotonicity`` is forwarded to the
    PredicateProbe, where it guards probes driven directly; inside ``run``
    galloping ascends and bisection stays inside the bracket, so it never fires.
    """

    DEFAULT_WIDTH = 64

    def __init__(
        self,
        width: Optional[int] = None,
        budget: Optional[int] = None,
        dtype: Any = None,
        check_monotonicity: bool = True,
        enable_logging: bool = False,
    ):
        if dtype is not None:
            self.space = IndexSpace.from_dtype(dtype)
            if width is not None and width != self.space.width:
                raise InvalidConfigurationError(
                    f"width {width} does not match dtype {self.space.dtype.name}"
                )
        else:
            self.space = IndexSpace(width=self.DEFAULT_WIDTH if width is None else width)

        if budget is None:
            budget = self.space.default_budget
        elif isinstance(budget, bool) or not isinstance(budget, (int, np.integer)):
            raise InvalidConfigurationError(f"budget must be an integer, got {budget!r}")
        elif int(budget) < self.space.minimum_budget:
            raise InvalidConfigurationError(
                f"budget {budget} is below the minimum of {self.space.minimum_budget} "
                f"for a {self.space.width}-bit index"
            )
        self.budget = int(budget)
        self.check_monotonicity = check_monotonicity

        if enable_logging:
            logging.basicConfig(level=logging.DEBUG)

    @property
    def width(self) -> int:
        return self.space.width

    def run(self, predicate: Callable[[int], bool]) -> SearchResult:
        """Search for the boundary of ``predicate``."""
        start_time = time.perf_counter()
        budget = EvaluationBudget(limit=self.budget)
        probe = PredicateProbe(
            predicate,
            budget,
            space=self.space,
            check_monotonicity=self.check_monotonicity,
        )
        state = SearchState.INIT

        def finish(status: SearchStatus, boundary: Optional[int], **extra) -> SearchResult:
            return SearchResult(
                status=status,
                boundary=boundary,
                evaluations_used=budget.used,
                budget=budget.limit,
                width=self.space.width,
                last_bracket=budget.last_bracket,
                trace=list(probe.trace),
                wall_time_seconds=time.perf_counter() - start_time,
                **extra,
            )

        try:
            state = self._transition(state, SearchState.CHECK_ZERO)
            budget.narrow(0, 0)
            if not probe.evaluate(0):
                self._transition(state, SearchState.DONE)
                return finish(SearchStatus.FOUND, 0)

            state = self._transition(state, SearchState.CHECK_ONE)
            budget.narrow(0, 1)
            if not probe.evaluate(1):
                self._transition(state, SearchState.DONE)
                return finish(SearchStatus.FOUND, 1)

            state = self._transition(state, SearchState.EXPONENTIAL)
            outcome = ExponentialBoundFinder(probe).find(start_exponent=1)
            if outcome.exhausted:
                self._transition(state, SearchState.DONE)
                return finish(SearchStatus.EXHAUSTED, self.space.limit)

            state = self._transition(state, SearchState.BINARY)
            lo, hi = outcome.bracket
            refinement = BinaryRefiner(probe).refine(lo, hi)
            self._transition(state, SearchState.DONE)
            return finish(SearchStatus.FOUND, refinement.boundary)

        except BudgetExceededError as e:
            self._transition(state, SearchState.FAILED)
            logger.warning(f"Search aborted in {state.name}: {e}")
            return finish(
                SearchStatus.BUDGET_EXCEEDED,
                None,
                final_state=SearchState.FAILED,
                message=str(e),
                error=e,
            )

    def _transition(self, current: SearchState, target: SearchState) -> SearchState:
        logger.debug(f"{current.name} -> {target.name}")
        return target


def search(
    predicate: Callable[[int], bool],
    budget: Optional[int] = None,
    *,
    width: Optional[int] = None,
    dtype: Any = None,
    check_monotonicity: bool = True,
) -> SearchResult:
    """
    Count the indices at which a monotonic predicate holds.

    Args:
        predicate: P(i) -> bool, true on [0, k] and false above
        budget: Evaluation ceiling (default 2W + 4, minimum 2*ceil(log2(W)) + 4)
        width: Index width W in bits (default 64)
        dtype: numpy unsigned dtype to take the width from, instead of ``width``
        check_monotonicity: Forwarded to the PredicateProbe. A full search never
            observes a contradiction (galloping ascends, midpoints stay inside
            the bracket), so this only guards probes driven directly

    Returns:
        SearchResult; status FOUND with boundary k + 1, EXHAUSTED with
        boundary 2^W when P never turns false, or a failure status.
    """
    try:
        engine = SearchEngine(
            width=width,
            budget=budget,
            dtype=dtype,
            check_monotonicity=check_monotonicity,
        )
    except InvalidConfigurationError as e:
        logger.warning(f"Rejected search configuration: {e}")
        return SearchResult(
            status=SearchStatus.INVALID_CONFIGURATION,
            boundary=None,
            evaluations_used=0,
            budget=int(budget) if isinstance(budget, (int, np.integer)) else 0,
            width=_requested_width(width, dtype),
            final_state=SearchState.FAILED,
            message=str(e),
            error=e,
        )
    return engine.run(predicate)


def _requested_width(width: Optional[int], dtype: Any) -> int:
    """Width to report for a configuration that was rejected."""
    if isinstance(width, (int, np.integer)) and not isinstance(width, bool):
        return int(width)
    if width is None and dtype is None:
        return SearchEngine.DEFAULT_WIDTH
    return 0
