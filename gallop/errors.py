"""Structured error types for search configuration and execution."""

from __future__ import annotations

from typing import Optional, Tuple


class SearchError(Exception):
    """Base class for structured gallop errors."""


class InvalidConfigurationError(SearchError):
    """Width, dtype or budget cannot support a search; raised before any evaluation."""


class BudgetExceededError(SearchError):
    """The evaluation ceiling was reached before the boundary was pinned down."""

    def __init__(
        self,
        message: str,
        evaluations_used: int,
        last_bracket: Optional[Tuple[int, int]] = None,
    ):
        super().__init__(message)
        self.evaluations_used = evaluations_used
        self.last_bracket = last_bracket

    def __str__(self) -> str:
        bracket = ""
        if self.last_bracket is not None:
            bracket = f"; last bracket [{self.last_bracket[0]}, {self.last_bracket[1]}]"
        return f"{self.args[0]} after {self.evaluations_used} evaluations{bracket}"


class PredicateViolationError(SearchError):
    """The predicate was observed true above an index it was observed false at."""

    def __init__(self, true_index: int, false_index: int):
        super().__init__(
            f"predicate is not monotonic: P({true_index}) is true "
            f"but P({false_index}) is false"
        )
        self.true_index = true_index
        self.false_index = false_index
