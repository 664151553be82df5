"""Checked evaluation counter shared by every phase of one search."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from gallop.errors import BudgetExceededError


@dataclass
class EvaluationBudget:
    """
    Counts predicate evaluations against a hard ceiling.

    The bracket under examination is tracked here as well, so that whichever
    phase runs out of budget the failure reports where the search stood.
    """
    limit: int
    used: int = 0
    last_bracket: Optional[Tuple[int, int]] = field(default=None)

    @property
    def remaining(self) -> int:
        return self.limit - self.used

    @property
    def exhausted(self) -> bool:
        return self.used >= self.limit

    def charge(self, index: int) -> None:
        """Account for one evaluation at ``index``; refuse to go past the limit."""
        if self.used + 1 > self.limit:
            raise BudgetExceededError(
                f"evaluation budget of {self.limit} exhausted before evaluating index {index}",
                evaluations_used=self.used,
                last_bracket=self.last_bracket,
            )
        self.used += 1

    def narrow(self, lo: int, hi: int) -> None:
        self.last_bracket = (lo, hi)
