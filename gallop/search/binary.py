"""
Binary Refiner
==============

Bisects a bracket (lo, hi) with P(lo) true and P(hi) false down to the
boundary k + 1, the unique index in (lo, hi] where P turns false.

Each step evaluates P(mid) with mid = lo + (hi - lo) // 2 and keeps the
half that still straddles the boundary, so the loop runs at most
ceil(log2(hi - lo)) times. The galloping phase hands over a bracket whose
width is at most the last true probe, which bounds the step count by W.
"""

import logging
from dataclasses import dataclass

from gallop.search.probe import PredicateProbe

logger = logging.getLogger(__name__)


@dataclass
class Refinement:
    boundary: int
    steps: int


def max_steps(lo: int, hi: int) -> int:
    """Upper bound on bisection steps for a bracket, ceil(log2(hi - lo))."""
    return (hi - lo - 1).bit_length()


class BinaryRefiner:
    """Narrows a straddling bracket to the exact boundary."""

    def __init__(self, probe: PredicateProbe):
        self.probe = probe

    def refine(self, lo: int, hi: int) -> Refinement:
        assert lo < hi, f"empty bracket ({lo}, {hi})"
        assert self.probe.cached(lo) is not False, f"P({lo}) must be true"
        assert self.probe.cached(hi) is not True, f"P({hi}) must be false"

        bound = max_steps(lo, hi)
        steps = 0
        while hi - lo > 1:
            self.probe.budget.narrow(lo, hi)
            mid = lo + (hi - lo) // 2
            if self.probe.evaluate(mid):
                lo = mid
            else:
                hi = mid
            steps += 1
            assert steps <= bound

        self.probe.budget.narrow(lo, hi)
        logger.debug(f"Bisection settled on {hi} in {steps} steps")
        return Refinement(boundary=hi, steps=steps)
