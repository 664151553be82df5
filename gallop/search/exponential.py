"""
Exponential Bound Finder
========================

Galloping phase of the search: probe P(1), P(2), P(4), ... until the first
false answer.

If P(2^(m-1)) is true and P(2^m) is false, the boundary lies in
(2^(m-1), 2^m], a bracket no wider than the last successful probe. That
caps the bisection that follows at m - 1 steps, and the doubling itself
costs m + 1 probes, so both phases are O(log2(boundary)) rather than
O(boundary).

The doubling stops at 2^(W-1). One further probe at the maximal index
either closes the bracket (2^(W-1), 2^W - 1] or shows the predicate true
over the whole domain, which is reported as ``exhausted`` rather than as
a boundary.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from gallop.search.probe import PredicateProbe

logger = logging.getLogger(__name__)


@dataclass
class BoundOutcome:
    """Result of the galloping phase."""
    exhausted: bool
    bracket: Optional[Tuple[int, int]] = None
    exponent: Optional[int] = None   # m with P(2^m) false; None when the cap closed the bracket
    probes: int = 0

    @property
    def needs_refinement(self) -> bool:
        return self.bracket is not None and self.bracket[1] - self.bracket[0] > 1


class ExponentialBoundFinder:
    """
    Finds the tightest power-of-two upper bound on the boundary.

    Usage:
        finder = ExponentialBoundFinder(probe)
        outcome = finder.find()
        if outcome.exhausted:
            ...  # predicate true over the whole index space
        lo, hi = outcome.bracket
    """

    def __init__(self, probe: PredicateProbe):
        self.probe = probe
        self.space = probe.space

    def find(self, start_exponent: int = 0) -> BoundOutcome:
        """
        Gallop from 2^start_exponent.

        P(0) and every power below 2^start_exponent must already be known
        true; the engine establishes them before calling.
        """
        lo = 0 if start_exponent == 0 else 1 << (start_exponent - 1)
        probes = 0

        for point in self.space.probe_points(start_exponent):
            self.probe.budget.narrow(lo, point)
            probes += 1
            if not self.probe.evaluate(point):
                exponent = point.bit_length() - 1 if (point & (point - 1)) == 0 else None
                logger.debug(f"Galloping closed bracket ({lo}, {point}) after {probes} probes")
                return BoundOutcome(
                    exhausted=False,
                    bracket=(lo, point),
                    exponent=exponent,
                    probes=probes,
                )
            lo = point

        logger.debug(f"Predicate true through max index {self.space.max_index}")
        self.probe.budget.narrow(lo, self.space.limit)
        return BoundOutcome(exhausted=True, probes=probes)
