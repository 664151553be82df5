"""
Monotonic Counter
=================

A counter whose only state is an append-only registry of ticks.

Reading the counter never consults a stored integer: the value is the
boundary of "tick i exists", found by a budgeted search over a snapshot of
the registry. Incrementing appends one tick. This is the incremental-state
pattern where nothing can be overwritten, only added, and the present value
has to be rediscovered by probing.
"""

import logging
import threading
from typing import Any, Optional

from gallop.registry.append_only import AppendOnlyRegistry
from gallop.search.engine import SearchEngine

logger = logging.getLogger(__name__)


class MonotonicCounter:
    """
    Counter backed by an append-only tick registry.

    Usage:
        >>> counter = MonotonicCounter()
        >>> counter.next(), counter.next(), counter.next()
        (0, 1, 2)
        >>> counter.current()
        3
    """

    def __init__(self, registry: Optional[AppendOnlyRegistry] = None, engine: Optional[SearchEngine] = None):
        self.registry = registry or AppendOnlyRegistry(engine=engine)
        self._step = threading.Lock()

    def current(self) -> int:
        """Number of ticks recorded so far; raises if the count search fails."""
        return self.registry.count().unwrap()

    def next(self, tag: Any = None) -> int:
        """
        Return the current value and advance the counter by one.

        When the registry is shared and another writer appended between the
        read and the tick, the slot the tick actually landed in is returned.
        """
        with self._step:
            value = self.current()
            index = self.registry.append(tag)
        if index != value:
            logger.debug(f"Registry grew concurrently: read {value}, tick landed at {index}")
        logger.debug(f"Counter advanced to {index + 1}")
        return index
