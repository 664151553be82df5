"""
Parallel Search
===============

Runs many independent boundary searches at once.

A single search cannot be parallelized: every probe index depends on the
previous answer. Separate searches share nothing, though. Each one gets its
own SearchEngine run and therefore its own PredicateProbe cache and budget,
so they can be spread over a thread pool. Threads rather than processes,
since predicates are usually closures over caller state that cannot be
pickled.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from gallop.search.engine import SearchEngine, SearchResult
from gallop.utils.helpers import Timer

logger = logging.getLogger(__name__)


@dataclass
class ParallelStats:
    """Statistics for parallel searches."""
    searches_submitted: int = 0
    searches_completed: int = 0
    failures: int = 0
    total_evaluations: int = 0
    wall_time_ns: int = 0


class ParallelSearch:
    """
    Thread-pool runner for independent searches.

    Usage:
        >>> runner = ParallelSearch(workers=4)
        >>> results = runner.search_many([lambda i: i < 10, lambda i: i < 1000])
        >>> [r.boundary for r in results]
        [10, 1000]
    """

    def __init__(
        self,
        workers: Optional[int] = None,
        engine: Optional[SearchEngine] = None,
        min_parallel_size: int = 2,
    ):
        self.workers = workers or max(1, (os.cpu_count() or 2) - 1)
        self.engine = engine or SearchEngine()
        self.min_parallel_size = min_parallel_size
        self.stats = ParallelStats()

    def search_many(self, predicates: Iterable[Callable[[int], bool]]) -> List[SearchResult]:
        """Search every predicate; results come back in input order."""
        predicate_list = list(predicates)
        self.stats.searches_submitted += len(predicate_list)

        with Timer() as t:
            if len(predicate_list) < self.min_parallel_size or self.workers == 1:
                results = [self.engine.run(p) for p in predicate_list]
            else:
                with ThreadPoolExecutor(max_workers=self.workers) as pool:
                    futures = [pool.submit(self.engine.run, p) for p in predicate_list]
                    results = [future.result() for future in futures]

        self.stats.wall_time_ns += t.elapsed_ns
        for result in results:
            self._record(result)
        logger.debug(f"Completed {len(results)} searches on {self.workers} workers")
        return results

    def search_named(self, predicates: Mapping[str, Callable[[int], bool]]) -> Dict[str, SearchResult]:
        """Like ``search_many`` but keyed by name."""
        names = list(predicates)
        results = self.search_many(predicates[name] for name in names)
        return dict(zip(names, results))

    def _record(self, result: SearchResult) -> None:
        self.stats.searches_completed += 1
        self.stats.total_evaluations += result.evaluations_used
        if not result.ok:
            self.stats.failures += 1
            logger.debug(f"Search failed ({result.status.name}): {result.message}")
