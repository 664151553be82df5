"""Execution helpers for running many searches."""

from gallop.runtime.parallel_search import ParallelSearch, ParallelStats

__all__ = ['ParallelSearch', 'ParallelStats']
