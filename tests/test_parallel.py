"""
Tests for running independent searches concurrently.
"""

import pytest

from gallop.runtime import ParallelSearch
from gallop.search.engine import SearchEngine, SearchStatus


class TestParallelSearch:
    def test_results_in_order(self):
        runner = ParallelSearch(workers=4)
        ks = [0, 5, 41, 1000, 123456]
        results = runner.search_many([(lambda i, k=k: i <= k) for k in ks])
        assert [r.boundary for r in results] == [k + 1 for k in ks]

    def test_separate_caches(self):
        calls = {}

        def make(name, k):
            def predicate(i):
                calls.setdefault(name, []).append(i)
                return i <= k
            return predicate

        runner = ParallelSearch(workers=2)
        runner.search_many([make('a', 41), make('b', 41)])
        assert calls['a'] == calls['b']
        assert len(calls['a']) == 13

    def test_search_named(self):
        runner = ParallelSearch(workers=2)
        results = runner.search_named({
            'small': lambda i: i < 3,
            'none': lambda i: False,
        })
        assert results['small'].boundary == 3
        assert results['none'].boundary == 0

    def test_stats(self):
        runner = ParallelSearch(workers=2, engine=SearchEngine(budget=16))
        runner.search_many([lambda i: i < 10, lambda i: i < 10 ** 9])
        assert runner.stats.searches_submitted == 2
        assert runner.stats.searches_completed == 2
        assert runner.stats.failures == 1
        assert runner.stats.total_evaluations > 0

    def test_budget_failure_reported(self):
        runner = ParallelSearch(workers=2, engine=SearchEngine(budget=16))
        results = runner.search_many([lambda i: i < 10 ** 9, lambda i: True])
        assert results[0].status is SearchStatus.BUDGET_EXCEEDED
        assert results[1].status is SearchStatus.BUDGET_EXCEEDED

    def test_sequential_fallback(self):
        runner = ParallelSearch(workers=1)
        results = runner.search_many([lambda i: i < 7])
        assert results[0].boundary == 7

    def test_predicate_error_propagates(self):
        def broken(i):
            raise ValueError("bad index")

        runner = ParallelSearch(workers=2)
        with pytest.raises(ValueError):
            runner.search_many([lambda i: i < 3, broken])

    def test_empty(self):
        assert ParallelSearch().search_many([]) == []
