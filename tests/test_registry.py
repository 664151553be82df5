"""
Tests for the append-only registry and the counter built on it.
"""

import threading

import pytest

from gallop.errors import BudgetExceededError
from gallop.registry import AppendOnlyRegistry, MonotonicCounter, RegistrySnapshot
from gallop.search.engine import SearchEngine, SearchStatus


class TestAppendOnlyRegistry:
    def test_append_returns_index(self):
        registry = AppendOnlyRegistry()
        assert registry.append('a') == 0
        assert registry.append('b') == 1
        assert registry[1] == 'b'
        assert len(registry) == 2

    def test_count_empty(self):
        result = AppendOnlyRegistry().count()
        assert result.status is SearchStatus.FOUND
        assert result.boundary == 0

    @pytest.mark.parametrize("size", [1, 2, 3, 17, 64, 65, 300])
    def test_count(self, size):
        registry = AppendOnlyRegistry()
        for i in range(size):
            registry.append(i)
        result = registry.count()
        assert result.boundary == size
        assert result.evaluations_used < size + 2 or size < 8

    def test_snapshot_is_frozen(self):
        registry = AppendOnlyRegistry()
        registry.append('x')
        snap = registry.snapshot()
        registry.append('y')
        assert len(snap) == 1
        assert snap[0] == 'x'
        assert snap.occupied(0)
        assert not snap.occupied(1)
        assert registry.count(snap).boundary == 1
        assert registry.count().boundary == 2

    def test_snapshot_frozen_while_appends_continue(self):
        registry = AppendOnlyRegistry()
        for i in range(1000):
            registry.append(i)
        snap = registry.snapshot()
        for i in range(1000, 5000):
            registry.append(i)
        assert len(snap) == 1000
        assert snap.occupied(999)
        assert not snap.occupied(1000)
        assert snap[-1] == 999
        assert list(snap)[-1] == 999
        assert registry.count(snap).boundary == 1000
        assert registry.count().boundary == 5000

    def test_snapshot_shares_storage(self):
        registry = AppendOnlyRegistry()
        registry.append('a')
        snap = registry.snapshot()
        assert snap.source is registry._items

    def test_snapshot_index_out_of_range(self):
        registry = AppendOnlyRegistry()
        registry.append('a')
        snap = registry.snapshot()
        registry.append('b')
        with pytest.raises(IndexError):
            snap[1]

    def test_snapshot_type(self):
        assert isinstance(AppendOnlyRegistry().snapshot(), RegistrySnapshot)

    def test_iteration(self):
        registry = AppendOnlyRegistry()
        for item in 'abc':
            registry.append(item)
        assert list(registry) == ['a', 'b', 'c']

    def test_full_registry(self):
        registry = AppendOnlyRegistry(engine=SearchEngine(width=2))
        for i in range(3):
            registry.append(i)
        with pytest.raises(OverflowError):
            registry.append(3)
        assert registry.count().boundary == 3

    def test_concurrent_appends(self):
        registry = AppendOnlyRegistry()

        def writer():
            for i in range(200):
                registry.append(i)

        threads = [threading.Thread(target=writer) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert registry.count().boundary == 800


class TestMonotonicCounter:
    def test_sequence(self):
        counter = MonotonicCounter()
        assert [counter.next() for _ in range(5)] == [0, 1, 2, 3, 4]
        assert counter.current() == 5

    def test_starts_at_zero(self):
        assert MonotonicCounter().current() == 0

    def test_tags_recorded(self):
        counter = MonotonicCounter()
        counter.next('first')
        counter.next('second')
        assert list(counter.registry) == ['first', 'second']

    def test_shared_registry(self):
        registry = AppendOnlyRegistry()
        registry.append('existing')
        counter = MonotonicCounter(registry=registry)
        assert counter.next() == 1
        registry.append('outside')
        assert counter.next() == 3

    def test_concurrent_next_unique(self):
        counter = MonotonicCounter()
        values = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                v = counter.next()
                with lock:
                    values.append(v)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(values) == list(range(200))

    def test_budget_failure_raises(self):
        engine = SearchEngine(width=64, budget=16)
        counter = MonotonicCounter(engine=engine)
        for _ in range(2 ** 14):
            counter.registry.append(None)
        with pytest.raises(BudgetExceededError):
            counter.current()
