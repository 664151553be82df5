"""
Append-only registries and the counters built on them.

Both expose their size only through a monotonic occupancy predicate, so
reading them is a boundary search (see gallop.search).
"""

from gallop.registry.append_only import AppendOnlyRegistry, RegistrySnapshot
from gallop.registry.counter import MonotonicCounter

__all__ = [
    'AppendOnlyRegistry',
    'RegistrySnapshot',
    'MonotonicCounter',
]
