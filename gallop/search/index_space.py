"""
Index Space
===========

The fixed-width unsigned domain a search runs over.

An index of width W ranges over [0, 2^W - 1]. Galloping probes the powers
2^0 .. 2^(W-1); the next doubling would need 2^W, which a W-bit unsigned
register cannot hold, so the last probe is the maximal index itself,
written as (2^(W-1) - 1) * 2 + 1.

Widths can be given directly or taken from a numpy unsigned dtype, in which
case the predicate receives indices boxed as that numpy scalar type.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Optional

import numpy as np

from gallop.errors import InvalidConfigurationError


@dataclass(frozen=True)
class IndexSpace:
    """Unsigned index domain of a fixed bit width."""
    width: int = 64
    dtype: Optional[np.dtype] = None

    def __post_init__(self):
        if isinstance(self.width, bool) or not isinstance(self.width, (int, np.integer)):
            raise InvalidConfigurationError(f"index width must be an integer, got {self.width!r}")
        if self.width < 1:
            raise InvalidConfigurationError(f"index width must be at least 1 bit, got {self.width}")
        object.__setattr__(self, 'width', int(self.width))

    @classmethod
    def from_dtype(cls, dtype: Any) -> 'IndexSpace':
        """Build the space for a numpy unsigned integer dtype (uint8 .. uint64)."""
        try:
            dt = np.dtype(dtype)
        except TypeError as e:
            raise InvalidConfigurationError(f"not a numpy dtype: {dtype!r}") from e
        if dt.kind != 'u':
            raise InvalidConfigurationError(
                f"index dtype must be an unsigned integer type, got {dt.name}"
            )
        return cls(width=np.iinfo(dt).bits, dtype=dt)

    @property
    def top_power(self) -> int:
        """Largest power of two representable in the space, 2^(W-1)."""
        return 1 << (self.width - 1)

    @property
    def max_index(self) -> int:
        return (self.top_power - 1) * 2 + 1

    @property
    def limit(self) -> int:
        """One past the maximal index; the boundary reported when nothing is false."""
        return self.max_index + 1

    @property
    def minimum_budget(self) -> int:
        # (W - 1).bit_length() == ceil(log2(W)) for W >= 1
        return 2 * (self.width - 1).bit_length() + 4

    @property
    def default_budget(self) -> int:
        return 2 * self.width + 4

    @property
    def worst_case_evaluations(self) -> int:
        return 2 * (self.width - 1).bit_length() + 2 * self.width

    def contains(self, index: int) -> bool:
        return 0 <= index <= self.max_index

    def box(self, index: int) -> Any:
        """Convert a plain index into the value handed to the predicate."""
        if self.dtype is None:
            return index
        return self.dtype.type(index)

    def probe_points(self, start_exponent: int = 0) -> Iterator[int]:
        """
        Yield the galloping probe sequence 2^start .. 2^(W-1), then the maximal
        index when it is not itself one of the powers (W >= 2).
        """
        for exponent in range(start_exponent, self.width):
            yield 1 << exponent
        if self.max_index > self.top_power:
            yield self.max_index
